import math
from abc import ABC, abstractmethod
from typing import Callable, Generic, Optional, TypeVar

from finboard.domain import TRANSACTION_TYPES, PaycheckSplit

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')

SUM_TOLERANCE = 0.01


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Left(self._error)

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def invalid(code: str, message: str, **details) -> Left:
    return Left({"error": code, "message": message, **details})


def parse_amount(text) -> Maybe[float]:
    """Parse user input into a finite float; blank, junk and nan give Nothing."""
    if text is None:
        return Nothing()
    if isinstance(text, str):
        text = text.strip()
        if not text:
            return Nothing()
    try:
        value = float(text)
    except (TypeError, ValueError):
        return Nothing()
    if math.isnan(value) or math.isinf(value):
        return Nothing()
    return Some(value)


def parse_amount_or(text, default: float) -> float:
    """Optional numeric field: blank falls back to ``default``."""
    return parse_amount(text).get_or_else(default)


def validate_transaction_input(
    date: str,
    amount,
    category: str,
    transaction_type: str,
    description: str = "",
) -> Either[dict, dict]:
    parsed = parse_amount(amount)
    if parsed.is_none() or not (category or "").strip():
        return invalid("missing_fields", "Please fill in amount and category")
    if transaction_type not in TRANSACTION_TYPES:
        return invalid(
            "invalid_type",
            f"Transaction type must be one of {', '.join(TRANSACTION_TYPES)}",
            transaction_type=transaction_type,
        )
    return Right({
        "date": date,
        "amount": parsed.get_or_else(0.0),
        "category": category.strip(),
        "description": description or "",
        "transaction_type": transaction_type,
    })


def validate_paycheck_split(
    name: str,
    paycheck_amount,
    input_type: str = "percentage",
    percentages: Optional[dict] = None,
    amounts: Optional[dict] = None,
) -> Either[dict, dict]:
    """Validate a paycheck split entered either as percentages or dollar amounts.

    Percentages must add up to 100 and dollar amounts must add up to the
    paycheck, both within ``SUM_TOLERANCE``. Dollar input is converted to
    percentages of the paycheck. The debt bucket is optional and defaults
    to 0.
    """
    paycheck = parse_amount(paycheck_amount)
    if paycheck.is_none():
        return invalid("invalid_amount", "Paycheck amount must be a number")
    total = paycheck.get_or_else(0.0)

    if input_type == "dollar":
        if total <= 0:
            return invalid("invalid_amount", "Paycheck amount must be greater than zero")
        values = amounts or {}
        dollars = {k: parse_amount_or(values.get(k), 0.0) for k in ("investing", "spending", "savings", "debt")}
        if abs(sum(dollars.values()) - total) > SUM_TOLERANCE:
            return invalid(
                "split_mismatch",
                "Dollar amounts must add up to the total paycheck amount",
                total=total,
                allocated=sum(dollars.values()),
            )
        pcts = {k: v / total * 100 for k, v in dollars.items()}
    elif input_type == "percentage":
        values = percentages or {}
        parsed = {k: parse_amount(values.get(k)) for k in ("investing", "spending", "savings")}
        missing = [k for k, v in parsed.items() if v.is_none()]
        if missing:
            return invalid("missing_fields", f"Missing percentage for {', '.join(missing)}")
        pcts = {k: v.get_or_else(0.0) for k, v in parsed.items()}
        pcts["debt"] = parse_amount_or(values.get("debt"), 0.0)
        draft = PaycheckSplit(
            id="", name=name, paycheck_amount=total,
            **{f"{k}_percentage": v for k, v in pcts.items()},
        )
        if abs(draft.total_percentage - 100) > SUM_TOLERANCE:
            return invalid(
                "split_mismatch",
                "Percentages must add up to 100%",
                total_percentage=draft.total_percentage,
            )
    else:
        return invalid("invalid_input_type", f"Unknown input type: {input_type}")

    return Right({
        "name": name,
        "paycheck_amount": total,
        "investing_percentage": pcts["investing"],
        "spending_percentage": pcts["spending"],
        "savings_percentage": pcts["savings"],
        "debt_percentage": pcts["debt"],
    })


def validate_lookup_name(name: str) -> Either[dict, str]:
    cleaned = (name or "").strip()
    if not cleaned:
        return invalid("missing_fields", "Name cannot be empty")
    return Right(cleaned)


def pipe(x, *funcs):
    """Pipe a value through a series of functions.

    pipe(x, f, g, h) == h(g(f(x)))
    """
    res = x
    for f in funcs:
        res = f(res)
    return res
