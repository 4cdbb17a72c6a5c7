from dataclasses import dataclass
from datetime import date, datetime
from functools import reduce
from typing import Callable, Dict, Hashable, Iterable, List, NamedTuple, Optional, Tuple, TypeVar

from finboard.domain import Transaction
from finboard.filters import by_month, by_type, on_or_after, select

R = TypeVar("R")
A = TypeVar("A")

TIME_RANGES = ("all", "1year", "monthly")


class Flow(NamedTuple):
    income: float = 0.0
    expenses: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expenses


@dataclass(frozen=True)
class Totals:
    income: float
    expenses: float
    net: float


@dataclass(frozen=True)
class FlowPoint:
    key: str      # "YYYY-MM" or "YYYY-MM-DD"
    label: str    # display label, e.g. "Jan 2024" / "Jan 05"
    income: float
    expenses: float
    net: float


@dataclass(frozen=True)
class NetWorthPoint:
    key: str
    label: str
    net: float          # running total up to and including this month
    monthly_net: float


@dataclass(frozen=True)
class MonthSummary:
    month: str
    income: float
    expenses: float
    net: float
    transactions: Tuple[Transaction, ...]
    category_breakdown: List[Tuple[str, float]]


def aggregate_by_key(
    records: Iterable[R],
    key: Callable[[R], Hashable],
    fold: Callable[[A, R], A],
    initial: A,
) -> Dict[Hashable, A]:
    """Fold records into a mapping of key -> accumulator.

    Keys keep first-seen order. ``initial`` is the starting accumulator for
    every new key and must be immutable.
    """
    def step(acc: Dict[Hashable, A], record: R) -> Dict[Hashable, A]:
        k = key(record)
        acc[k] = fold(acc.get(k, initial), record)
        return acc

    return reduce(step, records, {})


def month_key(t: Transaction) -> str:
    return t.date[:7]


def day_key(t: Transaction) -> str:
    return t.date


def category_key(t: Transaction) -> str:
    return t.category


def add_amount(total: float, t: Transaction) -> float:
    return total + t.amount


def add_flow(flow: Flow, t: Transaction) -> Flow:
    # anything that is not income is counted on the expense side
    if t.is_income:
        return Flow(flow.income + t.amount, flow.expenses)
    return Flow(flow.income, flow.expenses + t.amount)


def month_label(month: str) -> str:
    return datetime.strptime(month + "-01", "%Y-%m-%d").strftime("%b %Y")


def long_month_label(month: str) -> str:
    return datetime.strptime(month + "-01", "%Y-%m-%d").strftime("%B %Y")


def day_label(day: str) -> str:
    return datetime.strptime(day, "%Y-%m-%d").strftime("%b %d")


def total_amount(trans: Iterable[Transaction]) -> float:
    return reduce(add_amount, trans, 0.0)


def totals(trans: Iterable[Transaction]) -> Totals:
    trans = tuple(trans)
    income = total_amount(select(trans, by_type("income")))
    expenses = total_amount(select(trans, by_type("expense")))
    return Totals(income=income, expenses=expenses, net=income - expenses)


def category_breakdown(trans: Iterable[Transaction]) -> List[Tuple[str, float]]:
    expenses = [t for t in trans if t.is_expense]
    return list(aggregate_by_key(expenses, category_key, add_amount, 0.0).items())


def _flow_points(
    trans: Iterable[Transaction],
    key: Callable[[Transaction], str],
    label: Callable[[str], str],
) -> List[FlowPoint]:
    grouped = aggregate_by_key(trans, key, add_flow, Flow())
    return [
        FlowPoint(key=k, label=label(k), income=f.income, expenses=f.expenses, net=f.net)
        for k, f in sorted(grouped.items())
    ]


def monthly_series(trans: Iterable[Transaction]) -> List[FlowPoint]:
    return _flow_points(trans, month_key, month_label)


def daily_series(trans: Iterable[Transaction], month: str) -> List[FlowPoint]:
    return _flow_points(select(trans, by_month(month)), day_key, day_label)


def net_worth_trend(trans: Iterable[Transaction]) -> List[NetWorthPoint]:
    points: List[NetWorthPoint] = []
    running = 0.0
    for p in monthly_series(trans):
        running += p.net
        points.append(NetWorthPoint(key=p.key, label=p.label, net=running, monthly_net=p.net))
    return points


def available_months(trans: Iterable[Transaction]) -> List[str]:
    return sorted({month_key(t) for t in trans}, reverse=True)


def one_year_before(today: date) -> date:
    try:
        return today.replace(year=today.year - 1)
    except ValueError:
        # Feb 29 -> Feb 28
        return today.replace(year=today.year - 1, day=28)


def filter_time_range(
    trans: Iterable[Transaction],
    time_range: str = "all",
    month: Optional[str] = None,
    today: Optional[date] = None,
) -> Tuple[Transaction, ...]:
    if time_range not in TIME_RANGES:
        raise ValueError(f"Unknown time range: {time_range}")
    if time_range == "1year":
        # inclusive: a transaction dated exactly one year ago is kept
        return select(trans, on_or_after(one_year_before(today or date.today())))
    if time_range == "monthly":
        return select(trans, by_month(month or (today or date.today()).strftime("%Y-%m")))
    return tuple(trans)


def newest_first(trans: Iterable[Transaction]) -> Tuple[Transaction, ...]:
    return tuple(sorted(trans, key=lambda t: t.date, reverse=True))


def month_summary(trans: Iterable[Transaction], month: str) -> MonthSummary:
    month_trans = select(trans, by_month(month))
    t = totals(month_trans)
    return MonthSummary(
        month=month,
        income=t.income,
        expenses=t.expenses,
        net=t.net,
        transactions=newest_first(month_trans),
        category_breakdown=category_breakdown(month_trans),
    )
