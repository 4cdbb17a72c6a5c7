from datetime import date
from typing import Callable, Iterable

from finboard.domain import Transaction

Predicate = Callable[[Transaction], bool]


def by_type(transaction_type: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.transaction_type == transaction_type

    return _filter


def by_category(category: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter


def by_month(month: str) -> Predicate:
    """Match transactions whose date starts with a "YYYY-MM" prefix."""
    def _filter(t: Transaction) -> bool:
        return t.date.startswith(month)

    return _filter


def on_or_after(start: date) -> Predicate:
    start_key = start.isoformat()

    def _filter(t: Transaction) -> bool:
        return t.date >= start_key

    return _filter


def select(trans: Iterable[Transaction], *preds: Predicate) -> tuple[Transaction, ...]:
    return tuple(t for t in trans if all(p(t) for p in preds))
