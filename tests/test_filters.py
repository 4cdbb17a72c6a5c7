from datetime import date

from finboard.domain import Transaction
from finboard.filters import by_category, by_month, by_type, on_or_after, select


def make_tx(id, date, amount=10.0, category="Other", kind="expense"):
    return Transaction(id=id, date=date, amount=amount, category=category, transaction_type=kind)


TRANS = (
    make_tx("t1", "2024-01-05", 3000, "Salary", "income"),
    make_tx("t2", "2024-01-20", 40, "Shopping"),
    make_tx("t3", "2024-02-02", 15, "Food & Dining"),
    make_tx("t4", "2023-12-31", 25, "Shopping"),
)


def test_by_type():
    assert [t.id for t in select(TRANS, by_type("income"))] == ["t1"]


def test_by_category_and_month_combined():
    result = select(TRANS, by_category("Shopping"), by_month("2024-01"))
    assert [t.id for t in result] == ["t2"]


def test_on_or_after_is_inclusive():
    result = select(TRANS, on_or_after(date(2024, 1, 20)))
    assert [t.id for t in result] == ["t2", "t3"]


def test_select_without_predicates_keeps_everything():
    assert select(TRANS) == TRANS
    assert select((), by_type("expense")) == ()
