from datetime import date

import pytest

from finboard.aggregation import (
    aggregate_by_key,
    add_amount,
    available_months,
    category_breakdown,
    category_key,
    daily_series,
    filter_time_range,
    month_key,
    month_summary,
    monthly_series,
    net_worth_trend,
    one_year_before,
    totals,
)
from finboard.domain import Transaction


def make_tx(id, date, amount, category="Other", kind="expense", description=""):
    return Transaction(id=id, date=date, amount=amount, category=category,
                       transaction_type=kind, description=description)


def make_sample():
    return (
        make_tx("t1", "2024-01-05", 3000, "Salary", "income"),
        make_tx("t2", "2024-01-07", 120, "Food & Dining"),
        make_tx("t3", "2024-01-07", 80, "Transportation"),
        make_tx("t4", "2024-02-01", 1000, "Bills & Utilities"),
        make_tx("t5", "2024-02-14", 60, "Food & Dining"),
        make_tx("t6", "2023-12-31", 500, "Bonus", "income"),
    )


def test_aggregate_by_key_keeps_first_seen_order():
    trans = make_sample()
    result = aggregate_by_key(trans, category_key, add_amount, 0.0)
    assert list(result) == ["Salary", "Food & Dining", "Transportation", "Bills & Utilities", "Bonus"]
    assert result["Food & Dining"] == 180


def test_aggregate_by_key_empty_input():
    assert aggregate_by_key((), month_key, add_amount, 0.0) == {}


def test_totals_income_minus_expenses_is_net():
    t = totals(make_sample())
    assert t.income == 3500
    assert t.expenses == 1260
    assert t.net == t.income - t.expenses


def test_totals_empty():
    t = totals(())
    assert (t.income, t.expenses, t.net) == (0, 0, 0)


def test_monthly_series_sorted_by_month_key():
    series = monthly_series(make_sample())
    assert [p.key for p in series] == ["2023-12", "2024-01", "2024-02"]
    assert [p.label for p in series] == ["Dec 2023", "Jan 2024", "Feb 2024"]
    jan = series[1]
    assert (jan.income, jan.expenses, jan.net) == (3000, 200, 2800)


def test_monthly_groups_sum_to_overall_totals():
    trans = make_sample()
    series = monthly_series(trans)
    overall = totals(trans)
    assert sum(p.income for p in series) == overall.income
    assert sum(p.expenses for p in series) == overall.expenses
    assert sum(p.net for p in series) == overall.net


def test_monthly_series_empty():
    assert monthly_series(()) == []
    assert net_worth_trend(()) == []


def test_unknown_type_counts_as_expense_in_flows_only():
    trans = (make_tx("t1", "2024-03-01", 50, kind="transfer"),)
    assert monthly_series(trans)[0].expenses == 50
    assert totals(trans).expenses == 0


def test_category_breakdown_only_expenses():
    breakdown = category_breakdown(make_sample())
    names = [name for name, _ in breakdown]
    assert "Salary" not in names
    assert dict(breakdown)["Food & Dining"] == 180


def test_net_worth_trend_is_running_total():
    trend = net_worth_trend(make_sample())
    assert [p.monthly_net for p in trend] == [500, 2800, -1060]
    assert [p.net for p in trend] == [500, 3300, 2240]
    # last cumulative value equals the overall net
    assert trend[-1].net == totals(make_sample()).net


def test_daily_series_for_one_month():
    days = daily_series(make_sample(), "2024-01")
    assert [d.key for d in days] == ["2024-01-05", "2024-01-07"]
    assert days[0].label == "Jan 05"
    assert days[1].expenses == 200
    assert daily_series(make_sample(), "2022-01") == []


def test_available_months_newest_first():
    assert available_months(make_sample()) == ["2024-02", "2024-01", "2023-12"]
    assert available_months(()) == []


def test_filter_time_range_monthly():
    result = filter_time_range(make_sample(), "monthly", month="2024-02")
    assert {t.id for t in result} == {"t4", "t5"}


def test_filter_time_range_one_year():
    trans = (
        make_tx("old", "2023-02-28", 10),
        make_tx("edge", "2023-03-01", 10),
        make_tx("new", "2024-02-01", 10),
    )
    result = filter_time_range(trans, "1year", today=date(2024, 3, 1))
    assert [t.id for t in result] == ["edge", "new"]


def test_filter_time_range_all_and_unknown():
    assert len(filter_time_range(make_sample(), "all")) == 6
    with pytest.raises(ValueError):
        filter_time_range(make_sample(), "weekly")


def test_one_year_before_leap_day():
    assert one_year_before(date(2024, 2, 29)) == date(2023, 2, 28)


def test_month_summary():
    s = month_summary(make_sample(), "2024-01")
    assert (s.income, s.expenses, s.net) == (3000, 200, 2800)
    assert [t.id for t in s.transactions][0] in {"t2", "t3"}
    assert s.transactions[-1].id == "t1"
    assert dict(s.category_breakdown) == {"Food & Dining": 120, "Transportation": 80}


def test_month_summary_empty_month():
    s = month_summary(make_sample(), "2030-01")
    assert s.transactions == ()
    assert s.category_breakdown == []
    assert s.net == 0
