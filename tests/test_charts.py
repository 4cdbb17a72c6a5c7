from finboard.aggregation import monthly_series, net_worth_trend
from finboard.charts import (
    TEMPLATE,
    category_pie,
    flow_bars,
    net_line,
    net_worth_line,
    transactions_frame,
)
from finboard.domain import Transaction


def make_tx(id, date, amount, category="Other", kind="expense", description=""):
    return Transaction(id=id, date=date, amount=amount, category=category,
                       transaction_type=kind, description=description)


TRANS = (
    make_tx("t1", "2024-01-05", 3000, "Salary", "income", "paycheck"),
    make_tx("t2", "2024-01-07", 120, "Food & Dining"),
    make_tx("t3", "2024-02-01", 1000, "Bills & Utilities", description="rent"),
)


def test_transactions_frame_columns_and_description_fallback():
    df = transactions_frame(TRANS)
    assert list(df.columns) == ["date", "description", "category", "type", "amount"]
    assert df.loc[1, "description"] == "Food & Dining"
    assert df["date"].dt.year.tolist() == [2024, 2024, 2024]


def test_transactions_frame_empty():
    df = transactions_frame(())
    assert df.empty
    assert "amount" in df.columns


def test_flow_bars_has_income_and_expense_traces():
    fig = flow_bars(monthly_series(TRANS))
    assert [trace.name for trace in fig.data] == ["Income", "Expenses"]
    assert list(fig.data[0].x) == ["Jan 2024", "Feb 2024"]
    assert fig.layout.barmode == "group"


def test_category_pie():
    fig = category_pie([("Food & Dining", 120.0), ("Bills & Utilities", 1000.0)])
    assert len(fig.data) == 1
    assert sorted(fig.data[0].labels) == ["Bills & Utilities", "Food & Dining"]


def test_net_line_plots_monthly_net():
    fig = net_line(monthly_series(TRANS))
    assert list(fig.data[0].y) == [2880, -1000]


def test_net_worth_line_plots_running_total():
    fig = net_worth_line(net_worth_trend(TRANS))
    assert list(fig.data[0].y) == [2880, 1880]
    assert fig.layout.template is not None


def test_empty_series_still_build_figures():
    assert len(flow_bars([]).data) == 2
    assert len(net_worth_line([]).data) == 1
    assert TEMPLATE == "plotly_dark"
