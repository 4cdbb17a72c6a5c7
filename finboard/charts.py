from typing import Iterable, List, Tuple

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from finboard.aggregation import FlowPoint, NetWorthPoint
from finboard.domain import Transaction

COLORS = ['#0088FE', '#00C49F', '#FFBB28', '#FF8042', '#8884D8', '#82CA9D', '#FFC658', '#FF7C7C']
INCOME_COLOR = "#00C49F"
EXPENSE_COLOR = "#FF8042"
TEMPLATE = "plotly_dark"


def transactions_frame(trans: Iterable[Transaction]) -> pd.DataFrame:
    rows = [
        {
            "date": t.date,
            "description": t.description or t.category,
            "category": t.category,
            "type": t.transaction_type,
            "amount": t.amount,
        }
        for t in trans
    ]
    df = pd.DataFrame(rows, columns=["date", "description", "category", "type", "amount"])
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    return df


def flow_frame(points: Iterable[FlowPoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"label": p.label, "income": p.income, "expenses": p.expenses, "net": p.net} for p in points],
        columns=["label", "income", "expenses", "net"],
    )


def category_pie(breakdown: List[Tuple[str, float]], title: str = "Spending by Category") -> go.Figure:
    df = pd.DataFrame(breakdown, columns=["name", "value"])
    fig = px.pie(df, values="value", names="name", title=title, color_discrete_sequence=COLORS)
    fig.update_traces(textinfo="label+percent")
    fig.update_layout(template=TEMPLATE, showlegend=False)
    return fig


def flow_bars(points: Iterable[FlowPoint], title: str = "Monthly Income vs Expenses") -> go.Figure:
    df = flow_frame(points)
    fig = go.Figure()
    fig.add_trace(go.Bar(x=df["label"], y=df["income"], name="Income", marker_color=INCOME_COLOR))
    fig.add_trace(go.Bar(x=df["label"], y=df["expenses"], name="Expenses", marker_color=EXPENSE_COLOR))
    fig.update_layout(template=TEMPLATE, barmode="group", title=title, margin=dict(t=40, b=10, l=10, r=10))
    return fig


def net_line(points: Iterable[FlowPoint], title: str = "Net Worth Trend") -> go.Figure:
    """Per-month net (not cumulative) as a line."""
    df = flow_frame(points)
    fig = go.Figure(go.Scatter(x=df["label"], y=df["net"], mode="lines+markers", name="Net"))
    fig.update_layout(template=TEMPLATE, title=title, margin=dict(t=40, b=10, l=10, r=10))
    return fig


def net_worth_line(points: Iterable[NetWorthPoint], title: str = "Net Worth Trend") -> go.Figure:
    df = pd.DataFrame(
        [{"label": p.label, "net": p.net, "monthly_net": p.monthly_net} for p in points],
        columns=["label", "net", "monthly_net"],
    )
    fig = go.Figure(go.Scatter(x=df["label"], y=df["net"], mode="lines+markers", name="Net Worth"))
    fig.update_layout(
        template=TEMPLATE,
        title=title,
        yaxis_tickprefix="$",
        margin=dict(t=40, b=10, l=10, r=10),
    )
    return fig
