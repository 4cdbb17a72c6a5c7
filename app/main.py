import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
import math
from datetime import date

import streamlit as st

from finboard import domain
from finboard.aggregation import TIME_RANGES, available_months, long_month_label, month_label
from finboard.charts import category_pie, flow_bars, net_line, net_worth_line, transactions_frame
from finboard.config import settings
from finboard.goals import (
    SPLIT_BUCKETS,
    capped_progress,
    goal_reached,
    goal_remaining,
    investment_gain,
    progress_percent,
)
from finboard.repositories import FinanceRepository
from finboard.services import DashboardService
from finboard.store import DataStoreClient

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

st.set_page_config(page_title=settings.app_name, layout="wide")


@st.cache_resource
def get_service() -> DashboardService:
    logger.info(f"Connecting to data store at {settings.datastore_url}")
    return DashboardService(FinanceRepository(DataStoreClient()))


service = get_service()

if "refresh" not in st.session_state:
    st.session_state.refresh = 0
if "notices" not in st.session_state:
    st.session_state.notices = []


def money(value: float) -> str:
    return f"{settings.currency_symbol}{value:,.2f}"


def bar_value(pct: float) -> float:
    # st.progress only accepts 0..1; the raw figure is shown next to the bar
    if math.isnan(pct):
        return 0.0
    return min(max(pct, 0.0), 100.0) / 100


def handle(outcome: dict) -> None:
    """Bump the refresh counter and queue notices, then rerun so every view refetches."""
    st.session_state.refresh += outcome["refresh"]
    st.session_state.notices.extend(outcome["notices"])
    st.rerun()


for notice in st.session_state.notices:
    st.toast(("✅ " if notice["level"] == "success" else "❌ ") + notice["message"])
st.session_state.notices = []

menu = st.sidebar.radio(
    "Menu",
    ["🏠 Dashboard", "📊 Charts", "📅 Monthly", "🧾 Transactions", "💳 Debts",
     "🐷 Savings", "📈 Investments", "🎯 Goals", "⚙️ Manage Types"],
)
st.sidebar.caption(f"Data version: {st.session_state.refresh}")

if menu == "🏠 Dashboard":
    st.title("🏠 Net Worth Overview")
    labels = {"all": "All Time", "1year": "1 Year", "monthly": "Monthly"}
    default_range = settings.default_time_range if settings.default_time_range in TIME_RANGES else "all"
    time_range = st.radio(
        "Time range",
        TIME_RANGES,
        index=TIME_RANGES.index(default_range),
        format_func=labels.get,
        horizontal=True,
    )
    trans, _ = service.transactions()
    month = None
    if time_range == "monthly":
        months = available_months(trans) or [date.today().strftime("%Y-%m")]
        month = st.selectbox("Month", months, format_func=month_label)

    ov = service.overview(time_range, month, trans=trans)
    k1, k2, k3 = st.columns(3)
    k1.metric("Total Income", money(ov.totals.income))
    k2.metric("Total Expenses", money(ov.totals.expenses))
    k3.metric("Net Worth", money(ov.totals.net))

    if ov.net_worth:
        st.plotly_chart(net_worth_line(ov.net_worth), use_container_width=True)
    else:
        st.info("No transactions in this range.")

elif menu == "📊 Charts":
    st.title("📊 Spending Charts")
    data = service.charts()
    k1, k2, k3 = st.columns(3)
    k1.metric("Total Income", money(data.totals.income))
    k2.metric("Total Expenses", money(data.totals.expenses))
    k3.metric("Net Amount", money(data.totals.net))

    left, right = st.columns(2)
    with left:
        if data.categories:
            st.plotly_chart(category_pie(data.categories), use_container_width=True)
        else:
            st.info("No expense data yet.")
    with right:
        st.plotly_chart(flow_bars(data.monthly), use_container_width=True)
    st.plotly_chart(net_line(data.monthly), use_container_width=True)

elif menu == "📅 Monthly":
    st.title("📅 Monthly Analytics")
    current = date.today().strftime("%Y-%m")
    trans, _ = service.transactions()
    months = available_months(trans)
    if current not in months:
        months = [current] + months
    month = st.selectbox("Month", months, format_func=long_month_label)

    view = service.monthly(month, trans=trans)
    summary = view.summary
    st.caption(f"{len(summary.transactions)} transactions")
    k1, k2, k3 = st.columns(3)
    k1.metric("Income", money(summary.income))
    k2.metric("Expenses", money(summary.expenses))
    k3.metric("Net", money(summary.net))

    left, right = st.columns(2)
    with left:
        if view.daily:
            st.plotly_chart(flow_bars(view.daily, title="Daily Income vs Expenses"), use_container_width=True)
        else:
            st.info("No transaction data for this month")
    with right:
        if summary.category_breakdown:
            st.plotly_chart(category_pie(summary.category_breakdown, title="Expense Categories"), use_container_width=True)
        else:
            st.info("No expense data for this month")

    st.subheader("Transactions")
    for t in summary.transactions:
        c1, c2, c3, c4 = st.columns([4, 2, 2, 1])
        c1.write(f"**{t.description or t.category}** · {t.category}")
        c2.write(t.date)
        c3.write(("+" if t.is_income else "-") + money(t.amount))
        if c4.button("🗑", key=f"del_m_{t.id}"):
            handle(service.delete_transaction(t.id))

elif menu == "🧾 Transactions":
    st.title("🧾 Transactions")
    category = st.selectbox("Category", ["All"] + service.category_options())
    trans, totals = service.transactions(None if category == "All" else category)
    k1, k2 = st.columns(2)
    k1.metric("Total Income", money(totals.income))
    k2.metric("Total Expenses", money(totals.expenses))

    if trans:
        df = transactions_frame(trans)
        disp = df.assign(
            date=df["date"].dt.strftime("%b %d, %Y").fillna("-"),
            amount=df["amount"].map(money),
        )
        st.dataframe(disp, use_container_width=True, hide_index=True)
        st.download_button("⬇ Download CSV", df.to_csv(index=False), file_name="transactions.csv")

        to_delete = st.selectbox(
            "Delete transaction",
            [t.id for t in trans],
            format_func=lambda tid: next(f"{t.date} · {t.description or t.category} · {money(t.amount)}" for t in trans if t.id == tid),
        )
        if st.button("Delete", key="btn_delete_tx"):
            handle(service.delete_transaction(to_delete))
    else:
        st.info("No transactions found.")

elif menu == "💳 Debts":
    st.title("💳 Debt Tracker")
    debts, summary = service.debts()
    st.caption(f"Total Debt: {money(summary.total_debt)} | Total Paid: {money(summary.total_paid)}")
    for d in debts:
        with st.container(border=True):
            paid = d.total_amount - d.current_balance
            pct = progress_percent(paid, d.total_amount)
            st.subheader(d.name)
            st.write(f"Balance {money(d.current_balance)} of {money(d.total_amount)} · "
                     f"{d.interest_rate:.2f}% APR · min {money(d.minimum_payment)}"
                     + (f" · due {d.due_date}" if d.due_date else ""))
            st.progress(bar_value(capped_progress(paid, d.total_amount)), text=f"{pct:.1f}% paid off")
            c1, c2, c3 = st.columns([3, 1, 1])
            new_balance = c1.text_input("New balance", key=f"bal_{d.id}", label_visibility="collapsed", placeholder="New balance")
            if c2.button("Update", key=f"upd_{d.id}"):
                handle(service.update_debt_balance(d.id, new_balance))
            if c3.button("🗑", key=f"del_d_{d.id}"):
                handle(service.delete_debt(d.id))
    if not debts:
        st.info("No debts tracked.")

elif menu == "🐷 Savings":
    st.title("🐷 Savings Goals")
    saved, summary = service.savings()
    st.caption(f"Total Saved: {money(summary.total_saved)} | Total Goals: {money(summary.total_targets)}")
    for g in saved:
        with st.container(border=True):
            pct = progress_percent(g.current_amount, g.target_amount)
            st.subheader(g.name + (" · 🎉 Goal Reached!" if goal_reached(g) else ""))
            st.write(f"{money(g.current_amount)} / {money(g.target_amount)} · "
                     f"Remaining {money(goal_remaining(g))}"
                     + (f" · by {g.target_date}" if g.target_date else ""))
            st.progress(bar_value(capped_progress(g.current_amount, g.target_amount)), text=f"{pct:.1f}%")
            c1, c2, c3 = st.columns([3, 1, 1])
            add_amount = c1.text_input("Add amount", key=f"amt_{g.id}", label_visibility="collapsed", placeholder="Add amount")
            if c2.button("Add", key=f"add_{g.id}"):
                handle(service.add_to_goal(g.id, g.current_amount, add_amount))
            if c3.button("🗑", key=f"del_g_{g.id}"):
                handle(service.delete_savings_goal(g.id))
    if not saved:
        st.info("No savings goals yet.")

elif menu == "📈 Investments":
    st.title("📈 Investment Tracker")
    inv_type = st.selectbox("Type", ("All",) + domain.INVESTMENT_TYPES)
    invs, summary = service.investments(None if inv_type == "All" else inv_type)
    sign = "+" if summary.gain_loss >= 0 else ""
    st.caption(f"Invested: {money(summary.total_invested)} | Current: {money(summary.total_current)} | "
               f"{sign}{money(summary.gain_loss)} ({summary.gain_loss_percent:.2f}%)")
    for inv in invs:
        with st.container(border=True):
            gain, gain_pct = investment_gain(inv)
            st.subheader(f"{inv.name} · {inv.investment_type}")
            st.metric("Current value", money(inv.current_value or inv.amount), f"{gain:,.2f} ({gain_pct:.2f}%)")
            st.caption(f"Bought {inv.purchase_date} for {money(inv.amount)}")
            c1, c2, c3 = st.columns([3, 1, 1])
            new_value = c1.text_input("New value", key=f"val_{inv.id}", label_visibility="collapsed", placeholder="New value")
            if c2.button("Update", key=f"upd_{inv.id}"):
                handle(service.update_investment_value(inv.id, new_value))
            if c3.button("🗑", key=f"del_i_{inv.id}"):
                handle(service.delete_investment(inv.id))
    if not invs:
        st.info("No investments tracked.")

elif menu == "🎯 Goals":
    st.title("🎯 Financial Health")
    for goal_type, entries in service.health():
        st.header(f"{goal_type.capitalize()} Goals")
        for g in entries:
            with st.container(border=True):
                st.subheader(g.title)
                st.progress(bar_value(g.bar_progress), text=f"Progress {g.progress:.1f}%")
                st.caption(f"{money(g.current_amount)} / {money(g.target_amount)}")
        if not entries:
            st.caption("Nothing here yet.")

    statuses = service.paycheck_goals()
    if statuses:
        st.header("Paycheck Split Goals")
    for status in statuses:
        with st.container(border=True):
            st.subheader(status.split.name)
            st.write(f"Expected: {money(status.split.paycheck_amount)} | Actual: {money(status.month_income)} · "
                     + ("**On Track**" if status.on_track else "**Below Target**"))
            cols = st.columns(len(SPLIT_BUCKETS))
            for col, name in zip(cols, SPLIT_BUCKETS):
                bucket = status.buckets[name]
                col.metric(
                    ("✅ " if bucket.met else "❌ ") + name.capitalize(),
                    money(bucket.actual),
                    f"Goal: {money(bucket.expected)}",
                    delta_color="off",
                )

elif menu == "⚙️ Manage Types":
    st.title("⚙️ Transaction Types & Categories")
    lookups = service.lookups()
    sections = [
        ("Transaction Types", "type", domain.TRANSACTION_TYPES_TABLE, lookups.types),
        ("Categories", "category", domain.TRANSACTION_CATEGORIES_TABLE, lookups.categories),
    ]
    for col, (title, noun, table, items) in zip(st.columns(2), sections):
        with col:
            st.subheader(title)
            new_name = st.text_input(f"New {noun} name", key=f"new_{table}")
            if st.button("Add", key=f"add_{table}", disabled=not new_name.strip()):
                handle(service.add_lookup(table, new_name))
            for item in items:
                c1, c2 = st.columns([4, 1])
                c1.write(item.name)
                if c2.button("🗑", key=f"del_{table}_{item.id}"):
                    handle(service.delete_lookup(table, item.id))
