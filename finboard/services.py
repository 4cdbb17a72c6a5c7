import asyncio
from dataclasses import dataclass
from datetime import date
from functools import partial
from typing import Dict, List, Optional, Tuple

from finboard import aggregation, domain, goals
from finboard.aggregation import FlowPoint, MonthSummary, NetWorthPoint, Totals
from finboard.domain import Transaction
from finboard.events import DATA_CHANGED, TRANSACTION_ADDED, EventBus, collect, event_bus, publish_outcome
from finboard.filters import by_category, by_month, select
from finboard.functional import Either, Left, invalid, parse_amount, pipe, validate_lookup_name, validate_paycheck_split, validate_transaction_input
from finboard.loaders import LookupSources, load_goal_sources, load_lookup_sources, load_split_sources
from finboard.repositories import FinanceRepository


@dataclass(frozen=True)
class Overview:
    time_range: str
    month: Optional[str]
    totals: Totals
    net_worth: List[NetWorthPoint]
    available_months: List[str]


@dataclass(frozen=True)
class ChartsData:
    totals: Totals
    categories: List[Tuple[str, float]]
    monthly: List[FlowPoint]
    net_worth: List[NetWorthPoint]


@dataclass(frozen=True)
class MonthlyView:
    summary: MonthSummary
    daily: List[FlowPoint]
    available_months: List[str]


class DashboardService:
    """Facade the UI talks to: fetch wholesale, aggregate in memory, publish mutation outcomes.

    Every view method refetches the tables it needs; nothing is cached here.
    """

    def __init__(self, repo: FinanceRepository, bus: EventBus = event_bus):
        self.repo = repo
        self.bus = bus

    # read side

    def overview(
        self,
        time_range: str = "all",
        month: Optional[str] = None,
        today: Optional[date] = None,
        trans: Optional[Tuple[Transaction, ...]] = None,
    ) -> Overview:
        """Pass ``trans`` to reuse transactions the caller already fetched."""
        trans = self._transactions(trans)
        filtered = aggregation.filter_time_range(trans, time_range, month, today)
        return Overview(
            time_range=time_range,
            month=month,
            totals=aggregation.totals(filtered),
            net_worth=aggregation.net_worth_trend(filtered),
            available_months=aggregation.available_months(trans),
        )

    def charts(self) -> ChartsData:
        trans = self.repo.transactions()
        return ChartsData(
            totals=aggregation.totals(trans),
            categories=aggregation.category_breakdown(trans),
            monthly=aggregation.monthly_series(trans),
            net_worth=aggregation.net_worth_trend(trans),
        )

    def monthly(self, month: str, trans: Optional[Tuple[Transaction, ...]] = None) -> MonthlyView:
        trans = self._transactions(trans)
        return MonthlyView(
            summary=aggregation.month_summary(trans, month),
            daily=aggregation.daily_series(trans, month),
            available_months=aggregation.available_months(trans),
        )

    def _transactions(self, trans: Optional[Tuple[Transaction, ...]]) -> Tuple[Transaction, ...]:
        return self.repo.transactions() if trans is None else trans

    def transactions(self, category: Optional[str] = None):
        trans = self.repo.transactions()
        if category:
            trans = select(trans, by_category(category))
        return trans, aggregation.totals(trans)

    def category_options(self) -> List[str]:
        """Names from the categories table, or the built-in list when it is empty."""
        names = [c.name for c in self.repo.transaction_categories()]
        return names or list(domain.TRANSACTION_CATEGORIES)

    def debts(self):
        debts = self.repo.debts()
        return debts, goals.debt_summary(debts)

    def savings(self):
        saved = self.repo.savings_goals()
        return saved, goals.savings_summary(saved)

    def investments(self, investment_type: Optional[str] = None):
        invs = self.repo.investments()
        if investment_type:
            invs = tuple(i for i in invs if i.investment_type == investment_type)
        return invs, goals.investment_summary(invs)

    def health(self) -> List[Tuple[str, List[goals.GoalProgress]]]:
        sources = asyncio.run(load_goal_sources(self.repo))
        return pipe(
            goals.health_goals(sources.debts, sources.savings_goals, sources.investments),
            goals.group_goals,
        )

    def paycheck_goals(self, today: Optional[date] = None) -> List[goals.SplitStatus]:
        sources = asyncio.run(load_split_sources(self.repo))
        month = (today or date.today()).strftime("%Y-%m")
        income = pipe(
            sources.transactions,
            lambda ts: select(ts, by_month(month)),
            aggregation.totals,
        ).income
        return [goals.paycheck_split_status(s, income) for s in sources.splits]

    def lookups(self) -> LookupSources:
        return asyncio.run(load_lookup_sources(self.repo))

    # write side

    def _publish(self, outcome: Either, success_message: str, event_name: str = DATA_CHANGED) -> Dict:
        return collect(publish_outcome(self.bus, outcome, success_message, event_name))

    def add_transaction(self, date_str: str, amount, category: str, transaction_type: str, description: str = "") -> Dict:
        outcome = validate_transaction_input(date_str, amount, category, transaction_type, description).bind(self.repo.add_transaction)
        return self._publish(outcome, "Transaction added successfully!", TRANSACTION_ADDED)

    def delete_transaction(self, tx_id: str) -> Dict:
        return self._publish(self.repo.delete_transaction(tx_id), "Transaction deleted successfully!")

    def delete_debt(self, debt_id: str) -> Dict:
        return self._publish(self.repo.delete_debt(debt_id), "Debt deleted successfully!")

    def update_debt_balance(self, debt_id: str, value) -> Dict:
        return self._publish(self.repo.update_debt_balance(debt_id, value), "Balance updated!")

    def delete_savings_goal(self, goal_id: str) -> Dict:
        return self._publish(self.repo.delete_savings_goal(goal_id), "Savings goal deleted successfully!")

    def add_to_goal(self, goal_id: str, current: float, delta) -> Dict:
        """Add ``delta`` to a goal's saved amount."""
        new_amount = parse_amount(delta).map(lambda d: current + d)
        if new_amount.is_none():
            return self._publish(invalid("invalid_amount", "Please enter a valid amount", value=delta), "")
        outcome = self.repo.update_goal_amount(goal_id, new_amount.get_or_else(current))
        return self._publish(outcome, "Amount updated!")

    def delete_investment(self, inv_id: str) -> Dict:
        return self._publish(self.repo.delete_investment(inv_id), "Investment deleted successfully!")

    def update_investment_value(self, inv_id: str, value) -> Dict:
        return self._publish(self.repo.update_investment_value(inv_id, value), "Value updated!")

    def add_paycheck_split(self, name: str, paycheck_amount, input_type: str = "percentage",
                           percentages: Optional[dict] = None, amounts: Optional[dict] = None) -> Dict:
        outcome = validate_paycheck_split(name, paycheck_amount, input_type, percentages, amounts).bind(self.repo.add_paycheck_split)
        return self._publish(outcome, "Paycheck split added successfully!")

    def add_lookup(self, table: str, name: str) -> Dict:
        if table not in (domain.TRANSACTION_TYPES_TABLE, domain.TRANSACTION_CATEGORIES_TABLE):
            return self._publish(Left({"error": "invalid_table", "message": f"Unknown lookup table {table}"}), "")
        outcome = validate_lookup_name(name).bind(partial(self.repo.add_lookup, table))
        return self._publish(outcome, "Category added" if table == domain.TRANSACTION_CATEGORIES_TABLE else "Transaction type added")

    def delete_lookup(self, table: str, item_id: str) -> Dict:
        outcome = self.repo.delete_lookup(table, item_id)
        return self._publish(outcome, "Category deleted" if table == domain.TRANSACTION_CATEGORIES_TABLE else "Transaction type deleted")
