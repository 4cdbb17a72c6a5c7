"""Table-scoped fetches and mutations against the hosted data store.

Fetches log failures and return an empty tuple so views render empty.
Mutations return ``Right(row)`` on success and ``Left(error dict)`` on
failure; the caller decides how to notify the user.
"""

import logging
from typing import Callable, Optional, Tuple, TypeVar

from finboard import domain
from finboard.domain import (
    Debt,
    Investment,
    LookupItem,
    PaycheckSplit,
    SavingsGoal,
    Transaction,
)
from finboard.functional import Either, Left, Right, parse_amount
from finboard.store import DataStoreClient, DataStoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# table -> (order column, ascending)
DEFAULT_ORDER = {
    domain.TRANSACTIONS: ("date", False),
    domain.DEBTS: ("due_date", True),
    domain.SAVINGS_GOALS: ("target_date", True),
    domain.INVESTMENTS: ("purchase_date", False),
    domain.PAYCHECK_SPLITS: ("created_at", False),
    domain.TRANSACTION_TYPES_TABLE: ("name", True),
    domain.TRANSACTION_CATEGORIES_TABLE: ("name", True),
}


def _failure(action: str, error: DataStoreError) -> Left:
    return Left({
        "error": "datastore_error",
        "message": f"Failed to {action}",
        "detail": error.message,
        "status_code": error.status_code,
    })


class FinanceRepository:
    """Typed access to every table the dashboard reads or writes."""

    def __init__(self, client: DataStoreClient):
        self.client = client

    def _fetch(self, table: str, parse: Callable[[dict], T], columns: str = "*") -> Tuple[T, ...]:
        order, ascending = DEFAULT_ORDER[table]
        try:
            rows = self.client.select(table, columns=columns, order=order, ascending=ascending)
        except DataStoreError as e:
            logger.error(f"Error fetching {table}: {e.message}")
            return ()
        return tuple(parse(row) for row in rows)

    def _insert(self, table: str, row: dict, parse: Callable[[dict], T], action: str) -> Either[dict, T]:
        try:
            stored = self.client.insert(table, [row])
        except DataStoreError as e:
            logger.error(f"{action} failed: {e.message}")
            return _failure(action, e)
        logger.info(f"{action}: ok")
        return Right(parse(stored[0]) if stored else parse(row))

    def _update(self, table: str, row_id: str, values: dict, action: str) -> Either[dict, dict]:
        try:
            stored = self.client.update(table, row_id, values)
        except DataStoreError as e:
            logger.error(f"{action} failed for {row_id}: {e.message}")
            return _failure(action, e)
        return Right(stored[0] if stored else {"id": row_id, **values})

    def _delete(self, table: str, row_id: str, action: str) -> Either[dict, str]:
        try:
            self.client.delete(table, row_id)
        except DataStoreError as e:
            logger.error(f"{action} failed for {row_id}: {e.message}")
            return _failure(action, e)
        return Right(row_id)

    # transactions

    def transactions(self) -> Tuple[Transaction, ...]:
        return self._fetch(domain.TRANSACTIONS, Transaction.from_row)

    def add_transaction(self, values: dict) -> Either[dict, Transaction]:
        return self._insert(domain.TRANSACTIONS, values, Transaction.from_row, "add transaction")

    def delete_transaction(self, tx_id: str) -> Either[dict, str]:
        return self._delete(domain.TRANSACTIONS, tx_id, "delete transaction")

    # debts

    def debts(self) -> Tuple[Debt, ...]:
        return self._fetch(domain.DEBTS, Debt.from_row)

    def add_debt(self, values: dict) -> Either[dict, Debt]:
        return self._insert(domain.DEBTS, values, Debt.from_row, "add debt")

    def delete_debt(self, debt_id: str) -> Either[dict, str]:
        return self._delete(domain.DEBTS, debt_id, "delete debt")

    def update_debt_balance(self, debt_id: str, new_balance) -> Either[dict, dict]:
        return self._update_number(domain.DEBTS, debt_id, "current_balance", new_balance, "update balance")

    # savings goals

    def savings_goals(self) -> Tuple[SavingsGoal, ...]:
        return self._fetch(domain.SAVINGS_GOALS, SavingsGoal.from_row)

    def add_savings_goal(self, values: dict) -> Either[dict, SavingsGoal]:
        return self._insert(domain.SAVINGS_GOALS, values, SavingsGoal.from_row, "add savings goal")

    def delete_savings_goal(self, goal_id: str) -> Either[dict, str]:
        return self._delete(domain.SAVINGS_GOALS, goal_id, "delete savings goal")

    def update_goal_amount(self, goal_id: str, new_amount) -> Either[dict, dict]:
        return self._update_number(domain.SAVINGS_GOALS, goal_id, "current_amount", new_amount, "update amount")

    # investments

    def investments(self) -> Tuple[Investment, ...]:
        return self._fetch(domain.INVESTMENTS, Investment.from_row)

    def add_investment(self, values: dict) -> Either[dict, Investment]:
        return self._insert(domain.INVESTMENTS, values, Investment.from_row, "add investment")

    def delete_investment(self, inv_id: str) -> Either[dict, str]:
        return self._delete(domain.INVESTMENTS, inv_id, "delete investment")

    def update_investment_value(self, inv_id: str, new_value) -> Either[dict, dict]:
        return self._update_number(domain.INVESTMENTS, inv_id, "current_value", new_value, "update value")

    # paycheck splits

    def paycheck_splits(self) -> Tuple[PaycheckSplit, ...]:
        return self._fetch(domain.PAYCHECK_SPLITS, PaycheckSplit.from_row)

    def add_paycheck_split(self, values: dict) -> Either[dict, PaycheckSplit]:
        return self._insert(domain.PAYCHECK_SPLITS, values, PaycheckSplit.from_row, "add paycheck split")

    # lookup tables

    def transaction_types(self) -> Tuple[LookupItem, ...]:
        return self._fetch(domain.TRANSACTION_TYPES_TABLE, LookupItem.from_row, columns="id,name")

    def transaction_categories(self) -> Tuple[LookupItem, ...]:
        return self._fetch(domain.TRANSACTION_CATEGORIES_TABLE, LookupItem.from_row, columns="id,name")

    def add_lookup(self, table: str, name: str) -> Either[dict, LookupItem]:
        label = "transaction type" if table == domain.TRANSACTION_TYPES_TABLE else "category"
        return self._insert(table, {"name": name}, LookupItem.from_row, f"add {label}")

    def delete_lookup(self, table: str, item_id: str) -> Either[dict, str]:
        label = "transaction type" if table == domain.TRANSACTION_TYPES_TABLE else "category"
        return self._delete(table, item_id, f"delete {label}")

    def _update_number(
        self, table: str, row_id: str, column: str, raw_value, action: str
    ) -> Either[dict, dict]:
        value: Optional[float] = parse_amount(raw_value).get_or_else(None)
        if value is None:
            return Left({
                "error": "invalid_amount",
                "message": f"Failed to {action}: not a number",
                "value": raw_value,
            })
        return self._update(table, row_id, {column: value}, action)
