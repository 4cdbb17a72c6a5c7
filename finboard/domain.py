from dataclasses import dataclass
from typing import Optional

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)

TRANSACTION_CATEGORIES = (
    "Food & Dining",
    "Shopping",
    "Transportation",
    "Bills & Utilities",
    "Entertainment",
    "Health & Fitness",
    "Travel",
    "Education",
    "Gifts & Donations",
    "Business Services",
    "Other",
)

INVESTMENT_TYPES = (
    "Stocks",
    "Bonds",
    "Mutual Funds",
    "ETFs",
    "Cryptocurrency",
    "Real Estate",
    "Commodities",
    "Options",
    "Other",
)

# remote table names
TRANSACTIONS = "transactions"
DEBTS = "debts"
SAVINGS_GOALS = "savings_goals"
INVESTMENTS = "investments"
PAYCHECK_SPLITS = "paycheck_splits"
TRANSACTION_TYPES_TABLE = "transaction_types"
TRANSACTION_CATEGORIES_TABLE = "transaction_categories"


def _num(value, default: float = 0.0) -> float:
    if value is None:
        return default
    return float(value)


def _str(value) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Transaction:
    id: str
    date: str              # "YYYY-MM-DD"
    amount: float          # always positive, sign comes from transaction_type
    category: str
    transaction_type: str  # "income" or "expense"
    description: str = ""

    @classmethod
    def from_row(cls, row: dict) -> "Transaction":
        return cls(
            id=_str(row.get("id")),
            date=_str(row.get("date"))[:10],
            amount=_num(row.get("amount")),
            category=_str(row.get("category")),
            transaction_type=_str(row.get("transaction_type")),
            description=_str(row.get("description")),
        )

    @property
    def is_income(self) -> bool:
        return self.transaction_type == INCOME

    @property
    def is_expense(self) -> bool:
        return self.transaction_type == EXPENSE


@dataclass(frozen=True)
class Debt:
    id: str
    name: str
    total_amount: float
    current_balance: float
    interest_rate: float = 0.0
    minimum_payment: float = 0.0
    due_date: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Debt":
        return cls(
            id=_str(row.get("id")),
            name=_str(row.get("name")),
            total_amount=_num(row.get("total_amount")),
            current_balance=_num(row.get("current_balance")),
            interest_rate=_num(row.get("interest_rate")),
            minimum_payment=_num(row.get("minimum_payment")),
            due_date=row.get("due_date"),
        )


@dataclass(frozen=True)
class SavingsGoal:
    id: str
    name: str
    target_amount: float
    current_amount: float = 0.0
    target_date: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "SavingsGoal":
        return cls(
            id=_str(row.get("id")),
            name=_str(row.get("name")),
            target_amount=_num(row.get("target_amount")),
            current_amount=_num(row.get("current_amount")),
            target_date=row.get("target_date"),
        )


@dataclass(frozen=True)
class Investment:
    id: str
    name: str
    investment_type: str
    amount: float
    purchase_date: str
    current_value: Optional[float] = None  # None until first manual update

    @classmethod
    def from_row(cls, row: dict) -> "Investment":
        current = row.get("current_value")
        return cls(
            id=_str(row.get("id")),
            name=_str(row.get("name")),
            investment_type=_str(row.get("investment_type")),
            amount=_num(row.get("amount")),
            purchase_date=_str(row.get("purchase_date"))[:10],
            current_value=None if current is None else float(current),
        )


@dataclass(frozen=True)
class PaycheckSplit:
    id: str
    name: str
    paycheck_amount: float
    investing_percentage: float
    spending_percentage: float
    savings_percentage: float
    debt_percentage: float = 0.0
    created_at: str = ""

    @classmethod
    def from_row(cls, row: dict) -> "PaycheckSplit":
        return cls(
            id=_str(row.get("id")),
            name=_str(row.get("name")),
            paycheck_amount=_num(row.get("paycheck_amount")),
            investing_percentage=_num(row.get("investing_percentage")),
            spending_percentage=_num(row.get("spending_percentage")),
            savings_percentage=_num(row.get("savings_percentage")),
            debt_percentage=_num(row.get("debt_percentage")),
            created_at=_str(row.get("created_at")),
        )

    @property
    def total_percentage(self) -> float:
        return (
            self.investing_percentage
            + self.spending_percentage
            + self.savings_percentage
            + self.debt_percentage
        )


# Lookup rows from transaction_types / transaction_categories
@dataclass(frozen=True)
class LookupItem:
    id: str
    name: str

    @classmethod
    def from_row(cls, row: dict) -> "LookupItem":
        return cls(id=_str(row.get("id")), name=_str(row.get("name")))
