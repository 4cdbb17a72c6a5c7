import asyncio
from dataclasses import dataclass
from typing import Tuple

from finboard.domain import Debt, Investment, LookupItem, PaycheckSplit, SavingsGoal, Transaction
from finboard.repositories import FinanceRepository


@dataclass(frozen=True)
class GoalSources:
    debts: Tuple[Debt, ...]
    savings_goals: Tuple[SavingsGoal, ...]
    investments: Tuple[Investment, ...]


@dataclass(frozen=True)
class SplitSources:
    splits: Tuple[PaycheckSplit, ...]
    transactions: Tuple[Transaction, ...]


@dataclass(frozen=True)
class LookupSources:
    types: Tuple[LookupItem, ...]
    categories: Tuple[LookupItem, ...]


async def load_goal_sources(repo: FinanceRepository) -> GoalSources:
    """Fetch debts, savings goals and investments in parallel.

    Each table is fetched on its own worker thread; a failed table comes
    back empty without cancelling the others.
    """
    debts, goals, investments = await asyncio.gather(
        asyncio.to_thread(repo.debts),
        asyncio.to_thread(repo.savings_goals),
        asyncio.to_thread(repo.investments),
    )
    return GoalSources(debts, goals, investments)


async def load_split_sources(repo: FinanceRepository) -> SplitSources:
    splits, transactions = await asyncio.gather(
        asyncio.to_thread(repo.paycheck_splits),
        asyncio.to_thread(repo.transactions),
    )
    return SplitSources(splits, transactions)


async def load_lookup_sources(repo: FinanceRepository) -> LookupSources:
    types, categories = await asyncio.gather(
        asyncio.to_thread(repo.transaction_types),
        asyncio.to_thread(repo.transaction_categories),
    )
    return LookupSources(types, categories)
