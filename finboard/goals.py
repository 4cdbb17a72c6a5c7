from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

import numpy as np

from finboard.domain import Debt, Investment, PaycheckSplit, SavingsGoal

GOAL_TYPES = ("debt", "savings", "investment")
SPLIT_BUCKETS = ("investing", "spending", "savings", "debt")


def ratio(numerator: float, denominator: float) -> float:
    """Plain float division that yields inf/nan instead of raising on zero."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(numerator), np.float64(denominator)))


def progress_percent(current: float, target: float) -> float:
    """Raw progress: may exceed 100, go negative, or be inf/nan for a zero target."""
    return ratio(current, target) * 100


def capped_progress(current: float, target: float) -> float:
    """Progress for bar display, capped at 100. nan passes through."""
    return float(np.minimum(progress_percent(current, target), 100.0))


@dataclass(frozen=True)
class DebtSummary:
    total_debt: float
    total_original: float
    total_paid: float


@dataclass(frozen=True)
class SavingsSummary:
    total_saved: float
    total_targets: float


@dataclass(frozen=True)
class InvestmentSummary:
    total_invested: float
    total_current: float
    gain_loss: float
    gain_loss_percent: float


@dataclass(frozen=True)
class GoalProgress:
    id: str
    type: str
    title: str
    target_amount: float
    current_amount: float

    @property
    def progress(self) -> float:
        return progress_percent(self.current_amount, self.target_amount)

    @property
    def bar_progress(self) -> float:
        return capped_progress(self.current_amount, self.target_amount)


@dataclass(frozen=True)
class BucketStatus:
    expected: float
    actual: float
    met: bool


@dataclass(frozen=True)
class SplitStatus:
    split: PaycheckSplit
    month_income: float
    income_ratio: float
    buckets: Dict[str, BucketStatus]

    @property
    def on_track(self) -> bool:
        return self.income_ratio >= 1


def debt_summary(debts: Iterable[Debt]) -> DebtSummary:
    debts = tuple(debts)
    total_debt = sum(d.current_balance for d in debts)
    total_original = sum(d.total_amount for d in debts)
    return DebtSummary(total_debt, total_original, total_original - total_debt)


def savings_summary(goals: Iterable[SavingsGoal]) -> SavingsSummary:
    goals = tuple(goals)
    return SavingsSummary(
        total_saved=sum(g.current_amount for g in goals),
        total_targets=sum(g.target_amount for g in goals),
    )


def goal_remaining(goal: SavingsGoal) -> float:
    return max(0.0, goal.target_amount - goal.current_amount)


def goal_reached(goal: SavingsGoal) -> bool:
    # nan progress (zero target, nothing saved) is not reached
    return progress_percent(goal.current_amount, goal.target_amount) >= 100


def current_value(inv: Investment) -> float:
    # a missing or zero current value falls back to the purchase amount
    return inv.current_value or inv.amount


def investment_gain(inv: Investment) -> Tuple[float, float]:
    gain = current_value(inv) - inv.amount
    return gain, ratio(gain, inv.amount) * 100


def investment_summary(investments: Iterable[Investment]) -> InvestmentSummary:
    investments = tuple(investments)
    invested = sum(i.amount for i in investments)
    current = sum(current_value(i) for i in investments)
    gain = current - invested
    pct = (gain / invested) * 100 if invested > 0 else 0.0
    return InvestmentSummary(invested, current, gain, pct)


def health_goals(
    debts: Iterable[Debt],
    goals: Iterable[SavingsGoal],
    investments: Iterable[Investment],
) -> List[GoalProgress]:
    """Flatten debts, savings goals and investments into progress entries."""
    entries = [
        GoalProgress(d.id, "debt", d.name, d.total_amount, d.total_amount - d.current_balance)
        for d in debts
    ]
    entries += [
        GoalProgress(g.id, "savings", g.name, g.target_amount, g.current_amount)
        for g in goals
    ]
    entries += [
        GoalProgress(
            i.id,
            "investment",
            i.name,
            i.amount,
            i.amount if i.current_value is None else i.current_value,
        )
        for i in investments
    ]
    return entries


def group_goals(entries: Iterable[GoalProgress]) -> List[Tuple[str, List[GoalProgress]]]:
    entries = tuple(entries)
    return [(t, [g for g in entries if g.type == t]) for t in GOAL_TYPES]


def split_percentages(split: PaycheckSplit) -> Dict[str, float]:
    return {
        "investing": split.investing_percentage,
        "spending": split.spending_percentage,
        "savings": split.savings_percentage,
        "debt": split.debt_percentage or 0.0,
    }


def paycheck_split_status(split: PaycheckSplit, month_income: float) -> SplitStatus:
    """Compare a split's expected allocation with this month's income.

    Actual amounts are estimated by scaling each expected bucket by the
    ratio of income received to the planned paycheck.
    """
    income_ratio = ratio(month_income, split.paycheck_amount)
    buckets = {}
    for name, pct in split_percentages(split).items():
        expected = split.paycheck_amount * pct / 100
        actual = expected * income_ratio
        # spending is the one bucket where staying under target is good
        met = actual <= expected if name == "spending" else actual >= expected
        buckets[name] = BucketStatus(expected, actual, met)
    return SplitStatus(split, month_income, income_ratio, buckets)
