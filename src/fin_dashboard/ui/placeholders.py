"""
Placeholder financial figures shown until real account data is wired in.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class SpendingSummary:
    total: float = 0
    budget_busters: List[str] = field(default_factory=list)
    remaining: float = 0


@dataclass
class SavingsBucket:
    name: str
    amount: float
    change: float


@dataclass
class UpcomingExpense:
    name: str
    amount: float
    date: str


@dataclass
class Utilities:
    electric: float = 0
    water: float = 0
    internet: float = 0


@dataclass
class PlaceholderFinances:
    spending: SpendingSummary = field(default_factory=SpendingSummary)
    savings: List[SavingsBucket] = field(default_factory=list)
    upcoming_expenses: List[UpcomingExpense] = field(default_factory=list)
    utilities: Utilities = field(default_factory=Utilities)
    notes: str = "No notes available."
    questions: List[str] = field(default_factory=list)


def default_finances() -> PlaceholderFinances:
    return PlaceholderFinances(
        savings=[SavingsBucket(name="Placeholder Fund", amount=0, change=0)],
        upcoming_expenses=[UpcomingExpense(name="Placeholder Expense", amount=0, date="2025-01-01")],
    )
