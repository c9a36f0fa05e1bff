"""Display-ready projections of the synchronized transactions."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class TransactionRow:
    """One transaction line as shown in lists."""

    id: str
    description: str
    subtitle: str
    amount_label: str
    is_expense: bool


@dataclass(frozen=True)
class DashboardView:
    """Balance card, income/expense cards and the recent list."""

    balance: Decimal
    total_income: Decimal
    total_expense: Decimal
    balance_label: str
    income_label: str
    expense_label: str
    recent: tuple[TransactionRow, ...]


@dataclass(frozen=True)
class HistoryView:
    """Full newest-first list, or an empty-state message."""

    rows: tuple[TransactionRow, ...]
    empty_message: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.rows


__all__ = ["TransactionRow", "DashboardView", "HistoryView"]
