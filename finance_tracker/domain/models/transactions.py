"""Domain models for transactions and their aggregates."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class TransactionKind(str, Enum):
    """Direction of a transaction; the only source of its display sign."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


@dataclass(frozen=True)
class Transaction:
    """Immutable income or expense record.

    Attributes:
        id: Store-assigned key, empty until assigned.
        description: Free text entered by the user.
        amount: Unsigned magnitude of the transaction.
        kind: Income or expense.
        date: Creation date formatted as dd/MM/yyyy.
        category: Free text category.
    """

    id: str
    description: str
    amount: Decimal
    kind: TransactionKind
    date: str
    category: str

    @property
    def is_expense(self) -> bool:
        return self.kind is TransactionKind.EXPENSE


@dataclass(frozen=True)
class TransactionDraft:
    """Validated form input, not yet stored."""

    description: str
    amount: Decimal
    kind: TransactionKind
    category: str


@dataclass(frozen=True)
class TransactionTotals:
    """Totals derived from a transaction sequence."""

    total_income: Decimal
    total_expense: Decimal

    @property
    def balance(self) -> Decimal:
        """Return total_income minus total_expense."""
        return self.total_income - self.total_expense


__all__ = [
    "TransactionKind",
    "Transaction",
    "TransactionDraft",
    "TransactionTotals",
]
