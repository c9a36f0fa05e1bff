"""Domain services for transaction aggregates.

All functions are pure: they never mutate their input and return the same
result for the same sequence.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from finance_tracker.domain.models import (
    Transaction,
    TransactionKind,
    TransactionTotals,
)

DEFAULT_RECENT_LIMIT = 5


def _sum_kind(
    transactions: Iterable[Transaction],
    kind: TransactionKind,
) -> Decimal:
    return sum(
        (tx.amount for tx in transactions if tx.kind is kind),
        start=Decimal("0"),
    )


def total_income(transactions: Iterable[Transaction]) -> Decimal:
    """Return the sum of income amounts."""
    return _sum_kind(transactions, TransactionKind.INCOME)


def total_expense(transactions: Iterable[Transaction]) -> Decimal:
    """Return the sum of expense amounts."""
    return _sum_kind(transactions, TransactionKind.EXPENSE)


def balance(transactions: Sequence[Transaction]) -> Decimal:
    """Return total income minus total expense."""
    return total_income(transactions) - total_expense(transactions)


def summarize_transactions(
    transactions: Sequence[Transaction],
) -> TransactionTotals:
    """Compute income and expense totals in one value.

    Args:
        transactions: Transactions in any order.

    Returns:
        TransactionTotals: Totals whose ``balance`` is income minus expense.
    """
    income = Decimal("0")
    expense = Decimal("0")
    for tx in transactions:
        if tx.kind is TransactionKind.INCOME:
            income += tx.amount
        else:
            expense += tx.amount
    return TransactionTotals(total_income=income, total_expense=expense)


def recent(
    transactions: Sequence[Transaction],
    limit: int = DEFAULT_RECENT_LIMIT,
) -> tuple[Transaction, ...]:
    """Return the first ``limit`` items of a newest-first sequence."""
    if limit <= 0:
        return ()
    return tuple(transactions[:limit])


__all__ = [
    "DEFAULT_RECENT_LIMIT",
    "total_income",
    "total_expense",
    "balance",
    "summarize_transactions",
    "recent",
]
