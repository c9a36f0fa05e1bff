"""Projections from the synchronized sequence to display structures."""

from collections.abc import Sequence

from finance_tracker.domain.models import (
    DashboardView,
    HistoryView,
    Transaction,
    TransactionRow,
)
from finance_tracker.domain.services.aggregation import (
    DEFAULT_RECENT_LIMIT,
    recent,
    summarize_transactions,
)
from finance_tracker.domain.services.formatting import (
    DEFAULT_CURRENCY_SYMBOL,
    format_money,
    format_signed_amount,
)

EMPTY_HISTORY_MESSAGE = "No transactions recorded."


def build_transaction_row(
    transaction: Transaction,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> TransactionRow:
    return TransactionRow(
        id=transaction.id,
        description=transaction.description,
        subtitle=f"{transaction.category} - {transaction.date}",
        amount_label=format_signed_amount(transaction, currency_symbol),
        is_expense=transaction.is_expense,
    )


def build_dashboard_view(
    transactions: Sequence[Transaction],
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> DashboardView:
    """Build the dashboard projection.

    Args:
        transactions: Newest-first synchronized transactions.
        currency_symbol: Symbol prefixed to amount labels.
        recent_limit: Number of recent transactions to list.

    Returns:
        DashboardView: Totals, their labels and the recent rows.
    """
    totals = summarize_transactions(transactions)
    return DashboardView(
        balance=totals.balance,
        total_income=totals.total_income,
        total_expense=totals.total_expense,
        balance_label=format_money(totals.balance, currency_symbol),
        income_label=format_money(totals.total_income, currency_symbol),
        expense_label=format_money(totals.total_expense, currency_symbol),
        recent=tuple(
            build_transaction_row(tx, currency_symbol)
            for tx in recent(transactions, recent_limit)
        ),
    )


def build_history_view(
    transactions: Sequence[Transaction],
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> HistoryView:
    """Build the full history projection."""
    if not transactions:
        return HistoryView(rows=(), empty_message=EMPTY_HISTORY_MESSAGE)
    return HistoryView(
        rows=tuple(
            build_transaction_row(tx, currency_symbol) for tx in transactions
        )
    )


__all__ = [
    "EMPTY_HISTORY_MESSAGE",
    "build_transaction_row",
    "build_dashboard_view",
    "build_history_view",
]
