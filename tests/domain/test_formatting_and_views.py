"""Tests for amount formatting and view projections."""

from decimal import Decimal

from finance_tracker.domain.models import Transaction, TransactionKind
from finance_tracker.domain.services.formatting import (
    format_money,
    format_signed_amount,
)
from finance_tracker.domain.services.views import (
    EMPTY_HISTORY_MESSAGE,
    build_dashboard_view,
    build_history_view,
)


def _tx(tx_id: str, amount: str, kind: TransactionKind) -> Transaction:
    return Transaction(
        id=tx_id,
        description=f"tx {tx_id}",
        amount=Decimal(amount),
        kind=kind,
        date="10/04/2024",
        category="Misc",
    )


def test_format_money_rounds_half_up() -> None:
    assert format_money(Decimal("2.005")) == "R$ 2.01"
    assert format_money(Decimal("0")) == "R$ 0.00"
    assert format_money(Decimal("-13.5"), "$") == "$ -13.50"


def test_signed_amount_follows_kind() -> None:
    income = _tx("a", "10", TransactionKind.INCOME)
    expense = _tx("b", "7.1", TransactionKind.EXPENSE)

    assert format_signed_amount(income) == "+ R$ 10.00"
    assert format_signed_amount(expense) == "- R$ 7.10"


def test_dashboard_view_lists_five_most_recent() -> None:
    transactions = [
        _tx(str(index), "1", TransactionKind.INCOME) for index in range(7)
    ]

    view = build_dashboard_view(transactions)

    assert view.balance == Decimal("7")
    assert view.balance_label == "R$ 7.00"
    assert [row.id for row in view.recent] == ["0", "1", "2", "3", "4"]


def test_dashboard_view_totals() -> None:
    transactions = [
        _tx("a", "4500", TransactionKind.INCOME),
        _tx("b", "1200", TransactionKind.EXPENSE),
        _tx("c", "650", TransactionKind.EXPENSE),
    ]

    view = build_dashboard_view(transactions, currency_symbol="$", recent_limit=2)

    assert view.income_label == "$ 4500.00"
    assert view.expense_label == "$ 1850.00"
    assert view.balance_label == "$ 2650.00"
    assert len(view.recent) == 2
    assert view.recent[1].is_expense is True
    assert view.recent[1].subtitle == "Misc - 10/04/2024"


def test_history_view_empty_message() -> None:
    view = build_history_view([])

    assert view.is_empty
    assert view.empty_message == EMPTY_HISTORY_MESSAGE


def test_history_view_keeps_all_rows_in_order() -> None:
    transactions = [
        _tx("new", "1", TransactionKind.EXPENSE),
        _tx("old", "2", TransactionKind.INCOME),
    ]

    view = build_history_view(transactions)

    assert not view.is_empty
    assert [row.id for row in view.rows] == ["new", "old"]
    assert view.rows[0].amount_label == "- R$ 1.00"


def test_format_money_handles_values_beyond_default_precision() -> None:
    huge = Decimal("1" + "0" * 30)

    assert format_money(huge) == f"R$ {huge}.00"


def test_dashboard_view_with_totals_beyond_default_precision() -> None:
    """Summed totals wider than 28 digits still render."""
    transactions = (
        _tx("a", "1" + "0" * 27, TransactionKind.INCOME),
        _tx("b", "0.005", TransactionKind.EXPENSE),
    )

    view = build_dashboard_view(transactions)

    assert view.income_label == "R$ 1" + "0" * 27 + ".00"
    assert view.expense_label == "R$ 0.01"
