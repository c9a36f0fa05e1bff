"""Tests for the AddTransactionUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from finance_tracker.application.use_cases.add_transaction import (
    AddTransactionUseCase,
)
from finance_tracker.domain.models import TransactionKind


def _build(store=None):
    store = store or MagicMock()
    store.generate_key.return_value = "-Nkey"
    use_case = AddTransactionUseCase(
        store,
        logger=MagicMock(),
        clock=lambda: date(2024, 3, 9),
    )
    return use_case, store


def test_blank_description_creates_no_record() -> None:
    use_case, store = _build()

    result = use_case.execute("u1", "", "10", TransactionKind.EXPENSE, "Food")

    assert result.created is False
    assert result.errors == ("Description is required.",)
    store.generate_key.assert_not_called()
    store.write.assert_not_called()


def test_comma_amount_is_written_as_number() -> None:
    """12,50 is stored as 12.5 under a generated key."""
    use_case, store = _build()

    result = use_case.execute(
        "u1",
        "Lunch",
        "12,50",
        TransactionKind.EXPENSE,
        "Food",
    )

    assert result.created
    assert result.transaction.amount == Decimal("12.50")
    assert result.transaction.id == "-Nkey"
    assert result.transaction.date == "09/03/2024"
    store.generate_key.assert_called_once_with("u1")
    store.write.assert_called_once_with(
        "u1",
        "-Nkey",
        {
            "id": "-Nkey",
            "description": "Lunch",
            "value": 12.5,
            "type": "DESPESA",
            "date": "09/03/2024",
            "category": "Food",
        },
    )


def test_income_is_written_with_income_type() -> None:
    use_case, store = _build()

    use_case.execute("u1", "Salary", "4500", TransactionKind.INCOME, "Work")

    record = store.write.call_args.args[2]
    assert record["type"] == "RECEITA"
    assert record["value"] == 4500.0
