"""Conversion between stored records and Transaction models.

Stored records keep the field names used by the mobile client that shares the
database: ``value`` for the amount and ``RECEITA``/``DESPESA`` for the kind.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from finance_tracker.domain.models import Transaction, TransactionKind
from finance_tracker.utils.decimal_utils import (
    coerce_decimal,
    is_storable_amount,
)

_KIND_TO_WIRE = {
    TransactionKind.INCOME: "RECEITA",
    TransactionKind.EXPENSE: "DESPESA",
}

_WIRE_TO_KIND = {
    "RECEITA": TransactionKind.INCOME,
    "INCOME": TransactionKind.INCOME,
    "DESPESA": TransactionKind.EXPENSE,
    "EXPENSE": TransactionKind.EXPENSE,
}


def encode_transaction(transaction: Transaction) -> dict[str, Any]:
    """Return the stored representation of a transaction.

    Amounts are written as numbers so other clients can read them.
    """
    return {
        "id": transaction.id,
        "description": transaction.description,
        "value": float(transaction.amount),
        "type": _KIND_TO_WIRE[transaction.kind],
        "date": transaction.date,
        "category": transaction.category,
    }


def decode_transaction(key: str, raw: Any) -> Transaction | None:
    """Decode one stored child into a Transaction.

    Args:
        key: Child key; it is authoritative for the transaction id.
        raw: Stored value for the child.

    Returns:
        Transaction | None: Decoded transaction, or None when the record is
        malformed.
    """
    if not key or not isinstance(raw, Mapping):
        return None

    description = raw.get("description")
    category = raw.get("category")
    if not _is_filled(description) or not _is_filled(category):
        return None

    kind = _decode_kind(raw.get("type", raw.get("kind")))
    if kind is None:
        return None

    amount = _decode_amount(raw.get("value", raw.get("amount")))
    if amount is None:
        return None

    date_value = raw.get("date", "")
    if not isinstance(date_value, str):
        return None

    return Transaction(
        id=key,
        description=description,
        amount=amount,
        kind=kind,
        date=date_value,
        category=category,
    )


def decode_children(
    children: Iterable[tuple[str, Any]],
) -> tuple[list[Transaction], int]:
    """Decode children in order, dropping malformed records.

    Returns:
        tuple[list[Transaction], int]: Decoded transactions in input order and
        the number of dropped children.
    """
    decoded: list[Transaction] = []
    dropped = 0
    for key, raw in children:
        transaction = decode_transaction(key, raw)
        if transaction is None:
            dropped += 1
            continue
        decoded.append(transaction)
    return decoded, dropped


def _is_filled(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _decode_kind(value: Any) -> TransactionKind | None:
    if not isinstance(value, str):
        return None
    return _WIRE_TO_KIND.get(value.strip().upper())


def _decode_amount(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str, Decimal)):
        return None
    try:
        amount = coerce_decimal(value)
    except InvalidOperation:
        return None
    if not is_storable_amount(amount):
        return None
    return amount


__all__ = ["encode_transaction", "decode_transaction", "decode_children"]
