"""Display formatting for amounts."""

from decimal import Decimal

from finance_tracker.domain.models import Transaction
from finance_tracker.utils.decimal_utils import round_currency

DEFAULT_CURRENCY_SYMBOL = "R$"


def format_money(
    value: Decimal,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    """Format an amount rounded half-up to two decimals."""
    return f"{currency_symbol} {round_currency(value):.2f}"


def format_signed_amount(
    transaction: Transaction,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    """Format a transaction amount with the sign derived from its kind."""
    sign = "-" if transaction.is_expense else "+"
    return f"{sign} {format_money(transaction.amount, currency_symbol)}"


__all__ = ["DEFAULT_CURRENCY_SYMBOL", "format_money", "format_signed_amount"]
