"""Domain services package."""

from .aggregation import (
    DEFAULT_RECENT_LIMIT,
    balance,
    recent,
    summarize_transactions,
    total_expense,
    total_income,
)
from .codec import decode_children, decode_transaction, encode_transaction
from .formatting import (
    DEFAULT_CURRENCY_SYMBOL,
    format_money,
    format_signed_amount,
)
from .state_reducer import reduce_state
from .validation import FormValidation, parse_amount, validate_transaction_form
from .views import (
    EMPTY_HISTORY_MESSAGE,
    build_dashboard_view,
    build_history_view,
    build_transaction_row,
)

__all__ = [
    "DEFAULT_CURRENCY_SYMBOL",
    "DEFAULT_RECENT_LIMIT",
    "EMPTY_HISTORY_MESSAGE",
    "FormValidation",
    "balance",
    "build_dashboard_view",
    "build_history_view",
    "build_transaction_row",
    "decode_children",
    "decode_transaction",
    "encode_transaction",
    "format_money",
    "format_signed_amount",
    "parse_amount",
    "recent",
    "reduce_state",
    "summarize_transactions",
    "total_expense",
    "total_income",
    "validate_transaction_form",
]
