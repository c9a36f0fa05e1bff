"""Validation of the add-transaction form."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from finance_tracker.domain.models import TransactionDraft, TransactionKind
from finance_tracker.utils.decimal_utils import is_storable_amount


@dataclass(frozen=True)
class FormValidation:
    """Outcome of validating the add-transaction form.

    Attributes:
        draft: Validated draft, or None when any field is invalid.
        errors: Human-readable messages for invalid fields.
    """

    draft: TransactionDraft | None
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return self.draft is not None


def parse_amount(raw_amount: str | None) -> Decimal | None:
    """Parse a user-entered amount.

    A comma is accepted as decimal separator and normalized to a period.

    Args:
        raw_amount: Text typed in the amount field.

    Returns:
        Decimal | None: Positive amount no larger than ``MAX_AMOUNT``, or
        None when invalid.
    """
    if raw_amount is None:
        return None
    candidate = raw_amount.strip().replace(",", ".")
    if not candidate:
        return None
    try:
        amount = Decimal(candidate)
    except InvalidOperation:
        return None
    if not is_storable_amount(amount):
        return None
    return amount


def validate_transaction_form(
    description: str | None,
    raw_amount: str | None,
    kind: TransactionKind,
    category: str | None,
) -> FormValidation:
    """Validate form fields and build a draft when all are valid."""
    errors: list[str] = []
    if not description or not description.strip():
        errors.append("Description is required.")
    amount = parse_amount(raw_amount)
    if amount is None:
        errors.append("Amount must be a positive number.")
    if not category or not category.strip():
        errors.append("Category is required.")
    if errors:
        return FormValidation(draft=None, errors=tuple(errors))
    return FormValidation(
        draft=TransactionDraft(
            description=description,
            amount=amount,
            kind=TransactionKind(kind),
            category=category,
        )
    )


__all__ = ["FormValidation", "parse_amount", "validate_transaction_form"]
