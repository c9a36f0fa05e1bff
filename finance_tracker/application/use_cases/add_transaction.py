"""Use case recording a new transaction from the add-transaction form."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from finance_tracker.application.ports.transaction_store import (
    TransactionStorePort,
)
from finance_tracker.domain.models import Transaction, TransactionKind
from finance_tracker.domain.services.codec import encode_transaction
from finance_tracker.domain.services.validation import (
    validate_transaction_form,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger

DATE_FORMAT = "%d/%m/%Y"


@dataclass(frozen=True)
class AddTransactionResult:
    """Result of a form submission.

    Attributes:
        transaction: Record handed to the store, or None when rejected.
        errors: Validation messages when the form was rejected.
    """

    transaction: Transaction | None
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def created(self) -> bool:
        return self.transaction is not None


class AddTransactionUseCase:
    """Validate form input and append a new record to the store.

    The write is fire-and-forget: its outcome is only observed through the
    next snapshot of the synchronized subtree.
    """

    def __init__(
        self,
        transaction_store: TransactionStorePort,
        logger=None,
        clock: Callable[[], date] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            transaction_store: Port used to generate keys and write records.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Optional callable returning today's date.
        """
        self._store = transaction_store
        self._logger = logger or get_app_logger()
        self._clock = clock or date.today

    def execute(
        self,
        user_id: str,
        description: str,
        amount: str,
        kind: TransactionKind,
        category: str,
    ) -> AddTransactionResult:
        """Validate the form and write the record when valid.

        Args:
            user_id: Owner of the new transaction.
            description: Description field.
            amount: Amount text; comma or period as decimal separator.
            kind: Income or expense.
            category: Category field.

        Returns:
            AddTransactionResult: Created record or validation messages.
        """
        validation = validate_transaction_form(
            description,
            amount,
            kind,
            category,
        )
        if validation.draft is None:
            self._logger.info(
                f"Transaction form rejected: {'; '.join(validation.errors)}"
            )
            return AddTransactionResult(
                transaction=None,
                errors=validation.errors,
            )

        draft = validation.draft
        key = self._store.generate_key(user_id)
        transaction = Transaction(
            id=key,
            description=draft.description,
            amount=draft.amount,
            kind=draft.kind,
            date=self._clock().strftime(DATE_FORMAT),
            category=draft.category,
        )
        self._store.write(user_id, key, encode_transaction(transaction))
        self._logger.info(
            f"Submitted {transaction.kind.value.lower()} {key} "
            f"for user {user_id}"
        )
        return AddTransactionResult(transaction=transaction)


__all__ = ["AddTransactionUseCase", "AddTransactionResult", "DATE_FORMAT"]
