"""Use case keeping the local transaction list in sync with the store.

Each snapshot delivered by the store replaces the whole local list:

* every child is decoded; malformed children are dropped silently;
* the decoded list is reversed so the newest transaction comes first;
* the result is published as a ``SnapshotReceived`` event.

Subscription failures are published as ``SubscriptionFailed`` and never
raised to the caller.
"""

from collections.abc import Callable

from finance_tracker.application.ports.transaction_store import (
    StoreSnapshot,
    SubscriptionHandle,
    TransactionStorePort,
)
from finance_tracker.domain.models import (
    AppEvent,
    SnapshotReceived,
    SubscriptionFailed,
)
from finance_tracker.domain.services.codec import decode_children
from finance_tracker.infrastructure.logging.logger import get_app_logger


class SyncTransactionsUseCase:
    """Hold at most one store subscription and republish its snapshots."""

    def __init__(
        self,
        transaction_store: TransactionStorePort,
        publish: Callable[[AppEvent], object],
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            transaction_store: Port giving access to the user's subtree.
            publish: Callback receiving snapshot and failure events.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._store = transaction_store
        self._publish = publish
        self._logger = logger or get_app_logger()
        self._handle: SubscriptionHandle | None = None
        self._user_id: str | None = None
        self._generation = 0

    @property
    def active_user_id(self) -> str | None:
        return self._user_id

    def start(self, user_id: str) -> None:
        """Subscribe to ``user_id``'s transactions.

        Any existing subscription is released first.

        Args:
            user_id: Identifier of the signed-in user.
        """
        self.stop()
        self._generation += 1
        generation = self._generation
        self._user_id = user_id

        def _on_snapshot(snapshot: StoreSnapshot) -> None:
            self._handle_snapshot(generation, user_id, snapshot)

        def _on_error(exc: Exception) -> None:
            self._handle_error(generation, user_id, exc)

        try:
            handle = self._store.subscribe(user_id, _on_snapshot, _on_error)
        except Exception as exc:
            self._handle_error(generation, user_id, exc)
            self.stop()
            return

        if generation != self._generation:
            # stop() ran while the store was delivering the first snapshot.
            self._close_handle(handle)
            return
        self._handle = handle
        self._logger.info(f"Subscribed to transactions of user {user_id}")

    def stop(self) -> None:
        """Release the current subscription, if any."""
        handle, self._handle = self._handle, None
        user_id, self._user_id = self._user_id, None
        self._generation += 1
        if handle is None:
            return
        self._close_handle(handle)
        self._logger.info(f"Released transactions subscription of user {user_id}")

    def __enter__(self) -> "SyncTransactionsUseCase":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _handle_snapshot(
        self,
        generation: int,
        user_id: str,
        snapshot: StoreSnapshot,
    ) -> None:
        if generation != self._generation:
            self._logger.debug(
                f"Ignored snapshot from released subscription of {user_id}"
            )
            return
        transactions, dropped = decode_children(snapshot.children)
        if dropped:
            self._logger.debug(
                f"Dropped {dropped} malformed transaction records for {user_id}"
            )
        transactions.reverse()
        self._publish(
            SnapshotReceived(user_id=user_id, transactions=tuple(transactions))
        )
        self._logger.info(
            f"Synchronized {len(transactions)} transactions for user {user_id}"
        )

    def _handle_error(
        self,
        generation: int,
        user_id: str,
        exc: Exception,
    ) -> None:
        if generation != self._generation:
            return
        self._logger.warning(
            f"Transactions subscription failed for user {user_id}: {exc}"
        )
        self._publish(SubscriptionFailed(user_id=user_id, message=str(exc)))

    def _close_handle(self, handle: SubscriptionHandle) -> None:
        try:
            handle.close()
        except Exception as exc:
            self._logger.warning(f"Failed to close subscription cleanly: {exc}")


__all__ = ["SyncTransactionsUseCase"]
