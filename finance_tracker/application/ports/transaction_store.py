"""Port for the remote transaction store."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class StoreSnapshot:
    """Full point-in-time copy of the children at a subscribed path.

    Attributes:
        children: ``(key, value)`` pairs in store insertion order.
    """

    children: tuple[tuple[str, Any], ...] = field(default_factory=tuple)


class SubscriptionHandle(Protocol):
    """Handle returned by a subscription; closing it releases the listener."""

    def close(self) -> None:
        """Stop receiving notifications."""


SnapshotCallback = Callable[[StoreSnapshot], None]
ErrorCallback = Callable[[Exception], None]


class TransactionStorePort(Protocol):
    """Port exposing the ``users/{uid}/transactions`` subtree."""

    def generate_key(self, user_id: str) -> str:
        """Return a new globally unique, chronologically ordered key."""

    def write(
        self,
        user_id: str,
        key: str,
        record: Mapping[str, Any],
    ) -> None:
        """Schedule a durable write of ``record`` at ``key``.

        Implementations return without waiting for acknowledgement when the
        backend is remote.
        """

    def subscribe(
        self,
        user_id: str,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> SubscriptionHandle:
        """Deliver a snapshot now and after every change of the subtree."""


def transactions_path(user_id: str) -> str:
    """Return the store path of a user's transactions."""
    return f"users/{user_id}/transactions"


__all__ = [
    "StoreSnapshot",
    "SubscriptionHandle",
    "SnapshotCallback",
    "ErrorCallback",
    "TransactionStorePort",
    "transactions_path",
]
