"""Application ports package."""

from .auth_provider import AuthenticationError, AuthProviderPort, SessionListener
from .database import DatabaseEnginePort
from .transaction_store import (
    ErrorCallback,
    SnapshotCallback,
    StoreSnapshot,
    SubscriptionHandle,
    TransactionStorePort,
    transactions_path,
)

__all__ = [
    "AuthenticationError",
    "AuthProviderPort",
    "SessionListener",
    "DatabaseEnginePort",
    "ErrorCallback",
    "SnapshotCallback",
    "StoreSnapshot",
    "SubscriptionHandle",
    "TransactionStorePort",
    "transactions_path",
]
