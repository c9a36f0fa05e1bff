"""Application use cases package."""

from .add_transaction import AddTransactionResult, AddTransactionUseCase
from .app_session import AppSession, AppStateStore
from .authenticate import AuthenticateUseCase, AuthMode, AuthResult
from .session_gate import SessionGate
from .sync_transactions import SyncTransactionsUseCase

__all__ = [
    "AddTransactionResult",
    "AddTransactionUseCase",
    "AppSession",
    "AppStateStore",
    "AuthenticateUseCase",
    "AuthMode",
    "AuthResult",
    "SessionGate",
    "SyncTransactionsUseCase",
]
