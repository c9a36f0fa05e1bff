"""Domain models package."""

from .screens import MAIN_SCREENS, Screen
from .session import ANONYMOUS, Anonymous, Authenticated, Session, session_for
from .state import (
    AddFormToggled,
    AppEvent,
    AppState,
    ScreenSelected,
    SessionChanged,
    SnapshotReceived,
    SubscriptionFailed,
)
from .transactions import (
    Transaction,
    TransactionDraft,
    TransactionKind,
    TransactionTotals,
)
from .views import DashboardView, HistoryView, TransactionRow

__all__ = [
    "ANONYMOUS",
    "AddFormToggled",
    "Anonymous",
    "AppEvent",
    "AppState",
    "Authenticated",
    "DashboardView",
    "HistoryView",
    "MAIN_SCREENS",
    "Screen",
    "ScreenSelected",
    "Session",
    "SessionChanged",
    "SnapshotReceived",
    "SubscriptionFailed",
    "Transaction",
    "TransactionDraft",
    "TransactionKind",
    "TransactionRow",
    "TransactionTotals",
    "session_for",
]
