"""Immutable application state and the events that produce new states."""

from dataclasses import dataclass, field

from .screens import Screen
from .session import ANONYMOUS, Session
from .transactions import Transaction


@dataclass(frozen=True)
class AppState:
    """Snapshot of everything the UI renders.

    Attributes:
        session: Current session state.
        screen: Selected navigation target.
        transactions: Newest-first transactions from the last snapshot.
        is_loading: True until the first snapshot (or failure) arrives.
        add_form_open: Whether the add-transaction form is shown.
    """

    session: Session = ANONYMOUS
    screen: Screen = Screen.DASHBOARD
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)
    is_loading: bool = False
    add_form_open: bool = False


@dataclass(frozen=True)
class SessionChanged:
    session: Session


@dataclass(frozen=True)
class SnapshotReceived:
    user_id: str
    transactions: tuple[Transaction, ...]


@dataclass(frozen=True)
class SubscriptionFailed:
    user_id: str
    message: str = ""


@dataclass(frozen=True)
class ScreenSelected:
    screen: Screen


@dataclass(frozen=True)
class AddFormToggled:
    open: bool


AppEvent = (
    SessionChanged
    | SnapshotReceived
    | SubscriptionFailed
    | ScreenSelected
    | AddFormToggled
)


__all__ = [
    "AppState",
    "AppEvent",
    "SessionChanged",
    "SnapshotReceived",
    "SubscriptionFailed",
    "ScreenSelected",
    "AddFormToggled",
]
