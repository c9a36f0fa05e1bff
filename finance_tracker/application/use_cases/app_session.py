"""Composition of the session gate, synchronizer and writer.

State flows in one direction: every event (session change, snapshot,
subscription failure, navigation) goes through ``AppStateStore.dispatch``,
which applies the pure reducer and hands the new immutable state to the
observers.
"""

import threading
from collections.abc import Callable
from datetime import date

from finance_tracker.application.ports.auth_provider import AuthProviderPort
from finance_tracker.application.ports.transaction_store import (
    TransactionStorePort,
)
from finance_tracker.application.use_cases.add_transaction import (
    AddTransactionResult,
    AddTransactionUseCase,
)
from finance_tracker.application.use_cases.authenticate import (
    AuthenticateUseCase,
    AuthResult,
)
from finance_tracker.application.use_cases.session_gate import SessionGate
from finance_tracker.application.use_cases.sync_transactions import (
    SyncTransactionsUseCase,
)
from finance_tracker.domain.models import (
    AddFormToggled,
    AppEvent,
    AppState,
    Authenticated,
    DashboardView,
    HistoryView,
    Screen,
    ScreenSelected,
    Session,
    SessionChanged,
    TransactionKind,
)
from finance_tracker.domain.services.aggregation import DEFAULT_RECENT_LIMIT
from finance_tracker.domain.services.formatting import DEFAULT_CURRENCY_SYMBOL
from finance_tracker.domain.services.state_reducer import reduce_state
from finance_tracker.domain.services.views import (
    build_dashboard_view,
    build_history_view,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger

NOT_SIGNED_IN_MESSAGE = "Sign in to add transactions."

StateObserver = Callable[[AppState], None]


class AppStateStore:
    """Hold the current AppState and notify observers of replacements."""

    def __init__(self, initial: AppState | None = None) -> None:
        self._state = initial or AppState()
        self._observers: list[StateObserver] = []
        self._lock = threading.RLock()

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, event: AppEvent) -> AppState:
        """Apply ``event`` and notify observers when the state changed.

        Observers run under the lock and always receive the latest state.
        """
        with self._lock:
            previous = self._state
            self._state = reduce_state(previous, event)
            if self._state is not previous:
                for observer in list(self._observers):
                    observer(self._state)
            return self._state

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """Register an observer; the returned callable unregisters it."""
        with self._lock:
            self._observers.append(observer)

        def _unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return _unsubscribe


class AppSession:
    """Everything one signed-in (or signed-out) user interacts with."""

    def __init__(
        self,
        auth_provider: AuthProviderPort,
        transaction_store: TransactionStorePort,
        logger=None,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
        clock: Callable[[], date] | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            auth_provider: Authentication provider port.
            transaction_store: Remote transaction store port.
            logger: Optional logger compatible with logging.Logger-like API.
            currency_symbol: Symbol used in amount labels.
            recent_limit: Number of transactions on the dashboard list.
            clock: Optional callable returning today's date.
        """
        self._logger = logger or get_app_logger()
        self._currency_symbol = currency_symbol
        self._recent_limit = recent_limit
        self._state_store = AppStateStore()
        self._synchronizer = SyncTransactionsUseCase(
            transaction_store,
            publish=self._state_store.dispatch,
            logger=self._logger,
        )
        self._writer = AddTransactionUseCase(
            transaction_store,
            logger=self._logger,
            clock=clock,
        )
        self._authenticator = AuthenticateUseCase(
            auth_provider,
            logger=self._logger,
        )
        self._gate = SessionGate(
            auth_provider,
            on_change=self._on_session_change,
            logger=self._logger,
        )

    @property
    def state(self) -> AppState:
        return self._state_store.state

    @property
    def currency_symbol(self) -> str:
        return self._currency_symbol

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        return self._state_store.subscribe(observer)

    def start(self) -> AppState:
        """Attach to the auth provider and apply the startup session."""
        self._gate.start()
        return self.state

    def close(self) -> None:
        """Detach from the provider and release the subscription."""
        try:
            self._gate.close()
        finally:
            self._synchronizer.stop()

    def sign_in(self, email: str, password: str) -> AuthResult:
        return self._authenticator.sign_in(email, password)

    def sign_up(self, email: str, password: str) -> AuthResult:
        return self._authenticator.sign_up(email, password)

    def sign_out(self) -> None:
        self._authenticator.sign_out()

    def select_screen(self, screen: Screen) -> AppState:
        return self._state_store.dispatch(ScreenSelected(screen=screen))

    def open_add_form(self) -> AppState:
        return self._state_store.dispatch(AddFormToggled(open=True))

    def close_add_form(self) -> AppState:
        return self._state_store.dispatch(AddFormToggled(open=False))

    def submit_transaction(
        self,
        description: str,
        amount: str,
        kind: TransactionKind,
        category: str,
    ) -> AddTransactionResult:
        """Submit the add-transaction form for the signed-in user.

        The form closes as soon as the write is handed to the store.
        """
        session = self.state.session
        if not isinstance(session, Authenticated):
            return AddTransactionResult(
                transaction=None,
                errors=(NOT_SIGNED_IN_MESSAGE,),
            )
        result = self._writer.execute(
            session.user_id,
            description,
            amount,
            kind,
            category,
        )
        if result.created:
            self.close_add_form()
        return result

    def dashboard_view(self) -> DashboardView:
        return build_dashboard_view(
            self.state.transactions,
            currency_symbol=self._currency_symbol,
            recent_limit=self._recent_limit,
        )

    def history_view(self) -> HistoryView:
        return build_history_view(
            self.state.transactions,
            currency_symbol=self._currency_symbol,
        )

    def _on_session_change(self, session: Session) -> None:
        self._synchronizer.stop()
        self._state_store.dispatch(SessionChanged(session=session))
        if isinstance(session, Authenticated):
            self._synchronizer.start(session.user_id)


__all__ = ["AppStateStore", "AppSession", "NOT_SIGNED_IN_MESSAGE"]
