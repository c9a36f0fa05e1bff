"""Map authentication notifications to Anonymous/Authenticated sessions."""

from collections.abc import Callable

from finance_tracker.application.ports.auth_provider import AuthProviderPort
from finance_tracker.domain.models import ANONYMOUS, Session, session_for
from finance_tracker.infrastructure.logging.logger import get_app_logger


class SessionGate:
    """Track the current session and report each distinct transition."""

    def __init__(
        self,
        auth_provider: AuthProviderPort,
        on_change: Callable[[Session], None],
        logger=None,
    ) -> None:
        """Initialize the gate.

        Args:
            auth_provider: Provider whose notifications drive the session.
            on_change: Callback invoked with every new session state.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._auth = auth_provider
        self._on_change = on_change
        self._logger = logger or get_app_logger()
        self._session: Session = ANONYMOUS
        self._listening = False

    @property
    def session(self) -> Session:
        return self._session

    def start(self) -> Session:
        """Attach to the provider and report the startup session."""
        if not self._listening:
            self._auth.add_listener(self._handle_user)
            self._listening = True
        self._apply(session_for(self._auth.current_user_id()), force=True)
        return self._session

    def close(self) -> None:
        """Detach from the provider."""
        if self._listening:
            self._auth.remove_listener(self._handle_user)
            self._listening = False

    def _handle_user(self, user_id: str | None) -> None:
        self._apply(session_for(user_id))

    def _apply(self, session: Session, force: bool = False) -> None:
        if session == self._session and not force:
            return
        previous, self._session = self._session, session
        self._logger.info(f"Session changed: {previous} -> {session}")
        self._on_change(session)


__all__ = ["SessionGate"]
