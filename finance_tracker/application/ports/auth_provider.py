"""Port for the email/password authentication provider."""

from collections.abc import Callable
from typing import Protocol


class AuthenticationError(RuntimeError):
    """Raised by providers with a human-readable failure message."""


SessionListener = Callable[[str | None], None]


class AuthProviderPort(Protocol):
    """Port exposing sign-in, sign-up and session notifications."""

    def current_user_id(self) -> str | None:
        """Return the signed-in user id, if any."""

    def sign_in(self, email: str, password: str) -> str:
        """Sign in and return the user id.

        Raises:
            AuthenticationError: When the credentials are rejected.
        """

    def sign_up(self, email: str, password: str) -> str:
        """Create an account, sign in and return the user id.

        Raises:
            AuthenticationError: When the account cannot be created.
        """

    def sign_out(self) -> None:
        """End the current session."""

    def add_listener(self, listener: SessionListener) -> None:
        """Register a callback receiving the user id (or None) on changes."""

    def remove_listener(self, listener: SessionListener) -> None:
        """Unregister a session callback."""


__all__ = ["AuthenticationError", "AuthProviderPort", "SessionListener"]
