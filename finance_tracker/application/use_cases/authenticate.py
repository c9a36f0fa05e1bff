"""Use case for email/password sign-in, sign-up and sign-out."""

from dataclasses import dataclass
from enum import Enum

from finance_tracker.application.ports.auth_provider import (
    AuthenticationError,
    AuthProviderPort,
)
from finance_tracker.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)

MISSING_FIELDS_MESSAGE = "Fill in all fields"


class AuthMode(Enum):
    SIGN_IN = "sign_in"
    SIGN_UP = "sign_up"


@dataclass(frozen=True)
class AuthResult:
    """Outcome shown to the user as a transient notice."""

    success: bool
    user_id: str | None = None
    message: str = ""


class AuthenticateUseCase:
    """Forward credentials to the provider and turn failures into results.

    Session changes themselves arrive through the provider's listeners, not
    through the returned result.
    """

    def __init__(
        self,
        auth_provider: AuthProviderPort,
        logger=None,
        usage_logger=None,
    ) -> None:
        self._auth = auth_provider
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def execute(self, mode: AuthMode, email: str, password: str) -> AuthResult:
        """Run a sign-in or sign-up attempt.

        Args:
            mode: Whether to sign in or create an account.
            email: Email typed by the user.
            password: Password typed by the user.

        Returns:
            AuthResult: Success with the user id, or a failure message.
        """
        if not email or not email.strip() or not password or not password.strip():
            return AuthResult(success=False, message=MISSING_FIELDS_MESSAGE)

        email = email.strip()
        try:
            if mode is AuthMode.SIGN_IN:
                user_id = self._auth.sign_in(email, password)
            else:
                user_id = self._auth.sign_up(email, password)
        except AuthenticationError as exc:
            prefix = (
                "Error" if mode is AuthMode.SIGN_IN else "Error creating account"
            )
            self._logger.warning(f"{mode.value} failed: {exc}")
            return AuthResult(success=False, message=f"{prefix}: {exc}")

        self._usage_logger.info(f"{mode.value} succeeded for user {user_id}")
        return AuthResult(success=True, user_id=user_id)

    def sign_in(self, email: str, password: str) -> AuthResult:
        return self.execute(AuthMode.SIGN_IN, email, password)

    def sign_up(self, email: str, password: str) -> AuthResult:
        return self.execute(AuthMode.SIGN_UP, email, password)

    def sign_out(self) -> None:
        user_id = self._auth.current_user_id()
        self._auth.sign_out()
        self._usage_logger.info(f"sign_out for user {user_id}")


__all__ = [
    "AuthMode",
    "AuthResult",
    "AuthenticateUseCase",
    "MISSING_FIELDS_MESSAGE",
]
