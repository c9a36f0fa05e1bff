"""Local email/password authentication backed by SQLAlchemy."""

import hashlib
import hmac
import secrets
import threading
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from finance_tracker.application.ports.auth_provider import (
    AuthenticationError,
    AuthProviderPort,
    SessionListener,
)
from finance_tracker.application.ports.database import DatabaseEnginePort
from finance_tracker.infrastructure.logging.logger import get_app_logger

MIN_PASSWORD_LENGTH = 6
DEFAULT_ITERATIONS = 200_000

CREATE_AUTH_USERS_SQL = """
CREATE TABLE IF NOT EXISTS auth_users (
    user_id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    salt TEXT NOT NULL
)
"""

SELECT_USER_BY_EMAIL_SQL = text(
    """
    SELECT user_id, email, password_hash, salt
    FROM auth_users
    WHERE email = :email
    """
)

INSERT_USER_SQL = text(
    """
    INSERT INTO auth_users (user_id, email, password_hash, salt)
    VALUES (:user_id, :email, :password_hash, :salt)
    """
)


class SqlAlchemyAuthProvider(AuthProviderPort):
    """AuthProviderPort keeping users and PBKDF2 hashes in the local database.

    The signed-in user lives in memory only; nothing is persisted between
    runs.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        logger=None,
        iterations: int = DEFAULT_ITERATIONS,
    ) -> None:
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._iterations = iterations
        self._current_user_id: str | None = None
        self._listeners: list[SessionListener] = []
        self._lock = threading.RLock()
        self._prepared = False

    def current_user_id(self) -> str | None:
        return self._current_user_id

    def sign_in(self, email: str, password: str) -> str:
        row = self._find_user(_normalize_email(email))
        if row is None or not hmac.compare_digest(
            row.password_hash,
            self._hash(password, row.salt),
        ):
            raise AuthenticationError("Invalid email or password.")
        self._set_current_user(row.user_id)
        return row.user_id

    def sign_up(self, email: str, password: str) -> str:
        normalized = _normalize_email(email)
        if "@" not in normalized or normalized.startswith("@"):
            raise AuthenticationError("The email address is badly formatted.")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthenticationError(
                f"The password must be at least {MIN_PASSWORD_LENGTH} characters."
            )
        if self._find_user(normalized) is not None:
            raise AuthenticationError(
                "The email address is already in use by another account."
            )
        user_id = uuid4().hex
        salt = secrets.token_hex(16)
        engine = self._db_port.get_finance_engine()
        try:
            with engine.begin() as conn:
                conn.execute(
                    INSERT_USER_SQL,
                    {
                        "user_id": user_id,
                        "email": normalized,
                        "password_hash": self._hash(password, salt),
                        "salt": salt,
                    },
                )
        except SQLAlchemyError as exc:
            self._logger.error(f"Failed to create account: {exc}")
            raise AuthenticationError("Unable to create the account.") from exc
        self._logger.info(f"Created local account {user_id}")
        self._set_current_user(user_id)
        return user_id

    def sign_out(self) -> None:
        self._set_current_user(None)

    def add_listener(self, listener: SessionListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _find_user(self, email: str):
        try:
            self._prepare()
            engine = self._db_port.get_finance_engine()
            with engine.connect() as conn:
                return conn.execute(
                    SELECT_USER_BY_EMAIL_SQL,
                    {"email": email},
                ).first()
        except SQLAlchemyError as exc:
            self._logger.error(f"Failed to read accounts: {exc}")
            raise AuthenticationError("Authentication service unavailable.") from exc

    def _prepare(self) -> None:
        if self._prepared:
            return
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_AUTH_USERS_SQL)
        self._prepared = True

    def _hash(self, password: str, salt: str) -> str:
        return hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            bytes.fromhex(salt),
            self._iterations,
        ).hex()

    def _set_current_user(self, user_id: str | None) -> None:
        with self._lock:
            if user_id == self._current_user_id:
                return
            self._current_user_id = user_id
            listeners = list(self._listeners)
        for listener in listeners:
            listener(user_id)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


__all__ = ["SqlAlchemyAuthProvider", "MIN_PASSWORD_LENGTH"]
