"""Email/password authentication through the Identity Toolkit REST API."""

import threading

import requests

from finance_tracker.application.ports.auth_provider import (
    AuthenticationError,
    AuthProviderPort,
    SessionListener,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger

IDENTITY_TOOLKIT_URL = (
    "https://identitytoolkit.googleapis.com/v1/accounts:{action}?key={api_key}"
)

_ERROR_MESSAGES = {
    "EMAIL_NOT_FOUND": "Invalid email or password.",
    "INVALID_PASSWORD": "Invalid email or password.",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password.",
    "INVALID_EMAIL": "The email address is badly formatted.",
    "EMAIL_EXISTS": "The email address is already in use by another account.",
    "USER_DISABLED": "The user account has been disabled.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Try again later.",
}


class FirebaseAuthProvider(AuthProviderPort):
    """AuthProviderPort calling the Firebase Auth REST endpoints."""

    def __init__(
        self,
        api_key: str,
        logger=None,
        http: requests.Session | None = None,
        timeout: float = 20,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: Firebase web API key.
            logger: Optional logger compatible with logging.Logger-like API.
            http: Optional requests session.
            timeout: Request timeout in seconds.
        """
        self._api_key = api_key
        self._logger = logger or get_app_logger()
        self._http = http or requests.Session()
        self._timeout = timeout
        self._current_user_id: str | None = None
        self._id_token: str | None = None
        self._listeners: list[SessionListener] = []
        self._lock = threading.RLock()

    def current_user_id(self) -> str | None:
        return self._current_user_id

    def sign_in(self, email: str, password: str) -> str:
        data = self._call("signInWithPassword", email, password, "Login failed")
        return self._accept(data)

    def sign_up(self, email: str, password: str) -> str:
        data = self._call("signUp", email, password, "Sign up failed")
        return self._accept(data)

    def sign_out(self) -> None:
        self._id_token = None
        self._set_current_user(None)

    def add_listener(self, listener: SessionListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _call(
        self,
        action: str,
        email: str,
        password: str,
        default_message: str,
    ) -> dict:
        url = IDENTITY_TOOLKIT_URL.format(action=action, api_key=self._api_key)
        payload = {
            "email": email,
            "password": password,
            "returnSecureToken": True,
        }
        try:
            response = self._http.post(url, json=payload, timeout=self._timeout)
        except requests.RequestException as exc:
            self._logger.warning(f"Auth request {action} failed: {exc}")
            raise AuthenticationError(
                "Network error, check your connection."
            ) from exc
        if response.status_code != 200:
            raise AuthenticationError(
                _error_message(response, default_message)
            )
        return response.json()

    def _accept(self, data: dict) -> str:
        user_id = data["localId"]
        self._id_token = data.get("idToken")
        self._set_current_user(user_id)
        return user_id

    def _set_current_user(self, user_id: str | None) -> None:
        with self._lock:
            if user_id == self._current_user_id:
                return
            self._current_user_id = user_id
            listeners = list(self._listeners)
        for listener in listeners:
            listener(user_id)


def _error_message(response: requests.Response, default_message: str) -> str:
    try:
        code = response.json().get("error", {}).get("message", "")
    except ValueError:
        return default_message
    if not code:
        return default_message
    if code in _ERROR_MESSAGES:
        return _ERROR_MESSAGES[code]
    if " : " in code:
        return code.split(" : ", 1)[1]
    return code


__all__ = ["FirebaseAuthProvider", "IDENTITY_TOOLKIT_URL"]
