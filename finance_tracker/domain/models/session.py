"""Session states driven by the authentication provider."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Anonymous:
    """No user is signed in."""


@dataclass(frozen=True)
class Authenticated:
    """A user is signed in."""

    user_id: str


Session = Union[Anonymous, Authenticated]

ANONYMOUS = Anonymous()


def session_for(user_id: str | None) -> Session:
    """Map a provider user id (or None) to a session state."""
    if user_id:
        return Authenticated(user_id=user_id)
    return ANONYMOUS


__all__ = ["Anonymous", "Authenticated", "Session", "ANONYMOUS", "session_for"]
