"""Tests for the SQLAlchemy-backed authentication provider."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from finance_tracker.application.ports.auth_provider import AuthenticationError
from finance_tracker.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from finance_tracker.infrastructure.sqlalchemy_auth_provider import (
    SqlAlchemyAuthProvider,
)


@pytest.fixture
def provider():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield SqlAlchemyAuthProvider(
        SqlAlchemyDatabaseEngineAdapter(engine),
        logger=MagicMock(),
        iterations=10,
    )
    engine.dispose()


def test_sign_up_signs_the_user_in(provider) -> None:
    events = []
    provider.add_listener(events.append)

    user_id = provider.sign_up("Ana@Example.com", "secret1")

    assert provider.current_user_id() == user_id
    assert events == [user_id]


def test_sign_in_after_sign_out(provider) -> None:
    user_id = provider.sign_up("ana@example.com", "secret1")
    provider.sign_out()

    assert provider.current_user_id() is None
    assert provider.sign_in(" ANA@example.com ", "secret1") == user_id


def test_wrong_password_is_rejected(provider) -> None:
    provider.sign_up("ana@example.com", "secret1")
    provider.sign_out()

    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        provider.sign_in("ana@example.com", "wrong!!")
    assert provider.current_user_id() is None


def test_unknown_email_is_rejected(provider) -> None:
    with pytest.raises(AuthenticationError):
        provider.sign_in("nobody@example.com", "secret1")


@pytest.mark.parametrize(
    "email, password, message",
    [
        ("not-an-email", "secret1", "badly formatted"),
        ("ana@example.com", "123", "at least 6"),
    ],
)
def test_sign_up_validation(provider, email, password, message) -> None:
    with pytest.raises(AuthenticationError, match=message):
        provider.sign_up(email, password)


def test_duplicate_email_is_rejected(provider) -> None:
    provider.sign_up("ana@example.com", "secret1")

    with pytest.raises(AuthenticationError, match="already in use"):
        provider.sign_up("ana@example.com", "secret2")


def test_listeners_only_fire_on_change(provider) -> None:
    events = []
    provider.add_listener(events.append)
    provider.sign_out()

    user_id = provider.sign_up("ana@example.com", "secret1")
    provider.remove_listener(events.append)
    provider.sign_out()

    assert events == [user_id]


def test_database_failure_becomes_authentication_error() -> None:
    engine = MagicMock()
    engine.begin.side_effect = OperationalError("CREATE", {}, Exception("down"))
    provider = SqlAlchemyAuthProvider(
        SqlAlchemyDatabaseEngineAdapter(engine),
        logger=MagicMock(),
        iterations=10,
    )

    with pytest.raises(AuthenticationError, match="unavailable"):
        provider.sign_in("ana@example.com", "secret1")
