"""Composition root for wiring infrastructure adapters."""

from finance_tracker.application.ports.auth_provider import AuthProviderPort
from finance_tracker.application.ports.database import DatabaseEnginePort
from finance_tracker.application.ports.transaction_store import (
    TransactionStorePort,
)
from finance_tracker.application.use_cases.app_session import AppSession
from finance_tracker.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from finance_tracker.infrastructure.firebase_auth_provider import (
    FirebaseAuthProvider,
)
from finance_tracker.infrastructure.firebase_transaction_store import (
    FirebaseTransactionStore,
    init_firebase_app,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.infrastructure.settings import (
    SUPPORTED_BACKENDS,
    FinanceSettings,
)
from finance_tracker.infrastructure.sqlalchemy_auth_provider import (
    SqlAlchemyAuthProvider,
)
from finance_tracker.infrastructure.sqlalchemy_transaction_store import (
    SqlAlchemyTransactionStore,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def _require_firebase(settings: FinanceSettings) -> None:
    if settings.firebase_credentials is None:
        raise RuntimeError(
            "Firebase backend requires a FIREBASE_CREDENTIALS value."
        )
    if not settings.firebase_database_url:
        raise RuntimeError(
            "Firebase backend requires a FIREBASE_DATABASE_URL value."
        )


def _check_backend(settings: FinanceSettings) -> None:
    if settings.backend not in SUPPORTED_BACKENDS:
        raise ValueError(
            "Unsupported finance backend: "
            f"{settings.backend}. Expected one of "
            f"{', '.join(SUPPORTED_BACKENDS)}."
        )


def build_transaction_store(
    settings: FinanceSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> TransactionStorePort:
    """Return the configured transaction store."""
    resolved = settings or FinanceSettings.from_env()
    _check_backend(resolved)
    if resolved.backend == "firebase":
        _require_firebase(resolved)
        app = init_firebase_app(
            resolved.firebase_credentials,
            resolved.firebase_database_url,
        )
        return FirebaseTransactionStore(app=app, logger=get_app_logger())
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyTransactionStore(resolved_db, logger=get_app_logger())


def build_auth_provider(
    settings: FinanceSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> AuthProviderPort:
    """Return the configured authentication provider."""
    resolved = settings or FinanceSettings.from_env()
    _check_backend(resolved)
    if resolved.backend == "firebase":
        if not resolved.firebase_web_api_key:
            raise RuntimeError(
                "Firebase backend requires a FIREBASE_WEB_API_KEY value."
            )
        return FirebaseAuthProvider(
            resolved.firebase_web_api_key,
            logger=get_app_logger(),
        )
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyAuthProvider(resolved_db, logger=get_app_logger())


def build_app_session(
    settings: FinanceSettings | None = None,
) -> AppSession:
    """Return an unstarted AppSession wired from settings."""
    resolved = settings or FinanceSettings.from_env()
    db_port = (
        build_database_adapter() if resolved.backend == "sqlalchemy" else None
    )
    return AppSession(
        auth_provider=build_auth_provider(resolved, db_port=db_port),
        transaction_store=build_transaction_store(resolved, db_port=db_port),
        logger=get_app_logger(),
        currency_symbol=resolved.currency_symbol,
        recent_limit=resolved.recent_limit,
    )


__all__ = [
    "build_database_adapter",
    "build_transaction_store",
    "build_auth_provider",
    "build_app_session",
]
