"""Database infrastructure for the local finance store.

This module exposes concrete helpers to create and reuse the SQLAlchemy engine
connected to the finance database. It belongs to the infrastructure layer
because it deals with external systems.
"""

import os
from pathlib import Path
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import QueuePool

from finance_tracker.application.ports.database import DatabaseEnginePort
from finance_tracker.utils.utils import get_project_root


def _get_database_url() -> str:
    """Read FINANCE_DB_URL, falling back to a SQLite file under data/.

    Returns:
        str: Database URL to connect to.
    """
    dotenv.load_dotenv()
    value = os.getenv("FINANCE_DB_URL")
    if value:
        return value
    return f"sqlite:///{get_project_root() / 'data' / 'finance.db'}"


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool and
        health checks enabled.
    """
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite" and url.database:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_finance_engine: Optional[Engine] = None


def get_finance_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the finance database.

    Returns:
        Engine: Lazily initialized engine.
    """
    global _finance_engine
    if _finance_engine is None:
        _finance_engine = _create_engine(_get_database_url())
    return _finance_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    When no engine is injected, the module-level singleton is used.
    """

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine

    def get_finance_engine(self) -> Engine:
        """Get the engine for the finance database.

        Returns:
            Engine: SQLAlchemy engine connected to the local store.
        """
        if self._engine is not None:
            return self._engine
        return get_finance_engine()


__all__ = [
    "get_finance_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
