"""Database port for the local SQL backend.

Infrastructure implementations provide concrete adapters that satisfy this
protocol.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the local finance database."""

    def get_finance_engine(self) -> Engine:
        """Get the engine for the finance database.

        Returns:
            Engine: SQLAlchemy engine connected to the local store.
        """


__all__ = ["DatabaseEnginePort"]
