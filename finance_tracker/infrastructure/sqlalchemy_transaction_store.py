"""Local transaction store backed by SQLAlchemy.

Records are kept as JSON documents keyed by ``(path, node_key)`` so the local
backend behaves like the remote key-value store. Subscriptions are emulated in
process: subscribers receive the current snapshot immediately and a fresh one
after every write to their path.
"""

import json
import threading
from collections.abc import Mapping
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from finance_tracker.application.ports.database import DatabaseEnginePort
from finance_tracker.application.ports.transaction_store import (
    ErrorCallback,
    SnapshotCallback,
    StoreSnapshot,
    TransactionStorePort,
    transactions_path,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.utils.push_ids import generate_push_id

CREATE_STORE_NODES_SQL = """
CREATE TABLE IF NOT EXISTS store_nodes (
    path TEXT NOT NULL,
    node_key TEXT NOT NULL,
    payload TEXT NOT NULL,
    PRIMARY KEY (path, node_key)
)
"""

SELECT_CHILDREN_SQL = text(
    """
    SELECT node_key, payload
    FROM store_nodes
    WHERE path = :path
    ORDER BY node_key
    """
)

DELETE_NODE_SQL = text(
    """
    DELETE FROM store_nodes
    WHERE path = :path AND node_key = :node_key
    """
)

INSERT_NODE_SQL = text(
    """
    INSERT INTO store_nodes (path, node_key, payload)
    VALUES (:path, :node_key, :payload)
    """
)


class _LocalSubscription:
    """Handle for one in-process listener."""

    def __init__(
        self,
        store: "SqlAlchemyTransactionStore",
        path: str,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> None:
        self.path = path
        self.on_snapshot = on_snapshot
        self.on_error = on_error
        self._store = store
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._store._remove_subscription(self)


class SqlAlchemyTransactionStore(TransactionStorePort):
    """TransactionStorePort implementation over the local database."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the finance engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._subscriptions: dict[str, list[_LocalSubscription]] = {}
        self._lock = threading.RLock()
        self._prepared = False

    def generate_key(self, user_id: str) -> str:
        return generate_push_id()

    def write(
        self,
        user_id: str,
        key: str,
        record: Mapping[str, Any],
    ) -> None:
        """Store ``record`` at ``key`` and notify the path's subscribers.

        Failures are logged; they surface only as a missing record in the
        next snapshot.
        """
        path = transactions_path(user_id)
        params = {
            "path": path,
            "node_key": key,
            "payload": json.dumps(dict(record)),
        }
        try:
            self._prepare()
            engine = self._db_port.get_finance_engine()
            with engine.begin() as conn:
                conn.execute(DELETE_NODE_SQL, params)
                conn.execute(INSERT_NODE_SQL, params)
        except SQLAlchemyError as exc:
            self._logger.error(f"Failed to write {path}/{key}: {exc}")
            return
        self._notify_path(path)

    def subscribe(
        self,
        user_id: str,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> _LocalSubscription:
        """Register a listener and deliver the current snapshot to it."""
        path = transactions_path(user_id)
        subscription = _LocalSubscription(self, path, on_snapshot, on_error)
        with self._lock:
            self._subscriptions.setdefault(path, []).append(subscription)
        try:
            snapshot = self.fetch_snapshot(path)
        except SQLAlchemyError as exc:
            on_error(exc)
            return subscription
        if not subscription.closed:
            on_snapshot(snapshot)
        return subscription

    def fetch_snapshot(self, path: str) -> StoreSnapshot:
        """Read every child stored under ``path`` in key order.

        Children whose payload is not valid JSON are returned with a None
        value.
        """
        self._prepare()
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            rows = conn.execute(SELECT_CHILDREN_SQL, {"path": path}).all()
        return StoreSnapshot(
            children=tuple(
                (row.node_key, _load_payload(row.payload)) for row in rows
            )
        )

    def _prepare(self) -> None:
        if self._prepared:
            return
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_STORE_NODES_SQL)
        self._prepared = True

    def _notify_path(self, path: str) -> None:
        with self._lock:
            subscriptions = list(self._subscriptions.get(path, ()))
        if not subscriptions:
            return
        try:
            snapshot = self.fetch_snapshot(path)
        except SQLAlchemyError as exc:
            for subscription in subscriptions:
                subscription.on_error(exc)
            return
        for subscription in subscriptions:
            if not subscription.closed:
                subscription.on_snapshot(snapshot)

    def _remove_subscription(self, subscription: _LocalSubscription) -> None:
        with self._lock:
            listeners = self._subscriptions.get(subscription.path, [])
            if subscription in listeners:
                listeners.remove(subscription)
            if not listeners:
                self._subscriptions.pop(subscription.path, None)

    def subscriber_count(self, user_id: str) -> int:
        with self._lock:
            return len(self._subscriptions.get(transactions_path(user_id), ()))


def _load_payload(payload: str) -> Any:
    try:
        return json.loads(payload)
    except (TypeError, ValueError):
        return None


__all__ = [
    "SqlAlchemyTransactionStore",
    "CREATE_STORE_NODES_SQL",
    "SELECT_CHILDREN_SQL",
    "INSERT_NODE_SQL",
    "DELETE_NODE_SQL",
]
