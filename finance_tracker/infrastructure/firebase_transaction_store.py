"""Transaction store backed by the Firebase Realtime Database."""

from collections.abc import Mapping
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any

import firebase_admin
from firebase_admin import credentials, db
from firebase_admin.exceptions import FirebaseError

from finance_tracker.application.ports.transaction_store import (
    ErrorCallback,
    SnapshotCallback,
    StoreSnapshot,
    SubscriptionHandle,
    TransactionStorePort,
    transactions_path,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.utils.push_ids import generate_push_id


def init_firebase_app(
    credentials_path: Path | str,
    database_url: str,
):
    """Return the default Firebase app, initializing it on first use.

    Args:
        credentials_path: Service account JSON file.
        database_url: Realtime database URL.

    Returns:
        firebase_admin.App: Initialized application.
    """
    if firebase_admin._apps:
        return firebase_admin.get_app()
    cred = credentials.Certificate(str(credentials_path))
    return firebase_admin.initialize_app(cred, {"databaseURL": database_url})


class _FailedSubscription:
    """Handle returned when the listener could not be attached."""

    def close(self) -> None:
        return None


class FirebaseTransactionStore(TransactionStorePort):
    """TransactionStorePort over ``users/{uid}/transactions``.

    Writes run on a background executor so callers never wait for the
    server acknowledgement.
    """

    def __init__(
        self,
        app=None,
        logger=None,
        executor: Executor | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            app: Optional firebase_admin app; the default app when omitted.
            logger: Optional logger compatible with logging.Logger-like API.
            executor: Optional executor running the writes.
        """
        self._app = app
        self._logger = logger or get_app_logger()
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="firebase-writes",
        )

    def generate_key(self, user_id: str) -> str:
        return generate_push_id()

    def write(
        self,
        user_id: str,
        key: str,
        record: Mapping[str, Any],
    ) -> None:
        path = f"{transactions_path(user_id)}/{key}"
        reference = self._reference(transactions_path(user_id)).child(key)
        future = self._executor.submit(reference.set, dict(record))
        future.add_done_callback(
            lambda done: self._log_write_result(path, done)
        )

    def subscribe(
        self,
        user_id: str,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> SubscriptionHandle:
        """Attach a realtime listener delivering full snapshots."""
        reference = self._reference(transactions_path(user_id))

        def _listener(event) -> None:
            if event.event_type == "put" and event.path == "/":
                data = event.data
            else:
                try:
                    data = reference.get()
                except FirebaseError as exc:
                    on_error(exc)
                    return
            on_snapshot(snapshot_from_data(data))

        try:
            return reference.listen(_listener)
        except FirebaseError as exc:
            on_error(exc)
            return _FailedSubscription()

    def _reference(self, path: str):
        return db.reference(path, app=self._app)

    def _log_write_result(self, path: str, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            self._logger.error(f"Failed to write {path}: {exc}")
        else:
            self._logger.info(f"Wrote {path}")


def snapshot_from_data(data: Any) -> StoreSnapshot:
    """Convert raw subtree data into a key-ordered snapshot.

    Args:
        data: Value returned by the database for the subtree.

    Returns:
        StoreSnapshot: Children sorted by key.
    """
    if isinstance(data, Mapping):
        items = [(str(key), value) for key, value in data.items()]
    elif isinstance(data, list):
        items = [
            (str(index), value)
            for index, value in enumerate(data)
            if value is not None
        ]
    else:
        items = []
    return StoreSnapshot(children=tuple(sorted(items, key=lambda item: item[0])))


__all__ = [
    "FirebaseTransactionStore",
    "init_firebase_app",
    "snapshot_from_data",
]
