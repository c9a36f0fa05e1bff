"""Tests for the SyncTransactionsUseCase."""

from unittest.mock import MagicMock

from finance_tracker.application.ports.transaction_store import StoreSnapshot
from finance_tracker.application.use_cases.sync_transactions import (
    SyncTransactionsUseCase,
)
from finance_tracker.domain.models import SnapshotReceived, SubscriptionFailed


def _record(description: str, value: float = 10.0, kind: str = "DESPESA"):
    return {
        "description": description,
        "value": value,
        "type": kind,
        "date": "01/01/2024",
        "category": "Food",
    }


class _Handle:
    def __init__(self) -> None:
        self.closed = 0

    def close(self) -> None:
        self.closed += 1


class _FakeStore:
    """Store keeping the callbacks so tests can push snapshots."""

    def __init__(self, initial: StoreSnapshot | None = None) -> None:
        self.initial = initial
        self.subscriptions = []

    def subscribe(self, user_id, on_snapshot, on_error):
        handle = _Handle()
        self.subscriptions.append((user_id, on_snapshot, on_error, handle))
        if self.initial is not None:
            on_snapshot(self.initial)
        return handle


def test_snapshot_with_malformed_child_publishes_one_transaction() -> None:
    """Malformed records are dropped from the published list."""
    snapshot = StoreSnapshot(
        children=(
            ("k1", _record("Lunch")),
            ("k2", {"description": "broken"}),
        )
    )
    store = _FakeStore(initial=snapshot)
    published = []
    use_case = SyncTransactionsUseCase(
        store,
        publish=published.append,
        logger=MagicMock(),
    )

    use_case.start("u1")

    assert len(published) == 1
    event = published[0]
    assert isinstance(event, SnapshotReceived)
    assert event.user_id == "u1"
    assert [tx.id for tx in event.transactions] == ["k1"]


def test_snapshot_is_reversed_to_newest_first() -> None:
    store = _FakeStore()
    published = []
    use_case = SyncTransactionsUseCase(
        store,
        publish=published.append,
        logger=MagicMock(),
    )
    use_case.start("u1")
    _, on_snapshot, _, _ = store.subscriptions[0]

    on_snapshot(
        StoreSnapshot(
            children=(
                ("a", _record("first")),
                ("b", _record("second")),
                ("c", _record("third")),
            )
        )
    )

    assert [tx.id for tx in published[-1].transactions] == ["c", "b", "a"]


def test_each_snapshot_replaces_the_previous_one() -> None:
    store = _FakeStore()
    published = []
    use_case = SyncTransactionsUseCase(
        store,
        publish=published.append,
        logger=MagicMock(),
    )
    use_case.start("u1")
    _, on_snapshot, _, _ = store.subscriptions[0]

    on_snapshot(StoreSnapshot(children=(("a", _record("one")),)))
    on_snapshot(StoreSnapshot(children=()))

    assert published[-1].transactions == ()


def test_subscription_error_is_published_not_raised() -> None:
    store = _FakeStore()
    published = []
    logger = MagicMock()
    use_case = SyncTransactionsUseCase(
        store,
        publish=published.append,
        logger=logger,
    )
    use_case.start("u1")
    _, _, on_error, _ = store.subscriptions[0]

    on_error(PermissionError("denied"))

    assert published == [SubscriptionFailed(user_id="u1", message="denied")]
    logger.warning.assert_called_once()


def test_subscribe_raising_is_reported_as_failure() -> None:
    store = MagicMock()
    store.subscribe.side_effect = RuntimeError("offline")
    published = []
    use_case = SyncTransactionsUseCase(
        store,
        publish=published.append,
        logger=MagicMock(),
    )

    use_case.start("u1")

    assert published == [SubscriptionFailed(user_id="u1", message="offline")]
    assert use_case.active_user_id is None


def test_restart_releases_previous_subscription() -> None:
    """Only one subscription is held at a time."""
    store = _FakeStore()
    use_case = SyncTransactionsUseCase(
        store,
        publish=lambda event: None,
        logger=MagicMock(),
    )

    use_case.start("u1")
    use_case.start("u2")

    first_handle = store.subscriptions[0][3]
    second_handle = store.subscriptions[1][3]
    assert first_handle.closed == 1
    assert second_handle.closed == 0
    assert use_case.active_user_id == "u2"


def test_stop_releases_and_is_idempotent() -> None:
    store = _FakeStore()
    use_case = SyncTransactionsUseCase(
        store,
        publish=lambda event: None,
        logger=MagicMock(),
    )
    use_case.start("u1")

    use_case.stop()
    use_case.stop()

    assert store.subscriptions[0][3].closed == 1
    assert use_case.active_user_id is None


def test_notifications_after_stop_are_ignored() -> None:
    store = _FakeStore()
    published = []
    use_case = SyncTransactionsUseCase(
        store,
        publish=published.append,
        logger=MagicMock(),
    )
    use_case.start("u1")
    _, on_snapshot, on_error, _ = store.subscriptions[0]

    use_case.stop()
    on_snapshot(StoreSnapshot(children=(("a", _record("late")),)))
    on_error(RuntimeError("late"))

    assert published == []


def test_context_manager_stops_on_exit() -> None:
    store = _FakeStore()
    with SyncTransactionsUseCase(
        store,
        publish=lambda event: None,
        logger=MagicMock(),
    ) as use_case:
        use_case.start("u1")

    assert store.subscriptions[0][3].closed == 1


def test_close_failure_is_logged() -> None:
    handle = MagicMock()
    handle.close.side_effect = RuntimeError("boom")
    store = MagicMock()
    store.subscribe.return_value = handle
    logger = MagicMock()
    use_case = SyncTransactionsUseCase(
        store,
        publish=lambda event: None,
        logger=logger,
    )
    use_case.start("u1")

    use_case.stop()

    logger.warning.assert_called_once()
