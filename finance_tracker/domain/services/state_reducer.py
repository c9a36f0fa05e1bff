"""Pure reducer producing a new AppState for each event."""

from dataclasses import replace

from finance_tracker.domain.models import (
    AddFormToggled,
    AppEvent,
    AppState,
    Authenticated,
    Screen,
    ScreenSelected,
    SessionChanged,
    SnapshotReceived,
    SubscriptionFailed,
)


def reduce_state(state: AppState, event: AppEvent) -> AppState:
    """Return the state that results from applying ``event`` to ``state``.

    Snapshot and failure events for a user other than the signed-in one are
    ignored.
    """
    if isinstance(event, SessionChanged):
        if event.session == state.session:
            return state
        return AppState(
            session=event.session,
            screen=Screen.DASHBOARD,
            transactions=(),
            is_loading=isinstance(event.session, Authenticated),
            add_form_open=False,
        )
    if isinstance(event, SnapshotReceived):
        if not _is_current_user(state, event.user_id):
            return state
        return replace(
            state,
            transactions=tuple(event.transactions),
            is_loading=False,
        )
    if isinstance(event, SubscriptionFailed):
        if not _is_current_user(state, event.user_id):
            return state
        return replace(state, is_loading=False)
    if isinstance(event, ScreenSelected):
        return replace(state, screen=event.screen)
    if isinstance(event, AddFormToggled):
        return replace(state, add_form_open=event.open)
    raise TypeError(f"Unsupported event: {event!r}")


def _is_current_user(state: AppState, user_id: str) -> bool:
    session = state.session
    return isinstance(session, Authenticated) and session.user_id == user_id


__all__ = ["reduce_state"]
