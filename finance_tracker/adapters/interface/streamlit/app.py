"""Streamlit personal finance entry point."""

from collections.abc import Sequence

import streamlit as st

from finance_tracker.application.use_cases.app_session import AppSession
from finance_tracker.domain.models import (
    MAIN_SCREENS,
    AppState,
    Authenticated,
    Screen,
    TransactionKind,
    TransactionRow,
)
from finance_tracker.infrastructure.container import build_app_session

SESSION_KEY = "finance_session"

_KIND_LABELS = {
    "Expense": TransactionKind.EXPENSE,
    "Income": TransactionKind.INCOME,
}


def _build_session() -> AppSession:
    """Build and start an AppSession from environment settings."""
    session = build_app_session()
    session.start()
    return session


def _get_session() -> AppSession:
    """Return the AppSession kept across reruns of this browser session."""
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = _build_session()
    return st.session_state[SESSION_KEY]


def _rows_table(rows: Sequence[TransactionRow]) -> list[dict[str, str]]:
    """Convert transaction rows into dataframe records."""
    return [
        {
            "Description": row.description,
            "Details": row.subtitle,
            "Amount": row.amount_label,
        }
        for row in rows
    ]


def _render_rows(rows: Sequence[TransactionRow]) -> None:
    st.dataframe(_rows_table(rows), width="stretch", hide_index=True)


def _render_login(session: AppSession) -> None:
    """Render the sign-in / create-account form."""
    st.title("Personal Finance")
    mode = st.radio("Mode", ["Sign in", "Create account"], horizontal=True)
    with st.form("auth_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button(mode)
    if not submitted:
        return
    if mode == "Sign in":
        result = session.sign_in(email, password)
    else:
        result = session.sign_up(email, password)
    if not result.success:
        st.error(result.message)
        return
    st.rerun()


def _render_sidebar(session: AppSession, state: AppState) -> AppState:
    """Render navigation and return the state after any screen change."""
    labels = [screen.label for screen in MAIN_SCREENS]
    choice = st.sidebar.radio(
        "Navigate",
        labels,
        index=labels.index(state.screen.label),
    )
    selected = next(screen for screen in MAIN_SCREENS if screen.label == choice)
    if selected is not state.screen:
        state = session.select_screen(selected)
    st.sidebar.button("Refresh")
    return state


def _render_add_form(session: AppSession) -> None:
    """Render the add-transaction form and submit it."""
    with st.form("add_transaction_form", clear_on_submit=False):
        kind_label = st.radio("Type", list(_KIND_LABELS), horizontal=True)
        description = st.text_input("Description")
        amount = st.text_input("Amount", placeholder="0,00")
        category = st.text_input("Category")
        saved = st.form_submit_button("Save")
        cancelled = st.form_submit_button("Cancel")
    if cancelled:
        session.close_add_form()
        st.rerun()
        return
    if not saved:
        return
    result = session.submit_transaction(
        description,
        amount,
        _KIND_LABELS[kind_label],
        category,
    )
    if not result.created:
        for message in result.errors:
            st.error(message)
        return
    st.rerun()


def _render_add_section(session: AppSession, state: AppState) -> None:
    if not state.add_form_open:
        if st.button("Add transaction"):
            session.open_add_form()
            _render_add_form(session)
        return
    _render_add_form(session)


def _render_dashboard(session: AppSession) -> None:
    """Render the balance, totals and recent transactions."""
    view = session.dashboard_view()
    balance_col, income_col, expense_col = st.columns(3)
    balance_col.metric("Balance", view.balance_label)
    income_col.metric("Income", view.income_label)
    expense_col.metric("Expenses", view.expense_label)
    st.subheader("Recent transactions")
    if view.recent:
        _render_rows(view.recent)
    else:
        st.info("No transactions yet.")


def _render_history(session: AppSession) -> None:
    view = session.history_view()
    if view.is_empty:
        st.info(view.empty_message)
        return
    _render_rows(view.rows)


def _render_settings(session: AppSession, state: AppState) -> None:
    """Render account details and the sign-out action."""
    if isinstance(state.session, Authenticated):
        st.caption(f"Signed in as {state.session.user_id}")
    st.caption(f"Currency symbol: {session.currency_symbol}")
    if st.button("Sign out"):
        session.sign_out()
        st.rerun()


def _render_app(session: AppSession, state: AppState) -> None:
    """Render the authenticated screens."""
    state = _render_sidebar(session, state)
    st.title(state.screen.title)
    if state.is_loading:
        st.info("Loading transactions...")
    if state.screen is Screen.DASHBOARD:
        _render_dashboard(session)
        _render_add_section(session, state)
    elif state.screen is Screen.TRANSACTIONS:
        _render_history(session)
        _render_add_section(session, state)
    else:
        _render_settings(session, state)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Personal Finance", layout="wide")
    session = _get_session()
    state = session.state
    if isinstance(state.session, Authenticated):
        _render_app(session, state)
    else:
        _render_login(session)


if __name__ == "__main__":
    main()
