"""CLI adapter printing the dashboard of one user.

Credentials come from FINANCE_EMAIL and FINANCE_PASSWORD. The command signs
in, waits for the first transaction snapshot and prints the balance, the
totals and the most recent transactions.
"""

import os
import sys
import threading

import dotenv

from finance_tracker.domain.models import AppState
from finance_tracker.infrastructure.container import build_app_session
from finance_tracker.infrastructure.logging.logger import get_app_logger

SNAPSHOT_TIMEOUT_SECONDS = 15.0


def _wait_for_snapshot(session, timeout: float) -> bool:
    """Block until the session is no longer loading.

    Args:
        session: Started AppSession.
        timeout: Maximum wait in seconds.

    Returns:
        bool: True when the snapshot (or a failure) arrived in time.
    """
    loaded = threading.Event()

    def _observer(state: AppState) -> None:
        if not state.is_loading:
            loaded.set()

    unsubscribe = session.subscribe(_observer)
    try:
        if not session.state.is_loading:
            loaded.set()
        return loaded.wait(timeout)
    finally:
        unsubscribe()


def main() -> int:
    """Sign in and print the dashboard."""
    dotenv.load_dotenv()
    logger = get_app_logger()
    email = os.getenv("FINANCE_EMAIL", "")
    password = os.getenv("FINANCE_PASSWORD", "")

    session = build_app_session()
    session.start()
    try:
        result = session.sign_in(email, password)
        if not result.success:
            print(result.message, file=sys.stderr)
            return 1
        if not _wait_for_snapshot(session, SNAPSHOT_TIMEOUT_SECONDS):
            logger.warning("Timed out waiting for transactions.")
            print("Timed out waiting for transactions.", file=sys.stderr)
            return 1

        view = session.dashboard_view()
        print(f"Balance:  {view.balance_label}")
        print(f"Income:   {view.income_label}")
        print(f"Expenses: {view.expense_label}")
        print("Recent transactions:")
        if not view.recent:
            print("  (none)")
        for row in view.recent:
            print(f"  {row.amount_label:>16}  {row.description} ({row.subtitle})")
        return 0
    finally:
        session.close()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
