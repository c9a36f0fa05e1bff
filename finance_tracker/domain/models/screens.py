"""Navigation targets of the authenticated app."""

from enum import Enum


class Screen(Enum):
    """Closed set of screens, each carrying its static display data."""

    DASHBOARD = ("Overview", "Dashboard", "dashboard")
    TRANSACTIONS = ("History", "History", "list")
    SETTINGS = ("Settings", "Settings", "settings")

    def __init__(self, title: str, label: str, icon: str) -> None:
        self.title = title
        self.label = label
        self.icon = icon


MAIN_SCREENS = (Screen.DASHBOARD, Screen.TRANSACTIONS, Screen.SETTINGS)


__all__ = ["Screen", "MAIN_SCREENS"]
