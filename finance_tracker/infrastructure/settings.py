"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional

import dotenv

from finance_tracker.domain.services.aggregation import DEFAULT_RECENT_LIMIT
from finance_tracker.domain.services.formatting import DEFAULT_CURRENCY_SYMBOL
from finance_tracker.infrastructure.logging.logger import get_app_logger

SUPPORTED_BACKENDS = ("sqlalchemy", "firebase")


@dataclass(frozen=True)
class FinanceSettings:
    """Settings for selecting and configuring the store backend.

    Attributes:
        backend: Backend identifier (sqlalchemy or firebase).
        firebase_credentials: Path to a service account JSON file.
        firebase_database_url: Realtime database URL.
        firebase_web_api_key: Web API key used for email/password auth.
        currency_symbol: Symbol shown before amounts.
        recent_limit: Number of transactions listed on the dashboard.
    """

    backend: str = "sqlalchemy"
    firebase_credentials: Optional[Path] = None
    firebase_database_url: Optional[str] = None
    firebase_web_api_key: Optional[str] = None
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    recent_limit: int = DEFAULT_RECENT_LIMIT

    @classmethod
    def from_env(cls) -> "FinanceSettings":
        """Build settings from environment variables (and a .env file).

        Returns:
            FinanceSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        backend = os.getenv("FINANCE_BACKEND", "sqlalchemy").strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            logger.warning(
                f"Unknown FINANCE_BACKEND '{backend}'. "
                f"Expected one of {', '.join(SUPPORTED_BACKENDS)}."
            )
        raw_credentials = os.getenv("FIREBASE_CREDENTIALS")
        return cls(
            backend=backend,
            firebase_credentials=(
                cls._normalize_path(raw_credentials, logger=logger)
                if raw_credentials
                else None
            ),
            firebase_database_url=os.getenv("FIREBASE_DATABASE_URL") or None,
            firebase_web_api_key=os.getenv("FIREBASE_WEB_API_KEY") or None,
            currency_symbol=os.getenv(
                "FINANCE_CURRENCY_SYMBOL",
                DEFAULT_CURRENCY_SYMBOL,
            ),
            recent_limit=cls._parse_limit(
                os.getenv("FINANCE_RECENT_LIMIT"),
                logger=logger,
            ),
        )

    @staticmethod
    def _normalize_path(raw_path: str, logger) -> Path:
        """Resolve a credentials path, warning when it does not exist.

        Args:
            raw_path: Raw file path string.
            logger: Logger used for warnings.

        Returns:
            Path: Absolute path.
        """
        path = Path(raw_path).expanduser().resolve()
        if not path.exists():
            logger.warning(f"Firebase credentials file does not exist at {path}")
        return path

    @staticmethod
    def _parse_limit(raw_limit: str | None, logger) -> int:
        if not raw_limit:
            return DEFAULT_RECENT_LIMIT
        try:
            limit = int(raw_limit)
        except ValueError:
            limit = 0
        if limit <= 0:
            logger.warning(
                f"Invalid FINANCE_RECENT_LIMIT '{raw_limit}', "
                f"using {DEFAULT_RECENT_LIMIT}"
            )
            return DEFAULT_RECENT_LIMIT
        return limit


__all__ = ["FinanceSettings", "SUPPORTED_BACKENDS"]
