"""
Configuration management for Recipe Sniper.

This module centralizes environment variable loading from .env file at project root.
It should be imported early in both backend (api/main.py) and frontend (streamlit_app/app.py)
to ensure .env is loaded before any other code accesses environment variables.

When .env does not exist (containers, CI), load_dotenv() is a no-op and the
process environment is used as-is.

Environment Variables:
- DATABASE_URL: Optional, SQLAlchemy URL (defaults to a SQLite file under data/)
- PAGE_STORAGE_DIR: Optional, where scraped HTML pages are archived (defaults to data/pages)
- SCRAPE_TIMEOUT_SECONDS: Optional, timeout for fetching recipe pages (defaults to 30)
- SCRAPE_USER_AGENT: Optional, User-Agent sent when fetching recipe pages
- EVENT_LOG_FILE: Optional, JSONL event log path (defaults to data/events.log)
- LOG_LEVEL: Optional, root log level (defaults to INFO)
- BACKEND_URL: Optional, backend URL used by the Streamlit app (defaults to http://localhost:8000)
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///data/recipe_sniper.db"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    This function locates the project root by going up from this file's location
    (api/config.py -> project root) and loads .env if it exists.

    Safe to call multiple times. Existing environment variables always win
    over values from the file.
    """
    this_file = Path(__file__).resolve()
    project_root = this_file.parent.parent
    env_path = project_root / ".env"

    # override=False means existing env vars take precedence
    load_dotenv(env_path, override=False)


# Load .env file on module import
load_env_file()


class DatabaseConfig:
    """Configuration for the SQLAlchemy store."""

    @staticmethod
    def get_url() -> str:
        """
        Get the database URL.

        Returns:
            SQLAlchemy URL string (default: a SQLite file at data/recipe_sniper.db)
        """
        return os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL


class ScrapeConfig:
    """Configuration for fetching and archiving recipe pages."""

    @staticmethod
    def get_storage_dir() -> Path:
        """
        Get the directory scraped pages are archived to.

        Returns:
            Path (default: data/pages, relative to the working directory)
        """
        return Path(os.getenv("PAGE_STORAGE_DIR", "data/pages"))

    @staticmethod
    def get_timeout() -> float:
        """
        Get the page fetch timeout in seconds.

        Returns:
            Timeout as float (default: 30). Invalid values fall back to the default.
        """
        raw = os.getenv("SCRAPE_TIMEOUT_SECONDS", "30")
        try:
            return float(raw)
        except ValueError:
            logging.getLogger(__name__).warning(
                f"Invalid SCRAPE_TIMEOUT_SECONDS={raw!r}, using 30"
            )
            return 30.0

    @staticmethod
    def get_user_agent() -> str:
        """Get the User-Agent header sent with page fetches."""
        return os.getenv("SCRAPE_USER_AGENT", DEFAULT_USER_AGENT)


class EventConfig:
    """Configuration for the JSONL event log."""

    @staticmethod
    def get_log_file() -> Path:
        """
        Get the event log file path.

        Returns:
            Path (default: data/events.log)
        """
        return Path(os.getenv("EVENT_LOG_FILE", "data/events.log"))


class LoggingConfig:
    """Configuration for Python logging."""

    @staticmethod
    def get_level() -> str:
        """
        Get the root log level name.

        Returns:
            Upper-cased level name (default: "INFO")
        """
        return os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging() -> None:
    """
    Configure root logging once for the API process.

    Unknown level names fall back to INFO.
    """
    level = getattr(logging, LoggingConfig.get_level(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def get_config_summary() -> Dict[str, Any]:
    """
    Get a non-secret summary of the active configuration.

    Returns:
        Dictionary with keys:
        - database_backend: str (URL scheme, e.g. "sqlite" or "postgresql")
        - page_storage_dir: str
        - scrape_timeout_seconds: float
        - event_log_file: str
    """
    return {
        "database_backend": DatabaseConfig.get_url().split(":", 1)[0],
        "page_storage_dir": str(ScrapeConfig.get_storage_dir()),
        "scrape_timeout_seconds": ScrapeConfig.get_timeout(),
        "event_log_file": str(EventConfig.get_log_file()),
    }
