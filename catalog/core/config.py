# catalog/core/config.py (Catalog acceptance harness)

from __future__ import annotations

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


class Settings:
    """
    Single configuration object for the harness (stateless).
    - DB: DATABASE_URL first, else composed from POSTGRES_*, else a SQLite file.
    - Logs: JSON on stdout by default.
    """

    def __init__(self) -> None:
        # ---------- Metadata ----------
        self.ENV = os.getenv("ENV", "test")
        self.APP_NAME = os.getenv("APP_NAME", "catalog-acceptance")

        # ---------- Database ----------
        self.DATABASE_URL = os.getenv("DATABASE_URL") or self._compose_db_url()
        self.DB_ECHO = _get_bool("DB_ECHO", False)
        self.SQLITE_FOREIGN_KEYS = _get_bool("SQLITE_FOREIGN_KEYS", True)

        # ---------- Logging ----------
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FORMAT = os.getenv("LOG_FORMAT", "json")
        self.LOG_ENABLE_CONSOLE = _get_bool("LOG_ENABLE_CONSOLE", True)

        # ---------- Scenario store ----------
        self.LAST_EXCEPTION_KEY = os.getenv("LAST_EXCEPTION_KEY", "last_exception")
        self.ORDER_NUMBER_WIDTH = _get_int("ORDER_NUMBER_WIDTH", 6)

    @property
    def is_sqlite(self) -> bool:
        return str(self.DATABASE_URL).startswith("sqlite")

    # -------- Internal helpers --------
    def _compose_db_url(self) -> str:
        pg_host = os.getenv("POSTGRES_HOST")
        pg_db = os.getenv("POSTGRES_DB")
        pg_user = os.getenv("POSTGRES_USER")
        pg_pwd = os.getenv("POSTGRES_PASSWORD", "")
        pg_port = os.getenv("POSTGRES_PORT", "5432")

        if pg_host and pg_db and pg_user:
            return f"postgresql+psycopg2://{pg_user}:{pg_pwd}@{pg_host}:{pg_port}/{pg_db}"

        sqlite_path = os.getenv("SQLITE_PATH", "data/catalog.db")
        path = Path(sqlite_path)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{path.as_posix()}"


settings = Settings()
