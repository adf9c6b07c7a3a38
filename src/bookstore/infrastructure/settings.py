"""Runtime settings, read from the environment.

Only the composition root (``bootstrap``) and the logging setup read
these; everything else receives what it needs through constructors.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LEVEL_BY_ENV = {
    "production": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


@dataclass(frozen=True)
class Settings:
    database_url: str
    sqlite_timeout: float = 30.0
    env: str = "development"
    log_level: str = "INFO"

    @property
    def json_logs(self) -> bool:
        return self.env == "production"


def load_settings() -> Settings:
    env = os.getenv("BOOKSTORE_ENV", "development").lower()
    return Settings(
        database_url=os.getenv(
            "BOOKSTORE_DATABASE_URL", f"sqlite:///{_DATA_DIR / 'bookstore.db'}"
        ),
        sqlite_timeout=float(os.getenv("BOOKSTORE_SQLITE_TIMEOUT", "30")),
        env=env,
        log_level=os.getenv("BOOKSTORE_LOG_LEVEL", _LEVEL_BY_ENV.get(env, "INFO")).upper(),
    )
