"""Environment-driven runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Process settings.

    Attributes:
        database_url: libpq DSN for the bookings database (DATABASE_URL).
        log_level: Root level for JSON loggers (LOG_LEVEL, default INFO).
        service_name: Value of the "service" field in every log line.
        app_env: Deployment environment; "local" enables the API docs.
    """

    database_url: str | None = None
    log_level: str = "INFO"
    service_name: str = "apartly"
    app_env: str = "local"

    @property
    def docs_enabled(self) -> bool:
        return self.app_env == "local"


def get_settings() -> Settings:
    """Read settings from the environment.

    Not cached: tests flip env vars with monkeypatch between calls.
    """
    return Settings(
        database_url=os.environ.get("DATABASE_URL") or None,
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        service_name=os.environ.get("SERVICE_NAME", "apartly"),
        app_env=os.environ.get("APP_ENV", "local"),
    )
