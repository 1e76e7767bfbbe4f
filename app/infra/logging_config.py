"""JSON structured logging configuration."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from app.config import get_settings

ROOT_LOGGER_NAME = "portfolio"


class LoggingConfig:
    """Configure the root logger once with JSON output on stdout."""

    _configured = False

    def __init__(self, level: Optional[str] = None) -> None:
        if LoggingConfig._configured:
            return
        settings = get_settings()
        self.level = (level or settings.log_level).upper()
        self._setup(debug_sql=settings.environment.lower() == "development")
        LoggingConfig._configured = True

    def _setup(self, debug_sql: bool) -> None:
        handler = logging.StreamHandler(sys.stdout)
        formatter = JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "logger",
            },
        )
        handler.setFormatter(formatter)

        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(self.level)

        # Quieten noisy libraries
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(
            logging.INFO if debug_sql else logging.WARNING
        )


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the application root."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
