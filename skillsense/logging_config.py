import logging
import os
from logging.config import dictConfig
from typing import Dict

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Logger name -> env var that overrides its level.
LOGGER_LEVEL_OVERRIDES: Dict[str, str] = {
    "skillsense.telemetry": "SKILLSENSE_TELEMETRY_LOG_LEVEL",
    "sqlalchemy.engine": "SKILLSENSE_SQL_LOG_LEVEL",
}


def _logger_overrides() -> Dict[str, Dict[str, str]]:
    loggers: Dict[str, Dict[str, str]] = {}
    for name, env_var in LOGGER_LEVEL_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            loggers[name] = {"level": value.upper()}
    return loggers


def configure_logging() -> None:
    """Set up root logging from ``SKILLSENSE_LOG_LEVEL`` and per-logger overrides."""
    level = os.getenv("SKILLSENSE_LOG_LEVEL", "INFO").upper()

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": os.getenv("SKILLSENSE_LOG_FORMAT", DEFAULT_LOG_FORMAT)}},
            "handlers": {"default": {"class": "logging.StreamHandler", "formatter": "default"}},
            "loggers": _logger_overrides(),
            "root": {"handlers": ["default"], "level": level},
        }
    )

    if os.getenv("SKILLSENSE_DEBUG_HTTP", "0") == "1":
        for name in ("uvicorn.access", "fastapi", "httpx"):
            logging.getLogger(name).setLevel(logging.DEBUG)
