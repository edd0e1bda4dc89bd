"""
backend/logging_config.py

Logging for the API. Modules call `get_logger(__name__)`; the first call
installs the configuration below.

- one stdout handler on the root logger, level from LOG_LEVEL
- uvicorn's own access log is lowered to WARNING, the request middleware in
  `main.py` already writes one line per request
"""

import logging
import logging.config

from .config import LOG_LEVEL

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "stdout": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "formatter": "plain",
        },
    },
    "loggers": {
        "uvicorn.access": {"level": "WARNING"},
    },
    "root": {"level": LOG_LEVEL, "handlers": ["stdout"]},
}

_configured = False


def configure_logging() -> None:
    """Apply LOGGING once per process; later calls do nothing."""
    global _configured
    if _configured:
        return
    logging.config.dictConfig(LOGGING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
