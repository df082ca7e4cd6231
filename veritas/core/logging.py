"""Structured logging configuration using dictConfig.

The engine logs under the ``veritas`` hierarchy. The pipeline and scoring
steps (``veritas.engine``, ``veritas.scoring``) can run at their own level so
per-batch step logs are tunable without touching the service loggers.
"""
import logging
import logging.config
import sys
from typing import Dict, Any, Optional

from .settings import get_settings

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that follow ``engine_log_level`` when it is set
STEP_LOGGERS = ("veritas.engine", "veritas.scoring")

# Third-party loggers kept quiet unless something goes wrong
LIBRARY_LEVELS = {
    "uvicorn": "INFO",
    "uvicorn.access": "WARNING",
    "httpx": "WARNING",
}


def _logger(level: str) -> Dict[str, Any]:
    return {"level": level, "handlers": ["console"], "propagate": False}


def get_logging_config(service_name: Optional[str] = None) -> Dict[str, Any]:
    """Get logging configuration dictionary."""
    settings = get_settings()
    production = settings.environment == "production"
    step_level = (settings.engine_log_level or settings.log_level).upper()

    console_format = CONSOLE_FORMAT
    json_format = JSON_FORMAT
    if service_name:
        console_format = f"%(asctime)s [{service_name}] [%(levelname)s] %(name)s: %(message)s"
        json_format = f"%(asctime)s %(levelname)s {service_name} %(name)s %(message)s"

    loggers = {"veritas": _logger(settings.log_level)}
    loggers.update({name: _logger(step_level) for name in STEP_LOGGERS})
    loggers.update({name: _logger(level) for name, level in LIBRARY_LEVELS.items()})

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": json_format,
                "datefmt": DATE_FORMAT,
                "class": "pythonjsonlogger.jsonlogger.JsonFormatter"
            },
            "console": {
                "format": console_format,
                "datefmt": DATE_FORMAT
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                # Handler passes everything; loggers decide
                "level": "DEBUG",
                "formatter": "json" if production else "console",
                "stream": sys.stdout
            }
        },
        "loggers": loggers,
        "root": {
            "level": settings.log_level,
            "handlers": ["console"]
        }
    }


def setup_logging(service_name: Optional[str] = None) -> None:
    """Configure structured logging using dictConfig."""
    logging.config.dictConfig(get_logging_config(service_name))


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
