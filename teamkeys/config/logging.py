"""
Logging configuration for the teamkeys service.

Console output plus rotating files under ``LOG_DIR``: the main log, an
errors-only log, an audit log fed by event recording and policy denials,
and SQLAlchemy engine output kept apart from application messages.
"""

import logging
import logging.config
import os
import sys
from datetime import datetime
from typing import Any, Dict, Optional

from teamkeys.config.settings import settings

VERBOSE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# Loggers whose records also go to the audit file
AUDIT_LOGGERS = ("teamkeys.services.event_service", "teamkeys.policies.base")

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _rotating(path: str, level: str) -> Dict[str, Any]:
    return {
        "level": level,
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "verbose",
        "filename": path,
        "maxBytes": MAX_LOG_BYTES,
        "backupCount": LOG_BACKUPS,
        "encoding": "utf-8",
    }


def get_logging_config(env: str = "development", log_dir: Optional[str] = None) -> Dict[str, Any]:
    """
    Returns logging configuration based on environment.

    Args:
        env: The environment. One of development, staging, production, test.
        log_dir: Directory for log files. Defaults to settings.LOG_DIR.

    Returns:
        Dict with logging configuration.
    """
    is_dev = env.lower() in ("development", "test")
    logs_dir = log_dir or settings.LOG_DIR
    os.makedirs(logs_dir, exist_ok=True)
    day = datetime.now().strftime("%Y-%m-%d")

    app_handlers = ["console", "file", "error_file"]
    loggers: Dict[str, Any] = {
        "": {
            "handlers": app_handlers,
            "level": "DEBUG" if is_dev else settings.LOG_LEVEL,
        },
        "uvicorn": {"handlers": app_handlers, "level": "INFO", "propagate": False},
        "sqlalchemy.engine": {
            "handlers": ["sqlalchemy_file"],
            "level": "INFO" if settings.DEBUG_MODE else "WARNING",
            "propagate": False,
        },
    }
    for name in AUDIT_LOGGERS:
        loggers[name] = {"handlers": ["audit_file"], "level": "INFO", "propagate": True}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {"format": VERBOSE_FORMAT},
            "simple": {"format": SIMPLE_FORMAT},
        },
        "handlers": {
            "console": {
                "level": "DEBUG" if is_dev else "INFO",
                "class": "logging.StreamHandler",
                "formatter": "simple" if is_dev else "verbose",
                "stream": sys.stdout,
            },
            "file": _rotating(os.path.join(logs_dir, f"teamkeys.{day}.log"), "INFO"),
            "error_file": _rotating(os.path.join(logs_dir, f"teamkeys.error.{day}.log"), "ERROR"),
            "audit_file": _rotating(os.path.join(logs_dir, f"teamkeys.audit.{day}.log"), "INFO"),
            "sqlalchemy_file": _rotating(os.path.join(logs_dir, "sqlalchemy.log"), "INFO"),
        },
        "loggers": loggers,
    }


def setup_logging(env: str = "development", log_dir: Optional[str] = None) -> None:
    """Apply the logging configuration for ``env``."""
    logging.config.dictConfig(get_logging_config(env, log_dir))
    logging.getLogger(__name__).info(f"Logging configured for {env} environment")
