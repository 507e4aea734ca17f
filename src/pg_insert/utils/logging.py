"""Structured logging for pg-insert.

Package modules only ever call ``get_logger``; importing pg-insert leaves the
host application's logging and structlog configuration untouched. Whoever
owns the process (an application entry point, a script, the test suite) may
call ``configure_logging`` to get JSON output with ISO-8601 timestamps on
stdout and, optionally, a daily rotating file.

Settings used by ``configure_logging`` when no explicit argument is given:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL. Default: INFO
- PGI_LOG_TO_FILE: also write to a rotating file. Default: disabled
- PGI_LOG_FILE_DIR: directory for log files. Default: logs/

Usage:
    >>> from pg_insert.utils.logging import configure_logging
    >>> configure_logging(level="DEBUG")
"""

import logging
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.types import Processor

from pg_insert.config import get_settings

# Names of the root handlers installed by configure_logging
STDOUT_HANDLER_NAME = "pg_insert.stdout"
FILE_HANDLER_NAME = "pg_insert.file"
_OWN_HANDLERS = (STDOUT_HANDLER_NAME, FILE_HANDLER_NAME)


def get_log_file_path(log_dir: Path) -> Path:
    """Create ``log_dir`` if needed and return today's log file in it."""
    log_dir.mkdir(parents=True, exist_ok=True)

    # Format: pg-insert-YYYYMMDD.log
    date_str = datetime.now().strftime("%Y%m%d")
    return log_dir / f"pg-insert-{date_str}.log"


def _remove_own_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        if handler.get_name() in _OWN_HANDLERS:
            root.removeHandler(handler)
            handler.close()


def configure_logging(
    level: Optional[str] = None,
    log_to_file: Optional[bool] = None,
    log_file_dir: Optional[str] = None,
) -> None:
    """Route structlog events through stdlib logging as JSON lines.

    Safe to call more than once: handlers installed by a previous call are
    replaced, handlers owned by anyone else are kept.

    Args:
        level: Log level name; defaults to the LOG_LEVEL setting
        log_to_file: Add a daily rotating file handler; defaults to PGI_LOG_TO_FILE
        log_file_dir: Directory for the log file; defaults to PGI_LOG_FILE_DIR
    """
    settings = get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    if log_to_file is None:
        log_to_file = settings.log_to_file
    if log_file_dir is None:
        log_file_dir = settings.log_file_dir

    root = logging.getLogger()
    _remove_own_handlers(root)
    root.setLevel(numeric_level)

    formatter = logging.Formatter("%(message)s")
    stdout_handler = logging.StreamHandler()
    stdout_handler.set_name(STDOUT_HANDLER_NAME)
    stdout_handler.setFormatter(formatter)
    stdout_handler.setLevel(numeric_level)
    root.addHandler(stdout_handler)

    if log_to_file:
        file_handler = TimedRotatingFileHandler(
            filename=str(get_log_file_path(Path(log_file_dir))),
            when="midnight",
            interval=1,
            backupCount=30,  # 30-day retention
            encoding="utf-8",
        )
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(numeric_level)
        root.addHandler(file_handler)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structlog logger; output follows whatever configuration is active."""
    return structlog.get_logger(name)
