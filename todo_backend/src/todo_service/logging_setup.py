from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .settings import Settings, parse_level_name

REQUEST_LOGGER = "request-logger"
TODO_LOGGER = "todo-logger"
LOGGER_NAMES = (REQUEST_LOGGER, TODO_LOGGER)

_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 5

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Stamp each record with the number of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def parse_level(name: str) -> Optional[int]:
    """Return the numeric level for DEBUG, INFO, WARNING, ERROR or CRITICAL, or None."""
    level_name = parse_level_name(name)
    return None if level_name is None else logging.getLevelName(level_name)


def setup_logging(settings: Settings) -> None:
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s | request #%(request_id)s"
    )
    handlers: list = []

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    stream_handler.addFilter(RequestIdFilter())
    handlers.append(stream_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_path, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(RequestIdFilter())
        handlers.append(file_handler)

    levels = {REQUEST_LOGGER: settings.request_log_level, TODO_LOGGER: settings.todo_log_level}
    for name, level in levels.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for handler in handlers:
            logger.addHandler(handler)
