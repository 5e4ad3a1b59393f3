from __future__ import annotations

import logging
import os
import uuid
from contextvars import ContextVar
from typing import Optional

_session_id: ContextVar[str] = ContextVar("session_id", default="-")


def set_session_id(value: Optional[str] = None) -> str:
    """Set a session ID for the current context and return it.

    Every log line from one CLI run or script carries the same short ID.
    """
    sid = value or uuid.uuid4().hex[:8]
    _session_id.set(sid)
    return sid


class SessionIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = _session_id.get()
        return True


def _level_from_env(default: int) -> int:
    name = os.getenv("FLEXIPLEX_LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def get_logger(name: str = "flexiplex", level: Optional[int] = None) -> logging.Logger:
    """Return a logger with a session-id filter, writing to stderr.

    ``level`` defaults to ``FLEXIPLEX_LOG_LEVEL`` if set, else INFO.
    """
    logger = logging.getLogger(name)

    # Avoid duplicated handlers if called multiple times.
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] session=%(session_id)s %(message)s"
        )
        handler.setFormatter(formatter)
        handler.addFilter(SessionIdFilter())
        logger.addHandler(handler)

    logger.setLevel(level if level is not None else _level_from_env(logging.INFO))
    return logger
