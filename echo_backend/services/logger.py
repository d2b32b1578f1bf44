from __future__ import annotations

import json
import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

_LOGGER_NAME = "echo_api"


def _default_level() -> int:
    """Resolve the log level from LOG_LEVEL, falling back to INFO for unknown names."""
    raw = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.INFO


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "time": int(time.time() * 1000),
            "logger": record.name,
        }
        extra_dict = getattr(record, "extra_dict", None)
        if isinstance(extra_dict, dict):
            base.update(extra_dict)
        return json.dumps(base, ensure_ascii=False, default=str)


def _ensure_logger() -> logging.Logger:
    """Create the application logger emitting one JSON object per line on stdout."""
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        logger.setLevel(_default_level())
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_JsonFormatter())
        logger.addHandler(handler)
        logger.propagate = False
    return logger


_LOGGER = _ensure_logger()


# PUBLIC_INTERFACE
def set_level(level: str) -> None:
    """Apply a level name (e.g. 'DEBUG') to the application logger."""
    resolved = logging.getLevelName(level.strip().upper())
    if isinstance(resolved, int):
        _LOGGER.setLevel(resolved)


def log_info(message: str, **fields: Any) -> None:
    """Log an info message with structured fields merged into the record."""
    _LOGGER.info(message, extra={"extra_dict": fields})


def log_warning(message: str, **fields: Any) -> None:
    """Log a warning with structured fields."""
    _LOGGER.warning(message, extra={"extra_dict": fields})


def log_error(message: str, **fields: Any) -> None:
    """Log an error message with structured fields."""
    _LOGGER.error(message, extra={"extra_dict": fields})


def log_debug(message: str, **fields: Any) -> None:
    _LOGGER.debug(message, extra={"extra_dict": fields})


@contextmanager
def time_block(name: str, *, request_id: Optional[str] = None, **fields: Any):
    """Context manager that logs start and end of an operation with elapsed time in ms.

    Parameters:
      name: Logical operation name (e.g., 'openapi.assemble', 'openapi.serialize').
      request_id: Optional X-Request-ID for correlation when run inside a request.
      fields: Additional fields to include (e.g., encoding).
    """
    start = time.perf_counter()
    log_debug(f"{name}:start", event="timing_start", op=name, request_id=request_id, **fields)
    try:
        yield
    except Exception as exc:
        elapsed_ms = int((time.perf_counter() - start) * 1000.0)
        log_error(
            f"{name}:error",
            event="timing_error",
            op=name,
            elapsed_ms=elapsed_ms,
            request_id=request_id,
            error=str(exc),
            **fields,
        )
        raise
    else:
        elapsed_ms = int((time.perf_counter() - start) * 1000.0)
        log_info(
            f"{name}:end",
            event="timing_end",
            op=name,
            elapsed_ms=elapsed_ms,
            request_id=request_id,
            **fields,
        )
