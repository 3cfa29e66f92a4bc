"""Logging helpers shared by the CLI and the pipeline modules.

Provides root logger setup plus small utilities for structured DEBUG
events: ``extra_context`` builds the ``extra=`` mapping, ``safe_url`` strips
credentials before a URL is logged and ``Timer`` measures request duration.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from constants import Constants
from errors import FilesystemError

_SENSITIVE_KEYS = ("token", "key", "secret", "password", "auth")
_REDACTED = "[REDACTED]"


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Install the stderr handler on the root logger, replacing any set up earlier.

    Args:
        level: Level name; falls back to FORGERPM_LOG_LEVEL, then INFO.
        log_file: Optional path for an additional file handler.

    Raises:
        FilesystemError: If the log file cannot be opened.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    file_handler = None
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as exc:
            raise FilesystemError(log_file, f"cannot open log file: {exc.strerror or exc}") from exc
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        file_handler._forgerpm = True  # type: ignore[attr-defined]

    root = logging.getLogger()
    for handler in [h for h in root.handlers if getattr(h, "_forgerpm", False)]:
        root.removeHandler(handler)
        handler.close()

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    stream._forgerpm = True  # type: ignore[attr-defined]
    root.addHandler(stream)
    if file_handler is not None:
        root.addHandler(file_handler)

    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from this logger would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records, dropping None values."""
    return {key: value for key, value in fields.items() if value is not None}


def redact(value: str) -> str:
    """Replace a sensitive value with a fixed marker."""
    return _REDACTED if value else value


def safe_url(url: str) -> str:
    """Return the URL with userinfo and sensitive query values removed."""
    if not url:
        return url
    parts = urlsplit(url)
    netloc = parts.netloc
    if "@" in netloc:
        netloc = _REDACTED + "@" + netloc.rsplit("@", 1)[1]
    query = parts.query
    if query:
        pairs = [
            (k, redact(v) if any(s in k.lower() for s in _SENSITIVE_KEYS) else v)
            for k, v in parse_qsl(query, keep_blank_values=True)
        ]
        query = urlencode(pairs)
    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


class Timer:
    """Context manager measuring elapsed wall time."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds, up to now if the block is still running."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
