"""
Logging setup for scaneo runs.

Every record carries ``run_id`` (one per invocation) and ``phase``
(``discover``, ``extract`` or ``generate``) so that the lines of a
single run can be grepped out of a shared log.
"""

from __future__ import annotations

import contextvars
import logging
import os
import sys
import uuid
from contextlib import contextmanager
from typing import Iterator

LOG_LEVEL_ENV = "SCANEO_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s | run_id=%(run_id)s | phase=%(phase)s | %(name)s | %(message)s"
UNSET = "-"

_RUN_ID_VAR: contextvars.ContextVar[str] = contextvars.ContextVar("run_id", default=UNSET)
_PHASE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar("phase", default=UNSET)


class _RunContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID_VAR.get()
        record.phase = _PHASE_VAR.get()
        return True


class _ScaneoHandler(logging.StreamHandler):
    """stderr handler installed by :func:`configure_structured_logging`."""


def resolve_log_level(explicit: str | None = None, default: int = logging.INFO) -> int:
    """Level from ``explicit``, else ``$SCANEO_LOG_LEVEL``, else ``default``.

    Unknown level names resolve to ``default``.
    """
    name = (explicit or os.getenv(LOG_LEVEL_ENV) or "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def configure_structured_logging(level: int = logging.INFO) -> None:
    # Replaces a handler left by an earlier call; foreign handlers get the
    # context filter so their format strings may use run_id/phase too.
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, _ScaneoHandler):
            root.removeHandler(handler)

    handler = _ScaneoHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)

    for h in root.handlers:
        if not any(isinstance(f, _RunContextFilter) for f in h.filters):
            h.addFilter(_RunContextFilter())


def set_run_id(run_id: str | None = None) -> str:
    """Tag the current context with ``run_id``, generating one if absent."""
    value = run_id or uuid.uuid4().hex[:12]
    _RUN_ID_VAR.set(value)
    return value


def get_run_id() -> str:
    return _RUN_ID_VAR.get()


def get_phase() -> str:
    return _PHASE_VAR.get()


@contextmanager
def phase_scope(phase: str) -> Iterator[None]:
    token = _PHASE_VAR.set(phase)
    try:
        yield
    finally:
        _PHASE_VAR.reset(token)
