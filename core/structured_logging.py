"""Structured logging for documentation runs.

Every log record carries three correlation fields taken from context
variables: the run id, the source file being documented and the EventSource
whose CSV is being generated. Unset fields render as ``-``.
"""

from __future__ import annotations

import contextvars
import logging
import uuid
from contextlib import contextmanager
from typing import ContextManager, Iterator

UNSET = "-"

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | run_id=%(run_id)s | "
    "source=%(source_file)s | event_source=%(event_source)s | "
    "%(name)s | %(message)s"
)

_RUN_ID_VAR: contextvars.ContextVar[str] = contextvars.ContextVar("run_id", default=UNSET)
_SOURCE_FILE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "source_file", default=UNSET
)
_EVENT_SOURCE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "event_source", default=UNSET
)

# LogRecord attribute -> context variable
_RECORD_FIELDS: dict[str, contextvars.ContextVar[str]] = {
    "run_id": _RUN_ID_VAR,
    "source_file": _SOURCE_FILE_VAR,
    "event_source": _EVENT_SOURCE_VAR,
}


class _RunContextFilter(logging.Filter):
    """Copy the documentation context onto each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for attribute, var in _RECORD_FIELDS.items():
            setattr(record, attribute, var.get())
        return True


def configure_structured_logging(level: int = logging.INFO) -> None:
    """Install ``LOG_FORMAT`` and the context filter on the root handlers."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root_logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in root_logger.handlers:
        handler.setFormatter(formatter)
        if not any(isinstance(f, _RunContextFilter) for f in handler.filters):
            handler.addFilter(_RunContextFilter())


def set_run_id(run_id: str | None = None) -> str:
    """Set the run id, generating one when none is given."""
    value = run_id or uuid.uuid4().hex[:12]
    _RUN_ID_VAR.set(value)
    return value


def get_run_id() -> str:
    return _RUN_ID_VAR.get()


def get_source_file() -> str:
    return _SOURCE_FILE_VAR.get()


def get_event_source() -> str:
    return _EVENT_SOURCE_VAR.get()


@contextmanager
def _scoped(var: contextvars.ContextVar[str], value: str) -> Iterator[None]:
    token = var.set(value or UNSET)
    try:
        yield
    finally:
        var.reset(token)


def source_file_scope(source_file: str) -> ContextManager[None]:
    """Tag logs emitted inside the block with the file being documented."""
    return _scoped(_SOURCE_FILE_VAR, source_file)


def event_source_scope(event_source: str) -> ContextManager[None]:
    """Tag logs emitted inside the block with the EventSource being written."""
    return _scoped(_EVENT_SOURCE_VAR, event_source)
