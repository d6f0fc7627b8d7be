"""Structured logging for tournament actions.

structlog renders both its own loggers and the stdlib ``logging`` records
emitted by the rest of the package (``logging.getLogger(__name__)``), so
every line carries the same keys:

- ``trace_id``: one per user-level action, shared by every repository
  call it triggers.
- ``action`` plus any of ``competition_id`` / ``enrollment_id`` /
  ``match_id`` bound through ``action_context``.
- Status enums, identifiers and datetimes rendered as plain labels.
"""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from enum import Enum
from typing import Any

import structlog

from tournament_core.core.ids import to_iso
from tournament_core.domain.identifiers import EntityId

_HANDLER_NAME = "tournament_core"

_trace_id: ContextVar[str] = ContextVar("trace_id", default="")


def get_trace_id() -> str:
    """Current trace ID; one is minted on first use."""
    tid = _trace_id.get()
    if not tid:
        tid = new_trace_id()
    return tid


def set_trace_id(trace_id: str) -> None:
    _trace_id.set(trace_id)


def new_trace_id() -> str:
    tid = str(uuid.uuid4())
    _trace_id.set(tid)
    return tid


@contextmanager
def action_context(action: str, **ids: Any) -> Iterator[str]:
    """Bind *action* and the given entity ids to every log line in the block.

    A fresh trace ID is started for the block and restored afterwards.
    ``None`` ids are left out.  Yields the trace ID.
    """
    token = _trace_id.set(str(uuid.uuid4()))
    bound = {k: v for k, v in ids.items() if v is not None}
    try:
        with structlog.contextvars.bound_contextvars(action=action, **bound):
            yield _trace_id.get()
    finally:
        _trace_id.reset(token)


def _add_trace_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add trace_id to every log entry."""
    event_dict["trace_id"] = get_trace_id()
    return event_dict


def _plain_values(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: render domain values as their labels."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
        elif isinstance(value, EntityId):
            event_dict[key] = str(value)
        elif isinstance(value, datetime):
            event_dict[key] = to_iso(value)
    return event_dict


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        _add_trace_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _plain_values,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(
    level: str = "INFO",
    format: str = "json",
) -> None:
    """Configure structured logging for the package and its stdlib loggers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Unknown names fall
            back to INFO.
        format: "json" for production, "console" for development.

    Safe to call repeatedly; the previous handler is replaced.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    if format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    shared = _shared_processors()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
