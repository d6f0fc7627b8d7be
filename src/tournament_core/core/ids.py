"""Canonical ID and timestamp factories for the tournament core.

All modules import from here instead of defining local _uuid()/_now() copies.

Timestamp Rule
--------------
All timestamps are ``datetime`` with ``tzinfo=timezone.utc``; never naive.
Naive input is interpreted as UTC.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def new_id() -> str:
    """Generate a new UUID v4 string.  Use for all internal entity IDs."""
    return str(uuid.uuid4())


def is_uuid(text: str) -> bool:
    """Return ``True`` if *text* has the canonical 8-4-4-4-12 hex shape."""
    return isinstance(text, str) and UUID_PATTERN.fullmatch(text) is not None


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: datetime | str | None) -> datetime:
    """Coerce a persisted timestamp into an aware UTC datetime.

    Accepts ``datetime`` objects, ISO-8601 text (a trailing ``Z`` is
    understood) or ``None``, which yields the current time.

    Raises ``ValueError`` for unparseable text.
    """
    if value is None:
        return utc_now()
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return ensure_utc(datetime.fromisoformat(text))
    raise ValueError(f"Unsupported timestamp value: {value!r}")


def to_iso(value: datetime) -> str:
    """Render a datetime as ISO-8601 text in UTC."""
    return ensure_utc(value).isoformat()
