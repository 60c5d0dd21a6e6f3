"""Utility helpers for the models package."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional


def as_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime.

    Naive values are interpreted as already being in UTC.
    """

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def dt_iso(dt: Optional[datetime]) -> Optional[str]:
    """Format ``dt`` as a millisecond-precision UTC string ending in ``Z``.

    The format matches what the payment store and its JavaScript clients
    emit, e.g. ``2024-02-01T00:00:00.000Z``. ``None`` is passed through.
    """

    if dt is None:
        return None
    utc = as_utc(dt)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def jsonable(value: Any) -> Any:
    """Convert datetimes nested in ``value`` into strings for JSON output."""

    if isinstance(value, datetime):
        return dt_iso(value)
    if isinstance(value, dict):
        return {key: jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [jsonable(item) for item in value]
    return value
