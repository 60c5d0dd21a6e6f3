"""Helpers for talking to the Firestore REST API."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

import requests

from ..draw.window import DrawWindow
from ..models.utils import dt_iso


def open_session() -> requests.Session:
    """Return a ``requests`` session preconfigured for JSON exchanges."""

    session = requests.Session()
    session.headers.update(
        {"Accept": "application/json", "Content-Type": "application/json"}
    )
    return session


def to_firestore_timestamp(dt: datetime) -> str:
    """Format ``dt`` as a Firestore ``timestampValue`` string."""
    return dt_iso(dt)


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp as returned by Firestore.

    Firestore emits up to nanosecond precision, which :mod:`datetime` cannot
    hold, so the fraction is truncated to microseconds.
    """

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if "." in text:
        head, _, rest = text.partition(".")
        digits = ""
        idx = 0
        while idx < len(rest) and rest[idx].isdigit():
            digits += rest[idx]
            idx += 1
        text = f"{head}.{digits[:6].ljust(6, '0')}{rest[idx:]}"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def decode_value(value: Mapping[str, Any]) -> Any:
    """Decode a single typed Firestore value into a Python object.

    Parameters
    ----------
    value : Mapping[str, Any]
        A value wrapper such as ``{"stringValue": "abc"}``.

    Returns
    -------
    Any
        ``str``, ``int``, ``float``, ``bool``, ``datetime``, ``None``,
        ``dict`` or ``list`` depending on the wrapper. Unknown wrappers
        (references, geo points, bytes) are returned unwrapped as-is.
    """

    if not value:
        return None
    kind, raw = next(iter(value.items()))
    if kind == "nullValue":
        return None
    if kind == "integerValue":
        return int(raw)
    if kind == "doubleValue":
        return float(raw)
    if kind == "timestampValue":
        return parse_timestamp(raw)
    if kind == "mapValue":
        return decode_fields(raw.get("fields", {}))
    if kind == "arrayValue":
        return [decode_value(item) for item in raw.get("values", [])]
    return raw


def decode_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {name: decode_value(value) for name, value in fields.items()}


def decode_document(document: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten a Firestore document into a dict with an ``id`` key.

    The ``id`` is the last path segment of the document's ``name``.
    """

    doc_id = document.get("name", "").split("/")[-1]
    return {"id": doc_id, **decode_fields(document.get("fields") or {})}


def field_filter(field_path: str, op: str, value: Mapping[str, Any]) -> dict:
    return {
        "fieldFilter": {
            "field": {"fieldPath": field_path},
            "op": op,
            "value": value,
        }
    }


def confirmed_payment_filters(window: DrawWindow) -> list[dict]:
    """Filters selecting confirmed payments submitted inside ``window``."""

    return [
        field_filter(
            "dateSubmitted",
            "GREATER_THAN_OR_EQUAL",
            {"timestampValue": to_firestore_timestamp(window.start)},
        ),
        field_filter(
            "dateSubmitted",
            "LESS_THAN",
            {"timestampValue": to_firestore_timestamp(window.end)},
        ),
        field_filter("donationConfirmed", "EQUAL", {"booleanValue": True}),
    ]
