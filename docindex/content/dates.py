"""Date normalization and priority resolution for document metadata."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any

from dateutil import parser as date_parser

PRIORITY_FIELDS: tuple[str, ...] = ("date", "updatedAt", "createdAt")

# Two defaults that differ in year, month and day. A free-form string only
# names a full calendar date when both parses agree.
_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _parse_free_form(text: str) -> datetime | None:
    try:
        first, second = (date_parser.parse(text, default=default) for default in _DEFAULTS)
    except (ValueError, OverflowError, TypeError):
        return None
    if first.date() != second.date():
        return None
    return first


def parse_date(value: Any) -> datetime | None:
    """Parse a front-matter date value into an aware UTC datetime.

    Accepts datetimes, dates (YAML turns ``2024-01-01`` into one), ISO-8601
    or free-form strings naming a full calendar date, and unix timestamps.
    Naive values are taken as UTC.

    Returns:
        The parsed datetime, or None if the value is not a valid date
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = date_parser.isoparse(text)
        except (ValueError, OverflowError, TypeError):
            parsed = _parse_free_form(text)
            if parsed is None:
                return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_iso(value: Any) -> str | None:
    """Canonical ISO-8601 UTC form of ``value`` (e.g. ``2024-01-01T00:00:00+00:00``)."""
    parsed = parse_date(value)
    return parsed.isoformat() if parsed else None


def date_to_unix_timestamp(value: Any) -> int | None:
    parsed = parse_date(value)
    return int(parsed.timestamp()) if parsed else None


def get_date_by_priority(meta: Mapping[str, Any]) -> Any:
    """Pick the authoritative date from ``date``, ``updatedAt``, ``createdAt``.

    Args:
        meta: Document metadata (or any mapping with those keys)

    Returns:
        The first value, in that order, that parses as a valid date; None
        when none of them does
    """
    for field_name in PRIORITY_FIELDS:
        candidate = meta.get(field_name)
        if candidate and parse_date(candidate) is not None:
            return candidate
    return None


def file_timestamps(stats: os.stat_result) -> tuple[datetime, datetime]:
    """Return (created, modified) for a stat result, both in UTC.

    Creation time is ``st_birthtime`` where the platform records it and
    ``st_ctime`` otherwise.
    """
    created = getattr(stats, "st_birthtime", None)
    if created is None:
        created = stats.st_ctime
    return (
        datetime.fromtimestamp(created, tz=timezone.utc),
        datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc),
    )
