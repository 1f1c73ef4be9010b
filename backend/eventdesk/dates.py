"""Timestamp parsing helpers shared by validation and the status classifier."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as dtparse
from dateutil.parser import isoparse as iso_parse


def to_utc(dt: datetime) -> datetime:
    """Attach UTC to naive values, convert aware ones."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_event_date(value: str) -> Optional[datetime]:
    """
    Parse a client-supplied timestamp. ISO-8601 is tried first (what the
    browser form sends), then dateutil's general parser for things like
    "Jan 1 2030 10:00". Returns None when neither accepts it.
    """
    text = value.strip()
    if not text:
        return None
    try:
        dt = iso_parse(text)
    except (ValueError, OverflowError):
        try:
            dt = dtparse.parse(text)
        except (ValueError, OverflowError):
            return None
    try:
        return to_utc(dt)
    except OverflowError:
        # parsed, but shifting to UTC leaves the datetime range
        return None
