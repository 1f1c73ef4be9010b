"""Lifecycle status of an event relative to the current time."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from .dates import to_utc

# An event counts as in progress for this long after it starts.
ONGOING_WINDOW = timedelta(hours=2)


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    PAST = "past"
    # Declared for the UI's badge palette; classify() never returns it.
    CANCELLED = "cancelled"


def classify(event_date: datetime, now: Optional[datetime] = None) -> EventStatus:
    """
    upcoming: event_date > now
    ongoing:  event_date <= now <= event_date + 2h (both bounds inclusive)
    past:     anything later

    Naive datetimes are read as UTC so stored rows and parsed input compare
    consistently.
    """
    start = to_utc(event_date)
    current = to_utc(now) if now is not None else datetime.now(timezone.utc)

    if start > current:
        return EventStatus.UPCOMING
    if current <= start + ONGOING_WINDOW:
        return EventStatus.ONGOING
    return EventStatus.PAST
