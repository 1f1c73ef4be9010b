"""
Event CRUD operations.

Each operation parses the id and body first, so malformed input never
costs a storage round trip, then calls the repository and hands back
validated output models. Failures are raised as EventError subclasses;
turning them into envelopes is the HTTP layer's job.
"""

from __future__ import annotations

import logging
from typing import Any, List

from .errors import NotFoundError
from .repository import EventRepository
from .schemas import EventOut
from .validation import parse_event_id, validate_event

logger = logging.getLogger(__name__)


class EventService:
    def __init__(self, repo: EventRepository):
        self.repo = repo

    def create(self, body: Any) -> EventOut:
        fields = validate_event(body)
        ev = self.repo.insert(fields)
        logger.info("Created event %s", ev.id)
        return EventOut.model_validate(ev)

    def get(self, raw_id: str) -> EventOut:
        event_id = parse_event_id(raw_id)
        ev = self.repo.get(event_id)
        if ev is None:
            raise NotFoundError()
        return EventOut.model_validate(ev)

    def list(self) -> List[EventOut]:
        """All events, most recently created first."""
        return [EventOut.model_validate(ev) for ev in self.repo.list_all()]

    def update(self, raw_id: str, body: Any) -> EventOut:
        event_id = parse_event_id(raw_id)
        fields = validate_event(body)
        ev = self.repo.update(event_id, fields)
        if ev is None:
            raise NotFoundError()
        logger.info("Updated event %s", event_id)
        return EventOut.model_validate(ev)

    def delete(self, raw_id: str) -> None:
        event_id = parse_event_id(raw_id)
        if not self.repo.delete(event_id):
            raise NotFoundError()
        logger.info("Deleted event %s", event_id)
