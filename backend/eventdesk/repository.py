"""
Storage for event rows.

The service layer only talks to the EventRepository protocol, so the
SQLAlchemy implementation can be swapped for the in-memory one in tests.
update() and delete() are single conditional statements: a missing row
shows up as zero affected rows rather than through a separate lookup.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from itertools import count
from typing import Dict, Iterator, List, Optional, Protocol

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import StorageError
from .models import Event, utcnow
from .schemas import EventFields

logger = logging.getLogger(__name__)


class EventRepository(Protocol):
    def insert(self, fields: EventFields) -> Event: ...

    def get(self, event_id: int) -> Optional[Event]: ...

    def list_all(self) -> List[Event]: ...

    def update(self, event_id: int, fields: EventFields) -> Optional[Event]: ...

    def delete(self, event_id: int) -> bool: ...


def _values(fields: EventFields) -> Dict[str, object]:
    return {
        "title": fields.title,
        "description": fields.description,
        "date": fields.date,
        "location": fields.location,
    }


class SqlEventRepository:
    """EventRepository backed by the `events` table."""

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _storage(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Storage failure while trying to %s", action)
            raise StorageError() from exc

    def insert(self, fields: EventFields) -> Event:
        now = utcnow()
        ev = Event(**_values(fields), created_at=now, updated_at=now)
        with self._storage("create event"):
            self.session.add(ev)
            self.session.commit()
            self.session.refresh(ev)
        return ev

    def get(self, event_id: int) -> Optional[Event]:
        with self._storage(f"fetch event {event_id}"):
            return self.session.get(Event, event_id)

    def list_all(self) -> List[Event]:
        q = select(Event).order_by(Event.created_at.desc(), Event.id.desc())
        with self._storage("list events"):
            return list(self.session.execute(q).scalars().all())

    def update(self, event_id: int, fields: EventFields) -> Optional[Event]:
        stmt = (
            update(Event)
            .where(Event.id == event_id)
            .values(**_values(fields), updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        with self._storage(f"update event {event_id}"):
            result = self.session.execute(stmt)
            if result.rowcount == 0:
                self.session.rollback()
                return None
            self.session.commit()
            # commit expired the identity map, so this reloads the row
            return self.session.get(Event, event_id, populate_existing=True)

    def delete(self, event_id: int) -> bool:
        stmt = (
            delete(Event)
            .where(Event.id == event_id)
            .execution_options(synchronize_session=False)
        )
        with self._storage(f"delete event {event_id}"):
            result = self.session.execute(stmt)
            if result.rowcount == 0:
                self.session.rollback()
                return False
            self.session.commit()
            return True


class InMemoryEventRepository:
    """
    Dict-backed EventRepository with the same semantics as the SQL one.
    `writes` counts rows actually inserted, changed or removed.
    """

    def __init__(self) -> None:
        self._rows: Dict[int, Event] = {}
        self._ids = count(1)
        self.writes = 0

    def insert(self, fields: EventFields) -> Event:
        now = utcnow()
        ev = Event(id=next(self._ids), **_values(fields), created_at=now, updated_at=now)
        self._rows[ev.id] = ev
        self.writes += 1
        return ev

    def get(self, event_id: int) -> Optional[Event]:
        return self._rows.get(event_id)

    def list_all(self) -> List[Event]:
        return sorted(
            self._rows.values(),
            key=lambda ev: (ev.created_at, ev.id),
            reverse=True,
        )

    def update(self, event_id: int, fields: EventFields) -> Optional[Event]:
        ev = self._rows.get(event_id)
        if ev is None:
            return None
        for key, value in _values(fields).items():
            setattr(ev, key, value)
        ev.updated_at = utcnow()
        self.writes += 1
        return ev

    def delete(self, event_id: int) -> bool:
        if self._rows.pop(event_id, None) is None:
            return False
        self.writes += 1
        return True
