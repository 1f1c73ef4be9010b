# backend/eventdesk/schemas.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, computed_field, field_validator
from pydantic.alias_generators import to_camel

from .dates import parse_event_date, to_utc
from .status import EventStatus, classify

T = TypeVar("T")

TITLE_MAX_LENGTH = 255
LOCATION_MAX_LENGTH = 255


def _required(value: Any, label: str, max_length: Optional[int] = None) -> str:
    if not isinstance(value, str) or len(value) < 1:
        raise ValueError(f"{label} is required")
    if max_length is not None and len(value) > max_length:
        raise ValueError(f"{label} must be at most {max_length} characters")
    return value


class EventPayload(BaseModel):
    """
    Raw request body for create/update. Field order is the order in
    which failures are reported. `date` stays text here; to_fields()
    does the conversion.
    """
    title: Any = None
    description: Any = None
    date: Any = None
    location: Any = None

    model_config = ConfigDict(validate_default=True)

    @field_validator("title")
    @classmethod
    def _title(cls, v: Any) -> str:
        return _required(v, "Title", TITLE_MAX_LENGTH)

    @field_validator("description")
    @classmethod
    def _description(cls, v: Any) -> str:
        return _required(v, "Description")

    @field_validator("date")
    @classmethod
    def _date(cls, v: Any) -> str:
        if not isinstance(v, str) or parse_event_date(v) is None:
            raise ValueError("Invalid date")
        return v

    @field_validator("location")
    @classmethod
    def _location(cls, v: Any) -> str:
        return _required(v, "Location", LOCATION_MAX_LENGTH)

    def to_fields(self) -> EventFields:
        return EventFields(
            title=self.title,
            description=self.description,
            date=parse_event_date(self.date),
            location=self.location,
        )


@dataclass(frozen=True)
class EventFields:
    """The four mutable columns, validated and typed."""
    title: str
    description: str
    date: datetime
    location: str


class EventOut(BaseModel):
    """Response schema for an event row."""
    id: int
    title: str
    description: str
    date: datetime
    location: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,  # allow from ORM
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("date", "created_at", "updated_at")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive values for timezone=True columns
        return to_utc(v)

    @computed_field
    @property
    def status(self) -> EventStatus:
        """Where the event stands right now. Derived from `date`, never stored."""
        return classify(self.date)


class Envelope(BaseModel, Generic[T]):
    """Uniform {success, data?, error?} wrapper for every response."""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None
