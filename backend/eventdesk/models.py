from __future__ import annotations
from datetime import datetime, timezone

from sqlalchemy import Integer, String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Event(Base):
    __tablename__ = "events"

    id:          Mapped[int]      = mapped_column(Integer, primary_key=True, autoincrement=True)
    title:       Mapped[str]      = mapped_column(String(255), nullable=False)
    description: Mapped[str]      = mapped_column(Text, nullable=False)
    date:        Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    location:    Mapped[str]      = mapped_column(String(255), nullable=False)
    created_at:  Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at:  Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Event id={self.id} title={self.title!r}>"
