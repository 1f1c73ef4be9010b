# backend/eventdesk/db.py
"""Database engine, session factory and declarative base."""

from __future__ import annotations

from typing import Any, Dict, Generator
from os import getenv
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


def normalize_db_url(url: str) -> str:
    """Normalize common Postgres URLs to the psycopg2 driver form."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg2://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg2://", 1)
    return url


RAW_URL = getenv("DATABASE_URL")
if RAW_URL:
    DB_URL = normalize_db_url(RAW_URL)
else:
    DB_URL = f"sqlite:///{(Path(__file__).resolve().parents[1] / 'events.db')}"


def build_engine(url: str) -> Engine:
    """
    Create the process-wide engine.

    Postgres gets a small fixed pool (one connection by default, the store
    is usually a hosted instance with a tight connection cap). SQLite needs
    check_same_thread off because FastAPI runs sync routes in a threadpool.
    """
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=False,
            future=True,
            connect_args={"check_same_thread": False},
        )

    connect_args: Dict[str, Any] = {}
    sslmode = getenv("DB_SSLMODE")
    if sslmode:
        connect_args["sslmode"] = sslmode

    return create_engine(
        url,
        echo=False,
        future=True,
        pool_pre_ping=True,
        pool_size=int(getenv("DB_POOL_SIZE", "1")),
        max_overflow=0,
        connect_args=connect_args,
    )


engine = build_engine(DB_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""
    pass


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a session per request
    and guarantees it is closed afterwards.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
