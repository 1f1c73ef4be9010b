from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eventdesk.db import Base, get_db
from eventdesk.main import app, get_repository
from eventdesk.repository import InMemoryEventRepository

LAUNCH = {
    "title": "Launch",
    "description": "Kickoff",
    "date": "2030-01-01T10:00:00Z",
    "location": "HQ",
}


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session(engine):
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    db = Session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(engine):
    """API backed by a throwaway SQLite database."""
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

    def _get_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def memory_repo():
    return InMemoryEventRepository()


@pytest.fixture()
def memory_client(memory_repo):
    """API backed by the in-memory repository, for counting writes."""
    app.dependency_overrides[get_repository] = lambda: memory_repo
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
