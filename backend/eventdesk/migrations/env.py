"""Alembic environment for the events schema. Online mode only."""

import os

from alembic import context
from sqlalchemy import create_engine, pool

from eventdesk.db import DB_URL, normalize_db_url
from eventdesk.models import Base  # registers the Event table


def _database_url() -> str:
    raw_url = os.getenv("DATABASE_URL")
    if raw_url:
        return normalize_db_url(raw_url)
    return context.config.get_main_option("sqlalchemy.url") or DB_URL


def upgrade_schema() -> None:
    engine = create_engine(_database_url(), poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=Base.metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    raise RuntimeError("eventdesk migrations need a live database connection")

upgrade_schema()
