"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy import Engine

from bookstore.infrastructure.logging_config import configure_logging
from bookstore.infrastructure.persistence.engine import build_engine
from bookstore.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork
from bookstore.infrastructure.persistence.tables import create_schema
from bookstore.infrastructure.settings import Settings, load_settings


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def engine() -> Engine:
    current = settings()
    built = build_engine(current.database_url, current.sqlite_timeout)
    if built.url.get_backend_name() == "sqlite":
        Path(built.url.database).parent.mkdir(parents=True, exist_ok=True)
    create_schema(built)
    return built


def unit_of_work() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(engine())


def init_logging() -> None:
    configure_logging(settings())
