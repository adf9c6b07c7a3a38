"""Engine construction.

On SQLite the engine takes over transaction control from pysqlite and
starts every transaction with ``BEGIN IMMEDIATE``. That takes the
database write lock up front, so two checkouts touching the same book
run one after the other instead of both reading the same stock.
Waiting for the lock is bounded by the busy timeout.

In-memory SQLite databases are rejected: each connection would get its
own empty database, and sharing one connection between units of work
would nest their transactions.
"""

from __future__ import annotations

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url


def build_engine(database_url: str, sqlite_timeout: float = 30.0) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    if url.database in (None, "", ":memory:") or url.query.get("mode") == "memory":
        raise ValueError(
            f"In-memory SQLite is not supported ({database_url!r}); use a database file"
        )

    engine = create_engine(
        url,
        connect_args={"timeout": sqlite_timeout, "check_same_thread": False},
    )
    _use_immediate_transactions(engine)
    return engine


def _use_immediate_transactions(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")
