"""SQLAlchemy-backed UnitOfWork: one connection, one transaction.

Each ``with uow:`` block checks out a connection, begins a transaction
and binds fresh repositories to it. Store errors raised inside the
block or on commit are rolled back and surfaced as StorageFailure.
"""

from __future__ import annotations

from types import TracebackType

import structlog
from sqlalchemy import Connection, Engine, RootTransaction
from sqlalchemy.exc import SQLAlchemyError

from bookstore.domain.exceptions import StorageFailure
from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.infrastructure.persistence.sql_book_repository import SqlBookRepository
from bookstore.infrastructure.persistence.sql_cart_repository import SqlCartRepository
from bookstore.infrastructure.persistence.sql_order_repository import SqlOrderRepository

logger = structlog.get_logger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._connection: Connection | None = None
        self._transaction: RootTransaction | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._connection is not None:
            raise RuntimeError("Unit of work is already in progress")
        try:
            self._connection = self._engine.connect()
            self._transaction = self._connection.begin()
        except SQLAlchemyError as exc:
            self._close()
            logger.error("storage_failure", stage="begin", error=str(exc))
            raise StorageFailure("Could not start a transaction") from exc

        self.books = SqlBookRepository(self._connection)
        self.carts = SqlCartRepository(self._connection)
        self.orders = SqlOrderRepository(self._connection)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        except SQLAlchemyError as rollback_exc:
            logger.error("storage_failure", stage="rollback", error=str(rollback_exc))
            raise StorageFailure("Transaction could not be rolled back") from rollback_exc
        finally:
            self._close()

        if isinstance(exc, SQLAlchemyError):
            logger.error("storage_failure", stage="execute", error=str(exc))
            raise StorageFailure("Storage operation failed; nothing was changed") from exc

    def commit(self) -> None:
        if self._transaction is None:
            raise RuntimeError("No unit of work in progress")
        try:
            self._transaction.commit()
        except SQLAlchemyError as exc:
            logger.error("storage_failure", stage="commit", error=str(exc))
            raise StorageFailure("Transaction could not be committed") from exc

    def rollback(self) -> None:
        if self._transaction is not None and self._transaction.is_active:
            self._transaction.rollback()

    def _close(self) -> None:
        if self._connection is not None:
            self._connection.close()
        self._connection = None
        self._transaction = None
