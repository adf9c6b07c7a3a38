"""SQL schema for books, carts and orders.

Cart and order line items are embedded as JSON, the way the documents
they replace embedded them. Money is stored as decimal strings.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Engine,
    Integer,
    MetaData,
    String,
    Table,
)

metadata = MetaData()

books = Table(
    "books",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("isbn", String(32), nullable=False, unique=True),
    Column("title", String(200), nullable=False),
    Column("author", String(200), nullable=False),
    Column("price", String(20), nullable=False),
    Column("currency", String(3), nullable=False, default="USD"),
    Column("cover_image", String(255), nullable=False),
    Column("stock", Integer, nullable=False, default=0),
    # Denormalised copy of stock > 0 for filtering; written only with stock.
    Column("is_available", Boolean, nullable=False, default=False),
    CheckConstraint("stock >= 0", name="ck_books_stock_non_negative"),
)

carts = Table(
    "carts",
    metadata,
    Column("user_id", String(64), primary_key=True),
    Column("items", JSON, nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("items", JSON, nullable=False),
    Column("shipping_address", JSON, nullable=False),
    Column("payment_method", String(20), nullable=False),
    Column("payment_status", String(20), nullable=False),
    Column("transaction_id", String(100)),
    Column("total_amount", String(20), nullable=False),
    Column("currency", String(3), nullable=False, default="USD"),
    Column("status", String(20), nullable=False, index=True),
    Column("tracking_number", String(100)),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)


def create_schema(engine: Engine) -> None:
    metadata.create_all(engine)


def as_utc(value: datetime) -> datetime:
    """SQLite hands timestamps back naive; they were written as UTC."""
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
