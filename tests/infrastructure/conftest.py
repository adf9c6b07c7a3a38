import pytest

from bookstore.infrastructure.persistence.engine import build_engine
from bookstore.infrastructure.persistence.tables import create_schema


@pytest.fixture
def engine(tmp_path):
    """A file-backed SQLite database, so separate connections share it."""
    built = build_engine(f"sqlite:///{tmp_path / 'bookstore.db'}", sqlite_timeout=10.0)
    create_schema(built)
    yield built
    built.dispose()
