"""CLI tests via click's CliRunner against a temporary SQLite database."""

import logging

import pytest
import structlog
from click.testing import CliRunner

from bookstore.infrastructure import bootstrap
from bookstore.infrastructure.cli.main import cli
from tests.fakes import make_book
from tests.infrastructure.sql_helpers import seed_books, stock_of


@pytest.fixture()
def db(tmp_path, monkeypatch):
    monkeypatch.setenv("BOOKSTORE_DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("BOOKSTORE_ENV", "test")
    bootstrap.settings.cache_clear()
    bootstrap.engine.cache_clear()
    engine = bootstrap.engine()
    seed_books(engine, make_book("b1", title="Dune", price="15.00", stock=5))
    yield engine
    engine.dispose()
    bootstrap.settings.cache_clear()
    bootstrap.engine.cache_clear()
    logging.getLogger().handlers = []
    structlog.reset_defaults()


def _run(*args):
    return CliRunner().invoke(cli, list(args))


ORDER_ARGS = [
    "--street", "1 Main St",
    "--city", "Springfield",
    "--state", "IL",
    "--zip-code", "62701",
    "--country", "US",
    "--payment-method", "paypal",
]


class TestBookCommands:

    def test_add_and_list(self, db):
        added = _run(
            "book", "add", "--isbn", "978-1", "--title", "Emma",
            "--author", "Jane Austen", "--price", "8.50", "--stock", "2",
        )
        assert added.exit_code == 0, added.output
        assert "'Emma' added at $8.50 (stock=2)" in added.output

        listed = _run("book", "list")
        assert "Emma" in listed.output
        assert "Dune" in listed.output

    def test_duplicate_isbn_fails(self, db):
        result = _run(
            "book", "add", "--isbn", "isbn-b1", "--title", "Dune",
            "--author", "Frank Herbert", "--price", "1",
        )
        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_set_stock(self, db):
        result = _run("book", "stock", "--id", "b1", "--quantity", "9")
        assert result.exit_code == 0, result.output
        assert stock_of(db, "b1") == 9


class TestCheckoutFlow:

    def test_add_checkout_cancel(self, db):
        added = _run("cart", "add", "--user", "alice", "--book", "b1", "--quantity", "3")
        assert added.exit_code == 0, added.output
        assert "Item added to cart" in added.output

        created = _run("order", "create", "--user", "alice", *ORDER_ARGS)
        assert created.exit_code == 0, created.output
        assert "Order #1 created" in created.output
        assert stock_of(db, "b1") == 2

        shown = _run("order", "show", "--id", "1", "--user", "alice")
        assert "$45.00" in shown.output

        listed = _run("order", "list", "--user", "alice")
        assert "processing" in listed.output

        cancelled = _run("order", "cancel", "--id", "1", "--user", "alice")
        assert cancelled.exit_code == 0, cancelled.output
        assert "Order #1 cancelled, stock released." in cancelled.output
        assert stock_of(db, "b1") == 5

    def test_checkout_with_empty_cart_fails(self, db):
        result = _run("order", "create", "--user", "bob", *ORDER_ARGS)
        assert result.exit_code != 0
        assert "Cart is empty" in result.output

    def test_other_user_cannot_see_order(self, db):
        _run("cart", "add", "--user", "alice", "--book", "b1")
        _run("order", "create", "--user", "alice", *ORDER_ARGS)

        hidden = _run("order", "show", "--id", "1", "--user", "bob")
        admin = _run("order", "show", "--id", "1", "--user", "ops", "--admin")

        assert hidden.exit_code != 0
        assert "Order not found" in hidden.output
        assert admin.exit_code == 0, admin.output

    def test_update_status(self, db):
        _run("cart", "add", "--user", "alice", "--book", "b1")
        _run("order", "create", "--user", "alice", *ORDER_ARGS)

        result = _run(
            "order", "update-status", "--id", "1",
            "--status", "shipped", "--tracking-number", "1Z9",
        )

        assert result.exit_code == 0, result.output
        assert "Order #1 is now shipped." in result.output
        listed = _run("order", "list-all", "--status", "shipped")
        assert "alice" in listed.output

    def test_update_status_needs_something_to_do(self, db):
        result = _run("order", "update-status", "--id", "1")
        assert result.exit_code != 0
        assert "Nothing to update" in result.output

    def test_cart_show_and_clear(self, db):
        _run("cart", "add", "--user", "alice", "--book", "b1", "--quantity", "2")
        shown = _run("cart", "show", "--user", "alice")
        assert "$30.00" in shown.output

        cleared = _run("cart", "clear", "--user", "alice")
        assert "Cart cleared" in cleared.output
        assert "is empty" in _run("cart", "show", "--user", "alice").output
