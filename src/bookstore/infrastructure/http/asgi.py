"""ASGI entry point: ``uvicorn bookstore.infrastructure.http.asgi:app``."""

from bookstore.infrastructure.bootstrap import init_logging
from bookstore.infrastructure.http.app import create_app

init_logging()
app = create_app()
