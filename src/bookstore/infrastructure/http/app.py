"""FastAPI application: routers plus the error envelope.

Every failure leaves as ``{"status": "fail" | "error", "message": ...}``:
``fail`` for client errors, ``error`` for server errors.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    StorageFailure,
    ValidationError,
)
from bookstore.infrastructure.http.routes import order_router

logger = structlog.get_logger(__name__)


def status_code_for(exc: DomainException) -> int:
    # Not-found first: BookNotFound is also a BookUnavailable.
    if isinstance(exc, EntityNotFoundError):
        return 404
    if isinstance(exc, ValidationError):
        return 400
    return 500


def _failure(status_code: int, message: str) -> JSONResponse:
    kind = "fail" if status_code < 500 else "error"
    return JSONResponse(status_code=status_code, content={"status": kind, "message": message})


async def _domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_code_for(exc)
    if isinstance(exc, StorageFailure) or status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=str(exc))
        return _failure(500, "Something went wrong. Please try again")
    return _failure(status_code, str(exc))


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _failure(exc.status_code, str(exc.detail))


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return _failure(400, "; ".join(messages) or "Invalid request")


def create_app() -> FastAPI:
    app = FastAPI(title="Bookstore Orders")
    app.include_router(order_router)
    app.add_exception_handler(DomainException, _domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    return app
