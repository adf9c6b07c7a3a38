"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and map them to
user-friendly messages and status codes.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageFailure(DomainException):
    """The store aborted the unit of work or could not be reached."""


# --- Cart -----------------------------------------------------------------


class EmptyCart(ValidationError):
    def __init__(self, message: str = "Cart is empty") -> None:
        super().__init__(message)


class CartNotFound(EntityNotFoundError):
    def __init__(self, message: str = "Cart not found") -> None:
        super().__init__(message)


class ItemNotFound(EntityNotFoundError):
    def __init__(self, message: str = "Item not found in cart") -> None:
        super().__init__(message)


# --- Inventory --------------------------------------------------------------


class BookUnavailable(ValidationError):
    def __init__(
        self, message: str = "Book is not available in the requested quantity"
    ) -> None:
        super().__init__(message)


class BookNotFound(EntityNotFoundError, BookUnavailable):
    """The book does not exist, so it is unavailable in any quantity."""

    def __init__(self, message: str = "Book not found") -> None:
        super().__init__(message)


class InsufficientStock(ValidationError):
    """Stock cannot cover a requested quantity.

    Carries the offending book so callers can tell the user which line
    of their cart failed.
    """

    def __init__(self, book_id: str, title: str) -> None:
        self.book_id = book_id
        self.title = title
        super().__init__(f'Book "{title}" is not available in requested quantity')


# --- Orders -----------------------------------------------------------------


class OrderNotFound(EntityNotFoundError):
    def __init__(self, message: str = "Order not found") -> None:
        super().__init__(message)


class InvalidTransition(ValidationError):
    """A status change the order's current state does not allow."""
