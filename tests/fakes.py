"""In-memory fakes for testing.

These implement the same abstract interfaces as the SQL repositories
but keep everything in dicts. No file I/O, no side effects.

``FakeUnitOfWork`` behaves like a serialisable transaction: entering it
takes the store's lock and snapshots the data, ``commit()`` keeps the
changes and leaving without a commit restores the snapshot. Repositories
hand out copies, so an aggregate changed but never saved stays unsaved.
"""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field, replace

from bookstore.application.add_to_cart import AddToCartHandler
from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.dto import OrderDTO, PaymentSpec, ShippingAddressSpec
from bookstore.domain.model.book import Book
from bookstore.domain.model.cart import Cart
from bookstore.domain.model.order import Order, OrderStatus
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.cart_repository import CartRepository
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.domain.repository.unit_of_work import UnitOfWork


@dataclass
class FakeData:
    books: dict[str, Book] = field(default_factory=dict)
    carts: dict[str, Cart] = field(default_factory=dict)
    orders: dict[int, Order] = field(default_factory=dict)
    next_order_id: int = 1


class FakeStore:
    """The shared 'database' several units of work can point at."""

    def __init__(self, books: list[Book] | None = None) -> None:
        self.data = FakeData()
        self.lock = threading.Lock()
        # (table, key) of every locking read, in order
        self.locked_rows: list[tuple[str, object]] = []
        for book in books or []:
            self.data.books[book.id] = copy.deepcopy(book)

    def book(self, book_id: str) -> Book:
        return self.data.books[book_id]


class FakeBookRepository(BookRepository):

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def get_by_id(self, book_id: str) -> Book | None:
        return copy.deepcopy(self._store.data.books.get(book_id))

    def get_for_update(self, book_id: str) -> Book | None:
        self._store.locked_rows.append(("books", book_id))
        return self.get_by_id(book_id)

    def get_by_isbn(self, isbn: str) -> Book | None:
        for book in self._store.data.books.values():
            if book.isbn == isbn:
                return copy.deepcopy(book)
        return None

    def list_all(self) -> list[Book]:
        return [copy.deepcopy(b) for b in self._store.data.books.values()]

    def add(self, book: Book) -> None:
        self._store.data.books[book.id] = copy.deepcopy(book)

    def adjust_stock(self, book_id: str, delta: int) -> bool:
        book = self._store.data.books.get(book_id)
        if book is None or book.stock + delta < 0:
            return False
        book.stock += delta
        return True

    def set_stock(self, book_id: str, stock: int) -> bool:
        book = self._store.data.books.get(book_id)
        if book is None:
            return False
        book.stock = stock
        return True


class FakeCartRepository(CartRepository):

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def get_by_user_id(self, user_id: str) -> Cart | None:
        return copy.deepcopy(self._store.data.carts.get(user_id))

    def get_for_update(self, user_id: str) -> Cart | None:
        self._store.locked_rows.append(("carts", user_id))
        return self.get_by_user_id(user_id)

    def save(self, cart: Cart) -> None:
        self._store.data.carts[cart.user_id] = copy.deepcopy(cart)


class FakeOrderRepository(OrderRepository):

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def get_by_id(self, order_id: int) -> Order | None:
        return copy.deepcopy(self._store.data.orders.get(order_id))

    def get_for_user(self, order_id: int, user_id: str) -> Order | None:
        order = self._store.data.orders.get(order_id)
        if order is None or order.user_id != user_id:
            return None
        return copy.deepcopy(order)

    def get_for_update(self, order_id: int, user_id: str | None = None) -> Order | None:
        self._store.locked_rows.append(("orders", order_id))
        if user_id is None:
            return self.get_by_id(order_id)
        return self.get_for_user(order_id, user_id)

    def find(
        self,
        *,
        user_id: str | None = None,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> list[Order]:
        matches = self._matching(user_id, status)
        matches.sort(key=lambda o: (o.created_at, o.id), reverse=True)
        return [copy.deepcopy(o) for o in matches[offset:offset + limit]]

    def count(
        self,
        *,
        user_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> int:
        return len(self._matching(user_id, status))

    def add(self, order: Order) -> None:
        order.id = self._store.data.next_order_id
        self._store.data.next_order_id += 1
        self._store.data.orders[order.id] = copy.deepcopy(order)

    def save(self, order: Order) -> None:
        stored = self._store.data.orders[order.id]
        self._store.data.orders[order.id] = replace(
            stored,
            status=order.status,
            tracking_number=order.tracking_number,
            updated_at=order.updated_at,
        )

    def _matching(self, user_id: str | None, status: OrderStatus | None) -> list[Order]:
        return [
            o
            for o in self._store.data.orders.values()
            if (user_id is None or o.user_id == user_id)
            and (status is None or o.status == status)
        ]


class FakeUnitOfWork(UnitOfWork):

    def __init__(self, store: FakeStore | None = None) -> None:
        self.store = store or FakeStore()
        self.books = FakeBookRepository(self.store)
        self.carts = FakeCartRepository(self.store)
        self.orders = FakeOrderRepository(self.store)
        self.commits = 0
        self._snapshot: FakeData | None = None

    def __enter__(self) -> FakeUnitOfWork:
        self.store.lock.acquire()
        self._snapshot = copy.deepcopy(self.store.data)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._snapshot = None
            self.store.lock.release()

    def commit(self) -> None:
        self._snapshot = copy.deepcopy(self.store.data)
        self.commits += 1

    def rollback(self) -> None:
        if self._snapshot is not None:
            self.store.data = copy.deepcopy(self._snapshot)


# --- Builders ---------------------------------------------------------------


def make_book(
    book_id: str = "b1",
    title: str = "Dune",
    price: str = "10.00",
    stock: int = 5,
    isbn: str | None = None,
) -> Book:
    return Book(
        id=book_id,
        isbn=isbn or f"isbn-{book_id}",
        title=title,
        author="Frank Herbert",
        price=Money.of(price),
        stock=stock,
    )


ADDRESS = ShippingAddressSpec(
    street="1 Main St",
    city="Springfield",
    state="IL",
    zip_code="62701",
    country="US",
)
PAYMENT = PaymentSpec(method="credit_card")


def place_order(
    uow: UnitOfWork,
    user_id: str,
    lines: dict[str, int],
    payment: PaymentSpec = PAYMENT,
) -> OrderDTO:
    """Fill the user's cart with ``{book_id: quantity}`` and check out."""
    adder = AddToCartHandler(uow)
    for book_id, quantity in lines.items():
        adder.handle(user_id, book_id, quantity)
    return CreateOrderHandler(uow).handle(user_id, ADDRESS, payment)
