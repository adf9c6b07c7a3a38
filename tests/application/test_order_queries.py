"""Tests for order queries and the admin status update."""

import pytest

from bookstore.application.dto import ROLE_ADMIN, Requester
from bookstore.application.list_orders import ListAllOrdersHandler, ListOrdersHandler
from bookstore.application.show_order import ShowOrderHandler
from bookstore.application.update_order_status import UpdateOrderStatusHandler
from bookstore.domain.exceptions import OrderNotFound, ValidationError
from tests.fakes import FakeStore, FakeUnitOfWork, make_book, place_order


def _setup() -> FakeUnitOfWork:
    return FakeUnitOfWork(FakeStore([make_book("b1", stock=100)]))


class TestShowOrder:

    def test_owner_sees_order(self):
        uow = _setup()
        order = place_order(uow, "u1", {"b1": 2})
        shown = ShowOrderHandler(uow).handle(Requester("u1"), order.id)
        assert shown == order

    def test_other_user_gets_not_found(self):
        uow = _setup()
        order = place_order(uow, "u1", {"b1": 2})
        with pytest.raises(OrderNotFound):
            ShowOrderHandler(uow).handle(Requester("u2"), order.id)

    def test_admin_sees_any_order(self):
        uow = _setup()
        order = place_order(uow, "u1", {"b1": 2})
        shown = ShowOrderHandler(uow).handle(Requester("ops", ROLE_ADMIN), order.id)
        assert shown.id == order.id


class TestListOrders:

    def test_only_own_orders_newest_first(self):
        uow = _setup()
        first = place_order(uow, "u1", {"b1": 1})
        place_order(uow, "u2", {"b1": 1})
        third = place_order(uow, "u1", {"b1": 1})

        page = ListOrdersHandler(uow).handle("u1")

        assert [o.id for o in page.orders] == [third.id, first.id]
        assert page.results == 2
        assert page.total_pages == 1
        assert page.current_page == 1

    def test_pagination(self):
        uow = _setup()
        ids = [place_order(uow, "u1", {"b1": 1}).id for _ in range(5)]

        handler = ListOrdersHandler(uow)
        first = handler.handle("u1", page=1, limit=2)
        last = handler.handle("u1", page=3, limit=2)

        assert first.total_pages == 3
        assert [o.id for o in first.orders] == [ids[4], ids[3]]
        assert [o.id for o in last.orders] == [ids[0]]

    def test_page_past_the_end_is_empty(self):
        uow = _setup()
        place_order(uow, "u1", {"b1": 1})
        page = ListOrdersHandler(uow).handle("u1", page=4, limit=10)
        assert page.orders == []
        assert page.total_pages == 1

    def test_no_orders(self):
        page = ListOrdersHandler(_setup()).handle("u1")
        assert page.orders == []
        assert page.total_pages == 0

    @pytest.mark.parametrize("page, limit", [(0, 10), (1, 0)])
    def test_bad_window_rejected(self, page, limit):
        with pytest.raises(ValidationError):
            ListOrdersHandler(_setup()).handle("u1", page=page, limit=limit)


class TestListAllOrders:

    def test_lists_every_user(self):
        uow = _setup()
        place_order(uow, "u1", {"b1": 1})
        place_order(uow, "u2", {"b1": 1})
        page = ListAllOrdersHandler(uow).handle()
        assert {o.user_id for o in page.orders} == {"u1", "u2"}

    def test_filter_by_status_and_user(self):
        uow = _setup()
        a = place_order(uow, "u1", {"b1": 1})
        place_order(uow, "u1", {"b1": 1})
        c = place_order(uow, "u2", {"b1": 1})
        updater = UpdateOrderStatusHandler(uow)
        updater.handle(a.id, status="shipped")
        updater.handle(c.id, status="shipped")

        handler = ListAllOrdersHandler(uow)
        shipped = handler.handle(status="shipped")
        shipped_u1 = handler.handle(status="shipped", user_id="u1")

        assert {o.id for o in shipped.orders} == {a.id, c.id}
        assert [o.id for o in shipped_u1.orders] == [a.id]

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError, match="Invalid order status"):
            ListAllOrdersHandler(_setup()).handle(status="lost")


class TestUpdateOrderStatus:

    def test_set_status_and_tracking(self):
        uow = _setup()
        order = place_order(uow, "u1", {"b1": 1})

        updated = UpdateOrderStatusHandler(uow).handle(
            order.id, status="shipped", tracking_number="1Z999"
        )

        assert updated.status == "shipped"
        assert updated.tracking_number == "1Z999"
        assert updated.updated_at >= order.updated_at

    def test_tracking_only(self):
        uow = _setup()
        order = place_order(uow, "u1", {"b1": 1})
        updated = UpdateOrderStatusHandler(uow).handle(order.id, tracking_number="1Z1")
        assert updated.status == "processing"
        assert updated.tracking_number == "1Z1"

    def test_override_off_the_graph_is_allowed(self):
        uow = _setup()
        order = place_order(uow, "u1", {"b1": 1})
        handler = UpdateOrderStatusHandler(uow)
        handler.handle(order.id, status="delivered")

        updated = handler.handle(order.id, status="processing")

        assert updated.status == "processing"

    def test_status_override_never_touches_stock(self):
        uow = _setup()
        order = place_order(uow, "u1", {"b1": 4})
        UpdateOrderStatusHandler(uow).handle(order.id, status="cancelled")
        assert uow.store.book("b1").stock == 96

    def test_locks_the_order_row(self):
        uow = _setup()
        order = place_order(uow, "u1", {"b1": 1})
        uow.store.locked_rows.clear()
        UpdateOrderStatusHandler(uow).handle(order.id, status="shipped")
        assert uow.store.locked_rows == [("orders", order.id)]

    def test_unknown_order(self):
        with pytest.raises(OrderNotFound):
            UpdateOrderStatusHandler(_setup()).handle(42, status="shipped")

    def test_invalid_status(self):
        uow = _setup()
        order = place_order(uow, "u1", {"b1": 1})
        with pytest.raises(ValidationError, match="Invalid order status"):
            UpdateOrderStatusHandler(uow).handle(order.id, status="teleported")
