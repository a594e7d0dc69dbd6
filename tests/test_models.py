"""Tests for Order, its status workflow and the order id generator."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from restaurant_sim.core.exceptions import InvalidTransitionError
from restaurant_sim.models import Order, OrderIDGenerator, OrderStatus


class TestOrderIDGenerator:
    def test_starts_at_one(self):
        ids = OrderIDGenerator()
        assert ids.next_id() == 1
        assert ids.next_id() == 2

    def test_concurrent_threads_never_collide(self):
        ids = OrderIDGenerator()
        with ThreadPoolExecutor(max_workers=8) as pool:
            issued = list(pool.map(lambda _: ids.next_id(), range(2000)))

        assert len(set(issued)) == 2000
        assert sorted(issued) == list(range(1, 2001))

    def test_concurrent_tasks_create_distinct_orders(self):
        async def create(n):
            await asyncio.sleep(0)
            return Order(f"Dish {n}", 1)

        async def main():
            return await asyncio.gather(*(create(n) for n in range(200)))

        orders = asyncio.run(main())
        assert len({o.id for o in orders}) == 200

    def test_orders_use_process_wide_generator(self):
        first = Order("Pizza", 2)
        second = Order("Soup", 3)
        assert second.id > first.id


class TestOrderCreation:
    def test_fields_set_at_creation(self):
        order = Order("Pasta", 4)
        assert order.dish_name == "Pasta"
        assert order.preparation_time == 4
        assert order.status == OrderStatus.CREATED
        assert order.waiter_name is None
        assert order.delivered_by is None

    def test_identity_fields_are_read_only(self):
        order = Order("Pasta", 4)
        with pytest.raises(AttributeError):
            order.id = 99
        with pytest.raises(AttributeError):
            order.dish_name = "Steak"

    def test_str_mentions_id_and_dish(self):
        order = Order("Fish", 5)
        assert str(order) == f"Order #{order.id} [Fish], prep time: 5s"


class TestOrderStatusWorkflow:
    def _delivered(self):
        order = Order("Steak", 3)
        order.assign_waiter("Waiter-1")
        order.mark_cooking()
        order.mark_ready()
        order.mark_delivered("Waiter-1")
        return order

    def test_happy_path(self):
        order = self._delivered()
        assert order.status == OrderStatus.DELIVERED
        assert order.delivered_by == "Waiter-1"
        assert list(order.timestamps) == [
            OrderStatus.CREATED,
            OrderStatus.COOKING,
            OrderStatus.READY,
            OrderStatus.DELIVERED,
        ]

    def test_cannot_skip_a_status(self):
        order = Order("Steak", 3)
        with pytest.raises(InvalidTransitionError):
            order.mark_ready()

    def test_cannot_go_backwards(self):
        order = Order("Steak", 3)
        order.mark_cooking()
        order.mark_ready()
        with pytest.raises(InvalidTransitionError):
            order.advance(OrderStatus.COOKING)
        assert order.status == OrderStatus.READY

    def test_nothing_after_delivered(self):
        order = self._delivered()
        with pytest.raises(InvalidTransitionError):
            order.advance(OrderStatus.DELIVERED)

    def test_only_creator_can_deliver(self):
        order = Order("Soup", 2)
        order.assign_waiter("Waiter-1")
        order.mark_cooking()
        order.mark_ready()
        with pytest.raises(InvalidTransitionError):
            order.mark_delivered("Waiter-2")
        assert order.status == OrderStatus.READY

    def test_waiter_assigned_once(self):
        order = Order("Soup", 2)
        order.assign_waiter("Waiter-1")
        with pytest.raises(InvalidTransitionError):
            order.assign_waiter("Waiter-2")
        assert order.waiter_name == "Waiter-1"

    def test_waiter_assigned_before_cooking(self):
        order = Order("Soup", 2)
        order.mark_cooking()
        with pytest.raises(InvalidTransitionError):
            order.assign_waiter("Waiter-1")

    def test_elapsed(self):
        order = self._delivered()
        assert order.elapsed(OrderStatus.CREATED, OrderStatus.DELIVERED) >= 0
        assert Order("Salad", 1).elapsed(OrderStatus.COOKING, OrderStatus.READY) is None
