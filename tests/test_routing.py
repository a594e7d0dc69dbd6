"""Tests for the routing table between cooks and waiters."""

import asyncio

import pytest

from restaurant_sim.core.exceptions import (
    OrderAbandonedError,
    RoutingConflictError,
    RoutingMissingError,
)
from restaurant_sim.models import Order
from restaurant_sim.services.routing import CompletionRouter


def _ready_order(waiter="Waiter-1"):
    order = Order("Pizza", 1)
    order.assign_waiter(waiter)
    return order


class TestCompletionRouter:
    def test_complete_resolves_the_owner_slot(self):
        async def main():
            router = CompletionRouter()
            order = _ready_order()
            slot = router.install(order)
            assert router.is_routed(order.id)
            assert router.in_flight == 1

            router.complete(order)
            assert await slot is order
            assert not router.is_routed(order.id)
            assert router.in_flight == 0
            assert router.ready_count == 1

            router.release(order)
            assert router.ready_count == 0

        asyncio.run(main())

    def test_each_order_has_its_own_slot(self):
        async def main():
            router = CompletionRouter()
            mine, theirs = _ready_order("Waiter-1"), _ready_order("Waiter-2")
            my_slot = router.install(mine)
            their_slot = router.install(theirs)

            router.complete(theirs)
            assert their_slot.done()
            assert not my_slot.done()

            router.complete(mine)
            assert await my_slot is mine

        asyncio.run(main())

    def test_missing_entry_is_an_error(self):
        async def main():
            router = CompletionRouter()
            with pytest.raises(RoutingMissingError) as exc:
                router.complete(_ready_order())
            return exc.value

        error = asyncio.run(main())
        assert "No routing entry" in str(error)

    def test_entry_consumed_at_most_once(self):
        async def main():
            router = CompletionRouter()
            order = _ready_order()
            router.install(order)
            router.complete(order)
            with pytest.raises(RoutingMissingError):
                router.complete(order)

        asyncio.run(main())

    def test_install_twice_is_rejected(self):
        async def main():
            router = CompletionRouter()
            order = _ready_order()
            router.install(order)
            with pytest.raises(RoutingConflictError):
                router.install(order)

        asyncio.run(main())

    def test_abandon_fails_the_slot(self):
        async def main():
            router = CompletionRouter()
            order = _ready_order()
            slot = router.install(order)
            router.abandon(order, "kitchen closed")
            assert not router.is_routed(order.id)
            with pytest.raises(OrderAbandonedError) as exc:
                await slot
            assert exc.value.order_id == order.id
            assert router.ready_count == 0

        asyncio.run(main())

    def test_complete_after_waiter_cancelled(self):
        async def main():
            router = CompletionRouter()
            order = _ready_order()
            slot = router.install(order)
            slot.cancel()
            router.complete(order)
            assert router.ready_count == 0

        asyncio.run(main())
