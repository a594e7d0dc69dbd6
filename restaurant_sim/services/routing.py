"""
Completion Routing

Maps every order in flight to the single-slot completion signal of the
waiter who submitted it. A cook that finishes an order resolves exactly
that slot, so a waiter only ever wakes up for its own dish.

Lifecycle of an entry:
    install()  - waiter, right before the order enters the kitchen queue
    complete() - cook, when the dish is ready (entry removed)
    abandon()  - kitchen, when a forced shutdown drops the order (entry removed)
    release()  - waiter, once the ready dish has been delivered
"""

import asyncio
import logging
from typing import Optional

from restaurant_sim.core.exceptions import (
    OrderAbandonedError,
    RoutingConflictError,
    RoutingMissingError,
)
from restaurant_sim.models import Order

logger = logging.getLogger(__name__)


class CompletionRouter:
    """
    Routing table: order id -> completion slot.

    All methods are synchronous and must be called from the event loop
    thread, which makes each of them atomic with respect to other tasks.
    """

    def __init__(self) -> None:
        self._slots: dict[int, asyncio.Future] = {}
        self._ready: set[int] = set()

    # =========================================================================
    # WAITER SIDE
    # =========================================================================

    def install(self, order: Order) -> asyncio.Future:
        """
        Create the completion slot for an order.

        Args:
            order: Order about to be sent to the kitchen

        Returns:
            asyncio.Future: Resolves with the ready order, or fails with
            OrderAbandonedError

        Raises:
            RoutingConflictError: If the order is already routed
        """
        if order.id in self._slots:
            raise RoutingConflictError(order.id)

        slot = asyncio.get_running_loop().create_future()
        self._slots[order.id] = slot
        logger.debug(f"Routing entry installed for Order #{order.id} ({order.waiter_name})")
        return slot

    def release(self, order: Order) -> None:
        """Forget a ready order once its waiter has delivered it."""
        self._ready.discard(order.id)

    # =========================================================================
    # KITCHEN SIDE
    # =========================================================================

    def complete(self, order: Order) -> None:
        """
        Hand a ready order to the waiter awaiting it.

        Raises:
            RoutingMissingError: If no waiter is registered for the order
        """
        slot = self._slots.pop(order.id, None)
        if slot is None:
            raise RoutingMissingError(order.id)

        if slot.done():
            # The waiter was cancelled while waiting; nobody will deliver it
            logger.warning(f"Order #{order.id} is ready but its waiter is gone")
            return

        self._ready.add(order.id)
        slot.set_result(order)

    def abandon(self, order: Order, reason: Optional[str] = None) -> None:
        """Fail the waiter's slot for an order the kitchen will never finish."""
        slot = self._slots.pop(order.id, None)
        if slot is None or slot.done():
            return
        slot.set_exception(OrderAbandonedError(order.id, reason))

    # =========================================================================
    # INTROSPECTION
    # =========================================================================

    def is_routed(self, order_id: int) -> bool:
        return order_id in self._slots

    @property
    def in_flight(self) -> int:
        """Orders submitted but not yet ready."""
        return len(self._slots)

    @property
    def ready_count(self) -> int:
        """Ready orders handed to a waiter but not yet delivered."""
        return len(self._ready)
