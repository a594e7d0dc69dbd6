"""
Waiter

Each waiter runs its own loop:

    IDLE -> GENERATING_ORDER -> SUBMITTING -> AWAITING_COMPLETION -> DELIVERING -> IDLE

A waiter waits only on the completion slot of the order it just submitted,
never on a queue shared with other waiters, so it can only ever deliver
its own dish.

stop() is cooperative: a waiter that already submitted an order sees it
through to delivery (or to the kitchen abandoning it) before leaving.
"""

import asyncio
import enum
import logging
import random
from typing import Optional

from restaurant_sim.core.exceptions import OrderAbandonedError
from restaurant_sim.models import Order
from restaurant_sim.services.ledger import DeliveryLedger
from restaurant_sim.services.menu.base import BaseOrderGenerator
from restaurant_sim.services.routing import CompletionRouter

logger = logging.getLogger(__name__)


class WaiterState(str, enum.Enum):
    IDLE = "idle"
    GENERATING_ORDER = "generating_order"
    SUBMITTING = "submitting"
    AWAITING_COMPLETION = "awaiting_completion"
    DELIVERING = "delivering"
    STOPPED = "stopped"


class Waiter:
    """
    Producer of orders and consumer of its own completions.

    Attributes:
        name: Waiter identity, stamped on every order it takes
        state: Current WaiterState
        current_order: Order submitted and not yet delivered or lost
        orders_submitted / orders_delivered / orders_lost: Counters
    """

    def __init__(
        self,
        name: str,
        kitchen_queue: "asyncio.Queue[Order]",
        router: CompletionRouter,
        generator: BaseOrderGenerator,
        delivery_time: float = 0.5,
        intake_delay: tuple[float, float] = (0.5, 2.0),
        ledger: Optional[DeliveryLedger] = None,
        seed: Optional[int] = None,
    ):
        self.name = name
        self._queue = kitchen_queue
        self._router = router
        self._generator = generator
        self._ledger = ledger
        self._stop = asyncio.Event()
        self._random = random.Random(seed)
        self.delivery_time = delivery_time
        self.intake_delay = intake_delay

        self.state = WaiterState.IDLE
        self.current_order: Optional[Order] = None
        self.orders_submitted = 0
        self.orders_delivered = 0
        self.orders_lost = 0

    # =========================================================================
    # CONTROL
    # =========================================================================

    def stop(self) -> None:
        """Finish the order in hand, then leave."""
        self._stop.set()

    async def run(self) -> None:
        logger.info(f"[{self.name}] Started shift")

        while not self._stop.is_set():
            if await self._pause():
                break
            await self.serve_one()

        self.state = WaiterState.STOPPED
        logger.info(
            f"[{self.name}] Finished shift "
            f"({self.orders_delivered} delivered, {self.orders_lost} lost)"
        )

    # =========================================================================
    # ONE ORDER
    # =========================================================================

    def submit(self, order: Order) -> asyncio.Future:
        """
        Route and enqueue an order in one step.

        The routing entry exists before the order becomes visible to the
        kitchen; nothing awaits in between.

        Returns:
            asyncio.Future: This waiter's completion slot for the order
        """
        self.state = WaiterState.SUBMITTING
        order.assign_waiter(self.name)
        slot = self._router.install(order)
        self._queue.put_nowait(order)

        self.current_order = order
        self.orders_submitted += 1
        logger.info(f"[{self.name}] Sent to kitchen: {order}")
        return slot

    async def serve_one(self) -> Optional[Order]:
        """
        Take, submit, await and deliver a single order.

        Returns:
            Order: The delivered order, or None if the kitchen abandoned it
        """
        self.state = WaiterState.GENERATING_ORDER
        choice = self._generator.next_dish()
        order = Order(choice.dish_name, choice.preparation_time)

        slot = self.submit(order)

        self.state = WaiterState.AWAITING_COMPLETION
        logger.info(f"[{self.name}] Waiting for Order #{order.id}")
        try:
            ready = await slot
        except OrderAbandonedError as e:
            logger.warning(f"[{self.name}] {e}")
            self.orders_lost += 1
            self.current_order = None
            self.state = WaiterState.IDLE
            return None

        await self._deliver(ready)
        self.current_order = None
        self.state = WaiterState.IDLE
        return ready

    async def _deliver(self, order: Order) -> None:
        self.state = WaiterState.DELIVERING
        await asyncio.sleep(self.delivery_time)

        order.mark_delivered(self.name)
        self._router.release(order)
        if self._ledger is not None:
            self._ledger.record(order)

        self.orders_delivered += 1
        logger.info(f"[{self.name}] Delivered {order.dish_name} (Order #{order.id})")

    async def _pause(self) -> bool:
        """
        Wait before taking the next order.

        Returns:
            bool: True if stop() was requested during the pause
        """
        low, high = self.intake_delay
        try:
            await asyncio.wait_for(self._stop.wait(), self._random.uniform(low, high))
        except asyncio.TimeoutError:
            return self._stop.is_set()
        return True
