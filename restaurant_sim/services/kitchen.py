"""
Kitchen Worker Pool

A fixed number of cooks share one backlog of accepted orders. Each cook
takes an order, marks it COOKING, sleeps for its preparation time, marks it
READY and hands it to the completion callback (the router).

Shutdown:
    1. Stop accepting orders
    2. Wait up to `timeout` for the backlog and every cook to finish
    3. Drop whatever never started and cancel whatever is still cooking;
       each dropped order is reported to the abandon callback
"""

import asyncio
import logging
from typing import Callable, Optional

from restaurant_sim.core.exceptions import KitchenClosedError, RestaurantError
from restaurant_sim.models import Order

logger = logging.getLogger(__name__)

ReadyCallback = Callable[[Order], None]
AbandonCallback = Callable[[Order, str], None]


class CookingWorkerPool:
    """
    Bounded-concurrency executor for cooking orders.

    Attributes:
        size: Number of cooks (maximum orders cooking at once)
        completed: Orders that reached READY
        abandoned_order_ids: Orders dropped by a forced shutdown
        faults: Internal consistency errors raised by the ready callback

    Example:
        >>> pool = CookingWorkerPool(3, on_ready=router.complete)
        >>> pool.submit(order)
        >>> drained = await pool.shutdown(timeout=5.0)
    """

    def __init__(
        self,
        size: int,
        on_ready: ReadyCallback,
        on_abandoned: Optional[AbandonCallback] = None,
    ):
        if size <= 0:
            raise ValueError("Kitchen size must be a positive integer")

        self.size = size
        self._on_ready = on_ready
        self._on_abandoned = on_abandoned
        self._backlog: asyncio.Queue[Order] = asyncio.Queue()
        self._cooks: list[asyncio.Task] = []
        self._active = 0
        self._closed = False

        self.completed = 0
        self.abandoned_order_ids: list[int] = []
        self.faults: list[RestaurantError] = []

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def start(self) -> None:
        """Spawn the cooks. Called implicitly by the first submit()."""
        if self._cooks:
            return
        self._cooks = [
            asyncio.create_task(self._cook(f"cook-{i}"), name=f"cook-{i}")
            for i in range(1, self.size + 1)
        ]
        logger.info(f"Kitchen opened with {self.size} cooks")

    def submit(self, order: Order) -> None:
        """
        Accept an order for cooking. Never blocks.

        Raises:
            KitchenClosedError: If shutdown() has been called
        """
        if self._closed:
            raise KitchenClosedError(f"Kitchen is closed, Order #{order.id} refused")
        self.start()
        self._backlog.put_nowait(order)

    def active_count(self) -> int:
        """Cooks currently preparing an order (not idle, not queued work)."""
        return self._active

    def backlog_size(self) -> int:
        """Accepted orders no cook has picked up yet."""
        return self._backlog.qsize()

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def shutdown(self, timeout: float) -> bool:
        """
        Stop accepting orders and drain the kitchen.

        Args:
            timeout: Seconds to wait for outstanding orders

        Returns:
            bool: True if every accepted order finished in time
        """
        self._closed = True
        drained = True

        try:
            await asyncio.wait_for(self._backlog.join(), timeout)
        except asyncio.TimeoutError:
            drained = False
            logger.warning(
                f"Kitchen did not drain within {timeout}s "
                f"({self._active} cooking, {self._backlog.qsize()} waiting)"
            )

        while not self._backlog.empty():
            order = self._backlog.get_nowait()
            self._backlog.task_done()
            self._abandon(order, "kitchen closed before cooking started")

        for cook in self._cooks:
            cook.cancel()
        await asyncio.gather(*self._cooks, return_exceptions=True)

        logger.info(
            f"Kitchen closed: {self.completed} cooked, "
            f"{len(self.abandoned_order_ids)} abandoned"
        )
        return drained

    # =========================================================================
    # COOKS
    # =========================================================================

    async def _cook(self, name: str) -> None:
        while True:
            order = await self._backlog.get()
            self._active += 1
            try:
                await self._prepare(name, order)
            except asyncio.CancelledError:
                logger.warning(f"[{name}] Abandoned {order.dish_name} (Order #{order.id})")
                self._abandon(order, "cancelled mid-preparation")
                raise
            except RestaurantError as e:
                logger.critical(f"[{name}] Order #{order.id}: {e}")
                self.faults.append(e)
            finally:
                self._active -= 1
                self._backlog.task_done()

    async def _prepare(self, name: str, order: Order) -> None:
        order.mark_cooking()
        logger.info(f"[{name}] Started cooking {order.dish_name} (Order #{order.id})")

        await asyncio.sleep(order.preparation_time)

        order.mark_ready()
        self.completed += 1
        logger.info(f"[{name}] Finished {order.dish_name} (Order #{order.id})")

        self._on_ready(order)

    def _abandon(self, order: Order, reason: str) -> None:
        self.abandoned_order_ids.append(order.id)
        if self._on_abandoned is not None:
            self._on_abandoned(order, reason)
