"""
Kitchen Dispatcher

Moves orders from the shared kitchen queue into the worker pool. Submitting
never waits for cooking, so the dispatcher keeps up no matter how busy the
cooks are; the pool enforces the concurrency limit.

The dispatcher polls with a bounded timeout so it notices its stop token
promptly, and it only exits once stopped AND the queue is empty.
"""

import asyncio
import logging

from restaurant_sim.models import Order
from restaurant_sim.services.kitchen import CookingWorkerPool

logger = logging.getLogger(__name__)


class KitchenDispatcher:
    """
    Single consumer of the kitchen queue.

    Attributes:
        poll_interval: Seconds to wait for an order before re-checking the stop token
        dispatched: Number of orders handed to the pool
    """

    def __init__(
        self,
        kitchen_queue: "asyncio.Queue[Order]",
        pool: CookingWorkerPool,
        poll_interval: float = 1.0,
    ):
        self._queue = kitchen_queue
        self._pool = pool
        self._stop = asyncio.Event()
        self.poll_interval = poll_interval
        self.dispatched = 0

    def stop(self) -> None:
        """Ask the dispatcher to finish once the queue is empty."""
        self._stop.set()

    async def run(self) -> None:
        logger.info("Dispatcher started")

        while not (self._stop.is_set() and self._queue.empty()):
            try:
                order = await asyncio.wait_for(self._queue.get(), self.poll_interval)
            except asyncio.TimeoutError:
                continue

            try:
                self._pool.submit(order)
                self.dispatched += 1
                logger.debug(f"Dispatched Order #{order.id} to the kitchen")
            finally:
                self._queue.task_done()

        logger.info(f"Dispatcher stopped after {self.dispatched} orders")
