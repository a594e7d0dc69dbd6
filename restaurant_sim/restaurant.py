"""
Restaurant Orchestrator

Owns the shared kitchen queue, the routing table, the kitchen and the
waiters, and runs them together on the event loop.

Lifecycle:
    NEW --start()--> OPEN --stop()--> CLOSING --> CLOSED

Shutdown sequence (stop()):
    1. Leave the OPEN state; the monitor stops reporting
    2. Ask every waiter to stop after its current order; wait a bounded time
       (late waiters are logged and left running, never cancelled)
    3. Stop the dispatcher once the kitchen queue is empty
    4. Shut down the kitchen with its own timeout; anything still cooking
       is cancelled and its waiter is told the order was abandoned

Usage:
    async with Restaurant(kitchen_size=3, waiter_count=4) as restaurant:
        await asyncio.sleep(30)
    print(restaurant.report)
"""

import asyncio
import enum
import logging
from datetime import datetime
from typing import Optional

from restaurant_sim.core.config import Settings, get_settings
from restaurant_sim.core.exceptions import RestaurantStateError
from restaurant_sim.models import Order
from restaurant_sim.schemas import MonitorSnapshot, ShutdownReport
from restaurant_sim.services.dispatcher import KitchenDispatcher
from restaurant_sim.services.kitchen import CookingWorkerPool
from restaurant_sim.services.ledger import DeliveryLedger
from restaurant_sim.services.menu import (
    BaseOrderGenerator,
    build_order_generator,
    get_order_generator,
)
from restaurant_sim.services.routing import CompletionRouter
from restaurant_sim.services.waiter import Waiter

logger = logging.getLogger(__name__)


class RestaurantState(str, enum.Enum):
    NEW = "new"
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"


class Restaurant:
    """
    Wires waiters, dispatcher and kitchen together.

    Attributes:
        kitchen_size: Number of cooks
        waiter_count: Number of waiters
        kitchen_queue: Orders waiting for the dispatcher
        router: Routing table from order id to waiter completion slot
        kitchen: Cooking worker pool
        generator: Order generator shared by all waiters
        ledger: Record of delivered orders
        report: ShutdownReport once stop() has completed
    """

    def __init__(
        self,
        kitchen_size: Optional[int] = None,
        waiter_count: Optional[int] = None,
        settings: Optional[Settings] = None,
        generator: Optional[BaseOrderGenerator] = None,
    ):
        self.settings = settings or get_settings()
        self.kitchen_size = kitchen_size if kitchen_size is not None else self.settings.kitchen_size
        self.waiter_count = waiter_count if waiter_count is not None else self.settings.waiter_count

        if self.kitchen_size <= 0:
            raise ValueError("kitchen_size must be a positive integer")
        if self.waiter_count <= 0:
            raise ValueError("waiter_count must be a positive integer")

        self.kitchen_queue: asyncio.Queue[Order] = asyncio.Queue()
        self.router = CompletionRouter()
        self.ledger = DeliveryLedger()
        self.kitchen = CookingWorkerPool(
            self.kitchen_size,
            on_ready=self.router.complete,
            on_abandoned=self.router.abandon,
        )
        self.dispatcher = KitchenDispatcher(
            self.kitchen_queue,
            self.kitchen,
            poll_interval=self.settings.dispatcher_poll_interval,
        )

        if generator is None:
            generator = get_order_generator() if settings is None else build_order_generator(self.settings)
        self.generator = generator
        seed = self.settings.random_seed
        self.waiters = [
            Waiter(
                f"Waiter-{i}",
                self.kitchen_queue,
                self.router,
                generator,
                delivery_time=self.settings.delivery_time,
                intake_delay=(self.settings.intake_delay_min, self.settings.intake_delay_max),
                ledger=self.ledger,
                seed=None if seed is None else seed + i,
            )
            for i in range(1, self.waiter_count + 1)
        ]

        self._state = RestaurantState.NEW
        self._dispatcher_task: Optional[asyncio.Task] = None
        self._monitor_task: Optional[asyncio.Task] = None
        self._waiter_tasks: dict[str, asyncio.Task] = {}
        self.report: Optional[ShutdownReport] = None

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def state(self) -> RestaurantState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is RestaurantState.OPEN

    async def start(self) -> None:
        """
        Open the restaurant: kitchen, dispatcher, waiters and monitor.

        Raises:
            RestaurantStateError: If the restaurant was already started
        """
        if self._state is not RestaurantState.NEW:
            raise RestaurantStateError(f"Cannot start a restaurant that is {self._state.value}")

        self._state = RestaurantState.OPEN
        logger.info("=" * 60)
        logger.info(f"🍽️  {self.settings.app_name} opening: {self.kitchen_size} cooks, {self.waiter_count} waiters")
        logger.info("=" * 60)

        self.kitchen.start()
        self._dispatcher_task = asyncio.create_task(self.dispatcher.run(), name="dispatcher")
        for waiter in self.waiters:
            self._waiter_tasks[waiter.name] = asyncio.create_task(waiter.run(), name=waiter.name)
        self._monitor_task = asyncio.create_task(self._monitor(), name="monitor")

    async def stop(self) -> ShutdownReport:
        """
        Close the restaurant gracefully.

        Returns:
            ShutdownReport: Drain outcome, abandoned orders, late waiters

        Raises:
            RestaurantStateError: If the restaurant was never started or is
                already closing
            RoutingMissingError: If the kitchen finished an order nobody was
                waiting for (raised after shutdown completed)
        """
        if self._state is RestaurantState.CLOSED:
            return self.report
        if self._state is not RestaurantState.OPEN:
            raise RestaurantStateError(f"Cannot stop a restaurant that is {self._state.value}")

        self._state = RestaurantState.CLOSING
        logger.info(f"{self.settings.app_name} closing...")

        self._monitor_task.cancel()
        await asyncio.gather(self._monitor_task, return_exceptions=True)

        stragglers = await self._release_waiters()

        self.dispatcher.stop()
        await self._dispatcher_task

        drained = await self.kitchen.shutdown(self.settings.kitchen_shutdown_timeout)
        if not drained:
            logger.warning(
                f"⚠️ Drain timeout: abandoned orders {self.kitchen.abandoned_order_ids}"
            )

        self._state = RestaurantState.CLOSED
        self.report = ShutdownReport(
            drained=drained,
            abandoned_order_ids=list(self.kitchen.abandoned_order_ids),
            stragglers=stragglers,
            delivered_total=len(self.ledger),
            closed_at=datetime.now(),
        )
        logger.info(f"✅ {self.settings.app_name} closed ({self.report.delivered_total} orders delivered)")

        if self.kitchen.faults:
            raise self.kitchen.faults[0]
        return self.report

    async def _release_waiters(self) -> list[str]:
        """Stop waiters and wait for them; return the names of late ones."""
        for waiter in self.waiters:
            waiter.stop()

        tasks = list(self._waiter_tasks.values())
        _, pending = await asyncio.wait(tasks, timeout=self.settings.waiter_join_timeout)

        stragglers = []
        for name, task in self._waiter_tasks.items():
            if task in pending:
                logger.warning(f"[{name}] Did not finish within {self.settings.waiter_join_timeout}s, leaving it")
                stragglers.append(name)
            elif not task.cancelled() and task.exception() is not None:
                logger.error(f"[{name}] Stopped with error: {task.exception()!r}")
        return stragglers

    async def __aenter__(self) -> "Restaurant":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    # =========================================================================
    # MONITORING
    # =========================================================================

    def snapshot(self) -> MonitorSnapshot:
        """Read-only view of the pipeline."""
        return MonitorSnapshot(
            queue_depth=self.kitchen_queue.qsize(),
            kitchen_backlog=self.kitchen.backlog_size(),
            ready_count=self.router.ready_count,
            active_cooks=self.kitchen.active_count(),
            kitchen_size=self.kitchen_size,
            in_flight=self.router.in_flight,
            delivered_total=len(self.ledger),
            timestamp=datetime.now(),
        )

    async def _monitor(self) -> None:
        interval = self.settings.monitor_interval
        while self.is_open:
            await asyncio.sleep(interval)
            if not self.is_open:
                break
            logger.info(f"📊 Monitor │ {self.snapshot().summary()}")
