"""Tests for the kitchen dispatcher."""

import asyncio

from restaurant_sim.models import Order
from restaurant_sim.services.dispatcher import KitchenDispatcher
from restaurant_sim.services.kitchen import CookingWorkerPool


class TestKitchenDispatcher:
    def test_drains_queue_before_stopping(self):
        async def main():
            cooked = []
            queue = asyncio.Queue()
            pool = CookingWorkerPool(2, on_ready=cooked.append)
            dispatcher = KitchenDispatcher(queue, pool, poll_interval=0.05)

            for _ in range(5):
                queue.put_nowait(Order("Pasta", 0.01))
            dispatcher.stop()
            await asyncio.wait_for(dispatcher.run(), timeout=1.0)

            assert queue.empty()
            assert dispatcher.dispatched == 5
            await pool.shutdown(timeout=1.0)
            return cooked

        assert len(asyncio.run(main())) == 5

    def test_stops_promptly_when_idle(self):
        async def main():
            pool = CookingWorkerPool(1, on_ready=lambda order: None)
            dispatcher = KitchenDispatcher(asyncio.Queue(), pool, poll_interval=0.05)
            task = asyncio.create_task(dispatcher.run())
            await asyncio.sleep(0.1)
            assert not task.done()

            dispatcher.stop()
            await asyncio.wait_for(task, timeout=0.5)
            await pool.shutdown(timeout=0.1)
            return dispatcher.dispatched

        assert asyncio.run(main()) == 0

    def test_does_not_wait_for_cooking(self):
        async def main():
            queue = asyncio.Queue()
            pool = CookingWorkerPool(1, on_ready=lambda order: None)
            dispatcher = KitchenDispatcher(queue, pool, poll_interval=0.05)
            task = asyncio.create_task(dispatcher.run())

            for _ in range(3):
                queue.put_nowait(Order("Steak", 1.0))
            await asyncio.sleep(0.1)
            # one cooking, two handed over and waiting in the kitchen
            snapshot = (queue.qsize(), pool.active_count(), pool.backlog_size())

            dispatcher.stop()
            await task
            await pool.shutdown(timeout=0)
            return snapshot

        assert asyncio.run(main()) == (0, 1, 2)
