"""
Restaurant Simulation Script

Opens the restaurant, lets waiters and cooks work for a while, closes it
gracefully and prints what happened.
Run from project root: python scripts/simulate.py

Version: 1.0.0
"""

import asyncio
import sys
import os
import argparse
from typing import Any, Optional

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from restaurant_sim.core.config import Settings, get_settings, setup_logging
from restaurant_sim.restaurant import Restaurant


async def run_simulation(
    settings: Settings,
    duration: float,
    kitchen_size: Optional[int] = None,
    waiter_count: Optional[int] = None,
) -> dict[str, Any]:
    """
    Run the restaurant for `duration` seconds.

    Args:
        settings: Simulation settings
        duration: Seconds to keep the restaurant open
        kitchen_size: Overrides settings.kitchen_size
        waiter_count: Overrides settings.waiter_count
    """
    restaurant = Restaurant(kitchen_size, waiter_count, settings=settings)

    await restaurant.start()
    await asyncio.sleep(duration)
    report = await restaurant.stop()

    return {
        "shutdown": report,
        "ledger": restaurant.ledger.verify(),
        "waiters": [
            (w.name, w.orders_submitted, w.orders_delivered, w.orders_lost)
            for w in restaurant.waiters
        ],
    }


def print_results(results: dict[str, Any]) -> None:
    shutdown = results["shutdown"]
    ledger = results["ledger"]

    print("\n" + "=" * 60)
    print("📊 SIMULATION RESULTS")
    print("=" * 60)

    print(f"\n✅ Delivered: {ledger.total_delivered}")
    print(f"{'✅' if shutdown.drained else '⚠️'} Kitchen drained: {shutdown.drained}")
    if shutdown.abandoned_order_ids:
        print(f"⚠️  Abandoned orders: {shutdown.abandoned_order_ids}")
    if shutdown.stragglers:
        print(f"⚠️  Late waiters: {', '.join(shutdown.stragglers)}")

    print(f"\n👤 WAITERS:")
    for name, submitted, delivered, lost in results["waiters"]:
        print(f"   {name}: {submitted} submitted, {delivered} delivered, {lost} lost")

    if ledger.mean_cook_seconds is not None:
        print(f"\n⏱️  Mean cooking time: {ledger.mean_cook_seconds}s")
        print(f"⏱️  Mean order-to-table: {ledger.mean_total_seconds}s")

    print("\n" + "=" * 60)
    if ledger.is_consistent:
        print("✅ No duplicate or misrouted deliveries")
    else:
        print(f"❌ Duplicates: {ledger.duplicate_ids}  Misrouted: {ledger.misrouted_ids}")
    print("=" * 60)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Restaurant Simulation Script")
    parser.add_argument("--duration", type=float, default=None, help="Seconds to stay open")
    parser.add_argument("--cooks", type=int, default=None, help="Kitchen size")
    parser.add_argument("--waiters", type=int, default=None, help="Number of waiters")
    args = parser.parse_args()

    settings = get_settings()
    setup_logging()

    results = asyncio.run(
        run_simulation(
            settings,
            duration=args.duration if args.duration is not None else settings.run_duration,
            kitchen_size=args.cooks,
            waiter_count=args.waiters,
        )
    )
    print_results(results)

    if not results["ledger"].is_consistent:
        sys.exit(1)
