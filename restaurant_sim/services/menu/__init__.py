"""
Order Generator Factory

Returns the generator selected by ORDER_SOURCE.

Usage:
    from restaurant_sim.services.menu import get_order_generator

    generator = get_order_generator()
    choice = generator.next_dish()
"""

import logging
from functools import lru_cache

from restaurant_sim.core.config import Settings, get_settings, OrderSource
from restaurant_sim.services.menu.base import BaseOrderGenerator, DishChoice
from restaurant_sim.services.menu.randomized import RandomOrderGenerator
from restaurant_sim.services.menu.round_robin import RoundRobinOrderGenerator

logger = logging.getLogger(__name__)


def build_order_generator(settings: Settings) -> BaseOrderGenerator:
    """
    Create the generator described by the given settings.

    Args:
        settings: Settings holding menu, order_source and prep times

    Returns:
        BaseOrderGenerator: Random or round-robin generator
    """
    if settings.order_source == OrderSource.ROUND_ROBIN:
        logger.info("Order Generator: Using RoundRobinOrderGenerator")
        return RoundRobinOrderGenerator(
            settings.menu_list,
            preparation_time=settings.fixed_preparation_time,
        )

    logger.info("Order Generator: Using RandomOrderGenerator")
    return RandomOrderGenerator(
        settings.menu_list,
        min_prep=settings.prep_time_min,
        max_prep=settings.prep_time_max,
        seed=settings.random_seed,
    )


@lru_cache()
def get_order_generator() -> BaseOrderGenerator:
    """Get the generator for the process-wide settings (cached)."""
    return build_order_generator(get_settings())


def reset_order_generator() -> None:
    """Clear the cached generator instance."""
    get_order_generator.cache_clear()


__all__ = [
    "build_order_generator",
    "get_order_generator",
    "reset_order_generator",
    "BaseOrderGenerator",
    "DishChoice",
    "RandomOrderGenerator",
    "RoundRobinOrderGenerator",
]
