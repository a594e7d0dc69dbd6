"""
Round-Robin Order Generator

Walks through the menu in order, every dish taking the same fixed
preparation time. Fully deterministic.
"""

import itertools
import logging
import threading
from typing import Sequence

from restaurant_sim.services.menu.base import BaseOrderGenerator, DishChoice

logger = logging.getLogger(__name__)


class RoundRobinOrderGenerator(BaseOrderGenerator):
    """Cycles through the menu with a fixed preparation time."""

    def __init__(self, menu: Sequence[str], preparation_time: float = 2.0):
        if not menu:
            raise ValueError("Menu must contain at least one dish")

        self.menu = list(menu)
        self.preparation_time = preparation_time
        self._cycle = itertools.cycle(self.menu)
        self._lock = threading.Lock()

        logger.info(
            f"RoundRobinOrderGenerator initialized "
            f"({len(self.menu)} dishes, prep {preparation_time}s)"
        )

    @property
    def provider_name(self) -> str:
        return "round_robin"

    def next_dish(self) -> DishChoice:
        with self._lock:
            dish = next(self._cycle)
        return DishChoice(dish_name=dish, preparation_time=self.preparation_time)
