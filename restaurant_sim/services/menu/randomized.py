"""
Random Order Generator

Picks a random dish from the menu and a whole number of seconds of
preparation time in [min_prep, max_prep].
"""

import logging
import random
from typing import Optional, Sequence

from restaurant_sim.services.menu.base import BaseOrderGenerator, DishChoice

logger = logging.getLogger(__name__)


class RandomOrderGenerator(BaseOrderGenerator):
    """
    Random implementation of the order generator.

    Attributes:
        menu: Dishes to choose from
        min_prep: Shortest preparation time in seconds
        max_prep: Longest preparation time in seconds (inclusive)

    Example:
        >>> generator = RandomOrderGenerator(["Pizza", "Soup"], 2, 7, seed=42)
        >>> choice = generator.next_dish()
        >>> 2 <= choice.preparation_time <= 7
        True
    """

    def __init__(
        self,
        menu: Sequence[str],
        min_prep: int = 2,
        max_prep: int = 7,
        seed: Optional[int] = None,
    ):
        if not menu:
            raise ValueError("Menu must contain at least one dish")
        if min_prep > max_prep:
            raise ValueError("min_prep must not exceed max_prep")

        self.menu = list(menu)
        self.min_prep = min_prep
        self.max_prep = max_prep
        self._random = random.Random(seed)

        logger.info(
            f"RandomOrderGenerator initialized "
            f"({len(self.menu)} dishes, prep {min_prep}-{max_prep}s)"
        )

    @property
    def provider_name(self) -> str:
        return "random"

    def next_dish(self) -> DishChoice:
        return DishChoice(
            dish_name=self._random.choice(self.menu),
            preparation_time=self._random.randint(self.min_prep, self.max_prep),
        )
