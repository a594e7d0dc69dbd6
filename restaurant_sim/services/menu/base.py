"""
Order Generator Abstract Base Class

Defines the interface for anything that decides what the next customer
orders. Waiters only depend on this contract, so the generation policy can
be swapped without touching the pipeline.

Design Pattern: Strategy Pattern
    - RandomOrderGenerator: random dish and preparation time
    - RoundRobinOrderGenerator: deterministic, useful for tests and demos
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class DishChoice:
    """
    What the customer ordered.

    Attributes:
        dish_name: Dish picked from the menu
        preparation_time: Cooking time in seconds
    """
    dish_name: str
    preparation_time: float


class BaseOrderGenerator(ABC):
    """Abstract base class for order generators."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the generator name."""
        pass

    @abstractmethod
    def next_dish(self) -> DishChoice:
        """
        Pick the next dish.

        Must not block: waiters call it between two suspension points.

        Returns:
            DishChoice: Dish and preparation time
        """
        pass
