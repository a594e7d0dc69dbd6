import itertools

import pytest

from restaurant_sim.core.config import Settings
from restaurant_sim.services.menu import BaseOrderGenerator, DishChoice


class ScriptedOrderGenerator(BaseOrderGenerator):
    """Hands out a fixed script of dishes, repeating the last one."""

    def __init__(self, *choices: tuple[str, float]):
        self._choices = itertools.chain(
            (DishChoice(d, t) for d, t in choices),
            itertools.repeat(DishChoice(*choices[-1])),
        )

    @property
    def provider_name(self) -> str:
        return "scripted"

    def next_dish(self) -> DishChoice:
        return next(self._choices)


@pytest.fixture
def fast_settings():
    """Settings with every delay shrunk so a whole run takes well under a second."""
    return Settings(
        kitchen_size=2,
        waiter_count=2,
        delivery_time=0.05,
        intake_delay_min=0.0,
        intake_delay_max=0.01,
        order_source="round_robin",
        fixed_preparation_time=0.1,
        dispatcher_poll_interval=0.02,
        monitor_interval=0.05,
        waiter_join_timeout=2.0,
        kitchen_shutdown_timeout=2.0,
    )


@pytest.fixture
def scripted():
    """Factory for ScriptedOrderGenerator."""
    return ScriptedOrderGenerator
