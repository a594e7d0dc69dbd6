"""
Core module initialization.
Exports configuration, logging utilities and the exception hierarchy.
"""

from restaurant_sim.core.config import get_settings, setup_logging, Settings, OrderSource
from restaurant_sim.core.exceptions import (
    RestaurantError,
    InvalidTransitionError,
    RoutingMissingError,
    RoutingConflictError,
    OrderAbandonedError,
    KitchenClosedError,
    RestaurantStateError,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "OrderSource",
    "RestaurantError",
    "InvalidTransitionError",
    "RoutingMissingError",
    "RoutingConflictError",
    "OrderAbandonedError",
    "KitchenClosedError",
    "RestaurantStateError",
]
