"""
Exception Hierarchy

Every error raised by the pipeline derives from RestaurantError so callers
can catch the whole family in one place.

Cancellation of a suspension point is not represented here: it is plain
asyncio.CancelledError and always propagates.
"""

from typing import Optional


class RestaurantError(Exception):
    """Base class for all simulation errors."""


class InvalidTransitionError(RestaurantError):
    """An order was moved backwards, skipped a status, or reassigned."""


class RoutingMissingError(RestaurantError):
    """
    A cook finished an order nobody is waiting for.

    This means the routing entry was never installed or was consumed twice,
    i.e. the pipeline lost track of who owns the order. Never ignore it.
    """

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"No routing entry for Order #{order_id}")


class RoutingConflictError(RestaurantError):
    """A routing entry already exists for this order id."""

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order #{order_id} is already routed")


class OrderAbandonedError(RestaurantError):
    """The kitchen gave up on an order during a forced shutdown."""

    def __init__(self, order_id: int, reason: Optional[str] = None):
        self.order_id = order_id
        self.reason = reason
        message = f"Order #{order_id} was abandoned by the kitchen"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class KitchenClosedError(RestaurantError):
    """The kitchen no longer accepts orders."""


class RestaurantStateError(RestaurantError):
    """start()/stop() called in the wrong lifecycle state."""
