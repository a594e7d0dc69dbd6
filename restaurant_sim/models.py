"""
Domain Models

Order and its status workflow, plus the process-wide order id source.

Status workflow (strictly forward, one step at a time):
    CREATED -> COOKING -> READY -> DELIVERED
"""

import enum
import threading
import time
from typing import Optional

from restaurant_sim.core.exceptions import InvalidTransitionError


class OrderStatus(str, enum.Enum):
    """Order status workflow."""
    CREATED = "created"
    COOKING = "cooking"
    READY = "ready"
    DELIVERED = "delivered"


_NEXT_STATUS = {
    OrderStatus.CREATED: OrderStatus.COOKING,
    OrderStatus.COOKING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.DELIVERED,
}


class OrderIDGenerator:
    """
    Monotonically increasing id source.

    Ids start at 1 and are never reused or reset while the process lives.
    Safe to call from any number of tasks or threads.
    """

    def __init__(self, start: int = 1):
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value


# Process-wide generator shared by every Order
order_ids = OrderIDGenerator()


class Order:
    """
    A single customer order.

    Identity, dish and preparation time are fixed at creation. Status only
    moves forward and the owning waiter can be assigned exactly once.

    Attributes:
        id: Unique id from the process-wide generator
        dish_name: Name of the dish
        preparation_time: Simulated cooking time in seconds
        status: Current OrderStatus
        waiter_name: Waiter who took the order (None until submitted)
        delivered_by: Waiter who delivered it (None until delivered)
        timestamps: Monotonic clock reading for every status reached
    """

    def __init__(
        self,
        dish_name: str,
        preparation_time: float,
        id_generator: Optional[OrderIDGenerator] = None,
    ):
        self._id = (id_generator or order_ids).next_id()
        self._dish_name = dish_name
        self._preparation_time = preparation_time
        self._status = OrderStatus.CREATED
        self._waiter_name: Optional[str] = None
        self.delivered_by: Optional[str] = None
        self.timestamps: dict[OrderStatus, float] = {OrderStatus.CREATED: time.monotonic()}

    @property
    def id(self) -> int:
        return self._id

    @property
    def dish_name(self) -> str:
        return self._dish_name

    @property
    def preparation_time(self) -> float:
        return self._preparation_time

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def waiter_name(self) -> Optional[str]:
        return self._waiter_name

    def assign_waiter(self, name: str) -> None:
        """Record the waiter who took this order. Allowed once, before cooking."""
        if self._waiter_name is not None:
            raise InvalidTransitionError(
                f"Order #{self._id} already belongs to {self._waiter_name}"
            )
        if self._status is not OrderStatus.CREATED:
            raise InvalidTransitionError(
                f"Order #{self._id} is {self._status.value}, too late to assign a waiter"
            )
        self._waiter_name = name

    def advance(self, status: OrderStatus) -> None:
        """
        Move the order to the next status.

        Args:
            status: Status to move to; must be the direct successor

        Raises:
            InvalidTransitionError: If the move is not the next step
        """
        expected = _NEXT_STATUS.get(self._status)
        if status is not expected:
            raise InvalidTransitionError(
                f"Order #{self._id}: cannot go from {self._status.value} to {status.value}"
            )
        self._status = status
        self.timestamps[status] = time.monotonic()

    def mark_cooking(self) -> None:
        self.advance(OrderStatus.COOKING)

    def mark_ready(self) -> None:
        self.advance(OrderStatus.READY)

    def mark_delivered(self, waiter_name: str) -> None:
        """Deliver the order. Only the waiter who took it may do so."""
        if waiter_name != self._waiter_name:
            raise InvalidTransitionError(
                f"Order #{self._id} belongs to {self._waiter_name}, "
                f"{waiter_name} cannot deliver it"
            )
        self.advance(OrderStatus.DELIVERED)
        self.delivered_by = waiter_name

    def elapsed(self, start: OrderStatus, end: OrderStatus) -> Optional[float]:
        """Seconds between two recorded statuses, or None if either is missing."""
        if start not in self.timestamps or end not in self.timestamps:
            return None
        return self.timestamps[end] - self.timestamps[start]

    def __repr__(self) -> str:
        return f"<Order #{self._id} {self._dish_name} ({self._status.value})>"

    def __str__(self) -> str:
        return f"Order #{self._id} [{self._dish_name}], prep time: {self._preparation_time}s"
