"""
                        Services Module

Building blocks of the order pipeline.

Services:
    - menu: pluggable order generators
    - routing: order id -> waiter completion slot
    - kitchen: bounded cooking worker pool
    - dispatcher: kitchen queue -> worker pool
    - waiter: order producer and per-order consumer
    - ledger: delivered order record and integrity checks
"""

from restaurant_sim.services.dispatcher import KitchenDispatcher
from restaurant_sim.services.kitchen import CookingWorkerPool
from restaurant_sim.services.ledger import DeliveryLedger
from restaurant_sim.services.routing import CompletionRouter
from restaurant_sim.services.waiter import Waiter, WaiterState

__all__ = [
    "CompletionRouter",
    "CookingWorkerPool",
    "DeliveryLedger",
    "KitchenDispatcher",
    "Waiter",
    "WaiterState",
]
