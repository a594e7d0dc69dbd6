"""
                Restaurant Kitchen Simulation

A bounded-concurrency order pipeline: waiters take orders, a dispatcher
feeds them to a fixed-size kitchen, and every finished dish is routed
back to the waiter who took it.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
