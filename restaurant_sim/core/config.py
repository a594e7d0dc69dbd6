"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Every value is read once at construction time and stays fixed for the run:
kitchen size, number of waiters, simulated timings, the menu and the
shutdown timeouts.

Usage:
    from restaurant_sim.core.config import get_settings

    settings = get_settings()
    restaurant = Restaurant(settings.kitchen_size, settings.waiter_count)

Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OrderSource(str, Enum):
    """
    Strategy used by waiters to come up with the next order.

    Attributes:
        RANDOM: Random dish from the menu with a random preparation time
        ROUND_ROBIN: Cycle through the menu with a fixed preparation time
    """
    RANDOM = "random"
    ROUND_ROBIN = "round_robin"


class Settings(BaseSettings):
    """
    Simulation settings loaded from environment variables.

    All settings can be overridden via environment variables, a .env file,
    or keyword arguments (handy in tests).

    Attributes:
        kitchen_size: Number of cooks working in parallel
        waiter_count: Number of waiters taking orders

        # Timings (seconds)
        delivery_time: Time a waiter needs to carry a dish to the table
        intake_delay_min / intake_delay_max: Pause before taking an order
        prep_time_min / prep_time_max: Preparation time range (inclusive)

        # Shutdown
        waiter_join_timeout: How long stop() waits for waiters
        kitchen_shutdown_timeout: How long stop() waits for the cooks
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )
    app_name: str = Field(
        default="Restaurant Kitchen Simulation",
        description="Application display name"
    )

    # ==========================================================================
    # STAFFING
    # ==========================================================================

    kitchen_size: int = Field(
        default=3,
        gt=0,
        description="Number of cooks (worker pool parallelism)"
    )
    waiter_count: int = Field(
        default=4,
        gt=0,
        description="Number of waiters producing orders"
    )

    # ==========================================================================
    # TIMINGS
    # ==========================================================================

    delivery_time: float = Field(
        default=0.5,
        ge=0,
        description="Seconds a waiter needs to deliver a ready dish"
    )
    intake_delay_min: float = Field(
        default=0.5,
        ge=0,
        description="Minimum pause before a waiter takes the next order"
    )
    intake_delay_max: float = Field(
        default=2.0,
        ge=0,
        description="Maximum pause before a waiter takes the next order"
    )
    prep_time_min: int = Field(
        default=2,
        ge=0,
        description="Shortest preparation time in seconds"
    )
    prep_time_max: int = Field(
        default=7,
        ge=0,
        description="Longest preparation time in seconds"
    )

    # ==========================================================================
    # MENU
    # ==========================================================================

    menu: str = Field(
        default="Pizza,Pasta,Steak,Salad,Soup,Burger,Fish,Dessert",
        description="Comma-separated list of dishes"
    )
    order_source: OrderSource = Field(
        default=OrderSource.RANDOM,
        description="How waiters pick the next dish"
    )
    fixed_preparation_time: float = Field(
        default=2.0,
        ge=0,
        description="Preparation time used by the round-robin generator"
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for reproducible random orders"
    )

    # ==========================================================================
    # PIPELINE
    # ==========================================================================

    dispatcher_poll_interval: float = Field(
        default=1.0,
        gt=0,
        description="Kitchen queue poll timeout used by the dispatcher"
    )
    monitor_interval: float = Field(
        default=5.0,
        gt=0,
        description="Seconds between monitor snapshots"
    )
    waiter_join_timeout: float = Field(
        default=3.0,
        ge=0,
        description="Seconds stop() waits for waiters to finish"
    )
    kitchen_shutdown_timeout: float = Field(
        default=5.0,
        ge=0,
        description="Seconds stop() waits for the kitchen to drain"
    )
    run_duration: float = Field(
        default=30.0,
        gt=0,
        description="How long the simulation script keeps the restaurant open"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("order_source", mode="before")
    @classmethod
    def validate_order_source(cls, v: str) -> OrderSource:
        """Convert string to OrderSource enum."""
        if isinstance(v, OrderSource):
            return v
        try:
            return OrderSource(v.lower())
        except ValueError:
            valid = [e.value for e in OrderSource]
            raise ValueError(f"Invalid order_source. Must be one of: {valid}")

    @field_validator("menu")
    @classmethod
    def validate_menu(cls, v: str) -> str:
        if not [d for d in v.split(",") if d.strip()]:
            raise ValueError("Menu must contain at least one dish")
        return v

    @model_validator(mode="after")
    def validate_ranges(self) -> "Settings":
        """Make sure every min/max pair is ordered."""
        if self.intake_delay_min > self.intake_delay_max:
            raise ValueError("intake_delay_min must not exceed intake_delay_max")
        if self.prep_time_min > self.prep_time_max:
            raise ValueError("prep_time_min must not exceed prep_time_max")
        return self

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def menu_list(self) -> list[str]:
        """Get the menu as a list of dish names."""
        return [d.strip() for d in self.menu.split(",") if d.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded only once so every component sees the same values
    for the lifetime of the process.

    Returns:
        Settings: Configured application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.kitchen_size)
        3
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-34s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # asyncio debug chatter is not interesting here
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    return logging.getLogger("restaurant_sim")

