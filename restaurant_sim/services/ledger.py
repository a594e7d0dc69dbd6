"""
Delivery Ledger

In-memory record of every delivered order, used to check after (or during)
a run that no order was delivered twice and that every order was
delivered by the waiter who took it.

Thread-safe: records are appended under a lock.
"""

import logging
import threading
from typing import Any

import pandas as pd

from restaurant_sim.models import Order, OrderStatus
from restaurant_sim.schemas import LedgerReport

logger = logging.getLogger(__name__)


class DeliveryLedger:
    """Append-only log of delivered orders."""

    COLUMNS = [
        "order_id",
        "dish_name",
        "preparation_time",
        "waiter_name",
        "delivered_by",
        "wait_seconds",
        "cook_seconds",
        "delivery_seconds",
        "total_seconds",
    ]

    def __init__(self) -> None:
        self._rows: list[dict[str, Any]] = []
        self._lock = threading.Lock()

    def record(self, order: Order) -> None:
        """Add a delivered order to the ledger."""
        row = {
            "order_id": order.id,
            "dish_name": order.dish_name,
            "preparation_time": order.preparation_time,
            "waiter_name": order.waiter_name,
            "delivered_by": order.delivered_by,
            "wait_seconds": order.elapsed(OrderStatus.CREATED, OrderStatus.COOKING),
            "cook_seconds": order.elapsed(OrderStatus.COOKING, OrderStatus.READY),
            "delivery_seconds": order.elapsed(OrderStatus.READY, OrderStatus.DELIVERED),
            "total_seconds": order.elapsed(OrderStatus.CREATED, OrderStatus.DELIVERED),
        }
        with self._lock:
            self._rows.append(row)
        logger.debug(f"Order #{order.id} recorded in ledger")

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def to_dataframe(self) -> pd.DataFrame:
        """Snapshot of the ledger as a DataFrame."""
        with self._lock:
            rows = list(self._rows)
        return pd.DataFrame(rows, columns=self.COLUMNS)

    def verify(self) -> LedgerReport:
        """
        Check delivery integrity.

        Returns:
            LedgerReport: Duplicate deliveries, misrouted deliveries and
            mean timings
        """
        df = self.to_dataframe()

        if df.empty:
            return LedgerReport(total_delivered=0)

        duplicates = df.loc[df["order_id"].duplicated(), "order_id"].unique()
        misrouted = df.loc[df["waiter_name"] != df["delivered_by"], "order_id"].unique()

        report = LedgerReport(
            total_delivered=len(df),
            duplicate_ids=sorted(int(i) for i in duplicates),
            misrouted_ids=sorted(int(i) for i in misrouted),
            mean_cook_seconds=_mean(df["cook_seconds"]),
            mean_total_seconds=_mean(df["total_seconds"]),
        )

        if not report.is_consistent:
            logger.error(
                f"Ledger inconsistent: duplicates={report.duplicate_ids} "
                f"misrouted={report.misrouted_ids}"
            )
        return report


def _mean(column: pd.Series):
    value = column.dropna().mean()
    return None if pd.isna(value) else round(float(value), 3)
