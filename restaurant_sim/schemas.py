"""
Pydantic Schemas for Pipeline Reports

Read-only views handed out by the restaurant: monitor snapshots, the
shutdown report and the delivery ledger verification.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# MONITORING
# =============================================================================

class MonitorSnapshot(BaseModel):
    """Point-in-time view of the pipeline depth."""
    queue_depth: int = Field(..., ge=0, description="Orders waiting in the kitchen queue")
    kitchen_backlog: int = Field(..., ge=0, description="Orders accepted by the kitchen, not yet started")
    ready_count: int = Field(..., ge=0, description="Ready orders not yet delivered")
    active_cooks: int = Field(..., ge=0)
    kitchen_size: int = Field(..., gt=0)
    in_flight: int = Field(..., ge=0, description="Orders with an open routing entry")
    delivered_total: int = Field(..., ge=0)
    timestamp: datetime

    def summary(self) -> str:
        return (
            f"queue={self.queue_depth} backlog={self.kitchen_backlog} "
            f"ready={self.ready_count} cooks={self.active_cooks}/{self.kitchen_size} "
            f"in_flight={self.in_flight} delivered={self.delivered_total}"
        )


# =============================================================================
# SHUTDOWN
# =============================================================================

class ShutdownReport(BaseModel):
    """Outcome of Restaurant.stop()."""
    drained: bool = Field(..., description="True if the kitchen finished everything in time")
    abandoned_order_ids: List[int] = Field(default_factory=list)
    stragglers: List[str] = Field(
        default_factory=list,
        description="Waiters still busy when the join timeout expired",
    )
    delivered_total: int = 0
    closed_at: datetime


# =============================================================================
# LEDGER
# =============================================================================

class LedgerReport(BaseModel):
    """Integrity check over every delivered order."""
    total_delivered: int
    duplicate_ids: List[int] = Field(default_factory=list)
    misrouted_ids: List[int] = Field(default_factory=list)
    mean_cook_seconds: Optional[float] = None
    mean_total_seconds: Optional[float] = None

    @property
    def is_consistent(self) -> bool:
        return not self.duplicate_ids and not self.misrouted_ids
