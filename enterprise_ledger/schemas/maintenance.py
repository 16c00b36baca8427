from __future__ import annotations

from datetime import datetime
from typing import List, Literal

from pydantic import Field

from .common import EntityModel

MaintenanceOrderStatus = Literal["draft", "scheduled", "in-progress", "completed"]


class MaintenanceLogCreate(EntityModel):
    """Maintenance log payload (id is generated)."""
    ts: datetime = Field(..., description="Log timestamp")
    note: str = Field(..., description="What was done")
    actor: str = Field(..., description="Who did it")


class MaintenanceLogEntry(MaintenanceLogCreate):
    id: str = Field(..., description="Log entry id")


class MaintenanceOrder(EntityModel):
    """Maintenance order against an asset or work center."""
    id: str = Field(..., description="Maintenance order id")
    asset_id: str = Field(..., description="Asset or work center id")
    type: Literal["preventive", "corrective", "inspection"] = Field(...)
    status: MaintenanceOrderStatus = Field(...)
    schedule: datetime = Field(..., description="Scheduled date")
    logs: List[MaintenanceLogEntry] = Field(default_factory=list)
