from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from .common import EntityModel
from .maintenance import MaintenanceOrder
from .quality import Nonconformance, QualityCheck

WorkOrderStatus = Literal["planned", "in-progress", "paused", "completed", "blocked"]
ProductionOrderStatus = Literal["draft", "released", "in-progress", "completed", "closed"]


class OperationStep(EntityModel):
    """One step of a routing template."""
    op_id: str = Field(..., description="Operation id")
    seq: int = Field(..., description="Sequence number")
    wc_id: str = Field(..., description="Work center id")
    std_time_min: float = Field(..., description="Standard time in minutes")


class Routing(EntityModel):
    """Ordered operations required to produce an item."""
    id: Optional[str] = Field(None, description="Routing id")
    item_id: str = Field(..., description="Produced item id")
    operations: List[OperationStep] = Field(default_factory=list)


class WorkCenter(EntityModel):
    id: str = Field(..., description="Work center id")
    name: str = Field(..., description="Work center name")
    capability_tags: List[str] = Field(default_factory=list)


class ProductionOrder(EntityModel):
    """Order to produce ``qty`` units of an item."""
    id: str = Field(..., description="Production order id")
    item_id: str = Field(..., description="Produced item id")
    qty: float = Field(..., description="Quantity to produce")
    due_date: datetime = Field(..., description="Due date")
    status: ProductionOrderStatus = Field(..., description="Lifecycle status")
    released_at: Optional[datetime] = Field(None)


class ProductionOrderCreate(EntityModel):
    """Create production order payload."""
    item_id: str = Field(..., description="Produced item id")
    qty: float = Field(..., description="Quantity to produce")
    due_date: datetime = Field(..., description="Due date")


class WorkOrder(EntityModel):
    """Execution unit of one routing operation for one production order."""
    id: str = Field(..., description="Work order id")
    prod_order_id: str = Field(..., description="Owning production order id")
    op_id: str = Field(..., description="Routing operation id")
    wc_id: str = Field(..., description="Work center id")
    assignee: Optional[str] = Field(None)
    status: WorkOrderStatus = Field(..., description="Lifecycle status")
    started_at: Optional[datetime] = Field(None)
    finished_at: Optional[datetime] = Field(None)


class MesState(EntityModel):
    routings: List[Routing] = Field(default_factory=list)
    work_centers: List[WorkCenter] = Field(default_factory=list)
    production_orders: List[ProductionOrder] = Field(default_factory=list)
    work_orders: List[WorkOrder] = Field(default_factory=list)
    quality_checks: List[QualityCheck] = Field(default_factory=list)
    nonconformances: List[Nonconformance] = Field(default_factory=list)
    maintenance_orders: List[MaintenanceOrder] = Field(default_factory=list)
