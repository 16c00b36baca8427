from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import Field

from .common import EntityModel

ItemType = Literal["raw", "subassembly", "finished", "service"]
StockLotStatus = Literal["available", "reserved", "consumed", "quarantined", "in-transit"]
StockMoveRefType = Literal[
    "PurchaseOrder",
    "ProductionOrder",
    "WorkOrder",
    "SalesOrder",
    "Adjustment",
    "QualityCheck",
]


class Item(EntityModel):
    """Item master record."""
    id: Optional[str] = Field(None, description="Item ID (assigned on insert when missing)")
    sku: str = Field(..., description="Item SKU")
    name: str = Field(..., description="Display name")
    uom: str = Field(..., description="Unit of measure")
    type: ItemType = Field(..., description="Item type")
    unit_cost: float = Field(..., description="Unit cost")


class BomComponent(EntityModel):
    """One component line of a bill of materials."""
    item_id: str = Field(..., description="Component item id")
    qty: float = Field(..., description="Quantity per produced unit")


class Bom(EntityModel):
    """Bill of materials for a produced item."""
    id: Optional[str] = Field(None, description="BOM ID")
    item_id: str = Field(..., description="Produced item id")
    components: List[BomComponent] = Field(default_factory=list)


class Warehouse(EntityModel):
    id: str = Field(..., description="Warehouse ID")
    name: str = Field(..., description="Warehouse name")


class Location(EntityModel):
    """Storage location inside exactly one warehouse."""
    id: Optional[str] = Field(None, description="Location ID")
    warehouse_id: str = Field(..., description="Owning warehouse id")
    path: str = Field(..., description="Hierarchical path, e.g. RAW/ZoneA/Bin12")


class LocationRoles(EntityModel):
    """Explicit role -> location mapping for one warehouse."""
    raw: Optional[str] = Field(None, description="Raw materials location id")
    wip: Optional[str] = Field(None, description="Work-in-progress location id")
    fg: Optional[str] = Field(None, description="Finished goods location id")


class StockLot(EntityModel):
    """Running balance of one item at one location."""
    id: str = Field(..., description="Lot ID")
    item_id: str = Field(..., description="Item id")
    lot_no: str = Field(..., description="Lot number")
    qty: float = Field(..., description="Quantity on hand (>= 0, 2 decimals)")
    location_id: str = Field(..., description="Location id")
    status: StockLotStatus = Field(..., description="Lot status")


class StockMove(EntityModel):
    """Append-only journal entry of a physical stock movement."""
    id: str = Field(..., description="Move ID")
    item_id: str = Field(..., description="Item id")
    qty: float = Field(..., description="Moved quantity (positive magnitude)")
    from_location_id: Optional[str] = Field(None)
    to_location_id: Optional[str] = Field(None)
    ref_type: StockMoveRefType = Field(..., description="Document type that caused the move")
    ref_id: str = Field(..., description="Document id that caused the move")
    ts: datetime = Field(..., description="Timestamp (UTC)")
    note: Optional[str] = Field(None)


class StockMoveCreate(EntityModel):
    """Payload for recording a stock move."""
    item_id: str
    qty: float
    from_location_id: Optional[str] = None
    to_location_id: Optional[str] = None
    ref_type: StockMoveRefType
    ref_id: str
    note: Optional[str] = None
    status: Optional[StockLotStatus] = Field(None, description="Status applied to the receiving lot")


class InventoryReceipt(EntityModel):
    """Payload for receiving stock into a location."""
    item_id: str
    qty: float
    location_id: str
    lot_no: Optional[str] = None
    ref_type: StockMoveRefType
    ref_id: str


class ItemBalance(EntityModel):
    """Quantity of one item per location, summed over its lots."""
    item_id: str
    total: float
    by_location: Dict[str, float] = Field(default_factory=dict)


class LotAdjustmentOutcome(str, Enum):
    UPDATED = "updated"
    CREATED = "created"
    IGNORED = "ignored"


class InventoryState(EntityModel):
    items: List[Item] = Field(default_factory=list)
    boms: List[Bom] = Field(default_factory=list)
    warehouses: List[Warehouse] = Field(default_factory=list)
    locations: List[Location] = Field(default_factory=list)
    stock_lots: List[StockLot] = Field(default_factory=list)
    stock_moves: List[StockMove] = Field(default_factory=list)
    location_roles: Dict[str, LocationRoles] = Field(
        default_factory=dict, description="Role mapping keyed by warehouse id"
    )
