from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Query

from enterprise_ledger.core.deps import get_inventory_repository
from enterprise_ledger.repositories.inventory import InventoryRepository
from enterprise_ledger.schemas.inventory import (
    Bom,
    InventoryReceipt,
    Item,
    ItemBalance,
    Location,
    LocationRoles,
    StockLot,
    StockMove,
    StockMoveCreate,
    Warehouse,
)

router = APIRouter(prefix="/inventory", tags=["Inventory"])


# PUBLIC_INTERFACE
@router.get(
    "/items",
    response_model=List[Item],
    response_model_exclude_none=True,
    summary="List items",
    description="List the item master.",
)
async def list_items(repo: InventoryRepository = Depends(get_inventory_repository)) -> List[Item]:
    return await repo.list_items()


# PUBLIC_INTERFACE
@router.put(
    "/items",
    response_model=Item,
    response_model_exclude_none=True,
    summary="Upsert item",
    description="Replace the item with the same id, or add it (an id is generated when missing).",
)
async def upsert_item(payload: Item, repo: InventoryRepository = Depends(get_inventory_repository)) -> Item:
    return await repo.upsert_item(payload)


# PUBLIC_INTERFACE
@router.get("/boms", response_model=List[Bom], response_model_exclude_none=True, summary="List BOMs")
async def list_boms(repo: InventoryRepository = Depends(get_inventory_repository)) -> List[Bom]:
    return await repo.list_boms()


# PUBLIC_INTERFACE
@router.put("/boms", response_model=Bom, response_model_exclude_none=True, summary="Upsert BOM")
async def upsert_bom(payload: Bom, repo: InventoryRepository = Depends(get_inventory_repository)) -> Bom:
    return await repo.upsert_bom(payload)


# PUBLIC_INTERFACE
@router.get("/warehouses", response_model=List[Warehouse], summary="List warehouses")
async def list_warehouses(repo: InventoryRepository = Depends(get_inventory_repository)) -> List[Warehouse]:
    return await repo.list_warehouses()


# PUBLIC_INTERFACE
@router.get(
    "/locations",
    response_model=List[Location],
    response_model_exclude_none=True,
    summary="List inventory locations",
    description="List storage locations, optionally for one warehouse.",
)
async def list_locations(
    repo: InventoryRepository = Depends(get_inventory_repository),
    warehouse_id: Optional[str] = Query(None, alias="warehouseId", description="Filter by warehouse"),
) -> List[Location]:
    locations = await repo.list_locations()
    if warehouse_id:
        locations = [loc for loc in locations if loc.warehouse_id == warehouse_id]
    return locations


# PUBLIC_INTERFACE
@router.put("/locations", response_model=Location, response_model_exclude_none=True, summary="Upsert location")
async def upsert_location(
    payload: Location, repo: InventoryRepository = Depends(get_inventory_repository)
) -> Location:
    return await repo.upsert_location(payload)


# PUBLIC_INTERFACE
@router.get(
    "/location-roles",
    response_model=Dict[str, LocationRoles],
    summary="List location roles",
    description="Raw/WIP/FG location mapping per warehouse used by production and fulfilment.",
)
async def list_location_roles(
    repo: InventoryRepository = Depends(get_inventory_repository),
) -> Dict[str, LocationRoles]:
    return await repo.list_location_roles()


# PUBLIC_INTERFACE
@router.put(
    "/location-roles/{warehouse_id}",
    response_model=LocationRoles,
    summary="Set location roles",
    description="Configure which locations of a warehouse act as raw, WIP and finished goods.",
)
async def set_location_roles(
    payload: LocationRoles,
    warehouse_id: str = Path(...),
    repo: InventoryRepository = Depends(get_inventory_repository),
) -> LocationRoles:
    return await repo.set_location_roles(warehouse_id, payload)


# PUBLIC_INTERFACE
@router.get(
    "/lots",
    response_model=List[StockLot],
    summary="List stock lots",
    description="List stock lots with optional filters.",
)
async def list_lots(
    repo: InventoryRepository = Depends(get_inventory_repository),
    item_id: Optional[str] = Query(None, alias="itemId", description="Filter by item"),
    status: Optional[str] = Query(None, description="Filter by status"),
) -> List[StockLot]:
    """
    Return stock lots.

    Query params allow filtering by itemId and status.
    """
    lots = await repo.list_stock_lots()
    if item_id:
        lots = [lot for lot in lots if lot.item_id == item_id]
    if status:
        lots = [lot for lot in lots if lot.status == status]
    return lots


# PUBLIC_INTERFACE
@router.get(
    "/moves",
    response_model=List[StockMove],
    response_model_exclude_none=True,
    summary="List stock moves",
    description="List the stock-move journal, newest first.",
)
async def list_moves(
    repo: InventoryRepository = Depends(get_inventory_repository),
    limit: int = Query(100, ge=1, le=1000, description="Max records"),
    offset: int = Query(0, ge=0, description="Records to skip"),
) -> List[StockMove]:
    moves = await repo.list_stock_moves()
    return moves[offset : offset + limit]


# PUBLIC_INTERFACE
@router.post(
    "/moves",
    response_model=StockMove,
    response_model_exclude_none=True,
    summary="Record stock move",
    description="Move stock between locations and journal the move.",
)
async def record_stock_move(
    payload: StockMoveCreate, repo: InventoryRepository = Depends(get_inventory_repository)
) -> StockMove:
    return await repo.record_stock_move(payload)


# PUBLIC_INTERFACE
@router.post(
    "/receipts",
    response_model=StockLot,
    summary="Receive inventory",
    description="Receive stock into a location as available and journal a receipt move.",
)
async def receive_inventory(
    payload: InventoryReceipt, repo: InventoryRepository = Depends(get_inventory_repository)
) -> StockLot:
    return await repo.receive_inventory(payload)


# PUBLIC_INTERFACE
@router.get(
    "/items/{item_id}/balance",
    response_model=ItemBalance,
    summary="Item balance",
    description="Quantity on hand of an item per location.",
)
async def get_item_balance(
    item_id: str = Path(...),
    location_id: Optional[str] = Query(None, alias="locationId"),
    repo: InventoryRepository = Depends(get_inventory_repository),
) -> ItemBalance:
    return await repo.get_item_balance(item_id, location_id)
