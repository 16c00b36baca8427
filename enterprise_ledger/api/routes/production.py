from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query

from enterprise_ledger.core.deps import get_mes_repository
from enterprise_ledger.repositories.mes import MesRepository
from enterprise_ledger.schemas.production import (
    ProductionOrder,
    ProductionOrderCreate,
    ProductionOrderStatus,
    Routing,
    WorkCenter,
    WorkOrder,
)

router = APIRouter(prefix="/production", tags=["Production"])


# PUBLIC_INTERFACE
@router.get("/work-centers", response_model=List[WorkCenter], summary="List work centers")
async def list_work_centers(repo: MesRepository = Depends(get_mes_repository)) -> List[WorkCenter]:
    return await repo.list_work_centers()


# PUBLIC_INTERFACE
@router.get("/routings", response_model=List[Routing], response_model_exclude_none=True, summary="List routings")
async def list_routings(repo: MesRepository = Depends(get_mes_repository)) -> List[Routing]:
    return await repo.list_routings()


# PUBLIC_INTERFACE
@router.put(
    "/routings",
    response_model=Routing,
    response_model_exclude_none=True,
    summary="Upsert routing",
    description="Replace the routing with the same id, or add it.",
)
async def upsert_routing(payload: Routing, repo: MesRepository = Depends(get_mes_repository)) -> Routing:
    return await repo.upsert_routing(payload)


# PUBLIC_INTERFACE
@router.get(
    "/orders",
    response_model=List[ProductionOrder],
    response_model_exclude_none=True,
    summary="List production orders",
)
async def list_production_orders(
    repo: MesRepository = Depends(get_mes_repository),
    status: Optional[str] = Query(None, description="Filter by status"),
) -> List[ProductionOrder]:
    orders = await repo.list_production_orders()
    if status:
        orders = [o for o in orders if o.status == status]
    return orders


# PUBLIC_INTERFACE
@router.post(
    "/orders",
    response_model=ProductionOrder,
    response_model_exclude_none=True,
    summary="Create production order",
    description="Create a production order in draft status.",
)
async def create_production_order(
    payload: ProductionOrderCreate, repo: MesRepository = Depends(get_mes_repository)
) -> ProductionOrder:
    return await repo.create_production_order(payload)


# PUBLIC_INTERFACE
@router.post(
    "/orders/{prod_order_id}/status",
    response_model=ProductionOrder,
    response_model_exclude_none=True,
    summary="Update production order status",
    description="Overwrite the status; the first release records the release time.",
)
async def update_production_status(
    prod_order_id: str = Path(...),
    status: ProductionOrderStatus = Body(..., embed=True),
    repo: MesRepository = Depends(get_mes_repository),
) -> ProductionOrder:
    return await repo.update_production_status(prod_order_id, status)


# PUBLIC_INTERFACE
@router.post(
    "/orders/{prod_order_id}/work-orders",
    response_model=List[WorkOrder],
    response_model_exclude_none=True,
    summary="Generate work orders",
    description="Create one planned work order per routing operation. Repeated calls return the existing set.",
)
async def generate_work_orders(
    prod_order_id: str = Path(...),
    repo: MesRepository = Depends(get_mes_repository),
) -> List[WorkOrder]:
    return await repo.generate_work_orders(prod_order_id)


# PUBLIC_INTERFACE
@router.get(
    "/work-orders",
    response_model=List[WorkOrder],
    response_model_exclude_none=True,
    summary="List work orders",
)
async def list_work_orders(
    repo: MesRepository = Depends(get_mes_repository),
    prod_order_id: Optional[str] = Query(None, alias="prodOrderId", description="Filter by production order"),
    status: Optional[str] = Query(None, description="Filter by status"),
) -> List[WorkOrder]:
    items = await repo.list_work_orders()
    if prod_order_id:
        items = [w for w in items if w.prod_order_id == prod_order_id]
    if status:
        items = [w for w in items if w.status == status]
    return items


# PUBLIC_INTERFACE
@router.post(
    "/work-orders/{wo_id}/start",
    response_model=WorkOrder,
    response_model_exclude_none=True,
    summary="Start work order",
)
async def start_work_order(
    wo_id: str = Path(...),
    assignee: Optional[str] = Body(None, embed=True),
    repo: MesRepository = Depends(get_mes_repository),
) -> WorkOrder:
    return await repo.start_work_order(wo_id, assignee)


# PUBLIC_INTERFACE
@router.post(
    "/work-orders/{wo_id}/complete",
    response_model=WorkOrder,
    response_model_exclude_none=True,
    summary="Complete work order",
    description=(
        "Complete a work order. The first routing operation issues BOM components from raw to WIP; "
        "the last one transfers finished goods from WIP to FG."
    ),
)
async def complete_work_order(
    wo_id: str = Path(...),
    repo: MesRepository = Depends(get_mes_repository),
) -> WorkOrder:
    return await repo.complete_work_order(wo_id)
