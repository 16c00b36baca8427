from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from enterprise_ledger.core.deps import get_erp_repository
from enterprise_ledger.repositories.erp import ErpRepository
from enterprise_ledger.schemas.erp import Customer, OrderStatusUpdate, SalesOrder

router = APIRouter(prefix="/sales", tags=["Sales"])


# PUBLIC_INTERFACE
@router.get("/customers", response_model=List[Customer], response_model_exclude_none=True, summary="List customers")
async def list_customers(repo: ErpRepository = Depends(get_erp_repository)) -> List[Customer]:
    return await repo.list_customers()


# PUBLIC_INTERFACE
@router.get(
    "/sales-orders",
    response_model=List[SalesOrder],
    response_model_exclude_none=True,
    summary="List sales orders",
)
async def list_sales_orders(
    repo: ErpRepository = Depends(get_erp_repository),
    status: Optional[str] = Query(None, description="Filter by status"),
) -> List[SalesOrder]:
    orders = await repo.list_sales_orders()
    if status:
        orders = [so for so in orders if so.status == status]
    return orders


# PUBLIC_INTERFACE
@router.post(
    "/sales-orders/{so_id}/ship",
    response_model=SalesOrder,
    response_model_exclude_none=True,
    summary="Ship sales order",
    description="Issue every line out of the finished goods location and mark the order shipped.",
)
async def ship_sales_order(
    so_id: str = Path(...),
    repo: ErpRepository = Depends(get_erp_repository),
) -> SalesOrder:
    return await repo.ship_sales_order(so_id)


# PUBLIC_INTERFACE
@router.post(
    "/sales-orders/{so_id}/status",
    response_model=SalesOrder,
    response_model_exclude_none=True,
    summary="Update sales order status",
)
async def update_sales_order_status(
    payload: OrderStatusUpdate,
    so_id: str = Path(...),
    repo: ErpRepository = Depends(get_erp_repository),
) -> SalesOrder:
    return await repo.update_sales_order_status(so_id, payload.status)
