from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from enterprise_ledger.core.deps import get_erp_repository
from enterprise_ledger.repositories.erp import ErpRepository
from enterprise_ledger.schemas.erp import OrderStatusUpdate, PurchaseOrder, Supplier

router = APIRouter(prefix="/procurement", tags=["Procurement"])


# PUBLIC_INTERFACE
@router.get(
    "/suppliers",
    response_model=List[Supplier],
    response_model_exclude_none=True,
    summary="List suppliers",
)
async def list_suppliers(repo: ErpRepository = Depends(get_erp_repository)) -> List[Supplier]:
    return await repo.list_suppliers()


# PUBLIC_INTERFACE
@router.get(
    "/purchase-orders",
    response_model=List[PurchaseOrder],
    response_model_exclude_none=True,
    summary="List purchase orders",
    description="List purchase orders with optional status filter.",
)
async def list_purchase_orders(
    repo: ErpRepository = Depends(get_erp_repository),
    status: Optional[str] = Query(None, description="Filter by status"),
) -> List[PurchaseOrder]:
    orders = await repo.list_purchase_orders()
    if status:
        orders = [po for po in orders if po.status == status]
    return orders


# PUBLIC_INTERFACE
@router.post(
    "/purchase-orders/{po_id}/receive",
    response_model=PurchaseOrder,
    response_model_exclude_none=True,
    summary="Receive purchase order",
    description="Receive every line into the raw materials location and advance the order status.",
)
async def receive_purchase_order(
    po_id: str = Path(...),
    repo: ErpRepository = Depends(get_erp_repository),
) -> PurchaseOrder:
    return await repo.receive_purchase_order(po_id)


# PUBLIC_INTERFACE
@router.post(
    "/purchase-orders/{po_id}/status",
    response_model=PurchaseOrder,
    response_model_exclude_none=True,
    summary="Update purchase order status",
)
async def update_purchase_order_status(
    payload: OrderStatusUpdate,
    po_id: str = Path(...),
    repo: ErpRepository = Depends(get_erp_repository),
) -> PurchaseOrder:
    return await repo.update_purchase_order_status(po_id, payload.status)
