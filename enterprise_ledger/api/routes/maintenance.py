from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path

from enterprise_ledger.core.deps import get_mes_repository
from enterprise_ledger.repositories.mes import MesRepository
from enterprise_ledger.schemas.maintenance import MaintenanceLogCreate, MaintenanceOrder

router = APIRouter(prefix="/maintenance", tags=["Maintenance"])


# PUBLIC_INTERFACE
@router.get("/orders", response_model=List[MaintenanceOrder], summary="List maintenance orders")
async def list_maintenance_orders(repo: MesRepository = Depends(get_mes_repository)) -> List[MaintenanceOrder]:
    return await repo.list_maintenance_orders()


# PUBLIC_INTERFACE
@router.post(
    "/orders/{mo_id}/logs",
    response_model=MaintenanceOrder,
    summary="Append maintenance log",
    description="Append a log entry to a maintenance order and return the updated order.",
)
async def append_maintenance_log(
    payload: MaintenanceLogCreate,
    mo_id: str = Path(...),
    repo: MesRepository = Depends(get_mes_repository),
) -> MaintenanceOrder:
    return await repo.append_maintenance_log(mo_id, payload)
