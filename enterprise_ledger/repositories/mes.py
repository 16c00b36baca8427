from __future__ import annotations

from typing import List, Optional

from enterprise_ledger.core.ids import deep_copy
from enterprise_ledger.core.settings import get_app_settings
from enterprise_ledger.schemas.maintenance import MaintenanceLogCreate, MaintenanceOrder
from enterprise_ledger.schemas.production import (
    ProductionOrder,
    ProductionOrderCreate,
    ProductionOrderStatus,
    Routing,
    WorkCenter,
    WorkOrder,
)
from enterprise_ledger.schemas.quality import (
    Nonconformance,
    NonconformanceCreate,
    QualityCheck,
    QualityCheckCreate,
)
from enterprise_ledger.services.production import ProductionService
from enterprise_ledger.services.quality import QualityService
from enterprise_ledger.state import enterprise_store
from enterprise_ledger.state.store import EnterpriseState, EnterpriseStore
from .base import BaseRepository


class MesRepository(BaseRepository):
    """
    Repository for manufacturing execution: routings, production and work
    orders, quality records and maintenance orders.

    Work-order completion moves stock through the ledger inside the same
    transaction as the status change.
    """

    def __init__(self, store: EnterpriseStore, warehouse_id: Optional[str] = None) -> None:
        super().__init__(store)
        self.warehouse_id = warehouse_id or get_app_settings().DEFAULT_WAREHOUSE_ID

    def _production(self, state: EnterpriseState) -> ProductionService:
        return ProductionService(state, warehouse_id=self.warehouse_id)

    async def list_work_centers(self) -> List[WorkCenter]:
        return await self.read(lambda state: state.mes.work_centers)

    async def list_routings(self) -> List[Routing]:
        return await self.read(lambda state: state.mes.routings)

    async def list_production_orders(self) -> List[ProductionOrder]:
        return await self.read(lambda state: state.mes.production_orders)

    async def list_work_orders(self) -> List[WorkOrder]:
        return await self.read(lambda state: state.mes.work_orders)

    async def list_quality_checks(self) -> List[QualityCheck]:
        return await self.read(lambda state: state.mes.quality_checks)

    async def list_nonconformances(self) -> List[Nonconformance]:
        return await self.read(lambda state: state.mes.nonconformances)

    async def list_maintenance_orders(self) -> List[MaintenanceOrder]:
        return await self.read(lambda state: state.mes.maintenance_orders)

    # PUBLIC_INTERFACE
    async def upsert_routing(self, routing: Routing) -> Routing:
        async with self.transaction() as state:
            stored = self.upsert(state.mes.routings, deep_copy(routing), "routing")
            return deep_copy(stored)

    # PUBLIC_INTERFACE
    async def create_production_order(self, payload: ProductionOrderCreate) -> ProductionOrder:
        async with self.transaction() as state:
            return deep_copy(self._production(state).create_production_order(payload))

    # PUBLIC_INTERFACE
    async def generate_work_orders(self, prod_order_id: str) -> List[WorkOrder]:
        """Create one planned work order per routing operation (idempotent by count)."""
        async with self.transaction() as state:
            return deep_copy(self._production(state).generate_work_orders(prod_order_id))

    # PUBLIC_INTERFACE
    async def update_production_status(self, prod_order_id: str, status: ProductionOrderStatus) -> ProductionOrder:
        async with self.transaction() as state:
            return deep_copy(self._production(state).update_production_status(prod_order_id, status))

    # PUBLIC_INTERFACE
    async def start_work_order(self, work_order_id: str, assignee: Optional[str] = None) -> WorkOrder:
        async with self.transaction() as state:
            return deep_copy(self._production(state).start_work_order(work_order_id, assignee))

    # PUBLIC_INTERFACE
    async def complete_work_order(self, work_order_id: str) -> WorkOrder:
        """Complete a work order, apply its stock moves and cascade order completion."""
        async with self.transaction() as state:
            return deep_copy(self._production(state).complete_work_order(work_order_id))

    # PUBLIC_INTERFACE
    async def record_quality_check(self, payload: QualityCheckCreate) -> QualityCheck:
        async with self.transaction() as state:
            return deep_copy(QualityService(state).record_quality_check(payload))

    # PUBLIC_INTERFACE
    async def raise_nonconformance(self, payload: NonconformanceCreate) -> Nonconformance:
        async with self.transaction() as state:
            return deep_copy(QualityService(state).raise_nonconformance(payload))

    # PUBLIC_INTERFACE
    async def append_maintenance_log(self, maintenance_order_id: str, payload: MaintenanceLogCreate) -> MaintenanceOrder:
        async with self.transaction() as state:
            return deep_copy(QualityService(state).append_maintenance_log(maintenance_order_id, payload))


mes_repository = MesRepository(enterprise_store)
