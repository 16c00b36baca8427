from __future__ import annotations

import logging

from enterprise_ledger.core.errors import NotFoundError
from enterprise_ledger.core.ids import new_id
from enterprise_ledger.schemas.maintenance import MaintenanceLogCreate, MaintenanceLogEntry, MaintenanceOrder
from enterprise_ledger.schemas.quality import (
    Nonconformance,
    NonconformanceCreate,
    QualityCheck,
    QualityCheckCreate,
)
from enterprise_ledger.services.base import BaseService

logger = logging.getLogger(__name__)


class QualityService(BaseService):
    """Quality records and maintenance logs attached to MES entities."""

    # PUBLIC_INTERFACE
    def record_quality_check(self, payload: QualityCheckCreate) -> QualityCheck:
        check = QualityCheck(id=new_id("qc"), **payload.model_dump())
        self.state.mes.quality_checks.append(check)
        logger.info("Quality check %s on %s %s: %s", check.id, check.entity_type, check.entity_id, check.status)
        return check

    # PUBLIC_INTERFACE
    def raise_nonconformance(self, payload: NonconformanceCreate) -> Nonconformance:
        record = Nonconformance(id=new_id("nc"), **payload.model_dump())
        self.state.mes.nonconformances.append(record)
        logger.info("Nonconformance %s raised against %s %s (%s)", record.id, record.ref_type, record.ref_id, record.severity)
        return record

    # PUBLIC_INTERFACE
    def append_maintenance_log(self, maintenance_order_id: str, payload: MaintenanceLogCreate) -> MaintenanceOrder:
        """Append a log entry to a maintenance order and return the updated order."""
        order = next((mo for mo in self.state.mes.maintenance_orders if mo.id == maintenance_order_id), None)
        if order is None:
            raise NotFoundError("Maintenance order", maintenance_order_id)
        order.logs.append(MaintenanceLogEntry(id=new_id("mo-log"), **payload.model_dump()))
        return order
