from __future__ import annotations

import logging
from typing import List, Optional

from enterprise_ledger.core.errors import NotFoundError
from enterprise_ledger.core.ids import new_id, utcnow
from enterprise_ledger.schemas.inventory import Bom
from enterprise_ledger.schemas.production import (
    ProductionOrder,
    ProductionOrderCreate,
    ProductionOrderStatus,
    Routing,
    WorkOrder,
)
from enterprise_ledger.services.base import BaseService
from enterprise_ledger.services.ledger import StockLedger
from enterprise_ledger.services.locations import resolve_default_locations

logger = logging.getLogger(__name__)


class ProductionService(BaseService):
    """
    Domain service for the production workflow.

    Advances production and work orders through their lifecycle and keeps the
    stock ledger in step: completing a routing's first operation issues BOM
    components from raw to WIP, completing its last operation transfers the
    finished goods from WIP to FG.
    """

    def __init__(self, state, warehouse_id: Optional[str] = None) -> None:
        super().__init__(state)
        self.warehouse_id = warehouse_id
        self.ledger = StockLedger(state)

    def find_production_order(self, prod_order_id: str) -> Optional[ProductionOrder]:
        return next((o for o in self.state.mes.production_orders if o.id == prod_order_id), None)

    def get_production_order(self, prod_order_id: str) -> ProductionOrder:
        order = self.find_production_order(prod_order_id)
        if order is None:
            raise NotFoundError("Production order", prod_order_id)
        return order

    def get_work_order(self, work_order_id: str) -> WorkOrder:
        work_order = next((w for w in self.state.mes.work_orders if w.id == work_order_id), None)
        if work_order is None:
            raise NotFoundError("Work order", work_order_id)
        return work_order

    def find_routing(self, item_id: str) -> Optional[Routing]:
        return next((r for r in self.state.mes.routings if r.item_id == item_id), None)

    def find_bom(self, item_id: str) -> Optional[Bom]:
        return next((b for b in self.state.inventory.boms if b.item_id == item_id), None)

    def work_orders_for(self, prod_order_id: str) -> List[WorkOrder]:
        return [w for w in self.state.mes.work_orders if w.prod_order_id == prod_order_id]

    # PUBLIC_INTERFACE
    def create_production_order(self, payload: ProductionOrderCreate) -> ProductionOrder:
        order = ProductionOrder(
            id=new_id("prod"),
            item_id=payload.item_id,
            qty=payload.qty,
            due_date=payload.due_date,
            status="draft",
        )
        self.state.mes.production_orders.append(order)
        logger.info("Created production order %s for %s x %s", order.id, order.qty, order.item_id)
        return order

    # PUBLIC_INTERFACE
    def update_production_status(self, prod_order_id: str, status: ProductionOrderStatus) -> ProductionOrder:
        """Overwrite the order status; the first release stamps ``released_at``."""
        order = self.get_production_order(prod_order_id)
        order.status = status
        if status == "released" and order.released_at is None:
            order.released_at = utcnow()
        return order

    # PUBLIC_INTERFACE
    def generate_work_orders(self, prod_order_id: str) -> List[WorkOrder]:
        """
        Instantiate one planned work order per routing operation.

        Idempotency is count-based: when the order already owns as many work
        orders as the routing has operations, the existing ones are returned.
        """
        order = self.get_production_order(prod_order_id)
        routing = self.find_routing(order.item_id)
        if routing is None:
            raise NotFoundError("Routing", order.item_id, f"Routing not found for item {order.item_id}")

        existing = self.work_orders_for(prod_order_id)
        if len(existing) == len(routing.operations):
            return existing

        generated = [
            WorkOrder(
                id=new_id(f"wo-{prod_order_id}"),
                prod_order_id=prod_order_id,
                op_id=operation.op_id,
                wc_id=operation.wc_id,
                status="planned",
            )
            for operation in routing.operations
        ]
        self.state.mes.work_orders.extend(generated)
        logger.info("Generated %d work orders for production order %s", len(generated), prod_order_id)
        return generated

    # PUBLIC_INTERFACE
    def start_work_order(self, work_order_id: str, assignee: Optional[str] = None) -> WorkOrder:
        work_order = self.get_work_order(work_order_id)
        work_order.status = "in-progress"
        if assignee is not None:
            work_order.assignee = assignee
        work_order.started_at = utcnow()
        logger.info("Started work order %s (assignee=%s)", work_order.id, work_order.assignee)
        return work_order

    # PUBLIC_INTERFACE
    def complete_work_order(self, work_order_id: str) -> WorkOrder:
        """
        Complete a work order and apply its ledger effects.

        Ledger effects are skipped silently when the production order or its
        routing is missing; the work order is still completed.
        """
        work_order = self.get_work_order(work_order_id)
        work_order.status = "completed"
        work_order.finished_at = utcnow()
        logger.info("Completed work order %s", work_order.id)

        order = self.find_production_order(work_order.prod_order_id)
        if order is None:
            logger.warning("Work order %s has no production order; ledger effects skipped", work_order.id)
            return work_order

        routing = self.find_routing(order.item_id)
        operation = None
        if routing is not None:
            operation = next((op for op in routing.operations if op.op_id == work_order.op_id), None)

        if routing is not None and operation is not None:
            roles = resolve_default_locations(self.state.inventory, self.warehouse_id)
            first_op = routing.operations[0]
            last_op = routing.operations[-1]
            if operation.op_id == first_op.op_id and roles.raw and roles.wip:
                self._issue_components(order, work_order, roles.raw, roles.wip)
            if operation.op_id == last_op.op_id and roles.wip and roles.fg:
                self.ledger.record_move(
                    item_id=order.item_id,
                    qty=order.qty,
                    from_location_id=roles.wip,
                    to_location_id=roles.fg,
                    ref_type="WorkOrder",
                    ref_id=work_order.id,
                    note="Finished goods transfer",
                    status="available",
                )
        else:
            logger.warning("No routing operation for work order %s; ledger effects skipped", work_order.id)

        if all(w.status == "completed" for w in self.work_orders_for(order.id)):
            order.status = "completed"
            logger.info("Production order %s completed", order.id)
        return work_order

    def _issue_components(self, order: ProductionOrder, work_order: WorkOrder, raw: str, wip: str) -> None:
        bom = self.find_bom(order.item_id)
        if bom is None:
            return
        for component in bom.components:
            self.ledger.record_move(
                item_id=component.item_id,
                qty=component.qty * order.qty,
                from_location_id=raw,
                to_location_id=wip,
                ref_type="WorkOrder",
                ref_id=work_order.id,
                note="Issue components",
            )
