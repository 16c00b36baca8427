from __future__ import annotations

import logging
from typing import Optional

from enterprise_ledger.core.errors import NotFoundError
from enterprise_ledger.schemas.erp import PurchaseOrder, SalesOrder
from enterprise_ledger.services.base import BaseService
from enterprise_ledger.services.ledger import StockLedger
from enterprise_ledger.services.locations import resolve_default_locations

logger = logging.getLogger(__name__)


class FulfillmentService(BaseService):
    """
    Bridges commercial documents to the stock ledger: purchase receipts land in
    the raw location, sales shipments leave the finished-goods location.
    """

    def __init__(self, state, warehouse_id: Optional[str] = None) -> None:
        super().__init__(state)
        self.warehouse_id = warehouse_id
        self.ledger = StockLedger(state)

    def get_purchase_order(self, po_id: str) -> PurchaseOrder:
        order = next((po for po in self.state.erp.purchase_orders if po.id == po_id), None)
        if order is None:
            raise NotFoundError("Purchase order", po_id)
        return order

    def get_sales_order(self, so_id: str) -> SalesOrder:
        order = next((so for so in self.state.erp.sales_orders if so.id == so_id), None)
        if order is None:
            raise NotFoundError("Sales order", so_id)
        return order

    # PUBLIC_INTERFACE
    def receive_purchase_order(self, po_id: str) -> PurchaseOrder:
        """
        Receive every line into the raw location.

        An ``approved`` order becomes ``received``; any other status becomes
        ``partially-received`` (no quantity reconciliation).
        """
        order = self.get_purchase_order(po_id)
        raw = resolve_default_locations(self.state.inventory, self.warehouse_id).raw
        if raw is None:
            logger.warning("No locations configured; purchase order %s lines not received", po_id)
        else:
            for line in order.lines:
                self.ledger.receive(
                    item_id=line.item_id,
                    qty=line.qty,
                    location_id=raw,
                    ref_type="PurchaseOrder",
                    ref_id=order.id,
                )
        order.status = "received" if order.status == "approved" else "partially-received"
        logger.info("Purchase order %s -> %s", order.id, order.status)
        return order

    # PUBLIC_INTERFACE
    def ship_sales_order(self, so_id: str) -> SalesOrder:
        """Issue every line out of the finished-goods location and mark the order shipped."""
        order = self.get_sales_order(so_id)
        fg = resolve_default_locations(self.state.inventory, self.warehouse_id).fg
        for line in order.lines:
            self.ledger.record_move(
                item_id=line.item_id,
                qty=line.qty,
                from_location_id=fg,
                ref_type="SalesOrder",
                ref_id=order.id,
                note="Shipment",
            )
        order.status = "shipped"
        logger.info("Sales order %s shipped", order.id)
        return order
