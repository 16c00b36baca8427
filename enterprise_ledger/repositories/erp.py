from __future__ import annotations

import logging
from typing import List, Optional

from enterprise_ledger.core.ids import deep_copy, new_id
from enterprise_ledger.core.settings import get_app_settings
from enterprise_ledger.schemas.erp import (
    Customer,
    Invoice,
    InvoiceCreate,
    OrderStatus,
    PurchaseOrder,
    SalesOrder,
    Supplier,
)
from enterprise_ledger.services.fulfillment import FulfillmentService
from enterprise_ledger.state import enterprise_store
from enterprise_ledger.state.store import EnterpriseState, EnterpriseStore
from .base import BaseRepository

logger = logging.getLogger(__name__)


class ErpRepository(BaseRepository):
    """Repository for partners, purchase and sales orders, and invoices."""

    def __init__(self, store: EnterpriseStore, warehouse_id: Optional[str] = None) -> None:
        super().__init__(store)
        self.warehouse_id = warehouse_id or get_app_settings().DEFAULT_WAREHOUSE_ID

    def _fulfillment(self, state: EnterpriseState) -> FulfillmentService:
        return FulfillmentService(state, warehouse_id=self.warehouse_id)

    async def list_suppliers(self) -> List[Supplier]:
        return await self.read(lambda state: state.erp.suppliers)

    async def list_customers(self) -> List[Customer]:
        return await self.read(lambda state: state.erp.customers)

    async def list_purchase_orders(self) -> List[PurchaseOrder]:
        return await self.read(lambda state: state.erp.purchase_orders)

    async def list_sales_orders(self) -> List[SalesOrder]:
        return await self.read(lambda state: state.erp.sales_orders)

    async def list_invoices(self) -> List[Invoice]:
        return await self.read(lambda state: state.erp.invoices)

    # PUBLIC_INTERFACE
    async def receive_purchase_order(self, po_id: str) -> PurchaseOrder:
        """Receive all PO lines into the raw location and advance the PO status."""
        async with self.transaction() as state:
            return deep_copy(self._fulfillment(state).receive_purchase_order(po_id))

    # PUBLIC_INTERFACE
    async def ship_sales_order(self, so_id: str) -> SalesOrder:
        """Ship all SO lines out of the finished-goods location."""
        async with self.transaction() as state:
            return deep_copy(self._fulfillment(state).ship_sales_order(so_id))

    # PUBLIC_INTERFACE
    async def update_purchase_order_status(self, po_id: str, status: OrderStatus) -> PurchaseOrder:
        async with self.transaction() as state:
            order = self._fulfillment(state).get_purchase_order(po_id)
            order.status = status
            return deep_copy(order)

    # PUBLIC_INTERFACE
    async def update_sales_order_status(self, so_id: str, status: OrderStatus) -> SalesOrder:
        async with self.transaction() as state:
            order = self._fulfillment(state).get_sales_order(so_id)
            order.status = status
            return deep_copy(order)

    # PUBLIC_INTERFACE
    async def create_invoice(self, payload: InvoiceCreate) -> Invoice:
        async with self.transaction() as state:
            invoice = Invoice(id=new_id("invoice"), **payload.model_dump())
            state.erp.invoices.append(invoice)
            logger.info("Invoice %s created for %s %s", invoice.id, invoice.partner_type, invoice.partner_id)
            return deep_copy(invoice)


erp_repository = ErpRepository(enterprise_store)
