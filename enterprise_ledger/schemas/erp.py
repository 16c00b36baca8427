from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from .common import EntityModel

OrderStatus = Literal[
    "draft",
    "approved",
    "received",
    "partially-received",
    "shipped",
    "partially-shipped",
    "closed",
]
InvoiceStatus = Literal["draft", "open", "paid", "void"]


class Supplier(EntityModel):
    id: str = Field(..., description="Supplier id")
    name: str = Field(..., description="Supplier name")
    contact_email: Optional[str] = Field(None)


class Customer(EntityModel):
    id: str = Field(..., description="Customer id")
    name: str = Field(..., description="Customer name")
    contact_email: Optional[str] = Field(None)


class OrderLine(EntityModel):
    """Commercial document line."""
    item_id: str = Field(..., description="Item id")
    qty: float = Field(..., description="Ordered quantity")
    price: float = Field(..., description="Unit price")


class PurchaseOrder(EntityModel):
    """Purchase order header with lines."""
    id: str = Field(..., description="PO id")
    supplier_id: str = Field(..., description="Supplier id")
    lines: List[OrderLine] = Field(default_factory=list)
    status: OrderStatus = Field(...)
    expected_date: Optional[datetime] = Field(None)


class SalesOrder(EntityModel):
    """Sales order header with lines."""
    id: str = Field(..., description="SO id")
    customer_id: str = Field(..., description="Customer id")
    lines: List[OrderLine] = Field(default_factory=list)
    status: OrderStatus = Field(...)
    promised_date: Optional[datetime] = Field(None)


class OrderStatusUpdate(EntityModel):
    status: OrderStatus


class InvoiceLine(EntityModel):
    description: str = Field(...)
    qty: float = Field(...)
    price: float = Field(...)


class InvoiceCreate(EntityModel):
    """Invoice payload (id is generated, totals are not validated)."""
    partner_type: Literal["supplier", "customer"] = Field(...)
    partner_id: str = Field(...)
    lines: List[InvoiceLine] = Field(default_factory=list)
    total: float = Field(...)
    status: InvoiceStatus = Field(...)
    issued_at: datetime = Field(...)


class Invoice(InvoiceCreate):
    id: str = Field(..., description="Invoice id")


class ErpState(EntityModel):
    suppliers: List[Supplier] = Field(default_factory=list)
    customers: List[Customer] = Field(default_factory=list)
    purchase_orders: List[PurchaseOrder] = Field(default_factory=list)
    sales_orders: List[SalesOrder] = Field(default_factory=list)
    invoices: List[Invoice] = Field(default_factory=list)
