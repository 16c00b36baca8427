from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from enterprise_ledger.core.deps import get_erp_repository
from enterprise_ledger.repositories.erp import ErpRepository
from enterprise_ledger.schemas.erp import Invoice, InvoiceCreate

router = APIRouter(prefix="/invoices", tags=["Invoices"])


# PUBLIC_INTERFACE
@router.get("", response_model=List[Invoice], summary="List invoices")
async def list_invoices(repo: ErpRepository = Depends(get_erp_repository)) -> List[Invoice]:
    return await repo.list_invoices()


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=Invoice,
    summary="Create invoice",
    description="Create an invoice. Totals are stored as given.",
)
async def create_invoice(payload: InvoiceCreate, repo: ErpRepository = Depends(get_erp_repository)) -> Invoice:
    return await repo.create_invoice(payload)
