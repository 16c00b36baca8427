from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from .common import EntityModel

QualityStatus = Literal["pending", "passed", "failed", "blocked"]
NonconformanceStatus = Literal["draft", "open", "investigating", "resolved", "closed"]


class QualityCheckEvidence(EntityModel):
    id: str = Field(..., description="Evidence id")
    type: Literal["image", "document", "note"] = Field(...)
    url: Optional[str] = Field(None)
    content: Optional[str] = Field(None)


class QualityCheckCreate(EntityModel):
    """Quality check payload (id is generated)."""
    entity_type: Literal["StockLot", "ProductionOrder", "WorkOrder", "PurchaseOrder"] = Field(...)
    entity_id: str = Field(..., description="Checked entity id")
    rule_id: str = Field(..., description="Quality rule id")
    status: QualityStatus = Field(...)
    evidence: List[QualityCheckEvidence] = Field(default_factory=list)


class QualityCheck(QualityCheckCreate):
    """Quality check record."""
    id: str = Field(..., description="Quality check id")


class NonconformanceCreate(EntityModel):
    """Nonconformance payload (id is generated)."""
    ref_type: Literal["ProductionOrder", "WorkOrder", "PurchaseOrder", "QualityCheck", "FlashJob"] = Field(...)
    ref_id: str = Field(..., description="Referenced document id")
    severity: Literal["low", "medium", "high"] = Field(...)
    status: NonconformanceStatus = Field(...)
    action: Optional[str] = Field(None)


class Nonconformance(NonconformanceCreate):
    """Nonconformance record."""
    id: str = Field(..., description="Nonconformance id")
