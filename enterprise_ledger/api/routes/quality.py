from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from enterprise_ledger.core.deps import get_mes_repository
from enterprise_ledger.repositories.mes import MesRepository
from enterprise_ledger.schemas.quality import (
    Nonconformance,
    NonconformanceCreate,
    QualityCheck,
    QualityCheckCreate,
)

router = APIRouter(prefix="/quality", tags=["Quality"])


# PUBLIC_INTERFACE
@router.get(
    "/checks",
    response_model=List[QualityCheck],
    response_model_exclude_none=True,
    summary="List quality checks",
)
async def list_quality_checks(repo: MesRepository = Depends(get_mes_repository)) -> List[QualityCheck]:
    return await repo.list_quality_checks()


# PUBLIC_INTERFACE
@router.post(
    "/checks",
    response_model=QualityCheck,
    response_model_exclude_none=True,
    summary="Record quality check",
)
async def record_quality_check(
    payload: QualityCheckCreate, repo: MesRepository = Depends(get_mes_repository)
) -> QualityCheck:
    return await repo.record_quality_check(payload)


# PUBLIC_INTERFACE
@router.get(
    "/nonconformances",
    response_model=List[Nonconformance],
    response_model_exclude_none=True,
    summary="List nonconformances",
)
async def list_nonconformances(repo: MesRepository = Depends(get_mes_repository)) -> List[Nonconformance]:
    return await repo.list_nonconformances()


# PUBLIC_INTERFACE
@router.post(
    "/nonconformances",
    response_model=Nonconformance,
    response_model_exclude_none=True,
    summary="Raise nonconformance",
)
async def raise_nonconformance(
    payload: NonconformanceCreate, repo: MesRepository = Depends(get_mes_repository)
) -> Nonconformance:
    return await repo.raise_nonconformance(payload)
