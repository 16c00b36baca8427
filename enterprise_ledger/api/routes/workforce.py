from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from enterprise_ledger.core.deps import get_workforce_repository
from enterprise_ledger.repositories.workforce import WorkforceRepository
from enterprise_ledger.schemas.workforce import (
    WorkforceAssignment,
    WorkforceMember,
    WorkforcePerformanceSummary,
    WorkforceReport,
    WorkforceTeam,
    WorkforceUtilizationSnapshot,
)

router = APIRouter(prefix="/workforce", tags=["Workforce"])


# PUBLIC_INTERFACE
@router.get("/teams", response_model=List[WorkforceTeam], summary="List teams")
async def list_teams(repo: WorkforceRepository = Depends(get_workforce_repository)) -> List[WorkforceTeam]:
    return await repo.list_teams()


# PUBLIC_INTERFACE
@router.get("/members", response_model=List[WorkforceMember], summary="List members")
async def list_members(repo: WorkforceRepository = Depends(get_workforce_repository)) -> List[WorkforceMember]:
    return await repo.list_members()


# PUBLIC_INTERFACE
@router.get(
    "/assignments",
    response_model=List[WorkforceAssignment],
    response_model_exclude_none=True,
    summary="List assignments",
)
async def list_assignments(
    repo: WorkforceRepository = Depends(get_workforce_repository),
) -> List[WorkforceAssignment]:
    return await repo.list_assignments()


# PUBLIC_INTERFACE
@router.get("/utilization", response_model=List[WorkforceUtilizationSnapshot], summary="List utilization snapshots")
async def list_utilization(
    repo: WorkforceRepository = Depends(get_workforce_repository),
) -> List[WorkforceUtilizationSnapshot]:
    return await repo.list_utilization()


# PUBLIC_INTERFACE
@router.get("/performance", response_model=List[WorkforcePerformanceSummary], summary="List performance summaries")
async def list_performance(
    repo: WorkforceRepository = Depends(get_workforce_repository),
) -> List[WorkforcePerformanceSummary]:
    return await repo.list_performance()


# PUBLIC_INTERFACE
@router.get("/reports", response_model=List[WorkforceReport], summary="List workforce reports")
async def list_reports(repo: WorkforceRepository = Depends(get_workforce_repository)) -> List[WorkforceReport]:
    return await repo.list_reports()
