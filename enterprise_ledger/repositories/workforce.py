from __future__ import annotations

from typing import List

from enterprise_ledger.schemas.workforce import (
    WorkforceAssignment,
    WorkforceMember,
    WorkforcePerformanceSummary,
    WorkforceReport,
    WorkforceTeam,
    WorkforceUtilizationSnapshot,
)
from enterprise_ledger.state import enterprise_store
from enterprise_ledger.state.store import EnterpriseStore
from .base import BaseRepository


class WorkforceRepository(BaseRepository):
    """Read-only repository for teams, members and their workload figures."""

    def __init__(self, store: EnterpriseStore) -> None:
        super().__init__(store)

    async def list_teams(self) -> List[WorkforceTeam]:
        return await self.read(lambda state: state.workforce.teams)

    async def list_members(self) -> List[WorkforceMember]:
        return await self.read(lambda state: state.workforce.members)

    async def list_assignments(self) -> List[WorkforceAssignment]:
        return await self.read(lambda state: state.workforce.assignments)

    async def list_utilization(self) -> List[WorkforceUtilizationSnapshot]:
        return await self.read(lambda state: state.workforce.utilization)

    async def list_performance(self) -> List[WorkforcePerformanceSummary]:
        return await self.read(lambda state: state.workforce.performance)

    async def list_reports(self) -> List[WorkforceReport]:
        return await self.read(lambda state: state.workforce.reports)


workforce_repository = WorkforceRepository(enterprise_store)
