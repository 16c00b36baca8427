from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path

from enterprise_ledger.core.deps import get_automation_repository
from enterprise_ledger.repositories.automation import AutomationRepository
from enterprise_ledger.schemas.automation import PlaybookRun, PlaybookTemplate, PlaybookTrigger

router = APIRouter(prefix="/automation", tags=["Automation"])


# PUBLIC_INTERFACE
@router.get(
    "/playbooks",
    response_model=List[PlaybookTemplate],
    response_model_exclude_none=True,
    summary="List playbook templates",
)
async def list_templates(repo: AutomationRepository = Depends(get_automation_repository)) -> List[PlaybookTemplate]:
    return await repo.list_templates()


# PUBLIC_INTERFACE
@router.get("/runs", response_model=List[PlaybookRun], response_model_exclude_none=True, summary="List playbook runs")
async def list_runs(repo: AutomationRepository = Depends(get_automation_repository)) -> List[PlaybookRun]:
    return await repo.list_runs()


# PUBLIC_INTERFACE
@router.post(
    "/playbooks/{playbook_id}/runs",
    response_model=PlaybookRun,
    response_model_exclude_none=True,
    summary="Trigger playbook",
    description="Record a completed run of the playbook, optionally in dry-run mode.",
)
async def trigger_playbook(
    payload: PlaybookTrigger,
    playbook_id: str = Path(...),
    repo: AutomationRepository = Depends(get_automation_repository),
) -> PlaybookRun:
    return await repo.trigger_playbook(playbook_id, payload.actor, payload.dry_run)
