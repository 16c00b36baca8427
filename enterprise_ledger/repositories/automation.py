from __future__ import annotations

import logging
from typing import List

from enterprise_ledger.core.errors import NotFoundError
from enterprise_ledger.core.ids import deep_copy, new_id, utcnow
from enterprise_ledger.schemas.automation import PlaybookRun, PlaybookTemplate
from enterprise_ledger.state import enterprise_store
from enterprise_ledger.state.store import EnterpriseStore
from .base import BaseRepository

logger = logging.getLogger(__name__)


class AutomationRepository(BaseRepository):
    """Repository for automation playbooks and their run history."""

    def __init__(self, store: EnterpriseStore) -> None:
        super().__init__(store)

    async def list_templates(self) -> List[PlaybookTemplate]:
        return await self.read(lambda state: state.automation.templates)

    async def list_runs(self) -> List[PlaybookRun]:
        """Runs, newest first."""
        return await self.read(lambda state: state.automation.runs)

    # PUBLIC_INTERFACE
    async def trigger_playbook(self, playbook_id: str, actor: str, dry_run: bool = False) -> PlaybookRun:
        """
        Record a completed run of a playbook.

        Steps are not executed; the run only reports how many would have been.
        """
        async with self.transaction() as state:
            template = next((t for t in state.automation.templates if t.id == playbook_id), None)
            if template is None:
                raise NotFoundError("Playbook", playbook_id)
            now = utcnow()
            suffix = " in dry-run mode" if dry_run else ""
            run = PlaybookRun(
                id=new_id("playbook-run"),
                playbook_id=playbook_id,
                started_at=now,
                finished_at=now,
                status="completed",
                run_by=actor,
                dry_run=dry_run,
                output=f"Executed {len(template.steps)} steps{suffix}.",
            )
            state.automation.runs.insert(0, run)
            logger.info("Playbook %s triggered by %s (dry_run=%s)", playbook_id, actor, dry_run)
            return deep_copy(run)


automation_repository = AutomationRepository(enterprise_store)
