from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Optional, Union

from pydantic import Field

from .common import EntityModel

PlaybookStepType = Literal["ssh", "snmp", "ipmi", "script", "approval"]


class PlaybookStep(EntityModel):
    id: str
    type: PlaybookStepType
    name: str
    command: Optional[str] = None
    args: Optional[Dict[str, Union[str, int, float, bool]]] = None
    is_dry_run_supported: Optional[bool] = None


class PlaybookTemplate(EntityModel):
    """Automation playbook definition."""
    id: str
    name: str
    category: Literal["inventory", "maintenance", "release", "incident"]
    description: Optional[str] = None
    steps: List[PlaybookStep] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class PlaybookRunArtifact(EntityModel):
    id: str
    name: str
    type: Literal["log", "screenshot", "report"]
    url: str


class PlaybookRun(EntityModel):
    """One execution of a playbook template."""
    id: str
    playbook_id: str
    started_at: datetime
    finished_at: Optional[datetime] = None
    status: Literal["pending", "running", "failed", "completed"]
    run_by: str
    dry_run: bool
    output: str
    artifacts: List[PlaybookRunArtifact] = Field(default_factory=list)


class PlaybookTrigger(EntityModel):
    actor: str = Field(..., description="Who triggered the run")
    dry_run: bool = Field(False)


class AutomationState(EntityModel):
    templates: List[PlaybookTemplate] = Field(default_factory=list)
    runs: List[PlaybookRun] = Field(default_factory=list)
