from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from .common import EntityModel


class WorkforceTeam(EntityModel):
    id: str
    name: str
    scope: str
    access_scopes: List[str] = Field(default_factory=list)
    headcount: int
    location: str
    shift_model: str


class WorkforceMember(EntityModel):
    id: str
    name: str
    team_id: str
    title: str
    skills: List[str] = Field(default_factory=list)
    shift: str
    productivity_score: float
    utilization: float
    current_load_hours: float
    badges: List[str] = Field(default_factory=list)


class WorkforceAssignment(EntityModel):
    id: str
    member_id: str
    entity_type: Literal["WorkOrder", "TestRun", "Task"]
    entity_id: str
    status: Literal["planned", "active", "completed"]
    effort_hours: float
    started_at: Optional[datetime] = None
    due_at: Optional[datetime] = None


class WorkforceUtilizationSnapshot(EntityModel):
    id: str
    team_id: str
    week_start: datetime
    actual: float
    target: float
    overtime_hours: float


class WorkforcePerformanceSummary(EntityModel):
    member_id: str
    completed_this_week: int
    avg_cycle_time_min: float
    first_pass_yield: float
    labour_efficiency: float


class WorkforceReport(EntityModel):
    id: str
    label: str
    generated_at: datetime
    owner_team: str
    highlights: List[str] = Field(default_factory=list)


class WorkforceState(EntityModel):
    teams: List[WorkforceTeam] = Field(default_factory=list)
    members: List[WorkforceMember] = Field(default_factory=list)
    assignments: List[WorkforceAssignment] = Field(default_factory=list)
    utilization: List[WorkforceUtilizationSnapshot] = Field(default_factory=list)
    performance: List[WorkforcePerformanceSummary] = Field(default_factory=list)
    reports: List[WorkforceReport] = Field(default_factory=list)
