from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, model_validator

from .common import EntityModel

TaskStatus = Literal["backlog", "todo", "in-progress", "review", "done"]
TaskPriority = Literal["low", "medium", "high", "critical"]


class TaskCreate(EntityModel):
    """Create task payload."""
    title: str = Field(...)
    description: str = Field("")
    status: TaskStatus = Field("backlog")
    priority: TaskPriority = Field("medium")
    assignee: Optional[str] = Field(None)
    tags: List[str] = Field(default_factory=list)
    due_date: Optional[datetime] = Field(None)
    sprint_id: Optional[str] = Field(None)
    work_order_id: Optional[str] = Field(None)
    production_order_id: Optional[str] = Field(None)


class Task(TaskCreate):
    id: str = Field(..., description="Task id")


# Fields a stored task always carries; a patch may change but never clear them.
REQUIRED_TASK_FIELDS = frozenset({"title", "description", "status", "priority", "tags"})


class TaskUpdate(EntityModel):
    """Partial task update; only fields that are set are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assignee: Optional[str] = None
    tags: Optional[List[str]] = None
    due_date: Optional[datetime] = None
    sprint_id: Optional[str] = None
    work_order_id: Optional[str] = None
    production_order_id: Optional[str] = None

    @model_validator(mode="after")
    def _reject_null_required_fields(self) -> "TaskUpdate":
        nulled = sorted(
            field for field in self.model_fields_set & REQUIRED_TASK_FIELDS if getattr(self, field) is None
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self


class TaskMove(EntityModel):
    status: TaskStatus


class Sprint(EntityModel):
    id: str
    name: str
    start: datetime
    end: datetime


class KanbanColumn(EntityModel):
    id: str
    title: str
    wip_limit: Optional[int] = None
    status: TaskStatus


class TimesheetCreate(EntityModel):
    user_id: str
    entity_type: Literal["Task", "WorkOrder", "ProductionOrder", "Incident"]
    entity_id: str
    hours: float
    ts: datetime


class Timesheet(TimesheetCreate):
    id: str


class TaskState(EntityModel):
    tasks: List[Task] = Field(default_factory=list)
    sprints: List[Sprint] = Field(default_factory=list)
    columns: List[KanbanColumn] = Field(default_factory=list)
    timesheets: List[Timesheet] = Field(default_factory=list)
