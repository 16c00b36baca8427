from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path

from enterprise_ledger.core.deps import get_tasks_repository
from enterprise_ledger.repositories.tasks import TasksRepository
from enterprise_ledger.schemas.tasks import (
    KanbanColumn,
    Sprint,
    Task,
    TaskCreate,
    TaskMove,
    TaskUpdate,
    Timesheet,
    TimesheetCreate,
)

router = APIRouter(prefix="/tasks", tags=["Tasks"])


# PUBLIC_INTERFACE
@router.get("/columns", response_model=List[KanbanColumn], response_model_exclude_none=True, summary="List kanban columns")
async def list_columns(repo: TasksRepository = Depends(get_tasks_repository)) -> List[KanbanColumn]:
    return await repo.list_columns()


# PUBLIC_INTERFACE
@router.get("", response_model=List[Task], response_model_exclude_none=True, summary="List tasks")
async def list_tasks(repo: TasksRepository = Depends(get_tasks_repository)) -> List[Task]:
    return await repo.list_tasks()


# PUBLIC_INTERFACE
@router.post("", response_model=Task, response_model_exclude_none=True, summary="Create task")
async def create_task(payload: TaskCreate, repo: TasksRepository = Depends(get_tasks_repository)) -> Task:
    return await repo.create_task(payload)


# PUBLIC_INTERFACE
@router.patch(
    "/{task_id}",
    response_model=Task,
    response_model_exclude_none=True,
    summary="Update task",
    description="Apply a partial update; only fields present in the body change.",
)
async def update_task(
    payload: TaskUpdate,
    task_id: str = Path(...),
    repo: TasksRepository = Depends(get_tasks_repository),
) -> Task:
    return await repo.update_task(task_id, payload)


# PUBLIC_INTERFACE
@router.post("/{task_id}/move", response_model=Task, response_model_exclude_none=True, summary="Move task")
async def move_task(
    payload: TaskMove,
    task_id: str = Path(...),
    repo: TasksRepository = Depends(get_tasks_repository),
) -> Task:
    return await repo.move_task(task_id, payload.status)


# PUBLIC_INTERFACE
@router.get("/sprints", response_model=List[Sprint], summary="List sprints")
async def list_sprints(repo: TasksRepository = Depends(get_tasks_repository)) -> List[Sprint]:
    return await repo.list_sprints()


# PUBLIC_INTERFACE
@router.get("/timesheets", response_model=List[Timesheet], summary="List timesheets")
async def list_timesheets(repo: TasksRepository = Depends(get_tasks_repository)) -> List[Timesheet]:
    return await repo.list_timesheets()


# PUBLIC_INTERFACE
@router.post("/timesheets", response_model=Timesheet, summary="Log time")
async def log_time(payload: TimesheetCreate, repo: TasksRepository = Depends(get_tasks_repository)) -> Timesheet:
    return await repo.log_time(payload)
