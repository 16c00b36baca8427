from __future__ import annotations

from typing import List

from enterprise_ledger.core.errors import NotFoundError
from enterprise_ledger.core.ids import deep_copy, new_id
from enterprise_ledger.schemas.tasks import (
    KanbanColumn,
    Sprint,
    Task,
    TaskCreate,
    TaskStatus,
    TaskUpdate,
    Timesheet,
    TimesheetCreate,
)
from enterprise_ledger.state import enterprise_store
from enterprise_ledger.state.store import EnterpriseState, EnterpriseStore
from .base import BaseRepository


class TasksRepository(BaseRepository):
    """Repository for the kanban board, sprints and timesheets."""

    def __init__(self, store: EnterpriseStore) -> None:
        super().__init__(store)

    @staticmethod
    def _get_task(state: EnterpriseState, task_id: str) -> Task:
        task = next((t for t in state.tasks.tasks if t.id == task_id), None)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    async def list_columns(self) -> List[KanbanColumn]:
        return await self.read(lambda state: state.tasks.columns)

    async def list_tasks(self) -> List[Task]:
        return await self.read(lambda state: state.tasks.tasks)

    async def list_sprints(self) -> List[Sprint]:
        return await self.read(lambda state: state.tasks.sprints)

    async def list_timesheets(self) -> List[Timesheet]:
        return await self.read(lambda state: state.tasks.timesheets)

    # PUBLIC_INTERFACE
    async def move_task(self, task_id: str, status: TaskStatus) -> Task:
        async with self.transaction() as state:
            task = self._get_task(state, task_id)
            task.status = status
            return deep_copy(task)

    # PUBLIC_INTERFACE
    async def update_task(self, task_id: str, patch: TaskUpdate) -> Task:
        """
        Apply only the fields explicitly set on ``patch``.

        The merged task is validated before it replaces the stored one, so a
        rejected patch leaves the task untouched.
        """
        async with self.transaction() as state:
            task = self._get_task(state, task_id)
            updated = Task.model_validate({**task.model_dump(), **patch.model_dump(exclude_unset=True)})
            index = next(i for i, t in enumerate(state.tasks.tasks) if t is task)
            state.tasks.tasks[index] = updated
            return deep_copy(updated)

    # PUBLIC_INTERFACE
    async def create_task(self, payload: TaskCreate) -> Task:
        async with self.transaction() as state:
            task = Task(id=new_id("task"), **payload.model_dump())
            state.tasks.tasks.append(task)
            return deep_copy(task)

    # PUBLIC_INTERFACE
    async def log_time(self, payload: TimesheetCreate) -> Timesheet:
        async with self.transaction() as state:
            entry = Timesheet(id=new_id("ts"), **payload.model_dump())
            state.tasks.timesheets.append(entry)
            return deep_copy(entry)


tasks_repository = TasksRepository(enterprise_store)
