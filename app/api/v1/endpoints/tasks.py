# app/api/v1/endpoints/tasks.py
"""Task management endpoints"""
from fastapi import APIRouter, Depends, status, Path
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from app.db.database import get_db
from app.db.crud import task as task_crud
from app.db.models import Profile, TaskStatus
from app.api.v1.schemas.tasks import (
    TaskCreate, TaskCreated, TaskAssign, TaskStatusUpdate, TaskNotesUpdate, TaskResponse
)
from app.auth.dependencies import get_current_profile
from app.core import lifecycle, policy, tracing
from app.core.visibility import is_visible
from app.exceptions.domain import NotFoundError

router = APIRouter()


async def load_task(db: AsyncSession, task_id: UUID, for_update: bool = False):
    return policy.require_task(await task_crud.get_task_by_uuid(db, task_id, for_update=for_update))


@router.post("", response_model=TaskCreated, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_in: TaskCreate,
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile)
):
    """Raise a new service request"""
    policy.require_create(profile)
    task = await task_crud.create_task(db, task_in.model_dump(), profile)
    return TaskCreated(id=task.uuid, task_code=task.task_code)


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile)
):
    """Tasks visible to the caller's role, newest first"""
    tasks = await task_crud.list_tasks_for_profile(db, profile)
    return [TaskResponse.from_model(task) for task in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: UUID = Path(..., description="Task UUID"),
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile)
):
    """Single task; hidden tasks look missing"""
    task = await load_task(db, task_id)
    if not is_visible(profile, task):
        tracing.debug("Task outside caller's view", task_code=task.task_code, role=profile.role.value)
        raise NotFoundError("Task")
    return TaskResponse.from_model(task)


@router.post("/{task_id}/accept", response_model=TaskResponse)
async def accept_task(
    task_id: UUID = Path(..., description="Task UUID"),
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile)
):
    """Claim an unclaimed task"""
    task = await load_task(db, task_id, for_update=True)
    policy.require_accept(profile, task)
    task = await task_crud.update_task(
        db, task, lifecycle.accept(task, profile), profile, expected_status=TaskStatus.NEW
    )
    return TaskResponse.from_model(task)


@router.post("/{task_id}/assign", response_model=TaskResponse)
async def assign_task(
    assignment: TaskAssign,
    task_id: UUID = Path(..., description="Task UUID"),
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile)
):
    """Supervisor hands a task to a named staff member"""
    policy.require_assign(profile)
    task = await load_task(db, task_id, for_update=True)
    updates = lifecycle.reassign(task, assignment.assigned_to)
    task = await task_crud.assign_task(db, task, updates, profile)
    return TaskResponse.from_model(task)


@router.patch("/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    status_update: TaskStatusUpdate,
    task_id: UUID = Path(..., description="Task UUID"),
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile)
):
    """Move a task forward one step"""
    task = await load_task(db, task_id, for_update=True)
    policy.require_edit(profile, task)
    updates = lifecycle.transition(task, status_update.status)
    task = await task_crud.update_task(db, task, updates, profile, expected_status=task.status)
    return TaskResponse.from_model(task)


@router.patch("/{task_id}/notes", response_model=TaskResponse)
async def update_task_notes(
    notes_update: TaskNotesUpdate,
    task_id: UUID = Path(..., description="Task UUID"),
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile)
):
    """Replace the free-text notes"""
    task = await load_task(db, task_id, for_update=True)
    policy.require_edit(profile, task)
    task = await task_crud.update_task(db, task, {"notes": notes_update.notes}, profile)
    return TaskResponse.from_model(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID = Path(..., description="Task UUID"),
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile)
):
    """Hard-delete a task"""
    task = await load_task(db, task_id)
    policy.require_delete(profile, task)
    await task_crud.delete_task(db, task)
    tracing.info("Task deleted", task_id=str(task_id), by=profile.name)
