# app/db/crud/task.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import update, case, func, literal
from typing import Optional, List, Dict, Any
from uuid import UUID
from loguru import logger

from app.db.models import Task, Profile, TaskStatus
from app.core import lifecycle
from app.core.visibility import visibility_clause
from app.exceptions.domain import InvalidStateError

# Lifecycle timestamps are written once; later writes keep the stored value
SET_ONCE_FIELDS = frozenset(lifecycle.TaskStatusTransition.TIMESTAMP_FIELDS.values())


async def get_task_by_uuid(db: AsyncSession, task_uuid: UUID, for_update: bool = False) -> Optional[Task]:
    """
    Get task by UUID.
    ``for_update`` row-locks it until the session commits (ignored by SQLite,
    which serializes writers anyway).
    """
    query = select(Task).filter(Task.uuid == task_uuid)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalars().first()


async def list_tasks_for_profile(db: AsyncSession, profile: Profile) -> List[Task]:
    """Tasks the profile may see, newest first"""
    query = (
        select(Task)
        .filter(visibility_clause(profile))
        .order_by(Task.created_at.desc(), Task.id.desc())
    )
    result = await db.execute(query)
    tasks = list(result.scalars().all())
    logger.debug(f"Listed {len(tasks)} tasks for {profile.role.value} {profile.name}")
    return tasks


async def list_all_tasks(db: AsyncSession) -> List[Task]:
    """Unfiltered scan, used by analytics"""
    result = await db.execute(select(Task))
    return list(result.scalars().all())


async def create_task(db: AsyncSession, task_data: Dict[str, Any], creator: Profile) -> Task:
    """Create a new task at status 'new'"""
    try:
        task = Task(**task_data, **lifecycle.new_task_fields(creator))

        db.add(task)
        await db.commit()
        await db.refresh(task)

        logger.info(
            f"Task created: {task.task_code} ({task.type.value}/{task.priority.value}) "
            f"for bed {task.bed_number} by {creator.role.value} {creator.name}"
        )
        return task

    except Exception as e:
        logger.error(f"Failed to create task: {e}")
        await db.rollback()
        raise


def _column_values(updates: Dict[str, Any]) -> Dict[str, Any]:
    values = {}
    for field, value in updates.items():
        if field in SET_ONCE_FIELDS:
            column = getattr(Task, field)
            values[field] = func.coalesce(column, literal(value, column.type))
        else:
            values[field] = value
    return values


async def _apply(db: AsyncSession, task: Task, values: Dict[str, Any], guard, editor: Profile) -> Task:
    """
    Single conditional UPDATE; zero matched rows means the task changed
    underneath the caller.
    """
    try:
        statement = (
            update(Task)
            .where(Task.id == task.id, *guard)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(statement)
        if result.rowcount == 0:
            await db.rollback()
            logger.warning(f"Task {task.task_code} changed concurrently; update by {editor.name} refused")
            raise InvalidStateError("Task was changed by someone else; reload and try again")

        await db.commit()
        await db.refresh(task)

        logger.info(
            f"Task {task.task_code} updated by {editor.name}: {sorted(values)} "
            f"(status={task.status.value})"
        )
        return task

    except InvalidStateError:
        raise
    except Exception as e:
        logger.error(f"Failed to update task {task.task_code}: {e}")
        await db.rollback()
        raise


async def update_task(
        db: AsyncSession,
        task: Task,
        updates: Dict[str, Any],
        editor: Profile,
        expected_status: Optional[TaskStatus] = None
) -> Task:
    """
    Apply field updates computed by the lifecycle engine or an edit.

    With ``expected_status`` the write only lands if the stored status still
    equals it, so two callers acting on the same snapshot cannot both win.
    """
    guard = [] if expected_status is None else [Task.status == expected_status]
    return await _apply(db, task, _column_values(updates), guard, editor)


async def assign_task(db: AsyncSession, task: Task, updates: Dict[str, Any], editor: Profile) -> Task:
    """
    Supervisor reassign. The new → accepted promotion is decided by the
    database row, not the caller's copy, so a later status is never rewound.
    """
    values = _column_values({k: v for k, v in updates.items() if k != "status"})
    if "status" in updates:
        values["status"] = case(
            (Task.status == TaskStatus.NEW, literal(updates["status"], Task.status.type)),
            else_=Task.status
        )
    return await _apply(db, task, values, [], editor)


async def delete_task(db: AsyncSession, task: Task) -> None:
    """Delete a task (hard delete)"""
    try:
        await db.delete(task)
        await db.commit()
        logger.info(f"Task {task.task_code} deleted")
    except Exception as e:
        logger.error(f"Failed to delete task {task.task_code}: {e}")
        await db.rollback()
        raise
