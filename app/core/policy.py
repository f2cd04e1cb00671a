# app/core/policy.py
"""
Authorization policy for task and branding actions.

The ``can_*`` predicates are pure and side-effect free; the ``require_*``
helpers wrap them and raise the matching domain error so endpoints can tell
"task vanished" (NotFoundError) from "you may not touch it"
(NotAuthorizedError) and "not in that state" (InvalidStateError).

Edit rights are granted by creator *role*, not creator identity: every nurse
may edit a task another nurse raised.
"""
from typing import Optional

from app.db.models import Profile, Task, TaskStatus
from app.exceptions.domain import NotAuthorizedError, NotFoundError, InvalidStateError


def can_create_task(profile: Profile) -> bool:
    return profile.role is not None


def can_accept_task(profile: Profile, task: Task) -> bool:
    return task.status == TaskStatus.NEW


def can_assign_task(profile: Profile) -> bool:
    return profile.is_supervisor


def can_edit_task(profile: Profile, task: Task) -> bool:
    """Status changes and notes"""
    return (
        profile.is_supervisor
        or (task.assigned_to is not None and task.assigned_to == profile.name)
        or task.created_by == profile.role
    )


def can_delete_task(profile: Profile, task: Task) -> bool:
    return profile.is_supervisor or task.created_by == profile.role


def can_view_analytics(profile: Profile) -> bool:
    return profile.is_supervisor


def can_register_logo(profile: Profile) -> bool:
    return profile.is_supervisor


def require_task(task: Optional[Task]) -> Task:
    if task is None:
        raise NotFoundError("Task")
    return task


def require_accept(profile: Profile, task: Task) -> None:
    if not can_accept_task(profile, task):
        raise InvalidStateError("Task is not available")


def require_create(profile: Profile) -> None:
    if not can_create_task(profile):
        raise NotAuthorizedError("A role is required to create tasks")


def require_assign(profile: Profile) -> None:
    if not can_assign_task(profile):
        raise NotAuthorizedError("Only supervisors can assign tasks")


def require_edit(profile: Profile, task: Task) -> None:
    if not can_edit_task(profile, task):
        raise NotAuthorizedError("Not authorized to update this task")


def require_delete(profile: Profile, task: Task) -> None:
    if not can_delete_task(profile, task):
        raise NotAuthorizedError("Not authorized to delete this task")


def require_analytics(profile: Profile) -> None:
    if not can_view_analytics(profile):
        raise NotAuthorizedError("Only supervisors can access analytics")


def require_logo_upload(profile: Profile) -> None:
    if not can_register_logo(profile):
        raise NotAuthorizedError("Only supervisors can upload logos")
