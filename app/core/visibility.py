# app/core/visibility.py
"""Which tasks each role may see"""
from sqlalchemy import and_, or_, true, false
from sqlalchemy.sql.elements import ColumnElement

from app.db.models import Task, Profile, Role, TaskStatus, PORTER_TASK_TYPES


def visibility_clause(profile: Profile) -> ColumnElement:
    """SQL filter for the tasks ``profile`` may list"""
    if profile.role == Role.SUPERVISOR:
        return true()

    if profile.role == Role.PATIENT:
        # Both keys must match; no case number means no tasks
        if not profile.case_number:
            return false()
        return and_(
            Task.bed_number == (profile.bed_number or ""),
            Task.case_number == profile.case_number,
        )

    if profile.role == Role.NURSE:
        # Ward-wide: every nurse sees every nurse-raised task
        return Task.created_by == Role.NURSE

    if profile.role == Role.PORTER:
        return and_(
            Task.type.in_(list(PORTER_TASK_TYPES)),
            or_(Task.status == TaskStatus.NEW, Task.assigned_to == profile.name),
        )

    return false()


def is_visible(profile: Profile, task: Task) -> bool:
    """In-memory twin of :func:`visibility_clause` for a single task"""
    if profile.role == Role.SUPERVISOR:
        return True

    if profile.role == Role.PATIENT:
        return bool(profile.case_number) and (
            task.bed_number == (profile.bed_number or "")
            and task.case_number == profile.case_number
        )

    if profile.role == Role.NURSE:
        return task.created_by == Role.NURSE

    if profile.role == Role.PORTER:
        return task.type in PORTER_TASK_TYPES and (
            task.status == TaskStatus.NEW or task.assigned_to == profile.name
        )

    return False
