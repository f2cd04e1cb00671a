# app/core/lifecycle.py
"""
Task lifecycle: code generation, status transitions and their side effects.

Every function here returns the field updates to apply instead of touching
the database, so the CRUD layer stays the only writer.
"""
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
import random
import string

from app.db.models import Task, Profile, TaskStatus
from app.exceptions.domain import InvalidStateError, ValidationError

BASE36 = string.digits + string.ascii_lowercase


class TaskCodeGenerator:
    """Human-readable task codes"""

    @staticmethod
    def generate(timestamp: Optional[datetime] = None) -> str:
        """
        Format: TASK-<epoch millis>-<9 base36 chars>
        Example: TASK-1718000000000-k3j9x0a1b

        Unique with high probability only; the primary key is the identity.
        """
        if not timestamp:
            timestamp = datetime.now(timezone.utc)

        millis = int(timestamp.timestamp() * 1000)
        suffix = ''.join(random.choices(BASE36, k=9))
        return f"TASK-{millis}-{suffix}"


class TaskStatusTransition:
    """Forward-only transitions between task states"""

    ORDER: List[TaskStatus] = list(TaskStatus)

    # Field stamped on first entry into each state
    TIMESTAMP_FIELDS = {
        TaskStatus.ACCEPTED: "accepted_at",
        TaskStatus.IN_PROGRESS: "started_at",
        TaskStatus.DONE: "completed_at",
    }

    @classmethod
    def next_status(cls, current: TaskStatus) -> Optional[TaskStatus]:
        index = cls.ORDER.index(current)
        if index + 1 < len(cls.ORDER):
            return cls.ORDER[index + 1]
        return None

    @classmethod
    def is_valid_transition(cls, current: TaskStatus, new: TaskStatus) -> bool:
        """Same status (no-op) or the immediate successor"""
        return new == current or new == cls.next_status(current)

    @classmethod
    def get_allowed_transitions(cls, current: TaskStatus) -> list:
        nxt = cls.next_status(current)
        return [nxt] if nxt else []


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def new_task_fields(profile: Profile, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Fields every new task starts with, besides the caller's payload"""
    return {
        "task_code": TaskCodeGenerator.generate(_now(now)),
        "status": TaskStatus.NEW,
        "created_by": profile.role,
        "created_by_name": profile.name,
        "assigned_to": None,
        "assigned_to_name": None,
        "accepted_at": None,
        "started_at": None,
        "completed_at": None,
    }


def accept(task: Task, profile: Profile, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Caller claims an unclaimed task"""
    if task.status != TaskStatus.NEW:
        raise InvalidStateError("Task is not available")

    return {
        "status": TaskStatus.ACCEPTED,
        "assigned_to": profile.name,
        "assigned_to_name": profile.name,
        "accepted_at": task.accepted_at or _now(now),
    }


def reassign(task: Task, assignee: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Supervisor force-assign; may jump new → accepted"""
    assignee = assignee.strip()
    if not assignee:
        raise ValidationError("Assignee name is required")

    updates: Dict[str, Any] = {
        "assigned_to": assignee,
        "assigned_to_name": assignee,
        "accepted_at": task.accepted_at or _now(now),
    }
    if task.status == TaskStatus.NEW:
        updates["status"] = TaskStatus.ACCEPTED
    return updates


def transition(task: Task, new_status: TaskStatus, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Move a task to ``new_status``.

    Re-setting the current status is allowed and leaves timestamps alone.
    Going backwards or skipping a state raises InvalidStateError.
    """
    if new_status == TaskStatus.NEW:
        raise ValidationError("Status 'new' cannot be set explicitly")

    current = TaskStatus(task.status)
    if not TaskStatusTransition.is_valid_transition(current, new_status):
        allowed = [s.value for s in TaskStatusTransition.get_allowed_transitions(current)]
        raise InvalidStateError(
            f"Cannot move task from '{current.value}' to '{new_status.value}'; "
            f"allowed: {', '.join(allowed) or 'none'}"
        )

    updates: Dict[str, Any] = {"status": new_status}
    field = TaskStatusTransition.TIMESTAMP_FIELDS[new_status]
    if getattr(task, field) is None:
        updates[field] = _now(now)
    return updates
