# app/core/analytics.py
"""
Workload rollup for supervisors.

Everything is tallied from the full task list on each call; there is no
incremental bookkeeping, so cost grows linearly with the number of tasks.
"""
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable, Dict, Any, Optional, Type
import enum

from app.db.models import Task, Role, TaskType, TaskPriority, TaskStatus
from app.utils.helpers import ensure_utc


def _breakdown(values: Iterable, enum_cls: Type[enum.Enum]) -> Dict[str, int]:
    """Count per enum value, zero-filled for values that never occur"""
    counts = Counter(enum_cls(v) for v in values)
    return {member.value: counts.get(member, 0) for member in enum_cls}


def summarize_tasks(
        tasks: Iterable[Task],
        now: Optional[datetime] = None,
        window_days: int = 7
) -> Dict[str, Any]:
    tasks = list(tasks)
    now = now or datetime.now(timezone.utc)
    window_start = now - timedelta(days=window_days)

    active = [t for t in tasks if t.status != TaskStatus.DONE]

    return {
        "total_tasks": len(tasks),
        "active_tasks": len(active),
        "completed_tasks": len(tasks) - len(active),
        "urgent_tasks": len([t for t in active if t.priority == TaskPriority.URGENT]),
        "recent_tasks_count": len([
            t for t in tasks if ensure_utc(t.created_at) > window_start
        ]),
        "status_counts": _breakdown((t.status for t in tasks), TaskStatus),
        "priority_counts": _breakdown((t.priority for t in tasks), TaskPriority),
        "type_counts": _breakdown((t.type for t in tasks), TaskType),
        "role_counts": _breakdown((t.created_by for t in tasks), Role),
    }
