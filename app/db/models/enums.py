# app/db/models/enums.py
import enum


class Role(str, enum.Enum):
    PATIENT = "patient"
    NURSE = "nurse"
    PORTER = "porter"
    SUPERVISOR = "supervisor"


class TaskType(str, enum.Enum):
    TRANSPORT = "transport"
    MEAL = "meal"
    CLEANING = "cleaning"
    INTERPRETER = "interpreter"
    EQUIPMENT = "equipment"
    NURSING = "nursing"


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(str, enum.Enum):
    """Lifecycle order is declaration order"""
    NEW = "new"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    DONE = "done"


# Task types a porter can pick up from the shared queue
PORTER_TASK_TYPES = frozenset({
    TaskType.TRANSPORT,
    TaskType.EQUIPMENT,
    TaskType.CLEANING,
    TaskType.MEAL,
})
