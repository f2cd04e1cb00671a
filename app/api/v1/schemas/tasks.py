# app/api/v1/schemas/tasks.py
from pydantic import BaseModel, ConfigDict, Field, UUID4, field_validator
from typing import Optional
from datetime import datetime

from app.db.models import Role, TaskType, TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    """Schema for raising a service request"""
    model_config = ConfigDict(str_strip_whitespace=True)

    type: TaskType = Field(..., description="Service category")
    priority: TaskPriority = Field(..., description="Urgency")
    bed_number: str = Field(..., min_length=1, max_length=50)
    patient_name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, description="What is needed")
    location: Optional[str] = Field(None, max_length=255)
    case_number: Optional[str] = Field(None, max_length=100)

    @field_validator("location", "case_number")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class TaskCreated(BaseModel):
    id: UUID4 = Field(..., description="Task UUID")
    task_code: str = Field(..., description="Human-readable task code")


class TaskAssign(BaseModel):
    """Supervisor force-assign"""
    assigned_to: str = Field(..., min_length=1, max_length=255, description="Display name of the assignee")


class TaskStatusUpdate(BaseModel):
    """Schema for updating task status; 'new' is never a valid target"""
    status: TaskStatus = Field(..., description="New task status")

    @field_validator("status")
    @classmethod
    def not_new(cls, v: TaskStatus) -> TaskStatus:
        if v == TaskStatus.NEW:
            raise ValueError("Status 'new' cannot be set explicitly")
        return v


class TaskNotesUpdate(BaseModel):
    notes: str = Field(..., max_length=10000)


class TaskResponse(BaseModel):
    """Schema for task response with UUID"""
    id: UUID4 = Field(..., description="Task UUID")
    task_code: str
    type: TaskType
    priority: TaskPriority
    status: TaskStatus
    bed_number: str
    patient_name: str
    case_number: Optional[str] = None
    description: str
    notes: Optional[str] = None
    location: Optional[str] = None
    created_by: Role
    created_by_name: str
    assigned_to: Optional[str] = None
    assigned_to_name: Optional[str] = None
    created_at: datetime
    accepted_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, task):
        """Convert Task model to API response using UUID"""
        return cls(
            id=task.uuid,
            task_code=task.task_code,
            type=task.type,
            priority=task.priority,
            status=task.status,
            bed_number=task.bed_number,
            patient_name=task.patient_name,
            case_number=task.case_number,
            description=task.description,
            notes=task.notes,
            location=task.location,
            created_by=task.created_by,
            created_by_name=task.created_by_name,
            assigned_to=task.assigned_to,
            assigned_to_name=task.assigned_to_name,
            created_at=task.created_at,
            accepted_at=task.accepted_at,
            started_at=task.started_at,
            completed_at=task.completed_at,
        )
