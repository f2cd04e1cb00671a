# app/db/models/task.py
"""Service request model"""
from sqlalchemy import Column, String, Text, Index, Enum, DateTime

from app.db.models.base import Base, TimestampMixin, UUIDMixin
from app.db.models.enums import Role, TaskType, TaskPriority, TaskStatus


class Task(Base, UUIDMixin, TimestampMixin):
    """A hospital service request moving through new → accepted → in_progress → done"""
    __tablename__ = "tasks"

    # Display label, not an identity
    task_code = Column(String(64), nullable=False, index=True)

    type = Column(Enum(TaskType), nullable=False, index=True)
    priority = Column(Enum(TaskPriority), nullable=False, index=True)
    status = Column(Enum(TaskStatus), nullable=False, default=TaskStatus.NEW, index=True)

    # Patient context
    bed_number = Column(String(50), nullable=False, index=True)
    patient_name = Column(String(255), nullable=False)
    case_number = Column(String(100), nullable=True)

    # Content
    description = Column(Text, nullable=False)
    notes = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)

    # Creator role, not identity
    created_by = Column(Enum(Role), nullable=False, index=True)
    created_by_name = Column(String(255), nullable=False)
    assigned_to = Column(String(255), nullable=True, index=True)
    assigned_to_name = Column(String(255), nullable=True)

    # Lifecycle timestamps, each written once
    accepted_at = Column(DateTime(timezone=True), nullable=True)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index('idx_task_bed_case', 'bed_number', 'case_number'),
        Index('idx_task_type_status', 'type', 'status'),
    )

    def __repr__(self):
        return f"<Task code={self.task_code} status={self.status}>"
