# app/api/v1/schemas/analytics.py
from datetime import datetime
from typing import Dict
from pydantic import BaseModel, Field


class TaskAnalytics(BaseModel):
    """Supervisor workload rollup"""
    total_tasks: int = Field(..., description="All tasks")
    active_tasks: int = Field(..., description="Tasks not yet done")
    completed_tasks: int = Field(..., description="Tasks done")
    urgent_tasks: int = Field(..., description="Urgent tasks not yet done")
    recent_tasks_count: int = Field(..., description="Tasks created in the trailing window")
    status_counts: Dict[str, int]
    priority_counts: Dict[str, int]
    type_counts: Dict[str, int]
    role_counts: Dict[str, int]
    generated_at: datetime
