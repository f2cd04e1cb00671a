# app/db/models/__init__.py
"""
Database models package
Imports all models for easy access
"""

# Import base classes and mixins
from app.db.models.base import Base, TimestampMixin, UUIDMixin

# Import all enums
from app.db.models.enums import (
    Role, TaskType, TaskPriority, TaskStatus,
    PORTER_TASK_TYPES
)

# Import identity provider models
from app.db.models.auth import User, BlacklistedToken

# Import domain models
from app.db.models.profile import Profile
from app.db.models.task import Task
from app.db.models.branding import Logo, StoredBlob, UploadSlot

# Export all models and enums
__all__ = [
    # Base classes
    'Base', 'TimestampMixin', 'UUIDMixin',

    # Enums
    'Role', 'TaskType', 'TaskPriority', 'TaskStatus',
    'PORTER_TASK_TYPES',

    # Identity provider models
    'User', 'BlacklistedToken',

    # Domain models
    'Profile', 'Task', 'Logo', 'StoredBlob', 'UploadSlot',
]
