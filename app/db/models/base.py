import uuid
from sqlalchemy import Column, Integer, DateTime, Uuid, func
from app.db.database import Base

class TimestampMixin:
    """Mixin for created_at and updated_at timestamps"""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), default=func.now(), nullable=False)

class UUIDMixin:
    """Mixin for UUID fields with internal ID"""
    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(Uuid(as_uuid=True), unique=True, default=uuid.uuid4, index=True, nullable=False)
