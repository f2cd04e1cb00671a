# app/db/models/profile.py
"""Profile directory model"""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum, Index
from sqlalchemy.orm import relationship

from app.db.models.base import Base, TimestampMixin, UUIDMixin
from app.db.models.enums import Role


class Profile(Base, UUIDMixin, TimestampMixin):
    """Role-scoped identity record; exactly one per user"""
    __tablename__ = "profiles"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    role = Column(Enum(Role), nullable=False, index=True)
    name = Column(String(255), nullable=False)

    # Patient-specific fields
    bed_number = Column(String(50), nullable=True, index=True)
    case_number = Column(String(100), nullable=True, index=True)

    # Staff-specific fields
    staff_id = Column(String(100), nullable=True)
    department = Column(String(255), nullable=True)

    last_active = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="profile")

    __table_args__ = (
        Index('idx_profile_role_name', 'role', 'name'),
    )

    @property
    def is_supervisor(self) -> bool:
        return self.role == Role.SUPERVISOR

    def __repr__(self):
        return f"<Profile name={self.name} role={self.role}>"
