# app/api/v1/schemas/profiles.py
"""
Profile payloads.

Role-specific attributes form a tagged union keyed by ``role``: a patient
carries bed and case numbers, staff carry staff id and department, and
neither may carry the other's fields.
"""
from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, UUID4

from app.db.models import Role


class _ProfileBase(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255, description="Display name")


class PatientProfileCreate(_ProfileBase):
    role: Literal["patient"]
    bed_number: str = Field(..., min_length=1, max_length=50)
    case_number: Optional[str] = Field(None, max_length=100)


class StaffProfileCreate(_ProfileBase):
    role: Literal["nurse", "porter", "supervisor"]
    staff_id: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=255)


ProfileCreate = Annotated[
    Union[PatientProfileCreate, StaffProfileCreate],
    Field(discriminator="role")
]


class ProfileCreated(BaseModel):
    id: UUID4


class ProfileResponse(BaseModel):
    """Profile as returned to its owner"""
    id: UUID4 = Field(..., description="Profile UUID")
    role: Role
    name: str
    bed_number: Optional[str] = None
    case_number: Optional[str] = None
    staff_id: Optional[str] = None
    department: Optional[str] = None
    last_active: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_model(cls, profile):
        return cls(
            id=profile.uuid,
            role=profile.role,
            name=profile.name,
            bed_number=profile.bed_number,
            case_number=profile.case_number,
            staff_id=profile.staff_id,
            department=profile.department,
            last_active=profile.last_active,
            created_at=profile.created_at,
        )
