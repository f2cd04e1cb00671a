# app/api/v1/schemas/branding.py
from datetime import datetime
from pydantic import BaseModel, Field


class UploadTargetResponse(BaseModel):
    """Where and until when the client may upload bytes"""
    upload_url: str
    token: str
    expires_at: datetime


class StoredBlobResponse(BaseModel):
    storage_id: str
    content_type: str
    size: int


class LogoRegister(BaseModel):
    storage_id: str = Field(..., min_length=1, max_length=36)


class LogoResponse(BaseModel):
    id: int
    storage_id: str
    uploaded_by: str
    uploaded_at: datetime
    is_active: bool
    url: str

    @classmethod
    def from_model(cls, logo, url: str):
        return cls(
            id=logo.id,
            storage_id=logo.storage_id,
            uploaded_by=logo.uploaded_by,
            uploaded_at=logo.uploaded_at,
            is_active=logo.is_active,
            url=url,
        )
