# app/api/v1/endpoints/logos.py
"""Branding logo endpoints"""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.db.crud import branding as branding_crud
from app.db.models import User, Profile
from app.api.v1.schemas.branding import UploadTargetResponse, LogoRegister, LogoResponse
from app.auth.dependencies import get_current_user, get_current_profile
from app.core import policy, tracing
from app.integrations.blob_store import blob_store

router = APIRouter()


@router.post("/upload-url", response_model=UploadTargetResponse)
async def generate_upload_url(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Issue a one-time upload target"""
    target = await blob_store.issue_upload_target(db, current_user)
    return UploadTargetResponse(
        upload_url=target.upload_url,
        token=target.token,
        expires_at=target.expires_at,
    )


@router.post("", response_model=LogoResponse, status_code=status.HTTP_201_CREATED)
async def register_logo(
    logo_in: LogoRegister,
    db: AsyncSession = Depends(get_db),
    profile: Profile = Depends(get_current_profile)
):
    """Make an uploaded blob the active logo, retiring the previous one"""
    policy.require_logo_upload(profile)
    blob = await blob_store.get_blob(db, logo_in.storage_id)

    logo = await branding_crud.register_logo(db, blob.storage_id, profile.name)
    tracing.info("Active logo replaced", logo_id=logo.id, by=profile.name)
    return LogoResponse.from_model(logo, blob_store.resolve_url(logo.storage_id))


@router.get("/active", response_model=Optional[LogoResponse])
async def get_active_logo(db: AsyncSession = Depends(get_db)):
    """Current logo with its fetch URL; null when none was ever set"""
    logo = await branding_crud.get_active_logo(db)
    if logo is None:
        return None
    return LogoResponse.from_model(logo, blob_store.resolve_url(logo.storage_id))
