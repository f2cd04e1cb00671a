# app/api/v1/endpoints/profiles.py
"""Profile directory endpoints"""
from typing import Optional

from fastapi import APIRouter, Depends, status, Body
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.db.crud import profile as profile_crud
from app.db.models import User, Profile
from app.api.v1.schemas.profiles import ProfileCreate, ProfileCreated, ProfileResponse
from app.auth.dependencies import get_current_user, get_optional_profile
from app.core import tracing

router = APIRouter()


@router.post("", response_model=ProfileCreated)
async def create_profile(
    profile_in: ProfileCreate = Body(...),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create the caller's profile, or replace it if one already exists"""
    profile = await profile_crud.upsert_profile(db, current_user, profile_in.model_dump())
    tracing.info("Profile saved", user_id=current_user.id, role=profile.role.value)
    return ProfileCreated(id=profile.uuid)


@router.get("/me", response_model=Optional[ProfileResponse])
async def get_my_profile(profile: Optional[Profile] = Depends(get_optional_profile)):
    """The caller's profile; null when anonymous or not yet set up"""
    if profile is None:
        return None
    return ProfileResponse.from_model(profile)


@router.post("/me/touch", status_code=status.HTTP_204_NO_CONTENT)
async def touch_last_active(
    db: AsyncSession = Depends(get_db),
    profile: Optional[Profile] = Depends(get_optional_profile)
):
    """Liveness ping; silently ignored without a profile"""
    if profile is not None:
        await profile_crud.touch_last_active(db, profile)
