# app/db/crud/profile.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional, Dict, Any
from loguru import logger

from app.db.models import Profile, User, Role
from app.utils.helpers import utc_now

# Role-conditional columns; a profile switching role has the other set cleared
PROFILE_FIELDS = ("role", "name", "bed_number", "case_number", "staff_id", "department")


async def get_profile_by_user_id(db: AsyncSession, user_id: int) -> Optional[Profile]:
    """Get the profile owned by a user"""
    result = await db.execute(select(Profile).filter(Profile.user_id == user_id))
    return result.scalars().first()


async def upsert_profile(db: AsyncSession, user: User, profile_data: Dict[str, Any]) -> Profile:
    """
    Create the caller's profile, or overwrite it when one exists.
    Missing role-specific fields are stored as NULL.
    """
    try:
        profile = await get_profile_by_user_id(db, user.id)
        values = {field: profile_data.get(field) for field in PROFILE_FIELDS}
        values["role"] = Role(values["role"])
        values["last_active"] = utc_now()

        if profile:
            for field, value in values.items():
                setattr(profile, field, value)
            action = "updated"
        else:
            profile = Profile(user_id=user.id, **values)
            db.add(profile)
            action = "created"

        await db.commit()
        await db.refresh(profile)
        logger.info(f"Profile {action}: {profile.name} ({profile.role.value}) for user {user.id}")
        return profile

    except Exception as e:
        logger.error(f"Failed to save profile for user {user.id}: {e}")
        await db.rollback()
        raise


async def touch_last_active(db: AsyncSession, profile: Profile) -> Profile:
    """Liveness ping"""
    try:
        profile.last_active = utc_now()
        await db.commit()
        await db.refresh(profile)
        logger.debug(f"Profile {profile.id} last active at {profile.last_active}")
        return profile
    except Exception as e:
        logger.error(f"Failed to touch profile {profile.id}: {e}")
        await db.rollback()
        raise
