# app/auth/dependencies.py - Identity and profile resolution
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from jose import JWTError
from loguru import logger

from app.db.database import get_db
from app.auth.security import decode_token
from app.db.crud.user import get_user_by_id
from app.db.crud.token import is_jti_blacklisted
from app.db.crud.profile import get_profile_by_user_id
from app.db.models import User, Profile
from app.exceptions.auth import NotAuthenticatedError, TokenBlacklistedError, InactiveUserError
from app.exceptions.domain import ProfileNotFoundError

# auto_error=False so anonymous callers reach the optional dependencies
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


async def get_optional_user(
        db: AsyncSession = Depends(get_db),
        token: Optional[str] = Depends(oauth2_scheme)
) -> Optional[User]:
    """
    Resolve the caller's identity; None when no usable token was sent
    """
    if not token:
        return None

    try:
        payload = decode_token(token)
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None

    user_id = payload.get("user_id")
    jti = payload.get("jti")
    if not all([payload.get("sub"), user_id, jti]) or payload.get("type") != "access":
        logger.warning("Invalid token payload - missing required fields")
        return None

    if await is_jti_blacklisted(db, jti):
        logger.warning(f"Blacklisted token used | jti={jti}")
        raise TokenBlacklistedError()

    user = await get_user_by_id(db, user_id)
    if not user:
        logger.warning(f"User not found | user_id={user_id}")
        return None

    if not user.is_active:
        logger.warning(f"Inactive user authentication attempt | email={user.email}")
        raise InactiveUserError()

    logger.debug(f"User authenticated | email={user.email} | user_id={user.id}")
    return user


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Authenticated caller or NotAuthenticatedError"""
    if user is None:
        raise NotAuthenticatedError()
    return user


async def get_optional_profile(
        db: AsyncSession = Depends(get_db),
        user: Optional[User] = Depends(get_optional_user)
) -> Optional[Profile]:
    if user is None:
        return None
    return await get_profile_by_user_id(db, user.id)


async def get_current_profile(
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(get_current_user)
) -> Profile:
    """Caller's profile; ProfileNotFoundError until one is created"""
    profile = await get_profile_by_user_id(db, current_user.id)
    if profile is None:
        logger.warning(f"Profile missing | user_id={current_user.id}")
        raise ProfileNotFoundError()
    return profile
