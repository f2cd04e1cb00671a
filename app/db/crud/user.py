from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional, Dict, Any
from loguru import logger

from app.db.models import User


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    """
    Asynchronously retrieves a user by their email address.
    """
    result = await db.execute(select(User).filter(User.email == email))
    user = result.scalars().first()
    if user:
        logger.debug(f"User found: {email}")
    return user


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    """
    Asynchronously retrieves a user by their ID.
    """
    result = await db.execute(select(User).filter(User.id == user_id))
    return result.scalars().first()


async def create_user_db(db: AsyncSession, user_data: Dict[str, Any]) -> User:
    """
    Asynchronously creates a new user record in the database.
    """
    try:
        if not user_data.get('email') or not user_data.get('hashed_password'):
            raise ValueError("Email and hashed_password are required")

        user = User(**user_data)
        db.add(user)
        await db.commit()
        await db.refresh(user)
        logger.info(f"User created successfully: {user.email}")
        return user
    except Exception as e:
        logger.error(f"Failed to create user: {e}")
        await db.rollback()
        raise


async def update_password_hash(db: AsyncSession, user: User, hashed_password: str) -> User:
    """
    Replace a stored hash, used when a login reveals outdated hash parameters.
    """
    try:
        user.hashed_password = hashed_password
        await db.commit()
        await db.refresh(user)
        logger.info(f"Password hash upgraded for user {user.id}")
        return user
    except Exception as e:
        logger.error(f"Failed to upgrade password hash for user {user.id}: {e}")
        await db.rollback()
        raise
