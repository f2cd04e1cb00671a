from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, and_
from loguru import logger

from app.db.models import BlacklistedToken


async def add_to_blacklist(db: AsyncSession, jti: str, expires_at: datetime) -> BlacklistedToken:
    """
    Adds a JWT ID (jti) to the blacklist so the access token stops working.
    """
    try:
        blacklisted = BlacklistedToken(jti=jti, expires_at=expires_at)
        db.add(blacklisted)
        await db.commit()
        await db.refresh(blacklisted)
        logger.info(f"Token blacklisted | jti={jti}")
        return blacklisted
    except Exception as e:
        logger.error(f"Failed to blacklist token {jti}: {e}")
        await db.rollback()
        raise


async def is_jti_blacklisted(db: AsyncSession, jti: str) -> bool:
    """
    Checks whether a JWT ID is on the blacklist and not yet expired.
    """
    result = await db.execute(
        select(BlacklistedToken.id).filter(
            and_(
                BlacklistedToken.jti == jti,
                BlacklistedToken.expires_at > datetime.now(timezone.utc)
            )
        )
    )
    return result.scalars().first() is not None


async def delete_expired_blacklisted_tokens(db: AsyncSession) -> int:
    """
    Removes blacklist entries whose tokens have expired anyway.
    Returns the number of deleted rows.
    """
    try:
        result = await db.execute(
            delete(BlacklistedToken).where(BlacklistedToken.expires_at <= datetime.now(timezone.utc))
        )
        await db.commit()
        deleted_count = result.rowcount or 0
        logger.info(f"Deleted {deleted_count} expired blacklisted tokens")
        return deleted_count
    except Exception as e:
        logger.error(f"Failed to delete expired blacklisted tokens: {e}")
        await db.rollback()
        raise
