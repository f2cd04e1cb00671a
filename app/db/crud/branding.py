# app/db/crud/branding.py
from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import update, delete, and_
from sqlalchemy.exc import IntegrityError
from typing import Optional
from loguru import logger

from app.db.models import Logo, StoredBlob, UploadSlot
from app.exceptions.domain import InvalidStateError


async def create_upload_slot(db: AsyncSession, token: str, user_id: int, expires_at: datetime) -> UploadSlot:
    try:
        slot = UploadSlot(token=token, user_id=user_id, expires_at=expires_at)
        db.add(slot)
        await db.commit()
        await db.refresh(slot)
        logger.info(f"Upload slot issued to user {user_id}, expires {expires_at.isoformat()}")
        return slot
    except Exception as e:
        logger.error(f"Failed to create upload slot: {e}")
        await db.rollback()
        raise


async def get_upload_slot(db: AsyncSession, token: str) -> Optional[UploadSlot]:
    result = await db.execute(select(UploadSlot).filter(UploadSlot.token == token))
    return result.scalars().first()


async def save_blob(
        db: AsyncSession,
        slot: UploadSlot,
        storage_id: str,
        content_type: str,
        size: int,
        path: str
) -> StoredBlob:
    """Record stored bytes and burn the slot in one commit"""
    try:
        blob = StoredBlob(storage_id=storage_id, content_type=content_type, size=size, path=path)
        db.add(blob)
        slot.consumed_at = datetime.now(timezone.utc)
        slot.storage_id = storage_id
        await db.commit()
        await db.refresh(blob)
        logger.info(f"Blob stored: {storage_id} ({content_type}, {size} bytes)")
        return blob
    except Exception as e:
        logger.error(f"Failed to record blob {storage_id}: {e}")
        await db.rollback()
        raise


async def get_blob(db: AsyncSession, storage_id: str) -> Optional[StoredBlob]:
    result = await db.execute(select(StoredBlob).filter(StoredBlob.storage_id == storage_id))
    return result.scalars().first()


async def delete_stale_upload_slots(db: AsyncSession) -> int:
    """Drop expired slots that were never used"""
    try:
        result = await db.execute(
            delete(UploadSlot).where(
                and_(
                    UploadSlot.expires_at <= datetime.now(timezone.utc),
                    UploadSlot.consumed_at.is_(None)
                )
            )
        )
        await db.commit()
        deleted_count = result.rowcount or 0
        logger.info(f"Deleted {deleted_count} stale upload slots")
        return deleted_count
    except Exception as e:
        logger.error(f"Failed to delete stale upload slots: {e}")
        await db.rollback()
        raise


async def register_logo(db: AsyncSession, storage_id: str, uploaded_by: str) -> Logo:
    """
    Retire the active logo and insert the new one in a single commit.

    The current active row is locked first so concurrent registrations queue
    behind each other; the partial unique index on ``is_active`` refuses a
    second active row when there was none to lock.
    """
    try:
        await db.execute(select(Logo.id).where(Logo.is_active.is_(True)).with_for_update())
        await db.execute(
            update(Logo).where(Logo.is_active.is_(True)).values(is_active=False)
        )
        logo = Logo(storage_id=storage_id, uploaded_by=uploaded_by, is_active=True)
        db.add(logo)
        await db.commit()
        await db.refresh(logo)
        logger.info(f"Logo {logo.id} registered by {uploaded_by} (storage {storage_id})")
        return logo
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Concurrent logo registration refused for {storage_id}: {e.orig}")
        raise InvalidStateError("Another logo was registered at the same time; try again")
    except Exception as e:
        logger.error(f"Failed to register logo {storage_id}: {e}")
        await db.rollback()
        raise


async def get_active_logo(db: AsyncSession) -> Optional[Logo]:
    result = await db.execute(
        select(Logo).filter(Logo.is_active.is_(True)).order_by(Logo.id.desc())
    )
    return result.scalars().first()
