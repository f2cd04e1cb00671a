# app/integrations/blob_store.py
"""
Local-disk blob store with one-time upload slots.

Upload protocol:
1. an authenticated client asks for an upload target (``issue_upload_target``)
2. the client POSTs raw bytes to the returned URL; the slot is burned and a
   ``storage_id`` comes back (``store_upload``)
3. the client hands ``storage_id`` to whatever record should reference it

A blob uploaded but never referenced is left on disk.
"""
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import aiofiles
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from app.core.config import settings
from app.db.crud import branding as branding_crud
from app.db.models import StoredBlob, User
from app.exceptions.domain import NotFoundError, InvalidStateError, ValidationError
from app.utils.helpers import (
    ensure_utc, generate_random_string, mask_sensitive_data, bytes_to_human_readable
)

API_PREFIX = "/api/v1/storage"


@dataclass
class UploadTarget:
    upload_url: str
    token: str
    expires_at: datetime


class BlobStore:
    """Writes blobs under ``root`` and builds public fetch URLs"""

    def __init__(self, root: Optional[str] = None, base_url: Optional[str] = None):
        self._root = root
        self._base_url = base_url

    @property
    def root(self) -> Path:
        return Path(self._root or settings.STORAGE_DIR)

    @property
    def base_url(self) -> str:
        return (self._base_url or settings.PUBLIC_BASE_URL).rstrip("/")

    async def issue_upload_target(self, db: AsyncSession, user: User) -> UploadTarget:
        token = generate_random_string(48)
        expires_at = datetime.now(timezone.utc) + timedelta(minutes=settings.UPLOAD_URL_EXPIRE_MINUTES)
        await branding_crud.create_upload_slot(db, token, user.id, expires_at)
        return UploadTarget(
            upload_url=f"{self.base_url}{API_PREFIX}/upload/{token}",
            token=token,
            expires_at=expires_at,
        )

    def _too_large(self) -> ValidationError:
        return ValidationError(
            f"File size must be less than {bytes_to_human_readable(settings.MAX_LOGO_BYTES)}"
        )

    async def read_body(self, request: Request) -> bytes:
        """
        Read an upload body, stopping as soon as it passes MAX_LOGO_BYTES.
        A declared Content-Length over the limit is refused before reading.
        """
        limit = settings.MAX_LOGO_BYTES
        declared = request.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > limit:
            logger.warning(f"Upload refused: declared {bytes_to_human_readable(int(declared))}")
            raise self._too_large()

        body = bytearray()
        async for chunk in request.stream():
            body.extend(chunk)
            if len(body) > limit:
                logger.warning(f"Upload refused: body passed {bytes_to_human_readable(limit)}")
                raise self._too_large()
        return bytes(body)

    async def store_upload(
            self,
            db: AsyncSession,
            token: str,
            body: bytes,
            content_type: Optional[str]
    ) -> StoredBlob:
        """Validate the slot and payload, write the bytes, burn the slot"""
        slot = await branding_crud.get_upload_slot(db, token)
        if slot is None:
            logger.warning(f"Upload with unknown token {mask_sensitive_data(token)}")
            raise NotFoundError("Upload slot")
        if slot.consumed_at is not None:
            raise InvalidStateError("Upload slot has already been used")
        if ensure_utc(slot.expires_at) <= datetime.now(timezone.utc):
            raise InvalidStateError("Upload slot has expired")

        content_type = (content_type or "").split(";")[0].strip().lower()
        if not content_type.startswith("image/"):
            raise ValidationError("Only image uploads are accepted")
        if not body:
            raise ValidationError("Upload body is empty")
        if len(body) > settings.MAX_LOGO_BYTES:
            raise self._too_large()

        storage_id = str(uuid.uuid4())
        relative_path = os.path.join(storage_id[:2], storage_id)
        target = self.root / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(target, "wb") as f:
            await f.write(body)

        logger.info(f"Wrote {bytes_to_human_readable(len(body))} to {relative_path}")
        return await branding_crud.save_blob(
            db, slot, storage_id, content_type, len(body), relative_path
        )

    async def get_blob(self, db: AsyncSession, storage_id: str) -> StoredBlob:
        blob = await branding_crud.get_blob(db, storage_id)
        if blob is None:
            raise NotFoundError("Stored file")
        return blob

    def path_for(self, blob: StoredBlob) -> Path:
        return self.root / blob.path

    def resolve_url(self, storage_id: str) -> str:
        return f"{self.base_url}{API_PREFIX}/{storage_id}"


blob_store = BlobStore()
