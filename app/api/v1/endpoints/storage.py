# app/api/v1/endpoints/storage.py
"""Raw blob upload and download"""
from fastapi import APIRouter, Depends, Request, Path
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.api.v1.schemas.branding import StoredBlobResponse
from app.core import tracing
from app.exceptions.domain import NotFoundError
from app.integrations.blob_store import blob_store

router = APIRouter()


@router.post("/upload/{token}", response_model=StoredBlobResponse)
async def upload_blob(
    request: Request,
    token: str = Path(..., min_length=1, max_length=64),
    db: AsyncSession = Depends(get_db)
):
    """
    Accept the raw request body as the file contents.
    The token is the credential; no bearer token is needed.
    """
    body = await blob_store.read_body(request)
    blob = await blob_store.store_upload(db, token, body, request.headers.get("content-type"))
    return StoredBlobResponse(storage_id=blob.storage_id, content_type=blob.content_type, size=blob.size)


@router.get("/{storage_id}")
async def download_blob(
    storage_id: str = Path(..., min_length=1, max_length=36),
    db: AsyncSession = Depends(get_db)
):
    blob = await blob_store.get_blob(db, storage_id)
    path = blob_store.path_for(blob)
    if not path.is_file():
        tracing.error("Stored file missing on disk", storage_id=storage_id, path=str(path))
        raise NotFoundError("Stored file")
    return FileResponse(path, media_type=blob.content_type)
