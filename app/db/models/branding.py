# app/db/models/branding.py
"""Branding and blob storage models"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, BigInteger, Index, func, text

from app.db.models.base import Base, TimestampMixin


class Logo(Base):
    """Uploaded logo; at most one row has is_active set"""
    __tablename__ = "logos"

    id = Column(Integer, primary_key=True, index=True)
    storage_id = Column(String(36), ForeignKey("stored_blobs.storage_id"), nullable=False)
    uploaded_by = Column(String(255), nullable=False)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    is_active = Column(Boolean, default=False, nullable=False, index=True)

    __table_args__ = (
        # Second active row fails on insert
        Index(
            'uq_logo_single_active', 'is_active', unique=True,
            postgresql_where=text('is_active'), sqlite_where=text('is_active')
        ),
    )

    def __repr__(self):
        return f"<Logo storage_id={self.storage_id} active={self.is_active}>"


class StoredBlob(Base, TimestampMixin):
    """Bytes written to the storage directory"""
    __tablename__ = "stored_blobs"

    id = Column(Integer, primary_key=True, index=True)
    storage_id = Column(String(36), unique=True, nullable=False, index=True)
    content_type = Column(String(255), nullable=False)
    size = Column(BigInteger, nullable=False)
    path = Column(String(512), nullable=False)

    def __repr__(self):
        return f"<StoredBlob storage_id={self.storage_id} size={self.size}>"


class UploadSlot(Base, TimestampMixin):
    """One-time upload target handed to a client"""
    __tablename__ = "upload_slots"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    consumed_at = Column(DateTime(timezone=True), nullable=True)
    storage_id = Column(String(36), nullable=True)

    __table_args__ = (
        Index('idx_upload_slot_cleanup', 'expires_at', 'consumed_at'),
    )

    def __repr__(self):
        return f"<UploadSlot token={self.token[:8]}... consumed={self.consumed_at is not None}>"
