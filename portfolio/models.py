"""
SQLAlchemy models for the application.
All database models inherit from Base (declarative base).
"""
from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from portfolio.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GalleryItem(Base):
    """
    Gallery entry.
    Rows are inserted and hard-deleted, never updated in place.
    """
    __tablename__ = "gallery_items"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    # Watermarked Cloudinary derivative
    image_url = Column(String, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
