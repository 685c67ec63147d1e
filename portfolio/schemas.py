"""
Pydantic schemas for request and response data validation.
Defines data structures for API endpoints with automatic validation and serialization.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime, timezone
from typing import Optional, Literal, Any, Dict


class GalleryItemResponse(BaseModel):
    """
    Response schema for a stored gallery item.
    Used by GET /api/gallery-items and the CMS endpoints.
    """
    id: str
    title: str
    category: str
    description: Optional[str] = None
    image_url: str
    created_at: datetime

    model_config = ConfigDict(
        from_attributes=True  # Enable conversion from SQLAlchemy models
    )


class GalleryItemCreate(BaseModel):
    """
    Request schema for inserting a gallery item.
    Used by POST /api/cms/gallery-items and the admin console.
    """
    title: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: Optional[str] = ""
    image_url: str

    @field_validator('image_url')
    @classmethod
    def validate_absolute_url(cls, v):
        if not v.startswith(('https://', 'http://')):
            raise ValueError('image_url must be an absolute URL')
        return v


class UploadResponse(BaseModel):
    """
    Response schema for POST /api/upload.
    """
    success: bool = True
    url: str


class ChangeEvent(BaseModel):
    """
    A committed mutation of a table, as delivered to change feed subscribers.
    """
    event_type: Literal["INSERT", "UPDATE", "DELETE"]
    table: str
    record: Optional[Dict[str, Any]] = None
    old_record: Optional[Dict[str, Any]] = None
    commit_timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
