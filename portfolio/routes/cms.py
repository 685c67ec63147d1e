"""
CMS API routes for mutating the gallery.
All endpoints require the admin JWT (cookie or Bearer header).
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from portfolio.database import get_db
from portfolio.exceptions import UpstreamServiceError
from portfolio.schemas import GalleryItemCreate, GalleryItemResponse
from portfolio.services.gallery_store import GalleryStore
from portfolio.utils.jwt_auth import verify_cms_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cms", tags=["CMS"])


@router.post("/gallery-items", response_model=GalleryItemResponse, status_code=status.HTTP_201_CREATED)
async def add_cms_gallery_item(
    item: GalleryItemCreate,
    db: AsyncSession = Depends(get_db),
    session: dict = Depends(verify_cms_token)
):
    """
    Insert a gallery item whose image was already uploaded through /api/upload.

    Returns:
        GalleryItemResponse: The stored row with its id and created_at

    Raises:
        HTTPException: 500 if the insert fails
    """
    try:
        stored = await GalleryStore(db).insert_item(item)
    except UpstreamServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to add gallery item", "detail": e.message}
        )

    return GalleryItemResponse.model_validate(stored)


@router.delete("/gallery-items/{item_id}")
async def delete_cms_gallery_item(
    item_id: str,
    db: AsyncSession = Depends(get_db),
    session: dict = Depends(verify_cms_token)
):
    """
    Hard-delete a gallery item. The Cloudinary asset is left in place.

    Raises:
        HTTPException: 404 if the item does not exist, 500 if deletion fails
    """
    try:
        deleted = await GalleryStore(db).delete_item(item_id)
    except UpstreamServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete gallery item", "detail": e.message}
        )

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Item not found", "detail": f"Item ID {item_id} does not exist"}
        )

    return {"message": "Item deleted successfully", "item_id": item_id}
