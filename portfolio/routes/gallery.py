"""
Gallery routes for public retrieval of gallery items and their change stream.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import asyncio
import logging

from portfolio.config import settings
from portfolio.database import get_db
from portfolio.exceptions import UpstreamServiceError
from portfolio.schemas import GalleryItemResponse
from portfolio.services.changefeed import changefeed, format_sse
from portfolio.services.gallery_store import GalleryStore, TABLE

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/gallery-items", response_model=List[GalleryItemResponse])
async def get_gallery_items(db: AsyncSession = Depends(get_db)):
    """
    Get all gallery items, newest first.

    Raises:
        HTTPException: 500 if the database query fails
    """
    try:
        items = await GalleryStore(db).list_items()
    except UpstreamServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to retrieve gallery items", "detail": e.message}
        )

    return [GalleryItemResponse.model_validate(item) for item in items]


async def stream_changes(request: Request, subscription, keepalive: float):
    """Yield SSE messages for a subscription until the client goes away."""
    yield ": connected\n\n"
    while not await request.is_disconnected():
        try:
            event = await asyncio.wait_for(subscription.get(), timeout=keepalive)
        except asyncio.TimeoutError:
            yield ": keep-alive\n\n"
            continue
        yield format_sse(event)


@router.get("/gallery-items/changes")
async def gallery_item_changes(request: Request):
    """
    Server-Sent Events stream of INSERT/UPDATE/DELETE events on gallery_items.
    The subscription is closed when the client disconnects.
    """
    async def event_source():
        async with changefeed.subscribe(TABLE) as subscription:
            async for message in stream_changes(request, subscription, settings.CHANGEFEED_KEEPALIVE_SECONDS):
                yield message

    return StreamingResponse(
        event_source(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
