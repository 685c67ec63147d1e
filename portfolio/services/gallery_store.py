"""
Content store for gallery items.
Ordered select, insert and delete-by-id over the gallery_items table; every
committed mutation is published on the change feed.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional
import logging

from portfolio.models import GalleryItem
from portfolio.schemas import ChangeEvent, GalleryItemCreate, GalleryItemResponse
from portfolio.exceptions import UpstreamServiceError
from portfolio.services.changefeed import ChangeFeed, changefeed

logger = logging.getLogger(__name__)

TABLE = GalleryItem.__tablename__


class GalleryStore:
    """Data access for gallery items bound to one database session."""

    def __init__(self, db: AsyncSession, feed: Optional[ChangeFeed] = None):
        self.db = db
        self.feed = feed if feed is not None else changefeed

    async def list_items(self) -> List[GalleryItem]:
        """Return every item, newest first."""
        try:
            result = await self.db.execute(
                select(GalleryItem).order_by(GalleryItem.created_at.desc())
            )
            items = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error fetching gallery items: {str(e)}", exc_info=True)
            raise UpstreamServiceError(f"Error fetching gallery items: {str(e)}") from e

        logger.info(f"Retrieved {len(items)} gallery items")
        return items

    async def insert_item(self, data: GalleryItemCreate) -> GalleryItem:
        """Insert a row; id and created_at are assigned here."""
        item = GalleryItem(
            title=data.title,
            category=data.category,
            description=data.description,
            image_url=data.image_url,
        )
        try:
            self.db.add(item)
            await self.db.commit()
            await self.db.refresh(item)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error inserting gallery item: {str(e)}", exc_info=True)
            raise UpstreamServiceError(f"Error inserting gallery item: {str(e)}") from e

        logger.info(f"Inserted gallery item: ID {item.id}, category={item.category!r}")
        self.feed.publish(ChangeEvent(
            event_type="INSERT",
            table=TABLE,
            record=GalleryItemResponse.model_validate(item).model_dump(mode="json"),
        ))
        return item

    async def delete_item(self, item_id: str) -> bool:
        """
        Hard-delete one row by id.

        Returns:
            bool: False when no row had that id (already removed)
        """
        try:
            result = await self.db.execute(
                delete(GalleryItem).where(GalleryItem.id == item_id)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error deleting gallery item {item_id}: {str(e)}", exc_info=True)
            raise UpstreamServiceError(f"Error deleting gallery item: {str(e)}") from e

        if not result.rowcount:
            logger.warning(f"Delete matched no gallery item: ID {item_id}")
            return False

        logger.info(f"Deleted gallery item: ID {item_id}")
        self.feed.publish(ChangeEvent(
            event_type="DELETE",
            table=TABLE,
            old_record={"id": item_id},
        ))
        return True
