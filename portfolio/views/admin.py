"""
Admin console controller.

Holds the add-item form, the fetched item list and the client-local category
list for one rendering of the admin page. Messages for the user are collected
in `alerts` and shown as blocking dialogs by the template.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from portfolio.exceptions import GalleryError
from portfolio.schemas import GalleryItemCreate

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Please fill in title, category, and select an image"
ADDED_MESSAGE = "Gallery item added successfully with watermark!"
DELETE_FAILED_MESSAGE = "Error deleting item"


class ConsoleState(str, enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    UPLOADING = "uploading"
    INSERTING = "inserting"


@dataclass
class SelectedFile:
    filename: str
    content: bytes
    content_type: str


@dataclass
class ItemDraft:
    title: str = ""
    category: str = ""
    description: str = ""
    file: Optional[SelectedFile] = None

    def is_complete(self) -> bool:
        return bool(self.title.strip() and self.category.strip() and self.file is not None)


def distinct_categories(items) -> List[str]:
    """Distinct category values in first-appearance order."""
    seen = []
    for item in items:
        if item.category not in seen:
            seen.append(item.category)
    return seen


@dataclass
class AdminConsole:
    """
    Add/delete flows against a content store and an upload client.

    store needs list_items(), insert_item(GalleryItemCreate) and delete_item(id);
    uploader needs upload(filename, content, content_type) -> url.
    """
    store: object
    uploader: object
    items: list = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    draft: ItemDraft = field(default_factory=ItemDraft)
    alerts: List[str] = field(default_factory=list)
    state: ConsoleState = ConsoleState.IDLE
    loaded: bool = False

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    async def fetch_items(self, regenerate_categories: bool = True) -> bool:
        """Full refetch, newest first. Regenerating categories drops ad hoc labels."""
        try:
            self.items = await self.store.list_items()
        except GalleryError as e:
            logger.error(f"Error fetching gallery items: {e.message}")
            return False
        finally:
            self.loaded = True

        if regenerate_categories:
            self.categories = distinct_categories(self.items)
        return True

    async def add_item(self, draft: ItemDraft) -> bool:
        """
        Validate, upload, insert. On failure the draft stays in place for a retry.
        """
        self.draft = draft
        self.state = ConsoleState.VALIDATING
        if not draft.is_complete():
            self.state = ConsoleState.IDLE
            self.alert(MISSING_FIELDS_MESSAGE)
            return False

        try:
            self.state = ConsoleState.UPLOADING
            image_url = await self.uploader.upload(
                draft.file.filename, draft.file.content, draft.file.content_type
            )

            self.state = ConsoleState.INSERTING
            await self.store.insert_item(GalleryItemCreate(
                title=draft.title,
                category=draft.category,
                description=draft.description,
                image_url=image_url,
            ))
        except GalleryError as e:
            logger.error(f"Error adding gallery item: {e.message}")
            self.alert(e.message)
            return False
        except PydanticValidationError as e:
            logger.error(f"Error adding gallery item: {str(e)}")
            self.alert("Error adding gallery item")
            return False
        finally:
            self.state = ConsoleState.IDLE

        self.draft = ItemDraft()
        await self.fetch_items()
        self.alert(ADDED_MESSAGE)
        return True

    async def delete_item(self, item_id: str, confirmed: bool) -> bool:
        """Delete after confirmation, then refetch. Nothing changes locally before the store answers."""
        if not confirmed:
            return False

        try:
            await self.store.delete_item(item_id)
        except GalleryError as e:
            logger.error(f"Error deleting item {item_id}: {e.message}")
            self.alert(DELETE_FAILED_MESSAGE)
            return False

        await self.fetch_items()
        return True

    def add_category(self, label: str) -> bool:
        label = label.strip()
        if not label or label in self.categories:
            return False
        self.categories.append(label)
        return True

    def remove_category(self, label: str) -> None:
        self.categories = [cat for cat in self.categories if cat != label]
