"""
Public gallery controller: category tabs and the full-screen viewer.
"""
from typing import List, Optional

from portfolio.views.admin import distinct_categories

ALL_CATEGORIES = "All"


class GalleryView:
    """
    View over the currently loaded items.
    Categories and the filtered list are derived on every access, never stored.
    """

    def __init__(self, items, category: Optional[str] = None, viewer_id: Optional[str] = None):
        self.items = list(items)
        self.selected_category = category or ALL_CATEGORIES
        self.viewer_id = viewer_id

    @property
    def categories(self) -> List[str]:
        return distinct_categories(self.items)

    @property
    def filtered_items(self) -> list:
        if self.selected_category == ALL_CATEGORIES:
            return list(self.items)
        return [item for item in self.items if item.category == self.selected_category]

    @property
    def selected_item(self):
        if not self.viewer_id:
            return None
        for item in self.items:
            if item.id == self.viewer_id:
                return item
        return None

    def tab_query(self, category: str) -> str:
        return "" if category == ALL_CATEGORIES else category
