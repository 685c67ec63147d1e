"""
Admin console controller tests.

Verifies:
- The validation gate makes no network call
- Upload then insert on success, form kept on failure
- Delete needs confirmation and refetches afterwards
- Category list is page-local and regenerated on fetch
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
import itertools

import pytest

from portfolio.exceptions import UpstreamServiceError, ValidationError
from portfolio.views.admin import (
    ADDED_MESSAGE,
    DELETE_FAILED_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    AdminConsole,
    ConsoleState,
    ItemDraft,
    SelectedFile,
)


class FakeStore:
    def __init__(self, items=()):
        self.items = list(items)
        self.inserted = []
        self.deleted = []
        self.list_calls = 0
        self.insert_error = None
        self.delete_error = None
        self._ids = itertools.count(1)
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    async def list_items(self):
        self.list_calls += 1
        return sorted(self.items, key=lambda item: item.created_at, reverse=True)

    async def insert_item(self, data):
        if self.insert_error:
            raise self.insert_error
        self._clock += timedelta(seconds=1)
        item = SimpleNamespace(id=f"item-{next(self._ids)}", created_at=self._clock, **data.model_dump())
        self.items.append(item)
        self.inserted.append(data)
        return item

    async def delete_item(self, item_id):
        if self.delete_error:
            raise self.delete_error
        self.deleted.append(item_id)
        before = len(self.items)
        self.items = [item for item in self.items if item.id != item_id]
        return len(self.items) < before


class FakeUploader:
    def __init__(self, url="https://res.cloudinary.com/demo/image/upload/l_text:Arial_60_bold:x/v1/gallery/asset1"):
        self.url = url
        self.calls = []
        self.error = None

    async def upload(self, filename, content, content_type):
        self.calls.append((filename, content_type))
        if self.error:
            raise self.error
        return self.url


def _file() -> SelectedFile:
    return SelectedFile(filename="sunset.jpg", content=b"\xff\xd8\xff", content_type="image/jpeg")


def _draft(**overrides) -> ItemDraft:
    fields = {"title": "Sunset", "category": "Painting", "description": "Oil", "file": _file()}
    fields.update(overrides)
    return ItemDraft(**fields)


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def console(store, uploader):
    return AdminConsole(store=store, uploader=uploader)


class TestAddItem:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", [{"title": ""}, {"category": ""}, {"file": None}, {"title": "   "}])
    async def test_incomplete_form_makes_no_calls(self, console, store, uploader, missing):
        draft = _draft(**missing)

        assert await console.add_item(draft) is False

        assert uploader.calls == []
        assert store.inserted == []
        assert store.list_calls == 0
        assert console.alerts == [MISSING_FIELDS_MESSAGE]
        assert console.state is ConsoleState.IDLE
        assert console.draft is draft

    @pytest.mark.asyncio
    async def test_success_uploads_then_inserts_once(self, console, store, uploader):
        assert await console.add_item(_draft()) is True

        assert uploader.calls == [("sunset.jpg", "image/jpeg")]
        assert len(store.inserted) == 1
        inserted = store.inserted[0]
        assert (inserted.title, inserted.category, inserted.description) == ("Sunset", "Painting", "Oil")
        assert inserted.image_url == uploader.url

    @pytest.mark.asyncio
    async def test_success_resets_form_and_refetches(self, console, store):
        await console.add_item(_draft())

        assert console.draft == ItemDraft()
        assert store.list_calls == 1
        assert [item.title for item in console.items] == ["Sunset"]
        assert console.categories == ["Painting"]
        assert console.alerts == [ADDED_MESSAGE]
        assert console.state is ConsoleState.IDLE

    @pytest.mark.asyncio
    async def test_upload_failure_keeps_form_and_skips_insert(self, console, store, uploader):
        uploader.error = ValidationError("File must be an image")
        draft = _draft()

        assert await console.add_item(draft) is False

        assert store.inserted == []
        assert console.alerts == ["File must be an image"]
        assert console.draft is draft
        assert console.state is ConsoleState.IDLE

    @pytest.mark.asyncio
    async def test_insert_failure_keeps_form(self, console, store, uploader):
        store.insert_error = UpstreamServiceError("Error inserting gallery item: disk I/O error")
        draft = _draft()

        assert await console.add_item(draft) is False

        assert len(uploader.calls) == 1
        assert console.alerts == ["Error inserting gallery item: disk I/O error"]
        assert console.draft is draft
        assert store.list_calls == 0


class TestDeleteItem:

    @pytest.fixture
    def stocked(self, store, console):
        async def _stock():
            for title in ("a", "b"):
                await console.add_item(_draft(title=title))
            console.alerts.clear()
            store.list_calls = 0
        return _stock

    @pytest.mark.asyncio
    async def test_unconfirmed_delete_does_nothing(self, console, store, stocked):
        await stocked()

        assert await console.delete_item("item-1", confirmed=False) is False

        assert store.deleted == []
        assert store.list_calls == 0

    @pytest.mark.asyncio
    async def test_confirmed_delete_removes_and_refetches(self, console, store, stocked):
        await stocked()

        assert await console.delete_item("item-1", confirmed=True) is True

        assert store.deleted == ["item-1"]
        assert store.list_calls == 1
        assert [item.id for item in console.items] == ["item-2"]

    @pytest.mark.asyncio
    async def test_delete_failure_alerts_without_local_change(self, console, store, stocked):
        await stocked()
        before = list(console.items)
        store.delete_error = UpstreamServiceError("connection reset")

        assert await console.delete_item("item-1", confirmed=True) is False

        assert console.alerts == [DELETE_FAILED_MESSAGE]
        assert console.items == before


class TestCategories:

    @pytest.mark.asyncio
    async def test_fetch_regenerates_from_distinct_rows(self, store, uploader):
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        store.items = [
            SimpleNamespace(id="1", category="Painting", created_at=base),
            SimpleNamespace(id="2", category="Sketch", created_at=base + timedelta(seconds=1)),
            SimpleNamespace(id="3", category="Painting", created_at=base + timedelta(seconds=2)),
        ]
        console = AdminConsole(store=store, uploader=uploader, categories=["Ad hoc"])

        await console.fetch_items()

        assert console.categories == ["Painting", "Sketch"]

    def test_add_category_trims_and_ignores_duplicates(self, console):
        assert console.add_category("  Photography ") is True
        assert console.add_category("Photography") is False
        assert console.add_category("   ") is False

        assert console.categories == ["Photography"]

    @pytest.mark.asyncio
    async def test_remove_category_leaves_rows_alone(self, console, store):
        await console.add_item(_draft(category="Painting"))

        console.remove_category("Painting")

        assert console.categories == []
        assert store.items[0].category == "Painting"

        await console.fetch_items()
        assert console.categories == ["Painting"]

    @pytest.mark.asyncio
    async def test_fetch_without_regeneration_keeps_local_list(self, console, store):
        await console.add_item(_draft(category="Painting"))
        console.add_category("Sculpture")

        await console.fetch_items(regenerate_categories=False)

        assert console.categories == ["Painting", "Sculpture"]
