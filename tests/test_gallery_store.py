"""
Content store tests against a real SQLite database.
"""
import pytest

from portfolio.schemas import GalleryItemCreate
from portfolio.services.changefeed import ChangeFeed
from portfolio.services.gallery_store import GalleryStore


def _create(title="Sunset", category="Painting", description="Oil on canvas", n=1) -> GalleryItemCreate:
    return GalleryItemCreate(
        title=title,
        category=category,
        description=description,
        image_url=f"https://res.cloudinary.com/demo/image/upload/l_text:Arial_60_bold:x/v1/gallery/asset{n}",
    )


@pytest.mark.asyncio
async def test_insert_round_trip(db_session):
    store = GalleryStore(db_session, feed=ChangeFeed())
    data = _create(description="")

    await store.insert_item(data)
    db_session.expunge_all()
    [item] = await store.list_items()

    assert item.title == data.title
    assert item.category == data.category
    assert item.description == ""
    assert item.image_url == data.image_url
    assert item.id
    assert item.created_at is not None


@pytest.mark.asyncio
async def test_ids_are_unique(db_session):
    store = GalleryStore(db_session, feed=ChangeFeed())

    first = await store.insert_item(_create(n=1))
    second = await store.insert_item(_create(n=2))

    assert first.id != second.id


@pytest.mark.asyncio
async def test_list_is_newest_first(db_session):
    store = GalleryStore(db_session, feed=ChangeFeed())
    for n, title in enumerate(["first", "second", "third"]):
        await store.insert_item(_create(title=title, n=n))

    items = await store.list_items()

    assert [item.title for item in items] == ["third", "second", "first"]


@pytest.mark.asyncio
async def test_delete_removes_exactly_one_item(db_session):
    store = GalleryStore(db_session, feed=ChangeFeed())
    keep_a = await store.insert_item(_create(title="a", n=1))
    doomed = await store.insert_item(_create(title="b", n=2))
    keep_c = await store.insert_item(_create(title="c", n=3))

    assert await store.delete_item(doomed.id) is True

    remaining = {item.id for item in await store.list_items()}
    assert remaining == {keep_a.id, keep_c.id}


@pytest.mark.asyncio
async def test_delete_of_missing_item_reports_false(db_session):
    store = GalleryStore(db_session, feed=ChangeFeed())

    assert await store.delete_item("00000000-0000-0000-0000-000000000000") is False


@pytest.mark.asyncio
async def test_mutations_are_published(db_session):
    feed = ChangeFeed()
    store = GalleryStore(db_session, feed=feed)

    async with feed.subscribe("gallery_items") as subscription:
        item = await store.insert_item(_create())
        await store.delete_item(item.id)
        await store.delete_item(item.id)  # already gone, nothing published

        inserted = await subscription.get()
        deleted = await subscription.get()
        assert subscription.queue.empty()

    assert inserted.event_type == "INSERT"
    assert inserted.record["id"] == item.id
    assert inserted.record["category"] == "Painting"
    assert deleted.event_type == "DELETE"
    assert deleted.old_record == {"id": item.id}
