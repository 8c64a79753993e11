"""Tests for the in-memory store implementations."""

from datetime import datetime, timezone

import pytest

from infrastructure.persistence import (
    InMemoryDocumentStore,
    InMemoryFileStore,
    InMemoryLocalizationService,
    StoreError,
)


@pytest.fixture
def seeded_store():
    store = InMemoryDocumentStore()
    store.insert("events", {"title": "Open Day", "slug": "open-day", "rank": 2}, "en", "doc-1")
    store.insert("events", {"title": "یوم", "slug": "open-day", "rank": 2}, "ur", "doc-1")
    store.insert("events", {"title": "Sports Day", "slug": "sports", "rank": 1}, "en", "doc-2")
    store.insert(
        "events", {"title": "Draft", "slug": "draft", "publishedAt": None}, "en", "doc-3"
    )
    return store


@pytest.mark.asyncio
async def test_insert_assigns_sequential_keys_and_defaults_published_at():
    store = InMemoryDocumentStore()

    first = store.insert("events", {"title": "A", "id": 99, "locale": "xx"}, "en", "doc-1")
    second = store.insert("events", {"title": "B", "publishedAt": None}, "en", "doc-2")

    assert (first.id, second.id) == (1, 2)
    assert first.locale == "en"
    assert "id" not in first.fields
    assert first.is_published
    assert not second.is_published


@pytest.mark.asyncio
async def test_find_by_key_coerces_strings(seeded_store):
    assert (await seeded_store.find_by_key("events", "1", "en")).document_id == "doc-1"
    assert await seeded_store.find_by_key("events", "abc", "en") is None
    assert await seeded_store.find_by_key("events", 2, "en") is None
    assert (await seeded_store.find_by_key("events", 2, None)).locale == "ur"


@pytest.mark.asyncio
async def test_find_by_document_id_is_locale_scoped(seeded_store):
    record = await seeded_store.find_by_document_id("events", "doc-1", "ur")

    assert record.fields["title"] == "یوم"
    assert await seeded_store.find_by_document_id("events", "doc-2", "ur") is None


@pytest.mark.asyncio
async def test_returned_records_are_copies(seeded_store):
    record = await seeded_store.find_by_key("events", 1, "en")
    record.fields["title"] = "Changed"

    again = await seeded_store.find_by_key("events", 1, "en")
    assert again.fields["title"] == "Open Day"


@pytest.mark.asyncio
async def test_find_many_filters_sorts_and_paginates(seeded_store):
    published = await seeded_store.find_many(
        "events", filters={"publishedAt": {"$notNull": True}}, locale="en", sort="rank:asc"
    )
    page = await seeded_store.find_many("events", locale="en", limit=1, start=1)

    assert [r.document_id for r in published] == ["doc-2", "doc-1"]
    assert [r.document_id for r in page] == ["doc-2"]


@pytest.mark.asyncio
async def test_count_spans_locales(seeded_store):
    assert await seeded_store.count("events", {"documentId": "doc-1"}) == 2
    assert await seeded_store.count("events", {"documentId": "doc-1"}, locale="ur") == 1
    assert await seeded_store.count("unknown") == 0


@pytest.mark.asyncio
async def test_bad_operator_surfaces_as_store_error(seeded_store):
    with pytest.raises(StoreError):
        await seeded_store.count("events", {"rank": {"$like": 1}})


@pytest.mark.asyncio
async def test_create_generates_document_id():
    store = InMemoryDocumentStore()

    record = await store.create("events", {"title": "New"}, "fa")

    assert len(record.document_id) == 24
    assert record.locale == "fa"


@pytest.mark.asyncio
async def test_update_merges_fields_and_publication(seeded_store):
    updated = await seeded_store.update(
        "events", "doc-3", "en", {"title": "Final", "publishedAt": "2026-02-01T00:00:00Z"}
    )

    assert updated.fields == {"title": "Final", "slug": "draft"}
    assert updated.published_at == datetime(2026, 2, 1, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_update_missing_locale_raises(seeded_store):
    with pytest.raises(StoreError):
        await seeded_store.update("events", "doc-2", "ur", {"title": "x"})


@pytest.mark.asyncio
async def test_update_by_key(seeded_store):
    updated = await seeded_store.update_by_key("events", 3, {"rank": 9})

    assert updated.fields["rank"] == 9
    with pytest.raises(StoreError):
        await seeded_store.update_by_key("events", 404, {"rank": 1})


@pytest.mark.asyncio
async def test_delete_document_removes_every_locale(seeded_store):
    deleted = await seeded_store.delete_document("events", "doc-1")

    assert sorted(r.locale for r in deleted) == ["en", "ur"]
    assert await seeded_store.count("events", {"documentId": "doc-1"}) == 0
    assert await seeded_store.count("events") == 2


@pytest.mark.asyncio
async def test_delete_where(seeded_store):
    assert await seeded_store.delete_where("events", {"slug": "open-day"}) == 2
    assert await seeded_store.count("events") == 2


@pytest.mark.asyncio
async def test_localization_service_copies_base_fields(seeded_store):
    service = InMemoryLocalizationService(seeded_store)

    created = await service.create_localization("events", "doc-2", "ar", {"title": "يوم"})

    assert created.document_id == "doc-2"
    assert created.locale == "ar"
    assert created.fields == {"title": "يوم", "slug": "sports", "rank": 1}
    assert created.is_published


@pytest.mark.asyncio
async def test_localization_service_rejects_existing_or_unknown(seeded_store):
    service = InMemoryLocalizationService(seeded_store)

    with pytest.raises(StoreError):
        await service.create_localization("events", "doc-1", "ur", {})
    with pytest.raises(StoreError):
        await service.create_localization("events", "missing", "ur", {})


@pytest.mark.asyncio
async def test_file_store_upload_and_get():
    files = InMemoryFileStore()

    stored = await files.upload(b"%PDF", "form.pdf", "application/pdf", caption="Form")

    assert stored.url == "/uploads/1_form.pdf"
    assert stored.size == 4
    assert (await files.get(stored.id)).caption == "Form"
    assert files.read(stored.id) == b"%PDF"
    assert await files.get(99) is None
