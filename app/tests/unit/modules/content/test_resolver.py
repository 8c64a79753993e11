"""Tests for modules.content.resolver."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.persistence import LocalizedRecord, StoreError
from modules.content.domain import NotFound
from modules.content.resolver import DocumentResolver


@pytest.fixture
def bilingual_event(make_event):
    english = make_event(locale="en")
    urdu = make_event(locale="ur", title="اوپن ڈے")
    return english, urdu


def _mock_store():
    store = MagicMock()
    store.find_by_key = AsyncMock(return_value=None)
    store.find_by_document_id = AsyncMock(return_value=None)
    store.find_many = AsyncMock(return_value=[])
    return store


@pytest.mark.asyncio
class TestResolve:
    async def test_numeric_key_in_requested_locale(self, resolver, bilingual_event):
        _, urdu = bilingual_event

        result = await resolver.resolve("events", str(urdu.id), "ur")

        assert result.record.id == urdu.id
        assert result.returned_locale == "ur"
        assert result.fallback is False

    async def test_document_id_in_requested_locale(self, resolver, bilingual_event):
        result = await resolver.resolve("events", "evt-doc-1", "ur")

        assert result.record.fields["title"] == "اوپن ڈے"
        assert result.record.locale == "ur"

    async def test_slug_lookup(self, resolver, bilingual_event):
        result = await resolver.resolve("events", "open-day", "ur")

        assert result.record.locale == "ur"
        assert result.record.fields["slug"] == "open-day"

    async def test_falls_back_to_default_locale(self, resolver, bilingual_event):
        result = await resolver.resolve("events", "open-day", "fa")

        assert result.record.locale == "en"
        assert result.requested_locale == "fa"
        assert result.returned_locale == "en"
        assert result.fallback is True

    async def test_key_of_another_locale_falls_back(self, resolver, bilingual_event):
        english, _ = bilingual_event

        result = await resolver.resolve("events", str(english.id), "ur")

        assert result.record.id == english.id
        assert result.fallback is True

    async def test_not_found(self, resolver, bilingual_event):
        with pytest.raises(NotFound) as exc_info:
            await resolver.resolve("events", "missing", "ur")

        assert exc_info.value.status_code == 404
        assert exc_info.value.details == {"id": "missing", "locale": "ur"}

    async def test_first_slug_match_wins(self, resolver, make_event):
        first = make_event(document_id="doc-a", slug="shared")
        make_event(document_id="doc-b", slug="shared")

        result = await resolver.resolve("events", "shared", "en")

        assert result.record.document_id == first.document_id

    async def test_published_only_hides_drafts(self, store, make_event):
        make_event(publishedAt=None)

        with pytest.raises(NotFound):
            await DocumentResolver(store, "en", published_only=True).resolve(
                "events", "open-day", "en"
            )
        result = await DocumentResolver(store, "en").resolve("events", "open-day", "en")
        assert result.record.is_published is False

    async def test_numeric_identifier_tries_key_first(self):
        store = _mock_store()
        record = LocalizedRecord(id=7, document_id="doc-7", locale="en")
        store.find_by_key.return_value = record

        result = await DocumentResolver(store, "en").resolve("events", "7", "en")

        assert result.record is record
        store.find_by_key.assert_awaited_once_with("events", 7, "en", None)
        store.find_by_document_id.assert_not_awaited()

    async def test_opaque_identifier_tries_document_id_first(self):
        store = _mock_store()
        record = LocalizedRecord(id=7, document_id="doc-7", locale="en")
        store.find_by_document_id.return_value = record

        result = await DocumentResolver(store, "en").resolve("events", "doc-7", "en", ["cover"])

        assert result.record is record
        store.find_by_document_id.assert_awaited_once_with("events", "doc-7", "en", ["cover"])
        store.find_by_key.assert_not_awaited()

    async def test_default_locale_is_searched_once(self):
        store = _mock_store()

        with pytest.raises(NotFound):
            await DocumentResolver(store, "en").resolve("events", "x", "en")

        assert store.find_many.await_count == 1

    async def test_store_errors_degrade_to_next_tier(self):
        store = _mock_store()
        store.find_by_key.side_effect = StoreError("timeout")
        record = LocalizedRecord(id=7, document_id="7", locale="en")
        store.find_by_document_id.return_value = record

        result = await DocumentResolver(store, "en").resolve("events", "7", "en")

        assert result.record is record

    async def test_store_errors_on_every_tier_raise_not_found(self):
        store = _mock_store()
        store.find_by_key.side_effect = StoreError("down")
        store.find_by_document_id.side_effect = StoreError("down")
        store.find_many.side_effect = StoreError("down")

        with pytest.raises(NotFound):
            await DocumentResolver(store, "en").resolve("events", "7", "ur")


@pytest.mark.asyncio
class TestFindBySlug:
    async def test_applies_filters(self, resolver, store):
        store.insert("forms", {"slug": "apply", "active": False}, "en", "form-a")
        active = store.insert("forms", {"slug": "apply", "active": True}, "en", "form-b")

        result = await resolver.find_by_slug("forms", "apply", "en", filters={"active": True})

        assert result.record.id == active.id

    async def test_falls_back_to_default_locale(self, resolver, store):
        store.insert("forms", {"slug": "apply"}, "en", "form-a")

        result = await resolver.find_by_slug("forms", "apply", "ar")

        assert result.fallback is True

    async def test_not_found(self, resolver):
        with pytest.raises(NotFound) as exc_info:
            await resolver.find_by_slug("forms", "nope", "ur")

        assert exc_info.value.details["slug"] == "nope"


@pytest.mark.asyncio
async def test_numeric_string_that_is_only_a_document_id(resolver, make_event):
    make_event(document_id="42")

    result = await resolver.resolve("events", "42", "en")

    assert result.record.document_id == "42"
    assert result.record.id != 42


@pytest.mark.asyncio
async def test_shared_slug_across_locales_uses_requested_locale_first(resolver, make_event):
    make_event(locale="en", document_id="doc-en", slug="annual-day")
    make_event(locale="ur", document_id="doc-ur", slug="annual-day")

    urdu = await resolver.resolve("events", "annual-day", "ur")
    persian = await resolver.resolve("events", "annual-day", "fa")

    assert urdu.record.document_id == "doc-ur"
    assert persian.record.document_id == "doc-en"
    assert persian.fallback is True
