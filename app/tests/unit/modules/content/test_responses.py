"""Tests for modules.content.responses."""

import json

from infrastructure.persistence import LocalizedRecord
from modules.content.domain import (
    DeletionMethod,
    DeletionResult,
    DeletionStatus,
    ResolutionResult,
)
from modules.content.responses import present_deletion, present_resolution


def _record(locale="en"):
    return LocalizedRecord(id=1, document_id="doc-1", locale=locale, fields={"title": "Open Day"})


def test_resolution_in_requested_locale_has_no_meta():
    body = present_resolution(ResolutionResult(_record("ur"), "ur", "ur"))

    assert body == {
        "data": {
            "id": 1,
            "documentId": "doc-1",
            "locale": "ur",
            "publishedAt": None,
            "title": "Open Day",
        }
    }


def test_fallback_resolution_reports_locales():
    body = present_resolution(ResolutionResult(_record("en"), "fa", "en"))

    assert body["data"]["locale"] == "en"
    assert body["meta"] == {
        "locale": {"requested": "fa", "returned": "en", "fallback": True}
    }


def test_deletion_envelope():
    result = DeletionResult(
        document_id="doc-1",
        status=DeletionStatus.VERIFIED,
        method=DeletionMethod.FORCED,
        record=_record(),
        deleted_count=3,
    )

    body = present_deletion(result)

    assert body["data"]["documentId"] == "doc-1"
    assert body["meta"] == {
        "deleted": True,
        "method": "query-api",
        "verified": True,
        "count": 3,
    }


def test_unconfirmed_deletion_without_snapshot():
    result = DeletionResult(
        document_id="doc-9",
        status=DeletionStatus.UNCONFIRMED,
        method=DeletionMethod.DOCUMENTS,
    )

    body = present_deletion(result)

    assert body["data"] == {"documentId": "doc-9"}
    assert body["meta"]["verified"] is False
    assert body["meta"]["method"] == "documents-api"


def test_deletion_status_is_a_string():
    assert DeletionStatus.VERIFIED == "verified"
    assert json.dumps({"status": DeletionStatus.UNCONFIRMED}) == '{"status": "unconfirmed"}'
