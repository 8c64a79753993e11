"""Unit tests for infrastructure.logging.context."""

import uuid

import pytest
import structlog

from infrastructure.logging.context import (
    bind_request_context,
    clear_request_context,
    get_correlation_id,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def clean_context():
    clear_request_context()
    yield
    clear_request_context()


@pytest.mark.unit
class TestBindRequestContext:
    def test_generates_correlation_id(self):
        with bind_request_context() as correlation_id:
            assert get_correlation_id() == correlation_id
            uuid.UUID(correlation_id)

    def test_uses_provided_correlation_id(self):
        with bind_request_context(correlation_id="req-123") as correlation_id:
            assert correlation_id == "req-123"
            assert get_correlation_id() == "req-123"

    def test_binds_request_metadata(self):
        with bind_request_context(
            request_path="/api/v1/events/42",
            request_method="GET",
            locale="ur",
            collection="events",
        ):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["request_path"] == "/api/v1/events/42"
            assert ctx["request_method"] == "GET"
            assert ctx["locale"] == "ur"
            assert ctx["collection"] == "events"

    def test_omits_unset_fields(self):
        with bind_request_context():
            ctx = structlog.contextvars.get_contextvars()
            assert "locale" not in ctx
            assert "request_path" not in ctx

    def test_unbinds_on_exit(self):
        with bind_request_context(correlation_id="req-1", locale="fa"):
            pass
        assert structlog.contextvars.get_contextvars() == {}

    def test_unbinds_on_error(self):
        with pytest.raises(RuntimeError):
            with bind_request_context(correlation_id="req-1"):
                raise RuntimeError("boom")
        assert get_correlation_id() is None


@pytest.mark.unit
def test_set_and_clear_correlation_id():
    set_correlation_id("abc")
    assert get_correlation_id() == "abc"
    clear_request_context()
    assert get_correlation_id() is None
