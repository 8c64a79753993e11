"""Test application wired to in-memory collaborators."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from api.router import api_router
from infrastructure.operations import OperationResult
from infrastructure.services import (
    get_document_resolver,
    get_document_store,
    get_file_store,
    get_mailer,
    get_mutation_coordinator,
    get_pdf_renderer,
    get_settings,
)
from utils.tests import TEST_JWT_SECRET, bearer_headers, create_test_app


@pytest.fixture
def mailer():
    mock = AsyncMock()
    mock.send.return_value = OperationResult.success(data="<msg@example>")
    return mock


@pytest.fixture
def pdf_renderer():
    mock = AsyncMock()
    mock.render.return_value = b"%PDF-1.7"
    return mock


@pytest.fixture
def app(store, file_store, resolver, coordinator, settings, mailer, pdf_renderer):
    settings.server.JWT_SECRET = TEST_JWT_SECRET
    test_app = create_test_app(api_router)
    test_app.dependency_overrides[get_settings] = lambda: settings
    test_app.dependency_overrides[get_document_store] = lambda: store
    test_app.dependency_overrides[get_file_store] = lambda: file_store
    test_app.dependency_overrides[get_document_resolver] = lambda: resolver
    test_app.dependency_overrides[get_mutation_coordinator] = lambda: coordinator
    test_app.dependency_overrides[get_mailer] = lambda: mailer
    test_app.dependency_overrides[get_pdf_renderer] = lambda: pdf_renderer
    return test_app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_client(app):
    return TestClient(app, headers=bearer_headers(["Admin"]))


@pytest.fixture
def editor_client(app):
    return TestClient(app, headers=bearer_headers(["Content Editor"]))


@pytest.fixture
def events(make_event):
    english = make_event(locale="en")
    urdu = make_event(locale="ur", title="اوپن ڈے")
    make_event(
        locale="en",
        document_id="evt-doc-2",
        title="Sports Day",
        slug="sports-day",
        start_at="2026-03-01T08:00:00Z",
    )
    return english, urdu
