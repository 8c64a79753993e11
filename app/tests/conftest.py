"""Shared fixtures: in-memory stores, settings, translator and seed data."""

import sys
from pathlib import Path

# Make the application packages importable when pytest is run from the app
# directory rather than through the project configuration.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest

from api.dependencies.rate_limits import limiter
from infrastructure.configuration import Settings
from infrastructure.i18n.factory import create_translator
from infrastructure.persistence import (
    InMemoryDocumentStore,
    InMemoryFileStore,
    InMemoryLocalizationService,
)
from modules.content.mutations import MutationCoordinator
from modules.content.resolver import DocumentResolver

LOCALES = ["en", "ur", "ar", "fa"]


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Route limits are kept in process memory; start every test from zero."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture(scope="session")
def translator():
    return create_translator(fallback_locale="en")


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def file_store():
    return InMemoryFileStore()


@pytest.fixture
def localization_service(store):
    return InMemoryLocalizationService(store)


@pytest.fixture
def resolver(store):
    return DocumentResolver(store, default_locale="en")


@pytest.fixture
def coordinator(store, localization_service):
    return MutationCoordinator(store, localization_service, LOCALES, "en")


@pytest.fixture
def make_event(store):
    """Insert an event version; shares `document_id` across locales when given."""

    def _make_event(
        locale="en",
        document_id="evt-doc-1",
        title="Open Day",
        slug="open-day",
        start_at="2026-05-01T10:00:00Z",
        **fields,
    ):
        data = {"title": title, "slug": slug, "startAt": start_at, **fields}
        return store.insert("events", data, locale, document_id)

    return _make_event


@pytest.fixture
def admission_form_data():
    """Fields of an active admission form, as an editor would store them."""
    return {
        "name": "Admission Form",
        "slug": "admission-form",
        "description": "Student admission application form",
        "active": True,
        "successMessage": "Thank you for your admission application!",
        "notificationEmails": ["admissions@example.com"],
        "storePdf": True,
        "sendPdf": True,
        "rateLimitPerIP": 5,
        "fields": [
            {"key": "studentName", "label": "Student Name", "type": "text", "required": True,
             "validation": {"minLength": 2, "maxLength": 50}},
            {"key": "email", "label": "Email", "type": "email", "required": True},
            {"key": "age", "label": "Age", "type": "number",
             "validation": {"min": 3, "max": 18}},
            {"key": "grade", "label": "Grade", "type": "select",
             "options": ["1", "2", "3"]},
            {"key": "gender", "label": "Gender", "type": "radio",
             "options": {"values": ["male", "female"]}},
            {"key": "phone", "label": "Phone", "type": "text",
             "validation": {"regex": "^03[0-9]{9}$", "message": "Phone must look like 03001234567"}},
            {"key": "dateOfBirth", "label": "Date of Birth", "type": "date"},
            {"key": "transport", "label": "Needs Transport", "type": "checkbox"},
            {"key": "birthCertificate", "label": "Birth Certificate", "type": "file"},
            {"key": "notes", "label": "Internal Notes", "type": "textarea",
             "visibility": "admin-only"},
        ],
    }


@pytest.fixture
def seeded_form(store, admission_form_data):
    return store.insert("forms", admission_form_data, "en", "form-doc-1")


@pytest.fixture
def valid_submission():
    return {
        "studentName": "Ayesha Khan",
        "email": "parent@example.com",
        "age": "9",
        "grade": "2",
        "gender": "female",
        "phone": "03001234567",
        "dateOfBirth": "2017-03-14",
        "transport": True,
    }
