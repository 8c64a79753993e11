"""Fixtures of the module unit tests."""

from datetime import datetime, timezone

import pytest

from infrastructure.persistence import LocalizedRecord
from modules.forms.models import Form
from modules.submissions.rendering import SubmissionView


@pytest.fixture
def admission_form(admission_form_data):
    record = LocalizedRecord(
        id=1, document_id="form-doc-1", locale="en", fields=admission_form_data
    )
    return Form.from_record(record)


@pytest.fixture
def submission_view(valid_submission):
    return SubmissionView(
        id=12,
        submitted_at=datetime(2026, 5, 1, 9, 30, tzinfo=timezone.utc),
        data=valid_submission,
    )
