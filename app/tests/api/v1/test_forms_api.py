import asyncio
import json
from unittest.mock import patch

import httpx
import pytest
from starlette.datastructures import UploadFile

from infrastructure.configuration import Settings
from modules.forms import SUBMISSIONS

pytestmark = pytest.mark.integration


def _submissions(store):
    return asyncio.run(store.find_many(SUBMISSIONS))


async def _submit_from(app, peer, data):
    transport = httpx.ASGITransport(app=app, client=(peer, 4321))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.post("/api/v1/forms/admission-form/submit", json=data)


class TestGetForm:
    def test_public_view(self, client, seeded_form):
        response = client.get("/api/v1/forms/admission-form")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == seeded_form.id
        assert body["name"] == "Admission Form"
        keys = [field["key"] for field in body["fields"]]
        assert "notes" not in keys
        assert "notificationEmails" not in body

    def test_locale_fallback(self, client, seeded_form):
        response = client.get("/api/v1/forms/admission-form", params={"locale": "ur"})

        assert response.status_code == 200
        assert response.json()["slug"] == "admission-form"

    def test_not_found(self, client, seeded_form):
        response = client.get("/api/v1/forms/contact")

        assert response.status_code == 404
        assert response.json()["error"]["name"] == "FormNotFound"
        assert response.json()["error"]["message"] == "Form not found"

    def test_not_found_message_is_localized(self, client, translator):
        response = client.get("/api/v1/forms/contact", params={"locale": "ar"})

        assert response.json()["error"]["message"] == translator.translate_message(
            "forms.not_found", "ar"
        )


class TestSubmit:
    def test_json_submission(self, client, store, seeded_form, valid_submission, mailer):
        response = client.post(
            "/api/v1/forms/admission-form/submit",
            json={"data": valid_submission},
            headers={"User-Agent": "pytest-browser"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Thank you for your admission application!"
        [submission] = _submissions(store)
        assert body["submissionId"] == submission.id
        assert submission.fields["ip"] == "testclient"
        assert submission.fields["userAgent"] == "pytest-browser"
        assert submission.fields["pdf"]
        mailer.send.assert_awaited_once()

    def test_flat_json_body(self, client, store, seeded_form, valid_submission):
        response = client.post("/api/v1/forms/admission-form/submit", json=valid_submission)

        assert response.status_code == 200
        [submission] = _submissions(store)
        assert submission.fields["data"] == valid_submission

    def test_multipart_with_file(self, client, store, file_store, seeded_form, valid_submission):
        payload = {key: value for key, value in valid_submission.items() if key != "transport"}

        response = client.post(
            "/api/v1/forms/admission-form/submit",
            data={"data": json.dumps(payload)},
            files={"files.birthCertificate": ("certificate.pdf", b"%PDF-cert", "application/pdf")},
        )

        assert response.status_code == 200
        [submission] = _submissions(store)
        [file_id] = submission.fields["files"]
        assert file_store.read(file_id) == b"%PDF-cert"

    def test_multipart_fields_without_data_member(self, client, store, seeded_form):
        response = client.post(
            "/api/v1/forms/admission-form/submit",
            data={"studentName": "Bilal", "email": "parent@example.com"},
            files={"birthCertificate": ("bc.png", b"\x89PNG", "image/png")},
        )

        assert response.status_code == 200
        [submission] = _submissions(store)
        assert submission.fields["data"] == {"studentName": "Bilal", "email": "parent@example.com"}
        assert len(submission.fields["files"]) == 1

    def test_oversized_file_is_not_read(self, client, store, settings, seeded_form, valid_submission):
        settings.forms.FORMS_MAX_UPLOAD_BYTES = 16
        payload = {key: value for key, value in valid_submission.items() if key != "transport"}
        read_sizes = []
        original_read = UploadFile.read

        async def recording_read(upload, size=-1):
            read_sizes.append(size)
            return await original_read(upload, size)

        with patch.object(UploadFile, "read", recording_read):
            response = client.post(
                "/api/v1/forms/admission-form/submit",
                data={"data": json.dumps(payload)},
                files={"files.birthCertificate": ("big.pdf", b"x" * 4096, "application/pdf")},
            )

        assert response.status_code == 400
        assert response.json()["error"]["details"]["errors"] == [
            {
                "field": "birthCertificate",
                "message": "Birth Certificate exceeds the maximum upload size",
            }
        ]
        assert all(0 < size <= 17 for size in read_sizes)
        assert _submissions(store) == []

    def test_file_at_the_limit_is_accepted(self, client, file_store, store, settings, seeded_form):
        settings.forms.FORMS_MAX_UPLOAD_BYTES = 16

        response = client.post(
            "/api/v1/forms/admission-form/submit",
            data={"studentName": "Bilal", "email": "parent@example.com"},
            files={"birthCertificate": ("bc.png", b"x" * 16, "image/png")},
        )

        assert response.status_code == 200
        [submission] = _submissions(store)
        [file_id] = submission.fields["files"]
        assert file_store.read(file_id) == b"x" * 16

    def test_validation_errors(self, client, store, seeded_form):
        response = client.post(
            "/api/v1/forms/admission-form/submit",
            json={"data": {"studentName": "A", "email": "nope", "grade": "7"}},
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["name"] == "ValidationError"
        assert error["message"] == "Validation failed"
        assert {e["field"] for e in error["details"]["errors"]} == {"studentName", "email", "grade"}
        assert _submissions(store) == []

    def test_unknown_field_rejected(self, client, store, seeded_form, valid_submission):
        response = client.post(
            "/api/v1/forms/admission-form/submit",
            json={"data": {**valid_submission, "isAdmin": True}},
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["name"] == "ValidationError"
        assert error["details"]["errors"] == [
            {"field": "isAdmin", "message": "Unknown field: isAdmin"}
        ]
        assert _submissions(store) == []

    def test_submission_stored_in_request_locale(self, client, store, seeded_form, valid_submission):
        response = client.post(
            "/api/v1/forms/admission-form/submit",
            params={"locale": "ur"},
            json={"data": valid_submission},
        )

        assert response.status_code == 200
        [submission] = _submissions(store)
        assert submission.locale == "ur"
        assert submission.get("locale") == "ur"

    def test_localized_validation_errors(self, client, seeded_form, translator):
        response = client.post(
            "/api/v1/forms/admission-form/submit",
            params={"locale": "ur"},
            json={"data": {"email": "parent@example.com"}},
        )

        error = response.json()["error"]
        assert error["message"] == translator.translate_message("forms.validation_failed", "ur")
        assert error["details"]["errors"][0]["message"] == translator.translate_message(
            "forms.required", "ur", {"label": "Student Name"}
        )

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"json": {"data": ["not", "an", "object"]}},
            {"json": {"data": "\"just a string\""}},
            {"json": [1, 2]},
            {"content": b"{not json", "headers": {"Content-Type": "application/json"}},
        ],
    )
    def test_data_must_be_an_object(self, client, seeded_form, kwargs):
        response = client.post("/api/v1/forms/admission-form/submit", **kwargs)

        assert response.status_code == 400
        assert response.json()["error"]["details"]["errors"] == [
            {"field": "data", "message": "Submission data must be an object"}
        ]

    def test_unknown_form(self, client, valid_submission):
        response = client.post("/api/v1/forms/contact/submit", json={"data": valid_submission})

        assert response.status_code == 404

    def test_per_ip_limit(self, app, client, seeded_form, valid_submission):
        for _ in range(5):
            response = client.post("/api/v1/forms/admission-form/submit", json=valid_submission)
            assert response.status_code == 200

        response = client.post("/api/v1/forms/admission-form/submit", json=valid_submission)

        assert response.status_code == 429
        error = response.json()["error"]
        assert error["name"] == "RateLimited"
        assert error["details"] == {"limit": 5}

        other = asyncio.run(_submit_from(app, "203.0.113.10", valid_submission))
        assert other.status_code == 200

    def test_forwarded_for_does_not_reset_per_ip_limit(self, client, seeded_form, valid_submission):
        statuses = [
            client.post(
                "/api/v1/forms/admission-form/submit",
                json=valid_submission,
                headers={"X-Forwarded-For": f"203.0.113.{n}"},
            ).status_code
            for n in range(8)
        ]

        assert statuses == [200] * 5 + [429] * 3

    def test_route_rate_limit(self, client, store, admission_form_data, valid_submission):
        admission_form_data["rateLimitPerIP"] = None
        store.insert("forms", admission_form_data, "en", "form-doc-1")
        limited = Settings()
        limited.forms.FORMS_SUBMIT_RATE_LIMIT = "2/minute"

        with patch("modules.forms.routes.get_settings", return_value=limited):
            for _ in range(2):
                response = client.post("/api/v1/forms/admission-form/submit", json=valid_submission)
                assert response.status_code == 200
            response = client.post("/api/v1/forms/admission-form/submit", json=valid_submission)

        assert response.status_code == 429
        assert response.json() == {"message": "Rate limit exceeded"}
