"""Forms feature settings."""

from typing import List

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class FormsSettings(FeatureSettings):
    """Configuration for public form submissions.

    Environment Variables:
        SUBMISSION_RATE_WINDOW_SECONDS: Window of the per-IP submission limit
            configured on each form (default: 3600)
        FORMS_SUBMIT_RATE_LIMIT: Request rate limit of the submit endpoint,
            in slowapi notation (default: 30/minute)
        FORMS_MAX_UPLOAD_BYTES: Maximum size of a single uploaded file
            (default: 10 MiB)
        ADMISSION_FORM_EMAILS: JSON list of notification recipients of the
            seeded admission form (default: ["admin@example.com"])
    """

    SUBMISSION_RATE_WINDOW_SECONDS: int = 3600
    FORMS_SUBMIT_RATE_LIMIT: str = "30/minute"
    FORMS_MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    ADMISSION_FORM_EMAILS: List[str] = Field(default=["admin@example.com"])
