"""Email notification models.

Uses Pydantic BaseModel for RFC 5322 address validation (EmailStr) and
runtime input validation of outgoing messages.
"""

from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class Attachment(BaseModel):
    """File attached to an email.

    Attributes:
        filename: Name shown to the recipient
        content: Raw file bytes
        content_type: MIME type (e.g., "application/pdf")
    """

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class EmailMessage(BaseModel):
    """Outgoing email.

    Attributes:
        to: Recipients (at least one)
        subject: Subject line
        html_body: HTML body
        text_body: Optional plain text alternative
        reply_to: Optional Reply-To address
        attachments: File attachments

    Example:
        message = EmailMessage(
            to=["admissions@example.com"],
            subject="New Form Submission: Admissions",
            html_body="<p>...</p>",
        )
    """

    to: List[EmailStr] = Field(..., min_length=1)
    subject: str
    html_body: str
    text_body: Optional[str] = None
    reply_to: Optional[EmailStr] = None
    attachments: List[Attachment] = Field(default_factory=list)

    @field_validator("subject")
    @classmethod
    def validate_subject(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Email subject cannot be empty")
        return v
