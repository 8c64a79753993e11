"""Form definitions as stored in the forms collection."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from infrastructure.persistence import LocalizedRecord

FIELD_TYPES = (
    "text",
    "textarea",
    "email",
    "number",
    "select",
    "radio",
    "checkbox",
    "date",
    "file",
)


@dataclass
class FormField:
    """A field of a form.

    Attributes:
        key: Key of the value in submission data.
        label: Label shown to the submitter and used in messages.
        type: One of FIELD_TYPES.
        required: Whether a value (or a file) must be provided.
        options: Allowed values of select/radio fields, either a list or
            {"values": [...]}.
        validation: Optional rules: min, max, minLength, maxLength, regex,
            message.
        placeholder: Input placeholder.
        help_text: Help text shown under the input.
        visibility: "public" or "admin-only".
    """

    key: str
    label: str
    type: str = "text"
    required: bool = False
    options: Any = None
    validation: Dict[str, Any] = field(default_factory=dict)
    placeholder: Optional[str] = None
    help_text: Optional[str] = None
    visibility: str = "public"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormField":
        return cls(
            key=data["key"],
            label=data.get("label") or data["key"],
            type=data.get("type") or "text",
            required=bool(data.get("required", False)),
            options=data.get("options"),
            validation=data.get("validation") or {},
            placeholder=data.get("placeholder"),
            help_text=data.get("helpText"),
            visibility=data.get("visibility") or "public",
        )

    @property
    def is_public(self) -> bool:
        return self.visibility == "public"

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @property
    def allowed_values(self) -> Optional[List[Any]]:
        """Allowed values of a select/radio field, None when unrestricted."""
        if isinstance(self.options, list):
            return self.options
        if isinstance(self.options, dict) and isinstance(self.options.get("values"), list):
            return self.options["values"]
        return None

    def to_public_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "type": self.type,
            "options": self.options,
            "required": self.required,
            "validation": self.validation or None,
            "placeholder": self.placeholder,
            "helpText": self.help_text,
        }


@dataclass
class Form:
    """A form and its submission settings."""

    id: int
    document_id: str
    name: str
    slug: str
    locale: Optional[str] = None
    description: Optional[str] = None
    success_message: Optional[str] = None
    fields: List[FormField] = field(default_factory=list)
    active: bool = True
    notification_emails: List[str] = field(default_factory=list)
    store_pdf: bool = False
    send_pdf: bool = False
    rate_limit_per_ip: Optional[int] = None

    @classmethod
    def from_record(cls, record: LocalizedRecord) -> "Form":
        data = record.fields
        return cls(
            id=record.id,
            document_id=record.document_id,
            locale=record.locale,
            name=data.get("name") or "",
            slug=data.get("slug") or "",
            description=data.get("description"),
            success_message=data.get("successMessage"),
            fields=[FormField.from_dict(item) for item in data.get("fields") or []],
            active=bool(data.get("active", True)),
            notification_emails=list(data.get("notificationEmails") or []),
            store_pdf=bool(data.get("storePdf", False)),
            send_pdf=bool(data.get("sendPdf", False)),
            rate_limit_per_ip=data.get("rateLimitPerIP"),
        )

    @property
    def file_fields(self) -> List[FormField]:
        return [f for f in self.fields if f.is_file]

    def get_field(self, key: str) -> Optional[FormField]:
        return next((f for f in self.fields if f.key == key), None)

    def public_view(self) -> Dict[str, Any]:
        """Projection returned to anonymous clients: public fields only."""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "successMessage": self.success_message,
            "fields": [f.to_public_dict() for f in self.fields if f.is_public],
        }


@dataclass
class UploadedFile:
    """File sent with a submission, keyed by the form field it belongs to.

    `reported_size` is the size announced by the request when the content was
    not read because it exceeds the upload limit.
    """

    field_name: str
    filename: str
    content_type: str
    content: bytes = b""
    reported_size: Optional[int] = None

    @property
    def size(self) -> int:
        if self.reported_size is not None:
            return self.reported_size
        return len(self.content)
