"""Public form lookup and the submission flow.

A submission goes through: form lookup (with locale fallback), the form's
per-IP rate limit, validation, file uploads, the stored submission record,
then the PDF archive and the notification email. The side effects report
through OperationResult and never fail the submission.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

from infrastructure.configuration import Settings
from infrastructure.i18n import Translator
from infrastructure.logging import get_module_logger
from infrastructure.notifications import Mailer, PdfRenderer
from infrastructure.persistence import DocumentStore, FileStore, StoreError
from modules.content.domain import NotFound
from modules.content.resolver import DocumentResolver
from modules.forms import COLLECTION, SUBMISSIONS
from modules.forms.errors import (
    FormNotFound,
    RateLimited,
    SubmissionInvalid,
    UploadFailed,
)
from modules.forms.models import Form, UploadedFile
from modules.forms.validation import FieldError, validate_submission
from modules.submissions.notifications import generate_pdf, send_notification_email
from modules.submissions.rendering import SubmissionView

logger = get_module_logger()

ACTIVE_PUBLISHED = {"active": True, "publishedAt": {"$notNull": True}}

UNKNOWN_CLIENT = "unknown"


class FormService:
    """Serves public forms and accepts their submissions."""

    def __init__(
        self,
        store: DocumentStore,
        resolver: DocumentResolver,
        file_store: FileStore,
        translator: Translator,
        settings: Settings,
        mailer: Optional[Mailer] = None,
        pdf_renderer: Optional[PdfRenderer] = None,
    ):
        self.store = store
        self.resolver = resolver
        self.file_store = file_store
        self.translator = translator
        self.settings = settings
        self.mailer = mailer
        self.pdf_renderer = pdf_renderer

    async def get_form(self, slug: str, locale: str) -> Form:
        """Find an active, published form by slug, falling back to the default locale.

        Raises:
            FormNotFound: If no such form exists in either locale.
        """
        try:
            result = await self.resolver.find_by_slug(
                COLLECTION, slug, locale, filters=ACTIVE_PUBLISHED, populate=["fields"]
            )
        except NotFound as e:
            raise FormNotFound(
                self._t("forms.not_found", locale), details={"slug": slug}
            ) from e
        return Form.from_record(result.record)

    async def public_view(self, slug: str, locale: str) -> Dict[str, Any]:
        form = await self.get_form(slug, locale)
        return form.public_view()

    async def check_rate_limit(
        self, form: Form, ip: str, locale: str, now: Optional[datetime] = None
    ) -> None:
        """Enforce the form's per-IP limit over the configured window.

        Raises:
            RateLimited: If the client already reached `rateLimitPerIP`.
        """
        limit = form.rate_limit_per_ip
        if not limit:
            return

        now = now or datetime.now(timezone.utc)
        window = timedelta(seconds=self.settings.forms.SUBMISSION_RATE_WINDOW_SECONDS)
        try:
            recent = await self.store.count(
                SUBMISSIONS,
                filters={"form": form.id, "ip": ip, "submittedAt": {"$gt": now - window}},
            )
        except StoreError as e:
            logger.warning("rate_limit_check_failed", form=form.slug, error=e.message)
            return

        if recent >= limit:
            logger.info(
                "submission_rate_limited", form=form.slug, submitter_ip=ip, recent=recent
            )
            raise RateLimited(self._t("forms.rate_limited", locale, limit=limit), limit)

    async def submit(
        self,
        slug: str,
        locale: str,
        data: Dict[str, Any],
        files: Sequence[UploadedFile] = (),
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Validate and store a submission, then run its side effects.

        Returns:
            {"submissionId": ..., "message": ...}

        Raises:
            FormNotFound: If the form does not exist or is inactive.
            RateLimited: If the client reached the form's limit.
            SubmissionInvalid: If the data fails validation.
            UploadFailed: If a file cannot be stored.
        """
        ip = ip or UNKNOWN_CLIENT
        form = await self.get_form(slug, locale)
        log = logger.bind(form=form.slug, locale=locale)

        await self.check_rate_limit(form, ip, locale)

        errors = validate_submission(form, data, files, self.translator, locale)
        errors.extend(self._oversized(form, files, locale))
        if errors:
            raise SubmissionInvalid(
                self._t("forms.validation_failed", locale),
                [error.to_dict() for error in errors],
            )

        file_ids = await self._upload_files(form, files, locale)

        submitted_at = datetime.now(timezone.utc)
        try:
            record = await self.store.create(
                SUBMISSIONS,
                {
                    "form": form.id,
                    "data": data,
                    "submittedAt": submitted_at.isoformat(),
                    "files": file_ids,
                    "ip": ip,
                    "userAgent": user_agent or UNKNOWN_CLIENT,
                },
                locale,
            )
        except StoreError as e:
            log.error("submission_store_failed", error=e.message)
            raise

        log.info("submission_created", submission_id=record.id, file_count=len(file_ids))

        submission = SubmissionView(id=record.id, submitted_at=submitted_at, data=data)
        await self._run_side_effects(form, submission, locale)

        return {
            "submissionId": record.id,
            "message": form.success_message or self._t("forms.success", locale),
        }

    def _oversized(
        self, form: Form, files: Sequence[UploadedFile], locale: str
    ) -> List[FieldError]:
        limit = self.settings.forms.FORMS_MAX_UPLOAD_BYTES
        errors = []
        for upload in files:
            form_field = form.get_field(upload.field_name)
            if form_field is not None and form_field.is_file and upload.size > limit:
                errors.append(
                    FieldError(
                        form_field.key,
                        self._t("forms.file_too_large", locale, label=form_field.label),
                    )
                )
        return errors

    async def _upload_files(
        self, form: Form, files: Sequence[UploadedFile], locale: str
    ) -> List[int]:
        file_ids = []
        for form_field in form.file_fields:
            for upload in files:
                if upload.field_name != form_field.key:
                    continue
                try:
                    stored = await self.file_store.upload(
                        upload.content,
                        upload.filename,
                        upload.content_type,
                        caption=form_field.label,
                    )
                except StoreError as e:
                    logger.error(
                        "file_upload_failed",
                        form=form.slug,
                        field=form_field.key,
                        error=e.message,
                    )
                    raise UploadFailed(
                        self._t("forms.upload_failed", locale), form_field.key, e.message
                    ) from e
                file_ids.append(stored.id)
        return file_ids

    async def _run_side_effects(
        self, form: Form, submission: SubmissionView, locale: str
    ) -> None:
        pdf = None
        if form.store_pdf or form.send_pdf:
            result = await generate_pdf(
                form,
                submission,
                self.pdf_renderer,
                self.file_store,
                self.translator,
                locale,
            )
            if result.is_success:
                pdf = result.data
                try:
                    await self.store.update_by_key(
                        SUBMISSIONS, submission.id, {"pdf": pdf.file.id}
                    )
                except StoreError as e:
                    logger.warning(
                        "submission_pdf_link_failed",
                        submission_id=submission.id,
                        error=e.message,
                    )

        if form.notification_emails:
            await send_notification_email(
                form,
                submission,
                self.mailer,
                self.translator,
                locale,
                admin_url=self.settings.server.ADMIN_URL,
                pdf=pdf,
            )

    def _t(self, key: str, locale: str, **variables: Any) -> str:
        return self.translator.translate_message(key, locale, variables)
