from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from api.dependencies.locale import RequestLocale
from infrastructure.logging import get_module_logger
from infrastructure.services import (
    DocumentStoreDep,
    FileStoreDep,
    SettingsDep,
    TranslatorDep,
)
from modules.content.domain import NotFound
from modules.submissions import COLLECTION

logger = get_module_logger()

router = APIRouter(tags=["Form Submissions"])


def absolute_url(url: str, base_url: str) -> str:
    """Prefix store-relative file URLs with the base URL of the file host."""
    if url.startswith(("http://", "https://")):
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


@router.get("/form-submissions/{id}/pdf", name="form_submissions_download_pdf")
async def download_pdf(
    id: str,
    locale: RequestLocale,
    store: DocumentStoreDep,
    file_store: FileStoreDep,
    settings: SettingsDep,
    translator: TranslatorDep,
):
    """Redirect to the archived PDF of a submission."""

    def not_found(key: str) -> NotFound:
        return NotFound(translator.translate_message(key, locale), details={"id": id})

    submission = await store.find_by_key(COLLECTION, id, None)
    if submission is None:
        raise not_found("submissions.not_found")

    pdf_id = submission.get("pdf")
    if not pdf_id:
        raise not_found("submissions.pdf_unavailable")

    stored = await file_store.get(pdf_id)
    if stored is None:
        logger.warning("submission_pdf_missing", submission_id=submission.id, file_id=pdf_id)
        raise not_found("submissions.pdf_file_not_found")

    return RedirectResponse(
        absolute_url(stored.url, settings.server.ADMIN_URL),
        status_code=302,
        headers={"Content-Disposition": f'attachment; filename="{stored.name}"'},
    )
