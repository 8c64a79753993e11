import json
from typing import Any, Dict, List, Tuple

from fastapi import APIRouter, Request
from starlette.datastructures import UploadFile

from api.dependencies.locale import RequestLocale
from api.dependencies.rate_limits import client_ip, limiter
from infrastructure.i18n import Translator
from infrastructure.services import TranslatorDep, get_settings
from modules.content.router import build_content_router
from modules.forms import COLLECTION
from modules.forms.dependencies import FormServiceDep
from modules.forms.errors import SubmissionInvalid
from modules.forms.models import UploadedFile

router = APIRouter(tags=["Forms"])

FILE_FIELD_PREFIX = "files."


def submit_rate_limit() -> str:
    return get_settings().forms.FORMS_SUBMIT_RATE_LIMIT


def _decode_data(raw: Any) -> Any:
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return raw
    return raw


async def _read_upload(key: str, upload: UploadFile, max_bytes: int) -> UploadedFile:
    """Read a file part, never more than one byte past the upload limit.

    Parts whose announced size is over the limit are not read at all; the
    form service rejects them by size.
    """
    field_name = key
    if key.startswith(FILE_FIELD_PREFIX):
        field_name = key[len(FILE_FIELD_PREFIX) :]
    uploaded = UploadedFile(
        field_name=field_name,
        filename=upload.filename or field_name,
        content_type=upload.content_type or "application/octet-stream",
    )

    if upload.size is not None and upload.size > max_bytes:
        uploaded.reported_size = upload.size
    else:
        uploaded.content = await upload.read(max_bytes + 1)
    return uploaded


async def read_submission(
    request: Request, translator: Translator, locale: str, max_upload_bytes: int
) -> Tuple[Dict[str, Any], List[UploadedFile]]:
    """Extract submission data and files from a JSON or multipart body.

    The data is the `data` member (an object or a JSON string) when present,
    otherwise the remaining body fields. Multipart file parts are keyed by
    field key, optionally prefixed with "files.", and read up to
    `max_upload_bytes + 1` bytes each.

    Raises:
        SubmissionInvalid: If the body or its data is not an object.
    """
    files: List[UploadedFile] = []
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await request.form()
        body: Dict[str, Any] = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                files.append(await _read_upload(key, value, max_upload_bytes))
            else:
                body[key] = value
    else:
        raw_body = await request.body()
        try:
            body = json.loads(raw_body) if raw_body else {}
        except json.JSONDecodeError:
            body = None

    if not isinstance(body, dict):
        raise _invalid_data(translator, locale)

    data = _decode_data(body["data"]) if "data" in body else {
        key: value for key, value in body.items() if key != "files"
    }
    if not isinstance(data, dict):
        raise _invalid_data(translator, locale)
    return data, files


def _invalid_data(translator: Translator, locale: str) -> SubmissionInvalid:
    message = translator.translate_message("forms.invalid_data", locale)
    return SubmissionInvalid(
        translator.translate_message("forms.validation_failed", locale),
        [{"field": "data", "message": message}],
    )


@router.get("/forms/{slug}", name="forms_find_by_slug")
async def get_form(slug: str, locale: RequestLocale, service: FormServiceDep):
    """Public view of an active form: public fields and their attributes only."""
    return await service.public_view(slug, locale)


@router.post("/forms/{slug}/submit", name="forms_submit")
@limiter.limit(submit_rate_limit)
async def submit_form(
    request: Request,
    slug: str,
    locale: RequestLocale,
    service: FormServiceDep,
    translator: TranslatorDep,
):
    """Submit a form as JSON or multipart/form-data (with file uploads)."""
    data, files = await read_submission(
        request, translator, locale, service.settings.forms.FORMS_MAX_UPLOAD_BYTES
    )
    return await service.submit(
        slug,
        locale,
        data,
        files,
        ip=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )


router.include_router(
    build_content_router(
        COLLECTION,
        "forms",
        tags=["Forms"],
        default_populate=("fields",),
        include_find_one=False,
    )
)
