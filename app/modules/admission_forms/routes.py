from typing import Optional

from fastapi import APIRouter, Query

from api.dependencies.locale import RequestLocale
from infrastructure.services import DocumentStoreDep, SettingsDep
from modules.admission_forms import COLLECTION
from modules.content.listing import effective_page_size, list_records
from modules.content.router import build_content_router, parse_populate

router = APIRouter(tags=["Admission Forms"])


@router.get("/admission-forms", name="admission_forms_find")
async def find_admission_forms(
    locale: RequestLocale,
    store: DocumentStoreDep,
    settings: SettingsDep,
    page: int = Query(default=1, ge=1, alias="pagination[page]"),
    page_size: Optional[int] = Query(default=None, ge=1, alias="pagination[pageSize]"),
    sort: Optional[str] = None,
    populate: Optional[str] = None,
):
    """List admission forms of the request locale."""
    content = settings.content
    return await list_records(
        store,
        COLLECTION,
        locale,
        page=page,
        page_size=effective_page_size(content, page_size),
        sort=sort,
        populate=parse_populate(populate),
        published_only=content.CONTENT_PUBLISHED_ONLY,
    )


router.include_router(
    build_content_router(COLLECTION, "admission-forms", tags=["Admission Forms"])
)
