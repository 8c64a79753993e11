"""Router factory exposing findOne/create/update/delete for a collection.

Reads are public. Create and update require an editor token, delete an
admin token.
"""

from typing import Any, Dict, List, Optional, Sequence

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from api.dependencies.locale import RequestLocale
from infrastructure.auth import require_admin, require_editor
from infrastructure.services import (
    DocumentResolverDep,
    LocaleNegotiatorDep,
    MutationCoordinatorDep,
)
from modules.content.responses import present_deletion, present_resolution


class ContentPayload(BaseModel):
    """Body of create and update requests."""

    data: Dict[str, Any] = Field(default_factory=dict)
    locale: Optional[str] = None


def parse_populate(populate: Optional[str], default: Sequence[str] = ()) -> List[str]:
    """Parse `?populate=cover,gallery`; `*` and empty values keep the default."""
    if not populate or populate.strip() == "*":
        return list(default)
    return [name.strip() for name in populate.split(",") if name.strip()]


def payload_locale(
    request: Request, payload: ContentPayload, negotiator: LocaleNegotiatorDep
) -> str:
    """Negotiate the locale of a write: query, then body, then Accept-Language."""
    explicit = (
        request.query_params.get("locale")
        or payload.locale
        or payload.data.get("locale")
    )
    return negotiator.negotiate(explicit, request.headers.get("accept-language"))


def build_content_router(
    collection: str,
    path: str,
    tags: Optional[List[str]] = None,
    default_populate: Sequence[str] = (),
    include_find_one: bool = True,
) -> APIRouter:
    """Build the CRUD router of a localized collection.

    Args:
        collection: Store collection name (e.g., "events").
        path: URL path segment (e.g., "events").
        tags: OpenAPI tags.
        default_populate: Relations populated when `?populate` is absent.
        include_find_one: Register `GET /{path}/{id}`. Collections with a
            custom public lookup (forms by slug) leave it out.

    Returns:
        APIRouter with the collection's endpoints.
    """
    router = APIRouter(tags=tags or [collection])

    if include_find_one:

        @router.get(f"/{path}/{{id}}", name=f"{collection}_find_one")
        async def find_one(
            id: str,
            locale: RequestLocale,
            resolver: DocumentResolverDep,
            populate: Optional[str] = None,
        ):
            """Find a record by key, document id or slug, with locale fallback."""
            result = await resolver.resolve(
                collection, id, locale, parse_populate(populate, default_populate)
            )
            return present_resolution(result)

    @router.post(
        f"/{path}",
        name=f"{collection}_create",
        dependencies=[Depends(require_editor)],
    )
    async def create(
        payload: ContentPayload,
        request: Request,
        negotiator: LocaleNegotiatorDep,
        coordinator: MutationCoordinatorDep,
        populate: Optional[str] = None,
    ):
        locale = payload_locale(request, payload, negotiator)
        record = await coordinator.create(
            collection, locale, payload.data, parse_populate(populate, default_populate)
        )
        return {"data": record.to_dict()}

    @router.put(
        f"/{path}/{{id}}",
        name=f"{collection}_update",
        dependencies=[Depends(require_editor)],
    )
    async def update(
        id: str,
        payload: ContentPayload,
        request: Request,
        negotiator: LocaleNegotiatorDep,
        coordinator: MutationCoordinatorDep,
        populate: Optional[str] = None,
    ):
        """Update one locale of a document, creating that locale if missing."""
        locale = payload_locale(request, payload, negotiator)
        record = await coordinator.update(
            collection,
            id,
            locale,
            payload.data,
            parse_populate(populate, default_populate),
        )
        return {"data": record.to_dict()}

    @router.delete(
        f"/{path}/{{id}}",
        name=f"{collection}_delete",
        dependencies=[Depends(require_admin)],
    )
    async def delete(id: str, coordinator: MutationCoordinatorDep):
        """Delete every locale of a document."""
        result = await coordinator.delete(collection, id)
        return present_deletion(result)

    return router
