"""Response envelopes of the content endpoints."""

from typing import Any, Dict

from modules.content.domain import DeletionResult, ResolutionResult


def present_resolution(result: ResolutionResult) -> Dict[str, Any]:
    """`{data}`, plus `meta.locale` when the record came from the default locale."""
    body: Dict[str, Any] = {"data": result.record.to_dict()}
    if result.fallback:
        body["meta"] = {
            "locale": {
                "requested": result.requested_locale,
                "returned": result.returned_locale,
                "fallback": True,
            }
        }
    return body


def present_deletion(result: DeletionResult) -> Dict[str, Any]:
    data = (
        result.record.to_dict()
        if result.record is not None
        else {"documentId": result.document_id}
    )
    return {
        "data": data,
        "meta": {
            "deleted": True,
            "method": result.method.value,
            "verified": result.verified,
            "count": result.deleted_count,
        },
    }
