"""Exception handlers rendering domain errors into the API error envelope.

Envelope:
    {"error": {"status": 404, "name": "NotFound", "message": "...", "details": {}}}
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from infrastructure.logging import get_module_logger
from modules.content.domain import ContentError

logger = get_module_logger()


def error_envelope(
    status: int, name: str, message: str, details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    return {
        "error": {
            "status": status,
            "name": name,
            "message": message,
            "details": details or {},
        }
    }


async def content_error_handler(request: Request, exc: Exception):
    """Render ContentError subclasses with their status code."""
    if isinstance(exc, ContentError):
        logger.info(
            "content_error",
            error=exc.name,
            status=exc.status_code,
            path=request.url.path,
            message=exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(
                exc.status_code, exc.name, exc.message, exc.details
            ),
        )


def setup_error_handlers(app: FastAPI):
    app.add_exception_handler(ContentError, content_error_handler)
