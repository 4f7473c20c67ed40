"""
Uniform error envelope: {"success": false, "error": "..."}
"""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def require_fields(payload: BaseModel, message: str, *fields: str):
    """Reject the request with 400 when any of `fields` is missing or empty"""
    for name in fields:
        if not getattr(payload, name, None):
            raise HTTPException(status_code=400, detail=message)


def internal_error(e: Exception, action: str) -> HTTPException:
    logger.exception("Error %s: %s", action, e)
    return HTTPException(status_code=500, detail=str(e) or "Unknown error")


def format_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else err.get("msg", "Invalid request"))
    return "; ".join(parts) or "Invalid request"


# ==================== EXCEPTION HANDLERS ====================

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"success": False, "error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = format_validation_error(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse({"success": False, "error": message}, status_code=400)


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
