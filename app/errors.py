"""
app/errors.py — JSON error envelope shared by both apps
========================================================

Every error leaves the API as:

    {"status": "error",
     "error": {"code": 404, "message": "Resource Not Found",
               "details": "Project not found with ID: 7",
               "path": "/api/v1/admin/projects/7",
               "timestamp": "2026-01-01T00:00:00+00:00"}}

Validation failures add ``validationErrors: [{field, message}]`` and use 400.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from db.models import RecordNotFound, now_iso

logger = logging.getLogger(__name__)

_MESSAGES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Access Denied",
    404: "Resource Not Found",
    405: "Method Not Allowed",
    429: "Too Many Requests",
    500: "Internal Server Error",
}


def err(request: Request, code: int, details: str,
        validation_errors: Optional[list] = None,
        headers: Optional[dict] = None) -> JSONResponse:
    error = {
        "code": code,
        "message": _MESSAGES.get(code, "Error"),
        "details": details,
        "path": request.url.path,
        "timestamp": now_iso(),
    }
    if validation_errors is not None:
        error["validationErrors"] = validation_errors
    return JSONResponse(
        status_code=code,
        content={"status": "error", "error": error},
        headers=headers,
    )


async def _not_found(request: Request, exc: RecordNotFound):
    logger.error(f"Resource not found on {request.url.path}: {exc}")
    return err(request, 404, str(exc))


async def _http_error(request: Request, exc: StarletteHTTPException):
    return err(request, exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def _validation_error(request: Request, exc: RequestValidationError):
    logger.error(f"Validation error on {request.url.path}: {exc.errors()}")
    fields = [
        {
            "field": ".".join(str(p) for p in e.get("loc", ()) if p != "body"),
            "message": e.get("msg", ""),
        }
        for e in exc.errors()
    ]
    return err(request, 400, "Please check the input fields.", validation_errors=fields)


async def _unhandled(request: Request, exc: Exception):
    logger.exception(f"Internal server error on {request.url.path}")
    return err(request, 500, "An unexpected error occurred.")


def install_error_handlers(app: FastAPI):
    app.add_exception_handler(RecordNotFound, _not_found)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unhandled)
