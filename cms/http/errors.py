"""
Error Responses

Maps CmsError subclasses to HTTP status codes with an ``{"error": ...}``
JSON body.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cms.configs import get_logger
from cms.exceptions import (
    AuthError,
    CmsError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    UnknownContentKindError,
    ValidationError,
)

logger = get_logger("http.errors")

STATUS_CODES: list[tuple[type[CmsError], int]] = [
    (ValidationError, 400),
    (UnknownContentKindError, 400),
    (AuthError, 401),
    (PermissionDeniedError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
]


def status_for(error: CmsError) -> int:
    for error_type, status_code in STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


async def cms_error_handler(request: Request, exc: CmsError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=status_code, content={"error": "Internal server error"})
    return JSONResponse(status_code=status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"Invalid {location}: {errors[0].get('msg')}" if location else errors[0].get("msg", message)
    return JSONResponse(status_code=400, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CmsError, cms_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
