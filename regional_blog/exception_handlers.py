"""
Global exception handlers

Every error leaves the API in one envelope:

{
    "error": {
        "status_code": 403,
        "error_code": "REGION_FORBIDDEN",
        "message": "Article not available in your region",
        "type": "Forbidden",
        "details": {"resource_type": "Article", "region": "FR"},
        "path": "/api/fr/articles/summer-sale",
        "region": "FR",
        "language": "fr"
    }
}

``region``/``language`` echo the resolved context when RegionMiddleware
ran, so a client can tell which edition the decision was made for.
Outcomes that depend on the visitor's region signals also carry a
``Vary`` header.
"""

import logging
from typing import Any, Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from regional_blog.exceptions import CMSError, ErrorCode

logger = logging.getLogger(__name__)

ERROR_TYPES = {
    400: "Bad Request",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    422: "Validation Error",
    500: "Internal Server Error",
    503: "Service Unavailable",
}

HTTP_ERROR_CODES = {
    400: ErrorCode.VALIDATION_FAILED,
    403: ErrorCode.AUTH_PERMISSION_DENIED,
    404: ErrorCode.RESOURCE_NOT_FOUND,
    409: ErrorCode.VALIDATION_DUPLICATE_RESOURCE,
    422: ErrorCode.VALIDATION_FAILED,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}

# Answers to these codes change with region cookie / Accept-Language
REGION_DEPENDENT_CODES = {ErrorCode.REGION_FORBIDDEN, ErrorCode.RESOURCE_NOT_FOUND}


def get_error_type(status_code: int) -> str:
    return ERROR_TYPES.get(status_code, "Error")


def create_error_response(
    request: Request,
    status_code: int,
    message: str,
    error_code: ErrorCode,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    error: dict[str, Any] = {
        "status_code": status_code,
        "error_code": error_code.value,
        "message": message,
        "type": get_error_type(status_code),
        "path": request.url.path,
    }
    if details:
        error["details"] = details

    context = getattr(request.state, "locale_context", None)
    if context is not None:
        error["region"] = context.region
        error["language"] = context.language

    response = JSONResponse(status_code=status_code, content={"error": error})
    if error_code in REGION_DEPENDENT_CODES:
        response.headers["Vary"] = "Cookie, Accept-Language"
    return response


async def cms_exception_handler(request: Request, exc: CMSError) -> JSONResponse:
    # Not found / forbidden are routine; 5xx means stored data is broken
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "details": exc.details,
        },
    )
    return create_error_response(request, exc.status_code, exc.message, exc.error_code, exc.details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(f"HTTPException: {exc.detail}", extra={"status_code": exc.status_code, "path": request.url.path})
    error_code = HTTP_ERROR_CODES.get(exc.status_code, ErrorCode.UNKNOWN_ERROR)
    return create_error_response(request, exc.status_code, str(exc.detail), error_code)


async def validation_exception_handler(
    request: Request, exc: Union[RequestValidationError, PydanticValidationError]
) -> JSONResponse:
    """Flatten pydantic errors into ``[{field, message, type}]``."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}", extra={"errors": errors})
    return create_error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error",
        ErrorCode.VALIDATION_FAILED,
        {"validation_errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {str(exc)}",
        exc_info=True,
        extra={"path": request.url.path, "method": request.method},
    )
    # Internal details never reach the client
    return create_error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again later.",
        ErrorCode.INTERNAL_ERROR,
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(CMSError, cms_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    logger.info("Exception handlers registered")
