"""
Error Handling - Partner Rating Platform
partner_rating/core/errors.py

Shared error body, HTTPException helpers and the exception handlers
registered on the application.
"""

import logging
from typing import NoReturn, Optional

from fastapi import Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from partner_rating.core.exceptions import (
    AnswerValidationError,
    DatabaseConnectionException,
    DuplicateEntityException,
    EntityArchivedException,
    EntityNotFoundException,
    ForeignKeyViolationException,
    RepositoryException,
)
from partner_rating.models.common import ErrorResponse

logger = logging.getLogger(__name__)



#  Validation Error Messages


FIELD_MESSAGES = {
    "name": {
        "missing": "Partner name is required",
        "string_too_short": "Partner name cannot be empty",
        "string_too_long": "Partner name must not exceed 255 characters",
    },
    "org": {
        "missing": "Organisation is required",
        "string_too_short": "Organisation cannot be empty",
    },
    "scope": {
        "missing": "Scope is required",
        "enum": "Scope must be 'domestic' or 'overseas'",
    },
    "email": {
        "value_error": "Email must be a valid email address",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "enum": "Field '{field}' has an unsupported value",
    "string_type": "Field '{field}' must be a string",
    "float_type": "Field '{field}' must be a number",
    "float_parsing": "Field '{field}' must be a valid number",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "int_from_float": "Field '{field}' must be a whole number",
    "list_type": "Field '{field}' must be a list",
    "value_error": "Field '{field}' is invalid",
    "json_invalid": "Malformed JSON request body",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
}


def get_validation_message(field: str, error_type: str) -> str:
    if field in FIELD_MESSAGES:
        for key in FIELD_MESSAGES[field]:
            if key in error_type:
                return FIELD_MESSAGES[field][key]
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


def error_body(error_code: str, message: str, details: Optional[dict] = None) -> dict:
    return ErrorResponse(error_code=error_code, message=message, details=details).model_dump(mode="json")


def raise_error(status_code: int, error_code: str, message: str, details: Optional[dict] = None) -> NoReturn:
    raise HTTPException(status_code=status_code, detail=error_body(error_code, message, details))


def raise_not_found(entity: str) -> NoReturn:
    raise_error(status.HTTP_404_NOT_FOUND, f"{entity.upper()}_NOT_FOUND", f"{entity.capitalize()} not found")



#  Exception Handlers


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_body("VALIDATION_ERROR", "Request validation failed"),
        )
    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])
    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("INVALID_REQUEST", "Malformed JSON request body"),
        )
    field = ".".join(str(l) for l in loc if l != "body")
    message = get_validation_message(field, error_type)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(
            "VALIDATION_ERROR",
            message,
            {"field": field, "type": error_type} if field else None,
        ),
    )


async def answer_validation_handler(request: Request, exc: AnswerValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(
            "INVALID_ANSWERS",
            "Every question must be answered with a value from 0 to 5",
            {"errors": exc.errors},
        ),
    )


async def repository_exception_handler(request: Request, exc: RepositoryException):
    if isinstance(exc, EntityNotFoundException):
        code = f"{exc.entity_type.upper()}_NOT_FOUND"
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=error_body(code, str(exc)))
    if isinstance(exc, EntityArchivedException):
        code = f"{exc.entity_type.upper()}_ARCHIVED"
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=error_body(code, str(exc)))
    if isinstance(exc, (DuplicateEntityException, ForeignKeyViolationException)):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=error_body("CONFLICT", exc.message))
    if isinstance(exc, DatabaseConnectionException):
        logger.error("Database unavailable: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=error_body("DATABASE_UNAVAILABLE", "Database is unavailable"),
        )
    logger.error("Repository error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("DATABASE_ERROR", "Database operation failed"),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Serve raise_error() bodies as-is; wrap plain HTTP errors in the same shape."""
    if isinstance(exc.detail, dict) and "error_code" in exc.detail:
        content = exc.detail
    else:
        content = error_body(f"HTTP_{exc.status_code}", str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))
