from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
import logging

logger = logging.getLogger(__name__)


def _error_body(message: str, error_code: ErrorCode, details=None) -> dict:
    return {
        "success": False,
        "error": message,
        "message": message,
        "error_code": error_code,
        "details": details,
    }


# -------------------------
# APP EXCEPTIONS
# -------------------------
async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code >= 500:
        logger.error(
            "Application error",
            extra={"path": request.url.path, "error_code": exc.error_code},
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, exc.error_code, exc.details),
    )


# -------------------------
# REQUEST VALIDATION
# -------------------------
REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


def _field_name(loc) -> str:
    # ("body", "adjustments", 0, "newStock") -> "adjustments[0].newStock"
    name = ""
    for i, part in enumerate(loc):
        if i == 0 and part in REQUEST_PARTS:
            continue
        if isinstance(part, int):
            name += f"[{part}]"
        else:
            name += f".{part}" if name else str(part)
    return name or "body"


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    errors = exc.errors()

    missing = [_field_name(e["loc"]) for e in errors if e["type"] == "missing"]
    invalid = [_field_name(e["loc"]) for e in errors if e["type"] != "missing"]

    parts = []
    if missing:
        parts.append(f"Missing required fields: {', '.join(missing)}")
    if invalid:
        parts.append(f"Invalid fields: {', '.join(invalid)}")

    return JSONResponse(
        status_code=400,
        content=_error_body(
            "; ".join(parts) or "Invalid request data",
            ErrorCode.VALIDATION_ERROR,
            {
                "missingFields": missing,
                "invalidFields": invalid,
                "errors": jsonable_encoder(errors, exclude={"ctx", "url"}),
            },
        ),
    )


# -------------------------
# HTTP EXCEPTIONS (mapped)
# -------------------------
HTTP_STATUS_TO_ERROR_CODE = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.PERMISSION_DENIED,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION_ERROR,
}


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
):
    error_code = HTTP_STATUS_TO_ERROR_CODE.get(
        exc.status_code,
        ErrorCode.INTERNAL_ERROR,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, error_code),
    )


# -------------------------
# DB INTEGRITY ERRORS
# -------------------------
async def integrity_error_handler(
    request: Request, exc: IntegrityError
):
    logger.exception("DB Integrity error")

    return JSONResponse(
        status_code=409,
        content=_error_body("Database constraint violation", ErrorCode.CONFLICT),
    )


# -------------------------
# LAST RESORT
# -------------------------
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content=_error_body(
            "Something went wrong. Please try again.",
            ErrorCode.INTERNAL_ERROR,
        ),
    )
