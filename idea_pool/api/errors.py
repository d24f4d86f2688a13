"""Error envelopes and exception handlers."""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from idea_pool.services.results import ErrorKind, Result

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}

ERROR_MESSAGES = {
    status.HTTP_400_BAD_REQUEST: "Bad Request",
    status.HTTP_401_UNAUTHORIZED: "Unauthorized",
    status.HTTP_404_NOT_FOUND: "Not Found",
    status.HTTP_409_CONFLICT: "Conflict",
}


def raise_for_result(result: Result) -> None:
    """Translate a failed service result into an HTTP error."""
    if result.ok:
        return
    status_code = ERROR_STATUS[result.error]
    if result.errors:
        detail = {
            "msg": ERROR_MESSAGES[status_code],
            "errors": [{"field": e.field, "msg": e.msg} for e in result.errors],
        }
    else:
        detail = ERROR_MESSAGES[status_code]
    raise HTTPException(status_code=status_code, detail=detail)


def _field_name(loc: tuple) -> str:
    # Drop the "body"/"query" prefix FastAPI adds
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as {"msg": ...} envelopes."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"msg": ERROR_MESSAGES.get(exc.status_code, exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as 400 with per-field errors."""
    errors = [{"field": _field_name(err["loc"]), "msg": err["msg"]} for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"msg": "Bad Request", "errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide their details from the client."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"msg": "Internal Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelopes to the application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
