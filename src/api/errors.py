"""Error response helpers and application-wide exception handlers.

Every failure reaches the client as {"message": str, "error"?: str}.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.middleware.logging import REQUEST_ID_HEADER

logger = logging.getLogger(__name__)

INVALID_DATA_MESSAGE = "Datos de usuario inválidos"
INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


def error_response(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    content = {"message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


def _summarize_validation_errors(exc: RequestValidationError) -> str:
    """Render pydantic errors as 'field: reason; field: reason'."""
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    summary = _summarize_validation_errors(exc)
    logger.warning("Request validation failed", extra={"path": request.url.path, "error": summary})
    return error_response(status.HTTP_400_BAD_REQUEST, INVALID_DATA_MESSAGE, summary)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled error", extra={"path": request.url.path, "requestId": request_id})
    response = error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE, str(exc))
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
