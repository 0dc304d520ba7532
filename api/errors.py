"""
Exception handlers rendering every failure as `{"error": {"status", "message"}}`.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from movies_backend.errors import PageValidationError
from movies_backend.integrations.tmdb.client import TmdbClientError, TmdbConfigurationError

logger = logging.getLogger(__name__)


def error_response(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": {"status": status, "message": message}})


async def page_validation_error_handler(request: Request, exc: PageValidationError) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc)
    return error_response(exc.status_code, str(exc))


async def tmdb_configuration_error_handler(request: Request, exc: TmdbConfigurationError) -> JSONResponse:
    logger.error("TMDb is not configured: %s", exc)
    return error_response(exc.status_code, str(exc))


async def tmdb_client_error_handler(request: Request, exc: TmdbClientError) -> JSONResponse:
    status = exc.status_code or 502
    if status >= 500:
        logger.error("TMDb request for %s failed (HTTP %s): %s", request.url.path, status, exc)
    else:
        logger.warning("TMDb request for %s failed (HTTP %s): %s", request.url.path, status, exc)
    return error_response(status, str(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("query", "path"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    message = "; ".join(parts) or "Invalid request"
    logger.info("Validation error on %s: %s", request.url.path, message)
    return error_response(400, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
    return error_response(500, "Internal Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PageValidationError, page_validation_error_handler)
    app.add_exception_handler(TmdbConfigurationError, tmdb_configuration_error_handler)
    app.add_exception_handler(TmdbClientError, tmdb_client_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
