"""Exception handlers mapping timeline errors onto the {error, details} response body."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.services.github.exceptions import InvalidRequest, UpstreamError

logger = logging.getLogger(__name__)

# Upstream statuses passed through as-is; anything else becomes a 502
PASSTHROUGH_UPSTREAM_STATUSES = {401, 403, 404, 422, 429}


def error_response(status_code: int, error: str, details: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "details": details})


def upstream_status(exc: UpstreamError) -> int:
    """HTTP status to report for an upstream failure."""
    if exc.status_code in PASSTHROUGH_UPSTREAM_STATUSES:
        return exc.status_code  # type: ignore[return-value]
    return status.HTTP_502_BAD_GATEWAY


async def invalid_request_handler(_request: Request, exc: InvalidRequest) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", exc.message)


async def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Query parameter validation failures are reported like any other invalid request."""
    messages = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error.get("loc", []) if x != "query")
        messages.append(f"{loc}: {error.get('msg', 'Invalid value')}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", "; ".join(messages))


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    logger.warning(
        f"Upstream error on {request.url.path}: {exc.message} (status={exc.status_code})"
    )
    response = error_response(
        upstream_status(exc), "Failed to fetch repository data", exc.message
    )
    if exc.rate_limit_reset is not None:
        response.headers["X-RateLimit-Reset"] = str(exc.rate_limit_reset)
    return response


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidRequest, invalid_request_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(UpstreamError, upstream_error_handler)  # type: ignore[arg-type]
