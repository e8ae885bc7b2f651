"""Request id tracing for the API."""

import time
import uuid
from typing import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


def resolve_request_id(request: Request) -> str:
    """The caller's X-Request-ID when it is usable, otherwise a new UUID4."""
    incoming = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.isprintable():
        return incoming
    return str(uuid.uuid4())


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with a request id.

    The id is bound to the structlog context while the request runs, so
    classifier and loader events carry it too, and it is echoed back in
    the X-Request-ID response header.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = resolve_request_id(request)
        start_time = time.perf_counter()

        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("Request failed", duration_ms=_elapsed_ms(start_time))
                raise

            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(start_time),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
