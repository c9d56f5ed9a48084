"""Request tracing for the table QA HTTP layer."""

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Probe endpoints hit every few seconds; their start/end lines are noise.
QUIET_PATHS = frozenset({"/health", "/metrics"})


def _request_id_for(request: Request) -> str:
    """Reuse a caller-supplied request ID when it looks sane, else mint one."""
    incoming = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if incoming and len(incoming) <= 128 and incoming.isprintable():
        return incoming
    return uuid.uuid4().hex


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Bind a request ID to the structlog context for the lifetime of a request.

    The ID is echoed back in the X-Request-ID response header so a client can
    quote it when reporting a failed question. Query strings are never logged.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        request_id = _request_id_for(request)
        path = request.url.path
        quiet = path in QUIET_PATHS

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error while serving request",
                elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise
        else:
            if not quiet or response.status_code >= 400:
                logger.info(
                    "Request served",
                    status_code=response.status_code,
                    elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()
