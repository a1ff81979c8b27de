"""Request middleware for the CalendarHub API."""

import uuid
from collections.abc import Awaitable, Callable

from aiohttp import web

from calendarhub.utils.logging import get_logger, request_id_var

logger = get_logger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def correlation_id_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Extract or generate a correlation id for request tracking.

    Priority: ``X-Request-ID`` header, ``X-Correlation-ID`` header, new UUID.
    The id is stored in a context variable for log records, on the request
    and in the ``X-Request-ID`` response header.
    """
    correlation_id = (
        request.headers.get("X-Request-ID")
        or request.headers.get("X-Correlation-ID")
        or str(uuid.uuid4())
    )

    token = request_id_var.set(correlation_id)
    request["correlation_id"] = correlation_id
    try:
        response = await handler(request)
        logger.debug("%s %s -> %d", request.method, request.path, response.status)
    finally:
        request_id_var.reset(token)

    response.headers["X-Request-ID"] = correlation_id
    return response


def get_request_id() -> str:
    """Current request correlation id, or "no-request-id" outside a request."""
    return request_id_var.get() or "no-request-id"
