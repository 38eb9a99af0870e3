import time
from collections.abc import Awaitable, Callable
from urllib.parse import unquote

import structlog
from fastapi import Request, Response

logger = structlog.get_logger()


async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Log method, decoded path, status and duration of every request."""
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "request_completed",
        method=request.method,
        path=unquote(request.url.path),
        query=request.url.query or None,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return response
