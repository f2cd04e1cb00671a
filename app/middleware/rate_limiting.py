# app/middleware/rate_limiting.py - Shared rate limiter
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from loguru import logger

from app.core.config import settings
from app.core.tracing import get_current_trace_id

# One limiter for the whole app; route decorators and app.state share it
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.DEFAULT_RATE_LIMIT],
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    client_ip = get_remote_address(request)
    trace_id = get_current_trace_id()

    logger.warning(f"Rate limit exceeded | ip={client_ip} | path={request.url.path}")

    return JSONResponse(
        status_code=429,
        content={
            "detail": f"Rate limit exceeded: {exc.detail}",
            "status_code": 429,
            "trace_id": trace_id,
        },
        headers={"X-Trace-ID": trace_id},
    )
