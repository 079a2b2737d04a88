"""Per-client rate limiting for the send endpoints."""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from email_relay.constants.constants import RATE_LIMITED
from email_relay.core.config import get_settings
from email_relay.schemas.emailSchemas import SendResult


def build_limiter(enabled: bool = True) -> Limiter:
    """
    Create the limiter for one application instance.

    Each limiter keeps its own in-memory counters, so separate apps never
    share rate-limit state.
    """
    return Limiter(key_func=get_remote_address, enabled=enabled)


def send_rate_limit() -> str:
    """Limit string for the send endpoints, e.g. ``20/minute``."""
    return get_settings().SEND_RATE_LIMIT


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content=SendResult.failed(RATE_LIMITED).to_response(),
    )
