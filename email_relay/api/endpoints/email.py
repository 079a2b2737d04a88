import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter

from email_relay.core.ratelimit import send_rate_limit
from email_relay.services.EmailRelay import relay, send_contact_notification, send_reply

logger = logging.getLogger(__name__)


async def _read_payload(request: Request) -> Any:
    """Decode the JSON body; unreadable bodies are treated as empty."""
    try:
        return await request.json()
    except ValueError:
        logger.warning("⚠️ Corpo da requisição não é JSON válido")
        return {}


async def _relay(request: Request, operation) -> JSONResponse:
    payload = await _read_payload(request)
    status_code, result = await relay(
        operation,
        payload,
        request.app.state.relay_config,
        request.app.state.email_provider,
    )
    return JSONResponse(status_code=status_code, content=result.to_response())


def build_router(limiter: Limiter) -> APIRouter:
    """Create the send routes, rate limited by the application's limiter."""
    router = APIRouter(prefix="/api", tags=["Email"])

    @router.post("/send-email")
    @limiter.limit(send_rate_limit)
    async def send_email(request: Request):
        """Notify the operator about a contact form submission."""
        return await _relay(request, send_contact_notification)

    @router.post("/send-reply")
    @limiter.limit(send_rate_limit)
    async def send_reply_email(request: Request):
        """Send an administrator's reply to a customer."""
        return await _relay(request, send_reply)

    return router
