import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from email_relay.api.endpoints.email import build_router
from email_relay.constants.constants import HEALTH_PAYLOAD, SERVER_ALLOWED_ORIGINS
from email_relay.core.config import RelayConfig, get_settings
from email_relay.core.cors import ensure_origin_allowed
from email_relay.core.exceptions import ConfigurationError, OriginNotAllowedError
from email_relay.core.ratelimit import build_limiter, rate_limit_exceeded_handler
from email_relay.schemas.emailSchemas import SendResult
from email_relay.services.EmailRelay import build_email_provider
from email_relay.services.ResendClient import ResendClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Async context manager for app lifespan events"""
    logger.info("🚀 Starting Paraty Boat email relay...")
    logger.info(f"🌐 Allowed origins: {', '.join(app.state.relay_config.allowed_origins) or 'none'}")
    logger.info("📧 Resend configurado e pronto para enviar emails")
    try:
        yield
    finally:
        logger.info("👋 Email relay shutdown complete")


def load_relay_config() -> RelayConfig:
    """
    Read the server configuration, refusing to start without a provider key
    or a destination address.

    Raises:
        ConfigurationError: RESEND_API_KEY or CONTACT_EMAIL is not set.
    """
    config = get_settings().relay_config(SERVER_ALLOWED_ORIGINS)
    if not config.resend_api_key:
        logger.critical("❌ RESEND_API_KEY não configurada. Verifique o arquivo .env")
    if not config.contact_email:
        logger.critical("❌ Email de destino não configurado. Configure VITE_CONTACT_EMAIL no .env")
    config.require("resend_api_key", "contact_email")
    return config


def create_app(config: RelayConfig = None, email_provider: ResendClient = None) -> FastAPI:
    """
    Build the standalone email relay application.

    Args:
        config: Relay configuration. Read from the environment when omitted.
        email_provider: Email provider client. Built from the config when omitted.
    """
    settings = get_settings()
    config = config or load_relay_config()

    app = FastAPI(
        title="Paraty Boat Email API",
        description="Relays contact form notifications and admin replies through Resend",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.relay_config = config
    app.state.email_provider = email_provider or build_email_provider(config)

    limiter = build_limiter(enabled=settings.RATE_LIMIT_ENABLED)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    @app.middleware("http")
    async def reject_disallowed_origins(request: Request, call_next):
        origin = request.headers.get("origin")
        try:
            ensure_origin_allowed(origin, config.allowed_origins)
        except OriginNotAllowedError as e:
            logger.warning(f"🚫 {e.message}")
            return JSONResponse(
                status_code=e.status_code,
                content=SendResult.failed(e.message).to_response(),
            )
        return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"Request: {request.method} {request.url}")
        logger.info(f"Origin: {request.headers.get('origin')}")
        response = await call_next(request)
        logger.info(f"Response status: {response.status_code}")
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["Health Check"])
    async def health_check():
        return HEALTH_PAYLOAD

    app.include_router(build_router(limiter))

    logger.info(f"✅ Loaded {len(app.routes)} routes")
    return app


def run():
    """Console entry point: serve the relay with uvicorn."""
    settings = get_settings()
    try:
        app = create_app()
    except ConfigurationError:
        sys.exit(1)

    logger.info(f"🚀 API rodando na porta {settings.EMAIL_SERVER_PORT}")
    uvicorn.run(app, host=settings.EMAIL_SERVER_HOST, port=settings.EMAIL_SERVER_PORT)


if __name__ == "__main__":
    run()
