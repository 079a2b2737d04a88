"""
Cloud Functions entry points for the email relay.

Deploy each entry point from this file, e.g.::

    gcloud functions deploy sendEmail --entry-point send_email ...
    gcloud functions deploy sendReplyEmail --entry-point send_reply_email ...
"""

import asyncio
import logging
import sys
from functools import lru_cache

import flask
import functions_framework
from google.cloud.logging_v2.handlers import StructuredLogHandler

from email_relay.constants.constants import FUNCTION_ALLOWED_ORIGINS, METHOD_NOT_ALLOWED
from email_relay.core.config import RelayConfig, get_settings
from email_relay.core.cors import ensure_origin_allowed
from email_relay.core.exceptions import OriginNotAllowedError
from email_relay.schemas.emailSchemas import SendResult
from email_relay.services.EmailRelay import (
    build_email_provider,
    relay,
    send_contact_notification,
    send_reply,
)
from email_relay.services.ResendClient import ResendClient


def setup_structured_logging():
    """Configures a single structured logger for the functions runtime."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(StructuredLogHandler(stream=sys.stdout))


setup_structured_logging()
logger = logging.getLogger(__name__)


@lru_cache
def get_relay_config() -> RelayConfig:
    return get_settings().relay_config(FUNCTION_ALLOWED_ORIGINS)


@lru_cache
def get_email_provider() -> ResendClient:
    return build_email_provider(get_relay_config())


def _cors_headers(origin: str) -> dict:
    if not origin:
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Vary": "Origin",
    }


def _handle(request: flask.Request, operation):
    origin = request.headers.get("Origin")
    config = get_relay_config()
    logger.info(
        "📧 Recebida requisição",
        extra={"json_fields": {"method": request.method, "origin": origin, "function": operation.__name__}},
    )

    try:
        ensure_origin_allowed(origin, config.allowed_origins)
    except OriginNotAllowedError as e:
        logger.warning(f"🚫 {e.message}")
        return SendResult.failed(e.message).to_response(), e.status_code, {}

    headers = _cors_headers(origin)

    if request.method == "OPTIONS":
        headers.update({
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": request.headers.get("Access-Control-Request-Headers", "Content-Type"),
            "Access-Control-Max-Age": "3600",
        })
        return "", 204, headers

    if request.method != "POST":
        return SendResult.failed(METHOD_NOT_ALLOWED).to_response(), 405, headers

    payload = request.get_json(silent=True)
    status_code, result = asyncio.run(relay(operation, payload, config, get_email_provider()))
    return result.to_response(), status_code, headers


@functions_framework.http
def send_email(request: flask.Request):
    """HTTP function ``sendEmail``: notify the operator about a contact form submission."""
    return _handle(request, send_contact_notification)


@functions_framework.http
def send_reply_email(request: flask.Request):
    """HTTP function ``sendReplyEmail``: send an administrator's reply to a customer."""
    return _handle(request, send_reply)
