"""
Relay core shared by the FastAPI server and the cloud functions.

Both operations validate a decoded JSON body, render a template and hand the
message to the email provider once. ``relay`` is the handler boundary: it turns
every outcome into an HTTP status and a ``SendResult`` envelope.
"""

import logging
from typing import Any, Awaitable, Callable, Tuple

from email_relay.constants.constants import (
    CONTACT_SENT,
    FALLBACK_EMAIL_ID,
    INTERNAL_ERROR,
    REPLY_SENT,
    route_label,
)
from email_relay.core.config import RelayConfig
from email_relay.core.exceptions import ProviderSendError, RelayError, ValidationError
from email_relay.schemas.emailSchemas import (
    ContactNotificationRequest,
    ContactNotificationView,
    ReplyRequest,
    ReplyView,
    SendResult,
)
from email_relay.services.EmailTemplates import (
    format_sent_at,
    render_contact_notification,
    render_reply,
)
from email_relay.services.ResendClient import ResendClient, ResendResponse

logger = logging.getLogger(__name__)

Operation = Callable[[Any, RelayConfig, ResendClient], Awaitable[SendResult]]


def build_email_provider(config: RelayConfig) -> ResendClient:
    """Create the Resend client for a relay configuration."""
    return ResendClient(
        api_key=config.resend_api_key,
        base_url=config.resend_api_url,
        timeout=config.resend_timeout,
    )


def _email_id(response: ResendResponse) -> str:
    if response.error:
        raise ProviderSendError(
            response.error.message,
            name=response.error.name,
            status_code=response.error.status_code,
        )
    email_id = response.email_id
    return str(email_id) if email_id else FALLBACK_EMAIL_ID


async def send_contact_notification(payload: Any, config: RelayConfig, provider: ResendClient) -> SendResult:
    """
    Forward a contact form submission to the operator's inbox.

    Args:
        payload: Decoded JSON body with ``nome``, ``email``, ``telefone``, ``roteiro`` and ``mensagem``
        config: Relay configuration (needs the API key and the contact address)
        provider: Email provider client

    Returns:
        SendResult with the provider's message id

    Raises:
        ValidationError: a required field is missing
        ConfigurationError: the server is not configured to send
        ProviderSendError: the provider refused the message
    """
    request = ContactNotificationRequest.from_payload(payload)
    logger.info("✅ Dados validados, enviando email...")
    config.require("resend_api_key", "contact_email")

    view = ContactNotificationView(
        name=request.name,
        email=request.email,
        phone=request.phone,
        route_label=route_label(request.route_key),
        message=request.message,
        sent_at=format_sent_at(timezone=config.display_timezone),
    )

    response = await provider.send_email(
        from_email=config.from_email,
        to_emails=[config.contact_email],
        subject=f"🛥️ Novo Contato - {request.name}",
        body_html=render_contact_notification(view),
        reply_to=request.email,
    )
    email_id = _email_id(response)

    logger.info(f"✅ Email {email_id} enviado com sucesso para {config.contact_email}")
    return SendResult.sent(email_id, CONTACT_SENT)


async def send_reply(payload: Any, config: RelayConfig, provider: ResendClient) -> SendResult:
    """Send an administrator's reply to a customer."""
    request = ReplyRequest.from_payload(payload)
    logger.info("✅ Dados validados, enviando resposta...")
    config.require("resend_api_key")

    response = await provider.send_email(
        from_email=config.reply_from_email,
        to_emails=[request.to],
        subject=request.subject,
        body_html=render_reply(ReplyView(message=request.message)),
    )
    email_id = _email_id(response)

    logger.info(f"✅ Resposta {email_id} enviada com sucesso para {request.to}")
    return SendResult.sent(email_id, REPLY_SENT)


async def relay(
    operation: Operation,
    payload: Any,
    config: RelayConfig,
    provider: ResendClient,
) -> Tuple[int, SendResult]:
    """
    Run a send operation and map its outcome to an HTTP status and envelope.

    Returns:
        (200, success result), (400, validation failure) or (500, any other failure)
    """
    logger.info(f"📧 Recebida requisição: {operation.__name__}")
    try:
        result = await operation(payload, config, provider)
        return 200, result
    except ValidationError as e:
        logger.warning(f"❌ Dados obrigatórios ausentes: {e.message}")
        return e.status_code, SendResult.failed(e.message)
    except ProviderSendError as e:
        logger.error(f"❌ Resend retornou erro: {e.message}")
        return e.status_code, SendResult.failed(e.message)
    except RelayError as e:
        logger.error(f"❌ {e.message}")
        return e.status_code, SendResult.failed(e.message)
    except Exception as e:
        logger.exception(f"❌ Erro ao enviar email: {e}")
        return 500, SendResult.failed(str(e) or INTERNAL_ERROR)
