"""
HTTP client for callers of the email relay (site backends, admin tooling, scripts).

Usage:
    from email_relay.services.RelayClient import RelayClient

    client = RelayClient.from_settings()

    await client.send_contact_email({
        "nome": "Ana",
        "email": "ana@example.com",
        "telefone": "21999999999",
        "roteiro": "ilhaPelado",
        "mensagem": "Quero informações",
    })

    await client.send_reply(to="ana@example.com", subject="Re: passeio", message="Olá Ana!")

In development the client talks to the standalone server (``/api/send-email``);
in production it talks to the cloud functions (``/sendEmail``).
"""

import logging
from typing import Any, Dict

import httpx

from email_relay.core.config import get_settings

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Erro desconhecido ao enviar email"


def normalize_base_url(base_url: str = None) -> str:
    if not base_url:
        return ""
    return base_url[:-1] if base_url.endswith("/") else base_url


class RelayClient:
    """Send contact notifications and replies through a running email relay."""

    def __init__(
        self,
        environment: str = "development",
        api_base_url: str = "",
        functions_base_url: str = "",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.environment = environment
        self.api_base_url = normalize_base_url(api_base_url)
        self.functions_base_url = normalize_base_url(functions_base_url)
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "RelayClient":
        settings = get_settings()
        return cls(
            environment=settings.ENVIRONMENT,
            api_base_url=settings.RELAY_API_BASE_URL,
            functions_base_url=settings.RELAY_FUNCTIONS_BASE_URL,
        )

    @property
    def is_development(self) -> bool:
        return self.environment != "production"

    @property
    def email_endpoint(self) -> str:
        if self.is_development:
            return f"{self.api_base_url}/api/send-email"
        return f"{self.functions_base_url}/sendEmail"

    @property
    def reply_endpoint(self) -> str:
        if self.is_development:
            return f"{self.api_base_url}/api/send-reply"
        return f"{self.functions_base_url}/sendReplyEmail"

    async def _post(self, url: str, body: Dict[str, Any]) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=body)

            try:
                payload = response.json()
            except ValueError:
                payload = {"success": False}

            if not response.is_success or not isinstance(payload, dict) or not payload.get("success"):
                error = payload.get("error") if isinstance(payload, dict) else None
                raise RuntimeError(error or f"Erro ao enviar email (HTTP {response.status_code})")

            return {"success": True, "data": payload}
        except Exception as e:
            logger.warning(f"⚠️ [RelayClient] {url} failed: {e}")
            return {"success": False, "error": str(e) or UNKNOWN_ERROR}

    async def send_contact_email(self, form_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Submit the contact form.

        Args:
            form_data: ``nome``, ``email``, ``telefone``, ``roteiro`` and ``mensagem``

        Returns:
            ``{"success": True, "data": <relay response>}`` or ``{"success": False, "error": <message>}``
        """
        return await self._post(self.email_endpoint, form_data)

    async def send_reply(self, to: str, subject: str, message: str) -> Dict[str, Any]:
        """Send an admin reply; same result shape as ``send_contact_email``."""
        return await self._post(self.reply_endpoint, {"to": to, "subject": subject, "message": message})

    async def health(self) -> Dict[str, Any]:
        """Call the standalone server's liveness probe."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(f"{self.api_base_url}/health")
            response.raise_for_status()
            return response.json()
