"""Resend client for transactional email."""

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ResendError(BaseModel):
    """Error object returned by the Resend API."""

    message: str
    name: Optional[str] = None
    status_code: Optional[int] = None


class ResendResponse(BaseModel):
    """Outcome of a Resend call: either ``data`` or ``error`` is set."""

    data: Optional[Any] = None
    error: Optional[ResendError] = None

    @property
    def email_id(self) -> Optional[str]:
        if isinstance(self.data, dict):
            return self.data.get("id")
        return None


class ResendClient:
    """
    Minimal async client for the Resend REST API.

    API-level failures (invalid sender domain, rate limit, bad key) come back as
    a ``ResendResponse`` with ``error`` set. Transport failures are raised as
    ``httpx`` exceptions.
    """

    BASE_URL = "https://api.resend.com"

    def __init__(
        self,
        api_key: str,
        base_url: str = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=self.timeout,
            transport=self._transport,
        )

    @staticmethod
    def _parse(response: httpx.Response) -> ResendResponse:
        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_success:
            return ResendResponse(data=body)

        if isinstance(body, dict) and body.get("message"):
            error = ResendError(
                message=body["message"],
                name=body.get("name"),
                status_code=body.get("statusCode", response.status_code),
            )
        else:
            error = ResendError(
                message=response.text or f"HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return ResendResponse(error=error)

    async def send_email(
        self,
        from_email: str,
        to_emails: list[str],
        subject: str,
        body_html: str,
        reply_to: str = None,
    ) -> ResendResponse:
        """
        Send one email.

        Args:
            from_email: Sender, e.g. ``"ParatyBoat <onboarding@resend.dev>"``
            to_emails: Recipient addresses
            subject: Email subject
            body_html: HTML body
            reply_to: Address replies should go to (optional)

        Returns:
            ResendResponse with ``data["id"]`` on success or ``error`` on failure
        """
        message = {
            "from": from_email,
            "to": to_emails,
            "subject": subject,
            "html": body_html,
        }
        if reply_to:
            message["reply_to"] = reply_to

        async with self._client() as client:
            response = await client.post("/emails", json=message)

        result = self._parse(response)
        if result.error:
            logger.warning(f"⚠️ [Resend] Send rejected: {response.status_code} - {result.error.message}")
        else:
            logger.info(f"✅ [Resend] Email accepted for {', '.join(to_emails)} (reply-to: {reply_to or 'none'})")
        return result

    async def list_domains(self) -> ResendResponse:
        """List the sending domains configured for the API key."""
        async with self._client() as client:
            response = await client.get("/domains")
        return self._parse(response)
