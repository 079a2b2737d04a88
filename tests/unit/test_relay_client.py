"""Unit tests for the relay HTTP client."""

import httpx
import pytest

from email_relay.services.RelayClient import RelayClient, normalize_base_url


def _client(handler, environment="development") -> RelayClient:
    return RelayClient(
        environment=environment,
        api_base_url="http://localhost:3001/",
        functions_base_url="https://us-central1-paraty-boat.cloudfunctions.net",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.unit
def test_normalize_base_url():
    assert normalize_base_url(None) == ""
    assert normalize_base_url("http://localhost:3001/") == "http://localhost:3001"
    assert normalize_base_url("http://localhost:3001") == "http://localhost:3001"


@pytest.mark.unit
def test_endpoints_follow_environment():
    dev = _client(lambda r: httpx.Response(200))
    prod = _client(lambda r: httpx.Response(200), environment="production")

    assert dev.email_endpoint == "http://localhost:3001/api/send-email"
    assert dev.reply_endpoint == "http://localhost:3001/api/send-reply"
    assert prod.email_endpoint == "https://us-central1-paraty-boat.cloudfunctions.net/sendEmail"
    assert prod.reply_endpoint == "https://us-central1-paraty-boat.cloudfunctions.net/sendReplyEmail"


@pytest.mark.unit
def test_from_settings(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")

    client = RelayClient.from_settings()

    assert client.email_endpoint.endswith("/sendEmail")


@pytest.mark.asyncio
@pytest.mark.unit
async def test_send_contact_email_success(contact_payload):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/send-email"
        return httpx.Response(200, json={"success": True, "message": "Email enviado com sucesso!", "id": "abc"})

    result = await _client(handler).send_contact_email(contact_payload)

    assert result == {
        "success": True,
        "data": {"success": True, "message": "Email enviado com sucesso!", "id": "abc"},
    }


@pytest.mark.asyncio
@pytest.mark.unit
async def test_server_error_message_is_surfaced():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/sendReplyEmail"
        return httpx.Response(500, json={"success": False, "error": "domain not verified"})

    result = await _client(handler, environment="production").send_reply("c@x.com", "Re", "Oi")

    assert result == {"success": False, "error": "domain not verified"}


@pytest.mark.asyncio
@pytest.mark.unit
async def test_unreadable_error_uses_status(contact_payload):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad gateway</html>")

    result = await _client(handler).send_contact_email(contact_payload)

    assert result == {"success": False, "error": "Erro ao enviar email (HTTP 502)"}


@pytest.mark.asyncio
@pytest.mark.unit
async def test_unsuccessful_payload_with_200_is_a_failure(contact_payload):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False})

    result = await _client(handler).send_contact_email(contact_payload)

    assert result == {"success": False, "error": "Erro ao enviar email (HTTP 200)"}


@pytest.mark.asyncio
@pytest.mark.unit
async def test_transport_failure_is_reported(contact_payload):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await _client(handler).send_contact_email(contact_payload)

    assert result == {"success": False, "error": "connection refused"}


@pytest.mark.asyncio
@pytest.mark.unit
async def test_health():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/health"
        return httpx.Response(200, json={"status": "OK", "message": "API funcionando!"})

    assert await _client(handler).health() == {"status": "OK", "message": "API funcionando!"}
