from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from email_relay.core.config import RelayConfig, get_settings
from email_relay.main import create_app
from email_relay.services.ResendClient import ResendResponse

RELAY_ENV_VARS = [
    "RESEND_API_KEY",
    "VITE_RESEND_API_KEY",
    "CONTACT_EMAIL",
    "VITE_CONTACT_EMAIL",
    "RESEND_FROM_EMAIL",
    "RESEND_REPLY_FROM_EMAIL",
    "EMAIL_ALLOWED_ORIGINS",
    "SEND_RATE_LIMIT",
    "ENVIRONMENT",
]

CONTACT_PAYLOAD = {
    "nome": "Ana",
    "email": "ana@x.com",
    "telefone": "21999999999",
    "roteiro": "ilhaPelado",
    "mensagem": "Quero informações",
}

REPLY_PAYLOAD = {
    "to": "cliente@x.com",
    "subject": "Re: dúvida",
    "message": "Segue resposta",
}


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Each test starts from an environment without relay configuration."""
    for name in RELAY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def relay_config():
    return RelayConfig(
        resend_api_key="re_test_key",
        contact_email="reservas@paratyboat.com.br",
        allowed_origins=("http://localhost:8080", "https://paratyboat.com.br"),
    )


@pytest.fixture
def email_provider():
    """Provider stub that accepts every message."""
    provider = AsyncMock()
    provider.send_email = AsyncMock(return_value=ResendResponse(data={"id": "email_123"}))
    return provider


@pytest.fixture
def app(relay_config, email_provider):
    return create_app(relay_config, email_provider=email_provider)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def contact_payload():
    return dict(CONTACT_PAYLOAD)


@pytest.fixture
def reply_payload():
    return dict(REPLY_PAYLOAD)
