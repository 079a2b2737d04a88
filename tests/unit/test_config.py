"""Unit tests for settings, origin policy and the response envelope."""

import pydantic
import pytest

from email_relay.constants.constants import (
    DEFAULT_FROM_EMAIL,
    FUNCTION_ALLOWED_ORIGINS,
    SERVER_ALLOWED_ORIGINS,
    route_label,
)
from email_relay.core.config import RelayConfig, Settings
from email_relay.core.cors import ensure_origin_allowed, is_origin_allowed, parse_allowed_origins
from email_relay.core.exceptions import ConfigurationError, OriginNotAllowedError
from email_relay.schemas.emailSchemas import SendResult


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_settings_prefer_vite_prefixed_variables(monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "re_plain")
    monkeypatch.setenv("VITE_RESEND_API_KEY", "re_vite")
    monkeypatch.setenv("CONTACT_EMAIL", "contato@paratyboat.com.br")

    settings = Settings()

    assert settings.RESEND_API_KEY == "re_vite"
    assert settings.CONTACT_EMAIL == "contato@paratyboat.com.br"


@pytest.mark.unit
def test_relay_config_defaults():
    config = Settings().relay_config()

    assert config.resend_api_key is None
    assert config.from_email == DEFAULT_FROM_EMAIL
    assert config.allowed_origins == tuple(SERVER_ALLOWED_ORIGINS)
    assert config.display_timezone == "America/Sao_Paulo"


@pytest.mark.unit
def test_relay_config_uses_variant_default_origins():
    config = Settings().relay_config(FUNCTION_ALLOWED_ORIGINS)

    assert "https://www.paratyboat.com.br" in config.allowed_origins


@pytest.mark.unit
def test_relay_config_reads_origin_list_from_environment(monkeypatch):
    monkeypatch.setenv("EMAIL_ALLOWED_ORIGINS", "https://a.example, https://b.example,,")

    config = Settings().relay_config(FUNCTION_ALLOWED_ORIGINS)

    assert config.allowed_origins == ("https://a.example", "https://b.example")


@pytest.mark.unit
def test_relay_config_is_immutable():
    config = RelayConfig(resend_api_key="re_test")

    with pytest.raises(pydantic.ValidationError):
        config.resend_api_key = "re_other"


@pytest.mark.unit
def test_require_reports_missing_values():
    config = RelayConfig(resend_api_key="re_test")

    config.require("resend_api_key")
    with pytest.raises(ConfigurationError):
        config.require("resend_api_key", "contact_email")


# ---------------------------------------------------------------------------
# Origin policy
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_parse_allowed_origins_strips_blanks():
    assert parse_allowed_origins(" http://a , ,http://b,") == ("http://a", "http://b")
    assert parse_allowed_origins("") == ()


@pytest.mark.unit
@pytest.mark.parametrize(
    "origin, allowed, expected",
    [
        (None, ("http://localhost:8080",), True),
        ("", ("http://localhost:8080",), True),
        ("http://localhost:8080", ("http://localhost:8080",), True),
        ("http://evil.example", ("http://localhost:8080",), False),
        ("http://evil.example", ("*",), True),
        ("http://localhost:8080", (), False),
    ],
)
def test_is_origin_allowed(origin, allowed, expected):
    assert is_origin_allowed(origin, allowed) is expected


@pytest.mark.unit
def test_ensure_origin_allowed_raises_with_origin_in_message():
    with pytest.raises(OriginNotAllowedError) as exc:
        ensure_origin_allowed("http://evil.example", ("http://localhost:8080",))

    assert exc.value.message == "Origin http://evil.example não permitido"
    assert exc.value.status_code == 403


# ---------------------------------------------------------------------------
# Route labels and SendResult
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_route_label_lookup_and_passthrough():
    assert route_label("sacoMamangua") == "Saco do Mamanguá"
    assert route_label("praiaCrepusculo") == "Praia do Crepúsculo"
    assert route_label("passeioNoturno") == "passeioNoturno"


@pytest.mark.unit
def test_send_result_omits_absent_fields():
    assert SendResult.failed("erro").to_response() == {"success": False, "error": "erro"}
    assert SendResult.sent("abc", "ok").to_response() == {"success": True, "message": "ok", "id": "abc"}


@pytest.mark.unit
@pytest.mark.parametrize(
    "fields",
    [
        {"success": True, "id": "abc", "error": "erro"},
        {"success": True},
        {"success": False},
        {"success": False, "error": "erro", "id": "abc"},
    ],
)
def test_send_result_rejects_inconsistent_envelopes(fields):
    with pytest.raises(pydantic.ValidationError):
        SendResult(**fields)
