"""
Email relay health check.

Checks the .env file, the relay's environment variables, the Resend API key
and, optionally, a running relay server.

Usage:
    python scripts/health_check.py [--relay-url http://localhost:3001]
"""

import argparse
import asyncio
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

import httpx

from email_relay.services.RelayClient import RelayClient
from email_relay.services.ResendClient import ResendClient

PLACEHOLDER_API_KEY = "re_YOUR_RESEND_API_KEY_HERE"

REQUIRED_VARS = [
    ("RESEND_API_KEY", "VITE_RESEND_API_KEY"),
    ("CONTACT_EMAIL", "VITE_CONTACT_EMAIL"),
]
OPTIONAL_VARS = [
    "RESEND_FROM_EMAIL",
    "RESEND_REPLY_FROM_EMAIL",
    "EMAIL_ALLOWED_ORIGINS",
    "EMAIL_SERVER_PORT",
]


@dataclass
class CheckResult:
    name: str
    status: str  # success | warning | error
    message: str
    details: Optional[str] = None


def mask(value: str) -> str:
    return value[:8] + "*" * max(0, len(value) - 8)


def check_env_file(path: str) -> CheckResult:
    if os.path.exists(path):
        return CheckResult("Arquivo .env", "success", "Encontrado", path)
    return CheckResult("Arquivo .env", "error", "Não encontrado", "Crie o arquivo .env com base no .env.example")


def check_env_var(names, required: bool = True) -> CheckResult:
    """Check one variable (or the first set of several alternative names)."""
    names = (names,) if isinstance(names, str) else tuple(names)
    label = " / ".join(names)
    value = next((os.environ[n] for n in names if os.environ.get(n)), None)

    if not value and required:
        return CheckResult(label, "error", "Não definida", "Esta variável é obrigatória para o funcionamento do sistema")
    if not value:
        return CheckResult(label, "warning", "Não definida (opcional)")
    return CheckResult(label, "success", "Configurada", f"Valor: {mask(value)}")


async def check_resend(api_key: Optional[str], client: ResendClient = None) -> CheckResult:
    if not api_key or api_key == PLACEHOLDER_API_KEY:
        return CheckResult(
            "Resend API", "warning",
            "API Key não configurada ou é placeholder",
            "Configure sua API key do Resend para envio de emails",
        )

    client = client or ResendClient(api_key=api_key)
    try:
        response = await client.list_domains()
    except httpx.HTTPError as e:
        return CheckResult("Resend API", "warning", "Erro ao conectar", str(e) or "Erro desconhecido")

    if response.error and response.error.status_code == 401:
        return CheckResult("Resend API", "error", "API Key inválida", "Verifique sua API key no dashboard do Resend")
    if response.error:
        return CheckResult(
            "Resend API", "warning",
            f"Resposta inesperada: {response.error.status_code}",
            "Verifique a configuração do Resend",
        )

    domains = response.data.get("data", []) if isinstance(response.data, dict) else []
    return CheckResult("Resend API", "success", "Conectado com sucesso", f"Domínios configurados: {len(domains)}")


async def check_relay(client: RelayClient) -> CheckResult:
    try:
        payload = await client.health()
    except httpx.HTTPError as e:
        return CheckResult("Relay /health", "error", "Servidor indisponível", str(e))
    except ValueError:
        payload = None

    if not isinstance(payload, dict):
        return CheckResult("Relay /health", "error", "Resposta inválida", "O endpoint /health não retornou um objeto JSON")
    return CheckResult("Relay /health", "success", payload.get("message", "OK"), client.api_base_url)


async def run_checks(relay_url: Optional[str] = None, env_path: str = ".env") -> List[CheckResult]:
    results = [check_env_file(env_path)]
    results += [check_env_var(names, required=True) for names in REQUIRED_VARS]
    results += [check_env_var(name, required=False) for name in OPTIONAL_VARS]

    api_key = os.environ.get("VITE_RESEND_API_KEY") or os.environ.get("RESEND_API_KEY")
    results.append(await check_resend(api_key))

    if relay_url:
        results.append(await check_relay(RelayClient(api_base_url=relay_url)))
    return results


def print_report(results: List[CheckResult]) -> int:
    icons = {"success": "✅", "warning": "⚠️", "error": "❌"}
    print("═" * 60)
    print("  Email relay health check")
    print("═" * 60)
    for result in results:
        print(f"  {icons[result.status]} {result.name}: {result.message}")
        if result.details:
            print(f"     └─ {result.details}")

    failed = sum(1 for r in results if r.status == "error")
    warnings = sum(1 for r in results if r.status == "warning")
    passed = len(results) - failed - warnings
    print("─" * 60)
    print(f"  Total: {len(results)} | ✅ {passed} | ⚠️ {warnings} | ❌ {failed}")
    return 1 if failed else 0


def main():
    parser = argparse.ArgumentParser(description="Check the email relay configuration")
    parser.add_argument("--relay-url", help="Base URL of a running relay server to probe")
    parser.add_argument("--env-file", default=".env")
    args = parser.parse_args()

    results = asyncio.run(run_checks(relay_url=args.relay_url, env_path=args.env_file))
    sys.exit(print_report(results))


if __name__ == "__main__":
    main()
