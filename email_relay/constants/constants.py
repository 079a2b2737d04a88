"""Constants for tour routes, sender addresses, allowed origins and response messages."""

from enum import Enum


class RouteKey(str, Enum):
    """Enumeration of the boat tour routes offered on the contact form."""

    saco_mamangua = "sacoMamangua"
    ilha_pelado = "ilhaPelado"
    ilha_cedro = "ilhaCedro"
    ilha_malvao = "ilhaMalvao"
    praia_ventura = "praiaVentura"
    praia_sobrado = "praiaSobrado"
    praia_engenho = "praiaEngenho"
    praia_crepusculo = "praiaCrepusculo"
    outro = "outro"


ROUTE_LABELS = {
    RouteKey.saco_mamangua.value: "Saco do Mamanguá",
    RouteKey.ilha_pelado.value: "Ilha do Pelado",
    RouteKey.ilha_cedro.value: "Ilha do Cedro",
    RouteKey.ilha_malvao.value: "Ilha Malvão",
    RouteKey.praia_ventura.value: "Praia Ventura",
    RouteKey.praia_sobrado.value: "Praia do Sobrado",
    RouteKey.praia_engenho.value: "Praia do Engenho",
    RouteKey.praia_crepusculo.value: "Praia do Crepúsculo",
    RouteKey.outro.value: "Outro",
}


def route_label(route_key: str) -> str:
    """Return the display label for a route code, or the code itself when unknown."""
    return ROUTE_LABELS.get(route_key) or route_key


# ------------------------------
# Senders
# ------------------------------
DEFAULT_FROM_EMAIL = "ParatyBoat <onboarding@resend.dev>"
DEFAULT_REPLY_FROM_EMAIL = "Paraty Boat <contato@paratyboat.com.br>"

# Provider responses without a message id
FALLBACK_EMAIL_ID = "unknown"

# ------------------------------
# CORS
# ------------------------------
WILDCARD_ORIGIN = "*"

SERVER_ALLOWED_ORIGINS = [
    "http://localhost:8080",
    "http://localhost:8081",
]

FUNCTION_ALLOWED_ORIGINS = [
    "https://paraty-boat.web.app",
    "https://paraty-boat.firebaseapp.com",
    "https://paratyboat.com.br",
    "https://www.paratyboat.com.br",
    "http://paratyboat.com.br",
    "http://www.paratyboat.com.br",
    "http://localhost:8080",
    "http://localhost:8081",
    "http://localhost:5173",
]

# ------------------------------
# Response messages
# ------------------------------
CONTACT_FIELDS_REQUIRED = "Todos os campos são obrigatórios"
REPLY_FIELDS_REQUIRED = "Destinatário, assunto e mensagem são obrigatórios"
CONTACT_SENT = "Email enviado com sucesso!"
REPLY_SENT = "Resposta enviada com sucesso!"
METHOD_NOT_ALLOWED = "Método não permitido"
SERVER_MISCONFIGURED = "Configuração do servidor incompleta"
INTERNAL_ERROR = "Erro interno do servidor"
RATE_LIMITED = "Muitas requisições. Tente novamente em instantes"

HEALTH_PAYLOAD = {"status": "OK", "message": "API funcionando!"}
