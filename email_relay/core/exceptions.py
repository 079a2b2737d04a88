"""Errors raised by the email relay and the HTTP status each one maps to."""

from email_relay.constants.constants import INTERNAL_ERROR, SERVER_MISCONFIGURED


class RelayError(Exception):
    """Base class for errors that end a relay request with a failure envelope."""

    status_code = 500
    default_message = INTERNAL_ERROR

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RelayError):
    """One or more required fields are missing from the request body."""

    status_code = 400


class OriginNotAllowedError(RelayError):
    """The request's Origin header is not in the configured allow-list."""

    status_code = 403

    def __init__(self, origin: str):
        self.origin = origin
        super().__init__(f"Origin {origin} não permitido")


class ConfigurationError(RelayError):
    """Required server configuration (API key, destination address) is missing."""

    default_message = SERVER_MISCONFIGURED


class ProviderSendError(RelayError):
    """The email provider answered with an error object instead of a message id."""

    def __init__(self, message: str = None, name: str = None, status_code: int = None):
        self.provider_name = name
        self.provider_status = status_code
        super().__init__(message)
