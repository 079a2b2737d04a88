import logging
from functools import lru_cache
from typing import Optional, Sequence, Tuple

from dotenv import load_dotenv
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from email_relay.constants.constants import (
    DEFAULT_FROM_EMAIL,
    DEFAULT_REPLY_FROM_EMAIL,
    SERVER_ALLOWED_ORIGINS,
)
from email_relay.core.cors import parse_allowed_origins
from email_relay.core.exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv(".env")
logger = logging.getLogger(__name__)


class RelayConfig(BaseModel):
    """Immutable configuration handed to the relay core and its HTTP adapters."""

    model_config = ConfigDict(frozen=True)

    resend_api_key: Optional[str] = None
    contact_email: Optional[str] = None
    from_email: str = DEFAULT_FROM_EMAIL
    reply_from_email: str = DEFAULT_REPLY_FROM_EMAIL
    allowed_origins: Tuple[str, ...] = tuple(SERVER_ALLOWED_ORIGINS)
    resend_api_url: str = "https://api.resend.com"
    resend_timeout: float = 30.0
    display_timezone: str = "America/Sao_Paulo"

    def require(self, *fields: str) -> None:
        """
        Make sure the given fields are set.

        Raises:
            ConfigurationError: if any of the fields is empty.
        """
        missing = [name for name in fields if not getattr(self, name)]
        if missing:
            logger.error(f"❌ Variáveis de ambiente não configuradas: {', '.join(missing)}")
            raise ConfigurationError()


class Settings(BaseSettings):
    """Class to store all the settings of the email relay."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------
    # Resend - Required
    # ------------------------------
    RESEND_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("VITE_RESEND_API_KEY", "RESEND_API_KEY"),
    )
    CONTACT_EMAIL: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("VITE_CONTACT_EMAIL", "CONTACT_EMAIL"),
    )

    # ------------------------------
    # Resend - Optional with defaults
    # ------------------------------
    RESEND_FROM_EMAIL: str = DEFAULT_FROM_EMAIL
    RESEND_REPLY_FROM_EMAIL: str = DEFAULT_REPLY_FROM_EMAIL
    RESEND_API_URL: str = "https://api.resend.com"
    RESEND_TIMEOUT_SECONDS: float = 30.0
    DISPLAY_TIMEZONE: str = "America/Sao_Paulo"

    # ------------------------------
    # Server
    # ------------------------------
    EMAIL_ALLOWED_ORIGINS: Optional[str] = None
    EMAIL_SERVER_HOST: str = "0.0.0.0"
    EMAIL_SERVER_PORT: int = 3001
    SEND_RATE_LIMIT: str = "20/minute"
    RATE_LIMIT_ENABLED: bool = True

    # ------------------------------
    # Relay client
    # ------------------------------
    ENVIRONMENT: str = "development"
    RELAY_API_BASE_URL: str = "http://localhost:3001"
    RELAY_FUNCTIONS_BASE_URL: str = "https://us-central1-paraty-boat.cloudfunctions.net"

    def relay_config(self, default_origins: Sequence[str] = SERVER_ALLOWED_ORIGINS) -> RelayConfig:
        """
        Build the relay configuration from the environment.

        Args:
            default_origins: Allow-list used when EMAIL_ALLOWED_ORIGINS is not set.
                The standalone server and the cloud functions ship different defaults.
        """
        if self.EMAIL_ALLOWED_ORIGINS is not None:
            origins = parse_allowed_origins(self.EMAIL_ALLOWED_ORIGINS)
        else:
            origins = tuple(default_origins)

        return RelayConfig(
            resend_api_key=self.RESEND_API_KEY or None,
            contact_email=self.CONTACT_EMAIL or None,
            from_email=self.RESEND_FROM_EMAIL,
            reply_from_email=self.RESEND_REPLY_FROM_EMAIL,
            allowed_origins=origins,
            resend_api_url=self.RESEND_API_URL,
            resend_timeout=self.RESEND_TIMEOUT_SECONDS,
            display_timezone=self.DISPLAY_TIMEZONE,
        )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once."""
    return Settings()
