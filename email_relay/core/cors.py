"""Origin allow-list checks shared by the server middleware and the cloud functions."""

from typing import Optional, Sequence, Tuple

from email_relay.constants.constants import WILDCARD_ORIGIN
from email_relay.core.exceptions import OriginNotAllowedError


def parse_allowed_origins(raw: str) -> Tuple[str, ...]:
    """Split a comma-separated origin list, dropping blanks."""
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def is_origin_allowed(origin: Optional[str], allowed_origins: Sequence[str]) -> bool:
    """
    Check an Origin header against the allow-list.

    Requests without an Origin header (server-to-server, curl) are always allowed.
    """
    if not origin or WILDCARD_ORIGIN in allowed_origins:
        return True
    return origin in allowed_origins


def ensure_origin_allowed(origin: Optional[str], allowed_origins: Sequence[str]) -> None:
    if not is_origin_allowed(origin, allowed_origins):
        raise OriginNotAllowedError(origin)
