"""
Bearer-token authentication for the HTTP transport.

A single shared secret is configured (N8N_MCP_AUTH_TOKEN / AUTH_TOKEN or
security.auth_token). There are no users or roles: a request either presents
the secret or is rejected.
"""

from __future__ import annotations

from mcp_n8n.config import SecurityConfig
from mcp_n8n.errors import UnauthenticatedError
from mcp_n8n.logging import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "

UNAUTHORIZED_MESSAGE = "Unauthorized - Valid Bearer token required"


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Pull the token out of an Authorization header value.

    Returns:
        The stripped token, or None when the header is absent or not a
        Bearer credential.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX) :].strip()


class BearerTokenAuthenticator:
    """
    Compares the presented bearer token with the configured secret.

    With no secret configured every request is rejected.
    """

    def __init__(self, token: str | None) -> None:
        self._token = token

    @classmethod
    def from_config(cls, config: SecurityConfig) -> BearerTokenAuthenticator:
        return cls(token=config.auth_token)

    @property
    def configured(self) -> bool:
        return self._token is not None

    def authenticate(self, authorization: str | None) -> None:
        """
        Check an Authorization header value.

        Raises:
            UnauthenticatedError: If the header is missing, malformed, or
                carries the wrong token.
        """
        presented = extract_bearer_token(authorization)

        if presented is None:
            reason = "missing_token" if not authorization else "not_bearer"
        elif self._token is None:
            reason = "no_token_configured"
        elif presented != self._token:
            reason = "invalid_token"
        else:
            return

        logger.warning("Rejected unauthenticated request", extra={"reason": reason})
        raise UnauthenticatedError(UNAUTHORIZED_MESSAGE)
