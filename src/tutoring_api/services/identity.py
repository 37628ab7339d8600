"""Bearer credential resolution."""

import logging
from dataclasses import dataclass
from typing import Protocol

from tutoring_api.domain.models import Principal
from tutoring_api.errors import Unauthorized

logger = logging.getLogger(__name__)

_BEARER_SCHEME = "bearer"


class IdentityProvider(Protocol):
    """External capability that verifies access tokens."""

    def get_principal(self, access_token: str) -> Principal | None:
        """Return the principal for a token, or None when it is not valid."""


@dataclass
class IdentityService:
    """Resolves an Authorization header into a principal."""

    provider: IdentityProvider

    def resolve(self, authorization: str | None) -> Principal:
        """Return the caller's principal or raise Unauthorized."""
        token = extract_bearer_token(authorization)
        if token is None:
            raise Unauthorized()
        principal = self.provider.get_principal(token)
        if principal is None:
            logger.info("Rejected bearer token")
            raise Unauthorized()
        return principal


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from a `Bearer <token>` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != _BEARER_SCHEME:
        return None
    token = token.strip()
    return token or None
