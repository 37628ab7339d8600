"""Supabase Auth backed identity provider."""

import logging
from dataclasses import dataclass
from uuid import UUID

import httpx
from supabase import AuthError, Client

from tutoring_api.domain.models import Principal
from tutoring_api.services.identity import IdentityProvider

logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Verifies access tokens with Supabase Auth."""

    client: Client

    def get_principal(self, access_token: str) -> Principal | None:
        """Return the token's user, or None when Supabase rejects it."""
        try:
            response = self.client.auth.get_user(access_token)
        except (AuthError, httpx.HTTPError) as exc:
            logger.info("Token verification failed: %s", exc)
            return None
        if response is None or response.user is None:
            return None
        return Principal(id=UUID(response.user.id), email=response.user.email)
