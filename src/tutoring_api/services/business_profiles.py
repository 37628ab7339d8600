"""Business profile queries."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from tutoring_api.domain.business import BusinessProfile


class BusinessProfileRepository(Protocol):
    """Persistence interface for business profiles."""

    def list_for_user(self, user_id: UUID) -> list[BusinessProfile]:
        """Return a user's profiles, oldest first."""


@dataclass
class BusinessProfileService:
    """Service for listing a teacher's business profiles."""

    repository: BusinessProfileRepository

    def list_profiles(self, user_id: UUID) -> list[BusinessProfile]:
        """Return the business profiles owned by a user."""
        return self.repository.list_for_user(user_id)
