"""Supabase repository for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from tutoring_api.adapters.supabase_errors import store_errors
from tutoring_api.domain.models import ProfileSummary
from tutoring_api.services.materialization import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile lookups."""

    client: Client

    def get_role(self, user_id: UUID) -> str | None:
        """Return the stored role for a user."""
        with store_errors("load profile"):
            response = (
                self.client.table("profiles")
                .select("role")
                .eq("id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return response.data[0].get("role")

    def get_summaries(self, user_ids: list[UUID]) -> list[ProfileSummary]:
        """Load id, name and email for the given users in one query."""
        if not user_ids:
            return []
        with store_errors("load participant profiles"):
            response = (
                self.client.table("profiles")
                .select("id, name, email")
                .in_("id", [str(user_id) for user_id in user_ids])
                .execute()
            )
        return [
            ProfileSummary(
                id=UUID(str(row["id"])),
                name=row.get("name"),
                email=row.get("email"),
            )
            for row in response.data or []
        ]
