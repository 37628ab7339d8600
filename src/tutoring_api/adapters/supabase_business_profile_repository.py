"""Supabase repository for business profiles."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from tutoring_api.adapters.supabase_errors import store_errors
from tutoring_api.domain.business import BusinessProfile
from tutoring_api.services.business_profiles import BusinessProfileRepository


@dataclass
class SupabaseBusinessProfileRepository(BusinessProfileRepository):
    """Supabase implementation for business profile queries."""

    client: Client

    def list_for_user(self, user_id: UUID) -> list[BusinessProfile]:
        """Return the user's business profiles ordered by creation time."""
        with store_errors("list business profiles"):
            response = (
                self.client.table("business_profiles")
                .select(
                    "id, business_name, cnpj, stripe_connect_id, is_active, "
                    "created_at, updated_at"
                )
                .eq("user_id", str(user_id))
                .order("created_at", desc=False)
                .execute()
            )
        return [_parse_row(row) for row in response.data or []]


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_row(row: dict[str, object]) -> BusinessProfile:
    return BusinessProfile(
        id=UUID(row["id"]),
        business_name=str(row.get("business_name", "")),
        cnpj=row.get("cnpj"),
        stripe_connect_id=row.get("stripe_connect_id"),
        is_active=bool(row.get("is_active", True)),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )
