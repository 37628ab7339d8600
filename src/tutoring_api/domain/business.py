"""Domain models for business profiles."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class BusinessProfile:
    """A teacher's business entity used for payment routing."""

    id: UUID
    business_name: str
    cnpj: str | None
    stripe_connect_id: str | None
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None
