"""Domain models for authenticated callers."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Principal:
    """An authenticated user resolved from a bearer credential."""

    id: UUID
    email: str | None = None


@dataclass(frozen=True)
class ProfileSummary:
    """Public profile fields shown alongside class participants."""

    id: UUID
    name: str | None
    email: str | None
