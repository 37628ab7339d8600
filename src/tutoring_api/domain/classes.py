"""Domain models for recurring classes and their materialized sessions."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from tutoring_api.domain.models import ProfileSummary

STATUS_SCHEDULED = "pendente"
STATUS_CONFIRMED = "confirmada"
STATUS_CANCELLED = "cancelada"
STATUS_COMPLETED = "concluida"

ROLE_TEACHER = "professor"
ROLE_STUDENT = "aluno"


@dataclass(frozen=True)
class RecurrenceTemplate:
    """Rule record that generates a series of class sessions."""

    id: UUID
    teacher_id: UUID
    class_date: datetime
    recurrence_end_date: date | None
    duration_minutes: int
    status: str
    is_experimental: bool = False
    is_group_class: bool = False
    service_id: UUID | None = None
    notes: str | None = None


@dataclass(frozen=True)
class ClassSession:
    """One concrete class occurrence, optionally generated from a template."""

    id: UUID
    teacher_id: UUID
    class_template_id: UUID | None
    class_date: datetime
    status: str


@dataclass(frozen=True)
class ClassParticipant:
    """A student enrolled in a class."""

    student_id: UUID
    status: str


@dataclass(frozen=True)
class EndRecurrenceResult:
    """Outcome of ending a recurrence."""

    template_id: UUID
    end_date: date
    deleted_count: int


@dataclass(frozen=True)
class ParticipantProfile:
    """A copied participant together with their profile."""

    student_id: UUID
    profile: ProfileSummary


@dataclass(frozen=True)
class MaterializedClass:
    """Outcome of materializing a virtual occurrence."""

    class_id: UUID
    template_id: UUID
    participants_count: int
    participants: list[ParticipantProfile]
