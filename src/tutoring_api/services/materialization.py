"""Turning a virtual occurrence of a recurring class into a stored class."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from tutoring_api.domain.classes import (
    ROLE_STUDENT,
    ROLE_TEACHER,
    ClassParticipant,
    MaterializedClass,
    ParticipantProfile,
    RecurrenceTemplate,
)
from tutoring_api.domain.models import Principal, ProfileSummary
from tutoring_api.errors import (
    NotFoundOrForbidden,
    PersistenceFailure,
    TemplateExpired,
    ValidationError,
)
from tutoring_api.services.recurrence import TEMPLATE_NOT_FOUND, ClassRepository

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_role(self, user_id: UUID) -> str | None:
        """Return the user's role, if a profile exists."""

    def get_summaries(self, user_ids: list[UUID]) -> list[ProfileSummary]:
        """Return the profiles that exist among `user_ids`."""


@dataclass
class MaterializationService:
    """Creates concrete classes from recurrence templates."""

    class_repository: ClassRepository
    profile_repository: ProfileRepository

    def materialize(
        self, principal: Principal, template_id: UUID, class_date: datetime
    ) -> MaterializedClass:
        """Store the occurrence of `template_id` on `class_date`."""
        role = self.profile_repository.get_role(principal.id)
        if role is None:
            raise NotFoundOrForbidden("User profile not found")

        template = self.class_repository.get_template(template_id)
        if template is None or not self._may_access(principal, role, template):
            raise NotFoundOrForbidden(TEMPLATE_NOT_FOUND)

        boundary = template.recurrence_end_date
        if boundary is not None and class_date.date() >= boundary:
            raise TemplateExpired("Template has expired")

        participants = self.class_repository.list_participants(template.id)
        if not participants:
            raise ValidationError("Template has no participants")
        profiles = self._participant_profiles(participants)

        class_id = self.class_repository.create_materialized_class(
            template, class_date
        )
        try:
            self.class_repository.add_participants(class_id, participants)
        except PersistenceFailure as exc:
            logger.exception(
                "Copying participants failed, removing materialized class",
                extra={"class_id": str(class_id)},
            )
            self._discard_class(class_id)
            raise exc

        logger.info(
            "Materialized class",
            extra={
                "class_id": str(class_id),
                "template_id": str(template.id),
                "participants": len(participants),
            },
        )
        return MaterializedClass(
            class_id=class_id,
            template_id=template.id,
            participants_count=len(participants),
            participants=profiles,
        )

    def _participant_profiles(
        self, participants: list[ClassParticipant]
    ) -> list[ParticipantProfile]:
        summaries = {
            summary.id: summary
            for summary in self.profile_repository.get_summaries(
                [participant.student_id for participant in participants]
            )
        }
        return [
            ParticipantProfile(
                student_id=participant.student_id,
                profile=summaries[participant.student_id],
            )
            for participant in participants
            if participant.student_id in summaries
        ]

    def _discard_class(self, class_id: UUID) -> None:
        try:
            self.class_repository.delete_class(class_id)
        except PersistenceFailure:
            logger.exception(
                "Failed to remove orphaned materialized class %s", class_id
            )

    def _may_access(
        self, principal: Principal, role: str, template: RecurrenceTemplate
    ) -> bool:
        if role == ROLE_TEACHER:
            return template.teacher_id == principal.id
        if role == ROLE_STUDENT:
            return self.class_repository.is_participant(template.id, principal.id)
        return False
