"""Ending recurring class series."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from tutoring_api.domain.classes import (
    ClassParticipant,
    ClassSession,
    EndRecurrenceResult,
    RecurrenceTemplate,
)
from tutoring_api.domain.models import Principal
from tutoring_api.errors import (
    ConcurrentModification,
    NotFoundOrForbidden,
    PartialFailure,
    PersistenceFailure,
)

logger = logging.getLogger(__name__)

TEMPLATE_NOT_FOUND = "Template not found or unauthorized"


class ClassRepository(Protocol):
    """Persistence interface for class templates and sessions."""

    def get_owned_template(
        self, template_id: UUID, teacher_id: UUID
    ) -> RecurrenceTemplate | None:
        """Return a template matching id, owner and the template flag."""

    def get_template(self, template_id: UUID) -> RecurrenceTemplate | None:
        """Return a template by id regardless of owner."""

    def set_recurrence_end(
        self, template: RecurrenceTemplate, end_date: date
    ) -> bool:
        """Set the boundary if it still equals the value on `template`.

        Returns False when no row matched the conditional update.
        """

    def delete_sessions_from(
        self, template_id: UUID, end_date: date
    ) -> list[ClassSession]:
        """Delete non-completed sessions dated on or after `end_date`."""

    def list_ended_templates(self) -> list[RecurrenceTemplate]:
        """Return templates that carry a recurrence boundary."""

    def create_materialized_class(
        self, template: RecurrenceTemplate, class_date: datetime
    ) -> UUID:
        """Insert a concrete session generated from `template`."""

    def delete_class(self, class_id: UUID) -> None:
        """Delete a single class row."""

    def list_participants(self, class_id: UUID) -> list[ClassParticipant]:
        """Return the participants of a class."""

    def is_participant(self, class_id: UUID, student_id: UUID) -> bool:
        """Return True when the student participates in the class."""

    def add_participants(
        self, class_id: UUID, participants: list[ClassParticipant]
    ) -> None:
        """Insert participant rows for a class."""


@dataclass
class RecurrenceService:
    """Sets a recurrence boundary and prunes the sessions it invalidates."""

    repository: ClassRepository

    def end_recurrence(
        self, principal: Principal, template_id: UUID, end_date: date
    ) -> EndRecurrenceResult:
        """End a recurring series owned by `principal` at `end_date`.

        The boundary is inclusive: a non-completed session dated exactly on
        `end_date` is removed. Completed sessions always survive.
        """
        logger.info(
            "Ending recurrence",
            extra={
                "user_id": str(principal.id),
                "template_id": str(template_id),
                "end_date": end_date.isoformat(),
            },
        )
        template = self._load_owned_template(principal, template_id)

        if not self.repository.set_recurrence_end(template, end_date):
            logger.warning(
                "Template boundary changed concurrently",
                extra={"template_id": str(template_id)},
            )
            raise ConcurrentModification(
                "Template was modified concurrently, retry the request"
            )

        try:
            deleted = self.repository.delete_sessions_from(template_id, end_date)
        except PersistenceFailure as exc:
            logger.error(
                "Boundary set but pruning future classes failed",
                extra={"template_id": str(template_id), "error": exc.message},
            )
            raise PartialFailure(template_id, end_date, exc.message) from exc

        logger.info(
            "Deleted future classes",
            extra={"template_id": str(template_id), "deleted_count": len(deleted)},
        )
        return EndRecurrenceResult(
            template_id=template_id,
            end_date=end_date,
            deleted_count=len(deleted),
        )

    def _load_owned_template(
        self, principal: Principal, template_id: UUID
    ) -> RecurrenceTemplate:
        template = self.repository.get_owned_template(template_id, principal.id)
        if template is None:
            raise NotFoundOrForbidden(TEMPLATE_NOT_FOUND)
        return template


def parse_record_id(raw: str) -> UUID:
    """Parse a client supplied id; malformed ids look like missing records."""
    try:
        return UUID(raw)
    except ValueError as exc:
        raise NotFoundOrForbidden(TEMPLATE_NOT_FOUND) from exc
