"""Supabase-backed repository for classes, templates and participants."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from tutoring_api.adapters.supabase_errors import store_errors
from tutoring_api.domain.classes import (
    STATUS_COMPLETED,
    ClassParticipant,
    ClassSession,
    RecurrenceTemplate,
)
from tutoring_api.errors import PersistenceFailure
from tutoring_api.services.recurrence import ClassRepository

_TEMPLATE_COLUMNS = (
    "id, teacher_id, class_date, recurrence_end_date, duration_minutes, status, "
    "is_experimental, is_group_class, service_id, notes"
)
_SESSION_COLUMNS = "id, teacher_id, class_template_id, class_date, status"


@dataclass
class SupabaseClassRepository(ClassRepository):
    """Supabase implementation over the `classes` table."""

    client: Client

    def get_owned_template(
        self, template_id: UUID, teacher_id: UUID
    ) -> RecurrenceTemplate | None:
        """Return the template only when it belongs to `teacher_id`."""
        with store_errors("load template"):
            response = (
                self.client.table("classes")
                .select(_TEMPLATE_COLUMNS)
                .eq("id", str(template_id))
                .eq("teacher_id", str(teacher_id))
                .eq("is_template", True)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_template(response.data[0])

    def get_template(self, template_id: UUID) -> RecurrenceTemplate | None:
        """Return a template by id."""
        with store_errors("load template"):
            response = (
                self.client.table("classes")
                .select(_TEMPLATE_COLUMNS)
                .eq("id", str(template_id))
                .eq("is_template", True)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_template(response.data[0])

    def set_recurrence_end(self, template: RecurrenceTemplate, end_date: date) -> bool:
        """Conditionally write the boundary; False when the row changed."""
        query = (
            self.client.table("classes")
            .update({"recurrence_end_date": end_date.isoformat()})
            .eq("id", str(template.id))
            .eq("teacher_id", str(template.teacher_id))
            .eq("is_template", True)
        )
        if template.recurrence_end_date is None:
            query = query.is_("recurrence_end_date", "null")
        else:
            query = query.eq(
                "recurrence_end_date", template.recurrence_end_date.isoformat()
            )
        with store_errors("update template"):
            response = query.execute()
        return bool(response.data)

    def delete_sessions_from(
        self, template_id: UUID, end_date: date
    ) -> list[ClassSession]:
        """Delete the template's non-completed classes from `end_date` on."""
        with store_errors("delete future classes"):
            response = (
                self.client.table("classes")
                .delete()
                .eq("class_template_id", str(template_id))
                .gte("class_date", end_date.isoformat())
                .neq("status", STATUS_COMPLETED)
                .execute()
            )
        return [_parse_session(row) for row in response.data or []]

    def list_ended_templates(self) -> list[RecurrenceTemplate]:
        """Return every template with a recurrence boundary."""
        with store_errors("list ended templates"):
            response = (
                self.client.table("classes")
                .select(_TEMPLATE_COLUMNS)
                .eq("is_template", True)
                .not_.is_("recurrence_end_date", "null")
                .execute()
            )
        return [_parse_template(row) for row in response.data or []]

    def create_materialized_class(
        self, template: RecurrenceTemplate, class_date: datetime
    ) -> UUID:
        """Insert a concrete class copied from the template."""
        with store_errors("create materialized class"):
            response = (
                self.client.table("classes")
                .insert(
                    {
                        "teacher_id": str(template.teacher_id),
                        "class_date": class_date.isoformat(),
                        "duration_minutes": template.duration_minutes,
                        "status": template.status,
                        "is_experimental": template.is_experimental,
                        "is_group_class": template.is_group_class,
                        "service_id": (
                            str(template.service_id) if template.service_id else None
                        ),
                        "is_template": False,
                        "class_template_id": str(template.id),
                        "notes": template.notes,
                    }
                )
                .execute()
            )
        if not response.data:
            raise PersistenceFailure("Failed to create materialized class")
        return UUID(response.data[0]["id"])

    def delete_class(self, class_id: UUID) -> None:
        """Delete one class row."""
        with store_errors("delete class"):
            self.client.table("classes").delete().eq("id", str(class_id)).execute()

    def list_participants(self, class_id: UUID) -> list[ClassParticipant]:
        """Return a class's participants."""
        with store_errors("list participants"):
            response = (
                self.client.table("class_participants")
                .select("student_id, status")
                .eq("class_id", str(class_id))
                .execute()
            )
        return [
            ClassParticipant(student_id=UUID(row["student_id"]), status=row["status"])
            for row in response.data or []
        ]

    def is_participant(self, class_id: UUID, student_id: UUID) -> bool:
        """Return True when the student is enrolled in the class."""
        with store_errors("check participation"):
            response = (
                self.client.table("class_participants")
                .select("id")
                .eq("class_id", str(class_id))
                .eq("student_id", str(student_id))
                .limit(1)
                .execute()
            )
        return bool(response.data)

    def add_participants(
        self, class_id: UUID, participants: list[ClassParticipant]
    ) -> None:
        """Copy participants onto a class, preserving their status."""
        payload = [
            {
                "class_id": str(class_id),
                "student_id": str(participant.student_id),
                "status": participant.status,
            }
            for participant in participants
        ]
        if not payload:
            return
        with store_errors("copy participants"):
            self.client.table("class_participants").insert(payload).execute()


def _parse_datetime(raw: object) -> datetime:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return datetime.min


def _parse_date(raw: object) -> date | None:
    if isinstance(raw, str) and raw:
        return date.fromisoformat(raw[:10])
    return None


def _parse_template(row: dict[str, object]) -> RecurrenceTemplate:
    return RecurrenceTemplate(
        id=UUID(row["id"]),
        teacher_id=UUID(row["teacher_id"]),
        class_date=_parse_datetime(row.get("class_date")),
        recurrence_end_date=_parse_date(row.get("recurrence_end_date")),
        duration_minutes=int(row.get("duration_minutes") or 0),
        status=str(row.get("status", "")),
        is_experimental=bool(row.get("is_experimental", False)),
        is_group_class=bool(row.get("is_group_class", False)),
        service_id=UUID(row["service_id"]) if row.get("service_id") else None,
        notes=row.get("notes"),
    )


def _parse_session(row: dict[str, object]) -> ClassSession:
    return ClassSession(
        id=UUID(row["id"]),
        teacher_id=UUID(row["teacher_id"]),
        class_template_id=(
            UUID(row["class_template_id"]) if row.get("class_template_id") else None
        ),
        class_date=_parse_datetime(row.get("class_date")),
        status=str(row.get("status", "")),
    )
