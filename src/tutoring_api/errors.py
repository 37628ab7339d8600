"""Error taxonomy shared by services, adapters and the HTTP layer."""

from datetime import date
from uuid import UUID


class TutoringError(Exception):
    """Base class for failures surfaced to API callers."""

    kind = "error"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthorized(TutoringError):
    """Missing, malformed or unresolvable bearer credential."""

    kind = "unauthorized"
    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class NotFoundOrForbidden(TutoringError):
    """Target is absent or not owned by the caller.

    The two causes are never distinguished, so callers cannot probe for the
    existence of records they do not own.
    """

    kind = "not_found_or_forbidden"
    status_code = 404


class ValidationError(TutoringError):
    """Malformed request payload."""

    kind = "validation_error"
    status_code = 400


class PersistenceFailure(TutoringError):
    """The backing store rejected a read or write."""

    kind = "persistence_failure"
    status_code = 502


class PartialFailure(PersistenceFailure):
    """A recurrence boundary was committed but the prune that follows failed.

    The template now carries its new boundary while stale future sessions may
    still exist. Reconciliation is required.
    """

    kind = "partial_failure"
    status_code = 500

    def __init__(self, template_id: UUID, end_date: date, cause: str) -> None:
        super().__init__(f"PartialFailure: boundary set, prune failed: {cause}")
        self.template_id = template_id
        self.end_date = end_date


class ConcurrentModification(TutoringError):
    """The record changed between the read and the conditional write."""

    kind = "concurrent_modification"
    status_code = 409


class TemplateExpired(TutoringError):
    """The requested occurrence falls on or after the recurrence boundary."""

    kind = "template_expired"
    status_code = 410
