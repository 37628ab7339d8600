"""Re-applies recurrence boundaries to sessions left behind by partial failures."""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from tutoring_api.errors import PersistenceFailure
from tutoring_api.services.recurrence import ClassRepository

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationReport:
    """Totals from one reconciliation pass."""

    templates_scanned: int = 0
    sessions_deleted: int = 0
    failed_template_ids: list[UUID] = field(default_factory=list)


@dataclass
class ReconciliationService:
    """Scans ended templates and prunes sessions past their boundary."""

    repository: ClassRepository

    def reconcile(self) -> ReconciliationReport:
        """Run one pass over every template with a recurrence boundary."""
        report = ReconciliationReport()
        for template in self.repository.list_ended_templates():
            if template.recurrence_end_date is None:
                continue
            report.templates_scanned += 1
            try:
                deleted = self.repository.delete_sessions_from(
                    template.id, template.recurrence_end_date
                )
            except PersistenceFailure:
                logger.exception(
                    "Reconciliation failed for template",
                    extra={"template_id": str(template.id)},
                )
                report.failed_template_ids.append(template.id)
                continue
            if deleted:
                logger.info(
                    "Pruned stale classes",
                    extra={
                        "template_id": str(template.id),
                        "deleted_count": len(deleted),
                    },
                )
            report.sessions_deleted += len(deleted)
        return report
