"""Registering the database cron job that triggers reconciliation."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

from tutoring_api.errors import PersistenceFailure

logger = logging.getLogger(__name__)

RECONCILIATION_JOB_NAME = "reconcile-recurrences"
RECONCILIATION_PATH = "/admin/reconcile-recurrences"


class CronScheduler(Protocol):
    """Interface over the database job scheduler."""

    def unschedule(self, job_name: str) -> None:
        """Remove a scheduled job by name."""

    def schedule(self, job_name: str, schedule: str, command: str) -> None:
        """Register `command` to run on the cron `schedule`."""


@dataclass(frozen=True)
class ScheduledJob:
    """A job registered with the scheduler."""

    job_name: str
    schedule: str


@dataclass
class AutomationService:
    """Keeps the reconciliation cron job registered."""

    scheduler: CronScheduler
    base_url: str
    admin_token: str
    schedule: str

    def setup_reconciliation(self) -> ScheduledJob:
        """Replace any existing reconciliation job with a fresh one."""
        try:
            self.scheduler.unschedule(RECONCILIATION_JOB_NAME)
        except PersistenceFailure as exc:
            logger.info(
                "No existing cron job to remove (normal on first setup): %s",
                exc.message,
            )

        self.scheduler.schedule(
            RECONCILIATION_JOB_NAME, self.schedule, self.reconciliation_command()
        )
        logger.info(
            "Reconciliation cron job scheduled",
            extra={"job_name": RECONCILIATION_JOB_NAME, "schedule": self.schedule},
        )
        return ScheduledJob(job_name=RECONCILIATION_JOB_NAME, schedule=self.schedule)

    def reconciliation_command(self) -> str:
        """SQL that posts to the reconciliation endpoint through pg_net."""
        url = self.base_url.rstrip("/") + RECONCILIATION_PATH
        headers = json.dumps(
            {"Content-Type": "application/json", "X-Admin-Token": self.admin_token}
        )
        return (
            f"SELECT net.http_post(url:={_sql_literal(url)}, "
            f"headers:={_sql_literal(headers)}::jsonb, "
            "body:='{}'::jsonb) as request_id;"
        )


def _sql_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"
