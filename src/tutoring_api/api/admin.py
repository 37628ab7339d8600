"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from tutoring_api.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.post("/reconcile-recurrences", dependencies=[Depends(require_admin)])
async def reconcile_recurrences(request: Request) -> dict[str, object]:
    """Prune sessions past their template boundary; called on a schedule."""
    container: AppContainer = request.app.state.container
    report = container.reconciliation_service.reconcile()
    logger.info(
        "Reconciliation finished",
        extra={
            "templates_scanned": report.templates_scanned,
            "sessions_deleted": report.sessions_deleted,
            "failed": len(report.failed_template_ids),
        },
    )
    payload = asdict(report)
    payload["failed_template_ids"] = [str(item) for item in report.failed_template_ids]
    return {"success": not report.failed_template_ids, **payload}


@router.post(
    "/setup-reconciliation-automation", dependencies=[Depends(require_admin)]
)
async def setup_reconciliation_automation(request: Request) -> dict[str, object]:
    """Register the cron job that calls the reconciliation endpoint."""
    container: AppContainer = request.app.state.container
    job = container.automation_service.setup_reconciliation()
    return {
        "success": True,
        "message": "Reconciliation automation configured",
        "schedule": job.schedule,
        "jobname": job.job_name,
    }
