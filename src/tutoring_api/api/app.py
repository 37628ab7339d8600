"""FastAPI application factory."""

import logging

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from tutoring_api.api.admin import router as admin_router
from tutoring_api.api.dependencies import require_principal
from tutoring_api.api.errors import register_error_handlers
from tutoring_api.api.models import EndRecurrenceRequest, MaterializeClassRequest
from tutoring_api.app_logging import configure_logging
from tutoring_api.config import parse_csv
from tutoring_api.containers import AppContainer
from tutoring_api.domain.business import BusinessProfile
from tutoring_api.domain.classes import ParticipantProfile
from tutoring_api.domain.models import Principal
from tutoring_api.services.recurrence import parse_record_id


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    allow_headers = parse_csv(container.settings.cors_allow_headers)

    app = FastAPI()
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=allow_headers,
    )
    register_error_handlers(app, container.settings.typed_error_statuses)

    app.include_router(admin_router)

    @app.options("/{path:path}", include_in_schema=False)
    async def cors_options(path: str) -> Response:
        """Answer OPTIONS requests that carry no preflight headers."""
        return Response(
            status_code=200,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Headers": ", ".join(allow_headers),
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/end-recurrence")
    async def end_recurrence(
        body: EndRecurrenceRequest,
        request: Request,
        principal: Principal = Depends(require_principal),
    ) -> dict[str, object]:
        """Set a template's end date and delete the sessions it invalidates."""
        state_container: AppContainer = request.app.state.container
        logger.info(
            "end-recurrence requested",
            extra={
                "user_id": str(principal.id),
                "template_id": body.template_id,
                "end_date": body.end_date.isoformat(),
            },
        )
        result = state_container.recurrence_service.end_recurrence(
            principal,
            parse_record_id(body.template_id),
            body.end_date,
        )
        return {
            "success": True,
            "message": "Recurrence ended successfully",
            "deletedCount": result.deleted_count,
        }

    @app.post("/materialize-virtual-class")
    async def materialize_virtual_class(
        body: MaterializeClassRequest,
        request: Request,
        principal: Principal = Depends(require_principal),
    ) -> dict[str, object]:
        """Store one occurrence of a recurring class."""
        state_container: AppContainer = request.app.state.container
        materialized = state_container.materialization_service.materialize(
            principal,
            parse_record_id(body.template_id),
            body.class_date,
        )
        return {
            "success": True,
            "materialized_class_id": str(materialized.class_id),
            "participants_count": materialized.participants_count,
            "participants": [
                _serialize_participant(p) for p in materialized.participants
            ],
        }

    @app.api_route("/list-business-profiles", methods=["GET", "POST"])
    async def list_business_profiles(
        request: Request,
        principal: Principal = Depends(require_principal),
    ) -> dict[str, object]:
        """Return the caller's business profiles."""
        state_container: AppContainer = request.app.state.container
        profiles = state_container.business_profile_service.list_profiles(
            principal.id
        )
        logger.info(
            "Business profiles fetched",
            extra={"user_id": str(principal.id), "count": len(profiles)},
        )
        return {
            "success": True,
            "business_profiles": [_serialize_profile(p) for p in profiles],
            "count": len(profiles),
        }

    return app


def _serialize_profile(profile: BusinessProfile) -> dict[str, object]:
    return {
        "id": str(profile.id),
        "business_name": profile.business_name,
        "cnpj": profile.cnpj,
        "stripe_connect_id": profile.stripe_connect_id,
        "is_active": profile.is_active,
        "created_at": profile.created_at.isoformat() if profile.created_at else None,
        "updated_at": profile.updated_at.isoformat() if profile.updated_at else None,
    }


def _serialize_participant(participant: ParticipantProfile) -> dict[str, object]:
    return {
        "student_id": str(participant.student_id),
        "profile": {
            "id": str(participant.profile.id),
            "name": participant.profile.name,
            "email": participant.profile.email,
        },
    }
