"""Request-scoped dependencies."""

from fastapi import Header, Request

from tutoring_api.containers import AppContainer
from tutoring_api.domain.models import Principal


async def require_principal(
    request: Request, authorization: str | None = Header(default=None)
) -> Principal:
    """Resolve the caller from the Authorization header."""
    container: AppContainer = request.app.state.container
    return container.identity_service.resolve(authorization)
