"""Tests for container wiring."""

from tutoring_api.adapters.supabase_class_repository import SupabaseClassRepository
from tutoring_api.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert isinstance(container.recurrence_service.repository, SupabaseClassRepository)
    assert (
        container.reconciliation_service.repository
        is container.recurrence_service.repository
    )
    assert container.identity_service is not None
    assert container.automation_service.base_url == settings.public_base_url
    assert container.automation_service.schedule == "*/15 * * * *"
