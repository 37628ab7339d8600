"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from tutoring_api.adapters.supabase_business_profile_repository import (
    SupabaseBusinessProfileRepository,
)
from tutoring_api.adapters.supabase_class_repository import SupabaseClassRepository
from tutoring_api.adapters.supabase_cron_scheduler import SupabaseCronScheduler
from tutoring_api.adapters.supabase_identity_provider import SupabaseIdentityProvider
from tutoring_api.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from tutoring_api.config import Settings
from tutoring_api.services.automation import AutomationService
from tutoring_api.services.business_profiles import BusinessProfileService
from tutoring_api.services.identity import IdentityService
from tutoring_api.services.materialization import MaterializationService
from tutoring_api.services.reconciliation import ReconciliationService
from tutoring_api.services.recurrence import RecurrenceService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_service: IdentityService
    recurrence_service: RecurrenceService
    reconciliation_service: ReconciliationService
    materialization_service: MaterializationService
    business_profile_service: BusinessProfileService
    automation_service: AutomationService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    class_repository = SupabaseClassRepository(supabase_client)
    return AppContainer(
        settings=resolved_settings,
        identity_service=IdentityService(SupabaseIdentityProvider(supabase_client)),
        recurrence_service=RecurrenceService(class_repository),
        reconciliation_service=ReconciliationService(class_repository),
        materialization_service=MaterializationService(
            class_repository=class_repository,
            profile_repository=SupabaseProfileRepository(supabase_client),
        ),
        business_profile_service=BusinessProfileService(
            SupabaseBusinessProfileRepository(supabase_client)
        ),
        automation_service=AutomationService(
            scheduler=SupabaseCronScheduler(supabase_client),
            base_url=resolved_settings.public_base_url,
            admin_token=resolved_settings.admin_token,
            schedule=resolved_settings.reconciliation_schedule,
        ),
    )
