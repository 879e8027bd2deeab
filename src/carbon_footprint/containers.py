"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from carbon_footprint.adapters.openai_advisory_client import OpenAIAdvisoryClient
from carbon_footprint.adapters.supabase_footprint_repository import (
    SupabaseFootprintRepository,
)
from carbon_footprint.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from carbon_footprint.config import Settings
from carbon_footprint.domain.factors import (
    EmissionFactorTable,
    load_default_factor_table,
)
from carbon_footprint.services.advisory import AdvisoryService
from carbon_footprint.services.benchmarks import BenchmarkService
from carbon_footprint.services.dashboard import DashboardService
from carbon_footprint.services.footprint import FootprintCalculator, FootprintService
from carbon_footprint.services.sessions import QuestionnaireService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    factor_table: EmissionFactorTable
    questionnaire_service: QuestionnaireService
    footprint_service: FootprintService
    dashboard_service: DashboardService
    advisory_service: AdvisoryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    factor_table = load_default_factor_table()
    questionnaire_service = QuestionnaireService(
        SupabaseSessionRepository(supabase_client)
    )
    footprint_service = FootprintService(
        questionnaire_service=questionnaire_service,
        calculator=FootprintCalculator(factor_table),
        repository=SupabaseFootprintRepository(supabase_client),
        benchmark_service=BenchmarkService(),
    )
    dashboard_service = DashboardService(
        questionnaire_service=questionnaire_service,
        footprint_service=footprint_service,
    )
    advisory_client = (
        OpenAIAdvisoryClient.create(resolved_settings.openai_api_key)
        if resolved_settings.advisory_configured and resolved_settings.openai_api_key
        else None
    )
    advisory_service = AdvisoryService(
        client=advisory_client,
        model=resolved_settings.openai_model,
    )

    async def close_resources() -> None:
        if advisory_client is not None:
            await advisory_client.close()

    return AppContainer(
        settings=resolved_settings,
        factor_table=factor_table,
        questionnaire_service=questionnaire_service,
        footprint_service=footprint_service,
        dashboard_service=dashboard_service,
        advisory_service=advisory_service,
        close_resources=close_resources,
    )
