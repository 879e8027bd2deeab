"""Shared test fixtures."""

import copy
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from carbon_footprint.config import Settings
from carbon_footprint.containers import AppContainer
from carbon_footprint.domain.factors import (
    EmissionFactorTable,
    load_default_factor_table,
)
from carbon_footprint.domain.footprint import (
    Benchmarks,
    CategoryEmissions,
    CategoryResult,
    FootprintRecord,
    FootprintResult,
)
from carbon_footprint.domain.sessions import SessionRecord
from carbon_footprint.services.advisory import AdvisoryClient, AdvisoryService
from carbon_footprint.services.benchmarks import BenchmarkService
from carbon_footprint.services.dashboard import DashboardService
from carbon_footprint.services.footprint import (
    FootprintCalculator,
    FootprintRepository,
    FootprintService,
)
from carbon_footprint.services.sessions import QuestionnaireService, SessionRepository

# Hand-computed totals for PROFILE_PAYLOAD.
EXPECTED_TRANSPORTATION = 1123.2
EXPECTED_HOME_ENERGY = 671.07075
EXPECTED_FOOD = 9444.375
EXPECTED_WATER = 62.05
EXPECTED_SHOPPING = 308.0
EXPECTED_TOTAL = 11608.69575

PROFILE_PAYLOAD: dict[str, object] = {
    "location": {"country": "Canada", "city": "Toronto"},
    "householdSize": 2,
    "transportation": {
        "primaryMode": "car",
        "dailyCommuteDistance": 10,
        "commuteFrequency": 5,
        "additionalWeeklyTravel": 20,
    },
    "homeEnergy": {
        "homeType": "apartment",
        "dailyAppliances": {"acHeating": 2, "television": 3, "computer": 4},
        "lightingHours": 5,
    },
    "foodDiet": {"dietType": "non_vegetarian", "foodWaste": "moderate"},
    "waterUsage": {
        "showerDuration": 10,
        "showerFrequency": 1,
        "bathFrequency": 0,
        "waterSavingFixtures": False,
    },
    "shopping": {
        "clothingFrequency": "quarterly",
        "electronicsUpgrade": "every_2_years",
    },
}


def make_footprint(
    transportation: float = 1000.0,
    home_energy: float = 2000.0,
    food: float = 3000.0,
    water: float = 100.0,
    shopping: float = 400.0,
    calculated_at: datetime | None = None,
) -> FootprintResult:
    """Footprint with the given category totals and no breakdown."""
    emissions = CategoryEmissions(
        transportation=CategoryResult(transportation),
        home_energy=CategoryResult(home_energy),
        food=CategoryResult(food),
        water=CategoryResult(water),
        shopping=CategoryResult(shopping),
    )
    return FootprintResult(
        total_emissions=transportation + home_energy + food + water + shopping,
        emissions=emissions,
        calculated_at=calculated_at or datetime(2024, 1, 1, tzinfo=UTC),
    )


def make_record(
    result: FootprintResult, session_id: UUID | None = None
) -> FootprintRecord:
    benchmarks = BenchmarkService().benchmarks(result.total_emissions, "Canada")
    return FootprintRecord(
        id=uuid4(),
        session_id=session_id or uuid4(),
        result=result,
        benchmarks=benchmarks,
    )


@dataclass
class TickingClock:
    """Clock that advances by a fixed step on every call."""

    current: datetime = field(
        default_factory=lambda: datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    )
    step: timedelta = timedelta(days=1)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory questionnaire session repository for tests."""

    sessions: dict[UUID, SessionRecord] = field(default_factory=dict)

    def create_session(self, created_at: datetime, expires_at: datetime) -> SessionRecord:
        session = SessionRecord(id=uuid4(), created_at=created_at, expires_at=expires_at)
        self.sessions[session.id] = session
        return session

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        return self.sessions.get(session_id)

    def update_steps(self, session_id: UUID, steps: dict[str, object]) -> None:
        self.sessions[session_id] = replace(self.sessions[session_id], steps=steps)

    def save_profile(self, session_id: UUID, profile: dict[str, object]) -> None:
        self.sessions[session_id] = replace(
            self.sessions[session_id], profile=profile
        )


@dataclass
class InMemoryFootprintRepository(FootprintRepository):
    """In-memory footprint history for tests."""

    records: list[FootprintRecord] = field(default_factory=list)

    def create_footprint(
        self, session_id: UUID, result: FootprintResult, benchmarks: Benchmarks
    ) -> FootprintRecord:
        record = FootprintRecord(
            id=uuid4(), session_id=session_id, result=result, benchmarks=benchmarks
        )
        self.records.append(record)
        return record

    def get_latest(self, session_id: UUID) -> FootprintRecord | None:
        records = self.list_footprints(session_id, limit=1)
        return records[0] if records else None

    def list_footprints(self, session_id: UUID, limit: int) -> list[FootprintRecord]:
        matching = [
            record for record in self.records if record.session_id == session_id
        ]
        matching.sort(key=lambda record: record.calculated_at, reverse=True)
        return matching[:limit]


@dataclass
class FakeAdvisoryClient(AdvisoryClient):
    """Fake advisory client returning fixed text or raising."""

    text: str = "Consider carpooling twice a week."
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)
    closed: bool = False

    async def advise(
        self, *, model: str, instructions: str, payload: dict[str, object]
    ) -> str:
        self.calls.append(
            {"model": model, "instructions": instructions, "payload": payload}
        )
        if self.error is not None:
            raise self.error
        return self.text

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
        openai_api_key="openai-key",
    )


@pytest.fixture
def profile_payload() -> dict[str, object]:
    return copy.deepcopy(PROFILE_PAYLOAD)


@pytest.fixture
def factor_table() -> EmissionFactorTable:
    return load_default_factor_table()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def footprint_repository() -> InMemoryFootprintRepository:
    return InMemoryFootprintRepository()


@pytest.fixture
def advisory_client() -> FakeAdvisoryClient:
    return FakeAdvisoryClient()


@pytest.fixture
def questionnaire_service(
    session_repository: InMemorySessionRepository,
) -> QuestionnaireService:
    return QuestionnaireService(session_repository)


@pytest.fixture
def footprint_service(
    questionnaire_service: QuestionnaireService,
    footprint_repository: InMemoryFootprintRepository,
    factor_table: EmissionFactorTable,
    clock: TickingClock,
) -> FootprintService:
    return FootprintService(
        questionnaire_service=questionnaire_service,
        calculator=FootprintCalculator(factor_table, clock=clock),
        repository=footprint_repository,
        benchmark_service=BenchmarkService(),
    )


@pytest.fixture
def dashboard_service(
    questionnaire_service: QuestionnaireService,
    footprint_service: FootprintService,
) -> DashboardService:
    return DashboardService(
        questionnaire_service=questionnaire_service,
        footprint_service=footprint_service,
    )


@pytest.fixture
def submitted_session(
    questionnaire_service: QuestionnaireService, profile_payload: dict[str, object]
) -> UUID:
    session = questionnaire_service.create_session()
    questionnaire_service.submit(session.id, profile_payload)
    return session.id


@pytest.fixture
def container(
    settings: Settings,
    factor_table: EmissionFactorTable,
    questionnaire_service: QuestionnaireService,
    footprint_service: FootprintService,
    dashboard_service: DashboardService,
    advisory_client: FakeAdvisoryClient,
) -> AppContainer:
    advisory_service = AdvisoryService(
        client=advisory_client, model=settings.openai_model
    )

    async def close_resources() -> None:
        await advisory_client.close()

    return AppContainer(
        settings=settings,
        factor_table=factor_table,
        questionnaire_service=questionnaire_service,
        footprint_service=footprint_service,
        dashboard_service=dashboard_service,
        advisory_service=advisory_service,
        close_resources=close_resources,
    )
