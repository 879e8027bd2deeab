"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import fields, is_dataclass
from datetime import datetime
from uuid import UUID

from fastapi import Body, FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel, to_snake

from carbon_footprint.api.admin import router as admin_router
from carbon_footprint.api.models import RecalculateRequest, ScenarioRequest, StepRequest
from carbon_footprint.app_logging import configure_logging
from carbon_footprint.containers import AppContainer
from carbon_footprint.domain.errors import (
    ComputationError,
    FootprintNotFoundError,
    ProfileValidationError,
    SessionNotFoundError,
    UnknownChartTypeError,
    UnknownStepError,
)
from carbon_footprint.domain.footprint import FootprintRecord
from carbon_footprint.domain.sessions import QuestionnaireProgress, SessionRecord
from carbon_footprint.services.benchmarks import carbon_category, carbon_message


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(ProfileValidationError)
    async def profile_error(
        request: Request, exc: ProfileValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": exc.message, "field": exc.field},
        )

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found(
        request: Request, exc: SessionNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Session not found"},
        )

    @app.exception_handler(FootprintNotFoundError)
    async def footprint_not_found(
        request: Request, exc: FootprintNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "No footprint has been calculated for this session"},
        )

    @app.exception_handler(UnknownStepError)
    async def unknown_step(request: Request, exc: UnknownStepError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": f"Unknown questionnaire step: {exc}"},
        )

    @app.exception_handler(UnknownChartTypeError)
    async def unknown_chart(
        request: Request, exc: UnknownChartTypeError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": f"Unknown chart type: {exc}"},
        )

    @app.exception_handler(ComputationError)
    async def computation_error(
        request: Request, exc: ComputationError
    ) -> JSONResponse:
        logger.exception(
            "Footprint computation failed", extra={"path": request.url.path}
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Failed to calculate footprint"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/sessions", status_code=status.HTTP_201_CREATED)
    async def create_session(request: Request) -> dict[str, object]:
        """Start a questionnaire session."""
        state_container: AppContainer = request.app.state.container
        session = state_container.questionnaire_service.create_session()
        return _format_session(session)

    @app.put("/sessions/{session_id}/steps")
    async def save_step(
        session_id: UUID, step: StepRequest, request: Request
    ) -> dict[str, object]:
        """Save the answers for one questionnaire step."""
        state_container: AppContainer = request.app.state.container
        session = state_container.questionnaire_service.save_step(
            session_id, step.category, step.data
        )
        return _format_session(session)

    @app.get("/sessions/{session_id}/progress")
    async def progress(session_id: UUID, request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        return _format_progress(
            state_container.questionnaire_service.get_progress(session_id)
        )

    @app.post("/sessions/{session_id}/profile")
    async def submit_profile(
        session_id: UUID,
        request: Request,
        payload: dict[str, object] | None = Body(default=None),
    ) -> dict[str, object]:
        """Validate and store the profile, from the body or the saved steps."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.questionnaire_service.submit(session_id, payload)
        return {"sessionId": str(session_id), "profile": profile.to_payload()}

    @app.post("/sessions/{session_id}/footprint", status_code=status.HTTP_201_CREATED)
    async def calculate_footprint(
        session_id: UUID, request: Request
    ) -> dict[str, object]:
        """Calculate and store a footprint for the submitted profile."""
        state_container: AppContainer = request.app.state.container
        record = state_container.footprint_service.calculate(session_id)
        return _format_footprint(record)

    @app.get("/sessions/{session_id}/footprint")
    async def latest_footprint(
        session_id: UUID, request: Request
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        return _format_footprint(state_container.footprint_service.latest(session_id))

    @app.get("/sessions/{session_id}/footprints")
    async def footprint_history(
        session_id: UUID, request: Request, limit: int = 12
    ) -> dict[str, object]:
        """Return recent footprints, most recent first."""
        state_container: AppContainer = request.app.state.container
        history = state_container.footprint_service.history(session_id, limit)
        return {"footprints": [_format_footprint(record) for record in history]}

    @app.get("/sessions/{session_id}/benchmarks")
    async def benchmarks(session_id: UUID, request: Request) -> dict[str, object]:
        """Return how the latest footprint ranks against averages."""
        state_container: AppContainer = request.app.state.container
        record = state_container.footprint_service.latest(session_id)
        total = record.result.total_emissions
        return {
            "totalEmissions": total,
            "benchmarks": _to_wire(record.benchmarks),
            "category": carbon_category(total),
            "message": carbon_message(total),
        }

    @app.post("/sessions/{session_id}/scenarios")
    async def simulate_scenario(
        session_id: UUID, scenario: ScenarioRequest, request: Request
    ) -> dict[str, object]:
        """Simulate category reductions against the latest footprint."""
        state_container: AppContainer = request.app.state.container
        changes = {
            to_snake(category): change
            for category, change in scenario.as_changes().items()
        }
        result = state_container.footprint_service.simulate(session_id, changes)
        return _to_wire(result)

    @app.post("/sessions/{session_id}/recalculate")
    async def recalculate(
        session_id: UUID, edits: RecalculateRequest, request: Request
    ) -> dict[str, object]:
        """Recompute the footprint with edited profile fields."""
        state_container: AppContainer = request.app.state.container
        result = state_container.footprint_service.recalculate(
            session_id, edits.changes
        )
        return _to_wire(result)

    @app.get("/sessions/{session_id}/reduction-potential")
    async def reduction_potential(
        session_id: UUID, request: Request
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        potentials = state_container.footprint_service.reduction_potential(session_id)
        return {"reductionPotential": _to_wire(potentials)}

    @app.get("/sessions/{session_id}/dashboard")
    async def dashboard(session_id: UUID, request: Request) -> dict[str, object]:
        """Return the dashboard view for the latest footprint."""
        state_container: AppContainer = request.app.state.container
        view = state_container.dashboard_service.get_dashboard(session_id)
        return {
            "footprint": _format_footprint(view.record),
            "householdSize": view.household_size,
            "country": view.country,
            "insights": _to_wire(view.insights),
            "goals": _to_wire(view.goals),
            "trends": _to_wire(view.trends),
            "scenarios": _to_wire(view.scenarios),
        }

    @app.get("/sessions/{session_id}/charts/{chart_type}")
    async def chart(
        session_id: UUID, chart_type: str, request: Request
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        data = state_container.dashboard_service.get_chart(session_id, chart_type)
        return {"type": chart_type, **_to_wire(data)}

    @app.get("/sessions/{session_id}/advice")
    async def advice(session_id: UUID, request: Request) -> dict[str, object]:
        """Return advisory text, or computed insights when it is unavailable."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.questionnaire_service.load_profile(session_id)
        record = state_container.footprint_service.latest(session_id)
        result = await state_container.advisory_service.advise(record, profile)
        return _to_wire(result)

    return app


def _format_session(session: SessionRecord) -> dict[str, object]:
    return {
        "sessionId": str(session.id),
        "createdAt": session.created_at.isoformat(),
        "expiresAt": session.expires_at.isoformat(),
        "steps": session.steps,
        "profile": session.profile,
    }


def _format_progress(progress: QuestionnaireProgress) -> dict[str, object]:
    return {
        "sessionId": str(progress.session_id),
        "progress": progress.progress,
        "completedSteps": progress.completed_steps,
        "totalSteps": progress.total_steps,
        "percentageComplete": progress.percentage_complete,
        "isComplete": progress.is_complete,
    }


def _format_footprint(record: FootprintRecord) -> dict[str, object]:
    """Footprint in the camelCase layout returned by every endpoint."""
    result = record.result
    return {
        "id": str(record.id),
        "sessionId": str(record.session_id),
        "totalEmissions": result.total_emissions,
        "emissions": {
            _camel(name): _to_wire(category)
            for name, category in result.emissions.items()
        },
        "dailyAverage": result.daily_average,
        "monthlyAverage": result.monthly_average,
        "yearlyTotal": result.yearly_total,
        "calculatedAt": result.calculated_at.isoformat(),
        "benchmarks": _to_wire(record.benchmarks),
    }


def _to_wire(value: object) -> object:
    """Convert domain dataclasses to JSON-ready values with camelCase keys.

    `None` attributes are omitted and `category` values use the wire names.
    """
    if is_dataclass(value) and not isinstance(value, type):
        wire: dict[str, object] = {}
        for item in fields(value):
            attribute = getattr(value, item.name)
            if attribute is None:
                continue
            if item.name == "category" and isinstance(attribute, str):
                wire[item.name] = _camel(attribute)
            else:
                wire[_camel(item.name)] = _to_wire(attribute)
        return wire
    if isinstance(value, dict):
        return {_camel(str(key)): _to_wire(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_to_wire(item) for item in value]
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    return value


def _camel(name: str) -> str:
    return to_camel(name) if "_" in name else name
