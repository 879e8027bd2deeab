"""Footprint aggregation and per-session calculation history."""

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from pydantic.alias_generators import to_camel

from carbon_footprint.domain.errors import ComputationError, FootprintNotFoundError
from carbon_footprint.domain.factors import EmissionFactorTable
from carbon_footprint.domain.footprint import (
    Benchmarks,
    CategoryEmissions,
    FootprintRecord,
    FootprintResult,
    safe_ratio,
)
from carbon_footprint.domain.profile import LifestyleProfile, parse_profile
from carbon_footprint.domain.scenarios import (
    RecalculationResult,
    ReductionPotential,
    ScenarioResult,
)
from carbon_footprint.services.benchmarks import BenchmarkService
from carbon_footprint.services.calculators import (
    calculate_food,
    calculate_home_energy,
    calculate_shopping,
    calculate_transportation,
    calculate_water,
)
from carbon_footprint.services.reduction import estimate_reduction_potential
from carbon_footprint.services.scenarios import simulate
from carbon_footprint.services.sessions import QuestionnaireService

HISTORY_LIMIT = 12

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class FootprintCalculator:
    """Runs the category calculators and sums their totals."""

    factors: EmissionFactorTable
    clock: Callable[[], datetime] = _utcnow

    def calculate(self, profile: LifestyleProfile) -> FootprintResult:
        """Compute the annual footprint of a validated profile."""
        region = profile.region
        emissions = CategoryEmissions(
            transportation=calculate_transportation(
                profile.transportation, region, self.factors
            ),
            home_energy=calculate_home_energy(profile.home_energy, region, self.factors),
            food=calculate_food(profile.food_diet, region, self.factors),
            water=calculate_water(profile.water_usage, region, self.factors),
            shopping=calculate_shopping(profile.shopping, region, self.factors),
        )
        total = sum(result.total for _, result in emissions.items())
        if not math.isfinite(total):
            raise ComputationError(f"total emissions are not finite: {total!r}")
        return FootprintResult(
            total_emissions=total,
            emissions=emissions,
            calculated_at=self.clock(),
        )

    def recalculate_with_changes(
        self,
        profile: LifestyleProfile,
        field_changes: Mapping[str, Mapping[str, object]],
    ) -> RecalculationResult:
        """Compare a profile's footprint with that of an edited copy."""
        modified_profile = parse_profile(apply_field_changes(profile, field_changes))
        original = self.calculate(profile).total_emissions
        modified = self.calculate(modified_profile).total_emissions
        reduction = original - modified
        return RecalculationResult(
            original=original,
            modified=modified,
            reduction=reduction,
            reduction_percent=safe_ratio(reduction, original) * 100,
        )


class FootprintRepository(Protocol):
    """Persistence interface for calculated footprints."""

    def create_footprint(
        self, session_id: UUID, result: FootprintResult, benchmarks: Benchmarks
    ) -> FootprintRecord:
        """Store a calculation and return the record."""

    def get_latest(self, session_id: UUID) -> FootprintRecord | None:
        """Return the most recent calculation for a session, if any."""

    def list_footprints(self, session_id: UUID, limit: int) -> list[FootprintRecord]:
        """Return recent calculations, most recent first."""


@dataclass
class FootprintService:
    """Calculates, stores and analyzes footprints for questionnaire sessions."""

    questionnaire_service: QuestionnaireService
    calculator: FootprintCalculator
    repository: FootprintRepository
    benchmark_service: BenchmarkService = field(default_factory=BenchmarkService)

    def calculate(self, session_id: UUID) -> FootprintRecord:
        """Compute and append a footprint for the session's profile."""
        profile = self.questionnaire_service.load_profile(session_id)
        result = self.calculator.calculate(profile)
        benchmarks = self.benchmark_service.benchmarks(
            result.total_emissions, profile.location.country
        )
        record = self.repository.create_footprint(session_id, result, benchmarks)
        _logger.info(
            "Footprint calculated: session=%s total=%.2f percentile=%s",
            session_id,
            result.total_emissions,
            benchmarks.percentile,
        )
        return record

    def latest(self, session_id: UUID) -> FootprintRecord:
        """Return the most recent footprint or raise FootprintNotFoundError."""
        self.questionnaire_service.get_session(session_id)
        record = self.repository.get_latest(session_id)
        if record is None:
            raise FootprintNotFoundError(str(session_id))
        return record

    def history(
        self, session_id: UUID, limit: int = HISTORY_LIMIT
    ) -> list[FootprintRecord]:
        """Return recent footprints, most recent first."""
        self.questionnaire_service.get_session(session_id)
        return self.repository.list_footprints(session_id, limit)

    def simulate(
        self, session_id: UUID, changes: Mapping[str, object]
    ) -> ScenarioResult:
        """Simulate category reductions against the latest footprint."""
        return simulate(self.latest(session_id).result, changes)

    def reduction_potential(self, session_id: UUID) -> list[ReductionPotential]:
        return estimate_reduction_potential(self.latest(session_id).result)

    def recalculate(
        self, session_id: UUID, field_changes: Mapping[str, Mapping[str, object]]
    ) -> RecalculationResult:
        """Recompute the footprint with edited profile fields, without storing it."""
        profile = self.questionnaire_service.load_profile(session_id)
        return self.calculator.recalculate_with_changes(profile, field_changes)


def apply_field_changes(
    profile: LifestyleProfile, field_changes: Mapping[str, Mapping[str, object]]
) -> dict[str, object]:
    """Overlay field edits on a profile's payload.

    Category and field names may be camelCase or snake_case. Categories the
    profile does not have are ignored; nested objects are merged.
    """
    payload = profile.to_payload()
    for category, changes in field_changes.items():
        section = payload.get(_wire_name(category))
        if not isinstance(section, dict):
            continue
        for name, value in changes.items():
            key = _wire_name(name)
            current = section.get(key)
            if isinstance(current, dict) and isinstance(value, Mapping):
                section[key] = {
                    **current,
                    **{_wire_name(k): v for k, v in value.items()},
                }
            else:
                section[key] = value
    return payload


def _wire_name(name: str) -> str:
    return to_camel(name) if "_" in name else name
