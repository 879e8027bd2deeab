"""Supplementary advice from an external text-generation service."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

from carbon_footprint.domain.dashboard import Insight
from carbon_footprint.domain.footprint import FootprintRecord
from carbon_footprint.domain.profile import LifestyleProfile
from carbon_footprint.services.dashboard import build_insights

_INSTRUCTIONS = (
    "You advise households on reducing their carbon footprint. "
    "Use the calculated figures as given."
)

_logger = logging.getLogger(__name__)


class AdvisoryClient(Protocol):
    """Interface for the external advisory service."""

    async def advise(
        self, *, model: str, instructions: str, payload: dict[str, object]
    ) -> str:
        """Return free-form advice for a footprint payload."""


@dataclass(frozen=True)
class Advice:
    """Advice text, or deterministic insights when the service is unavailable."""

    source: str
    text: str | None
    insights: list[Insight]


@dataclass
class AdvisoryService:
    """Sends computed footprints to the advisory client."""

    client: AdvisoryClient | None
    model: str

    async def advise(
        self, record: FootprintRecord, profile: LifestyleProfile
    ) -> Advice:
        """Return advice, falling back to computed insights on failure."""
        fallback = build_insights(record, profile.household_size)
        if self.client is None:
            return Advice(source="fallback", text=None, insights=fallback)
        try:
            text = await self.client.advise(
                model=self.model,
                instructions=_INSTRUCTIONS,
                payload=advisory_payload(record, profile),
            )
        except Exception:
            _logger.exception(
                "Advisory request failed", extra={"session_id": str(record.session_id)}
            )
            return Advice(source="fallback", text=None, insights=fallback)
        if not text or not text.strip():
            _logger.warning("Advisory service returned no content")
            return Advice(source="fallback", text=None, insights=fallback)
        return Advice(source="advisory", text=text.strip(), insights=fallback)


def advisory_payload(
    record: FootprintRecord, profile: LifestyleProfile
) -> dict[str, object]:
    """Read-only JSON view of the footprint, profile and benchmarks."""
    result = record.result
    return {
        "footprint": {
            "totalEmissions": result.total_emissions,
            "emissions": {
                name: {"total": category.total, "breakdown": category.breakdown}
                for name, category in result.emissions.items()
            },
            "calculatedAt": result.calculated_at.isoformat(),
        },
        "profile": profile.to_payload(),
        "benchmarks": {
            "localAverage": record.benchmarks.local_average,
            "nationalAverage": record.benchmarks.national_average,
            "globalTarget": record.benchmarks.global_target,
            "percentile": record.benchmarks.percentile,
        },
    }


def payload_text(payload: dict[str, object]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True)
