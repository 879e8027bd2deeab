"""Supabase repository for calculated footprints."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from carbon_footprint.domain.footprint import (
    CATEGORY_NAMES,
    Benchmarks,
    CategoryEmissions,
    CategoryResult,
    FootprintRecord,
    FootprintResult,
)
from carbon_footprint.services.footprint import FootprintRepository

_COLUMNS = (
    "id, session_id, total_emissions, emissions_json, benchmarks_json, calculated_at"
)


@dataclass
class SupabaseFootprintRepository(FootprintRepository):
    """Supabase implementation for the append-only footprint history."""

    client: Client

    def create_footprint(
        self, session_id: UUID, result: FootprintResult, benchmarks: Benchmarks
    ) -> FootprintRecord:
        """Insert a footprint row and return it."""
        response = (
            self.client.table("footprints")
            .insert(
                {
                    "session_id": str(session_id),
                    "total_emissions": result.total_emissions,
                    "emissions_json": {
                        name: {"total": category.total, "breakdown": category.breakdown}
                        for name, category in result.emissions.items()
                    },
                    "benchmarks_json": {
                        "local_average": benchmarks.local_average,
                        "national_average": benchmarks.national_average,
                        "global_target": benchmarks.global_target,
                        "percentile": benchmarks.percentile,
                    },
                    "calculated_at": result.calculated_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to store footprint")
        return FootprintRecord(
            id=UUID(str(response.data[0]["id"])),
            session_id=session_id,
            result=result,
            benchmarks=benchmarks,
        )

    def get_latest(self, session_id: UUID) -> FootprintRecord | None:
        """Return the most recent footprint for a session."""
        records = self.list_footprints(session_id, limit=1)
        return records[0] if records else None

    def list_footprints(self, session_id: UUID, limit: int) -> list[FootprintRecord]:
        """Return recent footprints, most recent first."""
        response = (
            self.client.table("footprints")
            .select(_COLUMNS)
            .eq("session_id", str(session_id))
            .order("calculated_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> FootprintRecord:
    emissions_raw = row.get("emissions_json") or {}
    categories = {}
    for name in CATEGORY_NAMES:
        raw = emissions_raw.get(name) or {}
        breakdown = raw.get("breakdown") or {}
        categories[name] = CategoryResult(
            total=float(raw.get("total", 0.0)),
            breakdown={key: float(value) for key, value in breakdown.items()},
        )
    benchmarks_raw = row.get("benchmarks_json") or {}
    return FootprintRecord(
        id=UUID(str(row["id"])),
        session_id=UUID(str(row["session_id"])),
        result=FootprintResult(
            total_emissions=float(row.get("total_emissions", 0.0)),
            emissions=CategoryEmissions(**categories),
            calculated_at=datetime.fromisoformat(str(row["calculated_at"])),
        ),
        benchmarks=Benchmarks(
            local_average=float(benchmarks_raw.get("local_average", 0.0)),
            national_average=float(benchmarks_raw.get("national_average", 0.0)),
            global_target=float(benchmarks_raw.get("global_target", 0.0)),
            percentile=int(benchmarks_raw.get("percentile", 0)),
        ),
    )
