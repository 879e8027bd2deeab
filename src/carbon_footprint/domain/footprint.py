"""Domain models for calculated footprints."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

CATEGORY_NAMES = ("transportation", "home_energy", "food", "water", "shopping")

DAYS_PER_YEAR = 365
MONTHS_PER_YEAR = 12


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, treating a zero denominator as a zero ratio."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


@dataclass(frozen=True)
class CategoryResult:
    """Annual emissions for one category with an attributed breakdown."""

    total: float
    breakdown: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class CategoryEmissions:
    """Results for the five lifestyle categories."""

    transportation: CategoryResult
    home_energy: CategoryResult
    food: CategoryResult
    water: CategoryResult
    shopping: CategoryResult

    def items(self) -> list[tuple[str, CategoryResult]]:
        """Return (name, result) pairs in the fixed category order."""
        return [(name, getattr(self, name)) for name in CATEGORY_NAMES]

    def get(self, name: str) -> CategoryResult | None:
        """Return a category result by name, if the category exists."""
        if name not in CATEGORY_NAMES:
            return None
        return getattr(self, name)


@dataclass(frozen=True)
class FootprintResult:
    """Annual footprint of a household."""

    total_emissions: float
    emissions: CategoryEmissions
    calculated_at: datetime

    @property
    def daily_average(self) -> float:
        return self.total_emissions / DAYS_PER_YEAR

    @property
    def monthly_average(self) -> float:
        return self.total_emissions / MONTHS_PER_YEAR

    @property
    def yearly_total(self) -> float:
        return self.total_emissions

    def share(self, category: str) -> float:
        """Percentage of the total attributed to a category."""
        result = self.emissions.get(category)
        if result is None:
            return 0.0
        return safe_ratio(result.total, self.total_emissions) * 100


@dataclass(frozen=True)
class Benchmarks:
    """Reference averages and the household's percentile against them."""

    local_average: float
    national_average: float
    global_target: float
    percentile: int


@dataclass(frozen=True)
class FootprintRecord:
    """A persisted footprint calculation for a session."""

    id: UUID
    session_id: UUID
    result: FootprintResult
    benchmarks: Benchmarks

    @property
    def calculated_at(self) -> datetime:
        return self.result.calculated_at
