"""Scenario and reduction-potential models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CategoryChange:
    """Original and simulated totals for one category."""

    category: str
    original: float
    simulated: float

    @property
    def change(self) -> float:
        return self.original - self.simulated


@dataclass(frozen=True)
class ScenarioResult:
    """Outcome of applying hypothetical reductions to a footprint."""

    original: float
    simulated: float
    reduction: float
    reduction_percent: float
    changes: dict[str, object]
    new_category: str
    breakdown: list[CategoryChange]


@dataclass(frozen=True)
class RecalculationResult:
    """Outcome of recomputing a footprint after editing profile fields."""

    original: float
    modified: float
    reduction: float
    reduction_percent: float


@dataclass(frozen=True)
class ReductionPotential:
    """Maximum theoretical reduction for a category."""

    category: str
    current: float
    max_reduction: float
    potential: int
    actions: list[str]


@dataclass(frozen=True)
class ReductionScenario:
    """Preset reduction plan expressed as a share of the total."""

    name: str
    description: str
    timeframe: str
    new_total: float
    reduction: float
    reduction_percent: float
    actions: list[str]
    feasibility: int
    cost: str
