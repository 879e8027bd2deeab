"""Dashboard domain models."""

from dataclasses import dataclass, field

from carbon_footprint.domain.footprint import FootprintRecord
from carbon_footprint.domain.scenarios import ReductionScenario


@dataclass(frozen=True)
class Insight:
    """Short fact about a footprint."""

    type: str
    title: str
    description: str
    value: float
    category: str | None = None


@dataclass(frozen=True)
class GoalProgress:
    """Progress toward the global per-capita target."""

    current: float
    target: float
    progress: float
    remaining: float
    achieved: bool


@dataclass(frozen=True)
class ChartDataset:
    label: str
    data: list[float]
    background_color: str | list[str] | None = None
    border_color: str | None = None
    border_width: int | None = None


@dataclass(frozen=True)
class ChartData:
    """Labels and datasets in the layout chart libraries expect."""

    labels: list[str]
    datasets: list[ChartDataset] = field(default_factory=list)


@dataclass(frozen=True)
class Trends:
    available: bool
    message: str | None = None
    totals: list[float] = field(default_factory=list)


@dataclass(frozen=True)
class Dashboard:
    """Everything the dashboard view renders for a session."""

    record: FootprintRecord
    household_size: int
    country: str
    insights: list[Insight]
    goals: GoalProgress
    trends: Trends
    scenarios: list[ReductionScenario]
