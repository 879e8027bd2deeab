"""Dashboard insights, goal progress and chart series."""

from dataclasses import dataclass
from uuid import UUID

from carbon_footprint.domain.dashboard import (
    ChartData,
    ChartDataset,
    Dashboard,
    GoalProgress,
    Insight,
    Trends,
)
from carbon_footprint.domain.errors import UnknownChartTypeError
from carbon_footprint.domain.footprint import FootprintRecord, FootprintResult, safe_ratio
from carbon_footprint.services.benchmarks import GLOBAL_TARGET
from carbon_footprint.services.footprint import FootprintService
from carbon_footprint.services.scenarios import default_scenarios
from carbon_footprint.services.sessions import QuestionnaireService

CHART_TYPES = ("pie", "bar", "waterfall", "comparison", "trends", "scenarios")
MIN_TREND_POINTS = 2

CATEGORY_LABELS = {
    "transportation": "Transportation",
    "home_energy": "Home Energy",
    "food": "Food",
    "water": "Water",
    "shopping": "Shopping",
}

_PALETTE = ["#FF6384", "#36A2EB", "#FFCE56", "#4BC0C0", "#9966FF", "#FF9F40"]


@dataclass
class DashboardService:
    """Builds dashboard views from the stored footprint history."""

    questionnaire_service: QuestionnaireService
    footprint_service: FootprintService

    def get_dashboard(self, session_id: UUID) -> Dashboard:
        """Return the latest footprint with insights, goals and trends."""
        profile = self.questionnaire_service.load_profile(session_id)
        record = self.footprint_service.latest(session_id)
        history = self.footprint_service.history(session_id)
        total = record.result.total_emissions
        return Dashboard(
            record=record,
            household_size=profile.household_size,
            country=profile.location.country,
            insights=build_insights(record, profile.household_size),
            goals=goal_progress(total),
            trends=build_trends(history),
            scenarios=default_scenarios(total),
        )

    def get_chart(self, session_id: UUID, chart_type: str) -> ChartData:
        """Return chart series of the requested type."""
        if chart_type not in CHART_TYPES:
            raise UnknownChartTypeError(chart_type)
        record = self.footprint_service.latest(session_id)
        if chart_type == "trends":
            return trends_chart(self.footprint_service.history(session_id))
        return build_chart(chart_type, record)


def build_insights(record: FootprintRecord, household_size: int) -> list[Insight]:
    """Largest contributor, target comparison and per-person footprint."""
    result = record.result
    total = result.total_emissions
    target = record.benchmarks.global_target

    highest_name, highest = "", 0.0
    for name, category in result.emissions.items():
        if category.total > highest:
            highest_name, highest = name, category.total

    insights = [
        Insight(
            type="highest_category",
            title=f"{CATEGORY_LABELS.get(highest_name, highest_name)} is your "
            "largest contributor",
            description=(
                f"Accounting for {round(safe_ratio(highest, total) * 100)}% "
                "of your footprint"
            ),
            value=highest,
            category=highest_name or None,
        )
    ]
    if total < target:
        insights.append(
            Insight(
                type="below_target",
                title="You're below the global target!",
                description=(
                    f"Your footprint is "
                    f"{round(safe_ratio(target - total, target) * 100)}% "
                    "below the 2-ton target"
                ),
                value=target - total,
            )
        )
    else:
        insights.append(
            Insight(
                type="above_target",
                title="Room for improvement",
                description=(
                    f"You're {round(safe_ratio(total - target, target) * 100)}% "
                    "above the global target"
                ),
                value=total - target,
            )
        )
    per_person = total / max(household_size, 1)
    insights.append(
        Insight(
            type="per_person",
            title="Per person footprint",
            description=(
                f"{round(per_person)} kg CO2e per person in your household"
            ),
            value=per_person,
        )
    )
    return insights


def goal_progress(current: float, target: float = GLOBAL_TARGET) -> GoalProgress:
    """Progress toward the annual target, capped at 100%."""
    progress = 100.0 if current <= 0 else min(target / current * 100, 100.0)
    return GoalProgress(
        current=current,
        target=target,
        progress=progress,
        remaining=max(current - target, 0.0),
        achieved=current <= target,
    )


def build_trends(history: list[FootprintRecord]) -> Trends:
    """Totals over time, oldest first; needs at least two calculations."""
    if len(history) < MIN_TREND_POINTS:
        return Trends(available=False, message="Not enough data for trends")
    ordered = sorted(history, key=lambda record: record.calculated_at)
    return Trends(
        available=True,
        totals=[record.result.total_emissions for record in ordered],
    )


def build_chart(chart_type: str, record: FootprintRecord) -> ChartData:
    """Chart series derived from a single footprint."""
    result = record.result
    if chart_type == "pie":
        return ChartData(
            labels=_labels(result),
            datasets=[
                ChartDataset(
                    label="Emissions (kg CO2e)",
                    data=_totals(result),
                    background_color=_PALETTE,
                    border_width=2,
                )
            ],
        )
    if chart_type == "bar":
        return ChartData(
            labels=_labels(result),
            datasets=[
                ChartDataset(
                    label="Emissions (kg CO2e)",
                    data=_totals(result),
                    background_color="#36A2EB",
                    border_color="#1E88E5",
                    border_width=1,
                )
            ],
        )
    if chart_type == "waterfall":
        cumulative: list[float] = []
        running = 0.0
        for value in _totals(result):
            running += value
            cumulative.append(running)
        return ChartData(
            labels=[*_labels(result), "Total"],
            datasets=[
                ChartDataset(
                    label="Cumulative Emissions",
                    data=[*cumulative, result.total_emissions],
                    background_color="#4BC0C0",
                )
            ],
        )
    if chart_type == "comparison":
        benchmarks = record.benchmarks
        return ChartData(
            labels=["Your Footprint", "Local Average", "National Average", "Global Target"],
            datasets=[
                ChartDataset(
                    label="Emissions (kg CO2e)",
                    data=[
                        result.total_emissions,
                        benchmarks.local_average,
                        benchmarks.national_average,
                        benchmarks.global_target,
                    ],
                    background_color=_PALETTE[:4],
                    border_width=1,
                )
            ],
        )
    if chart_type == "scenarios":
        scenarios = default_scenarios(result.total_emissions)
        return ChartData(
            labels=["Current", *(scenario.name for scenario in scenarios)],
            datasets=[
                ChartDataset(
                    label="Emissions (kg CO2e)",
                    data=[
                        result.total_emissions,
                        *(scenario.new_total for scenario in scenarios),
                    ],
                    background_color=_PALETTE[: len(scenarios) + 1],
                    border_width=1,
                )
            ],
        )
    raise UnknownChartTypeError(chart_type)


def trends_chart(history: list[FootprintRecord]) -> ChartData:
    """Total emissions per calculation, oldest first."""
    ordered = sorted(history, key=lambda record: record.calculated_at)
    if len(ordered) < MIN_TREND_POINTS:
        return ChartData(labels=[], datasets=[])
    return ChartData(
        labels=[record.calculated_at.date().isoformat() for record in ordered],
        datasets=[
            ChartDataset(
                label="Total Emissions (kg CO2e)",
                data=[record.result.total_emissions for record in ordered],
                border_color="#36A2EB",
                background_color="rgba(54, 162, 235, 0.1)",
            )
        ],
    )


def _labels(result: FootprintResult) -> list[str]:
    return [CATEGORY_LABELS[name] for name, _ in result.emissions.items()]


def _totals(result: FootprintResult) -> list[float]:
    return [category.total for _, category in result.emissions.items()]
