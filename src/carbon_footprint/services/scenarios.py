"""What-if simulation over a calculated footprint."""

import math
from collections.abc import Mapping
from dataclasses import replace

from carbon_footprint.domain.errors import ProfileValidationError
from carbon_footprint.domain.footprint import (
    CategoryEmissions,
    CategoryResult,
    FootprintResult,
    safe_ratio,
)
from carbon_footprint.domain.scenarios import (
    CategoryChange,
    ReductionScenario,
    ScenarioResult,
)
from carbon_footprint.services.benchmarks import carbon_category


def simulate(baseline: FootprintResult, changes: Mapping[str, object]) -> ScenarioResult:
    """Apply per-category reductions without touching the baseline.

    A change is either an absolute kg CO2e reduction or a mapping with a
    `percentage` of the category total. Unknown categories are ignored and
    category totals are clamped at zero. Non-finite amounts, or changes whose
    re-summed total is not finite, raise ProfileValidationError.
    """
    simulated = apply_changes(baseline, changes)
    reduction = baseline.total_emissions - simulated.total_emissions
    return ScenarioResult(
        original=baseline.total_emissions,
        simulated=simulated.total_emissions,
        reduction=reduction,
        reduction_percent=round(safe_ratio(reduction, baseline.total_emissions) * 100),
        changes=dict(changes),
        new_category=carbon_category(simulated.total_emissions),
        breakdown=[
            CategoryChange(
                category=name,
                original=result.total,
                simulated=getattr(simulated.emissions, name).total,
            )
            for name, result in baseline.emissions.items()
        ],
    )


def apply_changes(
    baseline: FootprintResult, changes: Mapping[str, object]
) -> FootprintResult:
    """Return a copy of the footprint with the reductions applied."""
    updated = {}
    for category, change in changes.items():
        current = baseline.emissions.get(category)
        if current is None:
            continue
        amount = _reduction_amount(category, current.total, change)
        updated[category] = _rescaled(current, max(0.0, current.total - amount))
    if not updated:
        return baseline

    emissions: CategoryEmissions = replace(baseline.emissions, **updated)
    total = sum(result.total for _, result in emissions.items())
    if not math.isfinite(total):
        raise ProfileValidationError(
            "changes", "simulated total emissions are out of range"
        )
    return replace(baseline, total_emissions=total, emissions=emissions)


def _rescaled(current: CategoryResult, total: float) -> CategoryResult:
    """Category with a new total and its breakdown scaled to match."""
    ratio = safe_ratio(total, current.total)
    return CategoryResult(
        total=total,
        breakdown={name: value * ratio for name, value in current.breakdown.items()},
    )


def _reduction_amount(category: str, total: float, change: object) -> float:
    if isinstance(change, bool):
        raise ProfileValidationError(f"changes.{category}", "expected a number")
    if isinstance(change, int | float):
        return _finite(category, float(change))
    if isinstance(change, Mapping):
        percentage = change.get("percentage")
        if isinstance(percentage, int | float) and not isinstance(percentage, bool):
            return _finite(category, total * (percentage / 100))
    raise ProfileValidationError(
        f"changes.{category}", "expected a number or an object with a percentage"
    )


def _finite(category: str, amount: float) -> float:
    if not math.isfinite(amount):
        raise ProfileValidationError(f"changes.{category}", "must be a finite number")
    return amount


def default_scenarios(total_emissions: float) -> list[ReductionScenario]:
    """Preset plans shown when no custom scenario has been simulated."""
    return [
        ReductionScenario(
            name="Quick Wins",
            description="Easy changes you can make today",
            timeframe="0-3 months",
            new_total=total_emissions * 0.9,
            reduction=total_emissions * 0.1,
            reduction_percent=10,
            actions=[
                "Switch to LED bulbs",
                "Reduce meat consumption by 1 day per week",
            ],
            feasibility=9,
            cost="free",
        ),
        ReductionScenario(
            name="Moderate Impact",
            description="Achievable changes over 6 months",
            timeframe="3-6 months",
            new_total=total_emissions * 0.75,
            reduction=total_emissions * 0.25,
            reduction_percent=25,
            actions=["Install smart thermostat", "Carpool 2 days per week"],
            feasibility=7,
            cost="medium",
        ),
    ]
