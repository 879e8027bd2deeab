"""Reduction-potential estimates per category."""

from carbon_footprint.domain.footprint import FootprintResult
from carbon_footprint.domain.scenarios import ReductionPotential

DEFAULT_FRACTION = 0.3
DEFAULT_ACTIONS = ("General reduction measures",)

_LEVERS: dict[str, tuple[float, tuple[str, ...]]] = {
    "transportation": (
        0.8,
        ("Switch to electric vehicle", "Use public transport", "Work from home"),
    ),
    "home_energy": (
        0.7,
        (
            "Switch to renewable energy",
            "Improve insulation",
            "Energy-efficient appliances",
        ),
    ),
    "food": (
        0.6,
        ("Plant-based diet", "Reduce food waste", "Local sourcing"),
    ),
    "water": (
        0.5,
        ("Shorter showers", "Water-efficient fixtures", "Reduce hot water use"),
    ),
    "shopping": (
        0.7,
        ("Buy less", "Choose durable goods", "Repair instead of replace"),
    ),
}


def estimate_category(category: str, current: float) -> ReductionPotential:
    """Maximum theoretical reduction for one category total."""
    fraction, actions = _LEVERS.get(category, (DEFAULT_FRACTION, DEFAULT_ACTIONS))
    return ReductionPotential(
        category=category,
        current=current,
        max_reduction=current * fraction,
        potential=round(fraction * 100),
        actions=list(actions),
    )


def estimate_reduction_potential(footprint: FootprintResult) -> list[ReductionPotential]:
    """Reduction potential for every category of a footprint."""
    return [
        estimate_category(name, result.total)
        for name, result in footprint.emissions.items()
    ]
