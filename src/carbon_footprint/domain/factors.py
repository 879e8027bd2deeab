"""Emission factor table in kg CO2e per unit of activity.

Values follow EPA, IPCC and DEFRA 2024 averages. The table is data: calculators
only read it through `EmissionFactorTable.lookup`.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

FactorTree = Mapping[str, Mapping[str, float | Mapping[str, float]]]

_FACTORS: dict[str, dict[str, float | dict[str, float]]] = {
    "transportation": {
        "car": {
            "petrol": 0.192,
            "diesel": 0.171,
            "hybrid": 0.108,
            "electric": 0.053,
            "unknown": 0.180,
        },
        "public_transport": 0.050,
        "bicycle": 0.0,
        "walking": 0.0,
    },
    "energy": {
        "electricity": {
            "grid": 0.309,
            "renewable": 0.013,
        },
    },
    "food": {
        "meal": {
            "meat": 7.5,
            "vegetarian": 1.5,
            "vegan": 0.9,
        },
    },
    "water": {
        "liter": 0.001,
    },
    "shopping": {
        "item": {
            "clothing": 15.0,
            "electronics": 200.0,
        },
    },
}

# Grid-mix multipliers relative to the average grid.
_GRID_MULTIPLIERS = {
    "norway": 0.05,
    "france": 0.19,
    "germany": 1.45,
    "india": 2.32,
    "china": 2.10,
    "usa": 1.0,
    "uk": 0.74,
    "japan": 1.54,
    "brazil": 0.24,
    "australia": 2.06,
}

_UNIT_CONVERSIONS = {
    "miles": 1.60934,
    "gallons": 3.78541,
    "pounds": 0.453592,
}


@dataclass(frozen=True)
class EmissionFactorTable:
    """Read-only factor lookup with regional grid adjustments."""

    version: str
    factors: FactorTree
    grid_multipliers: Mapping[str, float] = field(default_factory=dict)
    unit_conversions: Mapping[str, float] = field(default_factory=dict)

    def lookup(
        self,
        category: str,
        subcategory: str,
        activity: str | None = None,
        region: str | None = None,
    ) -> float:
        """Return the factor for a key, falling back to `unknown` or 0."""
        sub = self.factors.get(category, {}).get(subcategory)
        if sub is None:
            return 0.0
        if isinstance(sub, Mapping):
            if activity is None:
                return 0.0
            factor = sub.get(activity, sub.get("unknown", 0.0))
        else:
            factor = sub
        if (
            category == "energy"
            and subcategory == "electricity"
            and activity == "grid"
            and region
        ):
            multiplier = self.grid_multipliers.get(region.strip().lower())
            if multiplier is not None:
                factor *= multiplier
        return float(factor)

    def convert(self, amount: float, unit: str) -> float:
        """Convert imperial quantities to km, liters or kg."""
        return amount * self.unit_conversions.get(unit, 1.0)

    def as_dict(self) -> dict[str, object]:
        """Plain representation for admin inspection."""
        return {
            "version": self.version,
            "factors": {
                category: {
                    name: dict(value) if isinstance(value, Mapping) else value
                    for name, value in subcategories.items()
                }
                for category, subcategories in self.factors.items()
            },
            "grid_multipliers": dict(self.grid_multipliers),
            "unit_conversions": dict(self.unit_conversions),
        }


def load_default_factor_table() -> EmissionFactorTable:
    """Build the bundled factor table."""
    return EmissionFactorTable(
        version="2024.1",
        factors=MappingProxyType(
            {
                category: MappingProxyType(
                    {
                        name: MappingProxyType(value)
                        if isinstance(value, dict)
                        else value
                        for name, value in subcategories.items()
                    }
                )
                for category, subcategories in _FACTORS.items()
            }
        ),
        grid_multipliers=MappingProxyType(_GRID_MULTIPLIERS),
        unit_conversions=MappingProxyType(_UNIT_CONVERSIONS),
    )
