"""Per-category emission calculators.

Each calculator is a pure function of its slice of the profile, the region and
the factor table. Outputs are checked for negative or non-finite values, which
indicate a defect rather than bad input.
"""

import math

from carbon_footprint.domain.errors import ComputationError
from carbon_footprint.domain.factors import EmissionFactorTable
from carbon_footprint.domain.footprint import DAYS_PER_YEAR, CategoryResult
from carbon_footprint.domain.profile import (
    FoodDietInput,
    HomeEnergyInput,
    ShoppingInput,
    TransportationInput,
    WaterUsageInput,
)

WEEKS_PER_YEAR = 52
MEALS_PER_DAY = 3

# kWh drawn per hour of use.
_APPLIANCE_KWH = {
    "ac_heating": 2.0,
    "television": 0.15,
    "computer": 0.3,
}
_LIGHTING_KWH_PER_HOUR = 0.06

_HOME_ENERGY_SPLIT = {"electricity": 0.6, "heating": 0.3, "appliances": 0.1}

_FOOD_WASTE_MULTIPLIERS = {"minimal": 1.05, "moderate": 1.15, "significant": 1.3}
_FOOD_SPLIT = {"meat": 0.4, "dairy": 0.2, "other": 0.3, "waste": 0.1}

_SHOWER_LITERS_PER_MINUTE = 12
_BATH_LITERS = 150
_BASELINE_DAILY_LITERS = 50
_WATER_SAVING_DISCOUNT = 0.7
_WATER_SPLIT = {"usage": 0.6, "heating": 0.4}

_CLOTHING_ITEMS_PER_YEAR = {
    "monthly": 36.0,
    "quarterly": 12.0,
    "biannually": 6.0,
    "annually": 3.0,
}
_ELECTRONICS_ITEMS_PER_YEAR = {
    "yearly": 1.0,
    "every_2_years": 1 / 2,
    "every_3_years": 1 / 3,
    "longer": 0.2,
}
_PACKAGING_SURCHARGE = 0.10


def calculate_transportation(
    data: TransportationInput, region: str, factors: EmissionFactorTable
) -> CategoryResult:
    """Annual commute and additional travel emissions."""
    commute_km = (
        data.daily_commute_distance * 2 * data.commute_frequency * WEEKS_PER_YEAR
    )
    additional_km = data.additional_weekly_travel * WEEKS_PER_YEAR
    factor = _transport_factor(data, factors)
    result = CategoryResult(
        total=(commute_km + additional_km) * factor,
        breakdown={
            "commute": commute_km * factor,
            "additional_travel": additional_km * factor,
        },
    )
    return _checked("transportation", result)


def _transport_factor(data: TransportationInput, factors: EmissionFactorTable) -> float:
    if data.primary_mode == "bike":
        return factors.lookup("transportation", "bicycle")
    if data.primary_mode == "walking":
        return factors.lookup("transportation", "walking")
    if data.primary_mode == "public_transport":
        return factors.lookup("transportation", "public_transport")
    return factors.lookup("transportation", "car", data.vehicle_type or "unknown")


def calculate_home_energy(
    data: HomeEnergyInput, region: str, factors: EmissionFactorTable
) -> CategoryResult:
    """Annual household electricity emissions."""
    appliances = data.daily_appliances
    daily_kwh = (
        appliances.ac_heating * _APPLIANCE_KWH["ac_heating"]
        + appliances.television * _APPLIANCE_KWH["television"]
        + appliances.computer * _APPLIANCE_KWH["computer"]
        + data.lighting_hours * _LIGHTING_KWH_PER_HOUR
    )
    yearly_kwh = daily_kwh * DAYS_PER_YEAR
    if data.renewable_energy:
        factor = factors.lookup("energy", "electricity", "renewable")
    else:
        factor = factors.lookup("energy", "electricity", "grid", region)
    total = yearly_kwh * factor
    return _checked("home_energy", _split(total, _HOME_ENERGY_SPLIT))


def calculate_food(
    data: FoodDietInput, region: str, factors: EmissionFactorTable
) -> CategoryResult:
    """Annual diet emissions including food waste."""
    meals_per_year = DAYS_PER_YEAR * MEALS_PER_DAY
    if data.diet_type == "vegan":
        factor = factors.lookup("food", "meal", "vegan")
    elif data.diet_type == "vegetarian":
        factor = factors.lookup("food", "meal", "vegetarian")
    else:
        factor = factors.lookup("food", "meal", "meat")
    multiplier = _FOOD_WASTE_MULTIPLIERS.get(data.food_waste, 1.0)
    total = meals_per_year * factor * multiplier
    return _checked("food", _split(total, _FOOD_SPLIT))


def calculate_water(
    data: WaterUsageInput, region: str, factors: EmissionFactorTable
) -> CategoryResult:
    """Annual emissions from water treatment and heating."""
    daily_liters = (
        data.shower_duration * _SHOWER_LITERS_PER_MINUTE * data.shower_frequency
        + data.bath_frequency * _BATH_LITERS / 7
        + _BASELINE_DAILY_LITERS
    )
    total = daily_liters * DAYS_PER_YEAR * factors.lookup("water", "liter")
    if data.water_saving_fixtures:
        total *= _WATER_SAVING_DISCOUNT
    return _checked("water", _split(total, _WATER_SPLIT))


def calculate_shopping(
    data: ShoppingInput, region: str, factors: EmissionFactorTable
) -> CategoryResult:
    """Annual emissions from clothing, electronics and packaging."""
    clothing_items = _CLOTHING_ITEMS_PER_YEAR.get(data.clothing_frequency, 0.0)
    electronics_items = _ELECTRONICS_ITEMS_PER_YEAR.get(data.electronics_upgrade, 0.0)
    clothing = clothing_items * factors.lookup("shopping", "item", "clothing")
    electronics = electronics_items * factors.lookup("shopping", "item", "electronics")
    packaging = (clothing + electronics) * _PACKAGING_SURCHARGE
    result = CategoryResult(
        total=clothing + electronics + packaging,
        breakdown={
            "clothing": clothing,
            "electronics": electronics,
            "packaging": packaging,
        },
    )
    return _checked("shopping", result)


def _split(total: float, proportions: dict[str, float]) -> CategoryResult:
    """Attribute fixed presentation shares of a total."""
    return CategoryResult(
        total=total,
        breakdown={name: total * share for name, share in proportions.items()},
    )


def _checked(category: str, result: CategoryResult) -> CategoryResult:
    values = [("total", result.total), *result.breakdown.items()]
    for name, value in values:
        if not math.isfinite(value) or value < 0:
            raise ComputationError(
                f"{category}.{name} produced an invalid value: {value!r}"
            )
    return result
