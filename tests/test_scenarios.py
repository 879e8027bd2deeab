"""Tests for what-if scenario simulation."""

from dataclasses import replace

import pytest

from carbon_footprint.domain.errors import ProfileValidationError
from carbon_footprint.domain.footprint import CategoryResult
from carbon_footprint.services.scenarios import apply_changes, default_scenarios, simulate
from tests.conftest import make_footprint


def test_absolute_reduction() -> None:
    baseline = make_footprint()

    result = simulate(baseline, {"transportation": 500})

    assert result.original == pytest.approx(6500)
    assert result.simulated == pytest.approx(6000)
    assert result.reduction == pytest.approx(500)
    assert result.reduction_percent == 8
    assert result.new_category == "Average"


def test_percentage_reduction() -> None:
    baseline = make_footprint()

    result = simulate(baseline, {"food": {"percentage": 50}})

    assert result.simulated == pytest.approx(5000)
    assert result.reduction_percent == 23
    food = next(item for item in result.breakdown if item.category == "food")
    assert food.simulated == pytest.approx(1500)
    assert food.change == pytest.approx(1500)


def test_reduction_is_clamped_at_zero() -> None:
    baseline = make_footprint(water=100)

    result = simulate(baseline, {"water": 1000})

    water = next(item for item in result.breakdown if item.category == "water")
    assert water.simulated == 0
    assert result.reduction == pytest.approx(100)


def test_empty_changes_keep_baseline() -> None:
    baseline = make_footprint()

    assert apply_changes(baseline, {}) is baseline
    result = simulate(baseline, {})
    assert result.simulated == result.original
    assert result.reduction == 0
    assert result.reduction_percent == 0


def test_unknown_categories_are_ignored() -> None:
    baseline = make_footprint()

    result = simulate(baseline, {"aviation": 2000, "shopping": 100})

    assert result.reduction == pytest.approx(100)


def test_negative_amount_increases_category() -> None:
    baseline = make_footprint()

    result = simulate(baseline, {"home_energy": -500})

    assert result.simulated == pytest.approx(7000)
    assert result.reduction == pytest.approx(-500)


def test_baseline_is_not_mutated() -> None:
    baseline = make_footprint()

    simulate(baseline, {"food": 3000, "transportation": {"percentage": 100}})

    assert baseline.total_emissions == pytest.approx(6500)
    assert baseline.emissions.food.total == pytest.approx(3000)


def test_simulated_total_is_sum_of_categories() -> None:
    baseline = make_footprint()

    simulated = apply_changes(baseline, {"food": 1000, "water": 50})

    assert simulated.total_emissions == pytest.approx(
        sum(result.total for _, result in simulated.emissions.items())
    )
    assert simulated.calculated_at == baseline.calculated_at


@pytest.mark.parametrize("change", [True, "lots", {"amount": 10}])
def test_invalid_change_is_rejected(change) -> None:
    with pytest.raises(ProfileValidationError) as exc_info:
        simulate(make_footprint(), {"food": change})

    assert exc_info.value.field == "changes.food"


def test_zero_baseline_has_zero_percent() -> None:
    baseline = make_footprint(0, 0, 0, 0, 0)

    result = simulate(baseline, {"food": 10})

    assert result.reduction_percent == 0


def test_default_scenarios() -> None:
    quick, moderate = default_scenarios(10000)

    assert quick.name == "Quick Wins"
    assert quick.new_total == pytest.approx(9000)
    assert quick.reduction_percent == 10
    assert moderate.name == "Moderate Impact"
    assert moderate.new_total == pytest.approx(7500)
    assert moderate.reduction == pytest.approx(2500)


@pytest.mark.parametrize(
    "change",
    [
        float("nan"),
        float("inf"),
        float("-inf"),
        {"percentage": float("nan")},
        {"percentage": float("inf")},
    ],
)
def test_non_finite_change_is_rejected(change) -> None:
    baseline = make_footprint()

    with pytest.raises(ProfileValidationError) as exc_info:
        simulate(baseline, {"transportation": change})

    assert exc_info.value.field == "changes.transportation"
    assert baseline.emissions.transportation.total == pytest.approx(1000)


def test_overflowing_total_is_rejected() -> None:
    with pytest.raises(ProfileValidationError) as exc_info:
        simulate(make_footprint(), {"transportation": -1e308, "food": -1e308})

    assert exc_info.value.field == "changes"


def test_breakdown_is_scaled_with_total() -> None:
    baseline = replace(
        make_footprint(),
        emissions=replace(
            make_footprint().emissions,
            transportation=CategoryResult(
                1000.0, {"commute": 800.0, "additional_travel": 200.0}
            ),
        ),
    )

    simulated = apply_changes(baseline, {"transportation": {"percentage": 25}})

    transportation = simulated.emissions.transportation
    assert transportation.total == pytest.approx(750)
    assert transportation.breakdown == pytest.approx(
        {"commute": 600.0, "additional_travel": 150.0}
    )


def test_clamped_category_has_zeroed_breakdown() -> None:
    baseline = replace(
        make_footprint(),
        emissions=replace(
            make_footprint().emissions,
            water=CategoryResult(100.0, {"usage": 60.0, "heating": 40.0}),
        ),
    )

    simulated = apply_changes(baseline, {"water": 500})

    assert simulated.emissions.water.breakdown == {"usage": 0.0, "heating": 0.0}
