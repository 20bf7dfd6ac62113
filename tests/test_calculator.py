import itertools

import pytest

from cabin_savings.calculator import (
    CabinAge,
    CalculatorInputs,
    PriceMode,
    SavingsResult,
    compute,
    effective_price,
    kwh_per_m2_per_winter,
)


def test_reference_cabin_standard_price():
    result = compute(
        CalculatorInputs(
            winter_months=4,
            floor_area_m2=100,
            cabin_age_class=CabinAge.NORMAL,
            price_mode=PriceMode.STANDARD,
        )
    )

    assert result.frost_protection_kwh == pytest.approx(7500)
    assert result.pads_energy_kwh == pytest.approx(172.8)
    assert result.estimated_saving_kr == pytest.approx(3663.6)


def test_small_new_cabin_custom_price():
    result = compute(
        CalculatorInputs(
            winter_months=4,
            floor_area_m2=10,
            cabin_age_class=CabinAge.NEW,
            price_mode=PriceMode.CUSTOM,
            custom_price_per_kwh=1.0,
        )
    )

    assert result.frost_protection_kwh == pytest.approx(550)
    assert result.pads_energy_kwh == pytest.approx(172.8)
    assert result.estimated_saving_kr == pytest.approx(377.2)


def test_baseline_by_age_class():
    assert kwh_per_m2_per_winter(CabinAge.NEW) == 55
    assert kwh_per_m2_per_winter("normal") == 75
    assert kwh_per_m2_per_winter(CabinAge.OLD) == 100
    assert kwh_per_m2_per_winter(None) == 75
    assert kwh_per_m2_per_winter("unknown") == 75


def test_effective_price_falls_back_to_standard():
    assert effective_price(PriceMode.CUSTOM, 1.25) == 1.25
    assert effective_price(PriceMode.CUSTOM, 0) == 0.5
    assert effective_price(PriceMode.CUSTOM, None) == 0.5
    assert effective_price(PriceMode.STANDARD, 2.0) == 0.5
    assert effective_price(None, 2.0) == 0.5


def test_winter_length_scales_linearly():
    four = compute(CalculatorInputs(winter_months=4, floor_area_m2=50))
    six = compute(CalculatorInputs(winter_months=6, floor_area_m2=50))

    assert six.frost_protection_kwh == pytest.approx(four.frost_protection_kwh * 1.5)
    assert six.pads_energy_kwh == pytest.approx(four.pads_energy_kwh * 1.5)


@pytest.mark.parametrize(
    "inputs",
    [
        CalculatorInputs(),
        CalculatorInputs(winter_months=4),
        CalculatorInputs(floor_area_m2=80),
        CalculatorInputs(winter_months=0, floor_area_m2=80),
    ],
)
def test_incomplete_inputs_give_zero_result(inputs):
    assert compute(inputs) == SavingsResult(0.0, 0.0, 0.0)


def test_saving_never_negative():
    # A tiny cabin uses less than the pads draw over a long winter.
    result = compute(CalculatorInputs(winter_months=7, floor_area_m2=1, cabin_age_class=CabinAge.NEW))

    assert result.frost_protection_kwh < result.pads_energy_kwh
    assert result.estimated_saving_kr == 0


@pytest.mark.parametrize("age", list(CabinAge) + [None])
def test_frost_energy_monotonic_in_area_and_months(age):
    areas = [5, 20, 60, 150]
    months = range(1, 8)

    for month in months:
        values = [compute(CalculatorInputs(month, area, age)).frost_protection_kwh for area in areas]
        assert values == sorted(values)

    for area in areas:
        values = [compute(CalculatorInputs(month, area, age)).frost_protection_kwh for month in months]
        assert values == sorted(values)


def test_saving_floor_across_combinations():
    combos = itertools.product(range(1, 8), [1, 10, 100], list(CabinAge), [0.01, 0.5, 3.0])
    for months, area, age, price in combos:
        result = compute(CalculatorInputs(months, area, age, PriceMode.CUSTOM, price))
        assert result.estimated_saving_kr >= 0


def test_compute_is_repeatable():
    inputs = CalculatorInputs(5, 72.5, CabinAge.OLD, PriceMode.CUSTOM, 1.37)

    assert compute(inputs) == compute(inputs)
