"""Savings model for replacing frost-protection heating with heating pads."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import DEFAULT_WINTER_MONTHS

DEFAULT_PRICE_PER_KWH = 0.5
PADS_POWER_KW = 0.06  # 3 pads × 20 W
HOURS_PER_DAY = 24
DAYS_PER_MONTH = 30


class CabinAge(str, Enum):
    NEW = "new"
    NORMAL = "normal"
    OLD = "old"


class PriceMode(str, Enum):
    STANDARD = "standard"
    CUSTOM = "custom"


# kWh per m² for a full winter of DEFAULT_WINTER_MONTHS
KWH_PER_M2_PER_WINTER = {
    CabinAge.NEW: 55.0,
    CabinAge.NORMAL: 75.0,
    CabinAge.OLD: 100.0,
}


@dataclass(frozen=True)
class CalculatorInputs:
    """Answers collected by the wizard.

    ``winter_months`` and ``floor_area_m2`` are required for a non-zero
    result; the remaining fields fall back to the standard assumptions.
    """

    winter_months: int | None = None
    floor_area_m2: float | None = None
    cabin_age_class: CabinAge | None = None
    price_mode: PriceMode | None = None
    custom_price_per_kwh: float | None = None


@dataclass(frozen=True)
class SavingsResult:
    estimated_saving_kr: float = 0.0
    frost_protection_kwh: float = 0.0
    pads_energy_kwh: float = 0.0


def kwh_per_m2_per_winter(age: CabinAge | str | None) -> float:
    """Return the frost-protection baseline for a cabin age class.

    Unknown or missing classes use the ``normal`` baseline.
    """

    try:
        return KWH_PER_M2_PER_WINTER[CabinAge(age)]
    except ValueError:
        return KWH_PER_M2_PER_WINTER[CabinAge.NORMAL]


def effective_price(price_mode: PriceMode | str | None, custom_price: float | None) -> float:
    if price_mode == PriceMode.CUSTOM and custom_price is not None and custom_price > 0:
        return float(custom_price)
    return DEFAULT_PRICE_PER_KWH


def frost_protection_kwh(floor_area_m2: float, age: CabinAge | str | None, winter_months: float) -> float:
    baseline = kwh_per_m2_per_winter(age)
    return floor_area_m2 * baseline * (winter_months / DEFAULT_WINTER_MONTHS)


def pads_energy_kwh(winter_months: float) -> float:
    return PADS_POWER_KW * HOURS_PER_DAY * DAYS_PER_MONTH * winter_months


def compute(inputs: CalculatorInputs) -> SavingsResult:
    """Estimate the seasonal saving for ``inputs``.

    Incomplete inputs produce an all-zero result instead of raising, so the
    UI can render a placeholder while answers are still missing.
    """

    if not inputs.winter_months or not inputs.floor_area_m2:
        return SavingsResult()

    frost = frost_protection_kwh(inputs.floor_area_m2, inputs.cabin_age_class, inputs.winter_months)
    pads = pads_energy_kwh(inputs.winter_months)
    price = effective_price(inputs.price_mode, inputs.custom_price_per_kwh)
    saving = max(0.0, (frost - pads) * price)

    return SavingsResult(
        estimated_saving_kr=saving,
        frost_protection_kwh=frost,
        pads_energy_kwh=pads,
    )
