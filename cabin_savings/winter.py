"""Derive a suggested winter length from historical daily mean temperatures."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Sequence

from . import DEFAULT_WINTER_MONTHS, logger

MIN_WINTER_MONTHS = 1
MAX_WINTER_MONTHS = 7
FROST_THRESHOLD_C = 0.0
DAYS_PER_MONTH = 30

NOTE_BASED_ON_DATA = "Basert på døgnmiddeltemperatur ≤ 0 °C for valgt område."
NOTE_NO_DATA = "Ingen værdata tilgjengelig, bruker standard 4 måneder."
NOTE_FETCH_FAILED = "Feil ved henting av værdata, bruker standard 4 måneder."


@dataclass(frozen=True)
class WinterPeriod:
    start: date
    end: date


@dataclass(frozen=True)
class DailyTemperatureSample:
    day: str
    mean_temp: float


@dataclass(frozen=True)
class FrostEstimate:
    suggested_winter_months: int
    frost_days_count: int | None
    period: WinterPeriod
    note: str


def build_period(today: date | None = None) -> WinterPeriod:
    """Return the last fully elapsed 1 Nov - 31 Mar window.

    The window always ends in the previous calendar year, even when the
    current year's March has already passed.
    """

    today = today or date.today()
    end_year = today.year - 1
    return WinterPeriod(start=date(end_year - 1, 11, 1), end=date(end_year, 3, 31))


def clamp_winter_months(value: float) -> float:
    if math.isnan(value):
        return DEFAULT_WINTER_MONTHS
    if value < MIN_WINTER_MONTHS:
        return MIN_WINTER_MONTHS
    if value > MAX_WINTER_MONTHS:
        return MAX_WINTER_MONTHS
    return value


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return None if math.isnan(number) else number


def parse_daily_means(payload: Any) -> list[DailyTemperatureSample] | None:
    """Extract numeric daily means from an archive response.

    Returns ``None`` when the payload lacks the ``daily.time`` or
    ``daily.temperature_2m_mean`` arrays. Entries without a numeric value
    are dropped.
    """

    daily = payload.get("daily") if isinstance(payload, dict) else None
    if not isinstance(daily, dict):
        return None
    times = daily.get("time")
    temps = daily.get("temperature_2m_mean")
    if not isinstance(times, list) or not isinstance(temps, list):
        return None

    samples: list[DailyTemperatureSample] = []
    for index, day in enumerate(times):
        value = _as_float(temps[index]) if index < len(temps) else None
        if value is not None:
            samples.append(DailyTemperatureSample(day=str(day), mean_temp=value))

    dropped = len(times) - len(samples)
    if dropped:
        logger.debug("Dropped %s daily samples without a numeric mean", dropped)
    return samples


def count_frost_days(samples: Iterable[DailyTemperatureSample]) -> int:
    return sum(1 for sample in samples if sample.mean_temp <= FROST_THRESHOLD_C)


def _round_half_up(value: float) -> float:
    if math.isnan(value):
        return value
    return math.floor(value + 0.5)


def estimate_from_samples(samples: Sequence[DailyTemperatureSample], period: WinterPeriod) -> FrostEstimate:
    """Turn the valid samples of a season into a frost estimate.

    A season with no valid samples reports zero frost days and the default
    winter length, which keeps it distinct from a season with no data at all.
    """

    frost_days = count_frost_days(samples)
    ratio = frost_days / DAYS_PER_MONTH if samples else math.nan
    return FrostEstimate(
        suggested_winter_months=int(clamp_winter_months(_round_half_up(ratio))),
        frost_days_count=frost_days,
        period=period,
        note=NOTE_BASED_ON_DATA,
    )


def fallback_estimate(period: WinterPeriod, note: str = NOTE_NO_DATA) -> FrostEstimate:
    return FrostEstimate(
        suggested_winter_months=DEFAULT_WINTER_MONTHS,
        frost_days_count=None,
        period=period,
        note=note,
    )
