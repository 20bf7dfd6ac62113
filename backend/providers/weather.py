"""Winter length estimation from the Open-Meteo historical archive."""

from __future__ import annotations

from datetime import date
import logging

import httpx

from cabin_savings.winter import (
    NOTE_FETCH_FAILED,
    NOTE_NO_DATA,
    DailyTemperatureSample,
    FrostEstimate,
    WinterPeriod,
    build_period,
    estimate_from_samples,
    fallback_estimate,
    parse_daily_means,
)

from .deps import ProviderSettings

logger = logging.getLogger(__name__)


async def fetch_daily_means(
    lat: float,
    lon: float,
    period: WinterPeriod,
    client: httpx.AsyncClient,
    settings: ProviderSettings,
) -> list[DailyTemperatureSample] | None:
    """Fetch daily mean temperatures, or ``None`` for an unusable response."""
    params = {
        "latitude": lat,
        "longitude": lon,
        "start_date": period.start.isoformat(),
        "end_date": period.end.isoformat(),
        "daily": "temperature_2m_mean",
        "timezone": "UTC",
    }
    response = await client.get(settings.weather_archive_url, params=params)
    if not response.is_success:
        logger.warning("Weather archive returned HTTP %s", response.status_code)
        return None
    try:
        payload = response.json()
    except ValueError:
        logger.warning("Weather archive returned a non-JSON body")
        return None
    return parse_daily_means(payload)


async def estimate(
    lat: float,
    lon: float,
    client: httpx.AsyncClient,
    settings: ProviderSettings,
    today: date | None = None,
) -> FrostEstimate:
    """Suggest a winter length for the given coordinates.

    Never raises: every upstream problem yields the default estimate.
    """
    period = build_period(today)
    try:
        samples = await fetch_daily_means(lat, lon, period, client, settings)
        if samples is None:
            return fallback_estimate(period, NOTE_NO_DATA)
        result = estimate_from_samples(samples, period)
    except Exception as exc:  # noqa: BLE001 - the estimate degrades instead of failing
        logger.warning("Weather archive request failed for (%s, %s): %s", lat, lon, exc)
        return fallback_estimate(period, NOTE_FETCH_FAILED)

    logger.info(
        "Frost estimate for (%s, %s): %s frost days -> %s months",
        lat,
        lon,
        result.frost_days_count,
        result.suggested_winter_months,
    )
    return result
