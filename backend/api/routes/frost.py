"""Winter length suggestion route."""

import math

import httpx
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from backend.models.frost import ErrorBody, FrostResult
from backend.providers import weather
from backend.providers.deps import ProviderSettings, get_http_client, get_settings

router = APIRouter()

MISSING_COORDINATES = "lat og lon kreves"
INVALID_COORDINATES = "Ugyldige koordinater"


def _parse_coordinate(value: str) -> float | None:
    # float() accepts digit separators such as "6_1"
    if "_" in value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


@router.get(
    "",
    response_model=FrostResult,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorBody}},
)
async def frost(
    lat: str | None = Query(None, description="Latitude in decimal degrees"),
    lon: str | None = Query(None, description="Longitude in decimal degrees"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: ProviderSettings = Depends(get_settings),
) -> FrostResult | JSONResponse:
    """Suggest a winter length from last winter's frost days.

    Upstream failures still answer 200 with the default estimate; only bad
    coordinates are rejected.
    """
    if not lat or not lon:
        return JSONResponse({"error": MISSING_COORDINATES}, status_code=status.HTTP_400_BAD_REQUEST)

    lat_value = _parse_coordinate(lat)
    lon_value = _parse_coordinate(lon)
    if lat_value is None or lon_value is None:
        return JSONResponse({"error": INVALID_COORDINATES}, status_code=status.HTTP_400_BAD_REQUEST)

    estimate = await weather.estimate(lat_value, lon_value, client, settings)
    return FrostResult.from_estimate(estimate)
