"""Place search route used by the location step."""

import httpx
from fastapi import APIRouter, Depends, Query

from backend.models.location import Location
from backend.providers import geocoding
from backend.providers.deps import ProviderSettings, get_http_client, get_settings

router = APIRouter()


@router.get("", response_model=list[Location])
async def geocode(
    q: str = Query("", description="Free-text address or place name"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: ProviderSettings = Depends(get_settings),
) -> list[Location]:
    """Return up to eight location candidates for ``q``."""
    candidates = await geocoding.resolve(q, client, settings)
    return [Location.from_candidate(candidate) for candidate in candidates]
