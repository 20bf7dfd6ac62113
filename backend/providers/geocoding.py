"""Place search backed by a Nominatim-compatible geocoder."""

from __future__ import annotations

import logging

import httpx

from cabin_savings.places import (
    MAX_CANDIDATES,
    LocationCandidate,
    candidates_from_nominatim,
    search_gazetteer,
)

from .deps import ProviderSettings

logger = logging.getLogger(__name__)


async def search_live(
    query: str,
    client: httpx.AsyncClient,
    settings: ProviderSettings,
) -> list[LocationCandidate]:
    """Query the live geocoder. Raises on transport or HTTP errors."""
    params = {
        "format": "json",
        "addressdetails": 1,
        "limit": MAX_CANDIDATES,
        "q": query,
        "countrycodes": settings.country_codes,
    }
    response = await client.get(
        settings.geocoder_url,
        params=params,
        headers={"User-Agent": settings.user_agent},
    )
    response.raise_for_status()
    payload = response.json()
    if not isinstance(payload, list):
        return []
    return candidates_from_nominatim(payload)


async def resolve(
    query: str,
    client: httpx.AsyncClient,
    settings: ProviderSettings,
) -> list[LocationCandidate]:
    """Return ranked candidates for ``query``.

    Falls back to the offline gazetteer when the geocoder fails or finds
    nothing. A blank query returns an empty list without any request.
    """
    query = (query or "").strip()
    if not query:
        return []

    try:
        candidates = await search_live(query, client, settings)
    except Exception as exc:  # noqa: BLE001 - any live-path failure falls back to the gazetteer
        logger.warning("Geocoder request failed for %r: %s", query, exc)
        candidates = []

    if candidates:
        return candidates

    fallback = search_gazetteer(query)
    logger.info("Using gazetteer fallback for %r (%s matches)", query, len(fallback))
    return fallback
