"""Location candidates, name normalization and the offline gazetteer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

MAX_CANDIDATES = 8


@dataclass(frozen=True)
class LocationCandidate:
    name: str
    lat: float
    lon: float


# Offline fallback used when the live geocoder is unavailable.
GAZETTEER: tuple[LocationCandidate, ...] = (
    LocationCandidate("Beitostølen", 61.2489, 8.9091),
    LocationCandidate("Oslo", 59.9139, 10.7522),
    LocationCandidate("Bergen", 60.39299, 5.32415),
    LocationCandidate("Trondheim", 63.4305, 10.3951),
    LocationCandidate("Lillehammer", 61.1153, 10.4662),
    LocationCandidate("Hemsedal", 60.8645, 8.5534),
    LocationCandidate("Geilo", 60.533, 8.205),
    LocationCandidate("Trysil", 61.3146, 12.2659),
    LocationCandidate("Hafjell", 61.2452, 10.4536),
    LocationCandidate("Sirdal", 58.9146, 6.8516),
    LocationCandidate("Gol", 60.7015, 9.0407),
    LocationCandidate("Hovden", 59.5594, 7.3559),
    LocationCandidate("Norefjell", 60.2081, 9.4615),
    LocationCandidate("Oppdal", 62.5942, 9.6947),
    LocationCandidate("Sjusjøen", 61.1802, 10.7866),
    LocationCandidate("Kvitfjell", 61.4534, 10.1126),
    LocationCandidate("Voss", 60.628, 6.4147),
    LocationCandidate("Røldal", 59.8299, 6.8158),
    LocationCandidate("Narvik", 68.4385, 17.427),
    LocationCandidate("Tromsø", 69.6492, 18.9553),
)


def rounded_key(candidate: LocationCandidate) -> str:
    return f"{candidate.name.lower()}-{candidate.lat:.4f}-{candidate.lon:.4f}"


def exact_key(candidate: LocationCandidate) -> str:
    return f"{candidate.name.lower()}-{candidate.lat!r}-{candidate.lon!r}"


def dedupe(
    candidates: Iterable[LocationCandidate],
    key: Callable[[LocationCandidate], str] = rounded_key,
    limit: int = MAX_CANDIDATES,
) -> list[LocationCandidate]:
    """Drop duplicate candidates, keeping the first occurrence and input order."""

    seen: set[str] = set()
    unique: list[LocationCandidate] = []
    for candidate in candidates:
        if len(unique) >= limit:
            break
        candidate_key = key(candidate)
        if candidate_key in seen:
            continue
        seen.add(candidate_key)
        unique.append(candidate)
    return unique


def _first(address: Mapping[str, Any], *fields: str) -> str | None:
    for field in fields:
        value = address.get(field)
        if value:
            return str(value)
    return None


def normalize_name(item: Mapping[str, Any]) -> str:
    """Build a readable label from a Nominatim result.

    Road and house number come first, followed by suburb, city and
    country (or postcode when the country is missing). Falls back to the
    provider's ``display_name`` when no address parts are present.
    """

    address = item.get("address")
    if not isinstance(address, Mapping):
        address = {}
    road = _first(address, "road", "pedestrian", "footway")
    house_number = _first(address, "house_number")
    suburb = _first(address, "suburb", "neighbourhood", "city_district")
    city = _first(address, "city", "town", "village", "municipality")
    postcode = _first(address, "postcode")
    country = _first(address, "country")

    parts: list[str] = []
    if road and house_number:
        parts.append(f"{road} {house_number}")
    elif road:
        parts.append(road)

    if suburb:
        parts.append(suburb)
    if city:
        parts.append(city)
    if country:
        parts.append(country)
    elif postcode:
        parts.append(postcode)

    if parts:
        return ", ".join(parts)
    return str(item.get("display_name") or "")


def _parse_coordinate(value: Any) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def candidates_from_nominatim(items: Iterable[Mapping[str, Any]]) -> list[LocationCandidate]:
    """Map raw search results to unique candidates, skipping bad coordinates."""

    mapped: list[LocationCandidate] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        lat = _parse_coordinate(item.get("lat"))
        lon = _parse_coordinate(item.get("lon"))
        if lat is None or lon is None:
            continue
        mapped.append(LocationCandidate(name=normalize_name(item), lat=lat, lon=lon))
    return dedupe(mapped, key=rounded_key)


def search_gazetteer(query: str, places: Iterable[LocationCandidate] = GAZETTEER) -> list[LocationCandidate]:
    needle = query.strip().lower()
    if not needle:
        return []
    matches = (place for place in places if needle in place.name.lower())
    return dedupe(matches, key=exact_key)
