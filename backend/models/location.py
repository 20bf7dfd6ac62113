"""Location candidate schema returned by the geocode endpoint."""

from pydantic import BaseModel

from cabin_savings.places import LocationCandidate


class Location(BaseModel):
    name: str
    lat: float
    lon: float

    @classmethod
    def from_candidate(cls, candidate: LocationCandidate) -> "Location":
        return cls(name=candidate.name, lat=candidate.lat, lon=candidate.lon)
