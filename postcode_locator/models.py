"""
Typed data models for the postcode location search.
All data structures used throughout the codebase should be defined here.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Location:
    """A candidate location loaded from the location list."""
    latitude: float
    longitude: float
    title: str
    description: str  # HTML-safe rich text

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Location":
        """
        Build a Location from one object of the location list JSON.

        Raises KeyError, TypeError or ValueError for a malformed record.
        """
        return cls(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            title=str(data["title"]),
            description=str(data["description"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the location list JSON shape (used by the cache)."""
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "title": self.title,
            "description": self.description,
        }


@dataclass(frozen=True)
class LocationMatch:
    """A location paired with its distance from one search origin."""
    location: Location
    distance: float  # miles


@dataclass(frozen=True)
class Coordinate:
    """Geocoded origin in decimal degrees. Either field may be None if the provider sent garbage."""
    lat: Optional[float]
    lng: Optional[float]


@dataclass(frozen=True)
class GeocodeResponse:
    """Provider reply normalised to a status string plus the first result's position."""
    status: str  # "OK" on success, otherwise the provider's status/error
    lat: Optional[float] = None
    lng: Optional[float] = None


class SearchState(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    DONE = "done"


@dataclass
class SearchSession:
    """Mutable state of the search form, owned by the SearchController."""
    postcode: str = ""
    busy: bool = False
    result: Optional[Location] = None
    distance: Optional[float] = None  # miles to result
    state: SearchState = SearchState.IDLE
