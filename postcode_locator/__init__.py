"""postcode_locator — find the nearest location to a UK postcode."""

from postcode_locator.exceptions import (
    DependencyNotReady,
    GeocodeError,
    InvalidOrigin,
    LocationFetchError,
    LocatorError,
    NoLocationsInRange,
    PostcodeInvalid,
)
from postcode_locator.locator import PostcodeLocator
from postcode_locator.models import Coordinate, Location, LocationMatch, SearchState

__all__ = [
    "PostcodeLocator",
    "Location",
    "LocationMatch",
    "Coordinate",
    "SearchState",
    "LocatorError",
    "PostcodeInvalid",
    "DependencyNotReady",
    "GeocodeError",
    "NoLocationsInRange",
    "InvalidOrigin",
    "LocationFetchError",
]
