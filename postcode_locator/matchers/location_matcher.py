import math
from operator import attrgetter
from typing import List, Sequence

from postcode_locator.exceptions import InvalidOrigin, NoLocationsInRange
from postcode_locator.geo import distance_miles, validate_coordinates
from postcode_locator.models import Coordinate, Location, LocationMatch


def _usable_origin(origin: Coordinate) -> bool:
    lat = getattr(origin, "lat", None)
    lng = getattr(origin, "lng", None)
    for value in (lat, lng):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            return False
    return validate_coordinates(lat, lng)


def rank(
    locations: Sequence[Location],
    origin: Coordinate,
    max_range_miles: float,
) -> List[LocationMatch]:
    """
    Pair every location within range of *origin* with its distance, nearest first.

    Args:
        locations (Sequence[Location]): Candidate locations. Not modified.
        origin (Coordinate): Search origin.
        max_range_miles (float): Inclusive distance cut-off.

    Returns:
        List[LocationMatch]: In-range matches sorted by distance. Equal distances
                             keep their input order (list.sort is stable).

    Raises:
        InvalidOrigin: origin has no usable lat/lng.
    """
    if not _usable_origin(origin):
        raise InvalidOrigin(origin)

    pairs = [
        LocationMatch(
            location=loc,
            distance=distance_miles(origin.lat, origin.lng, loc.latitude, loc.longitude),
        )
        for loc in locations
    ]
    in_range = [pair for pair in pairs if pair.distance <= max_range_miles]
    in_range.sort(key=attrgetter("distance"))
    return in_range


def match(
    locations: Sequence[Location],
    origin: Coordinate,
    max_range_miles: float,
) -> LocationMatch:
    """
    Return the nearest location within *max_range_miles* of *origin*.

    Raises InvalidOrigin for an unusable origin and NoLocationsInRange when
    nothing qualifies (including an empty location list).
    """
    ranked = rank(locations, origin, max_range_miles)
    if not ranked:
        raise NoLocationsInRange(max_range_miles)
    return ranked[0]
