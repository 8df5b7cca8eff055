"""Exception hierarchy for the postcode location search."""


class LocatorError(Exception):
    """Base exception for all postcode_locator errors."""


class PostcodeInvalid(LocatorError):
    """The provided string is not shaped like a UK postcode."""

    def __init__(self, postcode: str):
        self.postcode = postcode
        super().__init__(f"Invalid UK postcode: '{postcode}'")


class DependencyNotReady(LocatorError):
    """The geocoding provider has not finished loading."""

    def __init__(self):
        super().__init__("Geocoding provider has not been loaded yet")


class GeocodeError(LocatorError):
    """The geocoding provider reported a non-OK status."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Geocode was not successful for the following reason: {reason}")


class NoLocationsInRange(LocatorError):
    """No location lies within the search radius."""

    def __init__(self, max_range_miles: float):
        self.max_range_miles = max_range_miles
        super().__init__(f"There are no locations within {max_range_miles:g} miles")


class InvalidOrigin(LocatorError):
    """The search origin has no usable latitude/longitude."""

    def __init__(self, origin: object):
        self.origin = origin
        super().__init__(f"Unusable search origin: {origin!r}")


class LocationFetchError(LocatorError):
    """The location list could not be fetched or was not a JSON array."""

    def __init__(self, source: str, detail: str):
        self.source = source
        super().__init__(f"Could not load locations from {source}: {detail}")
