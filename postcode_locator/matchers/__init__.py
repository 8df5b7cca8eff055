"""Location matching pipeline."""
from postcode_locator.matchers.location_matcher import match, rank

__all__ = ["match", "rank"]
