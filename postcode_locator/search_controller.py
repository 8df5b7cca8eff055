"""
Search form state machine: validate, geocode, match, display.
"""
from typing import Optional, Protocol

from loguru import logger

from postcode_locator.config import MAX_RANGE_MILES
from postcode_locator.exceptions import GeocodeError, InvalidOrigin, NoLocationsInRange
from postcode_locator.geocode_adapter import GeocodeAdapter
from postcode_locator.location_store import LocationStore
from postcode_locator.matchers import match
from postcode_locator.models import Location, SearchSession, SearchState
from postcode_locator.postcode import validate


class SearchNotifier(Protocol):
    """User-facing notifications raised by a search."""

    def invalid_postcode(self, postcode: str) -> None: ...

    def no_locations_found(self, postcode: str) -> None: ...


class LoggingNotifier:
    def invalid_postcode(self, postcode: str) -> None:
        logger.info(f"That is not a valid postcode: '{postcode}'")

    def no_locations_found(self, postcode: str) -> None:
        logger.info(f"No locations found near '{postcode}'")


class SearchController:
    """
    Runs one postcode search at a time against a LocationStore.

    IDLE/DONE --search()--> SEARCHING --match--> DONE
                                      --no match or error--> IDLE
    """

    def __init__(
        self,
        geocoder: GeocodeAdapter,
        store: LocationStore,
        notifier: Optional[SearchNotifier] = None,
        max_range_miles: float = MAX_RANGE_MILES,
    ):
        self._geocoder = geocoder
        self._store = store
        self._notifier = notifier or LoggingNotifier()
        self.max_range_miles = max_range_miles
        self.session = SearchSession()

    @property
    def state(self) -> SearchState:
        return self.session.state

    @property
    def result(self) -> Optional[Location]:
        return self.session.result

    async def search(self, postcode: Optional[str] = None) -> Optional[Location]:
        """
        Search for the nearest location to the session postcode.

        Args:
            postcode (Optional[str]): Replaces the session postcode when given.

        Returns:
            Optional[Location]: The nearest in-range location, or None when the
                                search was skipped, failed or found nothing.
        """
        # Guards run before the first await so a concurrent call sees busy=True
        if not self._geocoder.ready():
            logger.debug("Search ignored: geocoding provider not loaded")
            return None
        if self.session.busy:
            logger.debug("Search ignored: a search is already under way")
            return None

        if postcode is not None:
            self.session.postcode = postcode
        if not validate(self.session.postcode):
            self._notifier.invalid_postcode(self.session.postcode)
            return None

        self.session.result = None
        self.session.distance = None
        self.session.busy = True
        self.session.state = SearchState.SEARCHING
        query = self.session.postcode
        try:
            origin = await self._geocoder.lookup(query)
            nearest = match(self._store.get(), origin, self.max_range_miles)
        except NoLocationsInRange:
            self.session.state = SearchState.IDLE
            self._notifier.no_locations_found(query)
            return None
        except (GeocodeError, InvalidOrigin) as e:
            self.session.state = SearchState.IDLE
            logger.warning(f"⚠️ Search for '{query}' failed: {e}")
            return None
        else:
            self.session.result = nearest.location
            self.session.distance = nearest.distance
            self.session.state = SearchState.DONE
            logger.debug(f"🏁 Nearest to '{query}': {nearest.location.title} ({nearest.distance:.2f} mi)")
            return nearest.location
        finally:
            self.session.busy = False
            if self.session.state is SearchState.SEARCHING:
                self.session.state = SearchState.IDLE
