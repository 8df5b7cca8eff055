"""
In-memory location list with a best-effort local cache.
"""
import json
import time
from typing import Callable, List, Optional, Tuple

from loguru import logger

from postcode_locator.cache import LocalStorage
from postcode_locator.clients import LocationsClient
from postcode_locator.config import CACHE_TTL_MILLIS
from postcode_locator.exceptions import LocationFetchError
from postcode_locator.models import Location

CACHE_TIMESTAMP_KEY = "locations_fetched_at"
CACHE_PAYLOAD_KEY = "locations"


def _now_millis() -> int:
    return int(time.time() * 1000)


def parse_locations(raw: List[dict]) -> Tuple[Location, ...]:
    """Convert decoded JSON objects to Locations. Any bad record fails the whole list."""
    return tuple(Location.from_dict(item) for item in raw)


class LocationStore:
    """
    Holds the candidate locations.

    The list is only ever replaced wholesale by `refresh()`. A failed refresh
    leaves the previous list (possibly empty) in place.
    """

    def __init__(
        self,
        client: LocationsClient,
        cache: Optional[LocalStorage] = None,
        ttl_millis: int = CACHE_TTL_MILLIS,
        clock: Callable[[], int] = _now_millis,
    ):
        self._client = client
        self._cache = cache
        self._ttl_millis = ttl_millis
        self._clock = clock
        self._locations: Tuple[Location, ...] = ()

    def get(self) -> Tuple[Location, ...]:
        return self._locations

    async def refresh(self) -> None:
        """
        Populate from a fresh cache entry, otherwise fetch and re-cache.

        Never raises for fetch, parse or cache failures; they are logged.
        """
        cached = self._read_cache()
        if cached is not None:
            self._locations = cached
            logger.debug(f"Loaded {len(cached)} locations from cache")
            return

        try:
            raw = await self._client.fetch()
            locations = parse_locations(raw)
        except LocationFetchError as e:
            logger.warning(f"⚠️ Location refresh failed: {e}")
            return
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"⚠️ Location list from {self._client.source} is malformed: {e!r}")
            return

        self._locations = locations
        logger.info(f"Loaded {len(locations)} locations from {self._client.source}")
        self._write_cache(locations)

    def _read_cache(self) -> Optional[Tuple[Location, ...]]:
        if self._cache is None:
            return None
        try:
            fetched_at = self._cache.get_item(CACHE_TIMESTAMP_KEY)
            payload = self._cache.get_item(CACHE_PAYLOAD_KEY)
            if fetched_at is None or payload is None:
                return None
            age = self._clock() - int(fetched_at)
            if age >= self._ttl_millis:
                logger.debug(f"Location cache is stale ({age} ms old)")
                return None
            return parse_locations(json.loads(payload))
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"⚠️ Ignoring unusable location cache: {e!r}")
            return None

    def _write_cache(self, locations: Tuple[Location, ...]) -> None:
        if self._cache is None:
            return
        try:
            self._cache.set_item(CACHE_TIMESTAMP_KEY, str(self._clock()))
            self._cache.set_item(CACHE_PAYLOAD_KEY, json.dumps([loc.to_dict() for loc in locations]))
        except OSError as e:
            logger.warning(f"⚠️ Could not write location cache: {e}")
