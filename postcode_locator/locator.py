"""
Wires the store, geocoder and search controller together.
"""
from typing import Optional

from loguru import logger

from postcode_locator.cache import LocalStorage
from postcode_locator.clients import LocationsClient, default_geocoder
from postcode_locator.config import CACHE_PATH, CACHE_TTL_MILLIS, LOCATIONS_URL, MAX_RANGE_MILES
from postcode_locator.geocode_adapter import GeocodeAdapter
from postcode_locator.location_store import LocationStore
from postcode_locator.search_controller import SearchController, SearchNotifier


class PostcodeLocator:
    """
    One store, one geocode adapter and one controller, constructed once.

    Await `initialize()` before searching: it refreshes the location list and
    hands the provider to the adapter.
    """

    def __init__(
        self,
        locations_url: str = LOCATIONS_URL,
        cache_path: Optional[str] = CACHE_PATH,
        cache_ttl_millis: int = CACHE_TTL_MILLIS,
        max_range_miles: float = MAX_RANGE_MILES,
        provider=None,
        notifier: Optional[SearchNotifier] = None,
    ):
        self.locations_client = LocationsClient(locations_url)
        cache = LocalStorage(cache_path) if cache_path else None
        self.store = LocationStore(self.locations_client, cache=cache, ttl_millis=cache_ttl_millis)
        self.provider = provider if provider is not None else default_geocoder()
        self.geocoder = GeocodeAdapter()
        self.controller = SearchController(
            self.geocoder,
            self.store,
            notifier=notifier,
            max_range_miles=max_range_miles,
        )

    async def initialize(self) -> None:
        await self.store.refresh()
        self.geocoder.on_provider_loaded(self.provider)
        logger.debug(f"Locator ready with {len(self.store.get())} locations")

    async def close(self) -> None:
        """Close the HTTP sessions held by the clients."""
        try:
            await self.locations_client.close()
        finally:
            close = getattr(self.provider, "close", None)
            if close is not None:
                await close()

    async def __aenter__(self) -> "PostcodeLocator":
        await self.initialize()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
