import asyncio
from typing import Optional, Protocol

from aiohttp import ClientError
from loguru import logger

from postcode_locator.exceptions import DependencyNotReady, GeocodeError
from postcode_locator.models import Coordinate, GeocodeResponse


class GeocodeProvider(Protocol):
    async def geocode(self, address: str) -> GeocodeResponse: ...


class GeocodeAdapter:
    """
    Wraps an external geocoding provider that becomes available asynchronously.

    The provider is handed over by the load-completion callback
    `on_provider_loaded`; until then `ready()` is False and callers must not
    invoke `lookup`.
    """

    def __init__(self, provider: Optional[GeocodeProvider] = None):
        self._provider = provider

    def on_provider_loaded(self, provider: GeocodeProvider) -> None:
        self._provider = provider
        logger.debug(f"Geocoding provider ready: {type(provider).__name__}")

    def ready(self) -> bool:
        return self._provider is not None

    async def lookup(self, postcode: str) -> Coordinate:
        """
        Resolve *postcode* to a coordinate.

        Raises:
            DependencyNotReady: no provider has been loaded.
            GeocodeError: the provider reported a non-OK status or could not be reached.
        """
        if self._provider is None:
            raise DependencyNotReady()
        try:
            response = await self._provider.geocode(postcode)
        except (ClientError, asyncio.TimeoutError) as e:
            raise GeocodeError(f"{type(e).__name__}: {e}") from e

        if response.status != "OK":
            raise GeocodeError(response.status)
        return Coordinate(lat=response.lat, lng=response.lng)
