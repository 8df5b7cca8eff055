"""
Client for the authoritative location list.
"""
import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout
from loguru import logger

from postcode_locator.config import HTTP_TIMEOUT_SECONDS, LOCATIONS_URL
from postcode_locator.exceptions import LocationFetchError


class LocationsClient:
    """
    Fetches the raw location list as a JSON array.

    An http(s) source is fetched with a GET; anything else is read as a local JSON file.
    """

    def __init__(self, source: str = LOCATIONS_URL, timeout: float = HTTP_TIMEOUT_SECONDS):
        self.source = source
        self.timeout = timeout
        self._session: Optional[ClientSession] = None

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    async def _get_session(self) -> ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=self.timeout))
        return self._session

    async def fetch(self) -> List[Dict[str, Any]]:
        """
        Fetch the location list.

        Returns:
            The decoded JSON array of location objects.

        Raises:
            LocationFetchError: on transport errors, bad JSON or a non-array payload.
        """
        logger.debug(f"📥 Fetching locations from {self.source}")
        try:
            if self.is_remote:
                data = await self._get_remote()
            else:
                data = json.loads(Path(self.source).read_text(encoding="utf-8"))
        except (ClientError, asyncio.TimeoutError, OSError, ValueError) as e:
            raise LocationFetchError(self.source, str(e)) from e

        if not isinstance(data, list):
            raise LocationFetchError(self.source, f"expected a JSON array, got {type(data).__name__}")
        logger.debug(f"✅ Fetched {len(data)} locations from {self.source}")
        return data

    async def _get_remote(self) -> Any:
        session = await self._get_session()
        async with session.get(self.source, headers={"Accept": "application/json"}) as resp:
            resp.raise_for_status()
            return await resp.json(content_type=None)

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
