"""
Geocoding providers with rate limiting using aiolimiter.

Each provider turns a free-text postcode into a GeocodeResponse and never
raises for a provider-side failure; transport errors propagate as aiohttp
exceptions for the GeocodeAdapter to report.
"""
from typing import Any, Dict, Optional

from aiohttp import ClientSession, ClientTimeout
from aiolimiter import AsyncLimiter
from loguru import logger

from postcode_locator.config import (
    GEOCODE_RATE_LIMIT,
    GOOGLE_API_KEY,
    GOOGLE_GEOCODE_URL,
    HTTP_TIMEOUT_SECONDS,
    POSTCODES_IO_URL,
)
from postcode_locator.models import GeocodeResponse


class _HttpGeocoder:
    """Shared session and rate limiter handling for the HTTP providers."""

    def __init__(self, rate_limit: int = GEOCODE_RATE_LIMIT, timeout: float = HTTP_TIMEOUT_SECONDS):
        self.timeout = timeout
        # Token bucket: rate_limit requests per second
        self.rate_limiter = AsyncLimiter(max_rate=rate_limit, time_period=1.0)
        self._session: Optional[ClientSession] = None

    async def _get_session(self) -> ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=self.timeout))
        return self._session

    async def _get_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        async with self.rate_limiter:
            session = await self._get_session()
            async with session.get(url, params=params) as resp:
                # postcodes.io reports errors as JSON bodies with 4xx codes, so no raise_for_status
                try:
                    data = await resp.json(content_type=None)
                except ValueError as e:
                    logger.debug(f"⚠️ Non-JSON geocode reply from {url} (HTTP {resp.status}): {e}")
                    return {"status": f"INVALID_RESPONSE (HTTP {resp.status})"}
        if not isinstance(data, dict):
            return {"status": f"INVALID_RESPONSE ({type(data).__name__} body)"}
        return data

    async def geocode(self, address: str) -> GeocodeResponse:
        raise NotImplementedError

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None


class GoogleGeocoder(_HttpGeocoder):
    """Google Geocoding web API. The reply's status string is passed through untouched."""

    def __init__(self, api_key: Optional[str] = None, base_url: str = GOOGLE_GEOCODE_URL, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key if api_key is not None else GOOGLE_API_KEY
        self.base_url = base_url

    async def geocode(self, address: str) -> GeocodeResponse:
        params = {"address": address.strip()}
        if self.api_key:
            params["key"] = self.api_key
        logger.debug(f"🌍 Google geocode request for '{address}'")
        data = await self._get_json(self.base_url, params=params)

        status = data.get("status") or "UNKNOWN_ERROR"
        if status != "OK":
            if data.get("error_message"):
                status = f"{status}: {data['error_message']}"
            return GeocodeResponse(status=status)

        results = data.get("results") or []
        if not results:
            return GeocodeResponse(status="ZERO_RESULTS")
        location = (results[0].get("geometry") or {}).get("location") or {}
        return GeocodeResponse(status="OK", lat=location.get("lat"), lng=location.get("lng"))


class PostcodesIoGeocoder(_HttpGeocoder):
    """Keyless UK postcode lookup via postcodes.io."""

    def __init__(self, base_url: str = POSTCODES_IO_URL, **kwargs):
        super().__init__(**kwargs)
        self.base_url = base_url.rstrip("/")

    async def geocode(self, address: str) -> GeocodeResponse:
        postcode = "".join(address.split())
        logger.debug(f"🌍 postcodes.io request for '{postcode}'")
        data = await self._get_json(f"{self.base_url}/postcodes/{postcode}")

        if data.get("status") != 200 or data.get("result") is None:
            return GeocodeResponse(status=str(data.get("error") or data.get("status") or "UNKNOWN_ERROR"))
        result = data["result"]
        return GeocodeResponse(status="OK", lat=result.get("latitude"), lng=result.get("longitude"))


def default_geocoder() -> _HttpGeocoder:
    """Google when a key is configured, otherwise postcodes.io."""
    if GOOGLE_API_KEY:
        return GoogleGeocoder()
    logger.info("GOOGLE_API_KEY not set, geocoding with postcodes.io")
    return PostcodesIoGeocoder()
