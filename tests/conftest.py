"""Shared test fixtures: sample locations, a fake geocoding provider and fake HTTP plumbing."""
import asyncio
from typing import Any, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from postcode_locator.models import GeocodeResponse, Location

# Locations around Crowthorne / Reading used throughout the tests
NEAR = {"latitude": 51.0, "longitude": -1.0, "title": "Near Store", "description": "<p>Open <b>9-5</b></p>"}
FAR = {"latitude": 51.5, "longitude": -1.3, "title": "Far Store", "description": "<p>Closed Sundays</p>"}


class FakeProvider:
    """Geocoding provider returning a canned response; `gate` holds the call open until set."""

    def __init__(self, response: Optional[GeocodeResponse] = None, exc: Optional[Exception] = None):
        self.response = response or GeocodeResponse(status="OK", lat=51.05, lng=-1.02)
        self.exc = exc
        self.gate: Optional[asyncio.Event] = None
        self.calls: List[str] = []

    async def geocode(self, address: str) -> GeocodeResponse:
        self.calls.append(address)
        if self.gate is not None:
            await self.gate.wait()
        if self.exc is not None:
            raise self.exc
        return self.response


class FakeResponse:
    """Stands in for an aiohttp response used as an async context manager."""

    def __init__(self, payload: Any, error: Optional[Exception] = None, status: int = 200,
                 json_error: Optional[Exception] = None):
        self.payload = payload
        self.error = error
        self.status = status
        self.json_error = json_error

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.error is not None:
            raise self.error

    async def json(self, content_type=None):
        if self.json_error is not None:
            raise self.json_error
        return self.payload


def fake_session(payload: Any, error: Optional[Exception] = None, **response_kwargs) -> MagicMock:
    session = MagicMock()
    session.closed = False
    session.get = MagicMock(return_value=FakeResponse(payload, error, **response_kwargs))
    session.close = AsyncMock()
    return session


@pytest.fixture()
def raw_locations() -> List[dict]:
    return [dict(NEAR), dict(FAR)]


@pytest.fixture()
def locations(raw_locations) -> List[Location]:
    return [Location.from_dict(item) for item in raw_locations]


@pytest.fixture()
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture()
def locations_client(raw_locations) -> MagicMock:
    """A LocationsClient double whose fetch returns the sample list."""
    client = MagicMock()
    client.source = "https://example.com/locations.json"
    client.fetch = AsyncMock(return_value=raw_locations)
    return client
