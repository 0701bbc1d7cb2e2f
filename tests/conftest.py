"""Shared fixtures: a geocoder wired to an httpx mock transport."""

import httpx
import pytest
import pytest_asyncio

from mapbox_geocoder.services.geocoding import Geocoder
from tests.fakes import BOGUS_TOKEN


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    return []


@pytest_asyncio.fixture
async def make_geocoder(requests_seen):
    """Build a Geocoder whose HTTP calls are answered by `responder(request)`."""
    clients: list[httpx.AsyncClient] = []

    def _make(responder) -> Geocoder:
        def handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return responder(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return Geocoder(
            access_token=BOGUS_TOKEN,
            api_base_url="https://api.mapbox.com",
            client=client,
        )

    yield _make

    for client in clients:
        await client.aclose()
