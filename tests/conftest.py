"""Shared pytest fixtures and configuration."""

import os
import pytest
import pytest_asyncio
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("REALESTATEPOST_BASE_URL", "http://posting.test")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from realestatepost.config import ClientConfig
from realestatepost.models.listing import ListingRequest
from realestatepost.services.api_client import ApiClient
from tests.utils.helpers import RecordingServer


@pytest.fixture
def client_config():
    """Client config pointing at the simulated server."""
    return ClientConfig(base_url="http://posting.test")


@pytest.fixture
def server():
    """Simulated posting service; every path answers 404 until routed."""
    return RecordingServer()


@pytest_asyncio.fixture
async def api_client(client_config, server):
    """ApiClient wired to the simulated server."""
    client = ApiClient(config=client_config, transport=server.transport())
    async with client:
        yield client


@pytest.fixture
def sample_listing():
    """Listing as entered on the add-listing form."""
    return ListingRequest(
        address="123 Main St",
        price="$450,000",
        bedrooms=3,
        bathrooms=2,
        sqft=1850,
        features=["Pool", "Updated kitchen"],
        property_type="House",
        neighborhood="Mission Hills",
        city="San Diego",
        image_url="https://images.test/123-main.jpg"
    )


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time
