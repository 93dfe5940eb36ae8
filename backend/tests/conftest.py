"""
Cocktail API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (settings, app, API client, data).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── test_settings: Settings with no artificial latency
    ├── app: A FastAPI instance with its own rate-limit counters
    ├── test_client: HTTPX AsyncClient bound to `app`
    ├── registry / catalog: The default principals and seed catalog
    └── valid_drink_payload: A body accepted by POST /drinks
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ["MOCK_LATENCY_MS"] = "0"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from cocktail_api.auth.principals import PrincipalRegistry
from cocktail_api.config import Settings
from cocktail_api.main import create_app
from cocktail_api.services.catalog_service import CatalogService


ADMIN_KEY = "admin-api-key-123456"
BARTENDER_KEY = "bartender-api-key-789012"
CUSTOMER_KEY = "customer-api-key-345678"


def bearer(credential: str) -> dict:
    return {"Authorization": f"Bearer {credential}"}


@pytest.fixture
def admin_headers():
    return bearer(ADMIN_KEY)


@pytest.fixture
def bartender_headers():
    return bearer(BARTENDER_KEY)


@pytest.fixture
def customer_headers():
    return bearer(CUSTOMER_KEY)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings():
    """Default settings without the mock write latency."""
    return Settings(mock_latency_ms=0)


@pytest.fixture
def registry():
    return PrincipalRegistry.default()


@pytest.fixture
def catalog():
    return CatalogService()


@pytest.fixture
def app(test_settings, registry, catalog):
    """
    A fresh application per test.

    Rate-limit counters live on app.state, so no test sees another's requests.
    """
    return create_app(settings=test_settings, principals=registry, catalog=catalog)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient configured to talk to our FastAPI app.
    Why:     Enables testing of HTTP endpoints without running a server.
    How:     Uses ASGITransport to route requests directly to the app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def valid_drink_payload():
    """A POST /drinks body with padding the service is expected to trim."""
    return {
        "name": "  Test Cocktail  ",
        "category": "Cocktail",
        "alcoholic": "Alcoholic",
        "glass": "Highball glass",
        "instructions": "Mix everything with ice. ",
        "ingredients": [
            {"name": " Vodka ", "measure": "2 oz"},
            {"name": "Orange juice", "measure": ""},
            {"name": "Ice"},
        ],
    }
