"""Route test fixtures — FastAPI app over httpx ASGI transport.

Invariants:
    - Every test gets a fresh AsyncClient bound to the app in-process
    - get_settings overridden per test via the `use_settings` fixture
    - Dependency overrides cleared after each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from cc_eligibility.config import Settings, get_settings
from cc_eligibility.main import app


@pytest.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def use_settings():
    """Return a setter that swaps the Settings the routes see."""
    def _use(**overrides):
        settings = Settings(_env_file=None, **overrides)
        app.dependency_overrides[get_settings] = lambda: settings
        return settings
    yield _use
    app.dependency_overrides.clear()
