"""API test fixtures — FastAPI test client with a fixed clock.

Invariants:
    - get_today is overridden to FIXED_TODAY so pending/immediate is deterministic
    - Overrides cleared after every test

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises the real app, handlers included
    - raise_app_exceptions=False: the catch-all handler's response is what clients see
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from paymentflow.infrastructure.clock import get_today
from paymentflow.main import app

FIXED_TODAY = date(2025, 6, 15)


@pytest.fixture
async def client():
    """FastAPI test client with the clock dependency overridden."""
    app.dependency_overrides[get_today] = lambda: FIXED_TODAY

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
