"""Service test fixtures — fake student source + FastAPI test client.

Invariants:
    - Every test gets a fresh FakeSource and an empty view registry
    - get_student_source dependency overridden to return the fake
    - No network: the real StudentSource is only exercised through httpx.MockTransport

Design Decisions:
    - FakeSource records every FilterState it was asked for, and can be told to
      fail or to wait on an asyncio.Event so tests control completion order
"""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from seatfinder.api.routes import views as views_module
from seatfinder.infrastructure.student_source import get_student_source
from seatfinder.main import app


class FakeSource:
    """In-memory stand-in for StudentSource."""

    def __init__(self, records=None):
        self.url = "http://source.test/students"
        self.records = list(records or [])
        self.calls = []
        self.error: Exception | None = None
        self.gates: list[asyncio.Event] = []
        self.healthy = True

    async def fetch(self, state, context=None):
        self.calls.append(state)
        if self.gates:
            gate = self.gates.pop(0)
            await gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.records)

    async def health_check(self):
        return self.healthy


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture
async def client(fake_source):
    """FastAPI test client with the student source overridden."""
    app.dependency_overrides[get_student_source] = lambda: fake_source
    views_module._registry.clear()

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    views_module._registry.clear()
