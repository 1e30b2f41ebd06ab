"""API test fixtures — httpx client bound to the ASGI app."""

import pytest
from httpx import ASGITransport, AsyncClient

from dotmatrix.main import app


@pytest.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as ac:
        yield ac
