"""Shared pytest fixtures for key store and HTTP tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from shortener.dependencies import get_keystore
from shortener.keystore import KeyStore
from shortener.main import app


@pytest.fixture
def keystore() -> KeyStore:
    return KeyStore()


@pytest_asyncio.fixture(scope="function")
async def client(keystore: KeyStore) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_keystore] = lambda: keystore

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
