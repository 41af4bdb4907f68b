"""Redirect and resolve endpoint behavior tests."""

import pytest
from httpx import AsyncClient

from shortener.keystore import KeyStore


@pytest.mark.asyncio
async def test_redirect_valid_key(client: AsyncClient) -> None:
    create_resp = await client.post("/api/shorten", json={"url": "https://www.google.com"})
    short_code = create_resp.json()["short_code"]

    # httpx won't follow by default
    response = await client.get(f"/short/{short_code}", follow_redirects=False)
    assert response.status_code == 301
    assert response.headers["location"] == "https://www.google.com"


@pytest.mark.asyncio
async def test_redirect_unknown_key(client: AsyncClient) -> None:
    response = await client.get("/short/zzzzzz", follow_redirects=False)
    assert response.status_code == 404
    assert response.json()["detail"] == "Shortened key not found"


@pytest.mark.asyncio
async def test_redirect_empty_key(client: AsyncClient) -> None:
    response = await client.get("/short/", follow_redirects=False)
    assert response.status_code == 400
    assert response.json()["detail"] == "Shortened key is missing"


@pytest.mark.asyncio
async def test_redirect_stored_url_is_not_validated(client: AsyncClient, keystore: KeyStore) -> None:
    short_key = keystore.shorten("/relative/path")

    response = await client.get(f"/short/{short_key}", follow_redirects=False)
    assert response.status_code == 301
    assert response.headers["location"] == "/relative/path"


@pytest.mark.asyncio
async def test_api_resolve(client: AsyncClient, keystore: KeyStore) -> None:
    short_key = keystore.shorten("https://www.github.com")

    response = await client.get(f"/api/resolve/{short_key}")
    assert response.status_code == 200
    assert response.json() == {"short_code": short_key, "original_url": "https://www.github.com"}


@pytest.mark.asyncio
async def test_api_resolve_unknown_key(client: AsyncClient) -> None:
    response = await client.get("/api/resolve/nope42")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_stores_are_isolated(client: AsyncClient) -> None:
    other = KeyStore()
    short_key = other.shorten("https://www.python.org")

    response = await client.get(f"/short/{short_key}", follow_redirects=False)
    assert response.status_code == 404
