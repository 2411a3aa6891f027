"""Tests for core/token_provider.py"""

import httpx
import pytest

from core.errors import AuthenticationError, HttpError


@pytest.mark.asyncio
async def test_fetch_fresh_stores_and_returns_token(api, client, cache):
    api.reply("/token", 200, {"token": "abc", "userId": "u1", "type": "guest", "message": "ok"})

    token = await client.token_provider.fetch_fresh()

    assert token == "abc"
    assert cache.get() == "abc"
    assert "authorization" not in api.requests[0].headers


@pytest.mark.asyncio
async def test_fetch_fresh_ignores_cached_token(api, client, cache):
    cache.set("old")
    api.reply("/token", 200, {"token": "new"})

    token = await client.token_provider.fetch_fresh()

    assert token == "new"
    assert len(api.calls("/token")) == 1
    assert cache.get() == "new"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"token": ""}, {"token": None}, {"message": "hi"}])
async def test_missing_token_field(api, client, cache, body):
    api.reply("/token", 200, body)

    with pytest.raises(AuthenticationError, match="Token not found"):
        await client.token_provider.fetch_fresh()

    assert cache.get() is None


@pytest.mark.asyncio
async def test_non_2xx_status(api, client, cache):
    api.reply("/token", 502, {"message": "bad gateway"})

    with pytest.raises(AuthenticationError) as exc_info:
        await client.token_provider.fetch_fresh()

    assert isinstance(exc_info.value.__cause__, HttpError)
    assert exc_info.value.__cause__.status_code == 502
    assert str(exc_info.value).startswith("Failed to obtain guest token")
    assert cache.get() is None


@pytest.mark.asyncio
async def test_network_error(api, client, cache):
    api.fail("/token", httpx.ConnectError, "dns failure")

    with pytest.raises(AuthenticationError, match="dns failure"):
        await client.token_provider.fetch_fresh()

    assert cache.get() is None
