import asyncio

import httpx
import pytest

from find_flight.domain.errors import ConfigurationError, UpstreamAuthorizationError
from find_flight.domain.models import CredentialToken
from find_flight.infrastructure.auth import AmadeusTokenProvider, TokenCache, parse_expires_in


def make_provider(config, upstream, clock, cache=None):
    return AmadeusTokenProvider(config, upstream.client(), clock=clock, cache=cache)


@pytest.mark.asyncio
async def test_cached_token_is_reused_without_network(config, upstream, clock):
    cache = TokenCache(CredentialToken(access_token="cached", expires_at=clock.now + 10))
    provider = make_provider(config, upstream, clock, cache)

    assert await provider.get_token() == "cached"
    assert upstream.calls == 0


@pytest.mark.asyncio
async def test_refresh_issues_one_call_and_caches_expiry(config, upstream, clock):
    upstream.token_response = httpx.Response(200, json={"access_token": "fresh", "expires_in": 1200})
    provider = make_provider(config, upstream, clock)

    assert await provider.get_token() == "fresh"
    assert len(upstream.token_requests) == 1
    assert provider.cache.get().expires_at == clock.now + 1200 - 60

    form = upstream.token_form()
    assert form == {
        "grant_type": ["client_credentials"],
        "client_id": ["client-id"],
        "client_secret": ["client-secret"],
    }
    assert upstream.token_requests[0].method == "POST"
    assert upstream.token_requests[0].headers["content-type"] == "application/x-www-form-urlencoded"


@pytest.mark.asyncio
async def test_missing_expires_in_defaults_to_1799(config, upstream, clock):
    upstream.token_response = httpx.Response(200, json={"access_token": "fresh"})
    provider = make_provider(config, upstream, clock)

    await provider.get_token()

    assert provider.cache.get().expires_at == clock.now + 1799 - 60


@pytest.mark.asyncio
async def test_expired_token_is_replaced(config, upstream, clock):
    old = CredentialToken(access_token="old", expires_at=clock.now)
    cache = TokenCache(old)
    provider = make_provider(config, upstream, clock, cache)

    assert await provider.get_token() == "tok-1"
    assert len(upstream.token_requests) == 1
    assert cache.get() is not old
    assert old.access_token == "old"


@pytest.mark.asyncio
async def test_token_valid_until_margin_then_refreshed(config, upstream, clock):
    provider = make_provider(config, upstream, clock)

    await provider.get_token()
    clock.advance(1799 - 60 - 1)
    await provider.get_token()
    assert len(upstream.token_requests) == 1

    clock.advance(1)
    await provider.get_token()
    assert len(upstream.token_requests) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["AMADEUS_CLIENT_ID", "AMADEUS_CLIENT_SECRET"])
async def test_missing_credentials_raise_configuration_error(config, upstream, clock, field):
    setattr(config, field, "")
    provider = make_provider(config, upstream, clock)

    with pytest.raises(ConfigurationError):
        await provider.get_token()
    assert upstream.calls == 0


@pytest.mark.asyncio
async def test_authorization_failure_carries_status_and_body(config, upstream, clock):
    upstream.token_response = httpx.Response(401, text="invalid_client")
    provider = make_provider(config, upstream, clock)

    with pytest.raises(UpstreamAuthorizationError) as excinfo:
        await provider.get_token()

    assert excinfo.value.status_code == 401
    assert excinfo.value.body == "invalid_client"
    assert "invalid_client" in str(excinfo.value)
    assert excinfo.value.http_status == 500
    assert provider.cache.get() is None


@pytest.mark.asyncio
async def test_response_without_access_token_is_rejected(config, upstream, clock):
    upstream.token_response = httpx.Response(200, json={"expires_in": 1799})
    provider = make_provider(config, upstream, clock)

    with pytest.raises(UpstreamAuthorizationError):
        await provider.get_token()


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_refresh(config, upstream, clock):
    provider = make_provider(config, upstream, clock)

    tokens = await asyncio.gather(*(provider.get_token() for _ in range(5)))

    assert tokens == ["tok-1"] * 5
    assert len(upstream.token_requests) == 1


@pytest.mark.parametrize(
    "value, expected",
    [(None, 1799), ("abc", 1799), (0, 1799), (-5, 1799), ("3600", 3600), (900, 900)],
)
def test_parse_expires_in(value, expected):
    assert parse_expires_in(value) == expected
