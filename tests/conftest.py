from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs

import httpx
import pytest

from find_flight.infrastructure.config import Config

BASE_URL = "https://test.api.amadeus.com"
TOKEN_PATH = "/v1/security/oauth2/token"
SEARCH_PATH = "/v2/shopping/flight-offers"


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class UpstreamStub:
    """Amadeus falso: responde token e busca, registrando as requisições"""

    def __init__(self):
        self.token_response = httpx.Response(200, json={"access_token": "tok-1", "expires_in": 1799})
        self.search_response = httpx.Response(200, json={"data": []})
        self.token_requests: List[httpx.Request] = []
        self.search_requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == TOKEN_PATH:
            self.token_requests.append(request)
            return self.token_response
        if request.url.path == SEARCH_PATH:
            self.search_requests.append(request)
            return self.search_response
        return httpx.Response(404, text="not found")

    @property
    def calls(self) -> int:
        return len(self.token_requests) + len(self.search_requests)

    def token_form(self, index: int = 0) -> Dict[str, List[str]]:
        return parse_qs(self.token_requests[index].content.decode())

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def make_segment(dep: str, dep_at: str, arr: str, arr_at: str) -> Dict[str, Any]:
    return {
        "departure": {"iataCode": dep, "at": dep_at},
        "arrival": {"iataCode": arr, "at": arr_at},
        "carrierCode": "AA",
    }


def make_offer(
    offer_id: str = "1",
    price: Optional[str] = "100.00",
    itineraries: Optional[List[Dict[str, Any]]] = None,
    airlines: Optional[List[str]] = None,
) -> Dict[str, Any]:
    offer: Dict[str, Any] = {
        "id": offer_id,
        "price": {"total": price, "currency": "USD"},
        "itineraries": itineraries if itineraries is not None else [],
    }
    if airlines is not None:
        offer["validatingAirlineCodes"] = airlines
    return offer


@pytest.fixture
def config() -> Config:
    cfg = Config()
    cfg.AMADEUS_CLIENT_ID = "client-id"
    cfg.AMADEUS_CLIENT_SECRET = "client-secret"
    cfg.AMADEUS_BASE_URL = BASE_URL
    return cfg


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()
