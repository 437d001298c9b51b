"""
Provedor Amadeus API
"""
import logging
from typing import Any, Dict, List

import httpx

from ...application.interfaces import TokenProviderInterface
from ...domain.errors import UpstreamSearchError
from ...domain.models import NormalizedOffer, SearchQuery
from ..config import Config
from .normalizer import normalize_offers

logger = logging.getLogger(__name__)


class AmadeusProvider:
    """Provedor de voos ida e volta via Amadeus API"""

    name = "Amadeus"

    def __init__(self, config: Config, client: httpx.AsyncClient, token_provider: TokenProviderInterface):
        self._config = config
        self._client = client
        self._token_provider = token_provider

    async def search(self, query: SearchQuery) -> List[NormalizedOffer]:
        """Busca ofertas via Amadeus API"""
        token = await self._token_provider.get_token()

        params = self._build_search_params(query)
        headers = {"Authorization": f"Bearer {token}"}

        response = await self._client.get(
            f"{self._config.get_amadeus_base_url()}/v2/shopping/flight-offers",
            params=params,
            headers=headers,
        )
        if not response.is_success:
            logger.warning("Amadeus flight search failed: %s %s", response.status_code, response.text[:200])
            raise UpstreamSearchError(response.status_code, response.text)

        return self._parse_response(response.json())

    async def aclose(self) -> None:
        await self._client.aclose()

    def _build_search_params(self, query: SearchQuery) -> Dict[str, str]:
        """Constrói parâmetros da requisição"""
        return {
            "originLocationCode": query.origin,
            "destinationLocationCode": query.destination,
            "departureDate": query.departure_date,
            "returnDate": query.return_date,
            "adults": str(self._config.SEARCH_ADULTS),
            "nonStop": "false",
            "currencyCode": self._config.SEARCH_CURRENCY,
            "max": str(self._config.SEARCH_MAX_RESULTS),
        }

    def _parse_response(self, data: Any) -> List[NormalizedOffer]:
        """Converte resposta da API em ofertas"""
        if not isinstance(data, dict):
            raise ValueError("Unexpected flight search response from Amadeus")
        offers = normalize_offers(data)
        logger.info("Amadeus returned %d offers", len(offers))
        return offers
