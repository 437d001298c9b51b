"""
Factory para criar instâncias configuradas dos serviços
"""
import time
from typing import Callable, Optional

import httpx

from ..application.services import FlightSearchService
from .auth import AmadeusTokenProvider, TokenCache
from .config import Config
from .providers.amadeus_provider import AmadeusProvider


class FlightSearchServiceFactory:
    """Factory para criar o serviço de busca configurado"""

    @staticmethod
    def create(
        config: Optional[Config] = None,
        client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.time,
        cache: Optional[TokenCache] = None,
    ) -> FlightSearchService:
        """Cria uma instância completa do serviço de busca"""
        if config is None:
            config = Config()

        if client is None:
            client = httpx.AsyncClient(timeout=config.REQUEST_TIMEOUT)

        token_provider = AmadeusTokenProvider(config, client, clock=clock, cache=cache)
        provider = AmadeusProvider(config, client, token_provider)

        return FlightSearchService(provider=provider)
