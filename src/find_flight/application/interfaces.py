"""
Interfaces/Contratos para Application Layer
"""
from typing import List, Protocol
from ..domain.models import NormalizedOffer, SearchQuery


class TokenProviderInterface(Protocol):
    """Interface para fornecedores de token bearer"""

    async def get_token(self) -> str:
        """Retorna um token válido"""
        ...


class FlightProviderInterface(Protocol):
    """Interface para provedores de voo"""
    name: str

    async def search(self, query: SearchQuery) -> List[NormalizedOffer]:
        """Busca ofertas de voo"""
        ...

    async def aclose(self) -> None:
        """Libera o cliente HTTP"""
        ...
