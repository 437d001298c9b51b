"""
Application Services - Casos de uso principais
"""
import logging
import re
from datetime import date
from typing import Any, List

from ..domain.errors import QueryValidationError
from ..domain.models import NormalizedOffer, SearchQuery, SearchResult
from .interfaces import FlightProviderInterface

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    ("origin", "origin"),
    ("destination", "destination"),
    ("departure_date", "departureDate"),
    ("return_date", "returnDate"),
)

DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def _parse_date(value: str, field: str) -> date:
    try:
        if not DATE_RE.fullmatch(value):
            raise ValueError(value)
        return date.fromisoformat(value)
    except ValueError:
        raise QueryValidationError(f"{field} must be a date in YYYY-MM-DD format.", field=field) from None


def validate_query(query: SearchQuery) -> SearchQuery:
    """Valida a consulta antes de qualquer chamada à API e devolve a versão normalizada"""
    query = build_query(query.origin, query.destination, query.departure_date, query.return_date)

    missing = [wire for attr, wire in REQUIRED_FIELDS if not getattr(query, attr)]
    if missing:
        raise QueryValidationError(
            "origin, destination, departureDate, and returnDate are required.",
            field=missing[0],
        )

    if query.origin == query.destination:
        raise QueryValidationError("Origin and destination must be different.", field="destination")

    departure = _parse_date(query.departure_date, "departureDate")
    return_ = _parse_date(query.return_date, "returnDate")
    if return_ < departure:
        raise QueryValidationError("Return date must be on or after departure date.", field="returnDate")

    return query


class FlightSearchService:
    """Serviço principal de busca de voos"""

    def __init__(self, provider: FlightProviderInterface):
        self._provider = provider

    async def __aenter__(self) -> "FlightSearchService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._provider.aclose()

    async def search(self, query: SearchQuery) -> SearchResult:
        """Valida, busca no provedor e ordena por preço"""
        query = validate_query(query)

        logger.info(
            "Searching %s -> %s (%s / %s) on %s",
            query.origin, query.destination, query.departure_date, query.return_date, self._provider.name,
        )
        offers = await self._provider.search(query)
        return SearchResult(offers=sort_by_price(offers))


def sort_by_price(offers: List[NormalizedOffer]) -> List[NormalizedOffer]:
    """Ordena pelo preço numérico; preços inválidos ficam no fim na ordem original"""
    return sorted(
        offers,
        key=lambda o: (o.price_value is None, o.price_value if o.price_value is not None else 0.0),
    )


def _clean(value: Any, upper: bool = False) -> Any:
    if not isinstance(value, str):
        return value
    value = value.strip()
    return value.upper() if upper else value


def build_query(origin: Any, destination: Any, departure_date: Any, return_date: Any) -> SearchQuery:
    """Monta a consulta normalizando os códigos IATA"""
    return SearchQuery(
        origin=_clean(origin, upper=True),
        destination=_clean(destination, upper=True),
        departure_date=_clean(departure_date),
        return_date=_clean(return_date),
    )
