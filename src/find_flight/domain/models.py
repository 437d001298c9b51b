"""
Domain Models - Entidades de negócio puras
"""
import math
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


def parse_price(value: Any) -> Optional[float]:
    """Converte o preço textual em número; None se não for um valor finito"""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class SearchQuery(BaseModel):
    """Critérios de busca ida e volta"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    origin: Optional[str] = Field(None, description="IATA origem")
    destination: Optional[str] = Field(None, description="IATA destino")
    departure_date: Optional[str] = Field(None, alias="departureDate", description="YYYY-MM-DD")
    return_date: Optional[str] = Field(None, alias="returnDate", description="YYYY-MM-DD")


class CredentialToken(BaseModel):
    """Token bearer da API Amadeus com instante absoluto de expiração"""
    model_config = ConfigDict(frozen=True)

    access_token: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class FlightLeg(BaseModel):
    """Trecho (ida ou volta) resumido de uma oferta"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    departure_airport: Optional[str] = Field(None, alias="departureAirport")
    departure_time: Optional[str] = Field(None, alias="departureTime")
    arrival_airport: Optional[str] = Field(None, alias="arrivalAirport")
    arrival_time: Optional[str] = Field(None, alias="arrivalTime")
    duration: Optional[str] = Field(None, description="Duração ISO-8601, ex: PT5H30M")
    stops: int = 0

    @property
    def route_summary(self) -> str:
        """Resumo da rota"""
        if not self.departure_airport and not self.arrival_airport:
            return ""
        return f"{self.departure_airport or '?'} → {self.arrival_airport or '?'}"


class NormalizedOffer(BaseModel):
    """Oferta simplificada pronta para exibição"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str] = None
    price: Optional[str] = Field(None, description="Preço total como enviado pela API")
    price_value: Optional[float] = Field(None, exclude=True)
    currency: Optional[str] = None
    validating_airline_codes: List[str] = Field(default_factory=list, alias="validatingAirlineCodes")
    outbound: FlightLeg = Field(default_factory=FlightLeg)
    inbound: FlightLeg = Field(default_factory=FlightLeg)

    @model_validator(mode="before")
    @classmethod
    def _derive_price_value(cls, data: Any) -> Any:
        # price_value sempre reflete price
        if isinstance(data, dict):
            data = {**data, "price_value": parse_price(data.get("price"))}
        return data


class SearchResult(BaseModel):
    """Resultado de uma busca"""
    offers: List[NormalizedOffer]

    @property
    def total_found(self) -> int:
        return len(self.offers)

    def to_payload(self) -> dict:
        """Formato JSON entregue ao front end"""
        return self.model_dump(by_alias=True)
