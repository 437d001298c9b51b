"""
Normalização das ofertas brutas da Amadeus (flight-offers v2)
"""
from typing import Any, Dict, List, Mapping, Optional

from ...domain.models import FlightLeg, NormalizedOffer


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def extract_leg(itinerary: Any) -> FlightLeg:
    """Resume um itinerário: partida do primeiro segmento, chegada do último"""
    if not isinstance(itinerary, Mapping):
        return FlightLeg()

    segments = [seg for seg in _as_list(itinerary.get("segments")) if isinstance(seg, Mapping)]
    if not segments:
        return FlightLeg()

    departure = _as_mapping(segments[0].get("departure"))
    arrival = _as_mapping(segments[-1].get("arrival"))
    return FlightLeg(
        departure_airport=_text(departure.get("iataCode")),
        departure_time=_text(departure.get("at")),
        arrival_airport=_text(arrival.get("iataCode")),
        arrival_time=_text(arrival.get("at")),
        duration=_text(itinerary.get("duration")),
        stops=max(len(segments) - 1, 0),
    )


def normalize_offer(offer: Mapping[str, Any]) -> NormalizedOffer:
    """Converte uma oferta bruta em NormalizedOffer"""
    itineraries = _as_list(offer.get("itineraries"))
    outbound = itineraries[0] if len(itineraries) > 0 else None
    inbound = itineraries[1] if len(itineraries) > 1 else None

    price_info = _as_mapping(offer.get("price"))
    price = _text(price_info.get("total"))
    airlines = [str(code) for code in _as_list(offer.get("validatingAirlineCodes"))]

    return NormalizedOffer(
        id=_text(offer.get("id")),
        price=price,
        currency=_text(price_info.get("currency")),
        validating_airline_codes=airlines,
        outbound=extract_leg(outbound),
        inbound=extract_leg(inbound),
    )


def normalize_offers(payload: Dict[str, Any]) -> List[NormalizedOffer]:
    """Normaliza todas as ofertas de uma resposta; lista ausente vira lista vazia"""
    return [
        normalize_offer(offer)
        for offer in _as_list(payload.get("data"))
        if isinstance(offer, Mapping)
    ]

