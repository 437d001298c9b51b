"""
Formatação de ofertas para exibição
"""
import re
from datetime import datetime
from typing import List, NamedTuple, Optional

import numpy as np

from ..domain.models import NormalizedOffer

GOOGLE_FLIGHTS_URL = "https://www.google.com/travel/flights"

_HOURS_RE = re.compile(r"(\d+)H")
_MINUTES_RE = re.compile(r"(\d+)M")


class PriceStats(NamedTuple):
    minimum: float
    median: float
    maximum: float


def format_duration(value: Optional[str]) -> str:
    """PT5H30M -> 5h 30m"""
    if not value:
        return "Duração desconhecida"
    parts = []
    hours = _HOURS_RE.search(value)
    minutes = _MINUTES_RE.search(value)
    if hours:
        parts.append(f"{hours.group(1)}h")
    if minutes:
        parts.append(f"{minutes.group(1)}m")
    return " ".join(parts) or value


def format_datetime(value: Optional[str]) -> str:
    if not value:
        return "Horário desconhecido"
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%d/%m/%Y %H:%M")
    except ValueError:
        return value


def google_flights_url(offer: NormalizedOffer, currency: str = "USD") -> str:
    """Link de ida e volta no Google Flights; página inicial se faltarem dados"""
    origin = offer.outbound.departure_airport
    destination = offer.outbound.arrival_airport
    out_date = (offer.outbound.departure_time or "").split("T")[0]
    in_date = (offer.inbound.departure_time or "").split("T")[0]

    if not (origin and destination and out_date and in_date):
        return GOOGLE_FLIGHTS_URL

    flt = f"{origin}.{destination}.{out_date}*{destination}.{origin}.{in_date}"
    return f"{GOOGLE_FLIGHTS_URL}?hl=en#flt={flt};c:{offer.currency or currency};e:1;sd:1;t:f"


def price_stats(offers: List[NormalizedOffer]) -> Optional[PriceStats]:
    """Mínimo, mediana e máximo dos preços válidos"""
    prices = np.array([o.price_value for o in offers if o.price_value is not None], dtype=float)
    if prices.size == 0:
        return None
    return PriceStats(
        minimum=float(prices.min()),
        median=float(np.median(prices)),
        maximum=float(prices.max()),
    )
