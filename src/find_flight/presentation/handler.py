"""
Adaptador HTTP: converte o corpo da requisição e os erros em (status, payload)
"""
import logging
from typing import Any, Dict, Tuple

from pydantic import ValidationError

from ..application.services import FlightSearchService, build_query
from ..domain.errors import FindFlightError

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Unexpected server error."


def error_payload(exc: BaseException) -> Tuple[int, Dict[str, Any]]:
    """Mapeia uma exceção para o status HTTP e corpo de erro"""
    if isinstance(exc, FindFlightError):
        return exc.http_status, {"error": exc.message}
    return 500, {"error": str(exc) or GENERIC_ERROR}


async def handle_search_request(service: FlightSearchService, body: Any) -> Tuple[int, Dict[str, Any]]:
    """Executa a busca a partir do JSON recebido pelo servidor"""
    if not isinstance(body, dict):
        body = {}

    try:
        query = build_query(
            body.get("origin"),
            body.get("destination"),
            body.get("departureDate"),
            body.get("returnDate"),
        )
    except ValidationError:
        return 400, {"error": "origin, destination, departureDate, and returnDate must be strings."}

    try:
        result = await service.search(query)
    except FindFlightError as exc:
        if exc.http_status >= 500:
            logger.error("Flight search failed: %s", exc.message)
        return error_payload(exc)
    except Exception as exc:
        logger.exception("Unexpected error during flight search")
        return error_payload(exc)

    return 200, result.to_payload()
