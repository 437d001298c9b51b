"""
Erros de domínio e seus status HTTP equivalentes
"""
from typing import Optional


class FindFlightError(Exception):
    """Erro base da busca de voos"""

    http_status: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(FindFlightError):
    """Credenciais da Amadeus ausentes"""


class QueryValidationError(FindFlightError):
    """Consulta incompleta ou inválida"""

    http_status = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class UpstreamError(FindFlightError):
    """Resposta sem sucesso da API Amadeus"""

    def __init__(self, message: str, status_code: int, body: str):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UpstreamAuthorizationError(UpstreamError):
    """Falha na troca de credenciais OAuth2"""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Token request failed: {status_code} {body}", status_code, body)


class UpstreamSearchError(UpstreamError):
    """Falha na busca de ofertas, o status da API é repassado ao cliente"""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Flight search failed: {body}", status_code, body)
        self.http_status = status_code
