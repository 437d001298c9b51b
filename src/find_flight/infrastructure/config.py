"""
Configuração da aplicação
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Configuração centralizada"""

    # API Keys
    AMADEUS_CLIENT_ID = os.getenv("AMADEUS_CLIENT_ID", "")
    AMADEUS_CLIENT_SECRET = os.getenv("AMADEUS_CLIENT_SECRET", "")
    AMADEUS_ENV = os.getenv("AMADEUS_ENV", "TEST").upper()
    AMADEUS_BASE_URL = os.getenv("AMADEUS_BASE_URL", "")

    # Parâmetros fixos da busca
    SEARCH_CURRENCY = "USD"
    SEARCH_ADULTS = 1
    SEARCH_MAX_RESULTS = 12

    # Limites
    REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "30"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    def is_amadeus_configured(self) -> bool:
        return bool(self.AMADEUS_CLIENT_ID and self.AMADEUS_CLIENT_SECRET)

    def get_amadeus_base_url(self) -> str:
        """Retorna a base URL da Amadeus conforme ambiente."""
        if self.AMADEUS_BASE_URL:
            return self.AMADEUS_BASE_URL.rstrip("/")
        return "https://api.amadeus.com" if self.AMADEUS_ENV == "PRODUCTION" else "https://test.api.amadeus.com"
