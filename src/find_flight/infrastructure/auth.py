"""
Autenticação OAuth2 (client credentials) na Amadeus API
"""
import asyncio
import logging
import time
from typing import Any, Callable, Optional

import httpx

from ..domain.errors import ConfigurationError, UpstreamAuthorizationError
from ..domain.models import CredentialToken
from .config import Config

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN = 1799
EXPIRY_MARGIN_SECONDS = 60


class TokenCache:
    """Guarda o token vigente; cada renovação substitui o anterior"""

    def __init__(self, token: Optional[CredentialToken] = None):
        self._token = token

    def get(self) -> Optional[CredentialToken]:
        return self._token

    def set(self, token: CredentialToken) -> None:
        self._token = token


def parse_expires_in(value: Any) -> int:
    """Tempo de vida declarado em segundos, 1799 quando ausente ou inválido"""
    try:
        seconds = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_EXPIRES_IN
    return seconds if seconds > 0 else DEFAULT_EXPIRES_IN


class AmadeusTokenProvider:
    """Obtém e reaproveita o token bearer da Amadeus"""

    def __init__(
        self,
        config: Config,
        client: httpx.AsyncClient,
        clock: Callable[[], float] = time.time,
        cache: Optional[TokenCache] = None,
    ):
        self._config = config
        self._client = client
        self._clock = clock
        self._cache = cache if cache is not None else TokenCache()
        self._refresh_lock = asyncio.Lock()

    @property
    def cache(self) -> TokenCache:
        return self._cache

    async def get_token(self) -> str:
        """Retorna o token em cache ou renova junto à Amadeus"""
        token = self._cached_token()
        if token:
            return token

        async with self._refresh_lock:
            # outra corrotina pode ter renovado enquanto aguardávamos
            token = self._cached_token()
            if token:
                return token
            return (await self._refresh()).access_token

    def _cached_token(self) -> Optional[str]:
        cached = self._cache.get()
        if cached and cached.is_valid(self._clock()):
            return cached.access_token
        return None

    async def _refresh(self) -> CredentialToken:
        if not self._config.is_amadeus_configured():
            raise ConfigurationError("Missing AMADEUS_CLIENT_ID or AMADEUS_CLIENT_SECRET")

        logger.debug("Requesting new Amadeus access token")
        response = await self._client.post(
            f"{self._config.get_amadeus_base_url()}/v1/security/oauth2/token",
            data={
                "grant_type": "client_credentials",
                "client_id": self._config.AMADEUS_CLIENT_ID,
                "client_secret": self._config.AMADEUS_CLIENT_SECRET,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        if not response.is_success:
            logger.error("Amadeus token request failed: %s %s", response.status_code, response.text[:200])
            raise UpstreamAuthorizationError(response.status_code, response.text)

        payload = response.json()
        access_token = payload.get("access_token")
        if not access_token:
            raise UpstreamAuthorizationError(response.status_code, "Response without access_token")

        expires_in = parse_expires_in(payload.get("expires_in"))
        token = CredentialToken(
            access_token=access_token,
            expires_at=self._clock() + (expires_in - EXPIRY_MARGIN_SECONDS),
        )
        self._cache.set(token)
        logger.info("Amadeus access token refreshed (valid for %ss)", expires_in - EXPIRY_MARGIN_SECONDS)
        return token
