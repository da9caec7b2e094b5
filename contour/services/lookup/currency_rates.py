"""
Currency Rate Service

Live exchange rates from frankfurter.app with open.er-api.com as fallback.
"""

import httpx
import logging
from typing import Optional

from contour import config
from contour.utils.rate_cache import TTLCache
from .errors import ResolverError

logger = logging.getLogger(__name__)


class CurrencyRateService:
    """Looks up the rate for one ISO code pair. Rates are cached per pair."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        primary_url: str = config.CURRENCY_API_URL,
        fallback_url: str = config.CURRENCY_FALLBACK_API_URL,
        cache: Optional[TTLCache] = None,
    ):
        self._client = client
        self._primary_url = primary_url
        self._fallback_url = fallback_url
        self._cache = cache or TTLCache(config.RATE_CACHE_TTL_SECONDS)

    async def get_rate(self, from_code: str, to_code: str) -> float:
        """
        Get the exchange rate from_code -> to_code

        Raises:
            ResolverError: Neither API returned a rate for the pair
        """
        from_code, to_code = from_code.upper(), to_code.upper()
        if from_code == to_code:
            return 1.0

        key = f"{from_code}:{to_code}"
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        rate = await self._fetch_frankfurter(from_code, to_code)
        if rate is None:
            rate = await self._fetch_open_er(from_code, to_code)
        if rate is None:
            raise ResolverError(f"No rate for {from_code} → {to_code}")

        self._cache.set(key, rate)
        logger.info(f"Rate fetched: 1 {from_code} = {rate} {to_code}")
        return rate

    async def _get_json(self, url: str, params: Optional[dict] = None) -> Optional[dict]:
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, timeout=config.HTTP_TIMEOUT_SECONDS)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url, params=params, timeout=config.HTTP_TIMEOUT_SECONDS)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Rate request to {url} failed: {e}")
            return None

    async def _fetch_frankfurter(self, from_code: str, to_code: str) -> Optional[float]:
        data = await self._get_json(self._primary_url, {"from": from_code, "to": to_code})
        if not data:
            return None
        rate = data.get("rates", {}).get(to_code)
        return float(rate) if rate is not None else None

    async def _fetch_open_er(self, from_code: str, to_code: str) -> Optional[float]:
        data = await self._get_json(f"{self._fallback_url}/{from_code}")
        if not data or data.get("result") != "success":
            return None
        rate = data.get("rates", {}).get(to_code)
        return float(rate) if rate is not None else None
