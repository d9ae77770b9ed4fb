import logging
import math
from typing import Any, Dict, Iterable, Mapping, Optional

import httpx

from ..config import settings
from ..core.swap.constants import COINGECKO_IDS, QUOTE_CURRENCY
from .base import PriceProvider

logger = logging.getLogger(__name__)


class CoingeckoProvider(PriceProvider):
    """Coingecko API provider for token prices"""
    
    name = "coingecko"
    
    def __init__(
        self,
        coin_ids: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = settings.coingecko_api_key
        self.base_url = settings.coingecko_base_url.rstrip("/")
        self.timeout_s = settings.request_timeout_seconds
        self.coin_ids: Dict[str, str] = dict(coin_ids or COINGECKO_IDS)
        self._transport = transport

    def _build_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"Accept": "application/json"}
        if self.api_key:
            headers["X-CG-Demo-API-Key"] = self.api_key
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.timeout_s)

    async def ready(self) -> bool:
        return settings.enable_coingecko  # API key is optional for basic tier
    
    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {
                "status": "unavailable",
                "reason": "Provider disabled"
            }
        
        try:
            async with self._client() as client:
                response = await client.get(
                    f"{self.base_url}/ping",
                    headers=self._build_headers(),
                )
                response.raise_for_status()
                return {"status": "healthy", "latency_ms": int(response.elapsed.total_seconds() * 1000)}
        except Exception as e:
            return {"status": "error", "reason": str(e)}
    
    async def get_prices(self, symbols: Iterable[str]) -> Dict[str, float]:
        """Get current USD prices for catalog symbols via ``/simple/price``"""
        ids_by_symbol = {
            symbol.upper(): self.coin_ids[symbol.upper()]
            for symbol in symbols
            if symbol.upper() in self.coin_ids
        }
        if not ids_by_symbol:
            return {}

        params = {
            "ids": ",".join(ids_by_symbol.values()),
            "vs_currencies": QUOTE_CURRENCY,
        }

        try:
            async with self._client() as client:
                response = await client.get(
                    f"{self.base_url}/simple/price",
                    headers=self._build_headers(),
                    params=params,
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"Coingecko price request failed: {exc}")
            return {}

        if not isinstance(data, dict):
            logger.warning("Coingecko returned an unexpected payload shape")
            return {}

        # A coin without a usd quote is unknown; the rest still count.
        prices: Dict[str, float] = {}
        for symbol, coin_id in ids_by_symbol.items():
            quote = data.get(coin_id)
            if not isinstance(quote, dict):
                continue
            value = quote.get(QUOTE_CURRENCY)
            if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
                prices[symbol] = float(value)

        logger.info(f"Fetched {len(prices)} prices from Coingecko")
        return prices
