import logging
import math
from typing import Any, Dict, Iterable, Optional

import httpx

from ..config import settings
from .base import PriceProvider

logger = logging.getLogger(__name__)


def _as_price(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        price = float(value)
    elif isinstance(value, str):
        try:
            price = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return price if math.isfinite(price) else None


def parse_price_listing(payload: Any) -> Dict[str, float]:
    """Normalize a bulk listing payload into ``{SYMBOL: price}``.

    Accepts either a flat ``{symbol: price}`` map or a list of
    ``{"currency", "price", "date"}`` records, where the most recent record
    per currency wins.
    """
    prices: Dict[str, float] = {}

    if isinstance(payload, dict):
        for symbol, raw in payload.items():
            price = _as_price(raw)
            if price is not None:
                prices[str(symbol).upper()] = price
        return prices

    if isinstance(payload, list):
        latest: Dict[str, str] = {}
        for record in payload:
            if not isinstance(record, dict):
                continue
            symbol = str(record.get("currency") or "").upper()
            price = _as_price(record.get("price"))
            if not symbol or price is None:
                continue
            date = str(record.get("date") or "")
            if symbol in latest and date < latest[symbol]:
                continue
            latest[symbol] = date
            prices[symbol] = price

    return prices


class PriceListingProvider(PriceProvider):
    """Bulk price listing endpoint: one request returns every known price."""

    name = "price_listing"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = settings.price_listing_url
        self.timeout_s = settings.request_timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.timeout_s)

    async def ready(self) -> bool:
        return settings.enable_price_listing and bool(self.url)

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {
                "status": "unavailable",
                "reason": "Provider disabled"
            }

        try:
            async with self._client() as client:
                response = await client.get(self.url)
                response.raise_for_status()
                return {"status": "healthy", "latency_ms": int(response.elapsed.total_seconds() * 1000)}
        except Exception as e:
            return {"status": "error", "reason": str(e)}

    async def get_prices(self, symbols: Iterable[str]) -> Dict[str, float]:
        wanted = {symbol.upper() for symbol in symbols}
        if not wanted:
            return {}

        try:
            async with self._client() as client:
                response = await client.get(self.url, headers={"Accept": "application/json"})
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"Price listing request failed: {exc}")
            return {}

        prices = {symbol: price for symbol, price in parse_price_listing(payload).items() if symbol in wanted}
        logger.info(f"Fetched {len(prices)} prices from price listing")
        return prices
