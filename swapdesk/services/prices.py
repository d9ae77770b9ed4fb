"""Price lookup with a single fallback hop between two upstream sources."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..core.swap.constants import CATALOG_SYMBOLS
from ..core.swap.models import PriceTable
from ..providers.base import PriceProvider
from ..providers.coingecko import CoingeckoProvider
from ..providers.price_listing import PriceListingProvider

logger = logging.getLogger(__name__)


class PriceService:
    """Fetch catalog prices from the primary source, falling back to the secondary.

    A source that is disabled, fails, or returns nothing counts as zero usable
    entries. If neither source produces a price the result is an empty table;
    callers treat every asset as unpriced rather than failing.
    """

    def __init__(
        self,
        *,
        primary: Optional[PriceProvider] = None,
        secondary: Optional[PriceProvider] = None,
    ) -> None:
        self._primary = primary or PriceListingProvider()
        self._secondary = secondary or CoingeckoProvider()

    @property
    def providers(self) -> List[PriceProvider]:
        return [self._primary, self._secondary]

    async def _fetch_from(self, provider: PriceProvider, symbols: List[str]) -> PriceTable:
        if not await provider.ready():
            logger.info(f"Skipping disabled price provider {provider.name}")
            return {}
        return await provider.get_prices(symbols)

    async def fetch_prices(self, symbols: Iterable[str] = CATALOG_SYMBOLS) -> PriceTable:
        wanted = list(symbols)

        prices = await self._fetch_from(self._primary, wanted)
        if prices:
            logger.info(f"Using {self._primary.name} prices ({len(prices)} symbols)")
            return prices

        logger.info(f"{self._primary.name} returned no prices, trying {self._secondary.name}")
        prices = await self._fetch_from(self._secondary, wanted)
        if prices:
            logger.info(f"Using {self._secondary.name} prices ({len(prices)} symbols)")
            return prices

        logger.warning("No prices available from any source")
        return {}


price_service = PriceService()


def get_price_service() -> PriceService:
    """Module-level accessor for the shared service; overridable in FastAPI routes."""

    return price_service


__all__ = [
    'PriceService',
    'price_service',
    'get_price_service',
]
