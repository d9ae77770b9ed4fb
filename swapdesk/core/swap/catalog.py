"""Asset catalog assembly and default pair selection."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from ...config import settings
from .constants import CATALOG_SYMBOLS, TOKEN_NAMES
from .models import Asset, PriceTable


def get_token_icon_url(symbol: str, base_url: Optional[str] = None) -> str:
    base = (base_url or settings.token_icon_base_url).rstrip("/")
    return f"{base}/{symbol.upper()}.svg"


def build_catalog(
    prices: PriceTable,
    symbols: Iterable[str] = CATALOG_SYMBOLS,
) -> List[Asset]:
    """One asset per symbol, in catalog order.

    Symbols without a quote are kept with ``price=None``; they are never dropped.
    """
    return [
        Asset(
            symbol=symbol,
            name=TOKEN_NAMES.get(symbol, symbol),
            icon_url=get_token_icon_url(symbol),
            price=prices.get(symbol),
        )
        for symbol in symbols
    ]


def pick_defaults(
    catalog: Sequence[Asset],
    preferred_source: Optional[str] = None,
    preferred_destination: Optional[str] = None,
) -> Tuple[Optional[Asset], Optional[Asset]]:
    """Initial (source, destination) pair for a new form.

    Prefers the configured canonical pair, then falls back to the first
    entries of the catalog. A single-asset catalog yields ``(asset, None)``;
    an empty one yields ``(None, None)``.
    """
    if not catalog:
        return None, None

    preferred_source = preferred_source or settings.default_source_symbol
    preferred_destination = preferred_destination or settings.default_destination_symbol

    source = next((a for a in catalog if a.symbol == preferred_source), catalog[0])
    destination = next(
        (a for a in catalog if a.symbol == preferred_destination and a.symbol != source.symbol),
        None,
    )
    if destination is None:
        destination = next((a for a in catalog if a.symbol != source.symbol), None)

    return source, destination
