"""Constants and token metadata for the swap form."""

from __future__ import annotations

from typing import Dict, Tuple

# Fixed catalog, in display order.
CATALOG_SYMBOLS: Tuple[str, ...] = (
    'SWTH',
    'ETH',
    'BTC',
    'USDC',
    'USDT',
    'BNB',
    'SOL',
    'ADA',
    'DOT',
    'MATIC',
    'AVAX',
    'LINK',
    'UNI',
    'ATOM',
    'XRP',
)

TOKEN_NAMES: Dict[str, str] = {
    'SWTH': 'Switcheo',
    'ETH': 'Ethereum',
    'BTC': 'Bitcoin',
    'USDC': 'USD Coin',
    'USDT': 'Tether',
    'BNB': 'Binance Coin',
    'SOL': 'Solana',
    'ADA': 'Cardano',
    'DOT': 'Polkadot',
    'MATIC': 'Polygon',
    'AVAX': 'Avalanche',
    'LINK': 'Chainlink',
    'UNI': 'Uniswap',
    'ATOM': 'Cosmos',
    'XRP': 'Ripple',
}

# Symbol -> CoinGecko coin id, used by the fallback price source.
COINGECKO_IDS: Dict[str, str] = {
    'SWTH': 'switcheo',
    'ETH': 'ethereum',
    'BTC': 'bitcoin',
    'USDC': 'usd-coin',
    'USDT': 'tether',
    'BNB': 'binancecoin',
    'SOL': 'solana',
    'ADA': 'cardano',
    'DOT': 'polkadot',
    'MATIC': 'matic-network',
    'AVAX': 'avalanche-2',
    'LINK': 'chainlink',
    'UNI': 'uniswap',
    'ATOM': 'cosmos',
    'XRP': 'ripple',
}

# Starting ledger for a new session. Copied per ledger, never mutated.
INITIAL_BALANCES: Dict[str, float] = {
    'BTC': 12.34,
    'ETH': 25.12,
    'SWTH': 125000,
    'USDC': 3421.55,
    'USDT': 1984.44,
    'BNB': 80.25,
    'SOL': 320.5,
    'ADA': 4500,
    'DOT': 980.2,
    'MATIC': 5100.67,
    'AVAX': 150.12,
    'LINK': 900.78,
    'UNI': 1120.45,
    'ATOM': 640.33,
    'XRP': 8600,
}

QUOTE_CURRENCY = 'usd'

# Rates below this are shown in exponential notation.
MIN_RATE_DISPLAY = 1e-8

DEFAULT_MAX_DECIMALS = 8
LARGE_AMOUNT_DECIMALS = 4
