import pytest

from swapdesk.core.swap.models import Asset


def _asset(symbol: str, price=None) -> Asset:
    return Asset(symbol=symbol, name=symbol, icon_url=f"https://icons.test/{symbol}.svg", price=price)


@pytest.fixture
def make_asset():
    return _asset


@pytest.fixture
def btc() -> Asset:
    return _asset("BTC", 50000.0)


@pytest.fixture
def usdt() -> Asset:
    return _asset("USDT", 1.0)


@pytest.fixture
def unpriced() -> Asset:
    return _asset("SWTH")
