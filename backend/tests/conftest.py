import pytest

from stockscreener.schemas.screening import Stock


def make_quote(symbol: str, price=100.0, previous_close=95.0, pre_market_price=None, **extra) -> dict:
    """Quote snapshot shaped like yfinance ``Ticker.info``."""
    quote = {
        "symbol": symbol,
        "longName": f"{symbol} Inc.",
        "regularMarketPrice": price,
        "regularMarketPreviousClose": previous_close,
        "marketCap": 50e9,
        "trailingPE": 20.0,
        "dividendYield": 0.015,
        "beta": 1.1,
        "volume": 1_000_000,
        "averageVolume": 1_200_000,
        "sector": "Technology",
        "industry": "Software",
    }
    if pre_market_price is not None:
        quote["preMarketPrice"] = pre_market_price
    quote.update(extra)
    return quote


def make_stock(symbol: str = "AAA", **fields) -> Stock:
    base = {
        "symbol": symbol,
        "company_name": f"{symbol} Inc.",
        "price": 100.0,
        "previous_close": 95.0,
        "pre_market_price": 100.0,
        "gap": 5.26,
        "pre_market_gap": 5.26,
        "market_cap": 50e9,
        "sector": "Technology",
        "pe": 20.0,
        "dividend_yield": 1.5,
    }
    base.update(fields)
    return Stock(**base)


class FakeProvider:
    """Stands in for YFinanceService. Values may be a quote dict or an Exception to raise."""

    def __init__(self, quotes: dict | None = None, screens: dict | None = None):
        self.quotes = quotes or {}
        self.screens = screens or {}
        self.quote_calls: list[str] = []
        self.screen_calls: list[tuple[str, int]] = []

    async def get_quote(self, symbol: str) -> dict:
        self.quote_calls.append(symbol)
        value = self.quotes.get(symbol, {})
        if isinstance(value, Exception):
            raise value
        return value

    async def get_predefined_screen(self, screen_id: str, count: int = 50) -> list[dict]:
        self.screen_calls.append((screen_id, count))
        value = self.screens.get(screen_id, [])
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()
