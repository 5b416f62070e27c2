import asyncio
import logging
from datetime import datetime, timezone

from stockscreener.analysis.filters import DEFAULT_LIMIT, filter_stocks
from stockscreener.analysis.stock_builder import build_screener_stock, build_stock
from stockscreener.analysis.symbol_universe import DEFAULT_UNIVERSE, normalize_symbols
from stockscreener.schemas.screening import ScreeningFilters, ScreeningResult, Stock
from stockscreener.services.yfinance_service import YFinanceService

logger = logging.getLogger(__name__)


def _result(stocks: list[Stock]) -> ScreeningResult:
    return ScreeningResult(data=stocks, count=len(stocks), timestamp=datetime.now(timezone.utc))


class ScreeningPipeline:
    """Fetch-then-filter screening over a symbol universe.

    Every per-symbol lookup is independent: a failure or a quote without a
    price resolves that symbol to None and is dropped, siblings are untouched.

    max_concurrency=None fans out one lookup per symbol with no cap. A positive
    value bounds the number of lookups in flight.

    default_limit applies whenever a caller leaves the result limit unset.
    """

    def __init__(
        self,
        provider: YFinanceService | None = None,
        universe: list[str] | None = None,
        max_concurrency: int | None = None,
        default_limit: int = DEFAULT_LIMIT,
    ):
        self.provider = provider or YFinanceService()
        self.universe = normalize_symbols(universe if universe is not None else DEFAULT_UNIVERSE)
        self.max_concurrency = max_concurrency
        self.default_limit = default_limit

    async def get_stock(self, symbol: str) -> Stock | None:
        try:
            quote = await self.provider.get_quote(symbol)
            stock = build_stock(symbol, quote)
        except Exception as e:
            logger.error(f"Error fetching data for {symbol}: {e}")
            return None
        if stock is None:
            logger.warning(f"No price data for {symbol}")
        return stock

    async def fetch_stocks(self, symbols: list[str]) -> list[Stock]:
        """Scatter/gather lookups, preserving input order and dropping misses."""
        if self.max_concurrency:
            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def lookup(symbol: str) -> Stock | None:
                async with semaphore:
                    return await self.get_stock(symbol)
        else:
            lookup = self.get_stock

        results = await asyncio.gather(*(lookup(s) for s in symbols))
        return [s for s in results if s is not None]

    async def screen(self, filters: ScreeningFilters, symbols: list[str] | None = None) -> ScreeningResult:
        universe = normalize_symbols(symbols) if symbols is not None else self.universe
        logger.info(f"Starting screen for {len(universe)} symbols")

        stocks = await self.fetch_stocks(universe)
        logger.info(f"Got {len(stocks)} valid stocks from Yahoo Finance")

        filtered = filter_stocks(stocks, filters, self.default_limit)
        logger.info(f"After filtering: {len(filtered)} stocks match criteria")
        return _result(filtered)

    async def screen_watchlist(self, symbols: list[str]) -> ScreeningResult:
        universe = normalize_symbols(symbols)
        stocks = await self.fetch_stocks(universe)
        logger.info(f"Got {len(stocks)}/{len(universe)} watchlist stocks")
        return _result(stocks)

    async def screen_predefined(self, screen_id: str, limit: int | None = None) -> ScreeningResult:
        # The provider needs a positive count; unset, zero or negative limits use the default
        count = limit if limit and limit > 0 else self.default_limit
        logger.info(f"Running predefined screener: {screen_id} (count={count})")
        try:
            quotes = await self.provider.get_predefined_screen(screen_id, count)
        except Exception as e:
            logger.error(f"Error running screener {screen_id}: {e}")
            return _result([])

        if not quotes:
            logger.warning(f"No results for screener: {screen_id}")
            return _result([])

        stocks = []
        for quote in quotes:
            stock = build_screener_stock(quote)
            if stock is not None:
                stocks.append(stock)
        logger.info(f"Got {len(stocks)} stocks from {screen_id}")
        return _result(stocks)

    async def get_quote(self, symbol: str) -> Stock | None:
        return await self.get_stock(symbol)

    # --- Convenience screens ---

    async def screen_by_market_cap(self, min_cap: float | None, max_cap: float | None, limit: int | None = None) -> ScreeningResult:
        return await self.screen(ScreeningFilters(min_market_cap=min_cap, max_market_cap=max_cap, limit=limit))

    async def screen_by_pe_ratio(self, min_pe: float | None, max_pe: float | None, limit: int | None = None) -> ScreeningResult:
        return await self.screen(ScreeningFilters(min_pe=min_pe, max_pe=max_pe, limit=limit))

    async def screen_by_dividend_yield(self, min_yield: float | None, max_yield: float | None = None, limit: int | None = None) -> ScreeningResult:
        # max_yield is ignored: there is no upper dividend bound
        return await self.screen(ScreeningFilters(min_dividend_yield=min_yield, limit=limit))

    async def screen_by_gap(self, min_gap: float | None, max_gap: float | None = None, limit: int | None = None) -> ScreeningResult:
        return await self.screen(ScreeningFilters(min_gap=min_gap, max_gap=max_gap, limit=limit))

    async def screen_by_large_gap(self, percentage: float | None, limit: int | None = None) -> ScreeningResult:
        return await self.screen(ScreeningFilters(min_gap=percentage, limit=limit))
