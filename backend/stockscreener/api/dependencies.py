from functools import lru_cache

from stockscreener.config import get_settings
from stockscreener.services.screening_pipeline import ScreeningPipeline
from stockscreener.services.watchlist_store import WatchlistStore
from stockscreener.services.yfinance_service import YFinanceService


@lru_cache
def get_pipeline() -> ScreeningPipeline:
    """Process-wide screening pipeline built from settings."""
    settings = get_settings()
    return ScreeningPipeline(
        provider=YFinanceService(),
        universe=settings.symbol_universe,
        max_concurrency=settings.max_concurrency,
        default_limit=settings.default_limit,
    )


def get_watchlist_store() -> WatchlistStore:
    settings = get_settings()
    return WatchlistStore(settings.watchlist_path, max_symbols=settings.watchlist_max_symbols)
