import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from functools import partial

import yfinance as yf

from stockscreener.config import get_settings

logger = logging.getLogger(__name__)

# Thread pool for running yfinance (synchronous) calls; sized for a full-universe fan-out
_executor = ThreadPoolExecutor(max_workers=get_settings().yfinance_max_workers)

# Yahoo caps predefined screen results per request
MAX_SCREEN_COUNT = 250


def _is_rate_limited(err: Exception) -> bool:
    err_str = str(err).lower()
    return "429" in err_str or "too many requests" in err_str or "rate limit" in err_str


def _retry(func, max_retries=None, base_delay=None):
    """Retry wrapper with exponential backoff for rate-limit errors."""
    settings = get_settings()
    max_retries = max(max_retries or settings.yfinance_max_retries, 1)
    base_delay = settings.yfinance_retry_base_delay if base_delay is None else base_delay
    for attempt in range(max_retries):
        try:
            return func()
        except Exception as e:
            if not _is_rate_limited(e) or attempt == max_retries - 1:
                raise
            delay = base_delay * (2 ** attempt)
            logger.warning(f"Rate limited (attempt {attempt + 1}/{max_retries}), waiting {delay}s...")
            time.sleep(delay)


async def _run_sync(func, *args, **kwargs):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_executor, partial(func, *args, **kwargs))


def _get_quote(symbol: str) -> dict:
    try:
        ticker = yf.Ticker(symbol)

        def fetch():
            return ticker.info

        logger.debug(f"Fetching quote for {symbol}")
        info = _retry(fetch)
        return info or {}
    except Exception as e:
        logger.error(f"yfinance quote error for {symbol}: {e}")
        return {}


def _get_predefined_screen(screen_id: str, count: int) -> list[dict]:
    try:
        def fetch():
            return yf.screen(screen_id, count=min(max(count, 1), MAX_SCREEN_COUNT))

        result = _retry(fetch)
        if not result:
            return []
        return result.get("quotes") or []
    except Exception as e:
        logger.error(f"yfinance screener error for {screen_id}: {e}")
        return []


class YFinanceService:
    async def get_quote(self, symbol: str) -> dict:
        return await _run_sync(_get_quote, symbol)

    async def get_predefined_screen(self, screen_id: str, count: int = 50) -> list[dict]:
        return await _run_sync(_get_predefined_screen, screen_id, count)
