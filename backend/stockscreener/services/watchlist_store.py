"""
Local watchlist persistence.

Stores a deduplicated, validated list of ticker symbols as a single JSON
document: {"symbols": [...], "lastUpdated": <epoch ms>}. Reads and writes are
synchronous and last-writer-wins.
"""
import logging
import re
import time
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from stockscreener.analysis.symbol_universe import clean_symbol
from stockscreener.schemas.watchlist import WatchlistData, WatchlistMetadata

logger = logging.getLogger(__name__)

MAX_SYMBOLS = 50
TICKER_PATTERN = re.compile(r"^[A-Z0-9\-.]{1,5}$")


def is_valid_symbol(symbol: str) -> bool:
    return bool(TICKER_PATTERN.match(symbol))


class WatchlistStore:
    def __init__(self, path: str | Path, max_symbols: int = MAX_SYMBOLS):
        self.path = Path(path).expanduser()
        self.max_symbols = max_symbols

    def _read(self) -> WatchlistData | None:
        if not self.path.exists():
            return None
        try:
            return WatchlistData.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.error(f"Failed to load watchlist from {self.path}: {e}")
            return None

    def save_symbols(self, symbols: list[str]) -> bool:
        cleaned = list(dict.fromkeys(
            s for s in (clean_symbol(sym) for sym in symbols) if is_valid_symbol(s)
        ))
        if len(cleaned) > self.max_symbols:
            logger.warning(f"Maximum {self.max_symbols} symbols allowed")
            return False

        data = WatchlistData(symbols=cleaned, last_updated=int(time.time() * 1000))
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(data.model_dump_json(by_alias=True), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save watchlist to {self.path}: {e}")
            return False
        return True

    def load_symbols(self) -> list[str]:
        data = self._read()
        return list(data.symbols) if data else []

    def add_symbol(self, symbol: str) -> bool:
        symbols = self.load_symbols()
        cleaned = clean_symbol(symbol)

        if not is_valid_symbol(cleaned):
            logger.warning(f"Invalid ticker symbol: {symbol}")
            return False
        if cleaned in symbols:
            return False
        if len(symbols) >= self.max_symbols:
            logger.warning(f"Maximum {self.max_symbols} symbols reached")
            return False

        symbols.append(cleaned)
        return self.save_symbols(symbols)

    def remove_symbol(self, symbol: str) -> bool:
        symbols = self.load_symbols()
        cleaned = clean_symbol(symbol)
        remaining = [s for s in symbols if s != cleaned]
        if len(remaining) == len(symbols):
            return False
        return self.save_symbols(remaining)

    def clear_symbols(self) -> bool:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to clear watchlist at {self.path}: {e}")
            return False
        return True

    def get_metadata(self) -> WatchlistMetadata:
        data = self._read()
        if not data:
            return WatchlistMetadata()
        last_updated = None
        if data.last_updated:
            try:
                last_updated = datetime.fromtimestamp(data.last_updated / 1000, tz=timezone.utc)
            except (OverflowError, OSError, ValueError) as e:
                logger.warning(f"Ignoring unreadable lastUpdated in {self.path}: {e}")
        return WatchlistMetadata(count=len(data.symbols), last_updated=last_updated)
