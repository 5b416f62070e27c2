from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Screening
    default_limit: int = 50
    symbol_universe: list[str] | None = None  # None uses the built-in universe
    max_concurrency: int | None = None  # None = unbounded fan-out per screen

    # yfinance
    yfinance_max_workers: int = 32
    yfinance_max_retries: int = 1  # 1 = single attempt, no retry
    yfinance_retry_base_delay: float = 2.0

    # Watchlist
    watchlist_path: str = "~/.stockscreener/watchlist.json"
    watchlist_max_symbols: int = 50

    # Server
    host: str = "0.0.0.0"
    port: int = 3001

    model_config = {"env_file": ".env"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
