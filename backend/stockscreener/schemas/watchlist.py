from datetime import datetime

from pydantic import BaseModel

from stockscreener.schemas.screening import CamelModel


class WatchlistData(CamelModel):
    """On-disk document."""

    symbols: list[str] = []
    last_updated: int | None = None  # epoch milliseconds


class WatchlistMetadata(BaseModel):
    count: int = 0
    last_updated: datetime | None = None


class WatchlistResponse(CamelModel):
    symbols: list[str] = []
    count: int = 0
    last_updated: datetime | None = None


class AddSymbolRequest(BaseModel):
    symbol: str


class SaveSymbolsRequest(BaseModel):
    symbols: list[str]
