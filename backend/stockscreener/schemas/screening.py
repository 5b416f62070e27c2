from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire. Accepts either on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Stock(CamelModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    company_name: str
    price: float | None = None
    previous_close: float | None = None
    pre_market_price: float | None = None
    gap: float | None = None
    pre_market_gap: float | None = None
    market_cap: float | None = None
    sector: str | None = None
    industry: str | None = None
    pe: float | None = None
    dividend_yield: float | None = None
    beta: float | None = None
    volume: int | None = None
    avg_volume: int | None = None


class ScreeningFilters(CamelModel):
    limit: int | None = None  # None uses the configured default
    min_market_cap: float | None = None
    max_market_cap: float | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_pe: float | None = Field(None, alias="minPE")
    max_pe: float | None = Field(None, alias="maxPE")
    min_dividend_yield: float | None = None
    min_gap: float | None = None
    max_gap: float | None = None
    sector: str | None = None


class ScreeningResult(CamelModel):
    data: list[Stock] = []
    count: int = 0
    timestamp: datetime


# --- Request bodies ---

class PredefinedScreenRequest(CamelModel):
    screen_id: str | None = Field(None, validation_alias=AliasChoices("screenId", "scrId", "screen_id"))
    limit: int | None = None


class RangeScreenRequest(CamelModel):
    min_value: float | None = Field(None, alias="min")
    max_value: float | None = Field(None, alias="max")
    limit: int | None = None


class LargeGapScreenRequest(CamelModel):
    percentage: float | None = None
    limit: int | None = None


class WatchlistScreenRequest(CamelModel):
    symbols: list[str] | None = None
