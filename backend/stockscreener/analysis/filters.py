"""
Client-side filter predicates over Stock records.

A bound is active when it is not None, so a bound of 0 is still applied.
A record missing the field behind an active bound fails it, except for the
gap bounds, which are skipped when the record has no pre-market gap.
"""
from stockscreener.schemas.screening import ScreeningFilters, Stock

DEFAULT_LIMIT = 50


def _below(value: float | None, bound: float | None) -> bool:
    return bound is not None and (value is None or value < bound)


def _above(value: float | None, bound: float | None) -> bool:
    return bound is not None and (value is None or value > bound)


def matches(stock: Stock, filters: ScreeningFilters) -> bool:
    # Market cap
    if _below(stock.market_cap, filters.min_market_cap):
        return False
    if _above(stock.market_cap, filters.max_market_cap):
        return False

    # Price
    if _below(stock.price, filters.min_price):
        return False
    if _above(stock.price, filters.max_price):
        return False

    # P/E
    if _below(stock.pe, filters.min_pe):
        return False
    if _above(stock.pe, filters.max_pe):
        return False

    # Dividend yield
    if _below(stock.dividend_yield, filters.min_dividend_yield):
        return False

    # Gap magnitude, measured on the pre-market gap
    if stock.pre_market_gap is not None:
        abs_gap = abs(stock.pre_market_gap)
        if filters.min_gap is not None and abs_gap < filters.min_gap:
            return False
        if filters.max_gap is not None and abs_gap > filters.max_gap:
            return False

    if filters.sector and stock.sector != filters.sector:
        return False

    return True


def resolve_limit(limit: int | None, default: int = DEFAULT_LIMIT) -> int:
    if limit is None:
        return default
    return max(limit, 0)


def filter_stocks(stocks: list[Stock], filters: ScreeningFilters, default_limit: int = DEFAULT_LIMIT) -> list[Stock]:
    """Apply filters in arrival order and keep the first ``limit`` matches."""
    matched = [s for s in stocks if matches(s, filters)]
    return matched[:resolve_limit(filters.limit, default_limit)]
