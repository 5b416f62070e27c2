"""
Normalize raw provider quotes into Stock records.

Two provider shapes are handled: the per-symbol quote snapshot (yfinance
``Ticker.info``) and the entries of a predefined screen's ``quotes`` list.
"""
import math

from stockscreener.schemas.screening import Stock


def _safe_float(val) -> float | None:
    if val is None or isinstance(val, bool):
        return None
    try:
        f = float(val)
        return None if math.isnan(f) or math.isinf(f) else f
    except (ValueError, TypeError):
        return None


def _safe_int(val) -> int | None:
    f = _safe_float(val)
    return int(f) if f is not None else None


def calculate_gap(current: float, previous: float) -> float:
    """Percentage change of current vs previous, 0.0 when previous is zero."""
    if previous == 0:
        return 0.0
    return ((current - previous) / previous) * 100


def _dividend_pct(fraction) -> float:
    value = _safe_float(fraction)
    return value * 100 if value else 0.0


def build_stock(symbol: str, quote: dict | None) -> Stock | None:
    """Build a Stock from a quote snapshot. Returns None when there is no current price."""
    if not quote:
        return None

    price = _safe_float(quote.get("regularMarketPrice"))
    if not price:
        return None

    previous_close = _safe_float(quote.get("regularMarketPreviousClose")) or price
    # No pre-market session degrades to a zero pre-market gap
    pre_market_price = _safe_float(quote.get("preMarketPrice")) or price

    return Stock(
        symbol=quote.get("symbol") or symbol,
        company_name=quote.get("longName") or quote.get("shortName") or symbol,
        price=price,
        previous_close=previous_close,
        pre_market_price=pre_market_price,
        gap=calculate_gap(price, previous_close),
        pre_market_gap=calculate_gap(pre_market_price, previous_close),
        market_cap=_safe_float(quote.get("marketCap")),
        sector=quote.get("sector"),
        industry=quote.get("industry"),
        pe=_safe_float(quote.get("trailingPE")),
        dividend_yield=_dividend_pct(quote.get("dividendYield")),
        beta=_safe_float(quote.get("beta")),
        volume=_safe_int(quote.get("volume")),
        avg_volume=_safe_int(quote.get("averageVolume")),
    )


def build_screener_stock(quote: dict) -> Stock | None:
    """Map one entry of a predefined screen. The provider supplies the change percentages."""
    symbol = quote.get("symbol")
    if not symbol:
        return None

    price = _safe_float(quote.get("regularMarketPrice"))
    change_pct = _safe_float(quote.get("regularMarketChangePercent"))

    return Stock(
        symbol=symbol,
        company_name=quote.get("longName") or quote.get("shortName") or symbol,
        price=price,
        previous_close=_safe_float(quote.get("regularMarketPreviousClose")),
        pre_market_price=_safe_float(quote.get("preMarketPrice")) or price,
        gap=change_pct,
        pre_market_gap=_safe_float(quote.get("preMarketChangePercent")) or change_pct,
        market_cap=_safe_float(quote.get("marketCap")),
        sector=quote.get("sector"),
        industry=quote.get("industry"),
        pe=_safe_float(quote.get("trailingPE")),
        dividend_yield=_dividend_pct(quote.get("trailingAnnualDividendYield")),
        beta=_safe_float(quote.get("beta")),
        volume=_safe_int(quote.get("regularMarketVolume")),
        avg_volume=_safe_int(quote.get("averageDailyVolume3Month")),
    )
