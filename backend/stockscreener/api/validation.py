import re

from fastapi import HTTPException

from stockscreener.analysis.symbol_universe import clean_symbol

# Quote lookups also accept index symbols (^GSPC) and class shares (BRK.B, BF-B)
QUOTE_SYMBOL_PATTERN = re.compile(r"^\^?[A-Z0-9.\-]{1,10}$")


def parse_quote_symbol(raw: str) -> str:
    """Normalize a path symbol for a single-quote lookup, 400 when it cannot be a Yahoo symbol."""
    symbol = clean_symbol(raw or "")
    if not symbol:
        raise HTTPException(status_code=400, detail="Symbol is required")
    if not QUOTE_SYMBOL_PATTERN.match(symbol):
        raise HTTPException(
            status_code=400,
            detail=(
                f"Unsupported quote symbol '{symbol}': expected up to 10 letters, digits, "
                "'.' or '-', optionally prefixed with '^' for an index"
            ),
        )
    return symbol
