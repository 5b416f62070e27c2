"""
Built-in symbol universe for the default screen.

Large and mid-cap US equities grouped by sector, plus index ETFs. A few
tickers appear in more than one group; callers normalize the list with
``normalize_symbols`` before fanning out.
"""

DEFAULT_UNIVERSE: list[str] = [
    # Mega Cap Tech
    "AAPL", "MSFT", "GOOG", "GOOGL", "AMZN", "NVDA", "META", "TSLA",
    # Large Cap Tech
    "AMD", "ADBE", "CRM", "AVGO", "QCOM", "CSCO", "INTC", "NFLX", "ASML", "MU",
    # Large Cap Finance
    "JPM", "BAC", "WFC", "GS", "MS", "BLK", "SCHW",
    # Large Cap Healthcare
    "JNJ", "UNH", "PFE", "ABBV", "MRK", "LLY", "TMO", "AZN",
    # Large Cap Industrials
    "BA", "CAT", "GE", "HON", "MMM", "ITW", "LMT", "RTX",
    # Large Cap Energy
    "XOM", "CVX", "COP", "SLB", "MPC", "PSX", "EOG",
    # Large Cap Consumer
    "WMT", "TGT", "COST", "MCD", "NKE", "SBUX", "CMG", "DIS",
    # Large Cap Communication
    "VZ", "T", "CMCSA", "CHTR", "TMUS",
    # Large Cap Utilities
    "NEE", "DUK", "SO", "EXC", "AEP",
    # Large Cap Real Estate
    "PLD", "EQIX", "DLR", "PSA", "WELL",
    # Mid Cap Growth
    "SNOW", "DDOG", "NOW", "CRWD", "SPLK", "OKTA", "TWLO", "ZM",
    # Biotech & Pharma
    "GILD", "BIIB", "ALNY", "SGEN", "BKNG", "REGN",
    # Semiconductors
    "MCHP", "NXPI", "LRCX", "KLAC", "AMAT", "ASML",
    # Retail & Consumer
    "AMZN", "BABA", "SE", "DKNG", "DASH", "UBER",
    # Fintech & Payments
    "SQ", "PYPL", "COIN", "HOOD", "AXP",
    # Small/Mid Cap High Growth
    "UPST", "RBLX", "ROKU", "PINS", "TTD", "ZS", "PSTG",
    # ETFs & Index Funds
    "SPY", "QQQ", "IWM", "XLK", "XLF", "XLE", "XLV", "XLY",
]


def clean_symbol(symbol: str) -> str:
    return symbol.strip().upper()


def normalize_symbols(symbols: list[str]) -> list[str]:
    """Upper-case, strip and de-duplicate, keeping first-seen order."""
    seen: dict[str, None] = {}
    for s in symbols:
        if not isinstance(s, str):
            continue
        cleaned = clean_symbol(s)
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)
