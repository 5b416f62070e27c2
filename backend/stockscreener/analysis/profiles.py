from stockscreener.schemas.screening import ScreeningFilters

# Named filter presets served by GET /api/profiles
SCREENING_PROFILES: dict[str, ScreeningFilters] = {
    "tech_growth": ScreeningFilters(sector="Technology", min_pe=0, max_pe=40, min_market_cap=1e9, limit=50),
    "large_gap": ScreeningFilters(min_gap=20, limit=50),
    "huge_gap": ScreeningFilters(min_gap=50, limit=30),
    "dividend_aristocrats": ScreeningFilters(min_dividend_yield=3, limit=50),
    "dividend_stocks": ScreeningFilters(min_dividend_yield=2, limit=50),
    "large_cap": ScreeningFilters(min_market_cap=10e9, limit=50),
    "small_cap": ScreeningFilters(min_market_cap=300e6, max_market_cap=2e9, limit=50),
    "value_stocks": ScreeningFilters(min_pe=0, max_pe=15, min_market_cap=1e9, limit=50),
}
