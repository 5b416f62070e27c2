import asyncio

import pytest

from conftest import FakeProvider, make_quote
from stockscreener.schemas.screening import ScreeningFilters
from stockscreener.services.screening_pipeline import ScreeningPipeline


def _pipeline(quotes: dict, universe=None, **kwargs) -> ScreeningPipeline:
    provider = FakeProvider(quotes=quotes)
    return ScreeningPipeline(provider=provider, universe=universe or list(quotes), **kwargs)


class TestScreen:
    @pytest.mark.asyncio
    async def test_count_matches_data_and_default_limit(self):
        quotes = {f"T{i}": make_quote(f"T{i}") for i in range(60)}
        result = await _pipeline(quotes).screen(ScreeningFilters())

        assert result.count == len(result.data)
        assert result.count == 50

    @pytest.mark.asyncio
    async def test_limit_caps_results(self):
        quotes = {f"T{i}": make_quote(f"T{i}") for i in range(12)}
        result = await _pipeline(quotes).screen(ScreeningFilters(limit=5))
        assert result.count == 5

    @pytest.mark.asyncio
    async def test_failed_lookup_does_not_affect_siblings(self):
        quotes = {
            "GOOD1": make_quote("GOOD1"),
            "BOOM": RuntimeError("upstream exploded"),
            "NOPX": make_quote("NOPX", price=None),
            "GOOD2": make_quote("GOOD2"),
        }
        result = await _pipeline(quotes).screen(ScreeningFilters())

        assert [s.symbol for s in result.data] == ["GOOD1", "GOOD2"]
        assert result.count == 2

    @pytest.mark.asyncio
    async def test_universe_is_deduplicated(self):
        provider = FakeProvider(quotes={"AAPL": make_quote("AAPL"), "MSFT": make_quote("MSFT")})
        pipeline = ScreeningPipeline(provider=provider, universe=["AAPL", "MSFT", "aapl", "AAPL"])

        result = await pipeline.screen(ScreeningFilters())

        assert sorted(provider.quote_calls) == ["AAPL", "MSFT"]
        assert [s.symbol for s in result.data] == ["AAPL", "MSFT"]

    @pytest.mark.asyncio
    async def test_caller_symbols_override_universe(self):
        provider = FakeProvider(quotes={"XOM": make_quote("XOM"), "AAPL": make_quote("AAPL")})
        pipeline = ScreeningPipeline(provider=provider, universe=["AAPL"])

        result = await pipeline.screen(ScreeningFilters(), symbols=["xom"])

        assert provider.quote_calls == ["XOM"]
        assert result.data[0].symbol == "XOM"

    @pytest.mark.asyncio
    async def test_filters_applied_after_fetch(self):
        quotes = {
            "FLAT": make_quote("FLAT", price=100, previous_close=100),
            "DROP": make_quote("DROP", price=100, previous_close=100, pre_market_price=40),
        }
        result = await _pipeline(quotes).screen(ScreeningFilters(min_gap=50))
        assert [s.symbol for s in result.data] == ["DROP"]

    @pytest.mark.asyncio
    async def test_timestamp_is_set(self):
        result = await _pipeline({"A": make_quote("A")}).screen(ScreeningFilters())
        assert result.timestamp.tzinfo is not None

    @pytest.mark.asyncio
    async def test_configured_default_limit(self):
        quotes = {f"T{i}": make_quote(f"T{i}") for i in range(10)}
        pipeline = _pipeline(quotes, default_limit=4)

        assert (await pipeline.screen(ScreeningFilters())).count == 4
        assert (await pipeline.screen_by_large_gap(0)).count == 4
        assert (await pipeline.screen(ScreeningFilters(limit=7))).count == 7


class TestFanOut:
    @pytest.mark.asyncio
    async def test_lookups_run_concurrently(self):
        in_flight = 0
        peak = 0

        class SlowProvider(FakeProvider):
            async def get_quote(self, symbol):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return make_quote(symbol)

        symbols = [f"S{i}" for i in range(10)]
        pipeline = ScreeningPipeline(provider=SlowProvider(), universe=symbols)
        await pipeline.screen(ScreeningFilters())

        assert peak == 10

    @pytest.mark.asyncio
    async def test_max_concurrency_bounds_in_flight_lookups(self):
        in_flight = 0
        peak = 0

        class SlowProvider(FakeProvider):
            async def get_quote(self, symbol):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return make_quote(symbol)

        symbols = [f"S{i}" for i in range(10)]
        pipeline = ScreeningPipeline(provider=SlowProvider(), universe=symbols, max_concurrency=3)
        result = await pipeline.screen(ScreeningFilters())

        assert peak == 3
        assert [s.symbol for s in result.data] == symbols


class TestConvenienceScreens:
    @pytest.mark.asyncio
    async def test_market_cap_wrapper(self):
        quotes = {
            "SMALL": make_quote("SMALL", marketCap=1e9),
            "LARGE": make_quote("LARGE", marketCap=200e9),
        }
        result = await _pipeline(quotes).screen_by_market_cap(min_cap=10e9, max_cap=500e9)
        assert [s.symbol for s in result.data] == ["LARGE"]

    @pytest.mark.asyncio
    async def test_pe_wrapper(self):
        quotes = {"CHEAP": make_quote("CHEAP", trailingPE=8.0), "RICH": make_quote("RICH", trailingPE=80.0)}
        result = await _pipeline(quotes).screen_by_pe_ratio(0, 15, limit=10)
        assert [s.symbol for s in result.data] == ["CHEAP"]

    @pytest.mark.asyncio
    async def test_dividend_wrapper_ignores_max(self):
        quotes = {"HIGH": make_quote("HIGH", dividendYield=0.09), "NONE": make_quote("NONE", dividendYield=None)}
        result = await _pipeline(quotes).screen_by_dividend_yield(min_yield=3, max_yield=5)
        assert [s.symbol for s in result.data] == ["HIGH"]

    @pytest.mark.asyncio
    async def test_gap_wrappers(self):
        quotes = {
            "SMALL": make_quote("SMALL", price=100, previous_close=100, pre_market_price=105),
            "BIG": make_quote("BIG", price=100, previous_close=100, pre_market_price=130),
        }
        pipeline = _pipeline(quotes)

        assert [s.symbol for s in (await pipeline.screen_by_gap(min_gap=2, max_gap=10)).data] == ["SMALL"]
        assert [s.symbol for s in (await pipeline.screen_by_large_gap(20)).data] == ["BIG"]


class TestScreenWatchlist:
    @pytest.mark.asyncio
    async def test_returns_all_valid_unfiltered(self):
        quotes = {f"W{i}": make_quote(f"W{i}") for i in range(3)}
        quotes["BAD"] = ValueError("nope")
        pipeline = _pipeline(quotes, universe=["SPY"])

        result = await pipeline.screen_watchlist(["w0", "W1", "W1", "BAD", "W2"])

        assert [s.symbol for s in result.data] == ["W0", "W1", "W2"]
        assert result.count == 3


class TestScreenPredefined:
    @pytest.mark.asyncio
    async def test_maps_provider_quotes(self):
        provider = FakeProvider(screens={"day_gainers": [
            {"symbol": "UP1", "regularMarketPrice": 10.0, "regularMarketChangePercent": 12.0},
            {"symbol": "UP2", "regularMarketPrice": 20.0, "regularMarketChangePercent": 8.0},
        ]})
        pipeline = ScreeningPipeline(provider=provider, universe=[])

        result = await pipeline.screen_predefined("day_gainers", limit=2)

        assert provider.screen_calls == [("day_gainers", 2)]
        assert [s.symbol for s in result.data] == ["UP1", "UP2"]
        assert result.count == 2

    @pytest.mark.asyncio
    async def test_unknown_screen_returns_empty_result(self):
        pipeline = ScreeningPipeline(provider=FakeProvider(), universe=[])
        result = await pipeline.screen_predefined("not_a_real_screen")
        assert result.count == 0
        assert result.data == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [None, 0, -3])
    async def test_non_positive_limit_requests_default_count(self, limit):
        provider = FakeProvider()
        pipeline = ScreeningPipeline(provider=provider, universe=[], default_limit=25)

        await pipeline.screen_predefined("most_actives", limit)

        assert provider.screen_calls == [("most_actives", 25)]

    @pytest.mark.asyncio
    async def test_provider_exception_returns_empty_result(self):
        provider = FakeProvider(screens={"day_losers": RuntimeError("screener down")})
        pipeline = ScreeningPipeline(provider=provider, universe=[])

        result = await pipeline.screen_predefined("day_losers")

        assert result.count == 0


class TestGetQuote:
    @pytest.mark.asyncio
    async def test_missing_price_returns_none(self):
        pipeline = _pipeline({"GONE": {"symbol": "GONE"}})
        assert await pipeline.get_quote("GONE") is None

    @pytest.mark.asyncio
    async def test_returns_stock(self):
        pipeline = _pipeline({"AAPL": make_quote("AAPL", price=200.0)})
        stock = await pipeline.get_quote("AAPL")
        assert stock.price == 200.0
