from fastapi import APIRouter, Depends, HTTPException

from stockscreener.api.dependencies import get_pipeline, get_watchlist_store
from stockscreener.schemas.screening import ScreeningResult, WatchlistScreenRequest
from stockscreener.schemas.watchlist import AddSymbolRequest, SaveSymbolsRequest, WatchlistResponse
from stockscreener.services.screening_pipeline import ScreeningPipeline
from stockscreener.services.watchlist_store import WatchlistStore

router = APIRouter(prefix="/api/watchlist", tags=["watchlist"])


def _snapshot(store: WatchlistStore) -> WatchlistResponse:
    meta = store.get_metadata()
    return WatchlistResponse(symbols=store.load_symbols(), count=meta.count, last_updated=meta.last_updated)


@router.post("/screen", response_model=ScreeningResult)
async def screen_watchlist(
    body: WatchlistScreenRequest,
    pipeline: ScreeningPipeline = Depends(get_pipeline),
):
    """Quote every symbol in the caller's list. No filtering is applied."""
    if not body.symbols:
        raise HTTPException(status_code=400, detail="No symbols provided")
    return await pipeline.screen_watchlist(body.symbols)


@router.get("", response_model=WatchlistResponse)
async def get_watchlist(store: WatchlistStore = Depends(get_watchlist_store)):
    return _snapshot(store)


@router.put("", response_model=WatchlistResponse)
async def save_watchlist(
    body: SaveSymbolsRequest,
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """Replace the stored list. Invalid tickers are dropped, duplicates collapsed."""
    if not store.save_symbols(body.symbols):
        raise HTTPException(status_code=400, detail=f"Maximum {store.max_symbols} symbols allowed")
    return _snapshot(store)


@router.post("", response_model=WatchlistResponse)
async def add_symbol(
    body: AddSymbolRequest,
    store: WatchlistStore = Depends(get_watchlist_store),
):
    if not store.add_symbol(body.symbol):
        raise HTTPException(
            status_code=400,
            detail=f"Could not add '{body.symbol}': invalid, already saved, or watchlist full",
        )
    return _snapshot(store)


@router.delete("/{symbol}", response_model=WatchlistResponse)
async def remove_symbol(
    symbol: str,
    store: WatchlistStore = Depends(get_watchlist_store),
):
    if not store.remove_symbol(symbol):
        raise HTTPException(status_code=404, detail=f"'{symbol.upper()}' is not in the watchlist")
    return _snapshot(store)


@router.delete("", response_model=WatchlistResponse)
async def clear_watchlist(store: WatchlistStore = Depends(get_watchlist_store)):
    if not store.clear_symbols():
        raise HTTPException(status_code=500, detail="Failed to clear watchlist")
    return _snapshot(store)
