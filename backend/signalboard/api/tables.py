"""
Signal table API Router.

Forwards search, sort, page and reload intents to a table and returns the
recomputed view.
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from signalboard.api.deps import get_board, get_store
from signalboard.models.view import SignalView
from signalboard.services.board import SignalBoard

router = APIRouter()


class SearchRequest(BaseModel):
    term: str = ""


@router.get("/{table}/view", response_model=SignalView)
async def get_view(table: str, board: SignalBoard = Depends(get_board)) -> SignalView:
    """Current derived page for a table."""
    return get_store(board, table).view()


@router.post("/{table}/search", response_model=SignalView)
async def search(
    table: str,
    body: SearchRequest,
    board: SignalBoard = Depends(get_board),
) -> SignalView:
    store = get_store(board, table)
    store.set_search(body.term)
    return store.view()


@router.post("/{table}/sort/{key}", response_model=SignalView)
async def sort(table: str, key: str, board: SignalBoard = Depends(get_board)) -> SignalView:
    """Sort by `key`; repeating the same key flips the direction."""
    store = get_store(board, table)
    try:
        store.select_sort(key)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return store.view()


@router.post("/{table}/page/{page}", response_model=SignalView)
async def go_to_page(table: str, page: int, board: SignalBoard = Depends(get_board)) -> SignalView:
    store = get_store(board, table)
    store.set_page(page)
    return store.view()


@router.post("/{table}/reload", response_model=SignalView)
async def reload(table: str, board: SignalBoard = Depends(get_board)) -> SignalView:
    """Refetch the snapshot. On failure the last good rows stay, with an error set."""
    store = get_store(board, table)
    await store.load()
    return store.view()
