"""
Detail lookup API Router.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from signalboard.api.deps import get_board, get_store
from signalboard.models.detail import DescriptionDetail, PivotLevels
from signalboard.models.view import FetchStatus
from signalboard.services.board import SignalBoard
from signalboard.services.detail_lookup import DetailLookup, LookupKind
from signalboard.services.formatter import Segment

router = APIRouter()


# ---------- Pydantic Schemas ----------

class LookupRequest(BaseModel):
    symbol: str
    kind: LookupKind = LookupKind.PIVOT


class DetailResponse(BaseModel):
    kind: LookupKind
    symbol: Optional[str]
    reference_price: Optional[float]
    status: FetchStatus
    pivots: Optional[PivotLevels]
    band: Optional[str]
    description: Optional[DescriptionDetail]
    narrative: dict[str, list[list[Segment]]]
    error: Optional[str]
    validation_error: Optional[str]


def _response(details: DetailLookup) -> DetailResponse:
    state = details.state
    return DetailResponse(
        kind=state.kind,
        symbol=state.symbol,
        reference_price=state.reference_price,
        status=state.status,
        pivots=state.pivots,
        band=details.band,
        description=state.description,
        narrative=details.narrative(),
        error=state.error,
        validation_error=state.validation_error,
    )


# ---------- Endpoints ----------

@router.get("", response_model=DetailResponse)
async def get_detail(board: SignalBoard = Depends(get_board)) -> DetailResponse:
    return _response(board.details)


@router.post("/lookup", response_model=DetailResponse)
async def manual_lookup(body: LookupRequest, board: SignalBoard = Depends(get_board)) -> DetailResponse:
    """Look up a typed symbol. Invalid input is rejected without calling the backend."""
    await board.details.submit_manual(body.symbol, body.kind)
    return _response(board.details)


@router.post("/rows/{table}/{symbol}", response_model=DetailResponse)
async def row_lookup(
    table: str,
    symbol: str,
    kind: LookupKind = LookupKind.PIVOT,
    board: SignalBoard = Depends(get_board),
) -> DetailResponse:
    """Look up a symbol clicked in a table, keeping its price as the reference."""
    store = get_store(board, table)
    record = next((r for r in store.records if r.symbol == symbol), None)
    if record is None:
        raise HTTPException(status_code=404, detail=f"{symbol} is not in the {table} table")
    await board.details.open_for_record(record, kind)
    return _response(board.details)


@router.delete("", response_model=DetailResponse)
async def close_detail(board: SignalBoard = Depends(get_board)) -> DetailResponse:
    board.details.close()
    return _response(board.details)
