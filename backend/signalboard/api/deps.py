from fastapi import HTTPException, Request

from signalboard.services.board import SignalBoard
from signalboard.services.signal_store import SignalStore


def get_board(request: Request) -> SignalBoard:
    board = getattr(request.app.state, "board", None)
    if board is None:
        raise HTTPException(status_code=503, detail="Signal board not initialised")
    return board


def get_store(board: SignalBoard, table: str) -> SignalStore:
    try:
        return board.table(table)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown table: {table}") from None
