"""
Sector API Router.
"""
from fastapi import APIRouter, Depends

from signalboard.api.deps import get_board
from signalboard.models.view import SectorBoard
from signalboard.services.board import SignalBoard

router = APIRouter()


@router.get("", response_model=SectorBoard)
async def get_sectors(board: SignalBoard = Depends(get_board)) -> SectorBoard:
    return board.sectors.board()


@router.post("/reload", response_model=SectorBoard)
async def reload_sectors(board: SignalBoard = Depends(get_board)) -> SectorBoard:
    await board.sectors.load()
    return board.sectors.board()


@router.post("/{sector}/toggle", response_model=SectorBoard)
async def toggle_sector(sector: str, board: SignalBoard = Depends(get_board)) -> SectorBoard:
    """Select a sector, or clear it if already selected. Resets every table to page 1."""
    board.sectors.toggle(sector)
    return board.sectors.board()
