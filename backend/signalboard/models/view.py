"""
View-side types: per-session interaction state and the derived page.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from signalboard.models.signal import SignalRecord


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class ViewState:
    """Ephemeral interaction state. Never persisted."""
    sort_key: str
    sort_direction: str
    search_term: str = ""
    selected_sector: Optional[str] = None
    page: int = 1


class TimestampDisplay(BaseModel):
    compact: str
    full: str
    tooltip: str


class Badge(BaseModel):
    label: str
    css_class: str


class RangeHighlight(BaseModel):
    tight: bool
    gap: Optional[float] = None
    note: Optional[str] = None


class SignalRow(BaseModel):
    """A record with every display cell already formatted."""
    record: SignalRecord
    symbol: str
    close: str
    last_traded_price: str
    vwap: str
    ema20: str
    ema50: str
    volume_ratio: str
    strong_volume: bool
    last_volume: str
    avg_volume: str
    current_volume: str
    total_day_volume: str
    day_change: str
    change_tier: str
    change_text_class: str
    change_bg_class: str
    sector: str
    badge: Badge
    highlight: RangeHighlight
    updated: TimestampDisplay


class SectorTile(BaseModel):
    sector: str
    day_change: str
    tier: str
    text_class: str
    bg_class: str
    selected: bool


class SectorBoard(BaseModel):
    status: FetchStatus
    error: Optional[str] = None
    selected_sector: Optional[str] = None
    tiles: list[SectorTile]


class SignalView(BaseModel):
    """One derived page of a signal table."""
    table: str
    status: FetchStatus
    error: Optional[str] = None
    rows: list[SignalRow]
    total_items: int
    page: int
    total_pages: int
    page_numbers: list[int]
    has_previous: bool
    has_next: bool
    summary: str
    showing: str
    empty_message: Optional[str] = None
    search_term: str
    sort_key: str
    sort_direction: str
    selected_sector: Optional[str] = None
