"""
Sector summary snapshot and sector-click selection.

The selection composes with the text search as an extra AND predicate on
signal records. Stores register a listener so a selection change resets
their pagination.
"""
import logging
from typing import Callable, Optional, Sequence

from signalboard.core.exceptions import SignalBoardError
from signalboard.models.sector import SectorSummary
from signalboard.models.signal import SignalRecord
from signalboard.models.view import SectorBoard, SectorTile
from signalboard.services.classifier import TIER_BG_CLASS, TIER_TEXT_CLASS, change_tier
from signalboard.services.fetch_state import FetchState, RequestTracker
from signalboard.services.formatter import format_signed
from signalboard.services.sources.base import SignalSource

logger = logging.getLogger(__name__)

SelectionListener = Callable[[Optional[str]], None]


def filter_by_sector(records: Sequence[SignalRecord], sector: Optional[str]) -> list[SignalRecord]:
    if sector is None:
        return list(records)
    return [record for record in records if record.sector == sector]


class SectorAggregator:
    """Owns the sector snapshot and the single selected sector."""

    def __init__(self, source: SignalSource) -> None:
        self._source = source
        self._tracker = RequestTracker()
        self._summaries: tuple[SectorSummary, ...] = ()
        self._listeners: list[SelectionListener] = []
        self.state = FetchState()
        self.selected: Optional[str] = None

    @property
    def summaries(self) -> tuple[SectorSummary, ...]:
        return self._summaries

    def subscribe(self, listener: SelectionListener) -> None:
        self._listeners.append(listener)

    async def load(self) -> bool:
        """Fetch the sector snapshot. Returns True if it was applied."""
        token = self._tracker.begin()
        self.state.start()
        try:
            summaries = await self._source.fetch_sectors()
        except SignalBoardError as exc:
            if not self._tracker.is_current(token):
                logger.debug("Discarding stale sector failure: %s", exc.message)
                return False
            logger.warning("Sector fetch failed: %s", exc.message)
            self.state.fail(exc, "Failed to load sector performance")
            return False

        if not self._tracker.is_current(token):
            logger.debug("Discarding stale sector snapshot")
            return False
        self._summaries = tuple(summaries)
        self.state.succeed()
        return True

    def dispose(self) -> None:
        self._tracker.invalidate()
        self.state.cancel()

    def toggle(self, sector: str) -> Optional[str]:
        """Select a sector, or clear the selection if it is already selected."""
        self.selected = None if sector == self.selected else sector
        logger.debug("Sector selection is now %s", self.selected)
        for listener in self._listeners:
            listener(self.selected)
        return self.selected

    def clear(self) -> None:
        if self.selected is not None:
            self.toggle(self.selected)

    def tiles(self) -> list[SectorTile]:
        tiles = []
        for summary in self._summaries:
            tier = change_tier(summary.day_change)
            tiles.append(
                SectorTile(
                    sector=summary.sector,
                    day_change=format_signed(summary.day_change),
                    tier=tier.value,
                    text_class=TIER_TEXT_CLASS[tier],
                    bg_class=TIER_BG_CLASS[tier],
                    selected=summary.sector == self.selected,
                )
            )
        return tiles

    def board(self) -> SectorBoard:
        return SectorBoard(
            status=self.state.status,
            error=self.state.error,
            selected_sector=self.selected,
            tiles=self.tiles(),
        )
