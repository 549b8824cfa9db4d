"""
On-demand detail lookup for a single symbol.

Triggered from a table row or from a manually typed symbol. Only one
lookup is open at a time; a newer lookup or close() resets all lookup
state, and responses belonging to an older lookup are discarded.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from signalboard.core.exceptions import NotFound, SignalBoardError, ValidationFailure
from signalboard.models.detail import DescriptionDetail, PivotLevels
from signalboard.models.signal import SignalRecord
from signalboard.models.view import FetchStatus
from signalboard.services.fetch_state import RequestTracker
from signalboard.services.formatter import Segment, parse_emphasis
from signalboard.services.sources.base import SignalSource

logger = logging.getLogger(__name__)

MIN_SYMBOL_LENGTH = 2
MAX_SYMBOL_LENGTH = 10


class LookupKind(str, Enum):
    PIVOT = "pivot"
    DESCRIPTION = "description"


@dataclass
class LookupState:
    kind: LookupKind = LookupKind.PIVOT
    symbol: Optional[str] = None
    reference_price: Optional[float] = None
    status: FetchStatus = FetchStatus.IDLE
    pivots: Optional[PivotLevels] = None
    description: Optional[DescriptionDetail] = None
    error: Optional[str] = None
    validation_error: Optional[str] = None


def validate_symbol(text: Optional[str]) -> str:
    """Trim and upper-case a typed symbol; reject lengths outside 2-10."""
    symbol = (text or "").strip().upper()
    if not MIN_SYMBOL_LENGTH <= len(symbol) <= MAX_SYMBOL_LENGTH:
        raise ValidationFailure(
            f"Symbol must be {MIN_SYMBOL_LENGTH}-{MAX_SYMBOL_LENGTH} characters"
        )
    return symbol


class DetailLookup:
    """Lookup workflow with its own idle/loading/ready/error lifecycle."""

    def __init__(self, source: SignalSource) -> None:
        self._source = source
        self._tracker = RequestTracker()
        self.state = LookupState()

    async def open_for_record(
        self, record: SignalRecord, kind: LookupKind = LookupKind.PIVOT
    ) -> bool:
        return await self.lookup(record.symbol, kind, reference_price=record.reference_price)

    async def submit_manual(self, text: Optional[str], kind: LookupKind = LookupKind.PIVOT) -> bool:
        """Validate typed input locally; nothing is requested if it is rejected."""
        try:
            symbol = validate_symbol(text)
        except ValidationFailure as exc:
            logger.info("Rejected manual symbol %r: %s", text, exc.message)
            self.state.validation_error = exc.message
            return False
        return await self.lookup(symbol, kind)

    async def lookup(
        self,
        symbol: str,
        kind: LookupKind = LookupKind.PIVOT,
        reference_price: Optional[float] = None,
    ) -> bool:
        """
        Open a lookup for `symbol`. Returns True if its result was applied.
        """
        token = self._tracker.begin()
        kind = LookupKind(kind)
        self.state = LookupState(
            kind=kind,
            symbol=symbol,
            reference_price=reference_price,
            status=FetchStatus.LOADING,
        )
        logger.info("Looking up %s for %s", kind.value, symbol)

        try:
            if kind is LookupKind.PIVOT:
                result = await self._source.fetch_pivots(symbol)
            else:
                result = await self._source.fetch_description(symbol)
        except NotFound as exc:
            return self._fail(token, symbol, exc, f"Symbol {symbol} not found")
        except SignalBoardError as exc:
            return self._fail(token, symbol, exc, f"Failed to fetch {kind.value} for {symbol}")

        if not self._tracker.is_current(token):
            logger.debug("Discarding stale %s result for %s", kind.value, symbol)
            return False
        if kind is LookupKind.PIVOT:
            self.state.pivots = result
        else:
            self.state.description = result
        self.state.status = FetchStatus.READY
        return True

    def _fail(self, token: int, symbol: str, exc: SignalBoardError, message: str) -> bool:
        if not self._tracker.is_current(token):
            logger.debug("Discarding stale lookup failure for %s", symbol)
            return False
        logger.warning("Lookup for %s failed: %s", symbol, exc.message)
        self.state.status = FetchStatus.ERROR
        self.state.error = message
        return False

    def close(self) -> None:
        """Reset all lookup state and drop any response still in flight."""
        self._tracker.invalidate()
        self.state = LookupState()

    @property
    def band(self) -> Optional[str]:
        """Where the reference price sits relative to the pivot levels."""
        if self.state.pivots is None:
            return None
        return self.state.pivots.band(self.state.reference_price)

    def narrative(self) -> dict[str, list[list[Segment]]]:
        detail = self.state.description
        if detail is None:
            return {}
        return {
            "description": parse_emphasis(detail.description),
            "level_insights": parse_emphasis(detail.level_insights),
            "volume_commentary": parse_emphasis(detail.volume_commentary),
        }
