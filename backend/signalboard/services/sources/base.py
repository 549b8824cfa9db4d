from abc import ABC, abstractmethod

from signalboard.models.detail import DescriptionDetail, PivotLevels
from signalboard.models.sector import SectorSummary
from signalboard.models.signal import SignalRecord


class SignalSource(ABC):
    """Abstract base class for signal backends."""

    @abstractmethod
    async def fetch_signals(self, endpoint: str) -> list[SignalRecord]:
        """
        Fetch one full signal snapshot from the given endpoint.
        Raises NetworkFailure or MalformedResponse.
        """
        raise NotImplementedError

    @abstractmethod
    async def fetch_sectors(self) -> list[SectorSummary]:
        """Fetch the sector summary snapshot."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_pivots(self, symbol: str) -> PivotLevels:
        """Fetch pivot levels for a symbol. Raises NotFound on 404."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_description(self, symbol: str) -> DescriptionDetail:
        """Fetch free-text commentary for a symbol. Raises NotFound on 404."""
        raise NotImplementedError
