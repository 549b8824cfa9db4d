"""
Pytest configuration and shared fixtures for signalboard tests.
"""

import asyncio
from collections import defaultdict, deque
from typing import Any, Optional

import pytest

from signalboard.core.config import TableConfig
from signalboard.core.exceptions import NotFound
from signalboard.models.detail import DescriptionDetail, PivotLevels
from signalboard.models.sector import SectorSummary
from signalboard.models.signal import SignalRecord
from signalboard.services.sources.base import SignalSource


class FakeSignalSource(SignalSource):
    """
    In-memory source. Responses are looked up by endpoint or symbol;
    scripted responses (optionally held back by an asyncio.Event) are
    consumed first, in order.
    """

    def __init__(self) -> None:
        self.signals: dict[str, Any] = {}
        self.sectors: Any = []
        self.pivots: dict[str, Any] = {}
        self.descriptions: dict[str, Any] = {}
        self.calls: list[tuple[str, str]] = []
        self._scripted: dict[str, deque] = defaultdict(deque)

    def script(self, key: str, value: Any, gate: Optional[asyncio.Event] = None) -> None:
        self._scripted[key].append((value, gate))

    async def _respond(self, key: str, default: Any) -> Any:
        value, gate = default, None
        if self._scripted[key]:
            value, gate = self._scripted[key].popleft()
        if gate is not None:
            await gate.wait()
        if isinstance(value, Exception):
            raise value
        return value

    async def fetch_signals(self, endpoint: str) -> list[SignalRecord]:
        self.calls.append(("signals", endpoint))
        return await self._respond(endpoint, self.signals.get(endpoint, []))

    async def fetch_sectors(self) -> list[SectorSummary]:
        self.calls.append(("sectors", ""))
        return await self._respond("__sectors__", self.sectors)

    async def fetch_pivots(self, symbol: str) -> PivotLevels:
        self.calls.append(("pivot", symbol))
        return await self._respond(symbol, self.pivots.get(symbol, NotFound(symbol)))

    async def fetch_description(self, symbol: str) -> DescriptionDetail:
        self.calls.append(("description", symbol))
        return await self._respond(
            f"description:{symbol}", self.descriptions.get(symbol, NotFound(symbol))
        )


@pytest.fixture
def fake_source() -> FakeSignalSource:
    return FakeSignalSource()


@pytest.fixture
def make_record():
    """Factory for SignalRecord with wire-style keyword overrides."""
    def _make(symbol: str, **fields: Any) -> SignalRecord:
        return SignalRecord.model_validate({"symbol": symbol, **fields})
    return _make


@pytest.fixture
def ready_config() -> TableConfig:
    return TableConfig(
        name="ready",
        endpoint="analysis/ready",
        page_size=20,
        search_fields=("symbol", "sector"),
        timestamp_unit="ms",
        display_timezone="UTC",
    )


@pytest.fixture
def alphabet_records(make_record) -> list[SignalRecord]:
    """25 records A..Y with dayChange equal to their position (A=0 ... Y=24)."""
    return [
        make_record(chr(ord("A") + i), dayChange=float(i), sector="IT" if i % 2 else "Banking")
        for i in range(25)
    ]


@pytest.fixture
def sample_pivots() -> PivotLevels:
    return PivotLevels.model_validate({
        "pivot": 100.0,
        "resistances": {"r1": 105.0, "r2": 110.0, "r3": 115.0},
        "supports": {"s1": 95.0, "s2": 90.0, "s3": "N/A"},
        "date": "2026-10-16",
    })
