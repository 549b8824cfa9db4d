import asyncio

import pytest

from signalboard.core.exceptions import NetworkFailure
from signalboard.models.sector import SectorSummary
from signalboard.models.view import FetchStatus
from signalboard.services.sector_aggregator import SectorAggregator, filter_by_sector


@pytest.fixture
def summaries():
    return [
        SectorSummary(sector="IT", day_change=120.0),
        SectorSummary(sector="Banking", day_change=-15.5),
        SectorSummary(sector="Energy", day_change=None),
    ]


def test_filter_by_sector(alphabet_records):
    assert filter_by_sector(alphabet_records, None) == alphabet_records
    it_only = filter_by_sector(alphabet_records, "IT")
    assert len(it_only) == 12
    assert all(record.sector == "IT" for record in it_only)


def test_double_toggle_restores_unfiltered(fake_source, alphabet_records):
    aggregator = SectorAggregator(fake_source)
    assert aggregator.toggle("IT") == "IT"
    assert aggregator.toggle("IT") is None
    assert filter_by_sector(alphabet_records, aggregator.selected) == alphabet_records


def test_toggle_other_sector_switches(fake_source):
    aggregator = SectorAggregator(fake_source)
    aggregator.toggle("IT")
    assert aggregator.toggle("Banking") == "Banking"


def test_listeners_receive_selection(fake_source):
    aggregator = SectorAggregator(fake_source)
    seen = []
    aggregator.subscribe(seen.append)
    aggregator.toggle("IT")
    aggregator.clear()
    assert seen == ["IT", None]


@pytest.mark.asyncio
async def test_load_builds_tiles(fake_source, summaries):
    fake_source.sectors = summaries
    aggregator = SectorAggregator(fake_source)
    assert await aggregator.load() is True
    aggregator.toggle("IT")

    board = aggregator.board()
    assert board.status is FetchStatus.READY
    assert board.selected_sector == "IT"
    it, banking, energy = board.tiles
    assert it.day_change == "+120.00"
    assert it.tier == "tier2"
    assert it.selected is True
    assert banking.text_class == "text-red-600"
    assert banking.selected is False
    assert energy.tier == "negative"


@pytest.mark.asyncio
async def test_load_failure_reports_error(fake_source, summaries):
    fake_source.sectors = summaries
    aggregator = SectorAggregator(fake_source)
    await aggregator.load()
    fake_source.script("__sectors__", NetworkFailure("connection refused"))

    assert await aggregator.load() is False
    assert aggregator.state.status is FetchStatus.ERROR
    assert aggregator.state.error == "Failed to load sector performance"
    assert len(aggregator.summaries) == 3


@pytest.mark.asyncio
async def test_disposed_load_is_discarded(fake_source, summaries):
    gate = asyncio.Event()
    fake_source.script("__sectors__", summaries, gate)
    aggregator = SectorAggregator(fake_source)

    task = asyncio.create_task(aggregator.load())
    await asyncio.sleep(0)
    aggregator.dispose()
    gate.set()

    assert await task is False
    assert aggregator.summaries == ()


@pytest.mark.asyncio
async def test_dispose_restores_status_before_request(fake_source, summaries):
    fake_source.sectors = summaries
    aggregator = SectorAggregator(fake_source)
    await aggregator.load()

    gate = asyncio.Event()
    fake_source.script("__sectors__", [], gate)
    task = asyncio.create_task(aggregator.load())
    await asyncio.sleep(0)
    assert aggregator.state.status is FetchStatus.LOADING
    aggregator.dispose()
    gate.set()

    assert await task is False
    assert aggregator.state.status is FetchStatus.READY
    assert len(aggregator.summaries) == 3
