import asyncio

import pytest

from signalboard.core.exceptions import MalformedResponse, NetworkFailure
from signalboard.models.view import FetchStatus
from signalboard.services.sector_aggregator import SectorAggregator
from signalboard.services.signal_store import SignalStore, unique_by_symbol


def letters(view):
    return "".join(row.symbol for row in view.rows)


@pytest.fixture
def loaded_store(fake_source, ready_config, alphabet_records):
    fake_source.signals["analysis/ready"] = alphabet_records
    return SignalStore(fake_source, ready_config)


@pytest.mark.asyncio
async def test_default_view_sorted_descending_and_paged(loaded_store):
    assert await loaded_store.load() is True

    view = loaded_store.view()
    assert view.status is FetchStatus.READY
    assert letters(view) == "YXWVUTSRQPONMLKJIHGF"
    assert view.total_items == 25
    assert view.total_pages == 2
    assert view.summary == "25 items • Page 1/2"
    assert view.showing == "Showing 20 of 25"
    assert view.has_next is True
    assert view.has_previous is False

    loaded_store.next_page()
    view = loaded_store.view()
    assert letters(view) == "EDCBA"
    assert view.page_numbers == [1, 2]
    assert view.has_next is False


@pytest.mark.asyncio
async def test_search_sort_and_sector_reset_page(fake_source, ready_config, alphabet_records):
    fake_source.signals["analysis/ready"] = alphabet_records
    store = SignalStore(fake_source, ready_config)
    await store.load()

    store.set_page(2)
    store.set_search("y")
    assert store.view_state.page == 1
    assert letters(store.view()) == "Y"

    store.clear_search()
    store.set_page(2)
    store.select_sort("dayChange")
    assert store.view_state.page == 1
    assert store.view_state.sort_direction == "asc"
    assert letters(store.view())[:3] == "ABC"

    store.set_page(2)
    store.select_sector("Banking")
    view = store.view()
    assert store.view_state.page == 1
    assert view.total_items == 13
    assert all(row.sector == "Banking" for row in view.rows)


@pytest.mark.asyncio
async def test_sector_selection_shared_through_aggregator(fake_source, ready_config, alphabet_records):
    fake_source.signals["analysis/ready"] = alphabet_records
    aggregator = SectorAggregator(fake_source)
    store = SignalStore(fake_source, ready_config, sectors=aggregator)
    await store.load()

    store.set_page(2)
    aggregator.toggle("IT")
    assert store.view_state.selected_sector == "IT"
    assert store.view_state.page == 1
    assert store.view().total_items == 12

    store.select_sector("IT")
    assert aggregator.selected is None
    assert store.view().total_items == 25


@pytest.mark.asyncio
async def test_search_composes_with_sector(fake_source, ready_config, make_record):
    fake_source.signals["analysis/ready"] = [
        make_record("TCS", sector="IT"),
        make_record("TATASTEEL", sector="Metals"),
        make_record("INFY", sector="IT"),
    ]
    store = SignalStore(fake_source, ready_config)
    await store.load()

    store.set_search("ta")
    store.select_sector("IT")
    view = store.view()
    assert view.total_items == 0
    assert view.empty_message == 'No signals found for "ta"'


@pytest.mark.asyncio
async def test_empty_messages(fake_source, ready_config):
    store = SignalStore(fake_source, ready_config)
    await store.load()
    view = store.view()
    assert view.total_pages == 1
    assert view.rows == []
    assert view.empty_message == "No signals in the ready list"

    store.select_sector("Pharma")
    assert store.view().empty_message == "No signals in Pharma"


@pytest.mark.asyncio
async def test_failed_reload_keeps_last_snapshot(loaded_store, fake_source):
    await loaded_store.load()
    fake_source.script("analysis/ready", NetworkFailure("HTTP 502", status_code=502))

    assert await loaded_store.load() is False
    view = loaded_store.view()
    assert view.status is FetchStatus.ERROR
    assert view.error == "Failed to fetch ready signals: HTTP 502"
    assert loaded_store.state.error_code == "NETWORK_FAILURE"
    assert view.total_items == 25


@pytest.mark.asyncio
async def test_malformed_response_is_reported(fake_source, ready_config):
    fake_source.script("analysis/ready", MalformedResponse("expected a list"))
    store = SignalStore(fake_source, ready_config)

    assert await store.load() is False
    assert store.state.status is FetchStatus.ERROR
    assert store.records == ()


@pytest.mark.asyncio
async def test_superseded_load_is_discarded(fake_source, ready_config, make_record):
    gate = asyncio.Event()
    fake_source.script("analysis/ready", [make_record("OLD")], gate)
    fake_source.script("analysis/ready", [make_record("NEW")])
    store = SignalStore(fake_source, ready_config)

    slow = asyncio.create_task(store.load())
    await asyncio.sleep(0)
    assert await store.load() is True
    gate.set()
    assert await slow is False

    assert [record.symbol for record in store.records] == ["NEW"]
    assert store.state.status is FetchStatus.READY


@pytest.mark.asyncio
async def test_dispose_drops_in_flight_response(fake_source, ready_config, make_record):
    gate = asyncio.Event()
    fake_source.script("analysis/ready", [make_record("LATE")], gate)
    store = SignalStore(fake_source, ready_config)

    task = asyncio.create_task(store.load())
    await asyncio.sleep(0)
    store.dispose()
    gate.set()

    assert await task is False
    assert store.records == ()


@pytest.mark.asyncio
async def test_page_clamped_when_snapshot_shrinks(fake_source, ready_config, alphabet_records):
    fake_source.script("analysis/ready", alphabet_records)
    fake_source.script("analysis/ready", alphabet_records[:5])
    store = SignalStore(fake_source, ready_config)
    await store.load()
    store.set_page(2)

    await store.load()
    assert store.view_state.page == 1


def test_duplicate_symbols_keep_first(make_record, caplog):
    records = [
        make_record("TCS", close=1.0),
        make_record("INFY"),
        make_record("TCS", close=2.0),
    ]
    unique = unique_by_symbol(records)
    assert [r.symbol for r in unique] == ["TCS", "INFY"]
    assert unique[0].close == 1.0
    assert "Duplicate symbol TCS" in caplog.text


@pytest.mark.asyncio
async def test_rows_are_formatted(fake_source, ready_config, make_record):
    fake_source.signals["analysis/ready"] = [
        make_record(
            "RELIANCE",
            open=2500.5,
            low=2500.0,
            close=2510.0,
            lastTradedPrice=2512.25,
            dayChange=75.0,
            totalDayVolume=12_500_000,
            volumeRatio=2.4,
            sector="Unknown",
            signalState="ENTRY_READY",
            updatedAt=1_700_000_000_000,
        )
    ]
    store = SignalStore(fake_source, ready_config)
    await store.load()

    row = store.view().rows[0]
    assert row.last_traded_price == "2512.25"
    assert row.total_day_volume == "1.25Cr"
    assert row.strong_volume is True
    assert row.day_change == "+75.00"
    assert row.change_tier == "tier1"
    assert row.sector == "-"
    assert row.badge.label == "ENTRY_READY"
    assert row.highlight.tight is True
    assert row.updated.compact == "10:13:20 PM"


@pytest.mark.asyncio
async def test_dispose_resets_loading_status(fake_source, ready_config, make_record):
    gate = asyncio.Event()
    fake_source.script("analysis/ready", [make_record("LATE")], gate)
    store = SignalStore(fake_source, ready_config)

    task = asyncio.create_task(store.load())
    await asyncio.sleep(0)
    assert store.state.status is FetchStatus.LOADING
    store.dispose()
    assert store.state.status is FetchStatus.IDLE
    gate.set()
    await task
    assert store.view().status is FetchStatus.IDLE


@pytest.mark.asyncio
async def test_attribute_sort_key_toggles_default_column(loaded_store):
    await loaded_store.load()
    loaded_store.select_sort("day_change")

    view = loaded_store.view()
    assert view.sort_key == "dayChange"
    assert view.sort_direction == "asc"
    assert letters(view)[:3] == "ABC"


@pytest.mark.asyncio
async def test_non_finite_volume_renders_not_available(fake_source, ready_config, make_record):
    fake_source.signals["analysis/ready"] = [
        make_record("TCS", lastVolume=float("nan"), avgVolume=float("inf"), dayChange=float("nan")),
        make_record("INFY", lastVolume=1500),
    ]
    store = SignalStore(fake_source, ready_config)
    assert await store.load() is True

    rows = {row.symbol: row for row in store.view().rows}
    assert rows["TCS"].last_volume == "N/A"
    assert rows["TCS"].avg_volume == "N/A"
    assert rows["TCS"].day_change == "-"
    assert rows["INFY"].last_volume == "1.50K"
