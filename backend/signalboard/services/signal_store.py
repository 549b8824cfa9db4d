"""
Primary signal snapshot and its derived view.

The view is recomputed from the view state and the latest snapshot as
search -> sector -> sort -> paginate. A failed reload keeps the last good
snapshot and only records the error.
"""
import logging
from typing import Optional, Sequence

from signalboard.core.config import TableConfig
from signalboard.core.exceptions import SignalBoardError
from signalboard.models.signal import SignalRecord
from signalboard.models.view import SignalView, ViewState
from signalboard.services.fetch_state import FetchState, RequestTracker
from signalboard.services.filter_engine import filter_records, normalize_term
from signalboard.services.paginator import Paginator
from signalboard.services.row_builder import build_row
from signalboard.services.sector_aggregator import SectorAggregator, filter_by_sector
from signalboard.services.sort_engine import SortDirection, SortState, sort_records
from signalboard.services.sources.base import SignalSource

logger = logging.getLogger(__name__)


def unique_by_symbol(records: Sequence[SignalRecord]) -> tuple[SignalRecord, ...]:
    """Keep the first record per symbol."""
    seen: set[str] = set()
    unique = []
    for record in records:
        if record.symbol in seen:
            logger.warning("Duplicate symbol %s in snapshot, keeping the first", record.symbol)
            continue
        seen.add(record.symbol)
        unique.append(record)
    return tuple(unique)


class SignalStore:
    """One signal table: raw snapshot, fetch lifecycle and view state."""

    def __init__(
        self,
        source: SignalSource,
        config: TableConfig,
        sectors: Optional[SectorAggregator] = None,
    ) -> None:
        self.config = config
        self._source = source
        self._tracker = RequestTracker()
        self._records: tuple[SignalRecord, ...] = ()
        self._sort = SortState(
            key=config.default_sort_key,
            direction=SortDirection(config.default_sort_direction),
        )
        self.paginator = Paginator(page_size=config.page_size, window=config.page_window)
        self.state = FetchState()
        self.view_state = ViewState(
            sort_key=self._sort.key,
            sort_direction=self._sort.direction.value,
        )
        self.sectors = sectors
        if sectors is not None:
            sectors.subscribe(self._on_sector_selected)

    @property
    def records(self) -> tuple[SignalRecord, ...]:
        return self._records

    async def load(self) -> bool:
        """
        Fetch a full snapshot and replace the stored one.

        Returns True if the response was applied. Responses from requests
        superseded by a later load() or dispose() are dropped.
        """
        token = self._tracker.begin()
        self.state.start()
        logger.info("Loading %s signals from %s", self.config.name, self.config.endpoint)
        try:
            records = await self._source.fetch_signals(self.config.endpoint)
        except SignalBoardError as exc:
            if not self._tracker.is_current(token):
                logger.debug("Discarding stale %s failure: %s", self.config.name, exc.message)
                return False
            logger.warning("Loading %s signals failed: %s", self.config.name, exc.message)
            self.state.fail(exc, f"Failed to fetch {self.config.name} signals: {exc.message}")
            return False

        if not self._tracker.is_current(token):
            logger.debug("Discarding stale %s snapshot", self.config.name)
            return False

        self._records = unique_by_symbol(records)
        self.state.succeed()
        self.view_state.page = self.paginator.clamp(self.view_state.page, len(self.derived()))
        logger.info("Loaded %d %s signals", len(self._records), self.config.name)
        return True

    def dispose(self) -> None:
        """Drop any response still in flight."""
        self._tracker.invalidate()
        self.state.cancel()

    # ------------------------------------------------------------------ #
    # User intents
    # ------------------------------------------------------------------ #

    def set_search(self, term: str) -> None:
        self.view_state.search_term = term
        self.view_state.page = 1

    def clear_search(self) -> None:
        self.set_search("")

    def select_sort(self, key: str) -> None:
        self._sort.select(key)
        self.view_state.sort_key = self._sort.key
        self.view_state.sort_direction = self._sort.direction.value
        self.view_state.page = 1

    def select_sector(self, sector: str) -> Optional[str]:
        if self.sectors is None:
            self._on_sector_selected(None if sector == self.view_state.selected_sector else sector)
            return self.view_state.selected_sector
        return self.sectors.toggle(sector)

    def set_page(self, page: int) -> int:
        self.view_state.page = self.paginator.clamp(page, len(self.derived()))
        return self.view_state.page

    def next_page(self) -> int:
        return self.set_page(self.view_state.page + 1)

    def previous_page(self) -> int:
        return self.set_page(self.view_state.page - 1)

    def _on_sector_selected(self, sector: Optional[str]) -> None:
        self.view_state.selected_sector = sector
        self.view_state.page = 1

    # ------------------------------------------------------------------ #
    # Derived view
    # ------------------------------------------------------------------ #

    def derived(self) -> list[SignalRecord]:
        """Filtered and sorted records, before pagination."""
        state = self.view_state
        records = filter_records(self._records, state.search_term, self.config.search_fields)
        records = filter_by_sector(records, state.selected_sector)
        return sort_records(records, state.sort_key, state.sort_direction)

    def view(self) -> SignalView:
        state = self.view_state
        derived = self.derived()
        total = len(derived)
        total_pages = self.paginator.total_pages(total)
        page = self.paginator.clamp(state.page, total)
        rows = [build_row(record, self.config) for record in self.paginator.page(derived, page)]

        return SignalView(
            table=self.config.name,
            status=self.state.status,
            error=self.state.error,
            rows=rows,
            total_items=total,
            page=page,
            total_pages=total_pages,
            page_numbers=self.paginator.page_numbers(page, total_pages),
            has_previous=page > 1,
            has_next=page < total_pages,
            summary=f"{total} items • Page {page}/{total_pages}",
            showing=f"Showing {len(rows)} of {total}",
            empty_message=self._empty_message() if total == 0 else None,
            search_term=state.search_term,
            sort_key=state.sort_key,
            sort_direction=state.sort_direction,
            selected_sector=state.selected_sector,
        )

    def _empty_message(self) -> str:
        term = self.view_state.search_term.strip()
        if normalize_term(term):
            return f'No signals found for "{term}"'
        if self.view_state.selected_sector is not None:
            return f"No signals in {self.view_state.selected_sector}"
        return f"No signals in the {self.config.name} list"
