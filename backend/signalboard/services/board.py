import asyncio
import logging
from typing import Iterable, Optional

from signalboard.core.config import TABLES, Settings, TableConfig
from signalboard.services.detail_lookup import DetailLookup
from signalboard.services.sector_aggregator import SectorAggregator
from signalboard.services.signal_store import SignalStore
from signalboard.services.sources import get_signal_source
from signalboard.services.sources.base import SignalSource

logger = logging.getLogger(__name__)


class SignalBoard:
    """Signal tables, the shared sector selector and the detail lookup."""

    def __init__(self, source: SignalSource, configs: Iterable[TableConfig]) -> None:
        self.source = source
        self.sectors = SectorAggregator(source)
        self.tables: dict[str, SignalStore] = {
            config.name: SignalStore(source, config, self.sectors) for config in configs
        }
        self.details = DetailLookup(source)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        source: Optional[SignalSource] = None,
        tables: Iterable[str] = TABLES,
    ) -> "SignalBoard":
        configs = [TableConfig.from_settings(settings, name) for name in tables]
        return cls(source or get_signal_source(), configs)

    def table(self, name: str) -> SignalStore:
        try:
            return self.tables[name]
        except KeyError:
            raise ValueError(f"Unknown table: {name}") from None

    async def load(self) -> None:
        """Fetch every table snapshot and the sector snapshot concurrently."""
        loads = [store.load() for store in self.tables.values()]
        loads.append(self.sectors.load())
        results = await asyncio.gather(*loads)
        logger.info("Board load finished: %d/%d snapshots applied", sum(results), len(results))

    def dispose(self) -> None:
        for store in self.tables.values():
            store.dispose()
        self.sectors.dispose()
        self.details.close()
