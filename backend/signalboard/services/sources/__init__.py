from typing import Dict, Type

from signalboard.services.sources.base import SignalSource
from signalboard.services.sources.http_source import HttpSignalSource

PROVIDERS: Dict[str, Type[SignalSource]] = {
    "http": HttpSignalSource,
}


def get_signal_source(name: str = "http") -> SignalSource:
    """Factory to get source instance."""
    provider_class = PROVIDERS.get(name)
    if not provider_class:
        raise ValueError(f"Unknown signal source: {name}")
    return provider_class()
