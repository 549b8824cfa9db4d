"""
Signal records as delivered by the analysis backend.
"""
from enum import Enum
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Volumes arrive either as raw magnitudes or as pre-formatted text.
Volume = Union[float, str, None]


class SignalState(str, Enum):
    """Trading recommendation state for a symbol."""
    ENTRY_READY = "ENTRY_READY"
    WATCH = "WATCH"
    EXIT_READY = "EXIT_READY"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Any) -> "SignalState":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                return cls.UNKNOWN
        return cls.UNKNOWN


class SignalRecord(BaseModel):
    """
    One row of a signal snapshot.

    Identity is `symbol`; records are immutable once received.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    symbol: str

    # Prices
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    last_traded_price: Optional[float] = None
    vwap: Optional[float] = None
    ema20: Optional[float] = None
    ema50: Optional[float] = None

    # Change
    net_change: Optional[float] = None
    day_change: Optional[float] = None

    # Volume
    last_volume: Volume = None
    avg_volume: Volume = None
    current_volume: Volume = None
    total_day_volume: Volume = None
    volume_ratio: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("volumeRatio", "volumeExpansion", "volume_ratio"),
    )

    # Classification
    sector: Optional[str] = None
    signal: SignalState = Field(
        default=SignalState.UNKNOWN,
        validation_alias=AliasChoices("signal", "signalState"),
    )

    # Narrative
    description: Optional[str] = None
    level_insights: Optional[str] = None
    volume_commentary: Optional[str] = None

    # Freshness; the unit depends on the producer
    timestamp: Union[float, str, None] = Field(
        default=None,
        validation_alias=AliasChoices("timestamp", "updatedAt", "ts"),
    )

    @field_validator("signal", mode="before")
    @classmethod
    def _parse_signal(cls, value: Any) -> SignalState:
        return SignalState.parse(value)

    @field_validator("symbol")
    @classmethod
    def _strip_symbol(cls, value: str) -> str:
        return value.strip()

    @property
    def reference_price(self) -> Optional[float]:
        """Last traded price, falling back to close."""
        if self.last_traded_price is not None:
            return self.last_traded_price
        return self.close

    @classmethod
    def field_for(cls, key: str) -> str:
        """Resolve a wire name (``dayChange``) or attribute name to the attribute name."""
        if key in cls.model_fields:
            return key
        for name, info in cls.model_fields.items():
            if to_camel(name) == key:
                return name
            choices = info.validation_alias
            if isinstance(choices, AliasChoices) and key in choices.choices:
                return name
        raise ValueError(f"Unknown signal field: {key}")

    @classmethod
    def wire_name(cls, key: str) -> str:
        """Canonical camelCase name for any accepted spelling of a field."""
        return to_camel(cls.field_for(key))

    def value_of(self, key: str) -> Any:
        return getattr(self, self.field_for(key))
