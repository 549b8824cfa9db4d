"""
On-demand detail payloads: pivot levels and free-text descriptions.
"""
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# A level is a number, or sentinel text such as "N/A" when the backend has none.
Level = Union[float, str, None]


class Resistances(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    r1: Level = None
    r2: Level = None
    r3: Level = None


class Supports(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    s1: Level = None
    s2: Level = None
    s3: Level = None


class PivotLevels(BaseModel):
    """Support/resistance levels computed for one symbol."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    pivot: Level = None
    resistances: Resistances = Resistances()
    supports: Supports = Supports()
    date: Optional[str] = None

    def numeric_levels(self) -> list[tuple[str, float]]:
        """Numeric levels ordered from lowest to highest, sentinels dropped."""
        named = [
            ("S3", self.supports.s3),
            ("S2", self.supports.s2),
            ("S1", self.supports.s1),
            ("Pivot", self.pivot),
            ("R1", self.resistances.r1),
            ("R2", self.resistances.r2),
            ("R3", self.resistances.r3),
        ]
        levels = [
            (name, float(value))
            for name, value in named
            if isinstance(value, (int, float)) and not isinstance(value, bool)
        ]
        return sorted(levels, key=lambda item: item[1])

    def band(self, price: Optional[float]) -> Optional[str]:
        """Describe where a price sits relative to the levels."""
        levels = self.numeric_levels()
        if price is None or not levels:
            return None
        lowest_name, lowest = levels[0]
        if price < lowest:
            return f"below {lowest_name}"
        for (low_name, low), (high_name, high) in zip(levels, levels[1:]):
            if low <= price < high:
                return f"between {low_name} and {high_name}"
        return f"above {levels[-1][0]}"


class DescriptionDetail(BaseModel):
    """Free-text commentary for one symbol."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    symbol: Optional[str] = None
    description: Optional[str] = None
    level_insights: Optional[str] = None
    volume_commentary: Optional[str] = None
