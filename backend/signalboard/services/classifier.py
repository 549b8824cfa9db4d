"""
Highlight and severity classification for signal rows and sector tiles.

All functions are pure and total: absent inputs map to a neutral bucket.
"""
import math
from enum import Enum
from typing import Optional

from signalboard.models.signal import SignalRecord, SignalState
from signalboard.models.view import Badge, RangeHighlight

DEFAULT_HIGHLIGHT_EPSILON = 0.80
STRONG_VOLUME_RATIO = 2.0
# Gap is compared at this precision so 100.8 - 100.0 equals 0.8
GAP_PRECISION = 6


class ChangeTier(str, Enum):
    """Ordered intensity buckets for a change magnitude."""
    NEGATIVE = "negative"
    TIER0 = "tier0"
    TIER1 = "tier1"
    TIER2 = "tier2"
    TIER3 = "tier3"
    TIER4 = "tier4"
    TIER5 = "tier5"


# Lower bound of each positive tier, strongest first
TIER_BOUNDS: list[tuple[float, ChangeTier]] = [
    (300.0, ChangeTier.TIER5),
    (200.0, ChangeTier.TIER4),
    (150.0, ChangeTier.TIER3),
    (100.0, ChangeTier.TIER2),
    (50.0, ChangeTier.TIER1),
]

TIER_TEXT_CLASS: dict[ChangeTier, str] = {
    ChangeTier.NEGATIVE: "text-red-600",
    ChangeTier.TIER0: "text-green-400",
    ChangeTier.TIER1: "text-green-500",
    ChangeTier.TIER2: "text-green-600",
    ChangeTier.TIER3: "text-green-700",
    ChangeTier.TIER4: "text-green-800",
    ChangeTier.TIER5: "text-green-900",
}

TIER_BG_CLASS: dict[ChangeTier, str] = {
    ChangeTier.NEGATIVE: "bg-red-50",
    ChangeTier.TIER0: "bg-green-50",
    ChangeTier.TIER1: "bg-green-100",
    ChangeTier.TIER2: "bg-green-200",
    ChangeTier.TIER3: "bg-green-300",
    ChangeTier.TIER4: "bg-green-400",
    ChangeTier.TIER5: "bg-green-500",
}

BADGE_CLASS: dict[SignalState, str] = {
    SignalState.WATCH: "bg-yellow-100 text-yellow-800",
    SignalState.ENTRY_READY: "bg-green-100 text-green-800",
    SignalState.EXIT_READY: "bg-red-100 text-red-800",
    SignalState.UNKNOWN: "bg-gray-100 text-gray-800",
}


def range_gap(record: SignalRecord) -> Optional[float]:
    """Absolute distance between open and low, if both are present."""
    if record.open is None or record.low is None:
        return None
    return round(abs(record.open - record.low), GAP_PRECISION)


def classify_range(
    record: SignalRecord,
    epsilon: float = DEFAULT_HIGHLIGHT_EPSILON,
) -> RangeHighlight:
    """A record is tight-range when |open - low| is strictly below epsilon."""
    gap = range_gap(record)
    if gap is None:
        return RangeHighlight(tight=False)
    tight = gap < epsilon
    note = f"|Open - Low| = {gap:.2f}"
    if tight:
        note += f" (< {epsilon:.2f})"
    return RangeHighlight(tight=tight, gap=gap, note=note)


def change_tier(value: Optional[float]) -> ChangeTier:
    """Bucket a signed change; non-positive and absent values are NEGATIVE."""
    if value is None or not math.isfinite(value) or value <= 0:
        return ChangeTier.NEGATIVE
    for lower, tier in TIER_BOUNDS:
        if value >= lower:
            return tier
    return ChangeTier.TIER0


def signal_badge(signal: Optional[SignalState]) -> Badge:
    state = SignalState.parse(signal)
    return Badge(label=state.value, css_class=BADGE_CLASS[state])


def is_strong_volume(ratio: Optional[float]) -> bool:
    return ratio is not None and ratio >= STRONG_VOLUME_RATIO
