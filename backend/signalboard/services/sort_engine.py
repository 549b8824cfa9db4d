"""
Single-key sorting for signal records.

Missing values compare equal to anything, so they never trigger a
reorder. With several missing values the ordering is not a total order;
callers get whatever the stable sort produces from the input order.
"""
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Any, Sequence

from signalboard.models.signal import SignalRecord


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.ASC if self is SortDirection.DESC else SortDirection.DESC


DEFAULT_SORT_DIRECTION = SortDirection.DESC


def compare_values(left: Any, right: Any) -> int:
    if left is None or right is None:
        return 0
    try:
        if left < right:
            return -1
        if left > right:
            return 1
    except TypeError:
        # Raw magnitude against pre-formatted text
        return 0
    return 0


def sort_records(
    records: Sequence[SignalRecord],
    key: str,
    direction: SortDirection | str = DEFAULT_SORT_DIRECTION,
) -> list[SignalRecord]:
    attribute = SignalRecord.field_for(key)
    sign = 1 if SortDirection(direction) is SortDirection.ASC else -1

    def comparator(left: SignalRecord, right: SignalRecord) -> int:
        return sign * compare_values(getattr(left, attribute), getattr(right, attribute))

    return sorted(records, key=cmp_to_key(comparator))


@dataclass
class SortState:
    """Current sort key and direction; re-selecting a key flips the direction."""
    key: str
    direction: SortDirection = DEFAULT_SORT_DIRECTION

    def __post_init__(self) -> None:
        self.key = SignalRecord.wire_name(self.key)
        self.direction = SortDirection(self.direction)

    def select(self, key: str) -> "SortState":
        key = SignalRecord.wire_name(key)
        if key == self.key:
            self.direction = self.direction.flipped()
        else:
            self.key = key
            self.direction = DEFAULT_SORT_DIRECTION
        return self
