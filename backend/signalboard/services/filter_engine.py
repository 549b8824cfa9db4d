from enum import Enum
from typing import Iterable, Sequence

from signalboard.models.signal import SignalRecord


def normalize_term(term: str | None) -> str:
    return (term or "").strip().lower()


def filter_records(
    records: Sequence[SignalRecord],
    term: str | None,
    fields: Iterable[str],
) -> list[SignalRecord]:
    """
    Case-insensitive substring search over the given fields.

    An empty term returns every record in its original order. Absent
    fields are skipped rather than counted as a mismatch.
    """
    needle = normalize_term(term)
    if not needle:
        return list(records)

    attributes = [SignalRecord.field_for(field) for field in fields]
    matched = []
    for record in records:
        for attribute in attributes:
            value = getattr(record, attribute)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            if needle in str(value).lower():
                matched.append(record)
                break
    return matched
