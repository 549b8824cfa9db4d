"""
Display formatting for signal rows.

Provides:
- Volume scaling under the Indian (Cr/L/K) or international (M/K) scheme
- Timestamp rendering with an explicit epoch unit
- `**bold**` emphasis parsing for narrative fields
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union
from zoneinfo import ZoneInfo

from signalboard.models.view import TimestampDisplay

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
MISSING_PRICE = "-"
EMPHASIS_DELIMITER = "**"


class VolumeScheme(str, Enum):
    INDIAN = "indian"
    INTERNATIONAL = "international"


class TimestampUnit(str, Enum):
    SECONDS = "s"
    MILLISECONDS = "ms"


# Largest unit first
VOLUME_SCALES: dict[VolumeScheme, list[tuple[float, str]]] = {
    VolumeScheme.INDIAN: [
        (10_000_000, "Cr"),
        (100_000, "L"),
        (1_000, "K"),
    ],
    VolumeScheme.INTERNATIONAL: [
        (1_000_000, "M"),
        (1_000, "K"),
    ],
}


def format_volume(
    value: Union[float, int, str, None],
    scheme: Union[VolumeScheme, str] = VolumeScheme.INDIAN,
) -> str:
    """Scale a raw volume to its largest unit; pre-formatted text passes through."""
    if isinstance(value, str):
        return value.strip() or NOT_AVAILABLE
    if value is None or not math.isfinite(value) or value <= 0:
        return NOT_AVAILABLE

    for threshold, suffix in VOLUME_SCALES[VolumeScheme(scheme)]:
        if value >= threshold:
            return f"{value / threshold:.2f}{suffix}"
    return str(int(value))


def format_price(value: Optional[float]) -> str:
    if value is None or not math.isfinite(value):
        return MISSING_PRICE
    return f"{value:.2f}"


def format_signed(value: Optional[float]) -> str:
    if value is None or not math.isfinite(value):
        return MISSING_PRICE
    return f"{value:+.2f}"


def display_sector(sector: Optional[str]) -> str:
    """`Unknown` sectors display the same as absent ones."""
    if not sector or sector.strip().lower() == "unknown":
        return MISSING_PRICE
    return sector.strip()


def to_datetime(
    value: Union[float, int, str, None],
    unit: Union[TimestampUnit, str] = TimestampUnit.MILLISECONDS,
) -> Optional[datetime]:
    """Convert an epoch value (in the given unit) or an ISO string to an aware datetime."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            try:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                logger.debug("Unparseable timestamp %r", text)
                return None
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed

    seconds = float(value)
    if TimestampUnit(unit) is TimestampUnit.MILLISECONDS:
        seconds = seconds / 1000.0
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        logger.debug("Timestamp out of range: %r", value)
        return None


def format_timestamp(
    value: Union[float, int, str, None],
    unit: Union[TimestampUnit, str] = TimestampUnit.MILLISECONDS,
    tz: str = "Asia/Kolkata",
) -> TimestampDisplay:
    """Render compact (time only) and full (date, time) forms."""
    moment = to_datetime(value, unit)
    if moment is None:
        return TimestampDisplay(compact=NOT_AVAILABLE, full=NOT_AVAILABLE, tooltip=NOT_AVAILABLE)

    local = moment.astimezone(ZoneInfo(tz))
    time_part = local.strftime("%I:%M:%S %p")
    date_part = local.strftime("%d/%m/%Y")
    full = f"{date_part}, {time_part}"
    return TimestampDisplay(compact=time_part, full=full, tooltip=full)


def freshness(
    value: Union[float, int, str, None],
    unit: Union[TimestampUnit, str] = TimestampUnit.MILLISECONDS,
    now: Optional[datetime] = None,
) -> str:
    """Human age of a timestamp, e.g. ``5m ago``."""
    moment = to_datetime(value, unit)
    if moment is None:
        return NOT_AVAILABLE
    now = now or datetime.now(timezone.utc)
    age = int((now - moment).total_seconds())
    if age < 60:
        return "just now"
    if age < 3600:
        return f"{age // 60}m ago"
    if age < 86400:
        return f"{age // 3600}h ago"
    return f"{age // 86400}d ago"


@dataclass(frozen=True)
class Segment:
    text: str
    emphasized: bool = False


def parse_emphasis(text: Optional[str]) -> list[list[Segment]]:
    """
    Split free text into lines, and each line into plain/emphasized segments.

    An unpaired trailing ``**`` stays in the text as plain characters.
    """
    if not text:
        return []

    lines: list[list[Segment]] = []
    for line in text.split("\n"):
        parts = line.split(EMPHASIS_DELIMITER)
        tail: Optional[str] = None
        if len(parts) % 2 == 0:
            tail = EMPHASIS_DELIMITER + parts.pop()

        segments: list[Segment] = []
        for index, part in enumerate(parts):
            _append(segments, Segment(part, emphasized=index % 2 == 1))
        if tail is not None:
            _append(segments, Segment(tail))
        lines.append(segments)
    return lines


def _append(segments: list[Segment], segment: Segment) -> None:
    if not segment.text:
        return
    if segments and segments[-1].emphasized == segment.emphasized:
        segments[-1] = Segment(segments[-1].text + segment.text, segment.emphasized)
        return
    segments.append(segment)
