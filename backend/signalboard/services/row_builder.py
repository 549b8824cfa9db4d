from signalboard.core.config import TableConfig
from signalboard.models.signal import SignalRecord
from signalboard.models.view import SignalRow
from signalboard.services.classifier import (
    TIER_BG_CLASS,
    TIER_TEXT_CLASS,
    change_tier,
    classify_range,
    is_strong_volume,
    signal_badge,
)
from signalboard.services.formatter import (
    display_sector,
    format_price,
    format_signed,
    format_timestamp,
    format_volume,
)


def build_row(record: SignalRecord, config: TableConfig) -> SignalRow:
    """Format every display cell of a record for the given table."""
    tier = change_tier(record.day_change)
    scheme = config.volume_scheme
    return SignalRow(
        record=record,
        symbol=record.symbol,
        close=format_price(record.close),
        last_traded_price=format_price(record.last_traded_price),
        vwap=format_price(record.vwap),
        ema20=format_price(record.ema20),
        ema50=format_price(record.ema50),
        volume_ratio=format_price(record.volume_ratio),
        strong_volume=is_strong_volume(record.volume_ratio),
        last_volume=format_volume(record.last_volume, scheme),
        avg_volume=format_volume(record.avg_volume, scheme),
        current_volume=format_volume(record.current_volume, scheme),
        total_day_volume=format_volume(record.total_day_volume, scheme),
        day_change=format_signed(record.day_change),
        change_tier=tier.value,
        change_text_class=TIER_TEXT_CLASS[tier],
        change_bg_class=TIER_BG_CLASS[tier],
        sector=display_sector(record.sector),
        badge=signal_badge(record.signal),
        highlight=classify_range(record, config.highlight_epsilon),
        updated=format_timestamp(
            record.timestamp, config.timestamp_unit, config.display_timezone
        ),
    )
