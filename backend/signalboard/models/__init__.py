# Signals
from signalboard.models.signal import SignalRecord, SignalState
from signalboard.models.sector import SectorSummary

# Details
from signalboard.models.detail import DescriptionDetail, PivotLevels, Resistances, Supports

# View
from signalboard.models.view import FetchStatus, SignalRow, SignalView, ViewState

__all__ = [
    "SignalRecord",
    "SignalState",
    "SectorSummary",
    "DescriptionDetail",
    "PivotLevels",
    "Resistances",
    "Supports",
    "FetchStatus",
    "SignalRow",
    "SignalView",
    "ViewState",
]
