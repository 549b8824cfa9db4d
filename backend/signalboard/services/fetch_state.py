"""
Request lifecycle bookkeeping shared by the stores.

Every request takes a generation token when it starts. A response is only
applied if its token is still the latest one; starting a newer request or
disposing the owner invalidates older tokens.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from signalboard.core.exceptions import SignalBoardError
from signalboard.models.view import FetchStatus


class RequestTracker:
    """Generation counter for superseded-response detection."""

    def __init__(self) -> None:
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def invalidate(self) -> None:
        self._generation += 1


@dataclass
class FetchState:
    """Loading/error status of one independently fetched snapshot."""
    status: FetchStatus = FetchStatus.IDLE
    error: Optional[str] = None
    error_code: Optional[str] = None
    loaded_at: Optional[datetime] = None
    previous_status: FetchStatus = FetchStatus.IDLE

    @property
    def is_loading(self) -> bool:
        return self.status is FetchStatus.LOADING

    def start(self) -> None:
        if self.status is not FetchStatus.LOADING:
            self.previous_status = self.status
        self.status = FetchStatus.LOADING

    def cancel(self) -> None:
        """Abandon an in-flight request and restore the status it replaced."""
        if self.status is FetchStatus.LOADING:
            self.status = self.previous_status

    def succeed(self) -> None:
        self.status = FetchStatus.READY
        self.error = None
        self.error_code = None
        self.loaded_at = datetime.now(timezone.utc)

    def fail(self, exc: SignalBoardError, message: Optional[str] = None) -> None:
        self.status = FetchStatus.ERROR
        self.error = message or exc.message
        self.error_code = exc.code
