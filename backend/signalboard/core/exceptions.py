"""
Error taxonomy for signal retrieval and detail lookups.

Source adapters raise these; the stores convert them into user-visible
messages on their fetch state.
"""

from typing import Optional


class SignalBoardError(Exception):
    """Base class for all signalboard errors."""

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class NetworkFailure(SignalBoardError):
    """Transport error or non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message, code="NETWORK_FAILURE")
        self.status_code = status_code


class NotFound(SignalBoardError):
    """Lookup target does not exist (404)."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Symbol {symbol} not found", code="NOT_FOUND")
        self.symbol = symbol


class MalformedResponse(SignalBoardError):
    """Body is not parseable or does not match the expected shape."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="MALFORMED_RESPONSE")


class ValidationFailure(SignalBoardError):
    """Local input rejected before any request was sent."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="VALIDATION_FAILURE")
