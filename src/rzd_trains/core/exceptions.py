"""Custom exceptions for RZD train search."""


class RzdTrainsError(Exception):
    """Base exception for RZD train search errors."""

    pass


class ValidationError(RzdTrainsError):
    """Raised when input validation fails."""

    pass


class InvalidDate(ValidationError):
    """Raised when a year, month and day do not form a calendar date."""

    pass


class InvalidStationCode(ValidationError):
    """Raised when a station code is not a positive integer."""

    pass


class InvalidQuery(ValidationError):
    """Raised when a search query is structurally invalid."""

    pass


class TransportError(RzdTrainsError):
    """Raised when there's a network-related error."""

    pass


class ServerOverloadedError(TransportError):
    """Raised when the server never finishes preparing a reply."""

    pass


class DecodeError(RzdTrainsError):
    """Raised when a reply from the server cannot be recognized."""

    pass


class UpstreamError(RzdTrainsError):
    """Raised when the server answers with its own error description."""

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages) or "server reported an error")


class UnsupportedQueryError(RzdTrainsError):
    """Raised when a query cannot produce the requested result type."""

    pass
