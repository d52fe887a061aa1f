from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:
    from ..stream.string import StringStream


@dataclass(slots=True)
class Response:
    status_code: int
    reason: str
    headers: Dict[str, str]
    body: StringStream
    url: str
    elapsed: float = 0.0           # seconds, filled by the transport
    http_version: str | None = field(default=None)

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class StreamError(RuntimeError):
    """Base class for stream contract violations."""
    pass


class StreamClosedError(StreamError):
    """Raised when an operation needs an open stream but it was closed."""
    pass


class SeekBeforeStartError(StreamError):
    """Raised when a seek would move the cursor before offset 0."""
    pass


class InvalidArgumentError(StreamError, ValueError):
    """Raised on an unknown seek origin or a negative read length."""
    pass


class NotWritableError(StreamError):
    """Raised on every write attempt; string streams are read-only."""
    pass


class OptionError(ValueError):
    """Raised when an option value fails validation."""
    pass


class TransportError(IOError):
    """Raised when the HTTP transport cannot complete a request."""
    pass
