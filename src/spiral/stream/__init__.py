"""In-memory byte streams used as request and response bodies."""

# Re-export these for import convenience
from .base import Stream, Whence
from .string import StringStream


def open_stream(source):
    """Wrap `source` in a Stream unless it already is one."""
    if isinstance(source, Stream):
        return source
    if source is None:
        return StringStream(b"")
    if isinstance(source, str):
        raise TypeError("String bodies must be encoded to bytes first")
    return StringStream(source)
