"""Spiral - a small HTTP client with read-only in-memory stream bodies."""

import logging

from .core.model import (                                              # re-export
    Response, StreamError, StreamClosedError, SeekBeforeStartError,
    InvalidArgumentError, NotWritableError, OptionError, TransportError,
)
from .options import OptionSet, VERSION as __version__
from .stream import Stream, StringStream, Whence
from .transport import open_transport, open_transport_async

# Library logging stays silent unless the application configures handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())


async def request(method: str, url: str, *, headers=None, body=None, options: OptionSet | None = None) -> Response:
    """Send one request asynchronously on a throwaway transport."""
    async with await open_transport_async(options) as transport:
        return await transport.request(method, url, headers=headers, body=body)


def request_sync(method: str, url: str, *, headers=None, body=None, options: OptionSet | None = None) -> Response:
    """Send one request synchronously on a throwaway transport."""
    with open_transport(options) as transport:
        return transport.request(method, url, headers=headers, body=body)


__all__ = [
    "request", "request_sync",
    "Response", "OptionSet", "Stream", "StringStream", "Whence",
    "StreamError", "StreamClosedError", "SeekBeforeStartError",
    "InvalidArgumentError", "NotWritableError", "OptionError", "TransportError",
]
