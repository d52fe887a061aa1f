"""Base protocols and shared helpers for HTTP transports."""

import logging
from http.cookiejar import LoadError, MozillaCookieJar
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple, runtime_checkable

from ..core.model import OptionError, Response
from ..options import OptionSet
from ..stream import open_stream

log = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Protocol for synchronous transports."""

    requests_made: int  # running total

    def request(self, method: str, url: str, headers: Optional[Mapping[str, str]] = None,
                body: Any = None) -> Response:
        """Send one request and return the fully read response."""
        ...


@runtime_checkable
class AsyncTransport(Protocol):
    """Protocol for asynchronous transports."""

    requests_made: int  # running total

    async def request(self, method: str, url: str, headers: Optional[Mapping[str, str]] = None,
                      body: Any = None) -> Response:
        """Send one request and return the fully read response."""
        ...


def body_bytes(body: Any) -> Optional[bytes]:
    """Return the bytes to transmit for a request body.

    Streams are rewound and read to the end; bytes-like values are sent as is.
    """
    if body is None:
        return None
    stream = open_stream(body)
    stream.rewind()
    return stream.get_contents()


def request_headers(options: OptionSet, headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Merge caller headers over the option-derived defaults."""
    merged = {"User-Agent": options["user_agent"]}
    if headers:
        merged.update(headers)
    return merged


def basic_auth(options: OptionSet) -> Optional[Tuple[str, str]]:
    if not options["auth"]:
        return None
    user, _, password = options["auth"].partition(":")
    return user, password


def load_cookie_jar(options: OptionSet) -> Optional[MozillaCookieJar]:
    """Load the Netscape-format cookie file named by the cookie_file option."""
    path = options["cookie_file"]
    if not path:
        return None
    jar = MozillaCookieJar(path)
    try:
        jar.load(ignore_discard=True, ignore_expires=True)
    except LoadError as e:
        raise OptionError(f'"{path}" is not a valid cookie file: {e}') from e
    log.debug("Loaded %d cookies from %s", len(jar), path)
    return jar


def format_http_version(version: Any) -> Optional[str]:
    """Normalise 11 / "HTTP/1.1" style versions to "HTTP/1.1"."""
    if version is None:
        return None
    if isinstance(version, int):
        return f"HTTP/{version // 10}.{version % 10}"
    return str(version)
