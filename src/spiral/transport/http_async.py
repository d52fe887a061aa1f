"""Asynchronous HTTP transport using httpx."""

import logging
import ssl
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from ..core.model import Response, TransportError
from ..options import OptionSet
from ..stream import StringStream
from .base import basic_auth, body_bytes, format_http_version, load_cookie_jar, request_headers

log = logging.getLogger(__name__)


def _ssl_verify(options: OptionSet) -> Union[bool, ssl.SSLContext]:
    """Build the httpx `verify` argument from the TLS options."""
    if not (options["ca_file"] or options["cert_file"]):
        return options["verify_ssl"]

    context = ssl.create_default_context(cafile=options["ca_file"] or None)
    if options["cert_file"]:
        context.load_cert_chain(options["cert_file"], options["key_file"] or None)
    if not options["verify_ssl"]:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def _client_kwargs(options: OptionSet) -> Dict[str, Any]:
    """Translate options into httpx.AsyncClient keyword arguments."""
    kwargs: Dict[str, Any] = {
        "timeout": httpx.Timeout(options["timeout"] or None, connect=options["connect_timeout"] or None),
        "follow_redirects": options["follow_location"],
        "max_redirects": options["max_redirects"],
        "verify": _ssl_verify(options),
        "http2": options["http_version"] == "2",
    }
    if options["proxy"]:
        kwargs["proxy"] = options["proxy"]
    auth = basic_auth(options)
    if auth:
        kwargs["auth"] = auth
    cookies = load_cookie_jar(options)
    if cookies is not None:
        kwargs["cookies"] = cookies
    return kwargs


class HTTPAsyncTransport:
    """Asynchronous HTTP transport driven by an OptionSet.

    The httpx client is created on first use and shared by every request
    made through this transport, including concurrent ones.
    """

    def __init__(self, options: Optional[OptionSet] = None):
        self.options = options if options is not None else OptionSet()
        self.requests_made = 0
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx AsyncClient."""
        if self._client is None:
            self._client = httpx.AsyncClient(**_client_kwargs(self.options))
        return self._client

    async def request(self, method: str, url: str, headers: Optional[Mapping[str, str]] = None,
                      body: Any = None) -> Response:
        """Send a request and return the response with its body as a StringStream."""
        method = method.upper()
        data = body_bytes(body)
        client = self._get_client()
        log.debug("%s %s (%d body bytes)", method, url, len(data) if data else 0)

        try:
            response = await client.request(
                method, url, headers=request_headers(self.options, headers), content=data
            )
        except httpx.RequestError as e:
            log.warning("%s %s failed: %s", method, url, e)
            raise TransportError(f"{method} request failed: {e}") from e
        finally:
            self.requests_made += 1

        log.debug("%s %s -> %d", method, url, response.status_code)
        return Response(
            status_code=response.status_code,
            reason=response.reason_phrase or "",
            headers=dict(response.headers),
            body=StringStream(response.content),
            url=str(response.url),
            elapsed=response.elapsed.total_seconds(),
            http_version=format_http_version(response.http_version),
        )

    async def aclose(self):
        """Close the httpx client if one was created."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


async def open_transport_async(options: Optional[OptionSet] = None) -> HTTPAsyncTransport:
    """Create an asynchronous HTTP transport."""
    return HTTPAsyncTransport(options)
