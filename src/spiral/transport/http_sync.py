"""Synchronous HTTP transport using requests."""

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from ..core.model import Response, TransportError
from ..options import OptionSet
from ..stream import StringStream
from .base import basic_auth, body_bytes, format_http_version, load_cookie_jar, request_headers

log = logging.getLogger(__name__)


def _new_session(options: OptionSet) -> requests.Session:
    """Create a session configured from the session-level options."""
    session = requests.Session()
    session.max_redirects = options["max_redirects"]
    return session


class HTTPTransport:
    """Synchronous HTTP transport driven by an OptionSet."""

    def __init__(self, options: Optional[OptionSet] = None):
        self.options = options if options is not None else OptionSet()
        self.requests_made = 0
        self._session = _new_session(self.options)

        if self.options["http_version"] == "2":
            log.debug("requests speaks HTTP/1.1 only; http_version=2 is ignored")

    def _request_kwargs(self) -> Dict[str, Any]:
        """Translate options into requests keyword arguments."""
        options = self.options
        kwargs: Dict[str, Any] = {
            "timeout": (options["connect_timeout"] or None, options["timeout"] or None),
            "allow_redirects": options["follow_location"],
        }

        # verify may be a CA bundle path instead of a flag
        verify: Any = options["verify_ssl"]
        if verify and options["ca_file"]:
            verify = options["ca_file"]
        kwargs["verify"] = verify

        if options["cert_file"]:
            if options["key_file"]:
                kwargs["cert"] = (options["cert_file"], options["key_file"])
            else:
                kwargs["cert"] = options["cert_file"]

        if options["proxy"]:
            kwargs["proxies"] = {"http": options["proxy"], "https": options["proxy"]}

        auth = basic_auth(options)
        if auth:
            kwargs["auth"] = auth

        cookies = load_cookie_jar(options)
        if cookies is not None:
            kwargs["cookies"] = cookies

        return kwargs

    def request(self, method: str, url: str, headers: Optional[Mapping[str, str]] = None,
                body: Any = None) -> Response:
        """Send a request and return the response with its body as a StringStream."""
        method = method.upper()
        data = body_bytes(body)
        kwargs = self._request_kwargs()
        log.debug("%s %s (%d body bytes)", method, url, len(data) if data else 0)

        try:
            response = self._session.request(
                method, url, headers=request_headers(self.options, headers), data=data, **kwargs
            )
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method, url, e)
            raise TransportError(f"{method} request failed: {e}") from e
        finally:
            self.requests_made += 1

        log.debug("%s %s -> %d", method, url, response.status_code)
        return Response(
            status_code=response.status_code,
            reason=response.reason or "",
            headers=dict(response.headers),
            body=StringStream(response.content),
            url=response.url,
            elapsed=response.elapsed.total_seconds(),
            http_version=format_http_version(getattr(response.raw, "version", None)),
        )

    def close(self):
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def open_transport(options: Optional[OptionSet] = None) -> HTTPTransport:
    """Create a synchronous HTTP transport."""
    return HTTPTransport(options)
