from __future__ import annotations
import base64
from typing import Any, Dict, Iterable, Tuple

from .model import Response, OptionError


def parse_header(line: str) -> Tuple[str, str]:
    """Split a ``Name: value`` header line."""
    name, sep, value = line.partition(":")
    name = name.strip()
    if not sep or not name:
        raise OptionError(f'"{line}" is not a valid header')
    return name, value.strip()


def response_asdict(res: Response, *, fields: Iterable[str] | None = None) -> Dict[str, Any]:
    """Return a JSON-serialisable dict optionally filtered.

    The body is read through bytes() so the stream ends up at EOF.
    """
    body = bytes(res.body)
    payload: Dict[str, Any] = {
        "url": res.url,
        "status": res.status_code,
        "reason": res.reason,
        "http_version": res.http_version,
        "headers": res.headers,
        "size": res.body.get_size(),
        "elapsed": res.elapsed,
        "body_b64": base64.b64encode(body).decode(),
    }
    payload = {k: v for k, v in payload.items() if v is not None}
    if fields:
        wanted = set(fields)
        payload = {k: v for k, v in payload.items() if k in wanted}
    payload["success"] = res.ok
    return payload


def error_asdict(source: str, error: BaseException) -> Dict[str, Any]:
    return {"success": False, "url": source, "error": str(error)}
