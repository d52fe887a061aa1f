"""Transport layer for spiral - sends requests, hands back StringStream bodies."""

# Re-export these for import convenience
from .base import Transport, AsyncTransport, body_bytes
from .http_sync import HTTPTransport, open_transport
from .http_async import HTTPAsyncTransport, open_transport_async
