"""Base protocol and shared types for byte streams."""

import io
from enum import IntEnum
from typing import Any, Optional, Protocol, runtime_checkable


class Whence(IntEnum):
    """Seek origins, interchangeable with the ``io.SEEK_*`` constants."""

    SEEK_SET = io.SEEK_SET
    SEEK_CUR = io.SEEK_CUR
    SEEK_END = io.SEEK_END


@runtime_checkable
class Stream(Protocol):
    """Protocol for readable, seekable, measurable byte sources.

    Transports only talk to request and response bodies through this
    surface, so any object providing it can be sent as a body.
    """

    def read(self, length: int) -> bytes:
        """Return up to `length` bytes from the cursor and advance past them."""
        ...

    def get_contents(self) -> bytes:
        """Return everything from the cursor to the end."""
        ...

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        ...

    def tell(self) -> int:
        ...

    def rewind(self) -> None:
        ...

    def eof(self) -> bool:
        ...

    def get_size(self) -> Optional[int]:
        ...

    def is_readable(self) -> bool:
        ...

    def is_seekable(self) -> bool:
        ...

    def is_writable(self) -> bool:
        ...

    def close(self) -> None:
        ...

    def detach(self) -> None:
        ...

    def get_metadata(self, key: Optional[str] = None) -> Any:
        ...
