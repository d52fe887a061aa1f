"""Read-only, seekable stream over an in-memory byte string."""

from __future__ import annotations

import io
import operator
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ..core.model import (
    InvalidArgumentError,
    NotWritableError,
    SeekBeforeStartError,
    StreamClosedError,
)

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(slots=True)
class _Open:
    contents: bytes
    position: int = 0


class _Closed:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<closed>"


_CLOSED = _Closed()


def _as_index(value: Any, what: str) -> int:
    try:
        return operator.index(value)
    except TypeError:
        raise InvalidArgumentError(f"Invalid {what}: {value!r}") from None


class StringStream:
    """Read-only stream over a byte string passed on construction.

    Supports every read and seek related operation of the stream protocol.
    When the whole buffer is wanted regardless of the cursor, ``bytes(stream)``
    is the cheapest way to get it: no slicing, no copy.

    Closing discards the buffer. A closed stream reports itself as not
    readable and not seekable, ``get_size()`` returns None and ``eof()`` is
    True; cursor operations raise StreamClosedError.
    """

    def __init__(self, contents: BytesLike = b""):
        # bytes() copies mutable buffers, so callers can't change us afterwards
        self._state: Union[_Open, _Closed] = _Open(bytes(contents))

    def __repr__(self) -> str:
        if isinstance(self._state, _Open):
            return f"<StringStream size={len(self._state.contents)} position={self._state.position}>"
        return "<StringStream closed>"

    def __bytes__(self) -> bytes:
        """Return the whole buffer and move the cursor to the end.

        A closed stream yields b"" instead of raising.
        """
        state = self._state
        if not isinstance(state, _Open):
            return b""
        state.position = len(state.contents)
        return state.contents

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _require_open(self, action: str) -> _Open:
        state = self._state
        if not isinstance(state, _Open):
            raise StreamClosedError(f"Cannot {action}, stream closed")
        return state

    # ------------------------------------------------------------------ #
    def close(self) -> None:
        """Free the buffer and mark the stream closed. Safe to call twice."""
        self._state = _CLOSED

    def detach(self) -> None:
        """Close the stream; there is no underlying resource to hand back."""
        self.close()
        return None

    def get_size(self) -> Optional[int]:
        """Return the size in bytes, or None once closed."""
        state = self._state
        if not isinstance(state, _Open):
            return None
        return len(state.contents)

    def tell(self) -> int:
        return self._require_open("tell position").position

    def eof(self) -> bool:
        state = self._state
        if not isinstance(state, _Open):
            # position and length are both 0 after close
            return True
        return state.position == len(state.contents)

    def is_seekable(self) -> bool:
        return isinstance(self._state, _Open)

    def is_readable(self) -> bool:
        return isinstance(self._state, _Open)

    def is_writable(self) -> bool:
        return False

    # ------------------------------------------------------------------ #
    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move the cursor and return the new position.

        Seeking past the end clamps to the end. A target before the start
        raises SeekBeforeStartError and leaves the cursor where it was.
        """
        state = self._require_open("seek")
        offset = _as_index(offset, "offset")

        if isinstance(whence, bool) or not isinstance(whence, int):
            raise InvalidArgumentError(f"Invalid whence value: {whence!r}")
        if whence == io.SEEK_SET:
            base = 0
        elif whence == io.SEEK_CUR:
            base = state.position
        elif whence == io.SEEK_END:
            base = len(state.contents)
        else:
            raise InvalidArgumentError(f"Invalid whence value: {whence!r}")

        target = base + offset
        if target < 0:
            raise SeekBeforeStartError("Cannot seek before the beginning")

        state.position = min(target, len(state.contents))
        return state.position

    def rewind(self) -> None:
        self.seek(0)

    def write(self, data: BytesLike) -> int:
        """Always raises NotWritableError."""
        raise NotWritableError("Stream is not writable")

    def read(self, length: int) -> bytes:
        """Return up to `length` bytes from the cursor.

        Asking for more than remains is not an error; the result is simply
        shorter, and b"" at the end of the stream.
        """
        length = _as_index(length, "length")
        if length < 0:
            raise InvalidArgumentError("Cannot read negative length")

        state = self._require_open("read")
        start = state.position
        self.seek(length, io.SEEK_CUR)
        return state.contents[start:start + length]

    def get_contents(self) -> bytes:
        """Return the remainder of the stream from the cursor."""
        state = self._require_open("read")
        return self.read(len(state.contents) - state.position)

    def get_metadata(self, key: Optional[str] = None) -> Any:
        """Return the metadata mapping, or a single entry of it.

        An unknown `key` gives None.
        """
        data: Dict[str, Any] = {
            "timed_out": False,
            "blocked": False,         # nothing in a string stream blocks
            "eof": self.eof(),
            "unread_bytes": 0,        # nothing is buffered
            "stream_type": "string",
            "wrapper_data": None,
            "seekable": self.is_seekable(),
            "uri": "",
        }
        if key is None:
            return data
        return data.get(key)
