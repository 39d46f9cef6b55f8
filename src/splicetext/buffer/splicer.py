"""Growable byte storage with in-place range replacement."""

from __future__ import annotations

from typing import Union

from splicetext.errors import RangeOutOfBoundsError

BytesLike = Union[bytes, bytearray, memoryview]


class ByteStore:
    """Single owned ``bytearray`` holding the document as UTF-8.

    Slice assignment on a ``bytearray`` moves the tail with one ``memmove``
    and over-allocates on growth, so a splice never rebuilds the whole
    buffer. Callers keep every range on scalar boundaries.
    """

    __slots__ = ("_data",)

    def __init__(self, initial: BytesLike = b"") -> None:
        self._data = bytearray(initial)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __repr__(self) -> str:
        return f"ByteStore({len(self._data)} bytes)"

    @property
    def data(self) -> bytearray:
        """The live storage. Do not resize it from outside."""

        return self._data

    def slice(self, start: int, end: int) -> bytes:
        self._check_range(start, end)
        return bytes(self._data[start:end])

    def replace_range(self, start: int, end: int, new_bytes: BytesLike) -> int:
        """Replace ``[start, end)`` with ``new_bytes`` and return the length delta."""

        self._check_range(start, end)
        delta = len(new_bytes) - (end - start)
        # equal lengths overwrite in place; otherwise the tail moves once
        self._data[start:end] = new_bytes
        return delta

    def reset(self, content: BytesLike) -> int:
        """Replace everything; returns the length delta."""

        delta = len(content) - len(self._data)
        self._data[:] = content
        return delta

    def _check_range(self, start: int, end: int) -> None:
        length = len(self._data)
        if start < 0 or start > end or end > length:
            raise RangeOutOfBoundsError(
                f"Byte range {start}..{end} is invalid for {length} bytes",
                start=start,
                end=end,
                length=length,
            )


__all__ = ["ByteStore"]
