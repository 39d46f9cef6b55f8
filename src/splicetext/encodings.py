"""Column ↔ byte conversion for UTF-8, UTF-16, and UTF-32 positions.

Lines are stored as UTF-8. Editors and language clients describe columns in
whichever unit the session negotiated, so every position has to be walked
through the line's scalars before it can address the stored bytes.

``column_to_byte`` and ``byte_to_column`` operate on one line without its
terminator. Both accept the exact end of the line.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Union

from .errors import (
    ColumnOutOfBoundsError,
    InvalidBoundaryError,
    InvalidUtf8Error,
    OutOfBoundsError,
)

BytesLike = Union[bytes, bytearray, memoryview]


class Encoding(str, Enum):
    """Unit in which a position column is measured.

    Values match the LSP ``PositionEncodingKind`` strings.
    """

    UTF8 = "utf-8"
    UTF16 = "utf-16"
    UTF32 = "utf-32"

    def units(self, code_point: int) -> int:
        """Number of column units one scalar value occupies."""

        if self is Encoding.UTF8:
            return _utf8_width(code_point)
        if self is Encoding.UTF16:
            return 2 if code_point > 0xFFFF else 1
        return 1

    @classmethod
    def parse(cls, value: Union["Encoding", str]) -> "Encoding":
        if isinstance(value, Encoding):
            return value
        key = str(value).strip().lower().replace("_", "-")
        aliases = {"utf8": "utf-8", "utf16": "utf-16", "utf32": "utf-32"}
        key = aliases.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown position encoding '{value}'") from None


def negotiate_encoding(client_encodings: Optional[Iterable[str]]) -> Encoding:
    """Pick the session encoding from a client's ``positionEncodings``.

    The first UTF-8 or UTF-32 entry wins; otherwise UTF-16, which every LSP
    client must support.
    """

    if not client_encodings:
        return Encoding.UTF16
    for raw in client_encodings:
        try:
            encoding = Encoding.parse(raw)
        except ValueError:
            continue
        if encoding in (Encoding.UTF8, Encoding.UTF32):
            return encoding
    return Encoding.UTF16


def column_to_byte(
    line: BytesLike, column: int, encoding: Union[Encoding, str]
) -> int:
    """Return the byte offset of ``column`` within ``line``."""

    encoding = Encoding.parse(encoding)
    data = bytes(line)
    if column < 0:
        raise ColumnOutOfBoundsError(
            f"Column {column} is negative", column=column, limit=len(data)
        )
    if data.isascii():
        if column > len(data):
            raise ColumnOutOfBoundsError(
                f"Column {column} exceeds line length {len(data)}",
                column=column,
                limit=len(data),
            )
        return column

    text = decode_utf8(data, "Line")
    if encoding is Encoding.UTF8:
        if column > len(data):
            raise ColumnOutOfBoundsError(
                f"Column {column} exceeds line length {len(data)}",
                column=column,
                limit=len(data),
            )
        if column < len(data) and _is_continuation(data[column]):
            raise InvalidBoundaryError(
                f"Byte column {column} splits a multi-byte character",
                offset=column,
            )
        return column

    if encoding is Encoding.UTF32:
        if column > len(text):
            raise ColumnOutOfBoundsError(
                f"Column {column} exceeds {len(text)} code points",
                column=column,
                limit=len(text),
            )
        return len(text[:column].encode("utf-8"))

    units = 0
    offset = 0
    for char in text:
        if units == column:
            return offset
        code_point = ord(char)
        width = _utf8_width(code_point)
        units += encoding.units(code_point)
        offset += width
        if units > column:
            raise InvalidBoundaryError(
                f"UTF-16 column {column} splits a surrogate pair",
                offset=offset - width,
            )
    if units == column:
        return offset
    raise ColumnOutOfBoundsError(
        f"Column {column} exceeds {units} UTF-16 units",
        column=column,
        limit=units,
    )


def byte_to_column(
    line: BytesLike, byte_offset: int, encoding: Union[Encoding, str]
) -> int:
    """Return the column, in ``encoding`` units, of ``byte_offset``."""

    encoding = Encoding.parse(encoding)
    data = bytes(line)
    if byte_offset < 0 or byte_offset > len(data):
        raise OutOfBoundsError(
            f"Byte offset {byte_offset} is outside the line (0..{len(data)})",
            index=byte_offset,
            limit=len(data),
        )
    if data.isascii():
        return byte_offset

    decode_utf8(data, "Line")
    if byte_offset < len(data) and _is_continuation(data[byte_offset]):
        raise InvalidBoundaryError(
            f"Byte offset {byte_offset} is not on a character boundary",
            offset=byte_offset,
        )
    if encoding is Encoding.UTF8:
        return byte_offset
    prefix = data[:byte_offset].decode("utf-8")
    if encoding is Encoding.UTF32:
        return len(prefix)
    return len(prefix) + sum(1 for char in prefix if ord(char) > 0xFFFF)


def unit_count(line: BytesLike, encoding: Union[Encoding, str]) -> int:
    """Total number of ``encoding`` units on ``line``."""

    data = bytes(line)
    return byte_to_column(data, len(data), encoding)


def decode_utf8(data: BytesLike, subject: str = "Text") -> str:
    """Strictly decode ``data``; ``subject`` names it in the error message."""

    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUtf8Error(
            f"{subject} is not valid UTF-8 at byte {exc.start}: {exc.reason}",
            offset=exc.start,
        ) from exc


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def _utf8_width(code_point: int) -> int:
    if code_point < 0x80:
        return 1
    if code_point < 0x800:
        return 2
    if code_point < 0x10000:
        return 3
    return 4


__all__ = [
    "Encoding",
    "byte_to_column",
    "column_to_byte",
    "decode_utf8",
    "negotiate_encoding",
    "unit_count",
]
