"""Document façade combining byte storage, line index, and edit application."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Union, TYPE_CHECKING

from splicetext.changes.normalizer import apply_changes
from splicetext.edits import Edit, EditDescriptor, Point, Position
from splicetext.encodings import (
    Encoding,
    byte_to_column,
    column_to_byte,
    decode_utf8,
)
from splicetext.errors import InvalidRangeError, OutOfBoundsError

from . import applier
from .line_index import LineIndex
from .splicer import ByteStore

if TYPE_CHECKING:  # pragma: no cover
    from splicetext.changes.models import Change
    from splicetext.updateables import UpdateTarget

CARRIAGE_RETURN = 0x0D


class TextBuffer:
    """Mutable UTF-8 document with an incrementally maintained line index.

    ``encoding`` is the unit callers use for position columns and is fixed
    for the lifetime of the buffer, the way an LSP session negotiates it once.
    A ``\\r`` directly before a ``\\n`` is not part of the line it ends.
    """

    def __init__(
        self,
        text: Union[str, bytes] = "",
        *,
        encoding: Union[Encoding, str] = Encoding.UTF8,
        name: str = "default",
    ) -> None:
        if isinstance(text, str):
            data = text.encode("utf-8")
            decoded = text
        else:
            data = bytes(text)
            decoded = decode_utf8(data, "Document")
        self.name = name
        self.encoding = Encoding.parse(encoding)
        self.store = ByteStore(data)
        self.line_index = LineIndex.from_bytes(data)
        self.version = 0
        self._text: Optional[str] = decoded

    def __len__(self) -> int:
        return len(self.store)

    def __str__(self) -> str:
        return self.content()

    def __repr__(self) -> str:
        return (
            f"TextBuffer(name={self.name!r}, encoding={self.encoding.value!r}, "
            f"lines={self.line_count}, bytes={len(self.store)})"
        )

    # -- read surface ---------------------------------------------------

    def content(self) -> str:
        if self._text is None:
            self._text = self.store.data.decode("utf-8")
        return self._text

    def content_bytes(self) -> bytes:
        return bytes(self.store)

    @property
    def line_count(self) -> int:
        return self.line_index.line_count

    def line(self, line: int) -> str:
        return self.line_bytes(line).decode("utf-8")

    def line_bytes(self, line: int) -> bytes:
        """Bytes of ``line`` without its terminator (``\\n`` or ``\\r\\n``)."""

        start, end = self.line_index.line_range(line)
        data = self.store.data
        if end > start and line + 1 < self.line_count and data[end - 1] == CARRIAGE_RETURN:
            end -= 1
        return bytes(data[start:end])

    def lines(self) -> "LineView":
        return LineView(self)

    # -- position conversion -------------------------------------------

    def resolve(
        self, position: Position, encoding: Union[Encoding, str, None] = None
    ) -> int:
        """Byte offset of ``position``.

        The position's own encoding wins over ``encoding``, which wins over
        the buffer's. Row ``line_count`` at column 0 addresses the end of the
        buffer.
        """

        unit = Encoding.parse(position.encoding or encoding or self.encoding)
        if position.line == self.line_count and position.column == 0:
            return len(self.store)
        start = self.line_index.line_start(position.line)
        return start + column_to_byte(self.line_bytes(position.line), position.column, unit)

    def resolve_range(
        self,
        start: Position,
        end: Position,
        encoding: Union[Encoding, str, None] = None,
    ) -> tuple[int, int]:
        start_byte = self.resolve(start, encoding)
        end_byte = self.resolve(end, encoding)
        if start_byte > end_byte:
            raise InvalidRangeError(
                f"Range end ({end.line}, {end.column}) precedes start "
                f"({start.line}, {start.column})",
                start=start_byte,
                end=end_byte,
            )
        return start_byte, end_byte

    def point_of_offset(self, offset: int) -> Point:
        return self.line_index.point(offset)

    def position_of_offset(
        self, offset: int, encoding: Union[Encoding, str, None] = None
    ) -> Position:
        unit = Encoding.parse(encoding or self.encoding)
        row, byte_column = self.line_index.point(offset)
        line = self.line_bytes(row)
        if byte_column > len(line):
            raise OutOfBoundsError(
                f"Byte offset {offset} points into the terminator of line {row}",
                index=offset,
                limit=len(self.store),
            )
        return Position(row, byte_to_column(line, byte_column, unit), unit)

    # -- mutation -------------------------------------------------------

    def apply(
        self,
        start: Position,
        end: Position,
        text: str,
        encoding: Union[Encoding, str, None] = None,
    ) -> EditDescriptor:
        return applier.apply(self, start, end, text, encoding)

    def apply_edit(self, edit: Edit) -> EditDescriptor:
        return applier.apply_edit(self, edit)

    def check_edit(self, edit: Edit) -> str:
        return applier.check_edit(self, edit)

    def replace_full(self, text: str) -> EditDescriptor:
        return applier.apply_edit(self, Edit(0, len(self.store), text, full=True))

    def update(
        self,
        changes: Union["Change", Iterable["Change"]],
        *,
        updateable: "UpdateTarget" = None,
    ) -> List[EditDescriptor]:
        """Apply a batch of change messages in order.

        See :func:`splicetext.changes.normalizer.apply_changes`.
        """

        return apply_changes(self, changes, updateable=updateable)

    def mark_changed(self, text: Optional[str] = None) -> None:
        """Drop cached state after the store changed; ``text`` primes the cache."""

        self.version += 1
        self._text = text


class LineView:
    """Lazy, re-iterable view over the current lines of a buffer."""

    __slots__ = ("_buffer",)

    def __init__(self, buffer: TextBuffer) -> None:
        self._buffer = buffer

    def __len__(self) -> int:
        return self._buffer.line_count

    def __getitem__(self, line: int) -> str:
        if line < 0:
            line += self._buffer.line_count
        return self._buffer.line(line)

    def __iter__(self) -> Iterator[str]:
        line = 0
        while line < self._buffer.line_count:
            yield self._buffer.line(line)
            line += 1


__all__ = ["TextBuffer", "LineView"]
