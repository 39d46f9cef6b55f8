"""Line-start index maintained alongside the stored bytes."""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterable, Iterator, List, Optional, Sequence

from splicetext.edits import Point
from splicetext.errors import OutOfBoundsError
from splicetext.runtime import telemetry

LINE_FEED = b"\n"


def scan_line_starts(
    data: bytes | bytearray, start: int = 0, end: Optional[int] = None
) -> List[int]:
    """Return the offset following every ``\\n`` in ``data[start:end]``.

    Offsets are relative to ``start``.
    """

    stop = len(data) if end is None else end
    found: List[int] = []
    position = data.find(LINE_FEED, start, stop)
    while position != -1:
        found.append(position + 1 - start)
        position = data.find(LINE_FEED, position + 1, stop)
    return found


class LineIndex:
    """Sorted byte offsets of every line start.

    Line 0 always starts at 0 and every later entry sits one byte past a
    ``\\n``. A trailing line without terminator is still an entry, so an
    empty buffer has exactly one line.
    """

    __slots__ = ("_starts", "_length")

    def __init__(self, starts: Optional[Iterable[int]] = None, *, length: int = 0) -> None:
        self._starts: List[int] = list(starts) if starts is not None else [0]
        if not self._starts or self._starts[0] != 0:
            raise ValueError("line index must start with offset 0")
        self._length = length

    @classmethod
    def from_bytes(cls, content: bytes | bytearray) -> "LineIndex":
        index = cls()
        index.rebuild(content)
        return index

    def rebuild(self, content: bytes | bytearray) -> None:
        """Scan ``content`` once and replace every entry."""

        self._starts = [0]
        self._starts.extend(scan_line_starts(content))
        self._length = len(content)
        telemetry.get_logger("splicetext.index").debug(
            f"line index rebuilt: {len(self._starts)} lines, {self._length} bytes"
        )

    @property
    def line_count(self) -> int:
        return len(self._starts)

    @property
    def length(self) -> int:
        """Byte length of the content the index describes."""

        return self._length

    @property
    def starts(self) -> tuple[int, ...]:
        return tuple(self._starts)

    def __len__(self) -> int:
        return len(self._starts)

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._starts))

    def __repr__(self) -> str:
        return f"LineIndex({self._starts!r}, length={self._length})"

    def line_start(self, line: int) -> int:
        if line < 0 or line >= len(self._starts):
            raise OutOfBoundsError(
                f"Line {line} is out of range (0..{len(self._starts) - 1})",
                index=line,
                limit=len(self._starts),
            )
        return self._starts[line]

    def line_range(self, line: int) -> tuple[int, int]:
        """Byte range of ``line``, excluding its ``\\n``."""

        start = self.line_start(line)
        if line + 1 < len(self._starts):
            return start, self._starts[line + 1] - 1
        return start, self._length

    def line_of_offset(self, offset: int) -> int:
        if offset < 0 or offset > self._length:
            raise OutOfBoundsError(
                f"Byte offset {offset} is out of range (0..{self._length})",
                index=offset,
                limit=self._length,
            )
        return bisect_right(self._starts, offset) - 1

    def point(self, offset: int) -> Point:
        row = self.line_of_offset(offset)
        return Point(row, offset - self._starts[row])

    def patch(
        self,
        edit_start: int,
        old_end: int,
        new_end: int,
        inserted_line_starts: Sequence[int],
    ) -> None:
        """Update the index after ``[edit_start, old_end)`` became ``[edit_start, new_end)``.

        ``inserted_line_starts`` are the line starts found in the replacement
        text, relative to its first byte. Only entries at or after the edit
        point are touched.
        """

        starts = self._starts
        delta = new_end - old_end
        low = bisect_right(starts, edit_start)
        high = bisect_right(starts, old_end, low)
        starts[low:high] = [edit_start + offset for offset in inserted_line_starts]
        shift_from = low + len(inserted_line_starts)
        if delta and shift_from < len(starts):
            starts[shift_from:] = [offset + delta for offset in starts[shift_from:]]
        self._length += delta


__all__ = ["LineIndex", "scan_line_starts"]
