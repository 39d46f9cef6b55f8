"""Editor actions expressed as change messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TYPE_CHECKING

from splicetext.edits import Edit, Position
from splicetext.encodings import decode_utf8

from .models import _as_position

if TYPE_CHECKING:  # pragma: no cover
    from splicetext.buffer.text_buffer import TextBuffer


@dataclass(frozen=True, slots=True)
class DeletePreviousChar:
    """Backspace at ``at``.

    Removes the character before the cursor. At column 0 the line is joined
    with the previous one, including a ``\\r\\n`` terminator. At the start of
    the document nothing happens.
    """

    at: Position

    def __post_init__(self) -> None:
        object.__setattr__(self, "at", _as_position(self.at))

    def to_edits(self, buffer: "TextBuffer") -> Sequence[Edit]:
        end = buffer.resolve(self.at)
        row, column = buffer.point_of_offset(end)
        if column > 0:
            prefix = decode_utf8(buffer.line_bytes(row)[:column], "Line")
            start = end - len(prefix[-1].encode("utf-8"))
        elif row > 0:
            start = buffer.line_index.line_start(row - 1) + len(buffer.line_bytes(row - 1))
        else:
            start = end
        return (Edit(start, end, b""),)


__all__ = ["DeletePreviousChar"]
