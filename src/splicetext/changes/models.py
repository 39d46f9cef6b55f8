"""Change messages and the capability that turns them into edits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, Tuple, Union, TYPE_CHECKING

from splicetext.edits import Edit, Position

if TYPE_CHECKING:  # pragma: no cover
    from splicetext.buffer.text_buffer import TextBuffer

PositionLike = Union[Position, Tuple[int, int]]


def _as_position(value: PositionLike) -> Position:
    if isinstance(value, Position):
        return value
    line, column = value
    return Position(line, column)


class Change(Protocol):
    """A change message the normalizer can apply.

    ``to_edits`` is called with the buffer as left by every earlier message
    of the batch. Edits from one call are all resolved against that same
    state, must not overlap, and are checked before any of them lands.
    """

    def to_edits(self, buffer: "TextBuffer") -> Sequence[Edit]:
        ...


@dataclass(frozen=True, slots=True)
class FullChange:
    """Replace the whole document."""

    text: str

    def to_edits(self, buffer: "TextBuffer") -> Sequence[Edit]:
        return (Edit(0, len(buffer), self.text, full=True),)


@dataclass(frozen=True, slots=True)
class RangeChange:
    """Replace ``[start, end)`` with ``text``.

    Columns use the positions' own encoding, or the buffer's when unset.
    """

    start: Position
    end: Position
    text: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _as_position(self.start))
        object.__setattr__(self, "end", _as_position(self.end))

    def to_edits(self, buffer: "TextBuffer") -> Sequence[Edit]:
        start_byte, end_byte = buffer.resolve_range(self.start, self.end)
        return (Edit(start_byte, end_byte, self.text),)


@dataclass(frozen=True, slots=True)
class InsertChange:
    at: Position
    text: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "at", _as_position(self.at))

    def to_edits(self, buffer: "TextBuffer") -> Sequence[Edit]:
        offset = buffer.resolve(self.at)
        return (Edit(offset, offset, self.text),)


@dataclass(frozen=True, slots=True)
class DeleteChange:
    start: Position
    end: Position

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _as_position(self.start))
        object.__setattr__(self, "end", _as_position(self.end))

    def to_edits(self, buffer: "TextBuffer") -> Sequence[Edit]:
        start_byte, end_byte = buffer.resolve_range(self.start, self.end)
        return (Edit(start_byte, end_byte, b""),)


__all__ = [
    "Change",
    "DeleteChange",
    "FullChange",
    "InsertChange",
    "PositionLike",
    "RangeChange",
]
