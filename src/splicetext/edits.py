"""Positions, canonical edits, and the descriptors handed to parsers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional

from .encodings import Encoding


class Point(NamedTuple):
    """Row plus byte column, the convention incremental parsers use."""

    row: int
    column: int


@dataclass(frozen=True, slots=True)
class Position:
    """Caller-facing ``(line, column)`` location.

    ``column`` is measured in ``encoding`` units; ``None`` defers to the
    encoding the buffer was created with.
    """

    line: int
    column: int
    encoding: Optional[Encoding] = None

    def __post_init__(self) -> None:
        if self.line < 0:
            raise ValueError("line cannot be negative")
        if self.column < 0:
            raise ValueError("column cannot be negative")
        if self.encoding is not None:
            object.__setattr__(self, "encoding", Encoding.parse(self.encoding))


@dataclass(frozen=True, slots=True)
class Edit:
    """A byte-resolved mutation ready for the edit applier.

    ``full`` marks a whole-document replacement; the line index is rebuilt
    for it instead of patched.
    """

    start_byte: int
    end_byte: int
    text: bytes
    full: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.text, str):
            object.__setattr__(self, "text", self.text.encode("utf-8"))
        elif not isinstance(self.text, bytes):
            object.__setattr__(self, "text", bytes(self.text))

    @property
    def is_noop(self) -> bool:
        return self.start_byte == self.end_byte and not self.text


@dataclass(frozen=True, slots=True)
class EditDescriptor:
    """Old/new byte ranges and points describing one applied edit."""

    start_byte: int
    old_end_byte: int
    new_end_byte: int
    start_point: Point
    old_end_point: Point
    new_end_point: Point

    @property
    def byte_delta(self) -> int:
        return self.new_end_byte - self.old_end_byte


__all__ = ["Point", "Position", "Edit", "EditDescriptor"]
