"""Typed failures raised by buffer queries, conversions, and edits."""

from __future__ import annotations

from typing import Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .edits import EditDescriptor


class TextBufferError(RuntimeError):
    """Base class for every caller-input error raised by the engine."""

    kind: str = "TextBufferError"


class OutOfBoundsError(TextBufferError):
    """A line number or byte offset lies outside the buffer."""

    kind = "OutOfBounds"

    def __init__(self, message: str, *, index: int, limit: int) -> None:
        super().__init__(message)
        self.index = index
        self.limit = limit


class ColumnOutOfBoundsError(TextBufferError):
    """A column exceeds the number of units on its line."""

    kind = "ColumnOutOfBounds"

    def __init__(self, message: str, *, column: int, limit: int) -> None:
        super().__init__(message)
        self.column = column
        self.limit = limit


class InvalidBoundaryError(TextBufferError):
    """A column or byte offset splits a scalar value."""

    kind = "InvalidBoundary"

    def __init__(self, message: str, *, offset: int) -> None:
        super().__init__(message)
        self.offset = offset


class InvalidUtf8Error(TextBufferError):
    """Malformed UTF-8 was found while decoding."""

    kind = "InvalidUtf8"

    def __init__(self, message: str, *, offset: int) -> None:
        super().__init__(message)
        self.offset = offset


class InvalidRangeError(TextBufferError):
    """The resolved end of a range precedes its start."""

    kind = "InvalidRange"

    def __init__(self, message: str, *, start: int, end: int) -> None:
        super().__init__(message)
        self.start = start
        self.end = end


class RangeOutOfBoundsError(TextBufferError):
    """A byte range is reversed or reaches past the stored bytes."""

    kind = "RangeOutOfBounds"

    def __init__(self, message: str, *, start: int, end: int, length: int) -> None:
        super().__init__(message)
        self.start = start
        self.end = end
        self.length = length


class UpdateError(TextBufferError):
    """Raised when a change inside a batch fails.

    ``index`` is the position of the failing message in the batch, ``error``
    the underlying failure, and ``applied`` the descriptors produced by the
    messages that were applied before it.
    """

    kind = "Update"

    def __init__(
        self,
        index: int,
        error: TextBufferError,
        *,
        applied: Optional[Sequence["EditDescriptor"]] = None,
    ) -> None:
        super().__init__(f"change #{index} failed ({error.kind}): {error}")
        self.index = index
        self.error = error
        self.applied = tuple(applied or ())

    @property
    def error_kind(self) -> str:
        return self.error.kind


__all__ = [
    "TextBufferError",
    "OutOfBoundsError",
    "ColumnOutOfBoundsError",
    "InvalidBoundaryError",
    "InvalidUtf8Error",
    "InvalidRangeError",
    "RangeOutOfBoundsError",
    "UpdateError",
]
