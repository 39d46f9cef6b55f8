"""Edit application: splice the bytes, patch the index, describe the change.

Everything that can fail is checked before the store is touched, so a failed
edit leaves the buffer exactly as it was.
"""

from __future__ import annotations

from typing import Union, TYPE_CHECKING

from splicetext.edits import Edit, EditDescriptor, Point, Position
from splicetext.encodings import Encoding, decode_utf8
from splicetext.errors import (
    InvalidBoundaryError,
    InvalidRangeError,
    RangeOutOfBoundsError,
)
from splicetext.runtime import telemetry

from .line_index import scan_line_starts

if TYPE_CHECKING:  # pragma: no cover
    from .text_buffer import TextBuffer


def apply(
    buffer: "TextBuffer",
    start: Position,
    end: Position,
    new_text: str,
    encoding: Union[Encoding, str, None] = None,
) -> EditDescriptor:
    """Replace the text between two caller positions."""

    start_byte, end_byte = buffer.resolve_range(start, end, encoding)
    return apply_edit(buffer, Edit(start_byte, end_byte, new_text))


def apply_edit(buffer: "TextBuffer", edit: Edit) -> EditDescriptor:
    """Apply an already-resolved edit to ``buffer``."""

    with telemetry.span(
        "text::apply_edit",
        logger_name="splicetext.buffer",
        component="text",
        metadata={
            "buffer": buffer.name,
            "start_byte": edit.start_byte,
            "end_byte": edit.end_byte,
            "full": edit.full,
        },
    ) as handle:
        new_text = check_edit(buffer, edit)
        if edit.full:
            descriptor = _replace_full(buffer, edit.text, new_text)
        else:
            descriptor = _splice(buffer, edit)
        handle.add_metadata("delta", descriptor.byte_delta)
        return descriptor


def check_edit(buffer: "TextBuffer", edit: Edit) -> str:
    """Raise if ``edit`` cannot be applied to ``buffer`` as it stands.

    Returns the decoded replacement text. A full edit must span the whole
    document.
    """

    store = buffer.store
    start, end = edit.start_byte, edit.end_byte
    if start > end:
        raise InvalidRangeError(
            f"Edit end byte {end} precedes start byte {start}", start=start, end=end
        )
    if start < 0 or end > len(store):
        raise RangeOutOfBoundsError(
            f"Byte range {start}..{end} is invalid for {len(store)} bytes",
            start=start,
            end=end,
            length=len(store),
        )
    if edit.full and (start, end) != (0, len(store)):
        raise RangeOutOfBoundsError(
            f"Full replacement must span 0..{len(store)}, got {start}..{end}",
            start=start,
            end=end,
            length=len(store),
        )
    _check_boundary(store.data, start)
    _check_boundary(store.data, end)
    return decode_utf8(edit.text, "Replacement text")


def _splice(buffer: "TextBuffer", edit: Edit) -> EditDescriptor:
    store = buffer.store
    index = buffer.line_index
    start, end = edit.start_byte, edit.end_byte

    start_point = index.point(start)
    old_end_point = index.point(end)
    if edit.is_noop:
        return EditDescriptor(start, end, end, start_point, old_end_point, old_end_point)

    inserted = scan_line_starts(edit.text)
    delta = store.replace_range(start, end, edit.text)
    index.patch(start, end, end + delta, inserted)
    buffer.mark_changed()

    new_end = start + len(edit.text)
    return EditDescriptor(
        start_byte=start,
        old_end_byte=end,
        new_end_byte=new_end,
        start_point=start_point,
        old_end_point=old_end_point,
        new_end_point=index.point(new_end),
    )


def _replace_full(buffer: "TextBuffer", data: bytes, text: str) -> EditDescriptor:
    store = buffer.store
    index = buffer.line_index
    old_length = len(store)
    old_end_point = index.point(old_length)

    store.reset(data)
    # patching would touch every entry anyway
    index.rebuild(store.data)
    buffer.mark_changed(text)
    telemetry.record_event(
        "text.replace_full",
        level="debug",
        data={"buffer": buffer.name, "old_bytes": old_length, "new_bytes": len(data)},
        logger_name="splicetext.buffer",
    )
    return EditDescriptor(
        start_byte=0,
        old_end_byte=old_length,
        new_end_byte=len(data),
        start_point=Point(0, 0),
        old_end_point=old_end_point,
        new_end_point=index.point(len(data)),
    )


def _check_boundary(data: bytearray, offset: int) -> None:
    if offset < len(data) and data[offset] & 0xC0 == 0x80:
        raise InvalidBoundaryError(
            f"Byte offset {offset} is not on a character boundary", offset=offset
        )


__all__ = ["apply", "apply_edit", "check_edit"]
