"""Byte storage, line index, and the document façade tying them together."""

from .applier import apply, apply_edit, check_edit
from .line_index import LineIndex, scan_line_starts
from .splicer import ByteStore
from .text_buffer import LineView, TextBuffer

__all__ = [
    "ByteStore",
    "LineIndex",
    "LineView",
    "TextBuffer",
    "apply",
    "apply_edit",
    "check_edit",
    "scan_line_starts",
]
