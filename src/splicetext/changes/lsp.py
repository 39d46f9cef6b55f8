"""Conversion of LSP ``TextDocumentContentChangeEvent`` payloads.

Accepts decoded JSON (mappings) as well as typed protocol objects exposing the
same field names as attributes. ``rangeLength`` is deprecated in the protocol
and ignored.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Union

from splicetext.edits import Position

from .models import FullChange, RangeChange

LspChange = Union[FullChange, RangeChange]

_MISSING = object()


def _field(source: Any, name: str, default: Any = _MISSING) -> Any:
    if isinstance(source, Mapping):
        value = source.get(name, default)
    else:
        value = getattr(source, name, default)
    if value is _MISSING:
        raise ValueError(f"LSP change is missing '{name}'")
    return value


def position_from_lsp(source: Any) -> Position:
    line = _field(source, "line")
    character = _field(source, "character")
    if not isinstance(line, int) or not isinstance(character, int):
        raise ValueError("LSP position fields must be integers")
    return Position(line, character)


def change_from_lsp(event: Any) -> LspChange:
    """Return a :class:`FullChange` or :class:`RangeChange` for ``event``."""

    text = _field(event, "text")
    if not isinstance(text, str):
        raise ValueError("LSP change text must be a string")
    change_range = _field(event, "range", None)
    if change_range is None:
        return FullChange(text)
    return RangeChange(
        start=position_from_lsp(_field(change_range, "start")),
        end=position_from_lsp(_field(change_range, "end")),
        text=text,
    )


def changes_from_lsp(events: Iterable[Any]) -> List[LspChange]:
    return [change_from_lsp(event) for event in events]


__all__ = ["LspChange", "change_from_lsp", "changes_from_lsp", "position_from_lsp"]
