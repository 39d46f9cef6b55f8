"""Keep a tree-sitter syntax tree in step with a :class:`TextBuffer`.

Requires the ``tree-sitter`` extra.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Tuple, Union

from tree_sitter import Parser, Point, Range, Tree

from splicetext.buffer import TextBuffer
from splicetext.changes.models import Change
from splicetext.edits import EditDescriptor
from splicetext.errors import UpdateError
from splicetext.runtime import telemetry


def to_input_edit(descriptor: EditDescriptor) -> Dict[str, Any]:
    """Keyword arguments for ``Tree.edit``."""

    return {
        "start_byte": descriptor.start_byte,
        "old_end_byte": descriptor.old_end_byte,
        "new_end_byte": descriptor.new_end_byte,
        "start_point": Point(*descriptor.start_point),
        "old_end_point": Point(*descriptor.old_end_point),
        "new_end_point": Point(*descriptor.new_end_point),
    }


class TreeUpdater:
    """Updateable forwarding each descriptor to ``Tree.edit``."""

    def __init__(self, tree: Tree) -> None:
        self.tree = tree

    def update(self, descriptor: EditDescriptor) -> None:
        self.tree.edit(**to_input_edit(descriptor))


class IncrementalDocument:
    """A buffer plus the tree parsed from it.

    ``update`` edits the old tree for every applied change and reparses
    incrementally, returning the ranges whose syntax changed.
    """

    def __init__(self, parser: Parser, buffer: TextBuffer) -> None:
        self.parser = parser
        self.buffer = buffer
        self.tree: Tree = parser.parse(buffer.content_bytes())

    def update(self, changes: Union[Change, Iterable[Change]]) -> Tuple[Range, ...]:
        updater = TreeUpdater(self.tree)
        try:
            self.buffer.update(changes, updateable=updater)
        except UpdateError as exc:
            # the tree already saw the applied prefix of the batch
            if exc.applied:
                self._reparse()
            raise
        return self._reparse()

    def _reparse(self) -> Tuple[Range, ...]:
        old_tree = self.tree
        with telemetry.span(
            "tree_sitter::reparse",
            logger_name="splicetext.adapters",
            component="tree_sitter",
            metadata={"buffer": self.buffer.name},
        ) as handle:
            new_tree = self.parser.parse(self.buffer.content_bytes(), old_tree=old_tree)
            changed = tuple(old_tree.changed_ranges(new_tree))
            handle.add_metadata("changed_ranges", len(changed))
        self.tree = new_tree
        return changed


__all__ = ["IncrementalDocument", "TreeUpdater", "to_input_edit"]
