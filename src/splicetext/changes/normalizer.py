"""Sequential application of change batches."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Union, TYPE_CHECKING

from splicetext.edits import Edit, EditDescriptor
from splicetext.errors import InvalidRangeError, TextBufferError, UpdateError
from splicetext.runtime import telemetry
from splicetext.updateables import UpdateTarget, as_callback

from .models import Change

if TYPE_CHECKING:  # pragma: no cover
    from splicetext.buffer.text_buffer import TextBuffer


def apply_changes(
    buffer: "TextBuffer",
    changes: Union[Change, Iterable[Change]],
    *,
    updateable: UpdateTarget = None,
) -> List[EditDescriptor]:
    """Apply ``changes`` to ``buffer`` one after another.

    Positions in each message refer to the document produced by the messages
    before it. The first failure stops the batch: earlier messages stay
    applied, the failing one leaves no trace, and an :class:`UpdateError`
    names its index. Every descriptor is handed to ``updateable`` as soon as
    its edit lands.
    """

    batch = (changes,) if hasattr(changes, "to_edits") else changes
    notify = as_callback(updateable)
    applied: List[EditDescriptor] = []

    with telemetry.span(
        "text::update",
        logger_name="splicetext.changes",
        component="changes",
        metadata={"buffer": buffer.name},
    ) as handle:
        for index, change in enumerate(batch):
            try:
                edits = order_edits(buffer, list(change.to_edits(buffer)))
            except TextBufferError as exc:
                telemetry.record_event(
                    "changes.rejected",
                    level="warning",
                    data={
                        "buffer": buffer.name,
                        "index": index,
                        "kind": exc.kind,
                        "applied": len(applied),
                    },
                    logger_name="splicetext.changes",
                )
                raise UpdateError(index, exc, applied=applied) from exc
            for edit in edits:
                descriptor = buffer.apply_edit(edit)
                applied.append(descriptor)
                notify(descriptor)
        handle.add_metadata("edits", len(applied))
    return applied


def order_edits(buffer: "TextBuffer", edits: Sequence[Edit]) -> List[Edit]:
    """Check the edits of one message and return them in application order.

    All edits are validated against the current state before any is applied.
    They must not overlap, and are applied back to front so the offsets of
    the remaining ones stay valid. Inserts at the same offset keep the order
    they were given in. The descriptors therefore come out back to front,
    each one relative to the document the previous one left.
    """

    if len(edits) <= 1:
        for edit in edits:
            buffer.check_edit(edit)
        return list(edits)

    for edit in edits:
        if edit.full:
            raise InvalidRangeError(
                "A full replacement cannot be combined with other edits",
                start=edit.start_byte,
                end=edit.end_byte,
            )
        buffer.check_edit(edit)

    ordered = sorted(edits, key=lambda edit: (edit.start_byte, edit.end_byte))
    for before, after in zip(ordered, ordered[1:]):
        if after.start_byte < before.end_byte:
            raise InvalidRangeError(
                f"Edits {before.start_byte}..{before.end_byte} and "
                f"{after.start_byte}..{after.end_byte} overlap",
                start=after.start_byte,
                end=before.end_byte,
            )
    ordered.reverse()
    return ordered


__all__ = ["apply_changes", "order_edits"]
