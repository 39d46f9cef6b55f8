"""Receivers notified with every descriptor a batch update produces."""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Protocol, Union

from .edits import EditDescriptor


class Updateable(Protocol):
    """Anything that keeps derived state (a syntax tree, caches) in step."""

    def update(self, descriptor: EditDescriptor) -> None:
        """Called once per applied edit, in order."""
        ...


UpdateTarget = Optional[Union[Updateable, Callable[[EditDescriptor], None]]]


def as_callback(target: UpdateTarget) -> Callable[[EditDescriptor], None]:
    """Normalize an updateable, a plain callable, or ``None`` to a callable."""

    if target is None:
        return _ignore
    method = getattr(target, "update", None)
    if callable(method):
        return method
    if callable(target):
        return target
    raise TypeError(f"{type(target).__name__} is neither updateable nor callable")


def _ignore(descriptor: EditDescriptor) -> None:
    del descriptor


class EditLog:
    """Collects descriptors until they are drained."""

    def __init__(self) -> None:
        self._entries: List[EditDescriptor] = []

    def update(self, descriptor: EditDescriptor) -> None:
        self._entries.append(descriptor)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[EditDescriptor]:
        return iter(tuple(self._entries))

    def drain(self) -> List[EditDescriptor]:
        entries, self._entries = self._entries, []
        return entries


__all__ = ["Updateable", "UpdateTarget", "EditLog", "as_callback"]
