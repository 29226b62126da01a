"""
The `(index, value)` pair produced by every traversal step.

Entries are transient: they are produced fresh by each dereference and should
not be kept past the next advance of the iterator that produced them.
"""

from __future__ import annotations

import typing as tp
from collections.abc import Iterator
from copy import copy

from indexview.errors import ReadOnlyError
from indexview.wtyping import SupportsStep, WritableCursor


class Entry[T]:
    """Common behaviour of entries: unpacking, tuple equality and repr.

    Example:
        >>> index, value = ValueEntry(3, "x")
        >>> index, value
        (3, 'x')
        >>> ValueEntry(3, "x") == (3, "x")
        True
    """

    __slots__ = ()

    index: int
    value: T

    def __iter__(self) -> Iterator[tp.Any]:
        yield self.index
        yield self.value

    def as_tuple(self) -> tuple[int, T]:
        return (self.index, self.value)

    @tp.override
    def __eq__(self, other: object, /) -> bool:
        if isinstance(other, Entry):
            return self.as_tuple() == tp.cast(Entry[tp.Any], other).as_tuple()
        if isinstance(other, tuple):
            return self.as_tuple() == other
        return NotImplemented

    __hash__ = None  # pyright: ignore[reportAssignmentType]

    @tp.override
    def __repr__(self) -> str:
        return f"{type(self).__name__}(index={self.index}, value={self.value!r})"


@tp.final
class ValueEntry[T](Entry[T]):
    """Entry owning the value a one-pass source produced.

    Rebinding `value` only changes the entry.
    """

    __slots__ = ("index", "value")

    def __init__(self, index: int, value: T) -> None:
        self.index = index
        self.value = value


@tp.final
class RefEntry[T](Entry[T]):
    """Entry aliasing the element a position marker points at.

    Reading `value` returns the stored element itself; assigning to it writes
    into the source, unless the entry is read-only.

    Example:
        >>> from indexview.cursors import SequenceCursor
        >>> data = [[1], [2]]
        >>> entry = RefEntry(0, SequenceCursor(data, writable=True), writable=True)
        >>> entry.value is data[0]
        True
        >>> entry.value = "replaced"; data
        ['replaced', [2]]
    """

    __slots__ = ("_position", "index", "writable")

    def __init__(self, index: int, position: SupportsStep[T], *, writable: bool = False) -> None:
        self.index = index
        self._position = copy(position)
        self.writable = writable

    @property
    def value(self) -> T:  # pyright: ignore[reportIncompatibleVariableOverride]
        return self._position.get()

    @value.setter
    def value(self, value: T) -> None:
        if not self.writable or not isinstance(self._position, WritableCursor):
            raise ReadOnlyError(f"Entry {self.index} is read-only")
        self._position.set(value)
