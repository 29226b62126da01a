"""
Position markers for the sources indexview knows how to adapt.

A position marker reads the element it points at, steps forward by one and
compares itself against a limit. Sequences get a reference-yielding marker
whose limit is a marker of the same type; any other iterable gets a one-pass,
value-yielding marker whose limit is `Default.Exhausted`.
"""

from __future__ import annotations

import typing as tp
from collections.abc import Iterable, Iterator, MutableSequence, Sequence

from indexview.defaults import Default, Exhausted, Unset
from indexview.errors import ExhaustedIteratorError, ReadOnlyError, UnsupportedSourceError
from indexview.wtyping import Cursor, SupportsRange


@tp.final
class SequenceCursor[T]:
    """Integer position into a sequence, yielding the stored element itself.

    Example:
        >>> data = [42, 56, 99]
        >>> cursor, limit = SequenceCursor(data), SequenceCursor(data, len(data))
        >>> cursor.get()
        42
        >>> cursor.advance(); cursor.get()
        56
        >>> cursor == limit
        False
    """

    __slots__ = ("pos", "sequence", "writable")
    yields_references: tp.ClassVar[bool] = True

    def __init__(self, sequence: Sequence[T], pos: int = 0, *, writable: bool = False) -> None:
        self.sequence = sequence
        self.pos = pos
        self.writable = writable

    def get(self) -> T:
        if not 0 <= self.pos < len(self.sequence):
            raise ExhaustedIteratorError(
                f"Position {self.pos} is past the end of a sequence of length {len(self.sequence)}"
            )
        return self.sequence[self.pos]

    def set(self, value: T, /) -> None:
        if not self.writable:
            raise ReadOnlyError(
                f"Cannot assign through a read-only view of {type(self.sequence).__name__}"
            )
        tp.cast(MutableSequence[T], self.sequence)[self.pos] = value

    def advance(self) -> None:
        self.pos += 1

    def __copy__(self) -> SequenceCursor[T]:
        return SequenceCursor(self.sequence, self.pos, writable=self.writable)

    @tp.override
    def __eq__(self, other: object, /) -> bool:
        if not isinstance(other, SequenceCursor):
            return NotImplemented
        return self.sequence is other.sequence and self.pos == other.pos

    @tp.override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self.sequence).__name__}, pos={self.pos})"


class _Stream[T]:
    """Iterator shared by every copy of a started `IterCursor`."""

    __slots__ = ("current", "iterator")

    def __init__(self, iterator: Iterator[T]) -> None:
        self.iterator = iterator
        self.current: T | Default = Unset

    def peek(self) -> T | tp.Literal[Default.Exhausted]:
        if self.current is Unset:
            self.current = next(self.iterator, Exhausted)
        return self.current  # pyright: ignore[reportReturnType]

    def drop(self) -> None:
        if self.peek() is Exhausted:
            raise ExhaustedIteratorError("Cannot advance an exhausted iterator")
        self.current = Unset


@tp.final
class IterCursor[T]:
    """Single-pass position into any iterable, yielding produced values.

    The underlying iterator is only created on first use, so copies of an
    unstarted cursor each restart a re-iterable source. Copies of a started
    cursor, and all copies over a one-pass iterator, share one stream. At most the current element is pulled.

    Example:
        >>> cursor = IterCursor(x * x for x in range(3))
        >>> cursor.get(), cursor.get()
        (0, 0)
        >>> cursor.advance(); cursor.advance(); cursor.get()
        4
        >>> cursor == Exhausted
        False
        >>> cursor.advance(); cursor == Exhausted
        True
    """

    __slots__ = ("_stream", "iterable")
    yields_references: tp.ClassVar[bool] = False

    def __init__(self, iterable: Iterable[T]) -> None:
        self.iterable = iterable
        self._stream: _Stream[T] | None = None

    @property
    def started(self) -> bool:
        return self._stream is not None

    @property
    def stream(self) -> _Stream[T]:
        if self._stream is None:
            self._stream = _Stream(iter(self.iterable))
        return self._stream

    def get(self) -> T:
        item = self.stream.peek()
        if item is Exhausted:
            raise ExhaustedIteratorError("Cannot dereference an exhausted iterator")
        return item

    def advance(self) -> None:
        self.stream.drop()

    def __copy__(self) -> IterCursor[T]:
        clone = IterCursor(self.iterable)
        # a one-pass source cannot be restarted, so every copy reads one stream
        clone._stream = self.stream if isinstance(self.iterable, Iterator) else self._stream
        return clone

    @tp.override
    def __eq__(self, other: object, /) -> bool:
        if other is Exhausted:
            return self.stream.peek() is Exhausted
        if isinstance(other, IterCursor):
            return self.iterable is other.iterable and self._stream is other._stream
        return NotImplemented

    @tp.override
    def __repr__(self) -> str:
        state = "started" if self.started else "unstarted"
        return f"{type(self).__name__}({type(self.iterable).__name__}, {state})"


def cursor_pair[T](
    source: Sequence[T] | SupportsRange[T] | Iterable[T], *, writable: bool = False
) -> tuple[Cursor[T], object]:
    """Derive a start position and a limit from `source`.

    Returns:
        (start, limit) where `start == limit` holds once the source is exhausted

    Example:
        >>> start, limit = cursor_pair((1, 2))
        >>> start, limit
        (SequenceCursor(tuple, pos=0), SequenceCursor(tuple, pos=2))
        >>> cursor_pair(iter([]))[1]
        <Default.Exhausted: 1>
    """
    match source:
        case Sequence():
            seq = tp.cast(Sequence[T], source)
            writable = writable and isinstance(seq, MutableSequence)
            return SequenceCursor(seq, 0, writable=writable), SequenceCursor(seq, len(seq))
        case SupportsRange():
            rng = tp.cast(SupportsRange[T], source)
            return rng.begin(), rng.end()
        case Iterable():
            return IterCursor(tp.cast(Iterable[T], source)), Exhausted
        case unsupported:
            raise UnsupportedSourceError(
                f"Cannot index a source of type {type(unsupported).__name__!r}"
            )
