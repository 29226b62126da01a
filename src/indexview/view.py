"""
Views adapting a source into `(index, value)` entries, and the factories
choosing between a borrowing and an owning view.
"""

from __future__ import annotations

import logging
import typing as tp
from collections.abc import Iterable, Iterator, MutableSequence, Sequence
from copy import copy
from operator import attrgetter
from types import TracebackType

from indexview.cursors import cursor_pair
from indexview.defaults import BY_INDEX, Default, EqualityPolicy, Owned, ReadOnly, Unset
from indexview.entry import Entry
from indexview.errors import UnsupportedSourceError, ViewClosedError
from indexview.iterator import AtEnd, IndexedIterator, Positioned, check_equality_policy
from indexview.wtyping import Cursor, SupportsClose, SupportsRange, SupportsStep

logger = logging.getLogger(__name__)

type Source[T] = Sequence[T] | SupportsRange[T] | Iterable[T]


class IndexedView[T]:
    """
    Reusable view over a start position and a limit borrowed from a source.

    `begin()` and `end()` never touch the stored start and limit, so each
    traversal is independent whenever the source itself can be restarted.

    Args:
        start: position of the first element
        limit: marker the position compares equal to once the source is exhausted
        equality: how two positioned iterators of this view are compared
        readonly: forbid writes through the produced entries

    Example:
        >>> view = indexed_view([42, 56, 99])
        >>> [tuple(entry) for entry in view]
        [(0, 42), (1, 56), (2, 99)]
        >>> list(view.indices()) == list(view.indices())
        True
    """

    def __init__(
        self,
        start: SupportsStep[T],
        limit: object,
        *,
        equality: EqualityPolicy = BY_INDEX,
        readonly: bool = False,
    ) -> None:
        self._start = start
        self._limit = limit
        self.equality = check_equality_policy(equality)
        self.readonly = readonly

    @property
    def owning(self) -> bool:
        return False

    def begin(self) -> IndexedIterator[T]:
        return IndexedIterator(
            Positioned(0, copy(self._start)), equality=self.equality, readonly=self.readonly
        )

    def end(self) -> IndexedIterator[T]:
        return IndexedIterator(AtEnd(self._limit), equality=self.equality, readonly=self.readonly)

    def __iter__(self) -> Iterator[Entry[T]]:
        it, end = self.begin(), self.end()
        while it != end:
            yield it.deref()
            _ = it.advance()

    def values(self) -> Iterator[T]:
        return map(attrgetter("value"), self)

    def indices(self) -> Iterator[int]:
        return map(attrgetter("index"), self)

    @tp.override
    def __repr__(self) -> str:
        return f"{type(self).__name__}(start={self._start!r}, limit={self._limit!r})"


@tp.final
class RangeOwner[T]:
    """Sole holder of a source handed over to an owning view."""

    __slots__ = ("_source",)

    def __init__(self, source: Source[T]) -> None:
        self._source: Source[T] | tp.Literal[Default.Unset] = source

    @property
    def released(self) -> bool:
        return self._source is Unset

    @property
    def source(self) -> Source[T]:
        if self._source is Unset:
            raise ViewClosedError("The owned source has already been released")
        return self._source

    def markers(self, *, writable: bool = True) -> tuple[Cursor[T], object]:
        return cursor_pair(self.source, writable=writable)

    def release(self) -> None:
        source, self._source = self._source, Unset
        if isinstance(source, SupportsClose):
            source.close()


class ExtendedIndexedView[T](IndexedView[T]):
    """
    View that owns its source for its whole lifetime.

    The source is stored first and the start and limit are derived from the
    stored object afterwards. `close()` releases the source, closing it if it
    has a `close()` method; iterators taken before that must not be used.

    Example:
        >>> with indexed_view(Owned(n * 2 for n in range(3))) as view:
        ...     list(view.values())
        [0, 2, 4]
        >>> view.closed
        True
    """

    def __init__(
        self,
        source: Source[T],
        *,
        equality: EqualityPolicy = BY_INDEX,
        readonly: bool = False,
    ) -> None:
        self._owner = RangeOwner(source)
        start, limit = self._owner.markers(writable=not readonly)
        super().__init__(start, limit, equality=equality, readonly=readonly)

    @property
    @tp.override
    def owning(self) -> bool:
        return True

    @property
    def closed(self) -> bool:
        return self._owner.released

    def _check_open(self) -> None:
        if self._owner.released:
            raise ViewClosedError(f"Cannot iterate a closed {type(self).__name__}")

    @tp.override
    def begin(self) -> IndexedIterator[T]:
        self._check_open()
        return super().begin()

    @tp.override
    def end(self) -> IndexedIterator[T]:
        self._check_open()
        return super().end()

    def close(self) -> None:
        if self._owner.released:
            return
        logger.debug("Releasing owned %s", type(self._owner.source).__name__)
        self._owner.release()

    def __enter__(self) -> tp.Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


def indexed_pair[T](
    position: SupportsStep[T],
    limit: object,
    *,
    equality: EqualityPolicy = BY_INDEX,
    readonly: bool = False,
) -> IndexedView[T]:
    """Borrowing view over exactly `position` and `limit`.

    The limit may be of a different type than the position; the view ends
    when `position == limit`.
    """
    if not isinstance(position, SupportsStep):
        raise UnsupportedSourceError(
            f"Expected a position with get() and advance(), got {type(position).__name__!r}"
        )
    logger.debug(
        "Borrowing %s/%s pair", type(position).__name__, type(limit).__name__
    )
    return IndexedView(position, limit, equality=equality, readonly=readonly)


@tp.overload
def indexed_view[T](
    source: Owned[Source[T]], /, *, equality: EqualityPolicy = BY_INDEX
) -> ExtendedIndexedView[T]: ...
@tp.overload
def indexed_view[T](
    source: Iterator[T], /, *, equality: EqualityPolicy = BY_INDEX
) -> ExtendedIndexedView[T]: ...
@tp.overload
def indexed_view[T](
    source: ReadOnly[Source[T]] | Source[T], /, *, equality: EqualityPolicy = BY_INDEX
) -> IndexedView[T]: ...
@tp.overload
def indexed_view[T](
    source: SupportsStep[T], limit: object, /, *, equality: EqualityPolicy = BY_INDEX
) -> IndexedView[T]: ...
def indexed_view[T](
    source: Owned[Source[T]] | ReadOnly[Source[T]] | Source[T] | SupportsStep[T],
    limit: object = Unset,
    /,
    *,
    equality: EqualityPolicy = BY_INDEX,
) -> IndexedView[T]:
    """
    Adapt `source` into a view of `(index, value)` entries.

    | source                              | view                              |
    |-------------------------------------|-----------------------------------|
    | `Owned(x)` or a bare iterator       | owning, keeps `x` until closed    |
    | mutable sequence                    | borrowing, entries write through  |
    | `ReadOnly(x)` or immutable sequence | borrowing, entries are read-only  |
    | object with `begin()`/`end()`       | borrowing, over that pair         |
    | any other iterable                  | borrowing, restarts per traversal |
    | `position, limit`                   | borrowing, over exactly that pair |

    Borrowing views are only valid while the caller keeps the source alive
    and unchanged in length.

    Example:
        >>> data = [1, 2]
        >>> for entry in indexed_view(data):
        ...     entry.value *= 10
        >>> data
        [10, 20]
        >>> [tuple(e) for e in indexed_view(ReadOnly(data))]
        [(0, 10), (1, 20)]
    """
    if limit is not Unset:
        return indexed_pair(tp.cast(SupportsStep[T], source), limit, equality=equality)
    match source:
        case Owned(source=owned):
            logger.debug("Taking ownership of %s", type(owned).__name__)
            return ExtendedIndexedView(owned, equality=equality)
        case ReadOnly(source=borrowed):
            target, readonly = borrowed, True
        case MutableSequence() | SupportsRange():
            target, readonly = source, False
        case Iterator():
            logger.debug("Taking ownership of one-pass %s", type(source).__name__)
            return ExtendedIndexedView(source, equality=equality)
        case Sequence() | Iterable():
            target, readonly = source, True
        case unsupported:
            raise UnsupportedSourceError(
                f"Cannot index a source of type {type(unsupported).__name__!r}"
            )
    start, end = cursor_pair(target, writable=not readonly)
    logger.debug(
        "Borrowing %s as a %s view",
        type(target).__name__,
        "read-only" if readonly else "writable",
    )
    return IndexedView(start, end, equality=equality, readonly=readonly)
