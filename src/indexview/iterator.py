"""
The cursor handed out by an `IndexedView`.

An `IndexedIterator` is in exactly one of two states: `Positioned`, holding
the ordinal index and the source position, or `AtEnd`, holding the source
limit. A positioned iterator compares equal to an end iterator once its
position equals the limit under the source's own `==`.
"""

from __future__ import annotations

import typing as tp
from copy import copy
from dataclasses import dataclass

from indexview.defaults import BY_INDEX, ByIndex, ByPosition, EqualityPolicy
from indexview.entry import Entry, RefEntry, ValueEntry
from indexview.errors import ExhaustedIteratorError
from indexview.wtyping import SupportsStep


@dataclass(frozen=True, slots=True)
class Positioned[T]:
    index: int
    position: SupportsStep[T]


@dataclass(frozen=True, slots=True)
class AtEnd:
    limit: object


type IteratorState[T] = Positioned[T] | AtEnd


def check_equality_policy(policy: EqualityPolicy) -> EqualityPolicy:
    match policy:
        case ByIndex() | ByPosition():
            return policy
        case unknown:  # pyright: ignore[reportUnnecessaryComparison]
            raise ValueError(f"Received unknown equality policy: {unknown!r}")  # pyright: ignore[reportUnreachable]


@tp.final
class ArrowProxy[T]:
    """Holds one entry and forwards attribute access to it.

    Example:
        >>> proxy = ArrowProxy(ValueEntry(2, "c"))
        >>> proxy.index, proxy.value
        (2, 'c')
    """

    __slots__ = ("entry",)

    def __init__(self, entry: Entry[T]) -> None:
        object.__setattr__(self, "entry", entry)

    def __getattr__(self, name: str) -> tp.Any:  # noqa: ANN401
        if name == "entry":
            raise AttributeError(name)
        return getattr(self.entry, name)

    @tp.override
    def __setattr__(self, name: str, value: object) -> None:
        if name == "entry":
            object.__setattr__(self, name, value)
        else:
            setattr(self.entry, name, value)


@tp.final
@dataclass(frozen=True, slots=True)
class PostAdvanced[T]:
    """The entry an iterator pointed at before `post_advance` moved it."""

    entry: Entry[T]

    def get(self) -> Entry[T]:
        return self.entry


@tp.final
class IndexedIterator[T]:
    """
    Single-pass iterator producing `(index, value)` entries.

    Args:
        state: initial state, `Positioned` or `AtEnd`
        equality: how two positioned iterators are compared
        readonly: forbid writes through the produced entries

    Example:
        >>> from indexview.cursors import SequenceCursor
        >>> data = ["a", "b"]
        >>> it = IndexedIterator(Positioned(0, SequenceCursor(data)))
        >>> end = IndexedIterator(AtEnd(SequenceCursor(data, 2)))
        >>> it.deref()
        RefEntry(index=0, value='a')
        >>> it.advance().deref()
        RefEntry(index=1, value='b')
        >>> it == end, it.advance() == end
        (False, True)
    """

    __slots__ = ("_state", "equality", "readonly")

    def __init__(
        self,
        state: IteratorState[T],
        *,
        equality: EqualityPolicy = BY_INDEX,
        readonly: bool = False,
    ) -> None:
        self._state: IteratorState[T] = state
        self.equality = check_equality_policy(equality)
        self.readonly = readonly

    @property
    def state(self) -> IteratorState[T]:
        return self._state

    @property
    def at_end(self) -> bool:
        """True for an iterator created in the terminal state, e.g. by `IndexedView.end`."""
        return isinstance(self._state, AtEnd)

    @property
    def index(self) -> int:
        return self._positioned("read the index of").index

    def _positioned(self, action: str) -> Positioned[T]:
        match self._state:
            case Positioned():
                return self._state
            case AtEnd():
                raise ExhaustedIteratorError(f"Cannot {action} an iterator in the terminal state")

    def advance(self) -> tp.Self:
        state = self._positioned("advance")
        state.position.advance()
        self._state = Positioned(state.index + 1, state.position)
        return self

    def deref(self) -> Entry[T]:
        state = self._positioned("dereference")
        position = state.position
        value = position.get()
        if getattr(position, "yields_references", False):
            return RefEntry(state.index, position, writable=not self.readonly)
        return ValueEntry(state.index, value)

    def arrow(self) -> ArrowProxy[T]:
        return ArrowProxy(self.deref())

    def post_advance(self) -> PostAdvanced[T]:
        previous = PostAdvanced(self.deref())
        _ = self.advance()
        return previous

    @tp.override
    def __eq__(self, other: object, /) -> bool:
        if not isinstance(other, IndexedIterator):
            return NotImplemented
        match self._state, tp.cast(IndexedIterator[tp.Any], other).state:
            case AtEnd(), AtEnd():
                return True
            case (Positioned(position=position), AtEnd(limit=limit)) | (
                AtEnd(limit=limit),
                Positioned(position=position),
            ):
                return bool(position == limit)
            case Positioned() as lhs, Positioned() as rhs:
                same_position = isinstance(self.equality, ByIndex) or bool(
                    lhs.position == rhs.position
                )
                return lhs.index == rhs.index and same_position
            case _:
                return NotImplemented

    __hash__ = None  # pyright: ignore[reportAssignmentType]

    def __copy__(self) -> IndexedIterator[T]:
        match self._state:
            case Positioned(index=index, position=position):
                state: IteratorState[T] = Positioned(index, copy(position))
            case AtEnd():
                state = self._state
        return IndexedIterator(state, equality=self.equality, readonly=self.readonly)

    @tp.override
    def __repr__(self) -> str:
        match self._state:
            case Positioned(index=index, position=position):
                return f"{type(self).__name__}(index={index}, position={position!r})"
            case AtEnd(limit=limit):
                return f"{type(self).__name__}(limit={limit!r})"
