import enum
from dataclasses import dataclass
from typing import Literal


class Default(enum.Enum):
    """Sentinel values used as defaults and limits."""

    Exhausted = enum.auto()
    Unset = enum.auto()


Exhausted: Literal[Default.Exhausted] = Default.Exhausted
Unset: Literal[Default.Unset] = Default.Unset


@dataclass(frozen=True, slots=True)
class ByIndex:
    """Two positioned iterators are equal when their indices are equal.

    Only sound for iterators taken from the same view.
    """


@dataclass(frozen=True, slots=True)
class ByPosition:
    """Two positioned iterators are equal when both index and position are equal."""


BY_INDEX = ByIndex()

type EqualityPolicy = ByIndex | ByPosition


@dataclass(frozen=True, slots=True)
class Owned[T]:
    """Hands `source` over to the view, which keeps it alive until closed."""

    source: T


@dataclass(frozen=True, slots=True)
class ReadOnly[T]:
    """Borrows `source` without allowing writes through its entries."""

    source: T
