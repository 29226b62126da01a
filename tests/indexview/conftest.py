from __future__ import annotations

import typing as tp
from collections.abc import Callable, Iterator

import pytest


class NumberRange:
    """Arithmetic progression from `start` up to, not including, `stop`."""

    def __init__(self, start: int, stop: int, step: int = 1) -> None:
        if step == 0:
            raise ValueError("step must not be zero")
        if (stop - start) * step < 0:
            raise ValueError(f"Cannot reach {stop} from {start} in steps of {step}")
        self.start = start
        self.stop = stop
        self.step = step

    def __iter__(self) -> Iterator[int]:
        current = self.start
        while (current < self.stop) if self.step > 0 else (current > self.stop):
            yield current
            current += self.step


class CountLimit:
    """End marker of a `CountedRange`; a different type from its positions."""


class CountCursor:
    yields_references: tp.ClassVar[bool] = False

    def __init__(self, value: int, remaining: int) -> None:
        self.value = value
        self.remaining = remaining

    def get(self) -> int:
        return self.value

    def advance(self) -> None:
        self.value += 1
        self.remaining -= 1

    def __copy__(self) -> CountCursor:
        return CountCursor(self.value, self.remaining)

    def __eq__(self, other: object, /) -> bool:
        if isinstance(other, CountLimit):
            return self.remaining == 0
        if isinstance(other, CountCursor):
            return (self.value, self.remaining) == (other.value, other.remaining)
        return NotImplemented


class CountedRange:
    """`count` consecutive integers from `first`, bounded by a `CountLimit`."""

    def __init__(self, first: int, count: int) -> None:
        self.first = first
        self.count = count

    def begin(self) -> CountCursor:
        return CountCursor(self.first, self.count)

    def end(self) -> CountLimit:
        return CountLimit()


@pytest.fixture
def number_range() -> type[NumberRange]:
    return NumberRange


@pytest.fixture
def counted_range() -> Callable[[int, int], CountedRange]:
    return CountedRange


@pytest.fixture
def odd_numbers_from_5() -> Iterator[int]:
    return iter(NumberRange(5, 13, 2))
