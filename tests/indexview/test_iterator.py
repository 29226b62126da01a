from copy import copy

import pytest

from indexview.cursors import IterCursor, SequenceCursor
from indexview.defaults import ByIndex, ByPosition, Exhausted
from indexview.entry import RefEntry, ValueEntry
from indexview.errors import ExhaustedIteratorError, ReadOnlyError
from indexview.iterator import (
    ArrowProxy,
    AtEnd,
    IndexedIterator,
    Positioned,
    PostAdvanced,
    check_equality_policy,
)


def seq_pair(data: list[int]) -> tuple[IndexedIterator[int], IndexedIterator[int]]:
    begin = IndexedIterator(Positioned(0, SequenceCursor(data, writable=True)))
    end = IndexedIterator(AtEnd(SequenceCursor(data, len(data))))
    return begin, end


def test_advance_counts_steps():
    it, end = seq_pair([3, 4, 5])
    assert it.index == 0
    assert it.advance() is it
    assert it.index == 1
    _ = it.advance().advance()
    assert it.index == 3
    assert it == end


def test_deref_is_repeatable():
    it, _ = seq_pair([3, 4])
    assert it.deref() == it.deref() == (0, 3)
    assert it.index == 0


def test_deref_kind_follows_source():
    it, _ = seq_pair([1])
    assert isinstance(it.deref(), RefEntry)

    gen_it = IndexedIterator(Positioned(0, IterCursor(iter([1]))))
    assert isinstance(gen_it.deref(), ValueEntry)


def test_readonly_iterator_entries():
    data = [1]
    it = IndexedIterator(Positioned(0, SequenceCursor(data, writable=True)), readonly=True)
    with pytest.raises(ReadOnlyError):
        it.deref().value = 2


def test_end_state_rejects_advance_and_deref():
    _, end = seq_pair([])
    assert end.at_end
    with pytest.raises(ExhaustedIteratorError, match="Cannot advance"):
        _ = end.advance()
    with pytest.raises(ExhaustedIteratorError, match="Cannot dereference"):
        _ = end.deref()
    with pytest.raises(ExhaustedIteratorError, match="index"):
        _ = end.index


def test_positioned_past_limit_rejects_deref():
    it, end = seq_pair([1])
    _ = it.advance()
    assert it == end
    assert not it.at_end
    with pytest.raises(ExhaustedIteratorError):
        _ = it.deref()


def test_equality_positioned_vs_end_is_symmetric():
    it, end = seq_pair([1])
    assert it != end
    assert end != it
    _ = it.advance()
    assert end == it


def test_end_states_are_always_equal():
    assert IndexedIterator(AtEnd(Exhausted)) == IndexedIterator(AtEnd(object()))


def test_equality_by_index_ignores_positions():
    left = IndexedIterator(Positioned(1, SequenceCursor([1, 2], 1)))
    right = IndexedIterator(Positioned(1, SequenceCursor([9, 9], 0)))
    assert left == right
    assert left != IndexedIterator(Positioned(2, SequenceCursor([1, 2], 1)))


def test_equality_by_position():
    data = [1, 2]
    left = IndexedIterator(Positioned(1, SequenceCursor(data, 1)), equality=ByPosition())
    same = IndexedIterator(Positioned(1, SequenceCursor(data, 1)))
    other = IndexedIterator(Positioned(1, SequenceCursor([1, 2], 1)))
    assert left == same
    assert left != other


def test_unknown_equality_policy():
    assert check_equality_policy(ByIndex()) == ByIndex()
    with pytest.raises(ValueError, match="unknown equality policy"):
        _ = IndexedIterator(AtEnd(None), equality="index")  # pyright: ignore[reportArgumentType]


def test_non_iterator_comparison():
    it, _ = seq_pair([1])
    assert it != 0
    assert it != (0, 1)


def test_copy_duplicates_position():
    it, end = seq_pair([1, 2])
    clone = copy(it)
    _ = it.advance()
    assert clone.index == 0
    assert clone.deref() == (0, 1)
    assert it.deref() == (1, 2)

    end_clone = copy(end)
    assert end_clone.state is end.state


def test_arrow_forwards_to_entry():
    data = [10, 20]
    it, _ = seq_pair(data)
    assert it.arrow().index == 0
    assert it.arrow().value == 10
    it.arrow().value = 11
    assert data == [11, 20]


def test_post_advance_returns_previous_entry():
    data = [10, 20]
    it, end = seq_pair(data)
    old = it.post_advance()
    assert isinstance(old, PostAdvanced)
    assert old.get() == (0, 10)
    assert it.deref() == (1, 20)
    assert it.post_advance().get() == (1, 20)
    assert it == end


def test_post_advance_on_one_pass_source():
    it = IndexedIterator(Positioned(0, IterCursor(iter("ab"))))
    end = IndexedIterator(AtEnd(Exhausted))
    assert it.post_advance().get() == (0, "a")
    assert it.post_advance().get() == (1, "b")
    assert it == end


def test_repr():
    it, end = seq_pair([1])
    assert repr(it) == "IndexedIterator(index=0, position=SequenceCursor(list, pos=0))"
    assert repr(end) == "IndexedIterator(limit=SequenceCursor(list, pos=1))"


def test_copies_over_one_pass_source_read_the_same_element():
    it = IndexedIterator(Positioned(0, IterCursor(n for n in (5, 7, 9, 11))))
    clone = copy(it)
    assert it == clone
    assert it.deref() == (0, 5)
    assert clone.deref() == (0, 5)


def test_arrow_proxy_can_be_copied():
    data = [10]
    it, _ = seq_pair(data)
    proxy = copy(it.arrow())
    assert proxy.index == 0
    proxy.value = 12
    assert data == [12]


def test_missing_entry_raises_attribute_error():
    proxy = ArrowProxy.__new__(ArrowProxy)
    with pytest.raises(AttributeError, match="entry"):
        _ = proxy.index
