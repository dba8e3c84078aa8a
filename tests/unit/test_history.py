"""Tests for the undo/redo history."""

import pytest
from hypothesis import given, strategies as st
from returns.result import Failure, Success

from cardsmith.history import History
from cardsmith.scene import Component, EMPTY_SNAPSHOT, NoOpReason


def snapshot_of(*ids: str) -> tuple[Component, ...]:
    return tuple(Component(id=i, type="text", z_index=n) for n, i in enumerate(ids))


@pytest.mark.unit
def test_initial_state():
    """Test a new history holds one empty snapshot at cursor 0."""
    history = History()

    assert history.current == EMPTY_SNAPSHOT
    assert history.cursor == 0
    assert len(history) == 1
    assert not history.can_undo()
    assert not history.can_redo()


@pytest.mark.unit
def test_commit_advances_cursor():
    history = History()
    one = snapshot_of("a")

    assert history.commit(one) is one
    assert history.current is one
    assert history.cursor == 1
    assert history.can_undo()
    assert not history.can_redo()


@pytest.mark.unit
def test_undo_redo_restore_exact_snapshots():
    """Test undo returns the previous entry and redo the discarded one, by identity."""
    history = History()
    one, two = snapshot_of("a"), snapshot_of("a", "b")
    history.commit(one)
    history.commit(two)

    assert history.undo().unwrap() is one
    assert history.undo().unwrap() is EMPTY_SNAPSHOT
    assert history.redo().unwrap() is one
    assert history.redo().unwrap() is two


@pytest.mark.unit
def test_undo_at_start_is_noop():
    """Test redundant undo reports a no-op instead of raising."""
    history = History()
    result = history.undo()

    assert isinstance(result, Failure)
    assert result.failure().reason is NoOpReason.NOTHING_TO_UNDO
    assert history.cursor == 0


@pytest.mark.unit
def test_redo_at_end_is_noop():
    history = History()
    history.commit(snapshot_of("a"))

    result = history.redo()
    assert result.failure().reason is NoOpReason.NOTHING_TO_REDO
    assert history.cursor == 1


@pytest.mark.unit
def test_commit_after_undo_truncates_future():
    """Test linear semantics: a new edit discards undone entries."""
    history = History()
    history.commit(snapshot_of("a"))
    history.commit(snapshot_of("a", "b"))
    history.commit(snapshot_of("a", "b", "c"))
    history.undo()
    history.undo()

    branch = snapshot_of("x")
    history.commit(branch)

    assert len(history) == 3
    assert history.current is branch
    assert not history.can_redo()
    assert isinstance(history.redo(), Failure)


@pytest.mark.unit
def test_undo_never_mutates_entries():
    history = History()
    history.commit(snapshot_of("a"))
    entries_before = history.entries

    history.undo()
    history.redo()
    assert history.entries == entries_before


@pytest.mark.unit
def test_max_entries_evicts_oldest():
    """Test bounded history drops the oldest entries and keeps the cursor on current."""
    history = History(max_entries=3)
    snapshots = [snapshot_of(*[f"c{i}" for i in range(n)]) for n in range(1, 6)]
    for snapshot in snapshots:
        history.commit(snapshot)

    assert len(history) == 3
    assert history.current is snapshots[-1]
    assert history.cursor == 2
    assert history.undo().unwrap() is snapshots[-2]
    assert history.undo().unwrap() is snapshots[-3]
    assert isinstance(history.undo(), Failure)


@pytest.mark.unit
def test_negative_max_entries_rejected():
    with pytest.raises(ValueError):
        History(max_entries=-1)


@given(st.lists(st.integers(min_value=0, max_value=5), min_size=1, max_size=30))
def test_undo_redo_inverse_law(sizes):
    """Property: undo after commit restores the previous snapshot; redo restores the undone one."""
    history = History()
    for n, size in enumerate(sizes):
        previous = history.current
        committed = snapshot_of(*[f"{n}-{i}" for i in range(size)])
        history.commit(committed)

        assert history.undo().unwrap() is previous
        assert history.redo().unwrap() is committed


@given(
    st.integers(min_value=1, max_value=10),
    st.integers(min_value=1, max_value=10),
)
def test_truncation_law(commits, undos):
    """Property: after undos and a fresh commit, redo always no-ops."""
    history = History()
    for n in range(commits):
        history.commit(snapshot_of(f"s{n}"))
    for _ in range(undos):
        history.undo()

    history.commit(snapshot_of("fresh"))

    assert not history.can_redo()
    assert isinstance(history.redo(), Failure)
    assert len(history) == max(commits - undos, 0) + 2
