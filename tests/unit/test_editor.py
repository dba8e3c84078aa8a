"""Tests for the editing session (layout verbs, selection, preview, undo)."""

import pytest
from hypothesis import given, strategies as st
from returns.result import Failure, Success

from cardsmith.core import MalformedSnapshotError, Settings
from cardsmith.layout import Editor
from cardsmith.scene import Component, EMPTY_SNAPSHOT, NoOpReason, find, paint_order


# ============================================================================
# Example Scenarios
# ============================================================================


@pytest.mark.unit
def test_drop_undo_redo_round_trip(editor):
    """Test drop → undo → redo brings back the same component with the same id."""
    new_id = editor.drop_new("text", {"text": "Hi"}, {"x": 10, "y": 10}).unwrap()

    (component,) = editor.document
    assert component.id == new_id
    assert component.position == (10, 10)
    assert component.size == (200, 100)
    assert component.z_index == 0
    assert component.properties["text"] == "Hi"

    assert editor.undo().unwrap() == EMPTY_SNAPSHOT
    assert editor.document == EMPTY_SNAPSHOT

    (restored,) = editor.redo().unwrap()
    assert restored.id == new_id
    assert restored == component


@pytest.mark.unit
def test_bring_to_front_changes_paint_order(settings, layered_snapshot):
    editor = Editor(settings=settings, initial=layered_snapshot)

    editor.bring_to_front("a")

    assert find(editor.document, "a").z_index == 2
    assert [c.id for c in paint_order(editor.document)] == ["b", "a"]


@pytest.mark.unit
def test_resize_clamps_to_minimum(settings, layered_snapshot):
    """Test a tiny resize stores the floor dimensions rather than the request."""
    editor = Editor(settings=settings, initial=layered_snapshot)

    editor.resize_to("a", width=10, height=10, snap_to_grid=False)

    assert find(editor.document, "a").size == (50, 30)


@pytest.mark.unit
def test_remove_container_removes_children(settings, nested_snapshot):
    editor = Editor(settings=settings, initial=nested_snapshot)

    editor.remove_selected("c")

    assert [c.id for c in editor.document] == ["f"]


# ============================================================================
# Geometry
# ============================================================================


@pytest.mark.unit
def test_move_snaps_to_grid_by_default(settings, layered_snapshot):
    editor = Editor(settings=settings, initial=layered_snapshot)

    editor.move_to("a", 29, 31)

    assert find(editor.document, "a").position == (20, 40)


@pytest.mark.unit
def test_move_without_snapping_rounds_to_pixels(free_editor):
    new_id = free_editor.drop_new("button").unwrap()

    free_editor.move_to(new_id, 12.4, 12.5)

    assert find(free_editor.document, new_id).position == (12, 13)


@pytest.mark.unit
def test_move_clamps_negative_coordinates(free_editor):
    new_id = free_editor.drop_new("text").unwrap()

    free_editor.move_to(new_id, -35, 15)

    assert find(free_editor.document, new_id).position == (0, 15)


@pytest.mark.unit
def test_negative_coordinates_kept_when_clamping_disabled(settings):
    editor = Editor(settings=settings.model_copy(update={"clamp_to_canvas": False, "snap_to_grid": False}))
    new_id = editor.drop_new("text").unwrap()

    editor.move_to(new_id, -35, -5)

    assert find(editor.document, new_id).position == (-35, -5)


@pytest.mark.unit
def test_drop_snaps_only_when_asked(editor):
    unsnapped = editor.drop_new("text", position=(13, 27)).unwrap()
    snapped = editor.drop_new("text", position=(13, 27), snap_to_grid=True).unwrap()

    assert find(editor.document, unsnapped).position == (13, 27)
    assert find(editor.document, snapped).position == (20, 20)


@pytest.mark.unit
def test_resize_snaps_then_clamps(settings, layered_snapshot):
    editor = Editor(settings=settings, initial=layered_snapshot)

    editor.resize_to("a", 131, 69)
    assert find(editor.document, "a").size == (140, 60)

    editor.resize_to("a", 10, 10)
    assert find(editor.document, "a").size == (50, 30)


@pytest.mark.unit
def test_move_to_same_position_does_not_commit(settings, layered_snapshot):
    """Test an edit that changes nothing leaves history untouched."""
    editor = Editor(settings=settings, initial=layered_snapshot)

    result = editor.move_to("a", 0, 0)

    assert isinstance(result, Failure)
    assert result.failure().reason is NoOpReason.UNCHANGED
    assert len(editor.history) == 1


@pytest.mark.unit
def test_stale_id_is_noop(editor):
    """Test verbs on an unknown id return a no-op and commit nothing."""
    for result in (
        editor.move_to("ghost", 10, 10),
        editor.resize_to("ghost", 100, 100),
        editor.bring_to_front("ghost"),
        editor.send_to_back("ghost"),
        editor.remove_selected("ghost"),
        editor.update_properties("ghost", {"text": "x"}),
    ):
        assert isinstance(result, Failure)
        assert result.failure().reason is NoOpReason.UNKNOWN_ID

    assert len(editor.history) == 1


@given(
    st.floats(min_value=-1000, max_value=1000, allow_nan=False),
    st.floats(min_value=-1000, max_value=1000, allow_nan=False),
    st.booleans(),
)
def test_resize_never_below_floor(width, height, snap_to_grid):
    """Property: stored dimensions never drop below the minimum size."""
    editor = Editor(settings=Settings(), initial=(Component(id="a", type="text"),))

    editor.resize_to("a", width, height, snap_to_grid=snap_to_grid)

    component = find(editor.document, "a")
    assert component.width >= 50
    assert component.height >= 30


# ============================================================================
# Structure
# ============================================================================


@pytest.mark.unit
def test_drop_applies_palette_defaults(editor):
    new_id = editor.drop_new("button", {"label": "Buy"}).unwrap()

    properties = find(editor.document, new_id).properties
    assert properties["label"] == "Buy"
    assert properties["variant"] == "primary"


@pytest.mark.unit
def test_drop_foreign_type_accepted(editor):
    new_id = editor.drop_new("chart").unwrap()

    component = find(editor.document, new_id)
    assert component.type == "chart"
    assert component.properties == {}


@pytest.mark.unit
def test_drop_selects_new_component(editor):
    new_id = editor.drop_new("text").unwrap()
    assert editor.selected == new_id


@pytest.mark.unit
def test_drop_into_container(editor):
    container = editor.drop_new("container").unwrap()
    child = editor.drop_new("text", parent_id=container).unwrap()

    assert find(editor.document, child).parent_id == container
    assert len(editor.history) == 3


@pytest.mark.unit
def test_drop_into_unknown_parent_is_noop(editor):
    result = editor.drop_new("text", parent_id="ghost")

    assert isinstance(result, Failure)
    assert result.failure().reason is NoOpReason.UNKNOWN_PARENT
    assert editor.document == EMPTY_SNAPSHOT
    assert len(editor.history) == 1


@pytest.mark.unit
def test_remove_selected_without_selection(editor):
    result = editor.remove_selected()
    assert result.failure().reason is NoOpReason.NO_SELECTION


@pytest.mark.unit
def test_remove_selected_clears_selection_with_descendants(settings, nested_snapshot):
    """Test removing an ancestor also clears a selection on one of its descendants."""
    editor = Editor(settings=settings, initial=nested_snapshot)
    editor.select("e")

    editor.remove_selected("c")

    assert editor.selected is None


@pytest.mark.unit
def test_remove_keeps_unrelated_selection(settings, nested_snapshot):
    editor = Editor(settings=settings, initial=nested_snapshot)
    editor.select("f")

    editor.remove_selected("c")

    assert editor.selected == "f"


@pytest.mark.unit
def test_select_unknown_id_is_noop(editor):
    assert editor.select("ghost").failure().reason is NoOpReason.UNKNOWN_ID
    assert editor.selected is None


@pytest.mark.unit
def test_reparent_rejects_cycles(settings, nested_snapshot):
    editor = Editor(settings=settings, initial=nested_snapshot)

    result = editor.reparent("c", "e")

    assert result.failure().reason is NoOpReason.CYCLE
    assert editor.document is nested_snapshot


@pytest.mark.unit
def test_reparent_to_top_level(settings, nested_snapshot):
    editor = Editor(settings=settings, initial=nested_snapshot)

    editor.reparent("e", None)

    assert find(editor.document, "e").parent_id is None


@pytest.mark.unit
def test_duplicate_offsets_by_grid_and_selects_copy(settings, layered_snapshot):
    editor = Editor(settings=settings, initial=layered_snapshot)
    editor.select("b")

    copy_id = editor.duplicate().unwrap()

    copy = find(editor.document, copy_id)
    assert copy.position == (20, 20)
    assert copy.properties == {"text": "B"}
    assert copy.z_index == 2
    assert editor.selected == copy_id


@pytest.mark.unit
def test_update_properties_merges(settings, layered_snapshot):
    editor = Editor(settings=settings, initial=layered_snapshot)

    editor.update_properties("a", {"color": "red"})

    assert find(editor.document, "a").properties == {"text": "A", "color": "red"}


@pytest.mark.unit
def test_bind_and_unbind_property(settings, layered_snapshot):
    editor = Editor(settings=settings, initial=layered_snapshot)

    editor.bind_property("a", "firstname")
    assert find(editor.document, "a").property_binding == "firstname"

    editor.bind_property("a", None)
    assert find(editor.document, "a").property_binding is None
    assert len(editor.history) == 3


@pytest.mark.unit
def test_clear_canvas_is_undoable(settings, layered_snapshot):
    editor = Editor(settings=settings, initial=layered_snapshot)

    editor.clear_canvas()
    assert editor.document == EMPTY_SNAPSHOT

    assert editor.undo().unwrap() is layered_snapshot


@pytest.mark.unit
def test_clear_empty_canvas_is_noop(editor):
    assert editor.clear_canvas().failure().reason is NoOpReason.UNCHANGED


@pytest.mark.unit
def test_load_replaces_document(editor, layered_snapshot):
    editor.load(layered_snapshot)

    assert editor.document == layered_snapshot
    assert editor.undo().unwrap() == EMPTY_SNAPSHOT


# ============================================================================
# History
# ============================================================================


@pytest.mark.unit
def test_each_accepted_verb_commits_once(editor):
    new_id = editor.drop_new("text").unwrap()
    editor.move_to(new_id, 40, 40)
    editor.resize_to(new_id, 300, 120)
    editor.bring_to_front(new_id)

    assert len(editor.history) == 5
    assert editor.history.cursor == 4


@pytest.mark.unit
def test_undo_clears_selection(editor):
    editor.drop_new("text")

    editor.undo()

    assert editor.selected is None


@pytest.mark.unit
def test_redundant_undo_and_redo(editor):
    assert editor.undo().failure().reason is NoOpReason.NOTHING_TO_UNDO
    assert editor.redo().failure().reason is NoOpReason.NOTHING_TO_REDO
    assert not editor.can_undo()
    assert not editor.can_redo()


@pytest.mark.unit
def test_edit_after_undo_discards_redo(editor):
    first = editor.drop_new("text").unwrap()
    editor.move_to(first, 100, 100)
    editor.undo()

    editor.move_to(first, 40, 60)

    assert not editor.can_redo()
    assert find(editor.document, first).position == (40, 60)


@pytest.mark.unit
def test_history_limit_from_settings(settings):
    editor = Editor(settings=settings.model_copy(update={"history_limit": 2}))

    editor.drop_new("text")
    editor.drop_new("text")
    editor.drop_new("text")

    assert len(editor.history) == 2
    assert len(editor.undo().unwrap()) == 2
    assert isinstance(editor.undo(), Failure)


# ============================================================================
# Drag / Resize Preview
# ============================================================================


@pytest.mark.unit
def test_preview_does_not_touch_document(settings, layered_snapshot):
    editor = Editor(settings=settings, initial=layered_snapshot)

    editor.preview_move("a", 47, 47)

    assert editor.previewing
    assert find(editor.view, "a").position == (40, 40)
    assert editor.document is layered_snapshot
    assert len(editor.history) == 1


@pytest.mark.unit
def test_release_commits_single_entry(settings, layered_snapshot):
    """Test a whole drag gesture becomes one undo step."""
    editor = Editor(settings=settings, initial=layered_snapshot)

    for step in range(0, 100, 10):
        editor.preview_move("a", step, step)
    editor.preview_resize("a", 260, 140)
    result = editor.release()

    assert isinstance(result, Success)
    assert len(editor.history) == 2
    moved = find(editor.document, "a")
    assert moved.position == (90, 90)
    assert moved.size == (260, 140)
    assert not editor.previewing

    assert editor.undo().unwrap() is layered_snapshot


@pytest.mark.unit
def test_cancel_preview_restores_view(settings, layered_snapshot):
    editor = Editor(settings=settings, initial=layered_snapshot)
    editor.preview_move("a", 200, 200)

    editor.cancel_preview()

    assert editor.view is layered_snapshot
    assert editor.release().failure().reason is NoOpReason.NO_PREVIEW


@pytest.mark.unit
def test_preview_unknown_id(editor):
    assert editor.preview_move("ghost", 10, 10).failure().reason is NoOpReason.UNKNOWN_ID
    assert not editor.previewing


@pytest.mark.unit
def test_release_back_to_start_is_noop(settings, layered_snapshot):
    editor = Editor(settings=settings, initial=layered_snapshot)
    editor.preview_move("a", 60, 60)
    editor.preview_move("a", 0, 0)

    assert editor.release().failure().reason is NoOpReason.UNCHANGED
    assert len(editor.history) == 1


# ============================================================================
# Document Integrity
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "snapshot,fragment",
    [
        (
            (Component(id="a", type="text"), Component(id="a", type="button")),
            "duplicate id 'a'",
        ),
        (
            (Component(id="a", type="text", parent_id="ghost"),),
            "parentId 'ghost'",
        ),
        (
            (Component(id="a", type="container", parent_id="a"),),
            "own ancestor",
        ),
        (
            (
                Component(id="a", type="container", parent_id="b"),
                Component(id="b", type="container", parent_id="a"),
            ),
            "own ancestor",
        ),
        (
            ({"id": "a", "type": "text"},),
            "expected a Component",
        ),
    ],
)
def test_load_rejects_corrupt_documents(settings, layered_snapshot, snapshot, fragment):
    """Test a corrupt document never reaches history."""
    editor = Editor(settings=settings, initial=layered_snapshot)
    editor.select("a")

    with pytest.raises(MalformedSnapshotError, match=fragment):
        editor.load(snapshot)

    assert editor.document is layered_snapshot
    assert len(editor.history) == 1
    assert editor.selected == "a"


@pytest.mark.unit
def test_initial_document_is_checked(settings):
    duplicate_ids = (Component(id="a", type="text"), Component(id="a", type="text"))

    with pytest.raises(MalformedSnapshotError):
        Editor(settings=settings, initial=duplicate_ids)


@pytest.mark.unit
def test_history_entries_cannot_be_changed_through_document(editor):
    """Test writing into the current document's properties cannot alter earlier entries."""
    first = editor.drop_new("text", {"text": "original"}).unwrap()
    editor.drop_new("text", {"text": "second"})
    editor.bring_to_front(first)

    with pytest.raises(TypeError):
        find(editor.document, first).properties["text"] = "changed"

    previous = editor.undo().unwrap()
    assert find(previous, first).properties["text"] == "original"
