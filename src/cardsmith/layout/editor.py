"""Layout operations.

The Editor is the explicit context object for one editing session: it owns
the history (and therefore the committed document), the ephemeral
selection, and the uncommitted drag/resize preview. Its verbs are the only
sanctioned way to change the document; each accepted verb commits exactly
one history entry.
"""

from collections.abc import Mapping
from typing import Any

from returns.result import Failure, Result, Success

from cardsmith.core import Settings, get_logger, get_settings
from cardsmith.core.id import ComponentID, SessionID, new_session_id
from cardsmith.history import History
from cardsmith.scene import (
    EMPTY_SNAPSHOT,
    Direction,
    NoOp,
    NoOpReason,
    Position,
    Size,
    Snapshot,
    check_integrity,
    clamp_min,
    descendants,
    find,
    graph,
    snap,
    to_pixels,
    with_defaults,
)
from cardsmith.scene.models import as_position

logger = get_logger(__name__)

EditResult = Result[Snapshot, NoOp]


class Editor:
    """
    Single-writer editing session over one card document.

    Args:
        settings: Grid, geometry and history settings (defaults to get_settings())
        initial: Document at history cursor 0
        session_id: Identifier attached to every log event of this session

    Raises:
        MalformedSnapshotError: If initial is not a valid scene graph
    """

    def __init__(
        self,
        settings: Settings | None = None,
        initial: Snapshot = EMPTY_SNAPSHOT,
        session_id: SessionID | None = None,
    ) -> None:
        check_integrity(initial)
        self.settings = settings or get_settings()
        self.session_id = session_id or new_session_id()
        self.history = History(initial, max_entries=self.settings.history_limit)
        self._selected: str | None = None
        self._preview: dict[str, dict[str, int]] = {}
        self._log = logger.bind(session_id=self.session_id)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def document(self) -> Snapshot:
        """The committed snapshot."""
        return self.history.current

    @property
    def view(self) -> Snapshot:
        """The committed snapshot with any in-flight drag/resize preview applied."""
        if not self._preview:
            return self.document
        return graph.update_many(self.document, self._preview).value_or(self.document)

    @property
    def selected(self) -> str | None:
        return self._selected

    @property
    def previewing(self) -> bool:
        return bool(self._preview)

    def select(self, component_id: str | None) -> Result[str | None, NoOp]:
        """Select a component, or clear the selection with None."""
        if component_id is not None and find(self.document, component_id) is None:
            return Failure(NoOp(NoOpReason.UNKNOWN_ID, component_id))
        self._selected = component_id
        return Success(component_id)

    # ------------------------------------------------------------------
    # Geometry verbs
    # ------------------------------------------------------------------

    def move_to(self, component_id: str, x: float, y: float, snap_to_grid: bool | None = None) -> EditResult:
        """Move a component's top-left corner, snapping to the grid when enabled."""
        position = self._place(x, y, snap_to_grid)
        return self._commit(
            "move",
            graph.update(self.document, component_id, position._asdict()),
            component_id,
        )

    def resize_to(
        self, component_id: str, width: float, height: float, snap_to_grid: bool | None = None
    ) -> EditResult:
        """Resize a component; the result never drops below the minimum size."""
        size = self._dimensions(width, height, snap_to_grid)
        return self._commit(
            "resize",
            graph.update(self.document, component_id, size._asdict()),
            component_id,
        )

    def bring_to_front(self, component_id: str) -> EditResult:
        return self._commit("bring_to_front", graph.reorder(self.document, component_id, Direction.FRONT), component_id)

    def send_to_back(self, component_id: str) -> EditResult:
        return self._commit("send_to_back", graph.reorder(self.document, component_id, Direction.BACK), component_id)

    # ------------------------------------------------------------------
    # Structural verbs
    # ------------------------------------------------------------------

    def drop_new(
        self,
        type: str,
        properties: Mapping[str, Any] | None = None,
        position: Position | tuple[int, int] | Mapping[str, int] = Position(0, 0),
        parent_id: str | None = None,
        snap_to_grid: bool = False,
    ) -> Result[ComponentID, NoOp]:
        """
        Create a component from the palette at a drop position and select it.

        Palette defaults for the type fill in any properties not given.
        Foreign types are accepted and get no defaults.
        """
        x, y = as_position(position)
        placed = self._place(x, y, snap_to_grid)
        size = Size(self.settings.default_width, self.settings.default_height)
        snapshot, new_id = graph.add(
            self.document, type, with_defaults(type, dict(properties or {})), placed, size
        )

        if parent_id is not None:
            nested = graph.reparent(snapshot, new_id, parent_id)
            if isinstance(nested, Failure):
                self._log.debug("edit_ignored", action="drop_new", reason=str(nested.failure()))
                return Failure(nested.failure())
            snapshot = nested.unwrap()

        self._commit("drop_new", Success(snapshot), new_id)
        self._selected = new_id
        return Success(new_id)

    def remove_selected(self, component_id: str | None = None) -> EditResult:
        """
        Remove a component (the selection by default) and everything inside it.

        The selection is cleared when it was removed along with the component.
        """
        target = component_id if component_id is not None else self._selected
        if target is None:
            return Failure(NoOp(NoOpReason.NO_SELECTION))

        doomed = descendants(self.document, target) | {target}
        result = self._commit("remove", graph.remove(self.document, target), target)
        if isinstance(result, Success) and self._selected in doomed:
            self._selected = None
        return result

    def reparent(self, component_id: str, parent_id: str | None) -> EditResult:
        """Nest a component inside another one (or lift it to top level with None)."""
        return self._commit("reparent", graph.reparent(self.document, component_id, parent_id), component_id)

    def duplicate(self, component_id: str | None = None) -> Result[ComponentID, NoOp]:
        """Copy a component (the selection by default) and select the copy."""
        target = component_id if component_id is not None else self._selected
        if target is None:
            return Failure(NoOp(NoOpReason.NO_SELECTION))

        grid = self.settings.grid_size
        copied = graph.duplicate(self.document, target, Position(grid, grid))
        if isinstance(copied, Failure):
            return Failure(copied.failure())

        snapshot, new_id = copied.unwrap()
        self._commit("duplicate", Success(snapshot), new_id)
        self._selected = new_id
        return Success(new_id)

    def update_properties(self, component_id: str, properties: Mapping[str, Any]) -> EditResult:
        """Merge values into a component's property map."""
        component = find(self.document, component_id)
        if component is None:
            return Failure(NoOp(NoOpReason.UNKNOWN_ID, component_id))
        merged = {**component.properties, **properties}
        return self._commit(
            "update_properties",
            graph.update(self.document, component_id, {"properties": merged}),
            component_id,
        )

    def bind_property(self, component_id: str, field: str | None) -> EditResult:
        """Bind a component's displayed value to a data field (None unbinds)."""
        return self._commit(
            "bind_property",
            graph.update(self.document, component_id, {"property_binding": field or None}),
            component_id,
        )

    def clear_canvas(self) -> EditResult:
        """Remove every component as one undoable step."""
        self._selected = None
        return self._commit("clear_canvas", Success(EMPTY_SNAPSHOT))

    def load(self, snapshot: Snapshot) -> EditResult:
        """
        Replace the document with another snapshot as one undoable step.

        Raises:
            MalformedSnapshotError: If the snapshot is not a valid scene graph
                (the document and history stay as they were)
        """
        snapshot = tuple(snapshot)
        check_integrity(snapshot)
        self._selected = None
        return self._commit("load", Success(snapshot))

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> EditResult:
        self._reset_ephemeral()
        return self.history.undo()

    def redo(self) -> EditResult:
        self._reset_ephemeral()
        return self.history.redo()

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # ------------------------------------------------------------------
    # Drag / resize preview
    # ------------------------------------------------------------------

    def preview_move(self, component_id: str, x: float, y: float, snap_to_grid: bool | None = None) -> EditResult:
        """Show a component at a new position without committing it."""
        return self._stage(component_id, self._place(x, y, snap_to_grid)._asdict())

    def preview_resize(
        self, component_id: str, width: float, height: float, snap_to_grid: bool | None = None
    ) -> EditResult:
        """Show a component at a new size without committing it."""
        return self._stage(component_id, self._dimensions(width, height, snap_to_grid)._asdict())

    def release(self) -> EditResult:
        """Commit the previewed geometry as a single history entry."""
        if not self._preview:
            return Failure(NoOp(NoOpReason.NO_PREVIEW))
        staged, self._preview = self._preview, {}
        return self._commit("release", graph.update_many(self.document, staged), ", ".join(staged))

    def cancel_preview(self) -> None:
        """Drop the uncommitted geometry; the view snaps back to the document."""
        self._preview = {}

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _stage(self, component_id: str, fields: dict[str, int]) -> EditResult:
        if find(self.document, component_id) is None:
            return Failure(NoOp(NoOpReason.UNKNOWN_ID, component_id))
        self._preview.setdefault(component_id, {}).update(fields)
        return Success(self.view)

    def _commit(self, action: str, result: EditResult, component_id: str | None = None) -> EditResult:
        if isinstance(result, Failure):
            self._log.debug("edit_ignored", action=action, reason=str(result.failure()))
            return result

        snapshot = result.unwrap()
        current = self.document
        if snapshot is current or snapshot == current:
            self._log.debug("edit_unchanged", action=action, component_id=component_id)
            return Failure(NoOp(NoOpReason.UNCHANGED, component_id))

        self.history.commit(snapshot)
        self._log.info(
            "edit_committed",
            action=action,
            component_id=component_id,
            components=len(snapshot),
            cursor=self.history.cursor,
        )
        return Success(snapshot)

    def _reset_ephemeral(self) -> None:
        self._selected = None
        self._preview = {}

    def _snapping(self, snap_to_grid: bool | None) -> bool:
        return self.settings.snap_to_grid if snap_to_grid is None else snap_to_grid

    def _place(self, x: float, y: float, snap_to_grid: bool | None) -> Position:
        if self._snapping(snap_to_grid):
            x = snap(x, self.settings.grid_size)
            y = snap(y, self.settings.grid_size)
        px, py = to_pixels(x), to_pixels(y)
        if self.settings.clamp_to_canvas:
            px, py = clamp_min(px, 0), clamp_min(py, 0)
        return Position(px, py)

    def _dimensions(self, width: float, height: float, snap_to_grid: bool | None) -> Size:
        if self._snapping(snap_to_grid):
            width = snap(width, self.settings.grid_size)
            height = snap(height, self.settings.grid_size)
        return Size(
            clamp_min(to_pixels(width), self.settings.min_width),
            clamp_min(to_pixels(height), self.settings.min_height),
        )
