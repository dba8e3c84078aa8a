"""Scene graph operations.

Every function takes a snapshot and returns a new one; nothing is mutated
in place. Components the operation does not touch are carried over by
reference, so successive history entries share most of their structure.

Operations that cannot apply (stale id, cycle, ...) return
``Failure(NoOp(...))`` instead of raising.
"""

from collections import deque
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure, Result, Success

from cardsmith.core import get_logger
from cardsmith.core.id import ComponentID, new_component_id
from .models import (
    Component,
    Position,
    Size,
    Snapshot,
    as_position,
    describe_validation_error,
    normalize_fields,
)
from .noop import NoOp, NoOpReason

logger = get_logger(__name__)

DEFAULT_SIZE = Size(200, 100)

SnapshotResult = Result[Snapshot, NoOp]


class Direction(str, Enum):
    """Re-layer direction."""

    FRONT = "front"
    BACK = "back"


# ============================================================================
# Queries
# ============================================================================


def find(snapshot: Snapshot, component_id: str) -> Component | None:
    """Component with the given id, or None."""
    for component in snapshot:
        if component.id == component_id:
            return component
    return None


def index_of(snapshot: Snapshot, component_id: str) -> int:
    """Array position of the component, or -1."""
    for i, component in enumerate(snapshot):
        if component.id == component_id:
            return i
    return -1


def children(snapshot: Snapshot, component_id: str) -> list[Component]:
    """Direct children in array order."""
    return [c for c in snapshot if c.parent_id == component_id]


def descendants(snapshot: Snapshot, component_id: str) -> set[str]:
    """Ids of all direct and transitive descendants (excluding the component itself)."""
    by_parent: dict[str, list[str]] = {}
    for component in snapshot:
        if component.parent_id is not None:
            by_parent.setdefault(component.parent_id, []).append(component.id)

    found: set[str] = set()
    queue = deque(by_parent.get(component_id, []))
    while queue:
        current = queue.popleft()
        if current in found or current == component_id:
            continue
        found.add(current)
        queue.extend(by_parent.get(current, []))
    return found


def ancestors(snapshot: Snapshot, component_id: str) -> list[str]:
    """Parent chain from the direct parent upwards. Stops at a repeated id."""
    by_id = {c.id: c for c in snapshot}
    chain: list[str] = []
    seen = {component_id}
    current = by_id.get(component_id)
    while current is not None and current.parent_id is not None:
        if current.parent_id in seen:
            break
        chain.append(current.parent_id)
        seen.add(current.parent_id)
        current = by_id.get(current.parent_id)
    return chain


def paint_order(snapshot: Snapshot) -> list[Component]:
    """Components sorted by zIndex; ties keep array order."""
    return sorted(snapshot, key=lambda c: c.z_index)


def next_z_index(snapshot: Snapshot) -> int:
    """zIndex for a component that should paint above everything else."""
    return max((c.z_index for c in snapshot), default=-1) + 1


# ============================================================================
# Mutations
# ============================================================================


def add(
    snapshot: Snapshot,
    type: str,
    properties: Mapping[str, Any] | None = None,
    position: Position | tuple[int, int] | Mapping[str, int] = Position(0, 0),
    size: Size | tuple[int, int] = DEFAULT_SIZE,
    component_id: str | None = None,
) -> tuple[Snapshot, ComponentID]:
    """
    Append a component.

    The new zIndex is the snapshot length, which puts it on top unless
    existing components were re-layered above that value.

    Returns:
        (new snapshot, id of the new component)
    """
    new_id = ComponentID(component_id) if component_id else new_component_id()
    x, y = as_position(position)
    width, height = size
    component = Component(
        id=new_id,
        type=type,
        x=x,
        y=y,
        width=width,
        height=height,
        # zIndex = array length, not max + 1: a drop after re-layering can land under older items
        z_index=len(snapshot),
        properties=dict(properties or {}),
    )
    logger.debug("component_added", component_id=new_id, type=type, x=x, y=y)
    return snapshot + (component,), new_id


def remove(snapshot: Snapshot, component_id: str) -> SnapshotResult:
    """Remove a component and, recursively, everything parented under it."""
    if find(snapshot, component_id) is None:
        return Failure(NoOp(NoOpReason.UNKNOWN_ID, component_id))

    doomed = descendants(snapshot, component_id) | {component_id}
    logger.debug("component_removed", component_id=component_id, cascade=len(doomed) - 1)
    return Success(tuple(c for c in snapshot if c.id not in doomed))


def update(snapshot: Snapshot, component_id: str, fields: Mapping[str, Any]) -> SnapshotResult:
    """
    Shallow-merge fields into a component.

    Field names may be model names (``z_index``) or record keys (``zIndex``).
    ``id`` cannot change; a ``parent_id`` change is checked like ``reparent``.
    """
    index = index_of(snapshot, component_id)
    if index < 0:
        return Failure(NoOp(NoOpReason.UNKNOWN_ID, component_id))

    changes = normalize_fields(fields)
    if changes.get("id", component_id) != component_id:
        return Failure(NoOp(NoOpReason.IMMUTABLE_FIELD, component_id, "id"))

    if "parent_id" in changes:
        problem = _parent_problem(snapshot, component_id, changes["parent_id"])
        if problem is not None:
            return Failure(problem)

    current = snapshot[index]
    try:
        merged = Component.model_validate({**current.model_dump(), **changes})
    except PydanticValidationError as e:
        return Failure(NoOp(NoOpReason.INVALID_FIELD, component_id, describe_validation_error(e)))
    if merged == current:
        return Success(snapshot)
    return Success(_replace_at(snapshot, index, merged))


def update_many(snapshot: Snapshot, changes: Mapping[str, Mapping[str, Any]]) -> SnapshotResult:
    """Apply several updates as one snapshot change; stale ids are skipped."""
    result = snapshot
    applied = 0
    for component_id, fields in changes.items():
        outcome = update(result, component_id, fields)
        if isinstance(outcome, Success):
            result = outcome.unwrap()
            applied += 1
    if applied == 0:
        return Failure(NoOp(NoOpReason.UNKNOWN_ID, detail=", ".join(changes)))
    return Success(result)


def reorder(snapshot: Snapshot, component_id: str, direction: Direction | str) -> SnapshotResult:
    """Move a component above (front) or below (back) every other component."""
    index = index_of(snapshot, component_id)
    if index < 0:
        return Failure(NoOp(NoOpReason.UNKNOWN_ID, component_id))

    z_values = [c.z_index for c in snapshot]
    if Direction(direction) is Direction.FRONT:
        z_index = max(z_values) + 1
    else:
        z_index = min(z_values) - 1

    moved = snapshot[index].model_copy(update={"z_index": z_index})
    return Success(_replace_at(snapshot, index, moved))


def reparent(snapshot: Snapshot, component_id: str, parent_id: str | None) -> SnapshotResult:
    """Nest a component under another one, or make it top-level with None."""
    index = index_of(snapshot, component_id)
    if index < 0:
        return Failure(NoOp(NoOpReason.UNKNOWN_ID, component_id))

    problem = _parent_problem(snapshot, component_id, parent_id)
    if problem is not None:
        return Failure(problem)

    if snapshot[index].parent_id == parent_id:
        return Success(snapshot)
    nested = snapshot[index].model_copy(update={"parent_id": parent_id})
    return Success(_replace_at(snapshot, index, nested))


def duplicate(
    snapshot: Snapshot,
    component_id: str,
    offset: Position | tuple[int, int] = Position(20, 20),
) -> Result[tuple[Snapshot, ComponentID], NoOp]:
    """Copy a component (not its children) next to the original, on top of the paint order."""
    original = find(snapshot, component_id)
    if original is None:
        return Failure(NoOp(NoOpReason.UNKNOWN_ID, component_id))

    dx, dy = offset
    new_id = new_component_id()
    copy = original.model_copy(
        update={
            "id": new_id,
            "x": original.x + dx,
            "y": original.y + dy,
            "z_index": next_z_index(snapshot),
        }
    )
    return Success((snapshot + (copy,), new_id))


# ============================================================================
# Helpers
# ============================================================================


def _replace_at(snapshot: Snapshot, index: int, component: Component) -> Snapshot:
    return snapshot[:index] + (component,) + snapshot[index + 1:]


def _parent_problem(snapshot: Snapshot, component_id: str, parent_id: str | None) -> NoOp | None:
    """Reason a parent assignment would corrupt the graph, or None if it is fine."""
    if parent_id is None:
        return None
    if parent_id == component_id:
        return NoOp(NoOpReason.CYCLE, component_id, "component cannot contain itself")
    if find(snapshot, parent_id) is None:
        return NoOp(NoOpReason.UNKNOWN_PARENT, component_id, parent_id)
    if parent_id in descendants(snapshot, component_id):
        return NoOp(NoOpReason.CYCLE, component_id, f"{parent_id} is a descendant")
    return None
