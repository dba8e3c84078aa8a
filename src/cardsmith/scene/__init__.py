"""Scene graph: component model, geometry and pure snapshot operations."""

from .models import (
    Component,
    ComponentType,
    Position,
    Size,
    Snapshot,
    EMPTY_SNAPSHOT,
    freeze,
    thaw,
)
from .noop import NoOp, NoOpReason
from .geometry import snap, clamp_min, to_pixels
from .graph import (
    Direction,
    DEFAULT_SIZE,
    add,
    remove,
    update,
    update_many,
    reorder,
    reparent,
    duplicate,
    find,
    children,
    descendants,
    ancestors,
    paint_order,
    next_z_index,
)
from .schemas import PROPERTY_SCHEMAS, typed_properties
from .palette import DEFAULT_PROPERTIES, default_properties, with_defaults
from .codec import check_integrity, dumps, loads, from_records, to_records, fingerprint
from .diff import SnapshotDiff, Modification, diff
from .preview import resolve_value, resolve_values

__all__ = [
    # Model
    "Component",
    "ComponentType",
    "Position",
    "Size",
    "Snapshot",
    "EMPTY_SNAPSHOT",
    "freeze",
    "thaw",
    "NoOp",
    "NoOpReason",
    # Geometry
    "snap",
    "clamp_min",
    "to_pixels",
    # Operations
    "Direction",
    "DEFAULT_SIZE",
    "add",
    "remove",
    "update",
    "update_many",
    "reorder",
    "reparent",
    "duplicate",
    "find",
    "children",
    "descendants",
    "ancestors",
    "paint_order",
    "next_z_index",
    # Properties
    "PROPERTY_SCHEMAS",
    "typed_properties",
    "DEFAULT_PROPERTIES",
    "default_properties",
    "with_defaults",
    # Persistence
    "check_integrity",
    "dumps",
    "loads",
    "from_records",
    "to_records",
    "fingerprint",
    # Comparison
    "SnapshotDiff",
    "Modification",
    "diff",
    # Binding
    "resolve_value",
    "resolve_values",
]
