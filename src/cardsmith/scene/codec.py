"""Snapshot serialization.

The persisted form is a plain JSON array of component records (camelCase
keys, no envelope). Decoding is strict: anything that would not be a
valid scene graph raises MalformedSnapshotError.
"""

from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cardsmith.core import get_logger, safe_json_dumps, MalformedSnapshotError
from cardsmith.core.hash import Algorithm, hash_string
from cardsmith.core.json import JSONParseError, decode_json
from .graph import ancestors
from .models import Component, Snapshot, describe_validation_error

logger = get_logger(__name__)


def to_records(snapshot: Snapshot) -> list[dict[str, Any]]:
    """Snapshot as a list of plain records."""
    return [component.to_record() for component in snapshot]


def dumps(snapshot: Snapshot, indent: int = 0) -> str:
    """Serialize a snapshot to its persisted JSON form."""
    return safe_json_dumps(to_records(snapshot), indent=indent)


def fingerprint(snapshot: Snapshot, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """Content hash of a snapshot; equal snapshots have equal fingerprints."""
    return hash_string(dumps(snapshot), algorithm)


def loads(text: str | bytes) -> Snapshot:
    """
    Parse a persisted snapshot.

    Args:
        text: JSON array of component records

    Returns:
        Validated snapshot

    Raises:
        MalformedSnapshotError: On invalid JSON or an invalid scene graph
    """
    try:
        data = decode_json(text)
    except JSONParseError as e:
        logger.warning("snapshot_decode_failed", error=str(e))
        raise MalformedSnapshotError(str(e)) from e
    return from_records(data)


def from_records(records: Any) -> Snapshot:
    """
    Build a snapshot from already-decoded records.

    Raises:
        MalformedSnapshotError: If records is not a list of valid components
            forming an acyclic graph with unique ids and no dangling parents
    """
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        raise MalformedSnapshotError(f"expected an array of components, got {type(records).__name__}")

    components: list[Component] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise MalformedSnapshotError(f"expected an object, got {type(record).__name__}", index)
        try:
            components.append(Component.model_validate(record))
        except PydanticValidationError as e:
            raise MalformedSnapshotError(describe_validation_error(e), index) from e

    snapshot = tuple(components)
    check_integrity(snapshot)
    return snapshot


def check_integrity(snapshot: Snapshot) -> None:
    """
    Verify a snapshot forms a valid scene graph.

    Raises:
        MalformedSnapshotError: On a non-component entry, a duplicate id, a
            parentId naming no component, or an ancestry cycle
    """
    seen: set[str] = set()
    for index, component in enumerate(snapshot):
        if not isinstance(component, Component):
            raise MalformedSnapshotError(f"expected a Component, got {type(component).__name__}", index)
        if component.id in seen:
            raise MalformedSnapshotError(f"duplicate id {component.id!r}", index)
        seen.add(component.id)

    for index, component in enumerate(snapshot):
        if component.parent_id is not None and component.parent_id not in seen:
            raise MalformedSnapshotError(
                f"parentId {component.parent_id!r} does not reference a component", index
            )

    for index, component in enumerate(snapshot):
        if component.parent_id is None:
            continue
        chain = ancestors(snapshot, component.id)
        if component.parent_id == component.id or _loops(snapshot, chain):
            raise MalformedSnapshotError(f"component {component.id!r} is its own ancestor", index)


def _loops(snapshot: Snapshot, chain: list[str]) -> bool:
    """True when walking the parent chain never reaches a top-level component."""
    if not chain:
        return False
    top = chain[-1]
    for component in snapshot:
        if component.id == top:
            return component.parent_id is not None
    return False

