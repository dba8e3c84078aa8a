"""No-op outcomes for permissive document operations.

Operations on stale ids, redundant undo/redo and similar requests do not
raise. They return ``Failure(NoOp(...))`` so callers can tell "nothing
happened" apart from a real edit without inspecting snapshots.
"""

from dataclasses import dataclass
from enum import Enum


class NoOpReason(str, Enum):
    """Why an operation left the document untouched."""

    UNKNOWN_ID = "unknown_id"
    UNKNOWN_PARENT = "unknown_parent"
    CYCLE = "cycle"
    IMMUTABLE_FIELD = "immutable_field"
    INVALID_FIELD = "invalid_field"
    UNKNOWN_CHECKPOINT = "unknown_checkpoint"
    UNCHANGED = "unchanged"
    NOTHING_TO_UNDO = "nothing_to_undo"
    NOTHING_TO_REDO = "nothing_to_redo"
    NO_SELECTION = "no_selection"
    NO_PREVIEW = "no_preview"


@dataclass(frozen=True)
class NoOp:
    """A document operation that was absorbed instead of applied."""

    reason: NoOpReason
    component_id: str | None = None
    detail: str = ""

    def __str__(self) -> str:
        parts = [self.reason.value]
        if self.component_id is not None:
            parts.append(self.component_id)
        if self.detail:
            parts.append(self.detail)
        return ": ".join(parts)
