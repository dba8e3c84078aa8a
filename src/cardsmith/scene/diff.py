"""Snapshot comparison."""

from dataclasses import dataclass, field
from typing import Any

from .models import Component, Snapshot


@dataclass(frozen=True)
class Modification:
    before: Component
    after: Component

    @property
    def changed_fields(self) -> list[str]:
        """Model field names whose values differ."""
        old = self.before.model_dump()
        new = self.after.model_dump()
        return [name for name in old if old[name] != new[name]]


@dataclass(frozen=True)
class SnapshotDiff:
    """What changed between two snapshots, matched by component id."""

    added: list[Component] = field(default_factory=list)
    removed: list[Component] = field(default_factory=list)
    modified: list[Modification] = field(default_factory=list)
    unchanged: list[Component] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        return len(self.added) + len(self.removed) + len(self.modified)

    @property
    def is_empty(self) -> bool:
        return self.total_changes == 0

    def summary(self) -> dict[str, Any]:
        return {
            "total_changes": self.total_changes,
            "added": len(self.added),
            "removed": len(self.removed),
            "modified": len(self.modified),
        }


def diff(before: Snapshot, after: Snapshot) -> SnapshotDiff:
    """Compare two snapshots component by component."""
    before_by_id = {c.id: c for c in before}
    after_ids = {c.id for c in after}

    added: list[Component] = []
    modified: list[Modification] = []
    unchanged: list[Component] = []
    for component in after:
        previous = before_by_id.get(component.id)
        if previous is None:
            added.append(component)
        elif previous is component or previous == component:
            unchanged.append(component)
        else:
            modified.append(Modification(previous, component))

    removed = [c for c in before if c.id not in after_ids]
    return SnapshotDiff(added=added, removed=removed, modified=modified, unchanged=unchanged)
