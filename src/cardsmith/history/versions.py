"""Named document checkpoints.

A VersionStore keeps labelled copies of documents for the session, newest
first, next to the linear undo history. Restoring a checkpoint goes through
Editor.load, so it is one more undoable edit rather than a jump in history.
"""

from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from returns.result import Failure, Result, Success

from cardsmith.core import get_logger
from cardsmith.core.id import new_checkpoint_id
from cardsmith.scene import Component, NoOp, NoOpReason, Snapshot, SnapshotDiff, check_integrity, diff

if TYPE_CHECKING:
    from cardsmith.layout import Editor

logger = get_logger(__name__)

AUTOSAVE_PREFIX = "Auto-save"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Checkpoint(BaseModel):
    """A labelled copy of a document."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    snapshot: tuple[Component, ...] = Field(default_factory=tuple)
    tags: tuple[str, ...] = ()
    created_at: datetime
    updated_at: datetime | None = None

    def matches(self, query: str) -> bool:
        """Case-insensitive match on name, description or any tag."""
        needle = query.lower()
        return (
            needle in self.name.lower()
            or needle in self.description.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


CheckpointResult = Result[Checkpoint, NoOp]


class VersionStore:
    """
    In-memory checkpoints for one editing session.

    Examples:
        >>> versions = VersionStore()
        >>> checkpoint = versions.create(editor.document, "Before redesign")
        >>> editor.clear_canvas()
        >>> versions.restore(checkpoint.id, editor)
        <Success: ...>
    """

    def __init__(
        self,
        autosave_interval: float = 300,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Initialize the store.

        Args:
            autosave_interval: Minimum seconds between automatic checkpoints
            clock: Source of creation timestamps
        """
        self.autosave_interval = timedelta(seconds=autosave_interval)
        self._clock = clock
        self._checkpoints: list[Checkpoint] = []
        self.active_id: str | None = None

    def create(
        self,
        snapshot: Snapshot,
        name: str | None = None,
        description: str = "",
        tags: Iterable[str] = (),
    ) -> Checkpoint:
        """
        Record a checkpoint of a document and make it the active one.

        Raises:
            MalformedSnapshotError: If the snapshot is not a valid scene graph
        """
        snapshot = tuple(snapshot)
        check_integrity(snapshot)

        now = self._clock()
        checkpoint = Checkpoint(
            id=new_checkpoint_id(),
            name=name or f"Snapshot {now:%Y-%m-%d %H:%M:%S}",
            description=description,
            snapshot=snapshot,
            tags=tuple(tags),
            created_at=now,
        )
        self._checkpoints.insert(0, checkpoint)
        self.active_id = checkpoint.id
        logger.info(
            "checkpoint_created",
            checkpoint_id=checkpoint.id,
            name=checkpoint.name,
            components=len(snapshot),
        )
        return checkpoint

    def get(self, checkpoint_id: str) -> Checkpoint | None:
        for checkpoint in self._checkpoints:
            if checkpoint.id == checkpoint_id:
                return checkpoint
        return None

    def list_all(self) -> list[Checkpoint]:
        """Checkpoints, newest first."""
        return sorted(self._checkpoints, key=lambda c: c.created_at, reverse=True)

    def search(self, query: str) -> list[Checkpoint]:
        return [checkpoint for checkpoint in self.list_all() if checkpoint.matches(query)]

    def update(
        self,
        checkpoint_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> CheckpointResult:
        """Rename a checkpoint or change its description."""
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = name
        if description is not None:
            changes["description"] = description
        return self._revise(checkpoint_id, changes)

    def add_tag(self, checkpoint_id: str, tag: str) -> CheckpointResult:
        checkpoint = self.get(checkpoint_id)
        if checkpoint is None:
            return Failure(NoOp(NoOpReason.UNKNOWN_CHECKPOINT, checkpoint_id))
        if tag in checkpoint.tags:
            return Failure(NoOp(NoOpReason.UNCHANGED, checkpoint_id, tag))
        return self._revise(checkpoint_id, {"tags": checkpoint.tags + (tag,)})

    def remove_tag(self, checkpoint_id: str, tag: str) -> CheckpointResult:
        checkpoint = self.get(checkpoint_id)
        if checkpoint is None:
            return Failure(NoOp(NoOpReason.UNKNOWN_CHECKPOINT, checkpoint_id))
        if tag not in checkpoint.tags:
            return Failure(NoOp(NoOpReason.UNCHANGED, checkpoint_id, tag))
        return self._revise(checkpoint_id, {"tags": tuple(t for t in checkpoint.tags if t != tag)})

    def delete(self, checkpoint_id: str) -> CheckpointResult:
        """Drop a checkpoint; the active marker is cleared if it pointed there."""
        checkpoint = self.get(checkpoint_id)
        if checkpoint is None:
            return Failure(NoOp(NoOpReason.UNKNOWN_CHECKPOINT, checkpoint_id))
        self._checkpoints.remove(checkpoint)
        if self.active_id == checkpoint_id:
            self.active_id = None
        logger.info("checkpoint_deleted", checkpoint_id=checkpoint_id)
        return Success(checkpoint)

    def clear(self) -> None:
        self._checkpoints.clear()
        self.active_id = None

    def compare(self, first_id: str, second_id: str) -> Result[SnapshotDiff, NoOp]:
        """What changed going from the first checkpoint to the second."""
        first, second = self.get(first_id), self.get(second_id)
        if first is None:
            return Failure(NoOp(NoOpReason.UNKNOWN_CHECKPOINT, first_id))
        if second is None:
            return Failure(NoOp(NoOpReason.UNKNOWN_CHECKPOINT, second_id))
        return Success(diff(first.snapshot, second.snapshot))

    def restore(self, checkpoint_id: str, editor: "Editor") -> Result[Snapshot, NoOp]:
        """Load a checkpoint into an editor as a single undoable edit."""
        checkpoint = self.get(checkpoint_id)
        if checkpoint is None:
            return Failure(NoOp(NoOpReason.UNKNOWN_CHECKPOINT, checkpoint_id))

        result = editor.load(checkpoint.snapshot)
        self.active_id = checkpoint.id
        logger.info("checkpoint_restored", checkpoint_id=checkpoint_id, session_id=editor.session_id)
        return result

    def autosave(self, snapshot: Snapshot) -> Checkpoint | None:
        """
        Checkpoint the document unless the last automatic checkpoint is recent.

        Returns:
            The new checkpoint, or None when skipped
        """
        now = self._clock()
        last = next((c for c in self.list_all() if c.name.startswith(AUTOSAVE_PREFIX)), None)
        if last is not None and now - last.created_at <= self.autosave_interval:
            return None
        return self.create(snapshot, f"{AUTOSAVE_PREFIX} {now:%H:%M:%S}", "Automatic backup")

    def _revise(self, checkpoint_id: str, changes: dict[str, Any]) -> CheckpointResult:
        for index, checkpoint in enumerate(self._checkpoints):
            if checkpoint.id == checkpoint_id:
                break
        else:
            return Failure(NoOp(NoOpReason.UNKNOWN_CHECKPOINT, checkpoint_id))

        if not changes:
            return Failure(NoOp(NoOpReason.UNCHANGED, checkpoint_id))

        revised = checkpoint.model_copy(update={**changes, "updated_at": self._clock()})
        self._checkpoints[index] = revised
        return Success(revised)

    def __len__(self) -> int:
        return len(self._checkpoints)


__all__ = ["AUTOSAVE_PREFIX", "Checkpoint", "VersionStore"]
