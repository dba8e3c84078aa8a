"""Linear undo/redo history over scene graph snapshots.

The log is a list of committed snapshots plus a cursor. Undo and redo only
move the cursor. Committing after an undo truncates everything past the
cursor first, so there is never more than one future (no branching).
"""

from returns.result import Failure, Result, Success

from cardsmith.core import get_logger
from cardsmith.scene import EMPTY_SNAPSHOT, NoOp, NoOpReason, Snapshot

logger = get_logger(__name__)


class History:
    """
    Committed snapshots and the cursor into them.

    States:
    - Initial: one snapshot (empty by default), cursor 0
    - Edited: cursor anywhere in [0, len - 1]

    Examples:
        >>> history = History()
        >>> history.commit((component,))
        >>> history.undo().unwrap()
        ()
        >>> history.can_redo()
        True
    """

    def __init__(self, initial: Snapshot = EMPTY_SNAPSHOT, max_entries: int | None = None) -> None:
        """
        Initialize history.

        Args:
            initial: Snapshot at cursor 0
            max_entries: Keep at most this many entries, evicting the oldest
                (None or 0 = unbounded)
        """
        if max_entries is not None and max_entries < 0:
            raise ValueError("max_entries must be >= 0")

        self.max_entries = max_entries or None
        self._entries: list[Snapshot] = [initial]
        self._cursor = 0

    @property
    def current(self) -> Snapshot:
        """Snapshot at the cursor."""
        return self._entries[self._cursor]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> tuple[Snapshot, ...]:
        return tuple(self._entries)

    def commit(self, snapshot: Snapshot) -> Snapshot:
        """
        Append a snapshot after the cursor and move the cursor onto it.

        Entries past the cursor (undone edits) are discarded first.

        Returns:
            The committed snapshot
        """
        discarded = len(self._entries) - (self._cursor + 1)
        del self._entries[self._cursor + 1:]
        self._entries.append(snapshot)
        self._cursor = len(self._entries) - 1

        evicted = 0
        if self.max_entries is not None and len(self._entries) > self.max_entries:
            evicted = len(self._entries) - self.max_entries
            del self._entries[:evicted]
            self._cursor -= evicted

        logger.debug(
            "history_commit",
            cursor=self._cursor,
            entries=len(self._entries),
            discarded=discarded,
            evicted=evicted,
        )
        return snapshot

    def undo(self) -> Result[Snapshot, NoOp]:
        """Step the cursor back; no-op at the oldest entry."""
        if not self.can_undo():
            return Failure(NoOp(NoOpReason.NOTHING_TO_UNDO))
        self._cursor -= 1
        logger.debug("history_undo", cursor=self._cursor)
        return Success(self.current)

    def redo(self) -> Result[Snapshot, NoOp]:
        """Step the cursor forward; no-op at the newest entry."""
        if not self.can_redo():
            return Failure(NoOp(NoOpReason.NOTHING_TO_REDO))
        self._cursor += 1
        logger.debug("history_redo", cursor=self._cursor)
        return Success(self.current)

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)
