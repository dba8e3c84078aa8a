"""ID Generation.

Prefixed ULIDs for scene graph components and editor sessions.

- Sortable: ULIDs order by creation time, so ids double as a creation log
- Prefixed: "cmp_", "sess_" and "ckpt_" (components, sessions, checkpoints) keep logs readable
- Opaque: the engine never parses ids beyond the helpers below
"""

from datetime import datetime
from typing import NewType
from ulid import ULID

ComponentID = NewType("ComponentID", str)
"""Scene graph component identifier"""

SessionID = NewType("SessionID", str)
"""Editor session identifier"""

CheckpointID = NewType("CheckpointID", str)
"""Named document checkpoint identifier"""


class Prefix:
    """ID prefix constants."""

    COMPONENT = "cmp"
    SESSION = "sess"
    CHECKPOINT = "ckpt"


class Generator:
    """ULID generator."""

    def generate(self) -> str:
        """Generate a new ULID."""
        return str(ULID())

    def generate_with_prefix(self, prefix: str) -> str:
        """Generate ULID with type prefix."""
        return f"{prefix}_{self.generate()}"

    def timestamp(self, id_str: str) -> int:
        """Extract timestamp (milliseconds) from ULID."""
        try:
            ulid_str = id_str.split("_")[1] if "_" in id_str else id_str
            return int(ULID.from_str(ulid_str).timestamp * 1000)
        except (ValueError, IndexError):
            return 0


_generator = Generator()


def new_component_id() -> ComponentID:
    """Generate new component ID."""
    return ComponentID(_generator.generate_with_prefix(Prefix.COMPONENT))


def new_session_id() -> SessionID:
    """Generate new editor session ID."""
    return SessionID(_generator.generate_with_prefix(Prefix.SESSION))


def new_checkpoint_id() -> CheckpointID:
    """Generate new checkpoint ID."""
    return CheckpointID(_generator.generate_with_prefix(Prefix.CHECKPOINT))


def is_valid(id_str: str) -> bool:
    """Check if string is a valid (optionally prefixed) ULID."""
    try:
        ulid_part = id_str.split("_")[1] if "_" in id_str else id_str
        if len(ulid_part) != 26:
            return False
        ULID.from_str(ulid_part)
        return True
    except (ValueError, IndexError):
        return False


def is_component_id(id_str: str) -> bool:
    """Check if ID was issued by new_component_id."""
    return id_str.startswith(f"{Prefix.COMPONENT}_") and is_valid(id_str)


def extract_prefix(id_str: str) -> str | None:
    """
    Extract prefix from prefixed ID.

    Args:
        id_str: Prefixed ID string

    Returns:
        Prefix string or None if no prefix
    """
    parts = id_str.split("_")
    return parts[0] if len(parts) == 2 else None


def extract_timestamp(id_str: str) -> datetime | None:
    """Extract creation time from a ULID, or None if it is not one."""
    timestamp_ms = _generator.timestamp(id_str)
    return datetime.fromtimestamp(timestamp_ms / 1000.0) if timestamp_ms > 0 else None
