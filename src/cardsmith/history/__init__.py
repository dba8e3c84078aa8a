"""Undo/redo history and named checkpoints."""

from .manager import History
from .versions import AUTOSAVE_PREFIX, Checkpoint, VersionStore

__all__ = ["History", "AUTOSAVE_PREFIX", "Checkpoint", "VersionStore"]
