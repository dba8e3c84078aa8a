"""Layout operations: the editing verbs that commit through history."""

from .editor import Editor, EditResult

__all__ = ["Editor", "EditResult"]
