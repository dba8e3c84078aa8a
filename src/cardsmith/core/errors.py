"""Typed boundary errors.

Internal document mutations never raise; they report no-ops as values.
Everything that crosses into another system (export artifacts, persisted
snapshots) fails fast with one of these.
"""

from collections.abc import Sequence


class CardsmithError(Exception):
    """Base class for boundary errors."""


class UnknownFormatError(CardsmithError):
    """Export was requested for a format no generator handles."""

    def __init__(self, format_key: str, supported: Sequence[str] = ()) -> None:
        self.format_key = format_key
        self.supported = tuple(supported)
        message = f"unsupported export format: {format_key}"
        if self.supported:
            message += f" (expected one of: {', '.join(self.supported)})"
        super().__init__(message)


class MalformedSnapshotError(CardsmithError):
    """Serialized snapshot could not be turned into a valid scene graph."""

    def __init__(self, message: str, index: int | None = None) -> None:
        self.index = index
        if index is not None:
            message = f"record {index}: {message}"
        super().__init__(message)


class InvalidPropertiesError(CardsmithError):
    """Component properties do not fit the schema of their type."""

    def __init__(self, component_id: str, component_type: str, detail: str) -> None:
        self.component_id = component_id
        self.component_type = component_type
        super().__init__(f"invalid properties for {component_type} component {component_id}: {detail}")


__all__ = [
    "CardsmithError",
    "UnknownFormatError",
    "MalformedSnapshotError",
    "InvalidPropertiesError",
]
