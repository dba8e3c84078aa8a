"""Scene graph data models."""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, NamedTuple, TypeAlias

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer, ValidationError


def freeze(value: Any) -> Any:
    """Read-only copy of a JSON-like value: mappings become proxies, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Plain mutable copy of a frozen value (dicts and lists)."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


# Stored read-only so committed snapshots (and the history entries sharing
# their components) cannot be changed through a component's property map
Properties = Annotated[
    dict[str, Any],
    AfterValidator(freeze),
    PlainSerializer(thaw, return_type=dict[str, Any]),
]


def _no_properties() -> Mapping[str, Any]:
    return MappingProxyType({})


class ComponentType(str, Enum):
    """Component types the palette offers and the generators understand."""

    TEXT = "text"
    BUTTON = "button"
    IMAGE = "image"
    INPUT = "input"
    DIVIDER = "divider"
    LINK = "link"
    CONTAINER = "container"
    TABLE = "table"


class Position(NamedTuple):
    x: int
    y: int


class Size(NamedTuple):
    width: int
    height: int


class Component(BaseModel):
    """One positioned, sized, layered element of the card.

    Instances are frozen and `properties` is a read-only mapping (nested lists
    become tuples): every edit produces a new Component and a new snapshot
    tuple, so history entries share the components they did not touch.
    `type` is a plain string so that types unknown to the generators still
    round-trip through every scene graph operation.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    id: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    x: int = 0
    y: int = 0
    width: int = 200
    height: int = 100
    z_index: int = Field(default=0, alias="zIndex")
    parent_id: str | None = Field(default=None, alias="parentId")
    properties: Properties = Field(default_factory=_no_properties)
    property_binding: str | None = Field(default=None, alias="propertyBinding")

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def known_type(self) -> ComponentType | None:
        """The ComponentType for this component, or None for foreign types."""
        try:
            return ComponentType(self.type)
        except ValueError:
            return None

    def to_record(self) -> dict[str, Any]:
        """Plain persisted record with camelCase keys."""
        return self.model_dump(by_alias=True)


Snapshot: TypeAlias = tuple[Component, ...]
"""One immutable value of the scene graph, in insertion (array) order."""

EMPTY_SNAPSHOT: Snapshot = ()

# Persisted/camelCase field names accepted wherever partial fields are passed in
FIELD_ALIASES = {
    "zIndex": "z_index",
    "parentId": "parent_id",
    "propertyBinding": "property_binding",
}


def normalize_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase record keys onto model field names."""
    return {FIELD_ALIASES.get(key, key): value for key, value in fields.items()}


def as_position(value: Position | tuple[int, int] | Mapping[str, int]) -> Position:
    """Accept a Position, an (x, y) pair or an {"x": .., "y": ..} mapping."""
    if isinstance(value, Mapping):
        return Position(int(value.get("x", 0)), int(value.get("y", 0)))
    x, y = value
    return Position(int(x), int(y))


def describe_validation_error(error: ValidationError) -> str:
    """First pydantic error as ``field: message``."""
    detail = error.errors()[0]
    location = ".".join(str(part) for part in detail.get("loc", ()))
    message = detail.get("msg", "invalid value")
    return f"{location}: {message}" if location else message
