"""Per-type property schemas.

The scene graph stores properties as an open map. The schemas below are
applied lazily, only where a generator reads the fields, so a component
with odd properties can still be moved, resized and undone freely.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from cardsmith.core import InvalidPropertiesError
from .models import Component, ComponentType, thaw


class ComponentProperties(BaseModel):
    """Base schema: extra keys are kept, known keys are type-checked."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class TextProperties(ComponentProperties):
    text: str = "Text content"
    font_weight: str = Field(default="regular", alias="fontWeight")
    font_size: str | int | None = Field(default=None, alias="fontSize")
    color: str | None = None


class ButtonProperties(ComponentProperties):
    label: str = "Button"
    variant: str = "primary"
    url: str = ""


class ImageProperties(ComponentProperties):
    src: str = "https://via.placeholder.com/300x200"
    alt: str = "Image"


class InputProperties(ComponentProperties):
    name: str = "inputField"
    label: str = "Input Field"
    placeholder: str = "Enter text..."
    required: bool = False
    value: str = ""


class DividerProperties(ComponentProperties):
    pass


class LinkProperties(ComponentProperties):
    text: str = "Link"
    href: str = "#"


class ContainerProperties(ComponentProperties):
    direction: Literal["row", "column"] = "column"
    gap: str = "medium"


class TableColumn(BaseModel):
    label: str
    property: str


class TableProperties(ComponentProperties):
    title: str = "Data Table"
    columns: list[TableColumn] = Field(
        default_factory=lambda: [
            TableColumn(label="Column 1", property="col1"),
            TableColumn(label="Column 2", property="col2"),
        ]
    )
    rows: list[dict[str, Any]] = Field(default_factory=list)


PROPERTY_SCHEMAS: dict[ComponentType, type[ComponentProperties]] = {
    ComponentType.TEXT: TextProperties,
    ComponentType.BUTTON: ButtonProperties,
    ComponentType.IMAGE: ImageProperties,
    ComponentType.INPUT: InputProperties,
    ComponentType.DIVIDER: DividerProperties,
    ComponentType.LINK: LinkProperties,
    ComponentType.CONTAINER: ContainerProperties,
    ComponentType.TABLE: TableProperties,
}


def typed_properties(component: Component) -> ComponentProperties | dict[str, Any]:
    """
    Validate a component's properties against the schema for its type.

    Args:
        component: Component whose properties a generator is about to read

    Returns:
        Schema instance for known types, the raw property map for foreign types

    Raises:
        InvalidPropertiesError: If a known type's properties do not fit its schema
    """
    component_type = component.known_type
    if component_type is None:
        return thaw(component.properties)

    schema = PROPERTY_SCHEMAS[component_type]
    try:
        return schema.model_validate(thaw(component.properties))
    except PydanticValidationError as e:
        raise InvalidPropertiesError(component.id, component.type, str(e)) from e
