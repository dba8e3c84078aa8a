"""Palette defaults for newly dropped components."""

from typing import Any

from .models import ComponentType

DEFAULT_PROPERTIES: dict[str, dict[str, Any]] = {
    ComponentType.TEXT.value: {"text": "Enter text here", "fontSize": "medium"},
    ComponentType.BUTTON.value: {"label": "Click me", "variant": "primary", "url": ""},
    ComponentType.IMAGE.value: {"src": "https://via.placeholder.com/300x200", "alt": "Image"},
    ComponentType.INPUT.value: {"name": "inputField", "label": "Input Field", "placeholder": "Enter text..."},
    ComponentType.DIVIDER.value: {},
    ComponentType.LINK.value: {"text": "Link", "href": "#"},
    ComponentType.CONTAINER.value: {"direction": "column", "gap": "medium"},
    ComponentType.TABLE.value: {
        "title": "New Table",
        "columns": [
            {"label": "Column 1", "property": "col1"},
            {"label": "Column 2", "property": "col2"},
        ],
        "rows": [],
    },
}


def default_properties(component_type: str) -> dict[str, Any]:
    """Fresh copy of the palette defaults for a type (empty for foreign types)."""
    defaults = DEFAULT_PROPERTIES.get(component_type, {})
    return {
        key: [dict(item) for item in value] if isinstance(value, list) else value
        for key, value in defaults.items()
    }


def with_defaults(component_type: str, properties: dict[str, Any] | None) -> dict[str, Any]:
    """Palette defaults overlaid with caller-provided properties."""
    merged = default_properties(component_type)
    merged.update(properties or {})
    return merged
