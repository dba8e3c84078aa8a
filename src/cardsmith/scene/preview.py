"""Data-binding resolution for preview and export.

The data provider hands over a flat string-keyed map. A bound component
reads exactly one key from it; the binding wins over any literal value.
"""

from collections.abc import Mapping
from typing import Any

from .models import Component, Snapshot

# Literal property keys that carry a component's displayed value, in lookup order
VALUE_KEYS = ("text", "value", "label")


def literal_value(component: Component) -> Any:
    """The displayed literal value from the component's own properties."""
    for key in VALUE_KEYS:
        value = component.properties.get(key)
        if value:
            return value
    return None


def resolve_value(component: Component, data: Mapping[str, Any]) -> Any:
    """Displayed value: the bound data field if a binding is set, else the literal."""
    if component.property_binding:
        return data.get(component.property_binding)
    return literal_value(component)


def resolve_values(snapshot: Snapshot, data: Mapping[str, Any]) -> dict[str, Any]:
    """Displayed value for every component, keyed by id."""
    return {component.id: resolve_value(component, data) for component in snapshot}

