"""Structured-document generator: legacy CRM card JSON.

Produces a declarative card definition (sections and actions) plus the
``fetch`` block describing which record properties the data endpoint receives.
"""

from typing import Any
from collections.abc import Callable

from cardsmith.core import get_logger, safe_json_dumps
from cardsmith.scene import Component, ComponentType, Snapshot, paint_order, typed_properties

logger = get_logger(__name__)

CARD_TITLE = "Custom Card"
EMPTY_SECTION = {"type": "text", "text": "Add components to generate card structure"}

ACTIONS = [
    {
        "type": "IFRAME",
        "width": 800,
        "height": 600,
        "url": "https://your-app-url.com/action",
        "label": "Custom Action",
    }
]

FETCH = {
    "targetUrl": "https://your-api-endpoint.com/card-data",
    "objectTypes": [
        {"name": "contacts", "propertiesToSend": ["email", "firstname", "lastname", "phone"]},
        {"name": "companies", "propertiesToSend": ["name", "domain", "industry"]},
        {"name": "deals", "propertiesToSend": ["dealname", "amount", "dealstage"]},
        {"name": "tickets", "propertiesToSend": ["subject", "hs_ticket_priority", "hs_pipeline_stage"]},
    ],
}


def token(component: Component, literal: Any) -> Any:
    """``{field}`` placeholder for bound components, the literal value otherwise."""
    if component.property_binding:
        return f"{{{component.property_binding}}}"
    return literal


def _text(component: Component) -> dict[str, Any]:
    props = typed_properties(component)
    return {
        "type": "text",
        "text": token(component, props.text),
        "format": "markdown" if props.font_weight == "bold" else "text",
    }


def _button(component: Component) -> dict[str, Any]:
    props = typed_properties(component)
    return {"type": "button", "text": token(component, props.label), "variant": props.variant}


def _image(component: Component) -> dict[str, Any]:
    props = typed_properties(component)
    return {
        "type": "image",
        "src": props.src,
        "alt": props.alt,
        "width": component.width,
        "height": component.height,
    }


def _divider(component: Component) -> dict[str, Any]:
    return {"type": "divider"}


def _link(component: Component) -> dict[str, Any]:
    props = typed_properties(component)
    return {"type": "link", "text": token(component, props.text), "url": props.href}


def _table(component: Component) -> dict[str, Any]:
    props = typed_properties(component)
    return {
        "type": "table",
        "columns": [column.model_dump() for column in props.columns],
        "rows": props.rows,
    }


def _placeholder(component: Component) -> dict[str, Any]:
    return {"type": "text", "text": f"{component.type} component"}


# Legacy cards have no input or container sections; those fall back to the placeholder
SECTIONS: dict[ComponentType, Callable[[Component], dict[str, Any]]] = {
    ComponentType.TEXT: _text,
    ComponentType.BUTTON: _button,
    ComponentType.IMAGE: _image,
    ComponentType.DIVIDER: _divider,
    ComponentType.LINK: _link,
    ComponentType.TABLE: _table,
}


def render_section(component: Component) -> dict[str, Any]:
    section = SECTIONS.get(component.known_type, _placeholder)
    return section(component)


def build_document(snapshot: Snapshot) -> dict[str, Any]:
    """Card definition as a plain dict (sections in paint order)."""
    sections = [render_section(component) for component in paint_order(snapshot)]
    return {
        "type": "custom-card",
        "data": {
            "title": CARD_TITLE,
            "sections": sections or [dict(EMPTY_SECTION)],
            "actions": [dict(action) for action in ACTIONS],
        },
        "fetch": FETCH,
    }


def generate_structured_document(snapshot: Snapshot) -> str:
    """
    Generate the legacy card JSON document.

    Raises:
        InvalidPropertiesError: If a known component type carries properties
            its schema rejects
    """
    document = build_document(snapshot)
    logger.debug("structured_document_generated", sections=len(document["data"]["sections"]))
    return safe_json_dumps(document, indent=2)
