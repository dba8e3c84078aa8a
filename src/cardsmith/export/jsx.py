"""Source-code generator: HubSpot UI Extension (React) component.

Walks the snapshot in paint order and emits one JSX fragment per
component. Containers wrap the components parented under them. Types
without a dedicated fragment degrade to a labelled placeholder box.
"""

import re
from collections.abc import Callable

from cardsmith.core import get_logger, safe_json_dumps
from cardsmith.scene import Component, ComponentType, Snapshot, paint_order, typed_properties

logger = get_logger(__name__)

INDENT = "  "
BODY_DEPTH = 3
EMPTY_PLACEHOLDER = "<Text>Your card content here</Text>"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
_UNSAFE_TEXT = re.compile(r"[{}<>\n\r]")
_UNSAFE_ATTR = re.compile(r"[\"\\{}\n\r]")

HEADER = """import React from 'react';
import {
  hubspot,
  Text,
  Button,
  Image,
  Divider,
  Flex,
  Box,
  Input,
  Link,
  Table,
  TableHead,
  TableHeader,
  TableBody,
  TableRow,
  TableCell
} from '@hubspot/ui-extensions';

// Define the extension to be run within the HubSpot app
hubspot.extend(({ context, runServerlessFunction, actions }) => (
  <CardExtension
    context={context}
    runServerlessFunction={runServerlessFunction}
    actions={actions}
  />
));

function CardExtension({ context, runServerlessFunction, actions }) {
  // CRM record this card is rendered for
  const objectId = context.crm.objectId;
  const objectTypeId = context.crm.objectTypeId;

  return (
    <Flex direction="column" gap="medium">
"""

FOOTER = """    </Flex>
  );
}
"""


# ============================================================================
# Literal helpers
# ============================================================================


def js_literal(value: object) -> str:
    """JavaScript literal for a JSON-compatible value."""
    return safe_json_dumps(value)


def attr(name: str, value: object) -> str:
    """JSX attribute; falls back to an expression container for awkward strings."""
    if isinstance(value, bool):
        return f"{name}={{{'true' if value else 'false'}}}"
    if isinstance(value, (int, float)):
        return f"{name}={{{value}}}"
    text = str(value)
    if _UNSAFE_ATTR.search(text):
        return f"{name}={{{js_literal(text)}}}"
    return f'{name}="{text}"'


def text_node(value: object) -> str:
    """JSX child text; escaped through an expression container when needed."""
    text = str(value)
    if _UNSAFE_TEXT.search(text):
        return f"{{{js_literal(text)}}}"
    return text


def binding_expression(field: str) -> str:
    """Data-access expression for a bound CRM property."""
    if _IDENTIFIER.match(field):
        return f"{{context.crm.{field}}}"
    return f"{{context.crm[{js_literal(field)}]}}"


def display(component: Component, literal: object) -> str:
    """Bound expression when the component has a binding, escaped literal otherwise."""
    if component.property_binding:
        return binding_expression(component.property_binding)
    return text_node(literal)


# ============================================================================
# Fragments
# ============================================================================

Fragment = Callable[[Component, Snapshot], list[str]]


def _text(component: Component, snapshot: Snapshot) -> list[str]:
    props = typed_properties(component)
    return [
        f"<Text format={{{{ fontWeight: {js_literal(props.font_weight)} }}}}>",
        f"{INDENT}{display(component, props.text)}",
        "</Text>",
    ]


def _button(component: Component, snapshot: Snapshot) -> list[str]:
    props = typed_properties(component)
    return [
        "<Button",
        f"{INDENT}{attr('variant', props.variant)}",
        f"{INDENT}onClick={{() => {{",
        f"{INDENT}{INDENT}// Add your button action here",
        f"{INDENT}{INDENT}console.log('Button clicked');",
        f"{INDENT}}}}}",
        ">",
        f"{INDENT}{display(component, props.label)}",
        "</Button>",
    ]


def _input(component: Component, snapshot: Snapshot) -> list[str]:
    props = typed_properties(component)
    lines = [
        "<Input",
        f"{INDENT}{attr('name', props.name)}",
        f"{INDENT}{attr('label', props.label)}",
        f"{INDENT}{attr('placeholder', props.placeholder)}",
        f"{INDENT}{attr('required', props.required)}",
    ]
    if component.property_binding:
        lines.append(f"{INDENT}value={binding_expression(component.property_binding)}")
    elif props.value:
        lines.append(f"{INDENT}{attr('value', props.value)}")
    lines.append("/>")
    return lines


def _image(component: Component, snapshot: Snapshot) -> list[str]:
    props = typed_properties(component)
    return [
        "<Image",
        f"{INDENT}{attr('src', props.src)}",
        f"{INDENT}{attr('alt', props.alt)}",
        f"{INDENT}{attr('width', component.width)}",
        "/>",
    ]


def _divider(component: Component, snapshot: Snapshot) -> list[str]:
    return ["<Divider />"]


def _link(component: Component, snapshot: Snapshot) -> list[str]:
    props = typed_properties(component)
    return [
        f"<Link {attr('href', props.href)}>",
        f"{INDENT}{display(component, props.text)}",
        "</Link>",
    ]


def _container(component: Component, snapshot: Snapshot) -> list[str]:
    props = typed_properties(component)
    opening = f"<Flex {attr('direction', props.direction)} {attr('gap', props.gap)}"
    nested = [c for c in paint_order(snapshot) if c.parent_id == component.id]
    if not nested:
        return [f"{opening} />"]
    lines = [f"{opening}>"]
    for child in nested:
        lines.extend(INDENT + line for line in render_component(child, snapshot))
    lines.append("</Flex>")
    return lines


def _table(component: Component, snapshot: Snapshot) -> list[str]:
    props = typed_properties(component)
    lines = ["<Table bordered={true}>", f"{INDENT}<TableHead>", f"{INDENT * 2}<TableRow>"]
    for column in props.columns:
        lines.append(f"{INDENT * 3}<TableHeader>{text_node(column.label)}</TableHeader>")
    lines += [f"{INDENT * 2}</TableRow>", f"{INDENT}</TableHead>", f"{INDENT}<TableBody>"]
    for row in props.rows:
        lines.append(f"{INDENT * 2}<TableRow>")
        for column in props.columns:
            lines.append(f"{INDENT * 3}<TableCell>{text_node(row.get(column.property, ''))}</TableCell>")
        lines.append(f"{INDENT * 2}</TableRow>")
    lines += [f"{INDENT}</TableBody>", "</Table>"]
    return lines


def _placeholder(component: Component, snapshot: Snapshot) -> list[str]:
    return [
        "<Box>",
        f"{INDENT}<Text>{text_node(f'{component.type} component')}</Text>",
        "</Box>",
    ]


FRAGMENTS: dict[ComponentType, Fragment] = {
    ComponentType.TEXT: _text,
    ComponentType.BUTTON: _button,
    ComponentType.INPUT: _input,
    ComponentType.IMAGE: _image,
    ComponentType.DIVIDER: _divider,
    ComponentType.LINK: _link,
    ComponentType.CONTAINER: _container,
    ComponentType.TABLE: _table,
}


def render_component(component: Component, snapshot: Snapshot) -> list[str]:
    """JSX lines for one component (and, for containers, its children)."""
    fragment = FRAGMENTS.get(component.known_type, _placeholder)
    return fragment(component, snapshot)


def _is_nested(component: Component, snapshot: Snapshot) -> bool:
    """True when a container parent will render this component."""
    if component.parent_id is None:
        return False
    for candidate in snapshot:
        if candidate.id == component.parent_id:
            return candidate.known_type is ComponentType.CONTAINER
    return False


# ============================================================================
# Generator
# ============================================================================


def generate_source_code(snapshot: Snapshot) -> str:
    """
    Generate a UI Extension component for the card.

    Args:
        snapshot: Scene graph to render (may be empty)

    Returns:
        Complete JSX module text

    Raises:
        InvalidPropertiesError: If a known component type carries properties
            its schema rejects
    """
    prefix = INDENT * BODY_DEPTH
    body: list[str] = []
    for component in paint_order(snapshot):
        if _is_nested(component, snapshot):
            continue
        body.extend(prefix + line for line in render_component(component, snapshot))

    if not body:
        body = [prefix + EMPTY_PLACEHOLDER]

    logger.debug("source_code_generated", components=len(snapshot), lines=len(body))
    return HEADER + "\n".join(body) + "\n" + FOOTER


def generate_extensions_config(card_name: str = "Custom Card") -> str:
    """Extension manifest that registers the generated component as a CRM card."""
    manifest = {
        "extensions": [
            {
                "file": "./extensions/CardComponent.jsx",
                "type": "crm-card",
                "location": "crm.record.tab",
                "title": card_name,
                "description": "Custom card generated with Cardsmith",
                "objectTypes": [
                    {"name": "contacts"},
                    {"name": "companies"},
                    {"name": "deals"},
                    {"name": "tickets"},
                ],
            }
        ]
    }
    return safe_json_dumps(manifest, indent=2)
