"""Pytest configuration and fixtures."""

import os

import pytest

from cardsmith.core import Settings, configure_logging
from cardsmith.export import Exporter, default_registry
from cardsmith.layout import Editor
from cardsmith.scene import ComponentType, Component


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["CARDSMITH_LOG_LEVEL"] = "DEBUG"
    os.environ["CARDSMITH_ENABLE_EXPORT_CACHE"] = "false"
    configure_logging(level="DEBUG")


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Settings with the documented defaults (grid 20, floor 50x30, default size 200x100)."""
    return Settings()


@pytest.fixture
def editor(settings):
    """Fresh editing session on an empty document."""
    return Editor(settings=settings)


@pytest.fixture
def free_editor(settings):
    """Editing session with grid snapping off by default."""
    return Editor(settings=settings.model_copy(update={"snap_to_grid": False}))


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def exporter(registry):
    return Exporter(registry=registry, cache_size=8, enable_cache=True)


# ============================================================================
# Data Fixtures
# ============================================================================

def make_component(id: str, type: str = "text", **fields) -> Component:
    """Component with explicit id; remaining fields use model defaults."""
    return Component(id=id, type=type, **fields)


@pytest.fixture
def component_factory():
    """Factory for components with explicit ids."""
    return make_component


@pytest.fixture
def layered_snapshot():
    """Two top-level components A (z=0) and B (z=1)."""
    return (
        make_component("a", z_index=0, properties={"text": "A"}),
        make_component("b", z_index=1, properties={"text": "B"}),
    )


@pytest.fixture
def nested_snapshot():
    """Container c holding d, which holds e; f is unrelated."""
    return (
        make_component("c", ComponentType.CONTAINER.value, z_index=0),
        make_component("d", ComponentType.CONTAINER.value, z_index=1, parent_id="c"),
        make_component("e", z_index=2, parent_id="d", properties={"text": "deep"}),
        make_component("f", ComponentType.BUTTON.value, z_index=3),
    )


@pytest.fixture
def every_type_snapshot():
    """One component of every known type, one foreign type, and a bound text."""
    components = [
        make_component(f"{component_type.value}-1", component_type.value, z_index=i)
        for i, component_type in enumerate(ComponentType)
    ]
    components.append(make_component("chart-1", "chart", z_index=len(components)))
    components.append(
        make_component(
            "bound-1",
            "text",
            z_index=len(components),
            properties={"text": "literal"},
            property_binding="firstname",
        )
    )
    return tuple(components)
