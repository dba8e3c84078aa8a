"""Cardsmith: document/history engine and export pipeline for CRM card layouts."""

from cardsmith.core import (
    CardsmithError,
    MalformedSnapshotError,
    UnknownFormatError,
    InvalidPropertiesError,
    Settings,
    configure_logging,
    create_container,
    get_settings,
)
from cardsmith.scene import Component, ComponentType, NoOp, NoOpReason, Snapshot, EMPTY_SNAPSHOT
from cardsmith.history import History, VersionStore
from cardsmith.layout import Editor
from cardsmith.export import ExportFormat, Exporter, GeneratorRegistry

__version__ = "0.1.0"

__all__ = [
    "CardsmithError",
    "MalformedSnapshotError",
    "UnknownFormatError",
    "InvalidPropertiesError",
    "Settings",
    "configure_logging",
    "create_container",
    "get_settings",
    "Component",
    "ComponentType",
    "NoOp",
    "NoOpReason",
    "Snapshot",
    "EMPTY_SNAPSHOT",
    "History",
    "VersionStore",
    "Editor",
    "ExportFormat",
    "Exporter",
    "GeneratorRegistry",
]
