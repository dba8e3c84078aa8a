"""Export pipeline: snapshot -> artifact text, one generator per format."""

from .formats import ExportFormat, LEGACY_ALIASES, ARTIFACT_FILENAMES
from .cache import ArtifactCache, ArtifactKey
from .registry import Generator, GeneratorRegistry, Exporter, default_registry, export
from .jsx import generate_source_code, generate_extensions_config
from .card_json import generate_structured_document
from .serverless import generate_function_template

__all__ = [
    "ArtifactCache",
    "ArtifactKey",
    "ExportFormat",
    "LEGACY_ALIASES",
    "ARTIFACT_FILENAMES",
    "Generator",
    "GeneratorRegistry",
    "Exporter",
    "default_registry",
    "export",
    "generate_source_code",
    "generate_extensions_config",
    "generate_structured_document",
    "generate_function_template",
]
