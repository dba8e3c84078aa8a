"""Export format keys."""

from enum import Enum


class ExportFormat(str, Enum):
    """Artifact formats the export pipeline produces."""

    SOURCE_CODE = "source-code"
    STRUCTURED_DOCUMENT = "structured-document"
    FUNCTION_TEMPLATE = "function-template"


# Keys the builder UI has historically used for the same formats
LEGACY_ALIASES: dict[str, ExportFormat] = {
    "react": ExportFormat.SOURCE_CODE,
    "json": ExportFormat.STRUCTURED_DOCUMENT,
    "serverless": ExportFormat.FUNCTION_TEMPLATE,
}

ARTIFACT_FILENAMES: dict[ExportFormat, str] = {
    ExportFormat.SOURCE_CODE: "CardComponent.jsx",
    ExportFormat.STRUCTURED_DOCUMENT: "card-config.json",
    ExportFormat.FUNCTION_TEMPLATE: "serverless-function.js",
}
