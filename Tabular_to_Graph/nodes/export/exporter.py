"""
Export dispatch module for the Tabular to Graph converter.
This module selects the emitter for a format and turns export failures into a user-facing message.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from langchain_core.runnables import RunnableConfig

from Tabular_to_Graph.app_state import ExportState
from Tabular_to_Graph.errors import DatasetNotFound, GraphExportError
from Tabular_to_Graph.models.mapping import NodeMapping, RelationshipMapping
from Tabular_to_Graph.models.registry import DatasetRegistry
from Tabular_to_Graph.models.tabular import TabularDataset
from Tabular_to_Graph.nodes.export.cypher_generation import generate_cypher_queries
from Tabular_to_Graph.nodes.export.graph_compiler import Registry
from Tabular_to_Graph.nodes.export.gremlin_generation import generate_gremlin_queries
from Tabular_to_Graph.nodes.export.json_generation import generate_json_output
from Tabular_to_Graph.utils.logging_config import get_logger

# Configure logging
logger = get_logger(__name__)


class ExportFormat(str, Enum):
    CYPHER = "cypher"
    GREMLIN = "gremlin"
    JSON = "json"

    @property
    def display_name(self) -> str:
        return {"cypher": "Cypher", "gremlin": "Gremlin", "json": "JSON"}[self.value]

    @property
    def extension(self) -> str:
        return EXPORT_FILE_EXTENSIONS[self]

    @classmethod
    def parse(cls, value: "str | ExportFormat") -> "ExportFormat":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unsupported export format: {value}") from None


EXPORT_FILE_EXTENSIONS = {
    ExportFormat.CYPHER: ".cypher",
    ExportFormat.GREMLIN: ".groovy",
    ExportFormat.JSON: ".json",
}


ALL_FORMATS = "all"


def expand_formats(requested: Iterable["str | ExportFormat"]) -> List[str]:
    """Expand ``all`` into every export format, keeping the first occurrence of each."""
    formats: List[str] = []
    for value in requested:
        value = value.value if isinstance(value, ExportFormat) else str(value)
        names = [fmt.value for fmt in ExportFormat] if value.lower() == ALL_FORMATS else [value.lower()]
        for name in names:
            if name not in formats:
                formats.append(name)
    return formats


@dataclass(frozen=True)
class ExportResult:
    format: ExportFormat
    success: bool
    content: str = ""
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"format": self.format.value, "success": self.success, "content": self.content, "error": self.error}


def export_graph(
    export_format: "str | ExportFormat",
    dataset: TabularDataset,
    node_mapping: NodeMapping,
    relationship_mapping: Optional[RelationshipMapping] = None,
    registry: Registry = None,
    active_dataset_id: Optional[str] = None,
    group_by_label: bool = False,
) -> ExportResult:
    """
    Generate the full export text for one format, or report why it could not be generated.

    Either the whole text is returned or none of it: on a mapping error the
    result carries ``Error generating <Format>: <message>`` and empty content.

    Raises:
        ValueError: for an unknown format
    """
    fmt = ExportFormat.parse(export_format)
    try:
        if fmt is ExportFormat.CYPHER:
            content = generate_cypher_queries(
                dataset, node_mapping, relationship_mapping, registry, active_dataset_id, group_by_label
            )
        elif fmt is ExportFormat.GREMLIN:
            content = generate_gremlin_queries(dataset, node_mapping, relationship_mapping, registry, active_dataset_id)
        else:
            content = generate_json_output(dataset, node_mapping, relationship_mapping, registry, active_dataset_id)
    except GraphExportError as e:
        error_msg = f"Error generating {fmt.display_name}: {e}"
        logger.error(error_msg)
        return ExportResult(format=fmt, success=False, error=error_msg)
    return ExportResult(format=fmt, success=True, content=content)


def export_registry_entry(
    registry: DatasetRegistry,
    dataset_id: str,
    export_format: "str | ExportFormat",
    nodes_only: bool = False,
    group_by_label: bool = False,
) -> ExportResult:
    """Export a registered dataset with its stored mappings, reading a snapshot of the registry."""
    fmt = ExportFormat.parse(export_format)
    snapshot = registry.snapshot()
    entry = snapshot.get(dataset_id)
    if entry is None:
        error_msg = f"Error generating {fmt.display_name}: {DatasetNotFound(dataset_id)}"
        logger.error(error_msg)
        return ExportResult(format=fmt, success=False, error=error_msg)
    node_mapping = entry.node_mapping or NodeMapping()
    relationship_mapping = None if nodes_only else entry.relationship_mapping
    return export_graph(fmt, entry.dataset, node_mapping, relationship_mapping, snapshot, dataset_id, group_by_label)


def generate_exports_node(state: ExportState, config: RunnableConfig) -> Dict[str, Any]:
    """
    Generate every requested export format for the active dataset.

    Args:
        state: The current export state
        config: LangGraph runnable configuration

    Returns:
        State update with the export results keyed by format
    """
    registry = state.get("registry")
    if registry is None or registry.active_id is None:
        error_msg = "Cannot generate exports: no active dataset"
        logger.error(error_msg)
        return {"error_messages": [error_msg]}

    errors: List[str] = []
    exports: Dict[str, ExportResult] = {}
    for requested in expand_formats(state.get("export_formats") or [ExportFormat.CYPHER.value]):
        try:
            fmt = ExportFormat.parse(requested)
        except ValueError as e:
            logger.error(str(e))
            errors.append(str(e))
            continue
        result = export_registry_entry(
            registry,
            registry.active_id,
            fmt,
            nodes_only=state.get("nodes_only", False),
            group_by_label=state.get("group_by_label", False),
        )
        exports[fmt.value] = result
        if result.success:
            logger.info(f"Generated {fmt.display_name} export ({len(result.content)} characters)")
        else:
            errors.append(result.error)

    return {"exports": exports, "error_messages": errors}
