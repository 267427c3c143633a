"""
JSON generation module for the Tabular to Graph converter.
"""

import json
from typing import Optional

from Tabular_to_Graph.config import JSON_INDENT
from Tabular_to_Graph.models.graph import IntermediateGraph
from Tabular_to_Graph.models.mapping import NodeMapping, RelationshipMapping
from Tabular_to_Graph.models.tabular import TabularDataset
from Tabular_to_Graph.nodes.export.graph_compiler import Registry, compile_graph
from Tabular_to_Graph.utils.logging_config import get_logger
from Tabular_to_Graph.utils.serialization import json_default

# Configure logging
logger = get_logger(__name__)


def render_json(graph: IntermediateGraph) -> str:
    return json.dumps(graph.to_dict(), indent=JSON_INDENT, ensure_ascii=False, default=json_default)


def generate_json_output(
    dataset: TabularDataset,
    node_mapping: NodeMapping,
    relationship_mapping: Optional[RelationshipMapping] = None,
    registry: Registry = None,
    active_dataset_id: Optional[str] = None,
) -> str:
    """
    Generate a ``{"nodes": [...], "relationships": [...]}`` document importable into most graph databases.

    Raises:
        GraphExportError: when the mapping is incomplete or references an unknown dataset
    """
    graph = compile_graph(dataset, node_mapping, relationship_mapping, registry, active_dataset_id)
    return render_json(graph)
