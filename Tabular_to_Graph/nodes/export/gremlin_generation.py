"""
Gremlin generation module for the Tabular to Graph converter.
This module renders a compiled graph as one Gremlin traversal per vertex and per edge.
"""

from typing import Mapping, Optional

from Tabular_to_Graph.models.graph import IntermediateGraph
from Tabular_to_Graph.models.mapping import NodeMapping, RelationshipMapping
from Tabular_to_Graph.models.tabular import Scalar, ScalarKind, TabularDataset, format_number, scalar_kind
from Tabular_to_Graph.nodes.export.graph_compiler import Registry, compile_graph
from Tabular_to_Graph.utils.logging_config import get_logger

# Configure logging
logger = get_logger(__name__)


def escape_gremlin_string(value: str) -> str:
    """Single-quoted Groovy string literal. Double quotes are left as they are."""
    return "'" + value.replace('\\', '\\\\').replace("'", "\\'") + "'"


def gremlin_literal(value: Scalar) -> str:
    kind = scalar_kind(value)
    if kind is ScalarKind.NULL:
        return 'null'
    if kind is ScalarKind.BOOLEAN:
        return 'true' if value else 'false'
    if kind is ScalarKind.NUMBER:
        return format_number(value)
    return escape_gremlin_string(str(value))


def _property_steps(properties: Mapping[str, Scalar]) -> str:
    return ''.join(
        f".property({escape_gremlin_string(key)}, {gremlin_literal(value)})" for key, value in properties.items()
    )


def generate_gremlin_vertices(graph: IntermediateGraph) -> str:
    lines = ['// Create vertices (nodes)']
    for node in graph.nodes:
        lines.append(
            f"g.addV({escape_gremlin_string(node.label)})"
            f".property('id', {escape_gremlin_string(node.id)})"
            f"{_property_steps(node.properties)}"
        )
    return '\n'.join(lines)


def generate_gremlin_edges(graph: IntermediateGraph) -> str:
    lines = ['// Create edges (relationships)']
    if graph.cross_dataset:
        lines.append('// Cross-file relationship edges')
    else:
        lines.append('// Within-file relationship edges')
    for rel in graph.relationships:
        lines.append(
            f"g.V().has('id', {escape_gremlin_string(rel.source_id)}).as('source')"
            f".V().has('id', {escape_gremlin_string(rel.target_id)}).as('target')"
            f".addE({escape_gremlin_string(rel.type)})"
            f".from('source').to('target')"
            f"{_property_steps(rel.properties)}"
        )
    return '\n'.join(lines)


def render_gremlin(graph: IntermediateGraph, relationship_mapping: Optional[RelationshipMapping] = None) -> str:
    sections = [generate_gremlin_vertices(graph)]
    if relationship_mapping is not None:
        sections.append(generate_gremlin_edges(graph))
    return '\n\n'.join(sections)


def generate_gremlin_queries(
    dataset: TabularDataset,
    node_mapping: NodeMapping,
    relationship_mapping: Optional[RelationshipMapping] = None,
    registry: Registry = None,
    active_dataset_id: Optional[str] = None,
) -> str:
    """
    Generate Gremlin traversals (JanusGraph, Neptune, ...) for a dataset.

    Raises:
        GraphExportError: when the mapping is incomplete or references an unknown dataset
    """
    graph = compile_graph(dataset, node_mapping, relationship_mapping, registry, active_dataset_id)
    logger.debug(f"Rendering Gremlin for {len(graph.nodes)} vertices and {len(graph.relationships)} edges")
    return render_gremlin(graph, relationship_mapping)
