"""
Cypher generation module for the Tabular to Graph converter.
This module renders a compiled graph as Neo4j Cypher statements built around UNWIND batches.
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional

from Tabular_to_Graph.config import DEFAULT_STATIC_LABEL
from Tabular_to_Graph.models.graph import GraphNode, GraphRelationship, IntermediateGraph
from Tabular_to_Graph.models.mapping import NodeMapping, RelationshipMapping
from Tabular_to_Graph.models.tabular import Scalar, ScalarKind, TabularDataset, format_number, scalar_kind
from Tabular_to_Graph.nodes.export.graph_compiler import Registry, compile_graph
from Tabular_to_Graph.utils.logging_config import get_logger

# Configure logging
logger = get_logger(__name__)

_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


def escape_cypher_string(value: str) -> str:
    """Double-quoted Cypher string literal. Single quotes are left as they are."""
    return '"' + value.replace('\\', '\\\\').replace('"', '\\"') + '"'


def cypher_literal(value: Scalar) -> str:
    kind = scalar_kind(value)
    if kind is ScalarKind.NULL:
        return 'null'
    if kind is ScalarKind.BOOLEAN:
        return 'true' if value else 'false'
    if kind is ScalarKind.NUMBER:
        return format_number(value)
    return escape_cypher_string(str(value))


def cypher_identifier(name: str) -> str:
    """Bare identifier when possible, backtick-quoted otherwise."""
    if _IDENTIFIER.match(name):
        return name
    return '`' + name.replace('`', '``') + '`'


def cypher_map(properties: Mapping[str, Scalar]) -> str:
    entries = ', '.join(f"{cypher_identifier(key)}: {cypher_literal(value)}" for key, value in properties.items())
    return '{' + entries + '}'


def _unwind_rows(rows: List[str]) -> List[str]:
    return [f"  {row}{',' if i < len(rows) - 1 else ''}" for i, row in enumerate(rows)]


def _group_by(items: Iterable, key) -> Dict[str, list]:
    groups: Dict[str, list] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


def _node_block(nodes: List[GraphNode], label: str) -> List[str]:
    rows = [
        f"{{id: {escape_cypher_string(n.id)}, label: {escape_cypher_string(n.label)}, properties: {cypher_map(n.properties)}}}"
        for n in nodes
    ]
    lines = ['UNWIND [']
    lines.extend(_unwind_rows(rows))
    lines.append('] AS nodeData')
    lines.append(f"CREATE (n:{cypher_identifier(label)} {{id: nodeData.id}})")
    lines.append('SET n += nodeData.properties')
    return lines


def generate_cypher_create_nodes(graph: IntermediateGraph, node_mapping: NodeMapping,
                                 group_by_label: bool = False) -> str:
    """
    Node statement(s) for a compiled graph.

    By default a single UNWIND batch creates every node with the mapping's
    static label; the per-row label only travels in ``nodeData.label``.
    With ``group_by_label`` one batch is written per distinct node label.
    """
    static_label = node_mapping.static_label or DEFAULT_STATIC_LABEL
    lines = ['// Create nodes']
    if group_by_label and graph.nodes:
        blocks = [_node_block(nodes, label) for label, nodes in _group_by(graph.nodes, lambda n: n.label).items()]
        for i, block in enumerate(blocks):
            if i:
                lines.append('')
            lines.extend(block)
    else:
        lines.extend(_node_block(graph.nodes, static_label))
    return '\n'.join(lines)


def _relationship_block(relationships: List[GraphRelationship], rel_type: str) -> List[str]:
    rows = [
        f"{{sourceId: {escape_cypher_string(r.source_id)}, targetId: {escape_cypher_string(r.target_id)}, "
        f"properties: {cypher_map(r.properties)}}}"
        for r in relationships
    ]
    lines = ['UNWIND [']
    lines.extend(_unwind_rows(rows))
    lines.append('] AS relData')
    lines.append('MATCH (source {id: relData.sourceId}), (target {id: relData.targetId})')
    lines.append(
        f"CREATE (source)-[r:{cypher_identifier(rel_type)} {{id: relData.sourceId + \"_\" + relData.targetId}}]->(target)"
    )
    lines.append('SET r += relData.properties')
    return lines


def generate_cypher_create_relationships(graph: IntermediateGraph, relationship_mapping: RelationshipMapping) -> str:
    lines = ['// Create relationships']
    if graph.cross_endpoints is not None:
        source_ids = ', '.join(escape_cypher_string(v) for v in graph.cross_endpoints.source_ids)
        target_ids = ', '.join(escape_cypher_string(v) for v in graph.cross_endpoints.target_ids)
        lines.append('// Cross-file relationship')
        lines.append('MATCH (source), (target)')
        lines.append(f"WHERE source.id IN [{source_ids}]")
        lines.append(f"AND target.id IN [{target_ids}]")
        lines.append(f"CREATE (source)-[:{cypher_identifier(relationship_mapping.static_relationship_type)}]->(target)")
        return '\n'.join(lines)

    lines.append('// Within-file relationship')
    groups = _group_by(graph.relationships, lambda r: r.type)
    if not groups:
        groups = {relationship_mapping.static_relationship_type: []}
    for i, (rel_type, relationships) in enumerate(groups.items()):
        if i:
            lines.append('')
        lines.extend(_relationship_block(relationships, rel_type))
    return '\n'.join(lines)


def render_cypher(graph: IntermediateGraph, node_mapping: NodeMapping,
                  relationship_mapping: Optional[RelationshipMapping] = None,
                  group_by_label: bool = False) -> str:
    statements = [generate_cypher_create_nodes(graph, node_mapping, group_by_label)]
    if relationship_mapping is not None:
        statements.append(generate_cypher_create_relationships(graph, relationship_mapping))
    return '\n\n'.join(statements)


def generate_cypher_queries(
    dataset: TabularDataset,
    node_mapping: NodeMapping,
    relationship_mapping: Optional[RelationshipMapping] = None,
    registry: Registry = None,
    active_dataset_id: Optional[str] = None,
    group_by_label: bool = False,
) -> str:
    """
    Generate Cypher statements creating the nodes and relationships of a dataset.

    Args:
        dataset: The active dataset
        node_mapping: Node mapping configuration
        relationship_mapping: Relationship mapping configuration, ``None`` for nodes only
        registry: Known datasets for cross-file relationships
        active_dataset_id: Registry id of ``dataset``
        group_by_label: Write one node batch per distinct label instead of using the static label

    Returns:
        Node statement and relationship statement separated by a blank line

    Raises:
        GraphExportError: when the mapping is incomplete or references an unknown dataset
    """
    graph = compile_graph(dataset, node_mapping, relationship_mapping, registry, active_dataset_id)
    logger.debug(f"Rendering Cypher for {len(graph.nodes)} nodes and {len(graph.relationships)} relationships")
    return render_cypher(graph, node_mapping, relationship_mapping, group_by_label)
