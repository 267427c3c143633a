"""
Export package for the Tabular to Graph converter.
This package contains the graph compiler and the Cypher, Gremlin and JSON emitters.
"""

from Tabular_to_Graph.nodes.export.graph_compiler import (
    compile_graph,
    compile_registry_entry,
    extract_nodes,
    extract_relationships,
    distinct_values,
)
from Tabular_to_Graph.nodes.export.cypher_generation import generate_cypher_queries
from Tabular_to_Graph.nodes.export.gremlin_generation import generate_gremlin_queries
from Tabular_to_Graph.nodes.export.json_generation import generate_json_output
from Tabular_to_Graph.nodes.export.exporter import (
    EXPORT_FILE_EXTENSIONS,
    ExportFormat,
    ExportResult,
    expand_formats,
    export_graph,
    export_registry_entry,
    generate_exports_node,
)

__all__ = [
    'compile_graph',
    'compile_registry_entry',
    'extract_nodes',
    'extract_relationships',
    'distinct_values',
    'generate_cypher_queries',
    'generate_gremlin_queries',
    'generate_json_output',
    'EXPORT_FILE_EXTENSIONS',
    'ExportFormat',
    'ExportResult',
    'expand_formats',
    'export_graph',
    'export_registry_entry',
    'generate_exports_node',
]
