"""
Mapping package for the Tabular to Graph converter.
This package contains the heuristic detection of node and relationship mappings.
"""

from Tabular_to_Graph.nodes.mapping.mapping_detection import detect_mapping, detect_mappings_node

__all__ = [
    'detect_mapping',
    'detect_mappings_node'
]
