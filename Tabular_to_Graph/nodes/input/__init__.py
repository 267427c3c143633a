"""
Input package for the Tabular to Graph converter.
This package contains modules for loading CSV and Excel files into the dataset registry.
"""

from Tabular_to_Graph.nodes.input.table_loader import load_tables_node, collect_input_files

__all__ = [
    'load_tables_node',
    'collect_input_files'
]
