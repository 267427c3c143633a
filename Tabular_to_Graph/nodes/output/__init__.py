"""
Output package for the Tabular to Graph converter.
This package contains the node that writes export files to disk.
"""

from Tabular_to_Graph.nodes.output.save_outputs import save_outputs_node

__all__ = [
    'save_outputs_node'
]
