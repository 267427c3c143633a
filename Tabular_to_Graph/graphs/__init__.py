"""
Graphs package for the Tabular to Graph converter.
This package contains the LangGraph workflow definitions.
"""

from Tabular_to_Graph.graphs.export_graph import create_export_graph, run_pipeline

__all__ = [
    'create_export_graph',
    'run_pipeline'
]
