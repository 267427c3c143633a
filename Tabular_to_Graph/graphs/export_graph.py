"""
Graph definition for the export workflow.
Loads the input tables, detects their mappings, generates the requested export formats and saves them.
"""
import time
from typing import Iterable, List, Optional

from langgraph.graph import END, StateGraph

from Tabular_to_Graph.app_state import ExportState
from Tabular_to_Graph.config import DEFAULT_EXPORT_FORMAT, DEFAULT_OUTPUT_DIR
from Tabular_to_Graph.nodes.export import generate_exports_node
from Tabular_to_Graph.nodes.input import load_tables_node
from Tabular_to_Graph.nodes.mapping import detect_mappings_node
from Tabular_to_Graph.nodes.output import save_outputs_node
from Tabular_to_Graph.utils.logging_config import get_logger

# Configure logging
logger = get_logger(__name__)


def route_after_loading(state: ExportState) -> str:
    registry = state.get("registry")
    if registry is None or len(registry) == 0:
        return "stop"
    return "continue"


# Ordered list defines node order
PIPELINE_NODES = [
    ("load_tables", load_tables_node),
    ("detect_mappings", detect_mappings_node),
    ("generate_exports", generate_exports_node),
    ("save_outputs", save_outputs_node),
]

PIPELINE_EDGES = [
    {
        "source": "load_tables",
        "condition": route_after_loading,
        "edges": {"continue": "detect_mappings", "stop": END},
    },
    ("detect_mappings", "generate_exports"),
    ("generate_exports", "save_outputs"),
    ("save_outputs", END),
]

ENTRY_POINT = PIPELINE_NODES[0][0]


def create_export_graph() -> StateGraph:
    graph = StateGraph(ExportState)
    for node_name, node_func in PIPELINE_NODES:
        graph.add_node(node_name, node_func)
    for edge in PIPELINE_EDGES:
        if isinstance(edge, dict):
            graph.add_conditional_edges(edge["source"], edge["condition"], edge["edges"])
        else:
            graph.add_edge(*edge)
    graph.set_entry_point(ENTRY_POINT)
    return graph


def run_pipeline(
    input_paths: Iterable[str],
    export_formats: Optional[List[str]] = None,
    output_dir: str = DEFAULT_OUTPUT_DIR,
    active_file: Optional[str] = None,
    mapping_path: Optional[str] = None,
    nodes_only: bool = False,
    group_by_label: bool = False,
) -> ExportState:
    """
    Run the export workflow end to end.

    Args:
        input_paths: CSV/Excel files or directories containing them
        export_formats: Formats to generate (cypher, gremlin, json)
        output_dir: Directory under which a timestamped run directory is created
        active_file: File name of the dataset to export (default: the first loaded)
        mapping_path: Optional mapping JSON applied to the active dataset
        nodes_only: Export nodes only, ignoring the relationship mapping
        group_by_label: Emit one Cypher CREATE block per node label

    Returns:
        The final export state
    """
    logger.debug("Creating state graph")
    app = create_export_graph().compile()
    initial_state = ExportState(
        input_paths=list(input_paths),
        export_formats=list(export_formats or [DEFAULT_EXPORT_FORMAT]),
        output_dir=output_dir,
        active_file=active_file,
        mapping_path=mapping_path,
        nodes_only=nodes_only,
        group_by_label=group_by_label,
        error_messages=[],
    )
    logger.info("Executing export pipeline")
    start_time = time.time()
    try:
        final_state = app.invoke(initial_state)
    except Exception as e:
        logger.error(f"Export pipeline failed: {str(e)}", exc_info=True)
        raise
    logger.info(f"Export pipeline completed in {time.time() - start_time:.2f} seconds")
    return final_state
