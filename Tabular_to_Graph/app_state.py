import operator
from typing import Annotated, Any, Dict, List, Optional, TypedDict

from Tabular_to_Graph.models.registry import DatasetRegistry


class ExportState(TypedDict, total=False):
    """State container used throughout the export pipeline."""

    # Inputs
    input_paths: List[str]
    active_file: Optional[str]
    mapping_path: Optional[str]
    export_formats: List[str]
    nodes_only: bool
    group_by_label: bool
    output_dir: str

    # Session data
    registry: DatasetRegistry

    # Outputs
    exports: Dict[str, Any]  # format -> ExportResult
    saved_files: List[str]

    # Each node returns only the messages it produced; LangGraph concatenates them
    error_messages: Annotated[List[str], operator.add]
