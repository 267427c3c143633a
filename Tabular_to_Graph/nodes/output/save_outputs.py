"""
Save outputs module for the Tabular to Graph converter.
This module writes the generated exports and the mappings used to produce them.
"""

from typing import Any, Dict, List

from langchain_core.runnables import RunnableConfig

from Tabular_to_Graph.app_state import ExportState
from Tabular_to_Graph.config import DEFAULT_OUTPUT_DIR
from Tabular_to_Graph.utils.logging_config import get_logger
from Tabular_to_Graph.utils.output_saver import OutputSaver

# Configure logging
logger = get_logger(__name__)

SUMMARY_FILE_NAME = "export_summary.json"


def _file_name_refs(registry, relationship_mapping):
    """Replace generated dataset ids with file names so a saved mapping can be reloaded."""
    if relationship_mapping is None:
        return None
    snapshot = registry.snapshot()

    def file_name(dataset_id):
        entry = snapshot.get(dataset_id) if dataset_id else None
        return entry.file_name if entry is not None else dataset_id

    return relationship_mapping.with_updates(
        source_dataset_id=file_name(relationship_mapping.source_ref.dataset_id),
        target_dataset_id=file_name(relationship_mapping.target_ref.dataset_id),
    )


def save_outputs_node(state: ExportState, config: RunnableConfig) -> Dict[str, Any]:
    """
    Save every successful export of the active dataset, its mapping and a run summary.

    Args:
        state: The current export state
        config: LangGraph runnable configuration

    Returns:
        State update with the list of files written
    """
    registry = state.get("registry")
    entry = registry.active if registry is not None else None
    if entry is None:
        error_msg = "Cannot save outputs: no active dataset"
        logger.error(error_msg)
        return {"saved_files": [], "error_messages": [error_msg]}

    errors: List[str] = []
    saved_files: List[str] = []
    try:
        saver = OutputSaver(state.get("output_dir") or DEFAULT_OUTPUT_DIR)
        for result in (state.get("exports") or {}).values():
            path = saver.save_export(entry.file_name, result)
            if path:
                saved_files.append(path)
        relationship_mapping = None
        if not state.get("nodes_only"):
            relationship_mapping = _file_name_refs(registry, entry.relationship_mapping)
        if entry.node_mapping is not None:
            saved_files.append(saver.save_mapping(entry.file_name, entry.node_mapping, relationship_mapping))
        summary = {
            "activeDataset": entry.file_name,
            "datasets": [ref.file_name for ref in registry.dataset_refs()],
            "exports": {fmt: result.success for fmt, result in (state.get("exports") or {}).items()},
            "savedFiles": list(saved_files),
            "errors": list(state.get("error_messages") or []),
        }
        saved_files.append(saver.save_json(SUMMARY_FILE_NAME, summary))
    except OSError as e:
        error_msg = f"Error saving outputs: {str(e)}"
        logger.error(error_msg)
        errors.append(error_msg)

    logger.info(f"Saved {len(saved_files)} file(s)")
    return {"saved_files": saved_files, "error_messages": errors}
