"""
Table loader module for the Tabular to Graph converter.
This module parses CSV and Excel files and registers them as datasets.
"""

import os
from typing import Any, Dict, Iterable, List

from langchain_core.runnables import RunnableConfig

from Tabular_to_Graph.app_state import ExportState
from Tabular_to_Graph.errors import GraphExportError
from Tabular_to_Graph.models.registry import DatasetRegistry
from Tabular_to_Graph.utils.csv_utils import CSV_EXTENSIONS, EXCEL_EXTENSIONS, parse_tabular_file
from Tabular_to_Graph.utils.logging_config import get_logger

# Configure logging
logger = get_logger(__name__)


def collect_input_files(paths: Iterable[str]) -> List[str]:
    """
    Expand the given paths into the list of files to load.

    Directories contribute their CSV and Excel files in name order; files are
    kept as given so that an unsupported extension is reported by the parser.
    """
    files: List[str] = []
    for path in paths:
        if os.path.isdir(path):
            for name in sorted(os.listdir(path)):
                full_path = os.path.join(path, name)
                extension = os.path.splitext(name)[1].lower()
                if os.path.isfile(full_path) and extension in CSV_EXTENSIONS | EXCEL_EXTENSIONS:
                    files.append(full_path)
        else:
            files.append(path)
    return files


def load_tables_node(state: ExportState, config: RunnableConfig) -> Dict[str, Any]:
    """
    Load every input file into the dataset registry.

    Args:
        state: The current export state
        config: LangGraph runnable configuration

    Returns:
        State update with the registry and the messages of files that failed to load
    """
    registry = state.get("registry")
    if registry is None:
        registry = DatasetRegistry()
    errors: List[str] = []

    for file_path in collect_input_files(state.get("input_paths") or []):
        file_name = os.path.basename(file_path)
        if registry.find_by_file_name(file_name) is not None:
            logger.warning(f"Skipping '{file_name}': a dataset with this file name is already loaded")
            continue
        logger.info(f"Loading table file: {file_path}")
        try:
            dataset = parse_tabular_file(file_path)
        except (GraphExportError, FileNotFoundError) as e:
            error_msg = f"Error loading {file_name}: {str(e)}"
            logger.error(error_msg)
            errors.append(error_msg)
            continue
        registry.register(file_name, dataset)

    active_file = state.get("active_file")
    if active_file:
        entry = registry.find_by_file_name(os.path.basename(active_file))
        if entry is None:
            error_msg = f"Active file not loaded: {active_file}"
            logger.error(error_msg)
            errors.append(error_msg)
        else:
            registry.set_active(entry.dataset_id)

    if len(registry) == 0:
        logger.warning("No datasets could be loaded")
    else:
        logger.info(f"Loaded {len(registry)} dataset(s); active dataset: {registry.active_id}")

    return {"registry": registry, "error_messages": errors}
