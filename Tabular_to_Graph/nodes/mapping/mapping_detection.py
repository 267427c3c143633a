"""
Mapping detection module for the Tabular to Graph converter.
This module proposes default node and relationship mappings from column headers using heuristics.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from langchain_core.runnables import RunnableConfig

from Tabular_to_Graph.app_state import ExportState
from Tabular_to_Graph.config import DEFAULT_RELATIONSHIP_TYPE, DEFAULT_STATIC_LABEL, MAX_SAMPLE_ROWS
from Tabular_to_Graph.models.mapping import (
    ColumnRef,
    LabelSource,
    NodeMapping,
    RelationshipMapping,
    load_mapping_file,
)
from Tabular_to_Graph.utils.logging_config import get_logger

# Configure logging
logger = get_logger(__name__)

ID_CANDIDATES = ['id', 'uuid', 'key', 'show_id', '_id', 'nodeid']
ID_SUBSTRINGS = ['id', 'key']

LABEL_CANDIDATES = ['type', 'category', 'label', 'class', 'name', 'title']
LABEL_SUBSTRINGS = ['type', 'category', 'name', 'title']

REFERENCE_SUBSTRINGS = ['ref', 'parent', 'child', 'source', 'target', 'related', 'link']

# Checked in order, first match wins
RELATIONSHIP_TYPE_HINTS = [
    ('parent', 'CHILD_OF'),
    ('director', 'DIRECTED_BY'),
    ('cast', 'ACTED_IN'),
    ('country', 'LOCATED_IN'),
]


def _find_header(headers: Sequence[str], exact: Sequence[str], substrings: Sequence[str]) -> Optional[str]:
    """Exact (case-insensitive) candidate match first, then substring match, both in header order."""
    for header in headers:
        if header.lower() in exact:
            return header
    for header in headers:
        lowered = header.lower()
        if any(s in lowered for s in substrings):
            return header
    return None


def detect_id_column(headers: Sequence[str]) -> Optional[str]:
    if not headers:
        return None
    return _find_header(headers, ID_CANDIDATES, ID_SUBSTRINGS) or headers[0]


def detect_label_column(headers: Sequence[str]) -> Optional[str]:
    return _find_header(headers, LABEL_CANDIDATES, LABEL_SUBSTRINGS)


def relationship_type_for(column: str) -> str:
    lowered = column.lower()
    for hint, rel_type in RELATIONSHIP_TYPE_HINTS:
        if hint in lowered:
            return rel_type
    return DEFAULT_RELATIONSHIP_TYPE


def detect_mapping(
    headers: Sequence[str], sample_rows: Sequence[Mapping[str, Any]] = ()
) -> Tuple[NodeMapping, RelationshipMapping]:
    """
    Propose a default node and relationship mapping for one dataset.

    The result is advisory: every field may be overridden before export.
    The function is pure and never raises; with no headers it returns the
    bare defaults.

    Args:
        headers: Column headers in file order
        sample_rows: Leading rows of the dataset (only the first one is read)

    Returns:
        Tuple of (NodeMapping, RelationshipMapping)
    """
    headers = [str(h) for h in headers]
    if not headers:
        return NodeMapping(static_label=DEFAULT_STATIC_LABEL), RelationshipMapping()

    id_column = detect_id_column(headers)

    label_column = detect_label_column(headers)
    label_source = LabelSource.STATIC
    static_label = DEFAULT_STATIC_LABEL
    if label_column is not None:
        label_source = LabelSource.COLUMN
        if sample_rows:
            first_label = sample_rows[0].get(label_column)
            if isinstance(first_label, str) and first_label:
                static_label = first_label

    property_columns = tuple(
        h for h in headers
        if h != id_column and not (label_source is LabelSource.COLUMN and h == label_column)
    )
    node_mapping = NodeMapping(
        id_column=id_column,
        label_source=label_source,
        label_column=label_column,
        static_label=static_label,
        property_columns=property_columns,
    )

    reference_columns = [h for h in headers if any(s in h.lower() for s in REFERENCE_SUBSTRINGS)]
    target_column = None
    relationship_type = DEFAULT_RELATIONSHIP_TYPE
    if reference_columns:
        target_column = reference_columns[0]
        relationship_type = relationship_type_for(target_column)
    elif len(headers) > 1:
        target_column = next((h for h in headers if h != id_column), None)

    relationship_mapping = RelationshipMapping(
        source_ref=ColumnRef(column=id_column),
        target_ref=ColumnRef(column=target_column),
        static_relationship_type=relationship_type,
    )

    logger.debug(
        f"Detected mapping: id={id_column}, label={label_source.value}:{label_column or static_label}, "
        f"relationship {id_column} -[{relationship_type}]-> {target_column}"
    )
    return node_mapping, relationship_mapping


def resolve_relationship_refs(
    registry, relationship_mapping: Optional[RelationshipMapping]
) -> Optional[RelationshipMapping]:
    """
    Rewrite the dataset ids of a loaded relationship mapping to registry ids.

    Mapping files cannot know the ids generated at load time, so their refs
    name the file instead (``directors.csv`` or ``directors``).
    """
    if relationship_mapping is None:
        return None
    return relationship_mapping.with_updates(
        source_dataset_id=registry.resolve_dataset_id(relationship_mapping.source_ref.dataset_id),
        target_dataset_id=registry.resolve_dataset_id(relationship_mapping.target_ref.dataset_id),
    )


def detect_mappings_node(state: ExportState, config: RunnableConfig) -> Dict[str, Any]:
    """
    Fill in mappings for every registered dataset that has none yet.
    A mapping file, when given, overrides the detected mapping of the active dataset.

    Args:
        state: The current export state
        config: LangGraph runnable configuration

    Returns:
        State update with the registry and any error messages
    """
    registry = state.get("registry")
    if registry is None or len(registry) == 0:
        error_msg = "Cannot detect mappings: no datasets loaded"
        logger.error(error_msg)
        return {"error_messages": [error_msg]}

    errors: List[str] = []
    for entry in registry:
        if entry.node_mapping is not None and entry.relationship_mapping is not None:
            continue
        node_mapping, relationship_mapping = detect_mapping(
            entry.dataset.headers, entry.dataset.sample_rows(MAX_SAMPLE_ROWS)
        )
        registry.update_mappings(
            entry.dataset_id,
            node_mapping=entry.node_mapping or node_mapping,
            relationship_mapping=entry.relationship_mapping or relationship_mapping,
        )
        logger.info(f"Auto-detected mapping for '{entry.file_name}': id column '{node_mapping.id_column}'")

    mapping_path = state.get("mapping_path")
    if mapping_path and registry.active_id:
        try:
            node_mapping, relationship_mapping = load_mapping_file(mapping_path)
            relationship_mapping = resolve_relationship_refs(registry, relationship_mapping)
            registry.update_mappings(registry.active_id, node_mapping, relationship_mapping)
            logger.info(f"Applied mapping file {mapping_path} to the active dataset")
        except (OSError, ValueError) as e:
            error_msg = f"Error loading mapping file {mapping_path}: {str(e)}"
            logger.error(error_msg)
            errors.append(error_msg)

    return {"registry": registry, "error_messages": errors}
