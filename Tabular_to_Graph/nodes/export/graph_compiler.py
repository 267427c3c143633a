"""
Graph compilation module for the Tabular to Graph converter.
This module turns a dataset plus its mappings into the intermediate node/relationship lists
that every export format is generated from.
"""

from typing import Iterable, List, Mapping, Optional, Tuple, Union

from Tabular_to_Graph.errors import DatasetNotFound, MissingIdColumn, MissingRelationshipColumns
from Tabular_to_Graph.models.graph import CrossEndpoints, GraphNode, GraphRelationship, IntermediateGraph
from Tabular_to_Graph.models.mapping import LabelSource, NodeMapping, RelationshipMapping
from Tabular_to_Graph.models.registry import DatasetEntry, DatasetRegistry
from Tabular_to_Graph.models.tabular import Record, TabularDataset, is_present, stringify
from Tabular_to_Graph.utils.logging_config import get_logger

# Configure logging
logger = get_logger(__name__)

Registry = Optional[Union[DatasetRegistry, Mapping[str, DatasetEntry]]]


def _as_snapshot(registry: Registry) -> Mapping[str, DatasetEntry]:
    if registry is None:
        return {}
    if isinstance(registry, DatasetRegistry):
        return registry.snapshot()
    return registry


def extract_properties(row: Record, columns: Iterable[str], excluded: Iterable[Optional[str]] = ()) -> dict:
    """Selected columns present and non-null in ``row``; missing values are omitted, not defaulted."""
    skip = {c for c in excluded if c}
    return {
        column: row[column]
        for column in columns
        if column not in skip and is_present(row.get(column))
    }


def resolve_node_label(row: Record, node_mapping: NodeMapping) -> str:
    if node_mapping.label_source is LabelSource.COLUMN and node_mapping.label_column:
        label = stringify(row.get(node_mapping.label_column))
        if label:
            return label
    return node_mapping.static_label


def resolve_relationship_type(row: Optional[Record], relationship_mapping: RelationshipMapping) -> str:
    if (
        row is not None
        and relationship_mapping.relationship_type_source is LabelSource.COLUMN
        and relationship_mapping.relationship_type_column
    ):
        rel_type = stringify(row.get(relationship_mapping.relationship_type_column))
        if rel_type:
            return rel_type
    return relationship_mapping.static_relationship_type


def extract_nodes(dataset: TabularDataset, node_mapping: NodeMapping) -> List[GraphNode]:
    """
    One node per row with an id value.

    Raises:
        MissingIdColumn: when the mapping has no id column
    """
    if not node_mapping.id_column:
        raise MissingIdColumn()

    nodes = []
    skipped = 0
    for row in dataset.rows:
        id_value = row.get(node_mapping.id_column)
        if not is_present(id_value):
            skipped += 1
            continue
        nodes.append(
            GraphNode(
                id=stringify(id_value),
                label=resolve_node_label(row, node_mapping),
                properties=extract_properties(row, node_mapping.property_columns, node_mapping.reserved_columns),
            )
        )
    if skipped:
        logger.warning(f"Skipped {skipped} rows with no value in id column '{node_mapping.id_column}'")
    return nodes


def distinct_values(rows: Iterable[Record], column: str) -> List[str]:
    """Distinct stringified non-null values of ``column`` in first-seen order."""
    seen = {}
    for row in rows:
        value = row.get(column)
        if is_present(value):
            seen.setdefault(stringify(value), None)
    return list(seen)


def _resolve_dataset(dataset_id: Optional[str], active_dataset: TabularDataset,
                     active_dataset_id: Optional[str], snapshot: Mapping[str, DatasetEntry]) -> Tuple[str, TabularDataset]:
    if dataset_id is None or dataset_id == active_dataset_id:
        return active_dataset_id or "", active_dataset
    entry = snapshot.get(dataset_id)
    if entry is None:
        raise DatasetNotFound(dataset_id)
    return dataset_id, entry.dataset


def resolve_relationship_datasets(
    dataset: TabularDataset,
    relationship_mapping: RelationshipMapping,
    registry: Registry = None,
    active_dataset_id: Optional[str] = None,
) -> Tuple[Tuple[str, TabularDataset], Tuple[str, TabularDataset]]:
    """
    Resolve the source and target datasets of a relationship mapping.

    A ref without a dataset id, or with the active dataset's id, resolves to
    ``dataset``; anything else is looked up in the registry.

    Raises:
        DatasetNotFound: when a referenced dataset is not registered
    """
    snapshot = _as_snapshot(registry)
    source = _resolve_dataset(relationship_mapping.source_ref.dataset_id, dataset, active_dataset_id, snapshot)
    target = _resolve_dataset(relationship_mapping.target_ref.dataset_id, dataset, active_dataset_id, snapshot)
    return source, target


def is_cross_dataset(
    dataset: TabularDataset,
    relationship_mapping: RelationshipMapping,
    registry: Registry = None,
    active_dataset_id: Optional[str] = None,
) -> bool:
    (source_id, _), (target_id, _) = resolve_relationship_datasets(
        dataset, relationship_mapping, registry, active_dataset_id
    )
    return source_id != target_id


def extract_relationships(
    dataset: TabularDataset,
    relationship_mapping: RelationshipMapping,
    registry: Registry = None,
    active_dataset_id: Optional[str] = None,
) -> Tuple[List[GraphRelationship], Optional[CrossEndpoints]]:
    """
    Build relationships for a mapping.

    Within one dataset every row with non-empty source and target values
    yields one relationship. Across two datasets the result is the full cross
    product of the distinct source values and the distinct target values,
    with the static type and no properties.

    Returns:
        Tuple of (relationships, cross-dataset endpoint ids or None within one dataset)

    Raises:
        MissingRelationshipColumns: when source or target column is unset
        DatasetNotFound: when a referenced dataset is not registered
    """
    source_column = relationship_mapping.source_ref.column
    target_column = relationship_mapping.target_ref.column
    if not source_column or not target_column:
        raise MissingRelationshipColumns()

    (source_id, source_data), (target_id, target_data) = resolve_relationship_datasets(
        dataset, relationship_mapping, registry, active_dataset_id
    )

    relationships: List[GraphRelationship] = []
    if source_id != target_id:
        source_values = distinct_values(source_data.rows, source_column)
        target_values = distinct_values(target_data.rows, target_column)
        rel_type = resolve_relationship_type(None, relationship_mapping)
        for source_value in source_values:
            for target_value in target_values:
                relationships.append(
                    GraphRelationship(
                        id=f"r{len(relationships) + 1}",
                        type=rel_type,
                        source_id=source_value,
                        target_id=target_value,
                    )
                )
        logger.debug(
            f"Cross-dataset relationships: {len(source_values)} sources x {len(target_values)} targets"
        )
        return relationships, CrossEndpoints(source_values, target_values)

    for row in source_data.rows:
        source_value = stringify(row.get(source_column))
        target_value = stringify(row.get(target_column))
        if not source_value or not target_value:
            continue
        relationships.append(
            GraphRelationship(
                id=f"r{len(relationships) + 1}",
                type=resolve_relationship_type(row, relationship_mapping),
                source_id=source_value,
                target_id=target_value,
                properties=extract_properties(row, relationship_mapping.property_columns),
            )
        )
    return relationships, None


def compile_graph(
    dataset: TabularDataset,
    node_mapping: NodeMapping,
    relationship_mapping: Optional[RelationshipMapping] = None,
    registry: Registry = None,
    active_dataset_id: Optional[str] = None,
) -> IntermediateGraph:
    """
    Compile one dataset and its mappings into an intermediate graph.

    Args:
        dataset: The active dataset
        node_mapping: How rows become nodes
        relationship_mapping: How rows become relationships; ``None`` for a node-only graph
        registry: All known datasets (a DatasetRegistry or a snapshot of one) for cross-file refs
        active_dataset_id: Registry id of ``dataset``, if it is registered

    Returns:
        IntermediateGraph with nodes and relationships
    """
    nodes = extract_nodes(dataset, node_mapping)
    relationships: List[GraphRelationship] = []
    cross_endpoints = None
    if relationship_mapping is not None:
        relationships, cross_endpoints = extract_relationships(
            dataset, relationship_mapping, registry, active_dataset_id
        )
    logger.debug(f"Compiled graph with {len(nodes)} nodes and {len(relationships)} relationships")
    return IntermediateGraph(nodes=nodes, relationships=relationships, cross_endpoints=cross_endpoints)


def compile_registry_entry(registry: DatasetRegistry, dataset_id: str, nodes_only: bool = False) -> IntermediateGraph:
    """Compile a registered dataset with its stored mappings against a snapshot of the registry."""
    snapshot = registry.snapshot()
    entry = snapshot.get(dataset_id)
    if entry is None:
        raise DatasetNotFound(dataset_id)
    if entry.node_mapping is None:
        raise MissingIdColumn()
    relationship_mapping = None if nodes_only else entry.relationship_mapping
    return compile_graph(entry.dataset, entry.node_mapping, relationship_mapping, snapshot, dataset_id)
