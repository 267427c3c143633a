"""
Data model package for the Tabular to Graph converter.
This package contains the tabular record model, mapping configuration, dataset registry and intermediate graph.
"""

from Tabular_to_Graph.models.tabular import (
    Scalar,
    Record,
    ScalarKind,
    TabularDataset,
    scalar_kind,
    stringify,
    is_present,
)
from Tabular_to_Graph.models.mapping import (
    ColumnRef,
    LabelSource,
    NodeMapping,
    RelationshipMapping,
    load_mapping_file,
    save_mapping_file,
)
from Tabular_to_Graph.models.registry import DatasetEntry, DatasetRef, DatasetRegistry
from Tabular_to_Graph.models.graph import CrossEndpoints, GraphNode, GraphRelationship, IntermediateGraph

__all__ = [
    'Scalar',
    'Record',
    'ScalarKind',
    'TabularDataset',
    'scalar_kind',
    'stringify',
    'is_present',
    'ColumnRef',
    'LabelSource',
    'NodeMapping',
    'RelationshipMapping',
    'load_mapping_file',
    'save_mapping_file',
    'DatasetEntry',
    'DatasetRef',
    'DatasetRegistry',
    'CrossEndpoints',
    'GraphNode',
    'GraphRelationship',
    'IntermediateGraph',
]
