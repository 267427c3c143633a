"""
Tests for the save_outputs node.
"""

import json
import os

import pytest

from Tabular_to_Graph.models.mapping import ColumnRef, NodeMapping, RelationshipMapping
from Tabular_to_Graph.models.registry import DatasetRegistry
from Tabular_to_Graph.nodes.export.exporter import ExportFormat, ExportResult
from Tabular_to_Graph.nodes.output.save_outputs import SUMMARY_FILE_NAME, save_outputs_node


@pytest.mark.unit
def test_save_outputs_node_writes_successful_exports(
    tmp_path, hierarchy_dataset, hierarchy_node_mapping, hierarchy_relationship_mapping, runnable_config
):
    registry = DatasetRegistry()
    registry.register("tree.csv", hierarchy_dataset, hierarchy_node_mapping, hierarchy_relationship_mapping)
    state = {
        "registry": registry,
        "output_dir": str(tmp_path),
        "exports": {
            "cypher": ExportResult(format=ExportFormat.CYPHER, success=True, content="// Create nodes"),
            "json": ExportResult(format=ExportFormat.JSON, success=False, error="Error generating JSON: x"),
        },
        "error_messages": ["Error generating JSON: x"],
    }

    result = save_outputs_node(state, runnable_config)

    names = [os.path.basename(p) for p in result["saved_files"]]
    assert names == ["tree.cypher", "tree_mapping.json", SUMMARY_FILE_NAME]
    assert result["error_messages"] == []
    with open(result["saved_files"][-1], encoding="utf-8") as f:
        summary = json.load(f)
    assert summary["exports"] == {"cypher": True, "json": False}
    assert summary["errors"] == ["Error generating JSON: x"]


@pytest.mark.unit
def test_save_outputs_node_nodes_only_mapping(tmp_path, hierarchy_dataset, hierarchy_node_mapping,
                                              hierarchy_relationship_mapping, runnable_config):
    registry = DatasetRegistry()
    registry.register("tree.csv", hierarchy_dataset, hierarchy_node_mapping, hierarchy_relationship_mapping)

    result = save_outputs_node(
        {"registry": registry, "output_dir": str(tmp_path), "exports": {}, "nodes_only": True}, runnable_config
    )

    with open(result["saved_files"][0], encoding="utf-8") as f:
        assert json.load(f)["relationshipMapping"] is None


@pytest.mark.unit
def test_save_outputs_node_without_active_dataset(runnable_config):
    result = save_outputs_node({"registry": DatasetRegistry()}, runnable_config)
    assert result["saved_files"] == []
    assert result["error_messages"] == ["Cannot save outputs: no active dataset"]


@pytest.mark.unit
def test_save_outputs_node_writes_file_names_in_cross_file_mapping(
    tmp_path, registry, runnable_config
):
    registry.update_mappings(
        "movies",
        NodeMapping(id_column="movie_id"),
        RelationshipMapping(
            source_ref=ColumnRef(column="movie_id"),
            target_ref=ColumnRef(dataset_id="directors", column="name"),
        ),
    )

    result = save_outputs_node({"registry": registry, "output_dir": str(tmp_path), "exports": {}}, runnable_config)

    with open(result["saved_files"][0], encoding="utf-8") as f:
        relationship = json.load(f)["relationshipMapping"]
    assert relationship["sourceRef"] == {"datasetId": None, "column": "movie_id"}
    assert relationship["targetRef"] == {"datasetId": "directors.csv", "column": "name"}
