"""
Tests for the table loader node.
"""

from unittest.mock import patch

import pytest

from Tabular_to_Graph.errors import MalformedInput
from Tabular_to_Graph.models.registry import DatasetRegistry
from Tabular_to_Graph.nodes.input.table_loader import collect_input_files, load_tables_node


@pytest.fixture
def table_dir(tmp_path):
    (tmp_path / "b.csv").write_text("id,name\n1,x\n", encoding="utf-8")
    (tmp_path / "a.csv").write_text("code,label\nk1,y\n", encoding="utf-8")
    (tmp_path / "notes.md").write_text("# not a table\n", encoding="utf-8")
    return tmp_path


@pytest.mark.unit
def test_collect_input_files_expands_directories(table_dir):
    files = collect_input_files([str(table_dir)])
    assert [p.split("/")[-1] for p in files] == ["a.csv", "b.csv"]
    assert collect_input_files(["single.parquet"]) == ["single.parquet"]


@pytest.mark.unit
def test_load_tables_node_registers_every_file(table_dir, runnable_config):
    result = load_tables_node({"input_paths": [str(table_dir)]}, runnable_config)

    registry = result["registry"]
    assert result["error_messages"] == []
    assert [entry.file_name for entry in registry] == ["a.csv", "b.csv"]
    assert registry.active.file_name == "a.csv"


@pytest.mark.unit
def test_load_tables_node_sets_active_file(table_dir, runnable_config):
    state = {"input_paths": [str(table_dir)], "active_file": "b.csv"}
    result = load_tables_node(state, runnable_config)
    assert result["registry"].active.file_name == "b.csv"


@pytest.mark.unit
def test_load_tables_node_reports_unknown_active_file(table_dir, runnable_config):
    state = {"input_paths": [str(table_dir)], "active_file": "c.csv"}
    result = load_tables_node(state, runnable_config)
    assert result["error_messages"] == ["Active file not loaded: c.csv"]


@pytest.mark.unit
def test_load_tables_node_records_parse_errors(tmp_path, runnable_config):
    bad = tmp_path / "data.parquet"
    bad.write_bytes(b"PAR1")
    result = load_tables_node({"input_paths": [str(bad), str(tmp_path / "missing.csv")]}, runnable_config)

    assert len(result["registry"]) == 0
    assert result["error_messages"][0] == f"Error loading data.parquet: Unsupported file type: {bad}"
    assert result["error_messages"][1].startswith("Error loading missing.csv:")


@pytest.mark.unit
@patch("Tabular_to_Graph.nodes.input.table_loader.parse_tabular_file")
def test_load_tables_node_skips_already_loaded_names(mock_parse, hierarchy_dataset, runnable_config):
    registry = DatasetRegistry()
    registry.register("tree.csv", hierarchy_dataset)

    result = load_tables_node({"input_paths": ["/data/tree.csv"], "registry": registry}, runnable_config)

    mock_parse.assert_not_called()
    assert len(result["registry"]) == 1


@pytest.mark.unit
@patch("Tabular_to_Graph.nodes.input.table_loader.parse_tabular_file")
def test_load_tables_node_malformed_input(mock_parse, runnable_config):
    mock_parse.side_effect = MalformedInput("Could not detect headers in CSV file: x.csv")
    result = load_tables_node({"input_paths": ["x.csv"]}, runnable_config)
    assert result["error_messages"] == ["Error loading x.csv: Could not detect headers in CSV file: x.csv"]
