"""
Tests for JSON generation.
"""

import json

import pytest

from Tabular_to_Graph.models.mapping import ColumnRef, NodeMapping, RelationshipMapping
from Tabular_to_Graph.models.tabular import TabularDataset
from Tabular_to_Graph.nodes.export.json_generation import generate_json_output


@pytest.mark.unit
def test_two_nodes_one_relationship():
    dataset = TabularDataset.from_records(
        ["id", "name", "manager"],
        [{"id": 1, "name": "Ada", "manager": None}, {"id": 2, "name": "Alan", "manager": 1}],
    )
    node_mapping = NodeMapping(id_column="id", static_label="Person", property_columns=("name",))
    rel_mapping = RelationshipMapping(
        source_ref=ColumnRef(column="id"),
        target_ref=ColumnRef(column="manager"),
        static_relationship_type="REPORTS_TO",
    )

    document = json.loads(generate_json_output(dataset, node_mapping, rel_mapping))

    assert list(document) == ["nodes", "relationships"]
    assert document["nodes"] == [
        {"id": "1", "label": "Person", "properties": {"name": "Ada"}},
        {"id": "2", "label": "Person", "properties": {"name": "Alan"}},
    ]
    assert document["relationships"] == [
        {"id": "r1", "type": "REPORTS_TO", "sourceId": "2", "targetId": "1", "properties": {}}
    ]


@pytest.mark.unit
def test_node_count_matches_rows_with_id(people_dataset):
    rows = list(people_dataset.rows) + [{"person_id": None, "full_name": "Nobody"}]
    dataset = TabularDataset.from_records(people_dataset.headers, rows)

    document = json.loads(generate_json_output(dataset, NodeMapping(id_column="person_id")))

    assert len(document["nodes"]) == 3
    assert document["relationships"] == []


@pytest.mark.unit
def test_typed_properties_and_unicode():
    dataset = TabularDataset.from_records(
        ["id", "city", "score", "active"],
        [{"id": "1", "city": "Málaga", "score": 9.5, "active": False}],
    )
    mapping = NodeMapping(id_column="id", property_columns=("city", "score", "active"))
    text = generate_json_output(dataset, mapping)

    assert "Málaga" in text
    assert json.loads(text)["nodes"][0]["properties"] == {"city": "Málaga", "score": 9.5, "active": False}


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


@pytest.mark.unit
def test_non_finite_numbers_keep_json_strict():
    dataset = TabularDataset.from_records(
        ["id", "v"],
        [{"id": 1, "v": float("inf")}, {"id": float("-inf"), "v": 1}, {"id": 3, "v": float("nan")}],
    )

    output = generate_json_output(dataset, NodeMapping(id_column="id", property_columns=("v",)))
    document = json.loads(output, parse_constant=_reject_constant)

    assert [node["id"] for node in document["nodes"]] == ["1", "3"]
    assert all("v" not in node["properties"] for node in document["nodes"])
