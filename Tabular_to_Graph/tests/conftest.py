"""
Test fixtures for Tabular to Graph converter tests.
"""

import pytest
from langchain_core.runnables import RunnableConfig

from Tabular_to_Graph.models import (
    ColumnRef,
    DatasetRegistry,
    LabelSource,
    NodeMapping,
    RelationshipMapping,
    TabularDataset,
)


@pytest.fixture
def runnable_config():
    """Fixture that returns a sample RunnableConfig for testing."""
    return RunnableConfig({"configurable": {"thread_id": "test-thread"}})


@pytest.fixture
def hierarchy_dataset():
    """Two rows where the second one points at the first through parent_id."""
    return TabularDataset.from_records(
        ["id", "name", "parent_id"],
        [
            {"id": "1", "name": "A", "parent_id": ""},
            {"id": "2", "name": "B", "parent_id": "1"},
        ],
    )


@pytest.fixture
def hierarchy_node_mapping():
    return NodeMapping(
        id_column="id",
        label_source=LabelSource.COLUMN,
        label_column="name",
        static_label="A",
        property_columns=("parent_id",),
    )


@pytest.fixture
def hierarchy_relationship_mapping():
    return RelationshipMapping(
        source_ref=ColumnRef(column="id"),
        target_ref=ColumnRef(column="parent_id"),
        static_relationship_type="CHILD_OF",
    )


@pytest.fixture
def people_dataset():
    return TabularDataset.from_records(
        ["person_id", "full_name", "age", "active"],
        [
            {"person_id": 1, "full_name": "Ada", "age": 36, "active": True},
            {"person_id": 2, "full_name": "Alan", "age": 41.5, "active": False},
            {"person_id": 3, "full_name": "Grace", "age": None, "active": True},
        ],
    )


@pytest.fixture
def movies_dataset():
    return TabularDataset.from_records(
        ["movie_id", "title", "director_ref"],
        [
            {"movie_id": "m1", "title": "Alpha", "director_ref": "Ann"},
            {"movie_id": "m2", "title": "Beta", "director_ref": "Bob"},
            {"movie_id": "m3", "title": "Gamma", "director_ref": "Ann"},
        ],
    )


@pytest.fixture
def directors_dataset():
    return TabularDataset.from_records(
        ["name", "country"],
        [
            {"name": "Ann", "country": "UK"},
            {"name": "Bob", "country": "US"},
        ],
    )


@pytest.fixture
def registry(movies_dataset, directors_dataset):
    """Registry holding movies.csv (active) and directors.csv under fixed ids."""
    registry = DatasetRegistry()
    registry.register("movies.csv", movies_dataset, dataset_id="movies")
    registry.register("directors.csv", directors_dataset, dataset_id="directors")
    return registry


@pytest.fixture
def sample_csv_path(tmp_path):
    """Write a small CSV file and return its path."""
    path = tmp_path / "people.csv"
    path.write_text(
        "id,name,age,parent_id\n"
        "1,Ada,36,\n"
        "2,Alan,41,1\n"
        "3,Grace,,1\n",
        encoding="utf-8",
    )
    return str(path)
