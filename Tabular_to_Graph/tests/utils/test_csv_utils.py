"""
Tests for CSV and Excel parsing utilities.
"""

from unittest.mock import patch

import numpy as np
import pandas as pd
import pytest

from Tabular_to_Graph.errors import MalformedInput, UnsupportedFileType
from Tabular_to_Graph.utils.csv_utils import (
    dataframe_to_dataset,
    delimiter_detection,
    detect_file_type,
    load_csv_safely,
    parse_tabular_file,
    to_scalar,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "path, file_type",
    [("a.csv", "csv"), ("b.TSV", "csv"), ("c.txt", "csv"), ("d.xlsx", "excel"), ("e.xls", "excel")],
)
def test_detect_file_type(path, file_type):
    assert detect_file_type(path) == file_type


@pytest.mark.unit
def test_detect_file_type_rejects_other_extensions():
    with pytest.raises(UnsupportedFileType, match="Unsupported file type: data.parquet"):
        detect_file_type("data.parquet")


@pytest.mark.unit
def test_parse_csv_file(sample_csv_path):
    dataset = parse_tabular_file(sample_csv_path)

    assert dataset.headers == ("id", "name", "age", "parent_id")
    assert len(dataset) == 3
    assert dataset.rows[0]["id"] == 1
    assert dataset.rows[0]["name"] == "Ada"
    assert dataset.rows[0]["parent_id"] is None
    assert dataset.rows[2]["age"] is None
    assert dataset.rows[1]["parent_id"] == 1


@pytest.mark.unit
def test_semicolon_delimiter(tmp_path):
    path = tmp_path / "semi.csv"
    path.write_text("a;b\n1;x\n2;y\n", encoding="utf-8")

    assert delimiter_detection(str(path)) == ";"
    dataset = parse_tabular_file(str(path))
    assert dataset.headers == ("a", "b")
    assert dataset.column_values("b") == ["x", "y"]


@pytest.mark.unit
def test_boolean_columns_are_typed(tmp_path):
    path = tmp_path / "flags.csv"
    path.write_text("id,active\n1,True\n2,False\n", encoding="utf-8")

    dataset = parse_tabular_file(str(path))
    assert dataset.column_values("active") == [True, False]


@pytest.mark.unit
def test_header_only_file_has_no_rows(tmp_path):
    path = tmp_path / "header.csv"
    path.write_text("id,name\n", encoding="utf-8")

    dataset = parse_tabular_file(str(path))
    assert dataset.headers == ("id", "name")
    assert len(dataset) == 0


@pytest.mark.unit
def test_empty_csv_is_malformed(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(MalformedInput):
        parse_tabular_file(str(path))


@pytest.mark.unit
def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_csv_safely(str(tmp_path / "missing.csv"))


@pytest.mark.unit
@patch("Tabular_to_Graph.utils.csv_utils.file_encoding_detection")
def test_fallback_encoding(mock_detection, tmp_path):
    mock_detection.return_value = ("ascii", 0.5)
    path = tmp_path / "accents.csv"
    path.write_text("id,city\n1,Málaga\n", encoding="utf-8")

    df = load_csv_safely(str(path))
    assert list(df["city"]) == ["Málaga"]


@pytest.mark.unit
def test_excel_file(tmp_path):
    path = tmp_path / "people.xlsx"
    pd.DataFrame({"id": [1, 2], "name": ["Ada", None]}).to_excel(path, index=False)

    dataset = parse_tabular_file(str(path))
    assert dataset.headers == ("id", "name")
    assert dataset.rows == ({"id": 1, "name": "Ada"}, {"id": 2, "name": None})


@pytest.mark.unit
def test_empty_excel_sheet_is_malformed(tmp_path):
    path = tmp_path / "empty.xlsx"
    pd.DataFrame().to_excel(path, index=False)
    with pytest.raises(MalformedInput):
        parse_tabular_file(str(path))


@pytest.mark.unit
def test_to_scalar_conversions():
    assert to_scalar(np.int64(3)) == 3
    assert type(to_scalar(np.int64(3))) is int
    assert to_scalar(np.bool_(True)) is True
    assert to_scalar(np.float64("nan")) is None
    assert to_scalar(np.float64("inf")) is None
    assert to_scalar(float("-inf")) is None
    assert to_scalar(pd.NaT) is None
    assert to_scalar(pd.Timestamp("2024-01-02")) == "2024-01-02T00:00:00"
    assert to_scalar("x") == "x"


@pytest.mark.unit
def test_dataframe_to_dataset_stringifies_headers():
    df = pd.DataFrame({1: [1.5, np.nan], "b": ["x", "y"]})
    dataset = dataframe_to_dataset(df)
    assert dataset.headers == ("1", "b")
    assert dataset.rows[1] == {"1": None, "b": "y"}


@pytest.mark.unit
def test_parse_tabular_file_drops_infinite_cells(tmp_path):
    path = tmp_path / "values.csv"
    path.write_text("id,v\n1,inf\n2,-inf\n3,1.5\n", encoding="utf-8")

    dataset = parse_tabular_file(str(path))

    assert dataset.column_values("v") == [None, None, 1.5]
