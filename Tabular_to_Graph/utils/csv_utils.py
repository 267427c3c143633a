"""
Utility functions for CSV and Excel file handling.
"""
import logging
import math
import os
from datetime import date, datetime
from typing import Any, Optional, Tuple

import chardet
import numpy as np
import pandas as pd

from Tabular_to_Graph.config import (
    CANDIDATE_DELIMITERS,
    CSV_DELIMITER,
    CSV_ENCODING,
    ENCODING_CONFIDENCE_THRESHOLD,
)
from Tabular_to_Graph.errors import MalformedInput, UnsupportedFileType
from Tabular_to_Graph.models.tabular import Scalar, TabularDataset
from Tabular_to_Graph.utils.logging_config import get_logger

# Configure logging
logger = get_logger(__name__)

CSV_EXTENSIONS = {'.csv', '.tsv', '.txt'}
EXCEL_EXTENSIONS = {'.xlsx', '.xlsm', '.xls'}


def detect_file_type(file_path: str) -> str:
    """
    Decide which parser handles a file, based on its extension.

    Returns:
        ``"csv"`` or ``"excel"``

    Raises:
        UnsupportedFileType: for any other extension
    """
    extension = os.path.splitext(file_path)[1].lower()
    if extension in CSV_EXTENSIONS:
        return "csv"
    if extension in EXCEL_EXTENSIONS:
        return "excel"
    raise UnsupportedFileType(file_path)


def file_encoding_detection(file_path: str) -> Tuple[str, float]:
    """
    Try to detect the encoding used in the CSV file.

    Args:
        file_path: The path to the CSV file

    Returns:
        A tuple of (encoding, confidence) where encoding is the detected encoding
        and confidence is the detection confidence score
    """
    with open(file_path, 'rb') as f:
        raw_data = f.read(10000)  # Read a sample to detect encoding
    result = chardet.detect(raw_data)
    encoding = result.get('encoding') or CSV_ENCODING
    confidence = result.get('confidence') or 0.0
    logger.debug(f"Detected encoding: {encoding} with confidence: {confidence}")
    return encoding, confidence


def delimiter_detection(file_path: str, encoding: str = CSV_ENCODING) -> str:
    """
    Try to detect the delimiter used in the CSV file based on the number of columns.

    Args:
        file_path: The path to the CSV file
        encoding: Encoding used to read the sample rows

    Returns:
        The first candidate delimiter that splits the header into several columns,
        or the configured default
    """
    for delimiter in CANDIDATE_DELIMITERS:
        try:
            df = pd.read_csv(file_path, delimiter=delimiter, header=None, nrows=5, encoding=encoding)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError):
            continue
        if len(df.columns) > 1:
            return delimiter
    return CSV_DELIMITER


def _read_csv(file_path: str, delimiter: str, encoding: str) -> pd.DataFrame:
    return pd.read_csv(
        file_path,
        delimiter=delimiter,
        header=0,
        encoding=encoding,
        skip_blank_lines=True,
        low_memory=False,
        on_bad_lines='warn',
    )


def fallback_encoding(file_path: str, encoding: str, delimiter: str) -> Optional[pd.DataFrame]:
    """
    Try to load a DataFrame with a fallback encoding after the detected one failed.

    Returns:
        The loaded DataFrame, or None when every fallback failed
    """
    for fb_encoding in ['utf-8', 'latin-1', 'cp1252']:
        if fb_encoding == encoding:
            continue
        try:
            df = _read_csv(file_path, delimiter, fb_encoding)
            logger.debug(f"Successfully loaded CSV with delimiter: {delimiter} and encoding: {fb_encoding}")
            return df
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed with delimiter {delimiter} and encoding {fb_encoding}: {str(e)}")
    return None


def load_csv_safely(file_path: str) -> pd.DataFrame:
    """
    Load a CSV file whose first row is the header.

    Encoding and delimiter are detected; numeric and boolean looking columns
    are typed by pandas.

    Raises:
        FileNotFoundError: when the file does not exist
        MalformedInput: when no header row can be read
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    if logger.getEffectiveLevel() == logging.DEBUG:
        file_size = os.path.getsize(file_path) / 1024  # KB
        logger.debug(f"CSV file size: {file_size:.2f} KB")

    encoding, confidence = file_encoding_detection(file_path)
    delimiter = delimiter_detection(file_path, encoding)

    try:
        df = _read_csv(file_path, delimiter, encoding)
    except pd.errors.EmptyDataError:
        raise MalformedInput(f"Could not detect headers in CSV file: {file_path}") from None
    except pd.errors.ParserError as e:
        raise MalformedInput(f"CSV parsing error in {file_path}: {e}") from e
    except (UnicodeDecodeError, LookupError) as e:
        logger.debug(f"Failed to load CSV with encoding {encoding} (confidence {confidence}): {str(e)}")
        df = fallback_encoding(file_path, encoding, delimiter)
        if df is None:
            raise MalformedInput(f"Could not decode CSV file: {file_path}") from e

    if len(df.columns) == 0:
        raise MalformedInput(f"Could not detect headers in CSV file: {file_path}")
    if len(df.columns) == 1:
        logger.warning("CSV has only one column. This might indicate delimiter issues.")
    if confidence < ENCODING_CONFIDENCE_THRESHOLD:
        logger.debug(f"Low encoding confidence ({confidence}) for {file_path}")

    logger.debug(f"Successfully loaded CSV with delimiter: {delimiter!r}")
    return df


def load_excel_safely(file_path: str) -> pd.DataFrame:
    """
    Load the first sheet of an Excel workbook, first row as header.

    Raises:
        FileNotFoundError: when the file does not exist
        MalformedInput: when the sheet is empty or cannot be read
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")
    try:
        df = pd.read_excel(file_path, sheet_name=0)
    except (ValueError, ImportError, OSError) as e:
        raise MalformedInput(f"Could not read Excel file {file_path}: {e}") from e
    if df.empty or len(df.columns) == 0:
        raise MalformedInput(f"Excel sheet appears to be empty or has no data: {file_path}")
    return df


def to_scalar(value: Any) -> Scalar:
    """Convert a pandas cell to a plain Python scalar. Missing and non-finite cells become None."""
    if value is None:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (str, bool, int, float)):
        return value
    if value is pd.NaT or (not isinstance(value, (list, dict)) and pd.isna(value)):
        return None
    if isinstance(value, (pd.Timestamp, datetime, date)):
        return value.isoformat()
    return str(value)


def dataframe_to_dataset(df: pd.DataFrame) -> TabularDataset:
    headers = [str(c) for c in df.columns]
    rows = []
    for values in df.itertuples(index=False, name=None):
        rows.append({header: to_scalar(value) for header, value in zip(headers, values)})
    return TabularDataset.from_records(headers, rows)


def parse_tabular_file(file_path: str) -> TabularDataset:
    """
    Parse a CSV or Excel file into a TabularDataset.

    Raises:
        UnsupportedFileType: when the extension is neither CSV nor Excel
        FileNotFoundError: when the file does not exist
        MalformedInput: when the file has no readable header row or data
    """
    file_type = detect_file_type(file_path)
    logger.debug(f"Parsing {file_path} as {file_type}")
    df = load_csv_safely(file_path) if file_type == "csv" else load_excel_safely(file_path)
    dataset = dataframe_to_dataset(df)
    logger.debug(f"Parsed {len(dataset.rows)} rows and {len(dataset.headers)} columns from {file_path}")
    return dataset
