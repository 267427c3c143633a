"""
Error types raised by the mapping, compilation and export modules.
"""

from typing import Optional


class GraphExportError(Exception):
    """Base class for errors that abort an export attempt."""


class MissingIdColumn(GraphExportError):
    def __init__(self, message: str = "Node ID column is required for node creation"):
        super().__init__(message)


class MissingRelationshipColumns(GraphExportError):
    def __init__(self, message: str = "Source and target columns are required for relationship creation"):
        super().__init__(message)


class DatasetNotFound(GraphExportError):
    def __init__(self, dataset_id: Optional[str]):
        self.dataset_id = dataset_id
        super().__init__(f"Source or target dataset not found: {dataset_id}")


class UnsupportedFileType(GraphExportError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Unsupported file type: {path}")


class MalformedInput(GraphExportError):
    """The tabular parser could not produce headers and rows from a file."""
