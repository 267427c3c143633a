"""
Tabular record model shared by the parser, the mapping detector and the
graph compiler.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from Tabular_to_Graph.errors import MalformedInput

Scalar = Union[str, int, float, bool, None]
Record = Mapping[str, Scalar]


class ScalarKind(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"


def scalar_kind(value: Any) -> ScalarKind:
    """
    Classify a cell value. Booleans are checked before numbers.

    NaN and infinite floats are NULL: neither Cypher nor JSON has a literal for them.
    """
    if value is None:
        return ScalarKind.NULL
    if isinstance(value, bool):
        return ScalarKind.BOOLEAN
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return ScalarKind.NULL
        return ScalarKind.NUMBER
    return ScalarKind.STRING


def format_number(value: Union[int, float]) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def stringify(value: Scalar) -> str:
    """
    Canonical text form of a scalar.

    Booleans become ``true``/``false`` and integral floats lose their
    fractional part, so ``1.0`` and ``1`` both stringify to ``"1"``.
    """
    kind = scalar_kind(value)
    if kind is ScalarKind.NULL:
        return ""
    if kind is ScalarKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ScalarKind.NUMBER:
        return format_number(value)
    return str(value)


def is_present(value: Any) -> bool:
    return scalar_kind(value) is not ScalarKind.NULL


@dataclass(frozen=True)
class TabularDataset:
    """
    Headers plus rows of scalar-valued records, as produced by the parser.

    Rows are read-only mappings; ``sample_rows`` and ``to_parsed_data`` hand out copies.
    """

    headers: Tuple[str, ...]
    rows: Tuple[Record, ...] = field(default_factory=tuple)

    def __post_init__(self):
        headers = tuple(str(h) for h in self.headers)
        if len(set(headers)) != len(headers):
            duplicates = sorted({h for h in headers if headers.count(h) > 1})
            raise MalformedInput(f"Duplicate column headers: {', '.join(duplicates)}")
        object.__setattr__(self, "headers", headers)
        object.__setattr__(self, "rows", tuple(MappingProxyType(dict(row)) for row in self.rows))

    @classmethod
    def from_records(cls, headers: Sequence[str], rows: Sequence[Mapping[str, Scalar]]) -> "TabularDataset":
        return cls(headers=tuple(headers), rows=tuple(dict(r) for r in rows))

    @classmethod
    def from_parsed_data(cls, parsed: Mapping[str, Any]) -> "TabularDataset":
        """Build a dataset from the ``{"headers": [...], "rows": [...]}`` parser shape."""
        if "headers" not in parsed:
            raise MalformedInput("Parsed data has no headers")
        return cls.from_records(parsed["headers"], parsed.get("rows") or [])

    def to_parsed_data(self) -> Dict[str, Any]:
        return {"headers": list(self.headers), "rows": [dict(r) for r in self.rows]}

    def column_values(self, column: str) -> List[Scalar]:
        return [row.get(column) for row in self.rows]

    def sample_rows(self, n: int) -> List[Dict[str, Scalar]]:
        return [dict(r) for r in self.rows[:n]]

    def value(self, row_index: int, column: str) -> Optional[Scalar]:
        return self.rows[row_index].get(column)

    def __len__(self) -> int:
        return len(self.rows)
