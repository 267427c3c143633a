"""
Mapping configuration model.

A ``NodeMapping`` says which columns give node identity, label and properties;
a ``RelationshipMapping`` says which columns (possibly in another dataset) give
relationship endpoints, type and properties. Both are immutable: edits go
through ``with_updates`` which returns a new value with the property-column
invariants re-applied.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from Tabular_to_Graph.config import DEFAULT_RELATIONSHIP_TYPE, DEFAULT_STATIC_LABEL
from Tabular_to_Graph.utils.logging_config import get_logger

logger = get_logger(__name__)


class LabelSource(str, Enum):
    COLUMN = "column"
    STATIC = "static"


def _unique_columns(columns: Iterable[str], excluded: Iterable[Optional[str]] = ()) -> Tuple[str, ...]:
    skip = {c for c in excluded if c}
    seen = []
    for column in columns or ():
        if column in skip or column in seen:
            continue
        seen.append(column)
    return tuple(seen)


@dataclass(frozen=True)
class ColumnRef:
    """A column in a dataset. ``dataset_id=None`` means the active dataset."""

    dataset_id: Optional[str] = None
    column: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"datasetId": self.dataset_id, "column": self.column}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ColumnRef":
        data = data or {}
        return cls(dataset_id=data.get("datasetId"), column=data.get("column"))


@dataclass(frozen=True)
class NodeMapping:
    id_column: Optional[str] = None
    label_source: LabelSource = LabelSource.STATIC
    label_column: Optional[str] = None
    static_label: str = DEFAULT_STATIC_LABEL
    property_columns: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "label_source", LabelSource(self.label_source))
        object.__setattr__(self, "property_columns", _unique_columns(self.property_columns, self.reserved_columns))

    @property
    def reserved_columns(self) -> Tuple[Optional[str], ...]:
        """Columns that may never double as properties."""
        if self.label_source is LabelSource.COLUMN:
            return (self.id_column, self.label_column)
        return (self.id_column,)

    def with_updates(self, **changes: Any) -> "NodeMapping":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "idColumn": self.id_column,
            "labelSource": self.label_source.value,
            "labelColumn": self.label_column,
            "staticLabel": self.static_label,
            "propertyColumns": list(self.property_columns),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NodeMapping":
        return cls(
            id_column=data.get("idColumn"),
            label_source=data.get("labelSource", LabelSource.STATIC.value),
            label_column=data.get("labelColumn"),
            static_label=data.get("staticLabel", DEFAULT_STATIC_LABEL),
            property_columns=tuple(data.get("propertyColumns") or ()),
        )


@dataclass(frozen=True)
class RelationshipMapping:
    source_ref: ColumnRef = field(default_factory=ColumnRef)
    target_ref: ColumnRef = field(default_factory=ColumnRef)
    relationship_type_source: LabelSource = LabelSource.STATIC
    relationship_type_column: Optional[str] = None
    static_relationship_type: str = DEFAULT_RELATIONSHIP_TYPE
    property_columns: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "relationship_type_source", LabelSource(self.relationship_type_source))
        object.__setattr__(self, "property_columns", _unique_columns(self.property_columns))

    def with_updates(self, **changes: Any) -> "RelationshipMapping":
        """
        Return a copy with ``changes`` applied.

        ``source_column``/``target_column`` and ``source_dataset_id``/
        ``target_dataset_id`` are accepted as shortcuts for editing one half
        of a ``ColumnRef``.
        """
        for side in ("source", "target"):
            ref = changes.pop(f"{side}_ref", getattr(self, f"{side}_ref"))
            if f"{side}_column" in changes:
                ref = replace(ref, column=changes.pop(f"{side}_column"))
            if f"{side}_dataset_id" in changes:
                ref = replace(ref, dataset_id=changes.pop(f"{side}_dataset_id"))
            changes[f"{side}_ref"] = ref
        return replace(self, **changes)

    @property
    def has_endpoints(self) -> bool:
        return bool(self.source_ref.column and self.target_ref.column)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceRef": self.source_ref.to_dict(),
            "targetRef": self.target_ref.to_dict(),
            "relationshipTypeSource": self.relationship_type_source.value,
            "relationshipTypeColumn": self.relationship_type_column,
            "staticRelationshipType": self.static_relationship_type,
            "propertyColumns": list(self.property_columns),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RelationshipMapping":
        return cls(
            source_ref=ColumnRef.from_dict(data.get("sourceRef")),
            target_ref=ColumnRef.from_dict(data.get("targetRef")),
            relationship_type_source=data.get("relationshipTypeSource", LabelSource.STATIC.value),
            relationship_type_column=data.get("relationshipTypeColumn"),
            static_relationship_type=data.get("staticRelationshipType", DEFAULT_RELATIONSHIP_TYPE),
            property_columns=tuple(data.get("propertyColumns") or ()),
        )


def save_mapping_file(path: str, node_mapping: NodeMapping,
                      relationship_mapping: Optional[RelationshipMapping]) -> None:
    payload = {
        "nodeMapping": node_mapping.to_dict(),
        "relationshipMapping": relationship_mapping.to_dict() if relationship_mapping else None,
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    logger.debug(f"Saved mapping configuration to {path}")


def load_mapping_file(path: str) -> Tuple[Optional[NodeMapping], Optional[RelationshipMapping]]:
    """
    Read a mapping file written by ``save_mapping_file``.

    Either half may be absent (or null) in the file, in which case ``None`` is
    returned for it.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Mapping file must contain a JSON object: {path}")
    node_data = data.get("nodeMapping")
    rel_data = data.get("relationshipMapping")
    node_mapping = NodeMapping.from_dict(node_data) if node_data else None
    relationship_mapping = RelationshipMapping.from_dict(rel_data) if rel_data else None
    logger.debug(f"Loaded mapping configuration from {path}")
    return node_mapping, relationship_mapping
