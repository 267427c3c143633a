"""
Intermediate graph produced by the compiler and consumed by every emitter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from Tabular_to_Graph.models.tabular import Scalar


@dataclass(frozen=True)
class GraphNode:
    id: str
    label: str
    properties: Dict[str, Scalar] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "label": self.label, "properties": dict(self.properties)}


@dataclass(frozen=True)
class GraphRelationship:
    id: str
    type: str
    source_id: str
    target_id: str
    properties: Dict[str, Scalar] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "sourceId": self.source_id,
            "targetId": self.target_id,
            "properties": dict(self.properties),
        }


@dataclass(frozen=True)
class CrossEndpoints:
    """Distinct endpoint ids of a cross-dataset relationship mapping."""

    source_ids: List[str]
    target_ids: List[str]


@dataclass
class IntermediateGraph:
    nodes: List[GraphNode] = field(default_factory=list)
    relationships: List[GraphRelationship] = field(default_factory=list)
    # Set only when source and target live in different datasets
    cross_endpoints: Optional[CrossEndpoints] = None

    @property
    def cross_dataset(self) -> bool:
        return self.cross_endpoints is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "relationships": [r.to_dict() for r in self.relationships],
        }
