"""
Registry of ingested datasets for one session.

The registry is the unit handed to the graph compiler for cross-dataset
lookups. Writes (register, remove, mapping edits) are serialised with a lock;
compilation reads from ``snapshot()``, a frozen view taken under the same lock,
so a dataset that is still being ingested is never visible to it.
"""

from __future__ import annotations

import os
import threading
import uuid
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from Tabular_to_Graph.errors import DatasetNotFound
from Tabular_to_Graph.models.mapping import NodeMapping, RelationshipMapping
from Tabular_to_Graph.models.tabular import TabularDataset
from Tabular_to_Graph.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DatasetEntry:
    dataset_id: str
    file_name: str
    dataset: TabularDataset
    node_mapping: Optional[NodeMapping] = None
    relationship_mapping: Optional[RelationshipMapping] = None

    @property
    def headers(self):
        return self.dataset.headers


@dataclass(frozen=True)
class DatasetRef:
    """Lightweight description of a registry entry, used to offer cross-file choices."""

    dataset_id: str
    file_name: str
    headers: tuple


def new_dataset_id() -> str:
    return f"dataset-{uuid.uuid4().hex}"


class DatasetRegistry:
    def __init__(self):
        self._entries: Dict[str, DatasetEntry] = {}
        self._active_id: Optional[str] = None
        self._lock = threading.Lock()

    # Writes ------------------------------------------------------------------
    def register(self, file_name: str, dataset: TabularDataset,
                 node_mapping: Optional[NodeMapping] = None,
                 relationship_mapping: Optional[RelationshipMapping] = None,
                 dataset_id: Optional[str] = None) -> DatasetEntry:
        dataset_id = dataset_id or new_dataset_id()
        entry = DatasetEntry(dataset_id, file_name, dataset, node_mapping, relationship_mapping)
        with self._lock:
            if dataset_id in self._entries:
                raise ValueError(f"Dataset id already registered: {dataset_id}")
            self._entries[dataset_id] = entry
            if self._active_id is None:
                self._active_id = dataset_id
        logger.info(f"Registered dataset '{file_name}' as {dataset_id} "
                    f"({len(dataset.headers)} columns, {len(dataset.rows)} rows)")
        return entry

    def remove(self, dataset_id: str) -> DatasetEntry:
        with self._lock:
            if dataset_id not in self._entries:
                raise DatasetNotFound(dataset_id)
            entry = self._entries.pop(dataset_id)
            if self._active_id == dataset_id:
                self._active_id = next(iter(self._entries), None)
        logger.info(f"Removed dataset {dataset_id} ('{entry.file_name}')")
        return entry

    def set_active(self, dataset_id: str) -> None:
        with self._lock:
            if dataset_id not in self._entries:
                raise DatasetNotFound(dataset_id)
            self._active_id = dataset_id

    def update_mappings(self, dataset_id: str,
                        node_mapping: Optional[NodeMapping] = None,
                        relationship_mapping: Optional[RelationshipMapping] = None) -> DatasetEntry:
        """Replace the stored mappings of an entry. ``None`` leaves that half unchanged."""
        with self._lock:
            if dataset_id not in self._entries:
                raise DatasetNotFound(dataset_id)
            entry = self._entries[dataset_id]
            if node_mapping is not None:
                entry = replace(entry, node_mapping=node_mapping)
            if relationship_mapping is not None:
                entry = replace(entry, relationship_mapping=relationship_mapping)
            self._entries[dataset_id] = entry
        return entry

    # Reads -------------------------------------------------------------------
    @property
    def active_id(self) -> Optional[str]:
        return self._active_id

    @property
    def active(self) -> Optional[DatasetEntry]:
        with self._lock:
            return self._entries.get(self._active_id) if self._active_id else None

    def get(self, dataset_id: str) -> DatasetEntry:
        with self._lock:
            entry = self._entries.get(dataset_id)
        if entry is None:
            raise DatasetNotFound(dataset_id)
        return entry

    def find_by_file_name(self, file_name: str) -> Optional[DatasetEntry]:
        with self._lock:
            for entry in self._entries.values():
                if entry.file_name == file_name:
                    return entry
        return None

    def resolve_dataset_id(self, key: Optional[str]) -> Optional[str]:
        """
        Map a dataset reference to a registered id.

        ``key`` may be an id, a file name (``directors.csv``) or a file name
        without its extension (``directors``). Unknown keys are returned as
        given so the compiler can report them.
        """
        if key is None:
            return None
        with self._lock:
            if key in self._entries:
                return key
            for entry in self._entries.values():
                if key in (entry.file_name, os.path.splitext(entry.file_name)[0]):
                    return entry.dataset_id
        return key

    def snapshot(self) -> Mapping[str, DatasetEntry]:
        with self._lock:
            return MappingProxyType(dict(self._entries))

    def dataset_refs(self) -> List[DatasetRef]:
        with self._lock:
            return [DatasetRef(e.dataset_id, e.file_name, e.dataset.headers) for e in self._entries.values()]

    def __contains__(self, dataset_id: object) -> bool:
        with self._lock:
            return dataset_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[DatasetEntry]:
        return iter(list(self.snapshot().values()))
