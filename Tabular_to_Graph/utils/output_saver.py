"""
Utility module for saving export outputs to files.
"""

import datetime
import json
import os
from typing import Optional

from Tabular_to_Graph.config import JSON_INDENT
from Tabular_to_Graph.models.mapping import NodeMapping, RelationshipMapping, save_mapping_file
from Tabular_to_Graph.utils.logging_config import get_logger
from Tabular_to_Graph.utils.serialization import json_default

logger = get_logger(__name__)


class OutputSaver:
    """
    Writes the artefacts of one run into ``<base_dir>/<timestamp>/``.
    """

    def __init__(self, base_dir: str = "samples"):
        self.base_dir = base_dir
        self.timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        self.output_dir = os.path.join(self.base_dir, self.timestamp)
        os.makedirs(self.output_dir, exist_ok=True)
        logger.info(f"Created output directory: {self.output_dir}")

    @staticmethod
    def _safe_name(name: str) -> str:
        return os.path.splitext(os.path.basename(name))[0].replace(" ", "_")

    def save_export(self, name: str, result) -> Optional[str]:
        """
        Save a successful export as ``<name><extension>``.

        Failed results are logged and skipped, so an error message never ends
        up in a file that would be loaded into a database.

        Returns:
            The path written, or None when the result carried an error
        """
        if not result.success:
            logger.warning(f"Not saving failed {result.format.display_name} export for '{name}': {result.error}")
            return None
        output_file = os.path.join(self.output_dir, f"{self._safe_name(name)}{result.format.extension}")
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(result.content)
        logger.info(f"Saved {result.format.display_name} export to {output_file}")
        return output_file

    def save_mapping(
        self,
        name: str,
        node_mapping: NodeMapping,
        relationship_mapping: Optional[RelationshipMapping],
    ) -> str:
        """Save the mappings used for an export as ``<name>_mapping.json``."""
        output_file = os.path.join(self.output_dir, f"{self._safe_name(name)}_mapping.json")
        save_mapping_file(output_file, node_mapping, relationship_mapping)
        logger.info(f"Saved mapping configuration to {output_file}")
        return output_file

    def save_json(self, file_name: str, data) -> str:
        output_file = os.path.join(self.output_dir, file_name)
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=JSON_INDENT, default=json_default)
        return output_file
