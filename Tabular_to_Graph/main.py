"""
Main script for the Tabular to Graph converter using LangGraph.
"""

import argparse
import sys
from typing import List, Optional

from Tabular_to_Graph.config import DEFAULT_EXPORT_FORMAT, DEFAULT_OUTPUT_DIR, LOG_LEVEL
from Tabular_to_Graph.graphs.export_graph import run_pipeline
from Tabular_to_Graph.nodes.export.exporter import ALL_FORMATS, ExportFormat
from Tabular_to_Graph.utils.logging_config import get_logger, setup_logging

# Get a logger for this module
logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert CSV and Excel files into Cypher, Gremlin or JSON graph exports."
    )
    parser.add_argument(
        "--input_path", required=True, help="Path to a CSV/Excel file or a directory of them"
    )
    parser.add_argument(
        "--format",
        dest="export_format",
        default=DEFAULT_EXPORT_FORMAT,
        choices=[fmt.value for fmt in ExportFormat] + [ALL_FORMATS],
        help=f"Export format to generate (default: {DEFAULT_EXPORT_FORMAT})",
    )
    parser.add_argument("--output_dir", "-o", default=DEFAULT_OUTPUT_DIR, help="Directory to save the exports to")
    parser.add_argument("--active", help="File name of the dataset to export (default: the first one loaded)")
    parser.add_argument("--mapping", help="Mapping JSON file applied to the active dataset")
    parser.add_argument("--nodes-only", action="store_true", help="Export nodes only, without relationships")
    parser.add_argument(
        "--group-by-label", action="store_true", help="Write one Cypher CREATE block per node label"
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"Set the logging level (default: {LOG_LEVEL})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the command-line interface.

    Returns:
        0 when every requested export was generated, 1 otherwise
    """
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level)

    try:
        final_state = run_pipeline(
            [args.input_path],
            export_formats=[args.export_format],
            output_dir=args.output_dir,
            active_file=args.active,
            mapping_path=args.mapping,
            nodes_only=args.nodes_only,
            group_by_label=args.group_by_label,
        )
    except Exception as e:
        logger.error("Error: %s", e)
        return 1

    exports = final_state.get("exports") or {}
    for message in final_state.get("error_messages") or []:
        logger.error(message)
    if not exports or not all(result.success for result in exports.values()):
        return 1
    for path in final_state.get("saved_files") or []:
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
