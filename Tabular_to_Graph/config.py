"""Configuration settings for the Tabular to Graph converter."""

import os
from dotenv import load_dotenv, find_dotenv

# Load environment variables from a .env file if present
load_dotenv(find_dotenv())


# Tabular Parsing Settings
CSV_ENCODING = os.getenv("TABULAR2GRAPH_CSV_ENCODING", "utf-8")  # Fallback encoding when detection fails
CSV_DELIMITER = os.getenv("TABULAR2GRAPH_CSV_DELIMITER", ",")  # Default delimiter for CSV files
CANDIDATE_DELIMITERS = [',', ';', '\t', '|']  # Tried in order by delimiter detection
ENCODING_CONFIDENCE_THRESHOLD = 0.9  # Below this chardet guess, fallback encodings are tried
MAX_SAMPLE_ROWS = 5  # Rows handed to the mapping detector


# Mapping Defaults
DEFAULT_STATIC_LABEL = os.getenv("TABULAR2GRAPH_DEFAULT_LABEL", "Item")
DEFAULT_RELATIONSHIP_TYPE = os.getenv("TABULAR2GRAPH_DEFAULT_RELATIONSHIP_TYPE", "RELATES_TO")


# Export Settings
DEFAULT_EXPORT_FORMAT = os.getenv("TABULAR2GRAPH_EXPORT_FORMAT", "cypher")  # [cypher, gremlin, json, all]
DEFAULT_OUTPUT_DIR = os.getenv("TABULAR2GRAPH_OUTPUT_DIR", "samples")
JSON_INDENT = 2


# Logging
LOG_LEVEL = os.getenv("TABULAR2GRAPH_LOG_LEVEL", "INFO")
