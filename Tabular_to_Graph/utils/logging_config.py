"""
Centralized logging configuration for the Tabular to Graph converter.
This module provides a consistent logging setup across the application.
"""

import logging
import os
import sys
from typing import Optional, Dict

# Default log levels for different components
DEFAULT_LOG_LEVELS = {
    "root": logging.INFO,
    "Tabular_to_Graph": logging.INFO,
    "Tabular_to_Graph.nodes": logging.INFO,
    "Tabular_to_Graph.utils": logging.INFO,
    "Tabular_to_Graph.nodes.input": logging.INFO,
    "Tabular_to_Graph.nodes.mapping": logging.INFO,
    "Tabular_to_Graph.nodes.export": logging.INFO,
    "Tabular_to_Graph.utils.csv_utils": logging.INFO,
    "langgraph": logging.WARNING,
}

# Log format
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DETAILED_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'

LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_LOG_FILE_HANDLER = None


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    detailed_format: bool = False,
    component_levels: Optional[Dict[str, int]] = None
) -> None:
    """
    Set up logging configuration for the application.

    Args:
        log_level: Overall log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (if None, logs to stdout only)
        detailed_format: Whether to use detailed log format with filename and line number
        component_levels: Dictionary of component-specific log levels
    """
    global _LOG_FILE_HANDLER

    root_level = logging.INFO
    if log_level:
        root_level = LEVEL_MAP.get(log_level.upper(), logging.INFO)

    handlers = []
    log_format = DETAILED_LOG_FORMAT if detailed_format else LOG_FORMAT
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        _LOG_FILE_HANDLER = logging.FileHandler(log_file)
        _LOG_FILE_HANDLER.setFormatter(logging.Formatter(log_format))
        handlers.append(_LOG_FILE_HANDLER)
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(log_format))
        handlers.append(handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    levels = DEFAULT_LOG_LEVELS.copy()
    if log_level:
        # An explicit level applies to our own loggers too
        for logger_name in levels:
            if logger_name.startswith("Tabular_to_Graph") or logger_name == "root":
                levels[logger_name] = root_level
    if component_levels:
        levels.update(component_levels)

    for logger_name, level in levels.items():
        logging.getLogger(logger_name).setLevel(level)

    root_logger.debug(f"Logging initialized with root level: {logging.getLevelName(root_level)}")
    if log_file:
        root_logger.info(f"Logging to file: {log_file}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name, typically __name__ from the calling module

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
