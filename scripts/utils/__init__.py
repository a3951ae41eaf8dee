# TRVZ Utilities
"""Common utilities for TRVZ runs: configuration and logging."""

from .config_parser import load_config, get_nested, validate_config, merge_with_defaults
from .log_config import setup_logging, setup_logging_from_config

__all__ = [
    "load_config",
    "get_nested",
    "validate_config",
    "merge_with_defaults",
    "setup_logging",
    "setup_logging_from_config",
]
