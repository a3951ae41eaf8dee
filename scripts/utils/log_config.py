"""
Logging setup for TRVZ runs.

Library modules only create module loggers; handlers are attached here by
whatever drives a run.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config_parser import get_nested

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None
) -> None:
    """
    Configure the root logger with a console handler and an optional file handler.

    Args:
        level: Log level name or number
        log_file: Also write log records to this file
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    handlers = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def setup_logging_from_config(config: Dict[str, Any]) -> None:
    """Configure logging from the logging.* section of a loaded config."""
    setup_logging(
        level=get_nested(config, "logging.level") or "INFO",
        log_file=get_nested(config, "logging.file"),
    )
