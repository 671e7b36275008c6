"""Core module exports."""

from nebu.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    NebuError,
    ProjectError,
)
from nebu.core.fs import expand_home_dir
from nebu.core.logging import configure_logging, get_logger
from nebu.core.progress import pluralize, spinner, status

__all__ = [
    # Errors
    "ErrorCode",
    "NebuError",
    "ConfigError",
    "ProjectError",
    "InternalError",
    # Filesystem
    "expand_home_dir",
    # Logging
    "configure_logging",
    "get_logger",
    # Progress
    "pluralize",
    "spinner",
    "status",
]
