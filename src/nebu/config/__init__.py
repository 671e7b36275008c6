"""Config module exports."""

from nebu.config.loader import NebuSettings, load_config
from nebu.config.models import (
    CacheConfig,
    LoggingConfig,
    LogOutputConfig,
    NebuConfig,
    TemplateConfig,
)

__all__ = [
    "load_config",
    "NebuConfig",
    "NebuSettings",
    "CacheConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "TemplateConfig",
]
