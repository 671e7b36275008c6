"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (NEBU__SECTION__KEY)
3. Project YAML (.nebu/config.yaml)
4. Global YAML (~/.config/nebu/config.yaml)
5. Built-in defaults (this file)

Examples:
    NEBU__LOGGING__LEVEL=DEBUG
    NEBU__CACHE__ROOT=/tmp/nebu-cache
    NEBU__TEMPLATE__BRANCH=develop
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from nebu.core.fs import expand_home_dir

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_TEMPLATE_URL = "https://github.com/lerpz-com/nebu-template.git"
DEFAULT_TEMPLATE_BRANCH = "main"
DEFAULT_TEMPLATE_REMOTE = "origin"


class LogOutputConfig(BaseModel):
    """Single logging output configuration (YAML only)."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = expand_home_dir(v)
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        NEBU__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. The CLI -v flag forces DEBUG.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CacheConfig(BaseModel):
    """Template cache configuration.

    Env vars:
        NEBU__CACHE__ROOT: Directory holding one subdirectory per template
    """

    root: str | None = Field(
        default=None,
        description="Cache root. Defaults to <home>/cache/repo.",
    )


class TemplateConfig(BaseModel):
    """Default template source for `nebu project init`.

    Env vars:
        NEBU__TEMPLATE__URL, NEBU__TEMPLATE__BRANCH, NEBU__TEMPLATE__REMOTE
    """

    url: str = DEFAULT_TEMPLATE_URL
    branch: str = DEFAULT_TEMPLATE_BRANCH
    remote: str = DEFAULT_TEMPLATE_REMOTE

    @field_validator("url", "branch", "remote")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class NebuConfig(BaseModel):
    """Root configuration for nebu."""

    home: str = "~/.nebu"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    template: TemplateConfig = Field(default_factory=TemplateConfig)

    @property
    def home_dir(self) -> Path:
        return expand_home_dir(self.home)

    @property
    def cache_root(self) -> Path:
        """Resolved cache root directory."""
        if self.cache.root:
            return expand_home_dir(self.cache.root)
        return self.home_dir / "cache" / "repo"
