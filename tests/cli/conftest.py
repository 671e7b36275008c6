"""Test fixtures for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

if TYPE_CHECKING:
    from conftest import TemplateOrigin


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_env(cache_root: Path, origin: TemplateOrigin) -> dict[str, str]:
    """Environment pointing the CLI at the test cache root and origin."""
    return {
        "NEBU__CACHE__ROOT": str(cache_root),
        "NEBU_TEMPLATE_REPO": origin.url,
    }
