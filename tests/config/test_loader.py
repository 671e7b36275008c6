"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from nebu.config.loader import GLOBAL_CONFIG_PATH, _deep_merge, _load_yaml, load_config
from nebu.config.models import LoggingConfig, TemplateConfig
from nebu.core.errors import ConfigError


def _write_project_config(root: Path, content: str) -> None:
    nebu_dir = root / ".nebu"
    nebu_dir.mkdir(exist_ok=True)
    (nebu_dir / "config.yaml").write_text(content)


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("template:\n  branch: develop\n")

        assert _load_yaml(yaml_file) == {"template": {"branch": "develop"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("logging:\n  level:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_override_wins(self) -> None:
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_merge(self) -> None:
        base = {"template": {"url": "u", "branch": "main"}}
        override = {"template": {"branch": "dev"}}

        assert _deep_merge(base, override) == {"template": {"url": "u", "branch": "dev"}}

    def test_override_replaces_non_dict(self) -> None:
        base: dict[str, Any] = {"a": {"nested": 1}}
        assert _deep_merge(base, {"a": "simple"}) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        base = {"a": 1}
        _deep_merge(base, {"b": 2})
        assert base == {"a": 1}


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config.template == TemplateConfig()
        assert config.template.url == "https://github.com/lerpz-com/nebu-template.git"
        assert config.logging.level == "WARNING"
        assert config.cache.root is None

    def test_global_config(self, tmp_path: Path) -> None:
        global_file = tmp_path / "global.yaml"
        global_file.write_text("template:\n  branch: stable\n")

        with patch("nebu.config.loader.GLOBAL_CONFIG_PATH", global_file):
            config = load_config(tmp_path)

        assert config.template.branch == "stable"

    def test_project_overrides_global(self, tmp_path: Path) -> None:
        global_file = tmp_path / "global.yaml"
        global_file.write_text("template:\n  branch: stable\n  remote: upstream\n")
        _write_project_config(tmp_path, "template:\n  branch: develop\n")

        with patch("nebu.config.loader.GLOBAL_CONFIG_PATH", global_file):
            config = load_config(tmp_path)

        assert config.template.branch == "develop"
        assert config.template.remote == "upstream"

    def test_env_vars_override_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_project_config(tmp_path, "template:\n  branch: develop\n")
        monkeypatch.setenv("NEBU__TEMPLATE__BRANCH", "release")

        assert load_config(tmp_path).template.branch == "release"

    def test_env_cache_root(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEBU__CACHE__ROOT", str(tmp_path / "c"))

        assert load_config(tmp_path).cache_root == tmp_path / "c"

    def test_kwargs_override_all(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEBU__LOGGING__LEVEL", "INFO")

        config = load_config(tmp_path, logging=LoggingConfig(level="ERROR"))

        assert config.logging.level == "ERROR"

    def test_raises_config_error_for_invalid_value(self, tmp_path: Path) -> None:
        _write_project_config(tmp_path, "logging:\n  level: LOUD\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)
        assert "logging.level" in exc_info.value.message

    def test_blank_template_url_rejected(self, tmp_path: Path) -> None:
        _write_project_config(tmp_path, "template:\n  url: '  '\n")

        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestGlobalConfigPath:
    def test_is_in_user_config(self) -> None:
        assert str(GLOBAL_CONFIG_PATH).endswith("nebu/config.yaml")
