"""Tests for structured logging."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import structlog

from nebu.config.models import LoggingConfig, LogOutputConfig
from nebu.core.logging import configure_logging, get_logger
from nebu.core.progress import suppress_console_logs


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    def test_given_json_file_output_when_log_then_valid_json(self, tmp_path: Path) -> None:
        # Given
        log_file = tmp_path / "nebu.log"
        configure_logging(
            config=LoggingConfig(
                level="INFO",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )

        # When
        get_logger("test").info("cache.clone", url="https://example/tpl.git")

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["event"] == "cache.clone"
        assert data["url"] == "https://example/tpl.git"
        assert data["level"] == "info"
        assert data["logger"] == "test"
        assert "timestamp" in data

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When - config's DEBUG should override the level="ERROR" param
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()

    def test_given_multi_output_config_when_configure_then_levels_apply(
        self, tmp_path: Path
    ) -> None:
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[
                    LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                    LogOutputConfig(format="json", destination=str(debug_file)),
                ],
            )
        )

        # When
        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        # Then
        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content
        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_file_in_missing_dir_when_configure_then_creates_parent(
        self, tmp_path: Path
    ) -> None:
        log_file = tmp_path / "logs" / "deep" / "nebu.log"

        configure_logging(
            config=LoggingConfig(outputs=[LogOutputConfig(destination=str(log_file))])
        )

        assert log_file.parent.is_dir()

    def test_given_reconfigure_then_handlers_replaced(self, tmp_path: Path) -> None:
        configure_logging(level="INFO")
        configure_logging(level="DEBUG")

        assert len(logging.getLogger().handlers) == 1
        assert logging.getLogger().level == logging.DEBUG

    def test_given_critical_level_then_errors_filtered(self, tmp_path: Path) -> None:
        # Given
        log_file = tmp_path / "nebu.log"
        configure_logging(
            config=LoggingConfig(
                level="CRITICAL",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )

        # When
        get_logger().error("error msg")
        get_logger().critical("critical msg")

        # Then
        content = log_file.read_text()
        assert "error msg" not in content
        assert "critical msg" in content
        assert logging.getLogger().level == logging.CRITICAL

    def test_given_spinner_active_then_file_output_still_written(self, tmp_path: Path) -> None:
        # Given
        log_file = tmp_path / "nebu.log"
        configure_logging(
            config=LoggingConfig(
                level="INFO",
                outputs=[
                    LogOutputConfig(destination="stderr"),
                    LogOutputConfig(format="json", destination=str(log_file)),
                ],
            )
        )

        # When
        with suppress_console_logs():
            get_logger().info("during spinner")

        # Then
        assert "during spinner" in log_file.read_text()
