"""Unit tests for cache_conformance.core.logging.

Tests structured logging configuration and logger creation.
"""

import structlog
from unittest.mock import patch, MagicMock

import cache_conformance.core.logging as logging_module
from cache_conformance.core.logging import (
    add_suite_context,
    configure_logging,
    get_logger,
)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_logging_development(self) -> None:
        """Test logging configuration for development environment."""
        with patch("cache_conformance.core.logging.get_settings") as mock_settings:
            mock_settings.return_value.environment = "development"
            mock_settings.return_value.log_level = "DEBUG"

            with patch("cache_conformance.core.logging.structlog.configure") as mock_configure:
                logging_module._configured = False

                configure_logging()

                mock_configure.assert_called_once()

    def test_configure_logging_ci_uses_json(self) -> None:
        """Test that CI runs render JSON."""
        with patch("cache_conformance.core.logging.get_settings") as mock_settings:
            mock_settings.return_value.environment = "ci"
            mock_settings.return_value.log_level = "INFO"

            with patch("cache_conformance.core.logging.structlog.configure") as mock_configure:
                logging_module._configured = False

                configure_logging()

                processors = mock_configure.call_args.kwargs["processors"]
                assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_configure_logging_idempotent(self) -> None:
        """Test that a second call does not reconfigure."""
        with patch("cache_conformance.core.logging.get_settings") as mock_settings:
            mock_settings.return_value.environment = "development"
            mock_settings.return_value.log_level = "INFO"

            with patch("cache_conformance.core.logging.structlog.configure") as mock_configure:
                logging_module._configured = False

                configure_logging()
                configure_logging()

                assert mock_configure.call_count == 1

    def test_configure_logging_force(self) -> None:
        """Test that force=True reconfigures."""
        with patch("cache_conformance.core.logging.get_settings") as mock_settings:
            mock_settings.return_value.environment = "development"
            mock_settings.return_value.log_level = "INFO"

            with patch("cache_conformance.core.logging.structlog.configure") as mock_configure:
                logging_module._configured = False

                configure_logging()
                configure_logging(force=True)

                assert mock_configure.call_count == 2


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_with_name(self) -> None:
        """Test getting a named logger."""
        with patch("cache_conformance.core.logging.structlog.get_logger") as mock_get:
            mock_logger = MagicMock()
            mock_get.return_value = mock_logger

            logger = get_logger("test_module")

            mock_get.assert_called_once_with("test_module")
            assert logger is mock_logger


class TestAddSuiteContext:
    """Tests for add_suite_context processor."""

    def test_adds_suite_and_environment(self) -> None:
        with patch("cache_conformance.core.logging.get_settings") as mock_settings:
            mock_settings.return_value.suite_name = "cache-conformance"
            mock_settings.return_value.environment = "test"

            event = add_suite_context(MagicMock(), "info", {"event": "case_passed"})

        assert event["suite"] == "cache-conformance"
        assert event["environment"] == "test"
        assert event["event"] == "case_passed"
