"""Tests for CLI logging setup."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from patscan import _logging
from patscan._logging import LOG_FORMAT, resolve_level, setup_logging, verbosity_level


@pytest.fixture
def package_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[logging.Logger]:
    """The "patscan" logger, restored after the test."""
    monkeypatch.setattr(_logging, "_handler", None)
    monkeypatch.delenv("PATSCAN_LOG_LEVEL", raising=False)
    logger = logging.getLogger("patscan")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestResolveLevel:
    def test_default_is_warning(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PATSCAN_LOG_LEVEL", raising=False)
        assert resolve_level() == logging.WARNING

    def test_explicit_level(self) -> None:
        assert resolve_level(" debug ") == logging.DEBUG

    def test_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATSCAN_LOG_LEVEL", "info")
        assert resolve_level() == logging.INFO

    def test_argument_beats_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATSCAN_LOG_LEVEL", "info")
        assert resolve_level("ERROR") == logging.ERROR

    def test_unknown_level_falls_back(self) -> None:
        assert resolve_level("chatty") == logging.WARNING


class TestSetupLogging:
    def test_sets_package_level(self, package_logger: logging.Logger) -> None:
        setup_logging("DEBUG")
        assert package_logger.level == logging.DEBUG

    def test_handler_format(self, package_logger: logging.Logger) -> None:
        handler = setup_logging()
        assert handler in package_logger.handlers
        assert handler.formatter is not None
        assert handler.formatter._fmt == LOG_FORMAT

    def test_single_handler_across_calls(self, package_logger: logging.Logger) -> None:
        before = len(package_logger.handlers)
        first = setup_logging("DEBUG")
        second = setup_logging("ERROR")
        assert first is second
        assert len(package_logger.handlers) == before + 1
        assert package_logger.level == logging.ERROR

    def test_root_logger_untouched(self, package_logger: logging.Logger) -> None:
        root_handlers = list(logging.getLogger().handlers)
        setup_logging("DEBUG")
        assert logging.getLogger().handlers == root_handlers


class TestVerbosityLevel:
    @pytest.mark.parametrize(
        ("verbose", "level"), [(0, None), (1, "INFO"), (2, "DEBUG"), (5, "DEBUG")]
    )
    def test_mapping(self, verbose: int, level: str | None) -> None:
        assert verbosity_level(verbose) == level
