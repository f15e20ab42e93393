"""Tests for structlog configuration."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
import structlog

from archctl.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("archctl").setLevel(logging.NOTSET)
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_default_level_is_warning(self) -> None:
        configure_logging()
        assert logging.getLogger("archctl").level == logging.WARNING

    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("archctl").level == logging.DEBUG

    def test_single_stderr_handler(self) -> None:
        configure_logging()
        configure_logging()
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)

    def test_mcp_logger_quiet(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("mcp").level == logging.WARNING

    def test_json_mode_emits_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("archctl.test").warning("hello %s", "world")
        err = capsys.readouterr().err
        assert '"event": "hello world"' in err
        assert '"level": "warning"' in err
