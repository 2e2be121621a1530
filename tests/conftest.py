"""Shared fixtures for the testlang test suite."""

import logging
from pathlib import Path
from typing import Callable

import pytest

from testlang.logging import LOGGER_NAME, configure_structlog


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI runs attach a handler bound to a temporary stream; undo that."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    configure_structlog()


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[..., Path]:
    """Write TestLang++ source to a file under tmp_path."""

    def _write(text: str, name: str = "api.test") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
