"""Shared fixtures for CLI command tests."""

import logging
from collections.abc import Generator

import pytest
from click.testing import CliRunner

from mdchunk.lib.logging_config import ROOT_LOGGER_NAME


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_cli_logging(isolated_env: dict[str, str]) -> Generator[None]:
    """Detach handlers bound to the runner's streams after each command.

    Also runs every command test without chunking environment variables.
    """
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_mdchunk_handler", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
