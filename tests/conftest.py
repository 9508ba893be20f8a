"""Pytest configuration and shared fixtures for mdchunk tests."""

import os
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from mdchunk.config.defaults import ENV_VAR_MAP


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for test file operations.

    Yields:
        Path to temporary directory

    Cleanup:
        Automatically removes directory after test
    """
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def isolated_env() -> Generator[dict[str, str]]:
    """Provide environment variables without any chunking settings.

    Removes CHUNKING_MODE, CHUNK_SIZE and CHUNK_OVERLAP for the duration of
    the test and restores the original environment afterwards.

    Yields:
        Dictionary of original environment variables
    """
    original_env = os.environ.copy()
    for env_var in ENV_VAR_MAP.values():
        os.environ.pop(env_var, None)
    yield original_env
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def fixture_dir() -> Path:
    """Get path to test fixtures directory.

    Returns:
        Path to tests/fixtures directory
    """
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def documents_dir(fixture_dir: Path) -> Path:
    """Directory of sample markdown documents."""
    return fixture_dir / "documents"


@pytest.fixture
def write_documents(temp_dir: Path):
    """Factory writing markdown documents into a fresh temp directory.

    Returns:
        Callable taking a ``{file_name: text}`` mapping and returning the
        directory path.
    """

    def _write(documents: dict[str, str]) -> Path:
        for name, text in documents.items():
            (temp_dir / name).write_text(text, encoding="utf-8")
        return temp_dir

    return _write
