# tests/conftest.py

"""Shared pytest fixtures for all plugin tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def no_retry_delay() -> Generator[None, None, None]:
    """Zero the client backoff so retry loops run instantly."""
    with patch.object(Settings, "RETRY_DELAY", 0.0):
        yield


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path) -> Generator[None, None, None]:
    """Keep image cache and node dumps out of the working tree."""
    with patch.object(Settings, "CACHE_DIR", tmp_path / "cache"), \
            patch.object(Settings, "RESULTS_DIR", tmp_path / "results"):
        yield
