"""
Pytest configuration and shared fixtures for errqueue tests.
"""

import logging
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import yaml

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from errqueue.config import reset_config  # noqa: E402


# =============================================================================
# State Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Start every test from default configuration and an untouched errqueue logger level."""
    for name in (
        "ERRQUEUE_CONFIG_PATH",
        "ERRQUEUE_CAPTURE_STACKTRACE",
        "ERRQUEUE_STACKTRACE_DEPTH",
        "ERRQUEUE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
    logging.getLogger("errqueue").setLevel(logging.NOTSET)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[Any], Path]:
    """Return a helper writing YAML data to a temporary config file."""

    def _write(data: Any) -> Path:
        path = tmp_path / "errqueue.yaml"
        with path.open("w") as f:
            yaml.safe_dump(data, f)
        return path

    return _write


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "example: Usage scenario tests")
