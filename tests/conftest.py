"""
Pytest configuration and shared fixtures for SafeExec tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from safe_exec import SafeExec  # noqa: E402
from safe_exec.config import SafeExecConfig, UnhandledConfig  # noqa: E402
from safe_exec.types import UnhandledPolicy  # noqa: E402


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def engine() -> SafeExec:
    """Fresh engine with the default (exit) unhandled policy."""
    return SafeExec()


@pytest.fixture
def raising_engine() -> SafeExec:
    """Fresh engine that raises SafeExecError for unhandled failures."""
    return SafeExec(
        config=SafeExecConfig(unhandled=UnhandledConfig(policy=UnhandledPolicy.RAISE))
    )


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "property: Property-based tests")
