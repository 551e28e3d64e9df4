"""
Pytest configuration and shared fixtures.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_common = importlib.import_module("fixtures.common")

make_maker_order = _common.make_maker_order
make_immutables = _common.make_immutables
make_secrets = _common.make_secrets

from core.config.runtime import RuntimeConfig


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def maker_order():
    """Provide the default single-part MakerOrder."""
    return make_maker_order()


@pytest.fixture
def immutables():
    """Provide default Immutables for a full fill of the default order."""
    return make_immutables()


@pytest.fixture
def runtime_config():
    """Provide a RuntimeConfig with defaults, untouched by the environment."""
    return RuntimeConfig()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every HASHLOCK_* variable for the duration of a test."""
    import os
    for key in list(os.environ):
        if key.startswith("HASHLOCK_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "cli: runs hashlock_cli.main end to end (deselect with '-m \"not cli\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


# =============================================================================
# Check helpers for preflight results
# =============================================================================

def _find_check(result, check_id: str):
    check = result.get(check_id)
    assert check is not None, f"No '{check_id}' check among {[c.check_id for c in result.checks]}"
    return check


@pytest.fixture
def assert_check_passed():
    """Assert a named check in a VerificationResult did not fail (warnings count as passing)."""
    def _assert(result, check_id: str):
        check = _find_check(result, check_id)
        assert check.ok, f"'{check_id}' failed: {check.message}"
    return _assert


@pytest.fixture
def assert_check_failed():
    """Assert a named check in a VerificationResult failed."""
    def _assert(result, check_id: str):
        check = _find_check(result, check_id)
        assert not check.ok, f"'{check_id}' unexpectedly passed: {check.message}"
    return _assert
