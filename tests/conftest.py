"""
Pytest configuration and shared fixtures for symmerkle tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used leaf fixtures
3. Isolates tests from SYMMERKLE_* environment variables and config files
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

from core.config import set_default_config  # noqa: E402
from fixtures.common import leaf_of, make_leaves  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    """Run every test without SYMMERKLE_* env vars and outside any config dir."""
    for key in [
        "SYMMERKLE_HASH_ALGORITHM",
        "SYMMERKLE_DEBUG",
        "SYMMERKLE_LOG_LEVEL",
        "SYMMERKLE_LOG_FILE",
        "SYMMERKLE_OUTPUT_FORMAT",
    ]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def five_leaves():
    """[H(a), H(b), H(c), H(d), H(e)]."""
    return [leaf_of(c.encode()) for c in "abcde"]


@pytest.fixture
def seven_leaves():
    return make_leaves(7)
