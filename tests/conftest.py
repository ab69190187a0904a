"""
Pytest configuration and shared fixtures for sum tree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Pins the process-wide runtime config so env/.env files don't leak in
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

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

SCENARIO_BALANCES = _common.SCENARIO_BALANCES
make_balances = _common.make_balances

from sumtree.config import RuntimeConfig, set_default_config
from sumtree.merkle import MerkleSumTree


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def default_config():
    """Run every test against the built-in defaults."""
    config = RuntimeConfig()
    set_default_config(config)
    yield config
    set_default_config(None)


@pytest.fixture
def balances():
    """The five-balance scenario list."""
    return list(SCENARIO_BALANCES)


@pytest.fixture
def five_balance_tree(balances):
    """Tree built from the five-balance scenario."""
    return MerkleSumTree.build(balances)


@pytest.fixture(params=[1, 2, 3, 4, 5, 7, 8, 9, 16, 33])
def sized_balances(request):
    """Balance lists of assorted sizes, balanced and unbalanced."""
    return make_balances(request.param)
