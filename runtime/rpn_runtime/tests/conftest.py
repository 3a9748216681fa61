"""
Pytest configuration and fixtures for rpn_runtime tests.
"""

import os
import sys

import pytest

# Add grandparent directory to path for imports (to find rpn_runtime package)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from rpn_runtime.config import get_settings
from rpn_runtime.operators import OperatorTable


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test with default settings, unaffected by RPN_* variables."""
    for name in list(os.environ):
        if name.upper().startswith("RPN_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def table():
    """Fresh operator table seeded with the standard operators."""
    return OperatorTable()
