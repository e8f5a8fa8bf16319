import pathlib
import sys

import pytest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from rbxmarshal.catalog import clear_cache


@pytest.fixture
def fresh_catalog():
    """Drop cached palette tables before and after the test."""
    clear_cache()
    yield
    clear_cache()
