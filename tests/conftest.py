# tests/conftest.py
import pytest

from mini_geom.precision import reset_epsilon


@pytest.fixture(autouse=True)
def default_epsilon():
    """Every test starts and ends with the default tolerance."""
    reset_epsilon()
    yield
    reset_epsilon()
