# tests/test_precision.py
"""
Test the global tolerance: defaults, validation and scoped overrides.
"""

import threading

import pytest

from mini_geom import precision
from mini_geom.errors import GeometryError, PrecisionError
from mini_geom.precision import (
    DEFAULT_EPSILON,
    approx_eq,
    epsilon,
    is_zero,
    reset_epsilon,
    scoped_epsilon,
    set_epsilon,
)
from mini_geom.vector import Vector3


def test_default_epsilon():
    assert epsilon() == DEFAULT_EPSILON == 1e-12
    assert precision.CONFIG.epsilon == 1e-12
    print("✓ Default epsilon is 1e-12")


def test_set_and_reset_epsilon():
    set_epsilon(1e-6)
    assert epsilon() == 1e-6
    assert approx_eq(1.0, 1.0 + 5e-7)

    reset_epsilon()
    assert epsilon() == DEFAULT_EPSILON
    assert not approx_eq(1.0, 1.0 + 5e-7)
    print("✓ set_epsilon / reset_epsilon work")


@pytest.mark.parametrize("bad", [-1e-9, float("nan"), float("inf")])
def test_set_epsilon_rejects_invalid_values(bad):
    with pytest.raises(PrecisionError):
        set_epsilon(bad)
    # The failed call must not change the tolerance
    assert epsilon() == DEFAULT_EPSILON


def test_precision_error_is_a_value_error():
    assert issubclass(PrecisionError, GeometryError)
    assert issubclass(PrecisionError, ValueError)


def test_zero_epsilon_is_allowed():
    set_epsilon(0.0)
    assert approx_eq(0.25, 0.25)
    assert not approx_eq(0.25, 0.25 + 1e-15)


def test_approx_eq_boundary_and_explicit_tolerance():
    """|a - b| <= eps is inclusive; an explicit tolerance overrides the global one."""
    assert approx_eq(0.0, 1e-12)
    assert not approx_eq(0.0, 1e-11)
    assert approx_eq(0.0, 1e-11, tolerance=1e-10)
    assert is_zero(-1e-13)
    assert not is_zero(1e-3, tolerance=1e-4)


def test_scoped_epsilon_restores_previous_value():
    set_epsilon(1e-9)
    with scoped_epsilon(1e-3) as value:
        assert value == 1e-3
        assert epsilon() == 1e-3
        with scoped_epsilon(1e-5):
            assert epsilon() == 1e-5
        assert epsilon() == 1e-3
    assert epsilon() == 1e-9
    print("✓ Nested scoped overrides restore in order")


def test_scoped_epsilon_restores_on_exception():
    """
    The override must be undone even when the block fails; otherwise a
    single failing computation would change the tolerance for everything
    that runs after it.
    """
    with pytest.raises(RuntimeError):
        with scoped_epsilon(0.5):
            assert epsilon() == 0.5
            raise RuntimeError("boom")
    assert epsilon() == DEFAULT_EPSILON
    print("✓ Scoped override restored after exception")


def test_scoped_epsilon_rejects_invalid_value_without_side_effects():
    with pytest.raises(PrecisionError):
        with scoped_epsilon(-1.0):
            pass
    assert epsilon() == DEFAULT_EPSILON


def test_scoped_epsilon_changes_predicates_consistently():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(1.0, 2.0, 3.0 + 5e-6)
    assert not a.is_approx(b)
    with scoped_epsilon(1e-5):
        assert a.is_approx(b)
        assert a == b
    assert a != b


def test_scoped_epsilon_serialises_threads():
    """Overrides from several threads never observe each other's value."""
    errors = []

    def worker(value):
        for _ in range(50):
            with scoped_epsilon(value):
                if epsilon() != value:
                    errors.append((value, epsilon()))

    threads = [threading.Thread(target=worker, args=(v,)) for v in (1e-3, 1e-6, 1e-9)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert epsilon() == DEFAULT_EPSILON
    print("✓ Concurrent scoped overrides are serialised")
