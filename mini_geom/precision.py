# mini_geom/precision.py
"""
PRECISION: ONE TOLERANCE FOR THE WHOLE KERNEL
=============================================

PURPOSE:
--------
Floating-point geometry never compares with ==. Every predicate in this
package ("is this zero?", "are these points the same?", "are these lines
parallel?") asks this module for the current tolerance, so changing it
here changes the behaviour of the whole kernel consistently.

    approx_eq(a, b)  <=>  |a - b| <= epsilon()

CONFIGURATION:
--------------
The tolerance lives in a single PrecisionConfig instance (CONFIG). It is
process-wide state:

    set_epsilon(1e-9)        # permanent change
    reset_epsilon()          # back to DEFAULT_EPSILON

    with scoped_epsilon(1e-6):
        ...                  # temporary change, restored on every exit path

THREADING:
----------
Reading the tolerance is safe from any thread. scoped_epsilon() serialises
overrides through a module lock and restores the previous value before the
lock is released. Plain set_epsilon() calls from several threads are NOT
coordinated and race with each other; code that needs an isolated
tolerance per thread should pass an explicit `tolerance=` to the
predicates instead of touching the global value.
"""

import logging
import math
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from .errors import PrecisionError

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 1e-12

# Extra absolute slack on the ray parameter of Line.intersection(ray=True)
RAY_TOLERANCE = 1e-9


def _validate(value: float) -> float:
    value = float(value)
    if math.isnan(value) or math.isinf(value) or value < 0.0:
        raise PrecisionError(f"Epsilon must be a finite, non-negative number, got {value}")
    return value


@dataclass
class PrecisionConfig:
    """Global numeric configuration."""

    epsilon: float = DEFAULT_EPSILON

    def __post_init__(self):
        self.epsilon = _validate(self.epsilon)


# Global config instance
CONFIG = PrecisionConfig()

_override_lock = threading.RLock()


def epsilon() -> float:
    """Current global tolerance."""
    return CONFIG.epsilon


def set_epsilon(value: float) -> None:
    """
    Replace the global tolerance.

    Raises:
        PrecisionError: If value is negative, NaN or infinite
    """
    value = _validate(value)
    logger.debug("epsilon changed from %g to %g", CONFIG.epsilon, value)
    CONFIG.epsilon = value


def reset_epsilon() -> None:
    """Restore DEFAULT_EPSILON."""
    set_epsilon(DEFAULT_EPSILON)


def resolve(tolerance: Optional[float] = None) -> float:
    """Return `tolerance` if given, otherwise the global epsilon."""
    if tolerance is None:
        return CONFIG.epsilon
    return tolerance


def approx_eq(a: float, b: float, tolerance: Optional[float] = None) -> bool:
    """True when |a - b| <= tolerance (global epsilon by default)."""
    return abs(a - b) <= resolve(tolerance)


def is_zero(value: float, tolerance: Optional[float] = None) -> bool:
    return abs(value) <= resolve(tolerance)


@contextmanager
def scoped_epsilon(value: float) -> Iterator[float]:
    """
    Temporarily override the global tolerance.

    The previous value is restored when the block exits, including when it
    exits through an exception. Nested and concurrent scopes are serialised
    by a re-entrant lock.

    Example:
    --------
    >>> with scoped_epsilon(1e-6):
    ...     approx_eq(1.0, 1.0 + 1e-7)
    True
    """
    value = _validate(value)
    with _override_lock:
        previous = CONFIG.epsilon
        set_epsilon(value)
        try:
            yield value
        finally:
            set_epsilon(previous)
