"""
Floating point tolerance helpers shared by the geometry kernel.

All approximate comparisons and epsilon rounding go through this module so
that key point deduplication and segment intersection agree on what "the same
point" means.
"""

import math
import sys

# Single-precision machine epsilon (2 ** -23). Rounding to multiples of a power
# of two keeps the rounded coordinates exactly representable.
EPSILON = 2.0 ** -23

# Relative tolerance of a few units in the last place for large coordinates.
ULPS = 4


def approx_eq(left: float, right: float, epsilon: float = EPSILON) -> bool:
    """Check whether two floats are equal within absolute or ulps tolerance."""
    return math.isclose(left, right, rel_tol=ULPS * sys.float_info.epsilon, abs_tol=epsilon)


def approx_cmp(left: float, right: float, epsilon: float = EPSILON) -> int:
    """Three-way comparison which treats approximately equal values as equal."""
    if approx_eq(left, right, epsilon):
        return 0
    return -1 if left < right else 1


def round_to_epsilon(value: float, epsilon: float = EPSILON) -> float:
    """Round value to the nearest multiple of epsilon."""
    return round(value / epsilon) * epsilon


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Limit value to the [minimum, maximum] range."""
    return max(minimum, min(value, maximum))
