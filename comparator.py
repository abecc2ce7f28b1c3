"""
Tolerant floating point comparison.

Every threshold test in the predicate bank goes through here so that rounding
noise below ``config.COMPARE_TOLERANCE`` reads as equality.
"""
import enum

import numpy as np

import config


class Comparison(enum.Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def compare_array(a, b):
    """
    Elementwise three-way comparison: -1 (LESS), 0 (EQUAL) or 1 (GREATER).
    Differences below the tolerance are EQUAL; inf vs inf is EQUAL.
    NaN has no ordering and raises ValueError.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if np.any(np.isnan(a)) or np.any(np.isnan(b)):
        raise ValueError("cannot compare NaN")

    with np.errstate(invalid='ignore'):
        equal = (a == b) | (np.abs(a - b) < config.COMPARE_TOLERANCE)
    return np.where(equal, 0, np.where(a < b, -1, 1))


def compare(a, b):
    """Three-way comparison of two reals, as a Comparison."""
    return Comparison(int(compare_array(a, b)))


def is_less(a, b):
    """Elementwise ``compare(a, b) is LESS``."""
    return compare_array(a, b) == Comparison.LESS.value


def is_greater(a, b):
    """Elementwise ``compare(a, b) is GREATER``."""
    return compare_array(a, b) == Comparison.GREATER.value
