"""
Plane geometry over 2-D points.

Points are numpy arrays whose last axis is (x, y). Every function broadcasts,
so a whole column of scan windows can be handed over in one call.
"""
import numpy as np


def _xy(p):
    p = np.asarray(p, dtype=float)
    return p[..., 0], p[..., 1]


def distance(p, q):
    """Euclidean distance between p and q."""
    return np.linalg.norm(np.asarray(q, dtype=float) - np.asarray(p, dtype=float), axis=-1)


def angle_defined(p1, p2, p3):
    """False where p1 or p3 sits exactly on the vertex p2."""
    p1, p2, p3 = (np.asarray(p, dtype=float) for p in (p1, p2, p3))
    return ~(np.all(p1 == p2, axis=-1) | np.all(p3 == p2, axis=-1))


def angle(p1, p2, p3):
    """
    Included angle at vertex p2, in radians (0..pi).
    Undefined where angle_defined() is False; callers filter those first.
    """
    p1, p2, p3 = (np.asarray(p, dtype=float) for p in (p1, p2, p3))
    v1 = p1 - p2
    v2 = p3 - p2

    dot_product = np.sum(v1 * v2, axis=-1)
    magnitudes = np.linalg.norm(v1, axis=-1) * np.linalg.norm(v2, axis=-1)

    # Clip rounding overshoot so arccos never sees |x| > 1
    return np.arccos(np.clip(dot_product / magnitudes, -1.0, 1.0))


def triangle_area(p1, p2, p3):
    (x1, y1), (x2, y2), (x3, y3) = _xy(p1), _xy(p2), _xy(p3)
    return 0.5 * np.abs(x1 * (y2 - y3) + x2 * (y3 - y1) + x3 * (y1 - y2))


def point_line_distance(p, a, b):
    """
    Perpendicular distance from p to the infinite line through a and b.
    Falls back to distance(p, a) where a and b coincide.
    """
    p, a, b = (np.asarray(v, dtype=float) for v in (p, a, b))
    ab = b - a
    ap = p - a
    base = np.linalg.norm(ab, axis=-1)
    cross = np.abs(ab[..., 0] * ap[..., 1] - ab[..., 1] * ap[..., 0])

    degenerate = base == 0
    with np.errstate(divide='ignore', invalid='ignore'):
        line_dist = cross / np.where(degenerate, 1.0, base)
    return np.where(degenerate, np.linalg.norm(ap, axis=-1), line_dist)


def enclosing_radius(p1, p2, p3):
    """
    Radius of the smallest circle holding all three points.

    Right, obtuse and collinear triangles are bounded by the circle on their
    longest side; acute ones by their circumcircle.
    """
    a = distance(p2, p3)
    b = distance(p1, p3)
    c = distance(p1, p2)
    sides = np.sort(np.stack([a, b, c], axis=-1), axis=-1)
    shortest, middle, longest = sides[..., 0], sides[..., 1], sides[..., 2]

    area = triangle_area(p1, p2, p3)
    not_acute = longest ** 2 >= shortest ** 2 + middle ** 2
    with np.errstate(divide='ignore', invalid='ignore'):
        circumradius = (a * b * c) / (4.0 * area)
    return np.where(not_acute | (area == 0), longest / 2.0, circumradius)


def quadrant(p):
    """
    Quadrant number 1-4 of p. Points on an axis are resolved with priority
    I > II > III > IV: (0,0), (0,+y) and (+x,0) are I, (-x,0) is II and
    (0,-y) is III.
    """
    x, y = _xy(p)
    return np.where(
        y >= 0,
        np.where(x >= 0, 1, 2),
        np.where(x <= 0, 3, 4),
    )
