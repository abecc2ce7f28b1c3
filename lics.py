"""
Launch Interceptor Conditions.

Each evaluator takes the (N, 2) point array and a Parameters block and answers
whether at least one scan window confirms its condition. Windows that do not
fit the sequence simply do not exist, so a short sequence yields False.
"""
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

import config
from comparator import is_greater, is_less
from geometry import (
    angle, angle_defined, distance, enclosing_radius,
    point_line_distance, quadrant, triangle_area,
)
from model import LicId


def _windows(points, *offsets):
    """
    Columns of points at fixed offsets from every valid start index.
    ``_windows(pts, 0, 3)`` gives (pts[0:n], pts[3:3+n]) for the n starts
    whose last point is still inside the sequence.
    """
    count = max(len(points) - offsets[-1], 0)
    return tuple(points[offset:offset + count] for offset in offsets)


def _separated_triples(points, first_gap, second_gap):
    return _windows(points, 0, first_gap + 1, first_gap + second_gap + 2)


def _any(mask):
    return bool(np.any(mask))


def _angle_deviates(p1, p2, p3, epsilon):
    # Undefined angles never reach the primitive
    defined = angle_defined(p1, p2, p3)
    if not np.any(defined):
        return False
    angles = angle(p1[defined], p2[defined], p3[defined])
    return _any(is_less(angles, config.PI - epsilon) | is_greater(angles, config.PI + epsilon))


# ============================================================================
# CONSECUTIVE WINDOWS
# ============================================================================
def consecutive_distance(points, params):
    """Two consecutive points further apart than LENGTH1."""
    p, q = _windows(points, 0, 1)
    return _any(is_greater(distance(p, q), params.length1))


def consecutive_radius(points, params):
    """Three consecutive points that do not fit in a circle of RADIUS1."""
    p1, p2, p3 = _windows(points, 0, 1, 2)
    return _any(is_greater(enclosing_radius(p1, p2, p3), params.radius1))


def consecutive_angle(points, params):
    """Three consecutive points whose angle is outside PI +/- EPSILON."""
    p1, p2, p3 = _windows(points, 0, 1, 2)
    return _angle_deviates(p1, p2, p3, params.epsilon)


def consecutive_area(points, params):
    p1, p2, p3 = _windows(points, 0, 1, 2)
    return _any(is_greater(triangle_area(p1, p2, p3), params.area1))


def quadrant_spread(points, params):
    """Q_PTS consecutive points spread over more than QUADS quadrants."""
    q_pts, quads = params.q_pts, params.quads
    if q_pts < 2 or not 1 <= quads <= 3 or q_pts > len(points):
        return False

    runs = sliding_window_view(quadrant(points), q_pts)
    distinct = sum(np.any(runs == number, axis=1).astype(int) for number in (1, 2, 3, 4))
    return _any(distinct > quads)


def x_decrease(points, params):
    """Two consecutive points with X[i+1] - X[i] < 0."""
    x = points[:, 0]
    return _any(is_less(x[1:] - x[:-1], 0.0))


def line_deviation(points, params):
    """
    N_PTS consecutive points where some point lies further than DIST from the
    line through the first and last of them (or from the first point, when
    first and last coincide).
    """
    n_pts = params.n_pts
    if len(points) < 3 or not 3 <= n_pts <= len(points):
        return False

    # (runs, n_pts, 2) view; only one batch of runs is materialized at a time
    runs = np.swapaxes(sliding_window_view(points, n_pts, axis=0), 1, 2)
    batch = max(1, config.SCAN_CHUNK_POINTS // n_pts)
    for start in range(0, len(runs), batch):
        chunk = runs[start:start + batch]
        deviations = point_line_distance(chunk[:, 1:-1, :], chunk[:, :1, :], chunk[:, -1:, :])
        if _any(is_greater(deviations, params.dist)):
            return True
    return False


# ============================================================================
# SEPARATED WINDOWS
# ============================================================================
def _k_separated_distances(points, params):
    if len(points) < 3:
        return np.empty(0)
    p, q = _windows(points, 0, params.k_pts + 1)
    return distance(p, q)


def separated_distance(points, params):
    """Two points K_PTS apart further apart than LENGTH1."""
    return _any(is_greater(_k_separated_distances(points, params), params.length1))


def _ab_separated_radii(points, params):
    if len(points) < 5 or params.a_pts < 1 or params.b_pts < 1:
        return np.empty(0)
    return enclosing_radius(*_separated_triples(points, params.a_pts, params.b_pts))


def separated_radius(points, params):
    return _any(is_greater(_ab_separated_radii(points, params), params.radius1))


def separated_angle(points, params):
    if len(points) < 5 or params.c_pts < 1 or params.d_pts < 1:
        return False
    p1, p2, p3 = _separated_triples(points, params.c_pts, params.d_pts)
    return _angle_deviates(p1, p2, p3, params.epsilon)


def _ef_separated_areas(points, params):
    if len(points) < 5 or params.e_pts < 1 or params.f_pts < 1:
        return np.empty(0)
    return triangle_area(*_separated_triples(points, params.e_pts, params.f_pts))


def separated_area(points, params):
    return _any(is_greater(_ef_separated_areas(points, params), params.area1))


def separated_x_decrease(points, params):
    """Two points G_PTS apart with X[j] - X[i] < 0."""
    if len(points) < 3 or params.g_pts < 1:
        return False
    p, q = _windows(points, 0, params.g_pts + 1)
    return _any(is_less(q[:, 0] - p[:, 0], 0.0))


# ============================================================================
# TWO-THRESHOLD BANDS
# Each half of the condition is witnessed by its own window.
# ============================================================================
def separated_distance_band(points, params):
    distances = _k_separated_distances(points, params)
    return (_any(is_greater(distances, params.length1))
            and _any(is_less(distances, params.length2)))


def separated_radius_band(points, params):
    """
    Some A/B triple does not fit in RADIUS1 and some A/B triple fits
    in or on RADIUS2.
    """
    radii = _ab_separated_radii(points, params)
    return (_any(is_greater(radii, params.radius1))
            and _any(~is_greater(radii, params.radius2)))


def separated_area_band(points, params):
    areas = _ef_separated_areas(points, params)
    return (_any(is_greater(areas, params.area1))
            and _any(is_less(areas, params.area2)))


LIC_REGISTRY = {
    LicId.CONSECUTIVE_DISTANCE: consecutive_distance,
    LicId.CONSECUTIVE_RADIUS: consecutive_radius,
    LicId.CONSECUTIVE_ANGLE: consecutive_angle,
    LicId.CONSECUTIVE_AREA: consecutive_area,
    LicId.QUADRANT_SPREAD: quadrant_spread,
    LicId.X_DECREASE: x_decrease,
    LicId.LINE_DEVIATION: line_deviation,
    LicId.SEPARATED_DISTANCE: separated_distance,
    LicId.SEPARATED_RADIUS: separated_radius,
    LicId.SEPARATED_ANGLE: separated_angle,
    LicId.SEPARATED_AREA: separated_area,
    LicId.SEPARATED_X_DECREASE: separated_x_decrease,
    LicId.SEPARATED_DISTANCE_BAND: separated_distance_band,
    LicId.SEPARATED_RADIUS_BAND: separated_radius_band,
    LicId.SEPARATED_AREA_BAND: separated_area_band,
}
