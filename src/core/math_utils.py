"""
Numeric tolerance utilities.

Floating point comparisons used by the grid geometry and the scan
generator. Every test of a world coordinate against a cell boundary, or of
a beam angle against the field of view edge, goes through these helpers.

Comparison rule (http://realtimecollisiondetection.net/blog/?p=89):
    |a - b| <= eps * max(1, |a|, |b|)
"""

import math

# Empirical tuning constant; sys.float_info.epsilon is too small
DEFAULT_EPSILON = 1e-7


def are_equal(a: float, b: float, eps: float = DEFAULT_EPSILON) -> bool:
    """Check equality with both absolute and relative tolerance."""
    eps_scale = max(1.0, abs(a), abs(b))
    return abs(a - b) <= eps * eps_scale


def is_multiple_of(value: float, factor: float,
                   eps: float = DEFAULT_EPSILON) -> bool:
    """Check that value / factor is an integer (within tolerance)."""
    ratio = value / factor
    return are_equal(ratio, math.trunc(ratio), eps) or \
        are_equal(ratio, round(ratio), eps)


def less_or_equal(a: float, b: float, eps: float = DEFAULT_EPSILON) -> bool:
    """a <= b, closing the boundary that rounding would otherwise open."""
    return are_equal(a, b, eps) or a < b


def are_ordered(a: float, b: float, c: float,
                eps: float = DEFAULT_EPSILON) -> bool:
    """a <= b <= c under less_or_equal."""
    return less_or_equal(a, b, eps) and less_or_equal(b, c, eps)


def tolerant_floor(value: float, eps: float = DEFAULT_EPSILON) -> int:
    """
    Floor that snaps values lying within tolerance of an integer.

    0.3 / 0.1 evaluates to 2.9999999999999996; a plain floor would put the
    point one cell too low.
    """
    nearest = round(value)
    if are_equal(value, nearest, eps):
        return int(nearest)
    return math.floor(value)


def deg_to_rad(angle_deg: float) -> float:
    return angle_deg * math.pi / 180


def rad_to_deg(angle_rad: float) -> float:
    return angle_rad * 180 / math.pi
