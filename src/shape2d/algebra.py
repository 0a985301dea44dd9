"""
Closed-form intersections between segments, circles and axis-aligned ellipses.

Every solver takes primitive shapes and returns the intersection points with
coordinates rounded to the output precision. Degenerate configurations
(zero-length segments, parallel lines, concentric circles) yield no points.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

from .geometry import Point, Segment
from .polynomial import Polynomial
from .tolerance import CONIC_EPSILON, TOLERANCE, is_zero, round_coordinate

logger = logging.getLogger(__name__)

Conic = Tuple[float, float, float, float, float, float]


def _in_unit_interval(t: float) -> bool:
    return -TOLERANCE <= t <= 1 + TOLERANCE


def _point_at(segment: Segment, t: float) -> Point:
    """Point at parameter ``t`` along ``segment``, rounded."""
    x = segment.p1.x + (segment.p2.x - segment.p1.x) * t
    y = segment.p1.y + (segment.p2.y - segment.p1.y) * t
    return Point(round_coordinate(x), round_coordinate(y))


def line_line(s1: Segment, s2: Segment) -> Optional[Point]:
    """
    Intersects the infinite lines through two segments.

    Args:
        s1: First line, given by two of its points.
        s2: Second line, given by two of its points.

    Returns:
        The rounded intersection point, or None if the lines are parallel.
    """
    denominator = s1.denominator(s2)
    if is_zero(denominator):
        return None

    det1 = s1.p1.x * s1.p2.y - s1.p1.y * s1.p2.x
    det2 = s2.p1.x * s2.p2.y - s2.p1.y * s2.p2.x
    x = (det1 * (s2.p1.x - s2.p2.x) - (s1.p1.x - s1.p2.x) * det2) / denominator
    y = (det1 * (s2.p1.y - s2.p2.y) - (s1.p1.y - s1.p2.y) * det2) / denominator
    return Point(round_coordinate(x), round_coordinate(y))


def segment_segment(s1: Segment, s2: Segment) -> List[Point]:
    """
    Intersects two segments.

    Both segment parameters of the crossing point must lie in [0, 1], up to the
    shared tolerance. Parallel and collinear segments yield no point.

    Returns:
        A list holding the crossing point, or an empty list.
    """
    x1, y1 = s1.p1.x, s1.p1.y
    x2, y2 = s1.p2.x, s1.p2.y
    x3, y3 = s2.p1.x, s2.p1.y
    x4, y4 = s2.p2.x, s2.p2.y

    denominator = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if is_zero(denominator):
        return []

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denominator
    u = ((x1 - x3) * (y1 - y2) - (y1 - y3) * (x1 - x2)) / denominator
    if _in_unit_interval(t) and _in_unit_interval(u):
        return [_point_at(s1, t)]
    return []


def segment_circle(segment: Segment, circle) -> List[Point]:
    """
    Intersects a segment with a circle.

    Solves |p1 + u (p2 - p1) - center|^2 = r^2 for u. A discriminant within
    tolerance of zero is a tangency; the contact point is then the foot of the
    perpendicular dropped from the center onto the segment.

    Args:
        segment: The segment.
        circle: A Circle.

    Returns:
        Up to two points, the one with the larger parameter first.
    """
    p1, p2 = segment.p1, segment.p2
    center, radius = circle.center, circle.radius

    dx = p2.x - p1.x
    dy = p2.y - p1.y
    a = dx * dx + dy * dy
    if a == 0:
        return []

    b = 2 * (dx * (p1.x - center.x) + dy * (p1.y - center.y))
    c = (center.x * center.x + center.y * center.y + p1.x * p1.x + p1.y * p1.y
         - 2 * (center.x * p1.x + center.y * p1.y) - radius * radius)
    discriminant = b * b - 4 * a * c

    # Squared half chord, r^2 minus the squared distance from the center to the line
    half_chord = discriminant / (4 * a)
    if half_chord < -TOLERANCE:
        return []

    if is_zero(half_chord):
        # Tangent: the contact point is the foot of the perpendicular from the center
        u = -b / (2 * a)
        return [_point_at(segment, u)] if _in_unit_interval(u) else []

    e = math.sqrt(discriminant)
    params = ((-b + e) / (2 * a), (-b - e) / (2 * a))
    return [_point_at(segment, u) for u in params if _in_unit_interval(u)]


def circle_circle(c1, c2) -> List[Point]:
    """
    Intersects two circles.

    Args:
        c1: First Circle.
        c2: Second Circle.

    Returns:
        Zero, one (tangency) or two points. Concentric circles yield none.
    """
    r1, r2 = c1.radius, c2.radius
    dx = c2.center.x - c1.center.x
    dy = c2.center.y - c1.center.y
    d = math.hypot(dx, dy)

    if d == 0 or d > r1 + r2 + TOLERANCE or d < abs(r1 - r2) - TOLERANCE:
        return []

    # Distance from c1 to the chord, along the line of centers
    a = (r1 * r1 - r2 * r2 + d * d) / (2 * d)
    h = math.sqrt(max(r1 * r1 - a * a, 0))
    px = c1.center.x + dx * a / d
    py = c1.center.y + dy * a / d

    if h <= TOLERANCE:
        return [Point(round_coordinate(px), round_coordinate(py))]

    b = h / d
    return [
        Point(round_coordinate(px - b * dy), round_coordinate(py + b * dx)),
        Point(round_coordinate(px + b * dy), round_coordinate(py - b * dx)),
    ]


def segment_ellipse(segment: Segment, ellipse) -> List[Point]:
    """
    Intersects a segment with an axis-aligned ellipse.

    The segment direction and its offset from the center are scaled by 1/rx^2 and
    1/ry^2 component-wise, which turns the ellipse equation into a quadratic in
    the segment parameter.

    Args:
        segment: The segment.
        ellipse: An Ellipse.

    Returns:
        Up to two points in increasing parameter order.
    """
    rx, ry = ellipse.semi_axes
    center = ellipse.center
    p1, p2 = segment.p1, segment.p2

    dir_x, dir_y = p2.x - p1.x, p2.y - p1.y
    diff_x, diff_y = p1.x - center.x, p1.y - center.y
    m_dir_x, m_dir_y = dir_x / (rx * rx), dir_y / (ry * ry)
    m_diff_x, m_diff_y = diff_x / (rx * rx), diff_y / (ry * ry)

    a = dir_x * m_dir_x + dir_y * m_dir_y
    if a == 0:
        return []
    b = dir_x * m_diff_x + dir_y * m_diff_y
    c = diff_x * m_diff_x + diff_y * m_diff_y - 1
    d = b * b - a * c

    if d < -TOLERANCE:
        return []
    if d <= TOLERANCE:
        params = (-b / a,)
    else:
        root = math.sqrt(d)
        params = ((-b - root) / a, (-b + root) / a)
    return [_point_at(segment, t) for t in params if _in_unit_interval(t)]


def conic_coefficients(center: Point, rx: float, ry: float) -> Conic:
    """
    Coefficients (A, B, C, D, E, F) of A x^2 + B xy + C y^2 + D x + E y + F = 0 for
    the axis-aligned ellipse with semi-axes ``rx`` and ``ry``; B is always zero.
    """
    rx2, ry2 = rx * rx, ry * ry
    return (
        ry2,
        0.0,
        rx2,
        -2 * ry2 * center.x,
        -2 * rx2 * center.y,
        ry2 * center.x * center.x + rx2 * center.y * center.y - rx2 * ry2,
    )


def bezout(e1: Sequence[float], e2: Sequence[float]) -> Polynomial:
    """
    Bezout resultant of two conics, eliminating x.

    Args:
        e1: Coefficients (A, B, C, D, E, F) of the first conic.
        e2: Coefficients of the second conic.

    Returns:
        A quartic in y whose real roots are the y coordinates of the common points.
    """
    AB = e1[0] * e2[1] - e2[0] * e1[1]
    AC = e1[0] * e2[2] - e2[0] * e1[2]
    AD = e1[0] * e2[3] - e2[0] * e1[3]
    AE = e1[0] * e2[4] - e2[0] * e1[4]
    AF = e1[0] * e2[5] - e2[0] * e1[5]
    BC = e1[1] * e2[2] - e2[1] * e1[2]
    BE = e1[1] * e2[4] - e2[1] * e1[4]
    BF = e1[1] * e2[5] - e2[1] * e1[5]
    CD = e1[2] * e2[3] - e2[2] * e1[3]
    DE = e1[3] * e2[4] - e2[3] * e1[4]
    DF = e1[3] * e2[5] - e2[3] * e1[5]
    BFpDE = BF + DE
    BEmCD = BE - CD

    return Polynomial(
        AB * BC - AC * AC,
        AB * BEmCD + AD * BC - 2 * AC * AE,
        AB * BFpDE + AD * BEmCD - AE * AE - 2 * AC * AF,
        AB * DF + AD * BFpDE - 2 * AE * AF,
        AD * DF - AF * AF,
    )


def _conic_residual(conic: Sequence[float], x: float, y: float) -> float:
    A, B, C, D, E, F = conic
    return A * x * x + B * x * y + C * y * y + D * x + E * y + F


def _conic_intersections(center1: Point, rx1: float, ry1: float,
                         center2: Point, rx2: float, ry2: float) -> List[Point]:
    a = conic_coefficients(center1, rx1, ry1)
    b = conic_coefficients(center2, rx2, ry2)

    y_roots = bezout(a, b).get_roots()
    norm0 = (a[0] * a[0] + 2 * a[1] * a[1] + a[2] * a[2]) * CONIC_EPSILON
    norm1 = (b[0] * b[0] + 2 * b[1] * b[1] + b[2] * b[2]) * CONIC_EPSILON

    points = []
    for y in y_roots:
        x_roots = Polynomial(a[0], a[3] + y * a[1], a[5] + y * (a[4] + y * a[2])).get_roots()
        for x in x_roots:
            if abs(_conic_residual(a, x, y)) < norm0 and abs(_conic_residual(b, x, y)) < norm1:
                points.append(Point(round_coordinate(x), round_coordinate(y)))

    logger.debug("Conic intersection: %d resultant root(s), %d point(s)", len(y_roots), len(points))
    return points


def ellipse_ellipse(e1, e2) -> List[Point]:
    """
    Intersects two axis-aligned ellipses through the Bezout resultant.

    Candidates from the resultant roots are kept only when they satisfy both
    ellipse equations within a tolerance proportional to the quadratic terms.
    """
    rx1, ry1 = e1.semi_axes
    rx2, ry2 = e2.semi_axes
    return _conic_intersections(e1.center, rx1, ry1, e2.center, rx2, ry2)


def ellipse_circle(ellipse, circle) -> List[Point]:
    """Intersects an ellipse with a circle, treated as an ellipse of equal semi-axes."""
    rx, ry = ellipse.semi_axes
    return _conic_intersections(ellipse.center, rx, ry, circle.center, circle.radius, circle.radius)
