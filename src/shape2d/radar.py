"""Angular restriction of full-circle/ellipse results to an arc's span."""

from typing import Optional

from .geometry import Point, angle_between
from .tolerance import PRECISION


def is_point_in_radar(point: Point, from_: Point, to: Point, center: Point,
                      angle: Optional[float] = None) -> bool:
    """
    Checks if a point lies inside the angular span swept from ``from_`` to ``to``.

    The span is the (at most 180 degree) angle between the rays center->from_ and
    center->to. A point is inside when the angles it makes with both boundary rays
    add up to the span; both partial angles and their sum are rounded to the
    output precision before comparing.

    Args:
        point: The point to check.
        from_: Start point of the span.
        to: End point of the span.
        center: Common origin of both rays.
        angle: The span in degrees, if already known.

    Returns:
        True if the point is within the span, boundary rays included.
    """
    from_angle = angle_between(center, from_, center, point)
    to_angle = angle_between(center, to, center, point)
    if angle is None:
        angle = angle_between(center, from_, center, to)
    return round(from_angle + to_angle, PRECISION) == angle
