"""
Shape-pair dispatcher.

Composite shapes are expanded into primitives (polygon -> edges, sector -> arc
and radii), arcs are replaced by the circle or ellipse they lie on, and each
pair of primitives is resolved through a table keyed by their ``ShapeKind``.
Points found on an arc's base shape are kept only when they fall inside the
arc's angular span.
"""

import functools
import itertools
import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from . import algebra
from .exceptions import UnsupportedShapeError
from .geometry import Point, Segment, Shape, ShapeKind

logger = logging.getLogger(__name__)

Solver = Callable[[Shape, Shape], List[Point]]

_SOLVERS: Dict[Tuple[ShapeKind, ShapeKind], Solver] = {}


def _swapped(solver: Solver) -> Solver:
    @functools.wraps(solver)
    def wrapper(first: Shape, second: Shape) -> List[Point]:
        return solver(second, first)
    return wrapper


def register_solver(kind_a: ShapeKind, kind_b: ShapeKind, solver: Solver):
    """
    Registers the solver for a pair of primitive kinds.

    The mirrored pair is registered too, calling ``solver`` with its arguments
    swapped.

    Args:
        kind_a: Kind of the first argument of ``solver``.
        kind_b: Kind of the second argument of ``solver``.
        solver: Callable returning the intersection points of two primitives.
    """
    _SOLVERS[(kind_a, kind_b)] = solver
    if kind_a is not kind_b:
        _SOLVERS[(kind_b, kind_a)] = _swapped(solver)


for _kind_a, _kind_b, _solver in (
    (ShapeKind.SEGMENT, ShapeKind.SEGMENT, algebra.segment_segment),
    (ShapeKind.SEGMENT, ShapeKind.CIRCLE, algebra.segment_circle),
    (ShapeKind.SEGMENT, ShapeKind.ELLIPSE, algebra.segment_ellipse),
    (ShapeKind.CIRCLE, ShapeKind.CIRCLE, algebra.circle_circle),
    (ShapeKind.ELLIPSE, ShapeKind.CIRCLE, algebra.ellipse_circle),
    (ShapeKind.ELLIPSE, ShapeKind.ELLIPSE, algebra.ellipse_ellipse),
):
    register_solver(_kind_a, _kind_b, _solver)


def _check_shape(shape) -> Shape:
    if not isinstance(shape, Shape):
        raise UnsupportedShapeError(f"Cannot intersect object of type {type(shape).__name__}")
    return shape


def _expand(shape: Shape) -> List[Shape]:
    """Splits composite shapes into the pieces forming their boundary."""
    if shape.kind is ShapeKind.POLYGON:
        return shape.edges
    if shape.kind is ShapeKind.SECTOR:
        return [shape.arc, *shape.radii]
    return [shape]


_ORDER_KEYS: Dict[ShapeKind, Callable[[Shape], tuple]] = {
    ShapeKind.SEGMENT: lambda s: (s.p1.to_tuple(), s.p2.to_tuple()),
    ShapeKind.CIRCLE: lambda c: (c.center.to_tuple(), c.radius),
    ShapeKind.ELLIPSE: lambda e: (e.center.to_tuple(), e.semi_axes),
}


def _intersect_primitives(first: Shape, second: Shape) -> List[Point]:
    arcs = [piece for piece in (first, second) if piece.kind is ShapeKind.ARC]
    base_first = first.base_shape() if first.kind is ShapeKind.ARC else first
    base_second = second.base_shape() if second.kind is ShapeKind.ARC else second

    # Same-kind pairs are solved in one fixed order, whichever way they were given
    order_key = _ORDER_KEYS.get(base_first.kind)
    if base_first.kind is base_second.kind and order_key is not None:
        base_first, base_second = sorted((base_first, base_second), key=order_key)

    solver = _SOLVERS.get((base_first.kind, base_second.kind))
    if solver is None:
        raise UnsupportedShapeError(f"No solver for {base_first.kind.value} x {base_second.kind.value}")

    points = solver(base_first, base_second)
    return [point for point in points if all(arc.in_radar(point) for arc in arcs)]


def remove_duplicated_points(points: Iterable[Point]) -> List[Point]:
    """
    Removes points sharing the same coordinates, keeping the first occurrence.

    Args:
        points: Points, typically rounded to the output precision.

    Returns:
        The unique points in their original order.
    """
    unique: Dict[Tuple[float, float], Point] = {}
    for point in points:
        unique.setdefault(point.to_tuple(), point)
    return list(unique.values())


def get_intersection_points(first: Shape, second: Shape) -> List[Point]:
    """
    Gets the points where the boundaries of two shapes meet.

    Args:
        first: A segment, polygon, circle, ellipse, arc or sector.
        second: Another shape of any of those kinds.

    Returns:
        The unique intersection points, rounded to the output precision.

    Raises:
        UnsupportedShapeError: If either argument is not a shape.
    """
    _check_shape(first)
    _check_shape(second)

    pieces_first = _expand(first)
    pieces_second = _expand(second)

    # Polygon edges drive the outer loop
    if second.kind is ShapeKind.POLYGON and first.kind is not ShapeKind.POLYGON:
        pairs = ((a, b) for b in pieces_second for a in pieces_first)
    else:
        pairs = itertools.product(pieces_first, pieces_second)

    points = []
    for a, b in pairs:
        points.extend(_intersect_primitives(a, b))

    unique = remove_duplicated_points(points)
    logger.debug("%s x %s: %d intersection point(s)", first.kind.value, second.kind.value, len(unique))
    return unique


def does_intersect(first: Shape, second: Shape) -> bool:
    """Checks if the boundaries of two shapes share at least one point."""
    return len(get_intersection_points(first, second)) > 0


def get_line_intersection(s1: Segment, s2: Segment) -> Optional[Point]:
    """Intersection of the infinite lines through two segments, None when parallel."""
    return algebra.line_line(s1, s2)


def is_point_on_line(point: Point, segment: Segment, threshold: float = 0) -> bool:
    return segment.is_on_line(point, threshold)


def is_point_on_segment(point: Point, segment: Segment, threshold: float = 0) -> bool:
    return segment.is_on_segment(point, threshold)


def are_lines_parallel(s1: Segment, s2: Segment) -> bool:
    return s1.is_parallel_to(s2)


def get_point_distance_to(point: Point, segment: Segment) -> float:
    """Perpendicular distance from the point to the line through the segment."""
    return segment.distance_to(point)
