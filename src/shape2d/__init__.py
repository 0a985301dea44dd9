"""2D shapes and the intersection engine behind them."""

from .exceptions import Shape2dError, InvalidShapeError, UnsupportedShapeError
from .geometry import (
    Shape,
    ClosedShape,
    ShapeKind,
    Point,
    Vector,
    Segment,
    angle_between
)
from .shapes import (
    PolygonVariant,
    Polygon,
    Triangle,
    Rect,
    Circle,
    Ellipse,
    Arc,
    Sector,
    ShapeResult,
    make_polygon,
    make_triangle,
    make_quadrilateral,
    make_rect,
    make_square
)
from .polynomial import Polynomial, get_roots
from .radar import is_point_in_radar
from .intersection import (
    get_intersection_points,
    does_intersect,
    get_line_intersection,
    is_point_on_line,
    is_point_on_segment,
    are_lines_parallel,
    get_point_distance_to,
    remove_duplicated_points,
    register_solver
)

__all__ = [
    'Shape2dError',
    'InvalidShapeError',
    'UnsupportedShapeError',
    'Shape',
    'ClosedShape',
    'ShapeKind',
    'Point',
    'Vector',
    'Segment',
    'angle_between',
    'PolygonVariant',
    'Polygon',
    'Triangle',
    'Rect',
    'Circle',
    'Ellipse',
    'Arc',
    'Sector',
    'ShapeResult',
    'make_polygon',
    'make_triangle',
    'make_quadrilateral',
    'make_rect',
    'make_square',
    'Polynomial',
    'get_roots',
    'is_point_in_radar',
    'get_intersection_points',
    'does_intersect',
    'get_line_intersection',
    'is_point_on_line',
    'is_point_on_segment',
    'are_lines_parallel',
    'get_point_distance_to',
    'remove_duplicated_points',
    'register_solver'
]
