"""
Closed and curved shapes: polygons, circles, ellipses, arcs and sectors.

Polygon variants (triangle, quadrilateral, rectangle, square) are ``Polygon``
instances tagged with a ``PolygonVariant``; triangles and rectangles get their
own subclasses. The ``make_*`` builders validate the input and report malformed
shapes through ``ShapeResult`` instead of raising.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np
from matplotlib.path import Path

from .exceptions import InvalidShapeError
from .geometry import ClosedShape, Point, Segment, Shape, ShapeKind, Vector, angle_between
from .radar import is_point_in_radar
from .tolerance import PRECISION, TOLERANCE, is_zero, round_coordinate

logger = logging.getLogger(__name__)


def _ellipse_area(a: float, b: float) -> float:
    return math.pi * a * b


def _ellipse_perimeter(a: float, b: float) -> float:
    # Root-mean-square approximation; exact for circles
    return 2 * math.pi * math.sqrt((a * a + b * b) / 2)


class PolygonVariant(Enum):
    """How a polygon was built; variants only differ in the vertices they accept."""
    POLYGON = "polygon"
    TRIANGLE = "triangle"
    QUADRILATERAL = "quadrilateral"
    RECT = "rect"
    SQUARE = "square"


_EXPECTED_VERTEX_COUNT = {
    PolygonVariant.TRIANGLE: 3,
    PolygonVariant.QUADRILATERAL: 4,
    PolygonVariant.RECT: 4,
    PolygonVariant.SQUARE: 4,
}


class Polygon(ClosedShape):
    """
    A closed polygon defined by its ordered vertices.

    Edges are derived on access and reference the polygon's own ``Point``
    objects, so translating or rotating the polygon moves its edges as well.
    """

    kind = ShapeKind.POLYGON

    def __init__(self, vertices: Sequence[Point], variant: PolygonVariant = PolygonVariant.POLYGON):
        vertices = list(vertices)
        if len(vertices) < 3:
            raise InvalidShapeError("Minimum number of vertices is 3")
        expected = _EXPECTED_VERTEX_COUNT.get(variant)
        if expected is not None and len(vertices) != expected:
            raise InvalidShapeError(f"A {variant.value} needs {expected} vertices, got {len(vertices)}")
        if not all(isinstance(vertex, Point) for vertex in vertices):
            raise InvalidShapeError("Polygon vertices must be Point instances")

        self._vertices = vertices
        self.variant = variant

    @classmethod
    def from_edges(cls, edges: Sequence[Segment], variant: PolygonVariant = PolygonVariant.POLYGON) -> "Polygon":
        """
        Builds a polygon from edges forming a closed cycle.

        Args:
            edges: Consecutive edges; each must start where the previous one ends
                and the last must end where the first starts.
            variant: The polygon variant tag.

        Returns:
            The polygon whose vertices are the start points of the edges.

        Raises:
            InvalidShapeError: If fewer than 3 edges are given or they are not closed.
        """
        edges = list(edges)
        if len(edges) < 3:
            raise InvalidShapeError("Minimum number of edges is 3")
        for current, following in zip(edges, edges[1:] + edges[:1]):
            if current.p2 != following.p1:
                raise InvalidShapeError(f"Edges do not form a closed cycle at {current.p2!r}")
        return cls([edge.p1 for edge in edges], variant)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._vertices!r}, variant={self.variant.value})"

    @property
    def vertices(self) -> List[Point]:
        return self._vertices

    @property
    def edges(self) -> List[Segment]:
        n = len(self._vertices)
        return [Segment(self._vertices[i], self._vertices[(i + 1) % n]) for i in range(n)]

    def to_array(self) -> np.ndarray:
        """Vertices as an (N, 2) float array."""
        return np.array([vertex.to_tuple() for vertex in self._vertices], dtype=float)

    @property
    def centroid(self) -> Point:
        """Mean of the vertices."""
        cx, cy = self.to_array().mean(axis=0)
        return Point(float(cx), float(cy))

    @property
    def signed_area(self) -> float:
        """Shoelace area; positive for counter-clockwise vertex order."""
        pts = self.to_array()
        x, y = pts[:, 0], pts[:, 1]
        return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))

    @property
    def area(self) -> float:
        """Sum of the areas of the fan triangulation."""
        triangles = np.array([[vertex.to_tuple() for vertex in triangle] for triangle in self.triangulate()],
                             dtype=float)
        ab = triangles[:, 1] - triangles[:, 0]
        ac = triangles[:, 2] - triangles[:, 0]
        cross = ab[:, 0] * ac[:, 1] - ab[:, 1] * ac[:, 0]
        return round(float(0.5 * np.abs(cross).sum()), PRECISION)

    @property
    def perimeter(self) -> float:
        return round(sum(edge.length for edge in self.edges), PRECISION)

    @property
    def interior_angles(self) -> List[float]:
        """
        Interior angle at each vertex, in degrees, in vertex order.

        Angles above 180 mark reflex vertices. The orientation of the vertex order
        is taken from the sign of the shoelace area.
        """
        edges = self.edges
        orientation = 1 if self.signed_area >= 0 else -1
        return [round(180 - orientation * edges[i - 1].angle_to(edges[i]), PRECISION)
                for i in range(len(edges))]

    @property
    def is_concave(self) -> bool:
        return any(angle > 180 for angle in self.interior_angles)

    @property
    def is_convex(self) -> bool:
        return not self.is_concave

    @property
    def is_equiangular(self) -> bool:
        return len(set(self.interior_angles)) == 1

    @property
    def is_equilateral(self) -> bool:
        return len({edge.length for edge in self.edges}) == 1

    def triangulate(self) -> List[Tuple[Point, Point, Point]]:
        """
        Splits the polygon into a triangle fan.

        The fan is anchored at the first reflex vertex if there is one, otherwise at
        the end of the first edge. Vertices are visited in polygon order from the
        anchor.

        Returns:
            N - 2 triangles sharing the polygon's Point objects.
        """
        n = len(self._vertices)
        angles = self.interior_angles
        order = list(range(1, n)) + [0]
        reflex = next((i for i in order if angles[i] > 180), None)
        if reflex is not None:
            k = order.index(reflex)
            order = order[k:] + order[:k]

        anchor = self._vertices[order[0]]
        return [(anchor, self._vertices[order[i]], self._vertices[order[i + 1]]) for i in range(1, n - 1)]

    def translate(self, vector: Vector):
        for vertex in self._vertices:
            vertex.translate(vector)

    def rotate(self, angle: float, origin: Optional[Point] = None):
        if angle == 0 or angle == 360:
            return
        for vertex in self._vertices:
            vertex.rotate(angle, origin)

    def is_on_edge(self, point: Point, threshold: float = 0) -> bool:
        return any(edge.is_on_segment(point, threshold) for edge in self.edges)

    def _on_boundary(self, point: Point) -> bool:
        for edge in self.edges:
            if (edge.distance_to(point) <= TOLERANCE
                    and min(edge.p1.x, edge.p2.x) - TOLERANCE <= point.x <= max(edge.p1.x, edge.p2.x) + TOLERANCE
                    and min(edge.p1.y, edge.p2.y) - TOLERANCE <= point.y <= max(edge.p1.y, edge.p2.y) + TOLERANCE):
                return True
        return False

    def contains(self, point: Point) -> bool:
        """
        Checks if the point is inside the polygon or on its boundary.

        Args:
            point: The point to check.
        """
        path = Path(self.to_array())
        return bool(path.contains_point(point.to_tuple())) or self._on_boundary(point)


class Triangle(Polygon):
    """
    A three-vertex polygon with its medians, centers and classification.

    ``centroid`` is inherited: the mean of the vertices is where the medians meet.
    """

    def __init__(self, vertices: Sequence[Point], variant: PolygonVariant = PolygonVariant.TRIANGLE):
        if variant is not PolygonVariant.TRIANGLE:
            raise InvalidShapeError(f"A triangle cannot be tagged as a {variant.value}")
        super().__init__(vertices, variant)

    @property
    def medians(self) -> List[Segment]:
        """Segments from each vertex to the middle of the opposite edge, in vertex order."""
        edges = self.edges
        return [Segment(edges[i].p1, edges[(i + 1) % 3].centroid) for i in range(3)]

    def _solve(self, rows, rhs) -> Point:
        # Both centers solve a 2x2 linear system, singular for collinear vertices
        if is_zero(self.signed_area):
            raise InvalidShapeError("The vertices of the triangle are collinear")
        x, y = np.linalg.solve(np.array(rows, dtype=float), np.array(rhs, dtype=float))
        return Point(round_coordinate(x), round_coordinate(y))

    @property
    def circumcenter(self) -> Point:
        """
        Center of the circle passing through the three vertices.

        Raises:
            InvalidShapeError: If the vertices are collinear.
        """
        a, b, c = self.to_array()
        return self._solve([b - a, c - a], [(b @ b - a @ a) / 2, (c @ c - a @ a) / 2])

    @property
    def orthocenter(self) -> Point:
        """
        Point where the three altitudes meet.

        Raises:
            InvalidShapeError: If the vertices are collinear.
        """
        a, b, c = self.to_array()
        return self._solve([c - b, a - c], [(c - b) @ a, (a - c) @ b])

    @property
    def is_right(self) -> bool:
        return 90 in self.interior_angles

    @property
    def is_isosceles(self) -> bool:
        """Exactly two edges share their length; equilateral triangles are not isosceles."""
        return len({edge.length for edge in self.edges}) == 2


class Rect(Polygon):
    """
    A rectangle, or a square when tagged ``PolygonVariant.SQUARE``.

    The first vertex is the rectangle's location; the corners must be right angles
    and a square's sides must be equal when it is built.
    """

    def __init__(self, vertices: Sequence[Point], variant: PolygonVariant = PolygonVariant.RECT):
        if variant not in (PolygonVariant.RECT, PolygonVariant.SQUARE):
            raise InvalidShapeError(f"A rectangle cannot be tagged as a {variant.value}")
        super().__init__(vertices, variant)
        if any(angle != 90 for angle in self.interior_angles):
            raise InvalidShapeError(f"A {variant.value} needs right angles, got {self.interior_angles}")
        if variant is PolygonVariant.SQUARE and not self.is_equilateral:
            raise InvalidShapeError("A square needs sides of equal length")

    @property
    def location(self) -> Point:
        return self._vertices[0]

    @property
    def width(self) -> float:
        return self.edges[0].length

    @property
    def height(self) -> float:
        return self.edges[1].length

    @property
    def center(self) -> Point:
        """Intersection of the diagonals."""
        a, c = self._vertices[0], self._vertices[2]
        return Point(round_coordinate((a.x + c.x) / 2), round_coordinate((a.y + c.y) / 2))


class Circle(ClosedShape):
    """A circle given by its center and radius."""

    kind = ShapeKind.CIRCLE

    def __init__(self, center: Point, radius: float):
        if radius < 0:
            raise InvalidShapeError(f"Circle radius must not be negative, got {radius}")
        self.center = center
        self.radius = radius

    def __repr__(self) -> str:
        return f"Circle({self.center!r}, {self.radius})"

    @property
    def diameter(self) -> float:
        return self.radius * 2

    @property
    def area(self) -> float:
        return round(_ellipse_area(self.radius, self.radius), PRECISION)

    @property
    def perimeter(self) -> float:
        return round(_ellipse_perimeter(self.radius, self.radius), PRECISION)

    def translate(self, vector: Vector):
        self.center.translate(vector)

    def rotate(self, angle: float, origin: Optional[Point] = None):
        self.center.rotate(angle, origin)

    def is_on_edge(self, point: Point, threshold: float = 0) -> bool:
        """Checks if the point's (rounded) distance to the center equals the radius within ``threshold``."""
        return abs(self.radius - self.center.distance_to(point)) <= threshold

    def contains(self, point: Point) -> bool:
        return self.center.distance_to(point) <= self.radius


class Ellipse(ClosedShape):
    """
    An axis-aligned ellipse.

    Args:
        center: The center of the ellipse.
        width: Full extent along the x axis.
        height: Full extent along the y axis.
    """

    kind = ShapeKind.ELLIPSE

    def __init__(self, center: Point, width: float, height: float):
        if width <= 0 or height <= 0:
            raise InvalidShapeError(f"Ellipse width and height must be positive, got {width}x{height}")
        self.center = center
        self.width = width
        self.height = height

    def __repr__(self) -> str:
        return f"Ellipse({self.center!r}, {self.width}, {self.height})"

    @property
    def semi_axes(self) -> Tuple[float, float]:
        return self.width / 2, self.height / 2

    @property
    def area(self) -> float:
        return round(_ellipse_area(*self.semi_axes), PRECISION)

    @property
    def perimeter(self) -> float:
        return round(_ellipse_perimeter(*self.semi_axes), PRECISION)

    @property
    def focal_distance(self) -> float:
        """Distance from the center to each focus."""
        a, b = self.semi_axes
        return math.sqrt(abs(a * a - b * b))

    @property
    def eccentricity(self) -> float:
        return round(self.focal_distance / max(self.semi_axes), PRECISION)

    @property
    def f1(self) -> Point:
        a, b = self.semi_axes
        c = self.focal_distance
        if a >= b:
            return Point(self.center.x - c, self.center.y)
        return Point(self.center.x, self.center.y - c)

    @property
    def f2(self) -> Point:
        a, b = self.semi_axes
        c = self.focal_distance
        if a >= b:
            return Point(self.center.x + c, self.center.y)
        return Point(self.center.x, self.center.y + c)

    def _level(self, point: Point) -> float:
        # 1 on the edge, below 1 inside
        a, b = self.semi_axes
        dx = point.x - self.center.x
        dy = point.y - self.center.y
        return dx * dx / (a * a) + dy * dy / (b * b)

    def translate(self, vector: Vector):
        self.center.translate(vector)

    def rotate(self, angle: float, origin: Optional[Point] = None):
        # Axis-aligned: only the center moves
        self.center.rotate(angle, origin)

    def is_on_edge(self, point: Point, threshold: float = 0) -> bool:
        return abs(round(self._level(point), PRECISION) - 1) <= threshold

    def contains(self, point: Point) -> bool:
        return self._level(point) <= 1


class Arc(Shape):
    """
    An arc from ``from_`` to ``to`` around ``center``.

    The arc is circular when both points are at the same (rounded) distance from
    the center. Otherwise it lies on the axis-aligned ellipse whose semi-axes are
    the distance to ``from_`` (x) and the distance to ``to`` (y). The arc covers
    the angular span between the two rays, which is at most 180 degrees.
    """

    kind = ShapeKind.ARC

    def __init__(self, from_: Point, to: Point, center: Point):
        if center.distance_to(from_) == 0 or center.distance_to(to) == 0:
            raise InvalidShapeError("Arc end points must differ from its center")
        self.from_ = from_
        self.to = to
        self.center = center

    def __repr__(self) -> str:
        return f"Arc({self.from_!r}, {self.to!r}, center={self.center!r})"

    @property
    def radius_from(self) -> float:
        return self.center.distance_to(self.from_)

    @property
    def radius_to(self) -> float:
        return self.center.distance_to(self.to)

    @property
    def is_circular(self) -> bool:
        return self.radius_from == self.radius_to

    @property
    def angle(self) -> float:
        """Angular span in degrees."""
        return angle_between(self.center, self.from_, self.center, self.to)

    @property
    def length(self) -> float:
        perimeter = _ellipse_perimeter(self.radius_from, self.radius_to)
        return round(perimeter * self.angle / 360, PRECISION)

    def base_shape(self) -> Union[Circle, Ellipse]:
        """The full circle or ellipse the arc lies on."""
        if self.is_circular:
            return Circle(self.center, self.radius_from)
        return Ellipse(self.center, self.radius_from * 2, self.radius_to * 2)

    def in_radar(self, point: Point) -> bool:
        """Checks if the point lies within the arc's angular span."""
        return is_point_in_radar(point, self.from_, self.to, self.center, self.angle)

    def translate(self, vector: Vector):
        self.from_.translate(vector)
        self.to.translate(vector)
        self.center.translate(vector)

    def rotate(self, angle: float, origin: Optional[Point] = None):
        self.from_.rotate(angle, origin)
        self.to.rotate(angle, origin)
        self.center.rotate(angle, origin)

    def is_on_edge(self, point: Point, threshold: float = 0) -> bool:
        return self.in_radar(point) and self.base_shape().is_on_edge(point, threshold)


class Sector(ClosedShape):
    """A region bounded by an arc and the two radii joining its ends to the center."""

    kind = ShapeKind.SECTOR

    def __init__(self, from_: Point, to: Point, center: Point):
        self.arc = Arc(from_, to, center)

    def __repr__(self) -> str:
        return f"Sector({self.from_!r}, {self.to!r}, center={self.center!r})"

    @property
    def from_(self) -> Point:
        return self.arc.from_

    @property
    def to(self) -> Point:
        return self.arc.to

    @property
    def center(self) -> Point:
        return self.arc.center

    @property
    def is_circular(self) -> bool:
        return self.arc.is_circular

    @property
    def angle(self) -> float:
        return self.arc.angle

    @property
    def length(self) -> float:
        return self.arc.length

    @property
    def radii(self) -> Tuple[Segment, Segment]:
        """The segments center->from_ and center->to."""
        return Segment(self.center, self.from_), Segment(self.center, self.to)

    @property
    def area(self) -> float:
        full = _ellipse_area(self.arc.radius_from, self.arc.radius_to)
        return round(full * self.angle / 360, PRECISION)

    @property
    def perimeter(self) -> float:
        return round(self.length + self.arc.radius_from + self.arc.radius_to, PRECISION)

    def translate(self, vector: Vector):
        self.arc.translate(vector)

    def rotate(self, angle: float, origin: Optional[Point] = None):
        self.arc.rotate(angle, origin)

    def contains(self, point: Point) -> bool:
        return self.arc.in_radar(point) and self.arc.base_shape().contains(point)


@dataclass(frozen=True)
class ShapeResult:
    """Outcome of a ``make_*`` builder: either a polygon or the reason it could not be built."""

    shape: Optional[Polygon] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Polygon:
        """
        Returns the built polygon.

        Raises:
            InvalidShapeError: If the builder failed.
        """
        if self.error is not None:
            raise InvalidShapeError(self.error)
        return self.shape


def _build(factory: Callable[..., Polygon], *args) -> ShapeResult:
    try:
        return ShapeResult(shape=factory(*args))
    except InvalidShapeError as exc:
        logger.debug("Rejected shape: %s", exc)
        return ShapeResult(error=str(exc))


def _polygon(items: Sequence[Union[Point, Segment]], variant: PolygonVariant) -> Polygon:
    items = list(items)
    cls = Triangle if variant is PolygonVariant.TRIANGLE else Polygon
    if items and all(isinstance(item, Segment) for item in items):
        return cls.from_edges(items, variant)
    return cls(items, variant)


def make_polygon(items: Sequence[Union[Point, Segment]]) -> ShapeResult:
    """
    Builds a polygon from its vertices or from a closed cycle of edges.

    Args:
        items: Points, or segments each starting where the previous one ends.

    Returns:
        A ShapeResult holding the polygon, or the error message.
    """
    return _build(_polygon, items, PolygonVariant.POLYGON)


def make_triangle(items: Sequence[Union[Point, Segment]]) -> ShapeResult:
    return _build(_polygon, items, PolygonVariant.TRIANGLE)


def make_quadrilateral(items: Sequence[Union[Point, Segment]]) -> ShapeResult:
    return _build(_polygon, items, PolygonVariant.QUADRILATERAL)


def _rect(location: Point, width: float, height: float, variant: PolygonVariant) -> Rect:
    if width <= 0 or height <= 0:
        raise InvalidShapeError(f"Rectangle sides must be positive, got {width}x{height}")
    vertices = [
        location,
        Point(location.x + width, location.y),
        Point(location.x + width, location.y + height),
        Point(location.x, location.y + height),
    ]
    return Rect(vertices, variant)


def make_rect(location: Point, width: float, height: float) -> ShapeResult:
    """
    Builds an axis-aligned rectangle.

    Args:
        location: The bottom-left corner, shared with the polygon.
        width: Extent along the x axis.
        height: Extent along the y axis.
    """
    return _build(_rect, location, width, height, PolygonVariant.RECT)


def make_square(location: Point, width: float) -> ShapeResult:
    return _build(_rect, location, width, width, PolygonVariant.SQUARE)
