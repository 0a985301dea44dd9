"""Geometric primitives: points, vectors, segments and the shape capability base."""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .tolerance import PRECISION, TOLERANCE, round_coordinate


class ShapeKind(Enum):
    """Kind tag carried by every shape, used to key the intersection dispatch table."""
    SEGMENT = "segment"
    POLYGON = "polygon"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    ARC = "arc"
    SECTOR = "sector"


class Shape(ABC):
    """Base for every shape that can be moved and intersected with another shape."""

    kind: ShapeKind

    @abstractmethod
    def translate(self, vector: "Vector"):
        """Moves the shape in place along ``vector``."""

    @abstractmethod
    def rotate(self, angle: float, origin: Optional["Point"] = None):
        """Rotates the shape in place by ``angle`` degrees around ``origin``."""

    def does_intersect(self, other: "Shape") -> bool:
        """
        Checks if the current shape intersects with the given one.

        Args:
            other: The reference shape.

        Returns:
            True if both shapes share at least one point on their boundaries.
        """
        from .intersection import does_intersect
        return does_intersect(self, other)

    def get_intersection_points(self, other: "Shape") -> List["Point"]:
        """
        Gets the intersection points with the given shape.

        Args:
            other: The reference shape.

        Returns:
            The intersection points, rounded to the output precision. Empty if none.
        """
        from .intersection import get_intersection_points
        return get_intersection_points(self, other)


class ClosedShape(Shape):
    """A shape enclosing a region: exposes area, perimeter and point containment."""

    @property
    @abstractmethod
    def area(self) -> float:
        ...

    @property
    @abstractmethod
    def perimeter(self) -> float:
        ...

    @abstractmethod
    def contains(self, point: "Point") -> bool:
        ...


class Point:
    """
    A mutable point in two-dimensional coordinates.

    Points compare by value. Shapes hold references to their points, so a point
    shared between a polygon and its edges moves with both.
    """

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = x
        self.y = y

    @staticmethod
    def get_distance(x1: float, y1: float, x2: float, y2: float) -> float:
        """Distance between (x1, y1) and (x2, y2), rounded to the output precision."""
        return round(math.hypot(x2 - x1, y2 - y1), PRECISION)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    __hash__ = None  # mutable

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"

    def clone(self) -> "Point":
        return Point(self.x, self.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Returns the distance to the given point, rounded to the output precision."""
        return Point.get_distance(self.x, self.y, other.x, other.y)

    def translate(self, vector: "Vector"):
        """
        Translates the point using the given vector for direction.

        Args:
            vector: The vector defining the direction.
        """
        self.x += vector.x
        self.y += vector.y

    def rotate(self, angle: float, origin: Optional["Point"] = None):
        """
        Rotates the point by the given angle in degrees, around a point.

        The rotated coordinates are rounded to the output precision.

        Args:
            angle: The rotation angle in degrees (counter-clockwise).
            origin: The rotation center. Defaults to (0, 0).
        """
        if angle == 0 or angle == 360:
            return
        origin = origin if origin is not None else Point()
        angle_rad = math.radians(angle)
        # Make the rotation point the new origin
        xo = self.x - origin.x
        yo = self.y - origin.y
        xp = xo * math.cos(angle_rad) - yo * math.sin(angle_rad)
        yp = yo * math.cos(angle_rad) + xo * math.sin(angle_rad)
        self.x = round(xp, PRECISION) + origin.x
        self.y = round(yp, PRECISION) + origin.y


@dataclass(frozen=True)
class Vector:
    """An immutable displacement in two-dimensional coordinates."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_polar(cls, magnitude: float, angle: float) -> "Vector":
        """
        Creates a vector from its polar coordinates.

        Args:
            magnitude: The length of the vector.
            angle: The angle from the x axis, in degrees.

        Returns:
            The vector in Cartesian coordinates, rounded to the output precision.
        """
        angle_rad = math.radians(angle)
        return cls(round(magnitude * math.cos(angle_rad), PRECISION),
                   round(magnitude * math.sin(angle_rad), PRECISION))

    @classmethod
    def between(cls, start: Point, end: Point) -> "Vector":
        """Displacement leading from ``start`` to ``end``."""
        return cls(end.x - start.x, end.y - start.y)

    @property
    def magnitude(self) -> float:
        return round(math.hypot(self.x, self.y), PRECISION)

    @property
    def angle(self) -> float:
        """Angle from the x axis in degrees, in (-180, 180]."""
        return round(math.degrees(math.atan2(self.y, self.x)), PRECISION)

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector":
        return Vector(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector":
        return Vector(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector") -> float:
        """z component of the 3D cross product (signed parallelogram area)."""
        return self.x * other.y - self.y * other.x


def signed_angle(direction_a: Vector, direction_b: Vector) -> float:
    """
    Signed angle, in degrees, turning ``direction_a`` onto ``direction_b``.

    Computed with ``atan2`` of the cross and dot products and rounded to the
    output precision. Positive values are counter-clockwise.
    """
    angle_rad = math.atan2(direction_a.cross(direction_b), direction_a.dot(direction_b))
    return round(math.degrees(angle_rad), PRECISION) + 0.0


def angle_between(p1: Point, p2: Point, p3: Point, p4: Point) -> float:
    """
    Angle between the rays p1->p2 and p3->p4, in degrees within [0, 180].

    Only the ray directions matter: both are moved to a common origin before the
    angle is measured. The value is rounded to the output precision.

    Args:
        p1: Origin of the first ray.
        p2: A point the first ray passes through.
        p3: Origin of the second ray.
        p4: A point the second ray passes through.

    Returns:
        The unsigned angle between the two rays.
    """
    return abs(signed_angle(Vector.between(p1, p2), Vector.between(p3, p4)))


class Segment(Shape):
    """A line segment between two points; the order of the points gives its direction."""

    kind = ShapeKind.SEGMENT

    def __init__(self, p1: Point, p2: Point):
        self.p1 = p1
        self.p2 = p2

    def __repr__(self) -> str:
        return f"Segment({self.p1!r}, {self.p2!r})"

    @property
    def direction(self) -> Vector:
        return Vector.between(self.p1, self.p2)

    @property
    def length(self) -> float:
        return self.p1.distance_to(self.p2)

    @property
    def centroid(self) -> Point:
        return Point((self.p1.x + self.p2.x) / 2, (self.p1.y + self.p2.y) / 2)

    @property
    def is_vertical(self) -> bool:
        return self.p2.x - self.p1.x == 0

    @property
    def is_horizontal(self) -> bool:
        return self.p2.y - self.p1.y == 0

    def clone(self) -> "Segment":
        return Segment(self.p1.clone(), self.p2.clone())

    def translate(self, vector: Vector):
        self.p1.translate(vector)
        self.p2.translate(vector)

    def rotate(self, angle: float, origin: Optional[Point] = None):
        if angle == 0 or angle == 360:
            return
        self.p1.rotate(angle, origin)
        self.p2.rotate(angle, origin)

    def distance_to(self, point: Point) -> float:
        """
        Perpendicular distance from ``point`` to the infinite line through the segment.

        A zero-length segment falls back to the distance to its single point.
        """
        direction = self.direction
        norm = math.hypot(direction.x, direction.y)
        if norm == 0:
            return math.hypot(point.x - self.p1.x, point.y - self.p1.y)
        return abs(direction.cross(Vector.between(self.p1, point))) / norm

    def denominator(self, other: "Segment") -> float:
        """Determinant of the 2x2 system formed by the two lines; zero when parallel."""
        return ((self.p1.x - self.p2.x) * (other.p1.y - other.p2.y)
                - (self.p1.y - self.p2.y) * (other.p1.x - other.p2.x))

    def is_parallel_to(self, other: "Segment") -> bool:
        return abs(self.denominator(other)) <= TOLERANCE

    def goes_same_direction(self, other: "Segment") -> bool:
        return self.direction.dot(other.direction) > 0

    def angle_to(self, other: "Segment", interior_angle: bool = False) -> float:
        """
        Gets the angle between this segment and the given one.

        Args:
            other: The reference segment.
            interior_angle: If True, returns the unsigned angle enclosed at the vertex
                where this segment ends and ``other`` starts (180 minus the turn).

        Returns:
            The signed turn from this direction to ``other``'s direction in degrees,
            or the enclosed angle when ``interior_angle`` is set.
        """
        turn = signed_angle(self.direction, other.direction)
        if interior_angle:
            return round(180 - abs(turn), PRECISION)
        return turn

    def get_orthogonal_line_through(self, point: Point) -> "Segment":
        """
        Gets the orthogonal line passing through the given point.

        Args:
            point: The point to pass through.

        Returns:
            A segment from the foot of the perpendicular (on this line) to ``point``.
        """
        direction = self.direction
        length_sq = direction.dot(direction)
        if length_sq == 0:
            return Segment(self.p1.clone(), point)
        t = Vector.between(self.p1, point).dot(direction) / length_sq
        foot = Point(self.p1.x + direction.x * t, self.p1.y + direction.y * t)
        return Segment(foot, point)

    def _ray(self, start: Point, angle: float, length: float) -> "Segment":
        heading = math.atan2(self.p2.y - self.p1.y, self.p2.x - self.p1.x) + math.radians(angle)
        end = Point(round_coordinate(start.x + length * math.cos(heading)),
                    round_coordinate(start.y + length * math.sin(heading)))
        return Segment(start.clone(), end)

    def get_line_at_angle(self, angle: float, length: float = 20) -> "Segment":
        """
        Gets a line starting at ``p1`` and turned by ``angle`` from this one.

        Args:
            angle: Counter-clockwise turn from this segment's direction, in degrees.
            length: Length of the new line (default value is 20).

        Returns:
            A new segment whose end point is rounded to the output precision.
        """
        return self._ray(self.p1, angle, length)

    def get_orthogonal_line_from(self, point: Point, length: float = 20,
                                 clockwise: bool = False) -> Optional["Segment"]:
        """
        Gets the orthogonal line starting at a point of this line.

        Args:
            point: The start point; it must lie on the line.
            length: Length of the new line (default value is 20).
            clockwise: Go to the right of the segment direction instead of the left.

        Returns:
            The orthogonal segment, or None if ``point`` is not on the line.
        """
        if not self.is_on_line(point):
            return None
        return self._ray(point, -90 if clockwise else 90, length)

    def is_orthogonal_to(self, other: "Segment") -> bool:
        # Zero-length segments have no direction
        a, b = self.direction, other.direction
        norm = math.hypot(a.x, a.y) * math.hypot(b.x, b.y)
        return norm > 0 and abs(a.dot(b)) <= TOLERANCE * norm

    def is_on_line(self, point: Point, threshold: float = 0) -> bool:
        """
        Checks if the given point lies on the infinite line through the segment.

        The perpendicular distance is rounded to the nearest whole unit before being
        compared with ``threshold``.

        Args:
            point: The reference point.
            threshold: Accepted distance, in whole units, from the line.
        """
        return round(self.distance_to(point)) <= threshold

    def is_on_segment(self, point: Point, threshold: float = 0) -> bool:
        """
        Checks if the given point lies on the segment.

        Args:
            point: The reference point.
            threshold: Accepted distance, in whole units, from the line.
        """
        return (self.is_on_line(point, threshold)
                and min(self.p1.x, self.p2.x) <= point.x <= max(self.p1.x, self.p2.x)
                and min(self.p1.y, self.p2.y) <= point.y <= max(self.p1.y, self.p2.y))
