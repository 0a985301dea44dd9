"""Tests for polygons, circles, ellipses, arcs, sectors and the shape builders."""

import numpy as np
import pytest

from shape2d import (
    Arc,
    Circle,
    Ellipse,
    InvalidShapeError,
    Point,
    Polygon,
    PolygonVariant,
    Rect,
    Sector,
    Segment,
    ShapeKind,
    Triangle,
    Vector,
    make_polygon,
    make_quadrilateral,
    make_rect,
    make_square,
    make_triangle,
)


def points(*pairs):
    return [Point(x, y) for x, y in pairs]


def coords(items):
    return [p.to_tuple() for p in items]


SQUARE = [(0, 0), (5, 0), (5, 5), (0, 5)]
CONCAVE = [(0, 0), (5, 0), (6, 5), (-4, 7), (2, 3)]


class TestPolygon:
    """Test polygon construction and measurements."""

    def test_minimum_vertices(self):
        """Test that fewer than three vertices are rejected."""
        with pytest.raises(InvalidShapeError):
            Polygon(points((0, 0), (1, 1)))
        with pytest.raises(ValueError):
            Polygon([])

    def test_edges_share_vertices(self):
        """Test that edges reference the polygon's own points."""
        polygon = Polygon(points(*SQUARE))
        edges = polygon.edges

        assert len(edges) == 4
        assert edges[0].p2 is polygon.vertices[1]
        assert edges[-1].p2 is polygon.vertices[0], "Last edge should close the polygon"

    def test_square_measurements(self):
        """Test area, perimeter, centroid and regularity of a square."""
        polygon = Polygon(points(*SQUARE))

        assert polygon.area == 25
        assert polygon.perimeter == 20
        assert polygon.centroid == Point(2.5, 2.5)
        assert polygon.interior_angles == [90, 90, 90, 90]
        assert polygon.is_convex and not polygon.is_concave
        assert polygon.is_equiangular and polygon.is_equilateral
        print("✓ Square measurements")

    def test_clockwise_square_angles(self):
        """Test that vertex order does not change interior angles."""
        polygon = Polygon(points(*reversed(SQUARE)))

        assert polygon.interior_angles == [90, 90, 90, 90]
        assert polygon.signed_area == pytest.approx(-25)

    def test_concave_polygon(self):
        """Test reflex detection, area and centroid of a concave polygon."""
        polygon = Polygon(points(*CONCAVE))

        assert polygon.is_concave
        assert polygon.interior_angles[4] > 180, "Vertex (2, 3) should be reflex"
        assert polygon.area == 30.5
        centroid = polygon.centroid
        assert centroid.x == pytest.approx(1.8) and centroid.y == pytest.approx(3)
        print(f"✓ Concave polygon angles: {polygon.interior_angles}")

    def test_interior_angles_sum(self):
        """Test that interior angles add up to (n - 2) * 180."""
        polygon = Polygon(points(*CONCAVE))

        assert sum(polygon.interior_angles) == pytest.approx(540, abs=0.05)

    def test_square_triangulation(self):
        """Test the fan of a convex polygon, anchored at the end of the first edge."""
        triangles = Polygon(points(*SQUARE)).triangulate()

        assert [coords(t) for t in triangles] == [
            [(5, 0), (5, 5), (0, 5)],
            [(5, 0), (0, 5), (0, 0)],
        ]

    def test_concave_triangulation(self):
        """Test that the fan of a concave polygon starts at its reflex vertex."""
        triangles = Polygon(points(*CONCAVE)).triangulate()

        assert len(triangles) == 3
        assert all(t[0] == Point(2, 3) for t in triangles)
        print("✓ Concave polygon fanned from its reflex vertex")

    def test_contains(self):
        """Test point containment, boundary included."""
        square = Polygon(points(*SQUARE))
        concave = Polygon(points(*CONCAVE))

        assert square.contains(Point(4, 1))
        assert square.contains(Point(5, 2)), "Boundary points are contained"
        assert not square.contains(Point(6, 1))
        assert not concave.contains(Point(-20, -20))
        assert not concave.contains(Point(-1, 2)), "Point in the notch is outside"

    def test_is_on_edge(self):
        """Test points on and off the polygon edges."""
        square = Polygon(points(*SQUARE))

        assert square.is_on_edge(Point(2, 0))
        assert not square.is_on_edge(Point(2, 2))

    def test_translate_and_rotate(self):
        """Test that moving the polygon moves its edges."""
        square = Polygon(points(*SQUARE))
        edge = square.edges[0]
        square.translate(Vector(1, 2))

        assert edge.p1 == Point(1, 2)
        square.rotate(90, Point(1, 2))
        assert coords(square.vertices) == [(1, 2), (1, 7), (-4, 7), (-4, 2)]

    def test_to_array(self):
        """Test the numpy view of the vertices."""
        array = Polygon(points(*SQUARE)).to_array()

        assert array.shape == (4, 2)
        np.testing.assert_array_equal(array[2], [5, 5])

    def test_from_edges(self):
        """Test building a polygon from a closed cycle of edges."""
        a, b, c = points((0, 0), (4, 0), (0, 3))
        triangle = Polygon.from_edges([Segment(a, b), Segment(b, c), Segment(c, a)])

        assert triangle.vertices == [a, b, c]
        assert triangle.area == 6
        with pytest.raises(InvalidShapeError):
            Polygon.from_edges([Segment(a, b), Segment(b, c), Segment(Point(9, 9), a)])


class TestBuilders:
    """Test the make_* builders."""

    def test_make_polygon(self):
        """Test a successful build."""
        result = make_polygon(points(*CONCAVE))

        assert result.ok and result.error is None
        assert result.unwrap().variant is PolygonVariant.POLYGON

    def test_make_polygon_failure(self):
        """Test that a malformed polygon is reported, not raised."""
        result = make_polygon(points((0, 0), (1, 0)))

        assert not result.ok
        assert "3" in result.error
        with pytest.raises(InvalidShapeError):
            result.unwrap()
        print(f"✓ Builder error: {result.error}")

    def test_triangle_and_quadrilateral(self):
        """Test that variants enforce their vertex count."""
        assert make_triangle(points((0, 0), (4, 0), (0, 3))).ok
        assert not make_triangle(points(*SQUARE)).ok
        assert make_quadrilateral(points(*SQUARE)).unwrap().variant is PolygonVariant.QUADRILATERAL
        assert not make_quadrilateral(points(*CONCAVE)).ok

    def test_rect_and_square(self):
        """Test rectangles and squares built from a location."""
        square = make_square(Point(0, 0), 5).unwrap()
        rect = make_rect(Point(1, 1), 4, 2).unwrap()

        assert square.variant is PolygonVariant.SQUARE
        assert square.perimeter == 20 and square.area == 25
        assert coords(rect.vertices) == [(1, 1), (5, 1), (5, 3), (1, 3)]
        assert rect.kind is ShapeKind.POLYGON
        assert not make_rect(Point(0, 0), -1, 2).ok

    def test_rect_location_and_center(self):
        """Test that the location is the first corner and the center follows moves."""
        location = Point(1, 1)
        rect = make_rect(location, 4, 2).unwrap()

        assert isinstance(rect, Rect)
        assert rect.location is location
        assert (rect.width, rect.height) == (4, 2)
        assert rect.center == Point(3, 2)

        rect.translate(Vector(1, 1))
        assert rect.location == Point(2, 2) and rect.center == Point(4, 3)
        print("✓ Rectangle center moves with the rectangle")

    def test_square_location_and_center(self):
        """Test the square's center and size."""
        square = make_square(Point(-2, 0), 3).unwrap()

        assert square.location == Point(-2, 0)
        assert square.center == Point(-0.5, 1.5)
        assert square.width == square.height == 3

    def test_rect_needs_right_angles(self):
        """Test that rectangles and squares validate their corners and sides."""
        with pytest.raises(InvalidShapeError):
            Rect(points((0, 0), (4, 0), (5, 2), (0, 2)))
        with pytest.raises(InvalidShapeError):
            Rect(points((0, 0), (4, 0), (4, 2), (0, 2)), PolygonVariant.SQUARE)
        with pytest.raises(InvalidShapeError):
            Rect(points(*SQUARE), PolygonVariant.QUADRILATERAL)


class TestTriangle:
    """Test triangle centers and classification."""

    RIGHT = [(0, 0), (4, 0), (0, 3)]
    ISOSCELES = [(0, 0), (4, 0), (2, 3)]

    def test_builder_returns_triangle(self):
        """Test that make_triangle builds a Triangle from points and from edges."""
        a, b, c = points(*self.RIGHT)

        assert isinstance(make_triangle([a, b, c]).unwrap(), Triangle)
        assert isinstance(make_triangle([Segment(a, b), Segment(b, c), Segment(c, a)]).unwrap(), Triangle)
        with pytest.raises(InvalidShapeError):
            Triangle(points(*self.RIGHT), PolygonVariant.POLYGON)

    def test_medians(self):
        """Test that each median joins a vertex to the middle of the opposite edge."""
        triangle = Triangle(points(*self.RIGHT))
        medians = triangle.medians

        assert [(m.p1.to_tuple(), m.p2.to_tuple()) for m in medians] == [
            ((0, 0), (2, 1.5)),
            ((4, 0), (0, 1.5)),
            ((0, 3), (2, 0)),
        ]
        assert medians[0].p1 is triangle.vertices[0]

    def test_centers_of_right_triangle(self):
        """Test that a right triangle has its circumcenter on the hypotenuse."""
        triangle = Triangle(points(*self.RIGHT))

        assert triangle.circumcenter == Point(2, 1.5)
        assert triangle.orthocenter == Point(0, 0), "Altitudes meet at the right angle"
        centroid = triangle.centroid
        assert centroid.x == pytest.approx(4 / 3) and centroid.y == pytest.approx(1)

    def test_centers_of_isosceles_triangle(self):
        """Test circumcenter and orthocenter on the symmetry axis."""
        triangle = Triangle(points(*self.ISOSCELES))

        assert triangle.circumcenter == Point(2, 0.83)
        assert triangle.orthocenter == Point(2, 1.33)
        print("✓ Triangle centers on the symmetry axis")

    def test_collinear_vertices(self):
        """Test that a flat triangle has no circumcenter."""
        triangle = Triangle(points((0, 0), (1, 1), (2, 2)))

        with pytest.raises(InvalidShapeError):
            triangle.circumcenter
        with pytest.raises(InvalidShapeError):
            triangle.orthocenter

    @pytest.mark.parametrize("vertices,right,equilateral,isosceles", [
        (RIGHT, True, False, False),
        (ISOSCELES, False, False, True),
        ([(0, 0), (2, 0), (1, 1.7320508)], False, True, False),
        ([(0, 0), (2, 0), (0, 2)], True, False, True),
    ])
    def test_classification(self, vertices, right, equilateral, isosceles):
        """Test right, equilateral and isosceles triangles."""
        triangle = Triangle(points(*vertices))

        assert triangle.is_right == right
        assert triangle.is_equilateral == equilateral
        assert triangle.is_isosceles == isosceles


class TestCircle:
    """Test circle measurements and predicates."""

    @pytest.mark.parametrize("radius,area,perimeter", [
        (5, 78.54, 31.42),
        (2.5, 19.63, 15.71),
        (9.2, 265.9, 57.81),
    ])
    def test_measurements(self, radius, area, perimeter):
        """Test area and perimeter."""
        circle = Circle(Point(0, 0), radius)

        assert circle.area == area
        assert circle.perimeter == perimeter
        assert circle.diameter == radius * 2

    @pytest.mark.parametrize("center,check,on_edge", [
        ((0, 0), (0, 5), True),
        ((0, 0), (3, 3), False),
        ((1, 1), (6, 1), True),
    ])
    def test_is_on_edge(self, center, check, on_edge):
        """Test points on and off the circle."""
        circle = Circle(Point(*center), 5)

        assert circle.is_on_edge(Point(*check)) == on_edge

    def test_contains_and_validation(self):
        """Test containment and radius validation."""
        circle = Circle(Point(0, 0), 5)

        assert circle.contains(Point(3, 3))
        assert not circle.contains(Point(4, 4))
        with pytest.raises(InvalidShapeError):
            Circle(Point(0, 0), -1)


class TestEllipse:
    """Test ellipse measurements and predicates."""

    def test_measurements(self):
        """Test area, perimeter and foci."""
        ellipse = Ellipse(Point(0, 0), 10, 6)

        assert ellipse.semi_axes == (5, 3)
        assert ellipse.area == 47.12
        assert ellipse.perimeter == 25.91
        assert ellipse.eccentricity == 0.8
        assert ellipse.f1 == Point(-4, 0) and ellipse.f2 == Point(4, 0)

    def test_vertical_major_axis(self):
        """Test foci of an ellipse taller than wide."""
        ellipse = Ellipse(Point(1, 1), 6, 10)

        assert ellipse.f1 == Point(1, -3) and ellipse.f2 == Point(1, 5)

    def test_edge_and_contains(self):
        """Test points on the edge, inside and outside."""
        ellipse = Ellipse(Point(0, 0), 10, 6)

        assert ellipse.is_on_edge(Point(5, 0))
        assert ellipse.is_on_edge(Point(0, -3))
        assert ellipse.contains(Point(4, 1))
        assert not ellipse.contains(Point(4, 2.5))

    @pytest.mark.parametrize("width,height", [(0, 2), (3, -1)])
    def test_invalid_axes(self, width, height):
        """Test that non-positive axes are rejected."""
        with pytest.raises(InvalidShapeError):
            Ellipse(Point(0, 0), width, height)


class TestArc:
    """Test arc properties."""

    def test_circular_arc(self):
        """Test a circular quarter arc."""
        arc = Arc(Point(0, 0), Point(5, 5), Point(0, 5))

        assert arc.is_circular
        assert arc.angle == 90
        assert arc.length == 7.85
        assert isinstance(arc.base_shape(), Circle)

    def test_elliptical_arc(self):
        """Test an elliptical quarter arc."""
        arc = Arc(Point(0, 3), Point(7, 0), Point(0, 0))

        assert not arc.is_circular
        assert arc.angle == 90
        assert arc.length == 8.46
        base = arc.base_shape()
        assert isinstance(base, Ellipse) and (base.width, base.height) == (6, 14)
        print("✓ Elliptical arc measured on its base ellipse")

    @pytest.mark.parametrize("check,on_edge", [((0, 5), True), ((3, 3), False), ((-5, 0), False)])
    def test_is_on_edge(self, check, on_edge):
        """Test that the edge check honors the arc span."""
        arc = Arc(Point(5, 0), Point(0, 5), Point(0, 0))

        assert arc.is_on_edge(Point(*check)) == on_edge

    def test_rotate(self):
        """Test rotating an arc around the origin."""
        arc = Arc(Point(0, 0), Point(5, 5), Point(0, 5))
        arc.rotate(90)

        assert arc.center == Point(-5, 0)
        assert arc.angle == 90

    def test_zero_radius(self):
        """Test that an end point on the center is rejected."""
        with pytest.raises(InvalidShapeError):
            Arc(Point(0, 0), Point(5, 5), Point(0, 0))


class TestSector:
    """Test sector properties."""

    def test_measurements(self):
        """Test area and perimeter of circular and elliptical sectors."""
        circular = Sector(Point(0, 0), Point(5, 5), Point(0, 5))
        elliptical = Sector(Point(0, 3), Point(7, 0), Point(0, 0))

        assert circular.area == 19.63 and circular.perimeter == 17.85
        assert elliptical.area == 16.49 and elliptical.perimeter == 18.46
        print("✓ Sector area and perimeter")

    def test_shares_points_with_arc(self):
        """Test that the arc and radii reference the sector's points."""
        sector = Sector(Point(5, 0), Point(0, 5), Point(0, 0))
        r_from, r_to = sector.radii

        assert r_from.p1 is sector.center and r_from.p2 is sector.from_
        assert r_to.p2 is sector.arc.to

        sector.translate(Vector(1, 1))
        assert sector.arc.center == Point(1, 1)

    def test_contains(self):
        """Test containment within the span and radius."""
        sector = Sector(Point(0, 0), Point(5, 5), Point(0, 5))

        assert sector.contains(Point(1, 4))
        assert not sector.contains(Point(-5, 5))


if __name__ == '__main__':
    pytest.main([__file__, '-v', '-s'])
