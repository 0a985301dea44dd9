"""Tests for the closed-form polynomial root solver."""

import pytest

from shape2d import Polynomial, get_roots


def assert_roots(roots, expected):
    assert sorted(round(r, 6) for r in roots) == pytest.approx(sorted(expected)), \
        f"Expected roots {expected}, got {roots}"


class TestPolynomialBasics:
    """Test coefficient storage, simplification and evaluation."""

    def test_coefficients_highest_first(self):
        """Test that coefficients are exposed highest degree first."""
        poly = Polynomial(1, -5, 6)

        assert poly.degree == 2
        assert poly.coefficients == [1, -5, 6]
        print("✓ Coefficients stored and exposed in the right order")

    def test_simplify_strips_near_zero_leading_terms(self):
        """Test that leading coefficients within tolerance are dropped."""
        poly = Polynomial(1e-9, 0, 1, -4)
        poly.simplify()

        assert poly.degree == 1, "Two leading near-zero terms should be removed"
        print("✓ Near-zero leading coefficients stripped")

    def test_evaluate(self):
        """Test polynomial evaluation."""
        poly = Polynomial(2, 0, -3, 1)

        assert poly.evaluate(0) == pytest.approx(1)
        assert poly.evaluate(2) == pytest.approx(11)
        print("✓ Polynomial evaluated")


class TestRoots:
    """Test root finding per degree."""

    def test_linear(self):
        """Test a linear polynomial."""
        assert_roots(get_roots([2, -4]), [2])

    def test_quadratic_two_roots(self):
        """Test x^2 - 5x + 6."""
        assert_roots(get_roots([1, -5, 6]), [2, 3])
        print("✓ Quadratic roots found")

    def test_quadratic_double_root(self):
        """Test that a zero discriminant yields a single root."""
        roots = get_roots([1, -4, 4])

        assert len(roots) == 1, "Double root should be reported once"
        assert roots[0] == pytest.approx(2)

    def test_quadratic_no_real_roots(self):
        """Test a quadratic with a negative discriminant."""
        assert get_roots([1, 0, 1]) == []

    def test_cubic_three_roots(self):
        """Test (x - 1)(x - 2)(x - 3)."""
        assert_roots(get_roots([1, -6, 11, -6]), [1, 2, 3])
        print("✓ Cubic trigonometric branch")

    def test_cubic_one_root(self):
        """Test x^3 - 1, which has a single real root."""
        assert_roots(get_roots([1, 0, 0, -1]), [1])

    def test_cubic_negative_cube_root(self):
        """Test x^3 + 8, whose real root needs the cube root of a negative number."""
        assert_roots(get_roots([1, 0, 0, 8]), [-2])

    def test_cubic_double_root(self):
        """Test (x - 1)^2 (x + 2)."""
        assert_roots(get_roots([1, 0, -3, 2]), [-2, 1])

    def test_quartic_four_roots(self):
        """Test x^4 - 5x^2 + 4 = (x^2 - 1)(x^2 - 4)."""
        assert_roots(get_roots([1, 0, -5, 0, 4]), [-2, -1, 1, 2])
        print("✓ Quartic roots found")

    def test_quartic_repeated_roots(self):
        """Test (x - 1)^4 and (x - 1)^2 (x + 2)^2, whose roots all repeat."""
        assert_roots(get_roots([1, -4, 6, -4, 1]), [1, 1, 1, 1])
        assert_roots(get_roots([1, 2, -3, -4, 4]), [-2, -2, 1, 1])

    def test_quartic_no_real_roots(self):
        """Test x^4 + 1."""
        assert get_roots([1, 0, 0, 0, 1]) == []

    def test_roots_evaluate_to_zero(self):
        """Test that every returned root is a root of the polynomial."""
        for coefficients in ([1, -5, 6], [1, -6, 11, -6], [1, 0, -5, 0, 4], [2, -3, -11, 3, 9]):
            poly = Polynomial(*coefficients)
            for root in poly.get_roots():
                assert abs(poly.evaluate(root)) < 1e-6, f"{root} is not a root of {coefficients}"
        print("✓ All roots evaluate to ~0")

    @pytest.mark.parametrize("coefficients", [[], [5], [0, 0, 0], [1, 0, 0, 0, 0, -1]])
    def test_unsupported_degrees(self, coefficients):
        """Test that constant, empty and degree > 4 polynomials have no roots."""
        assert get_roots(coefficients) == []


if __name__ == '__main__':
    pytest.main([__file__, '-v', '-s'])
