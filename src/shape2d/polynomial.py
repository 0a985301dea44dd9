"""
Closed-form real-root solver for polynomials of degree four or less.

The conic intersection routines reduce two ellipses to a quartic in one
variable and a quadratic in the other; this module solves both.
"""

import logging
import math
from typing import List, Sequence

import numpy as np

from .tolerance import TOLERANCE, is_zero

logger = logging.getLogger(__name__)


def _cube_root(value: float) -> float:
    # Real cube root; negative values are handled by negation
    if value >= 0:
        return value ** (1 / 3)
    return -((-value) ** (1 / 3))


class Polynomial:
    """
    A polynomial with real coefficients.

    Coefficients are given highest degree first, ``Polynomial(1, -5, 6)`` being
    ``x**2 - 5x + 6``. Internally they are stored lowest degree first so that
    ``self._values[i]`` is the coefficient of ``x**i``.
    """

    def __init__(self, *coefficients: float):
        self._values = [float(c) for c in reversed(coefficients)]

    def __repr__(self) -> str:
        return f"Polynomial{tuple(self.coefficients)}"

    @property
    def degree(self) -> int:
        return len(self._values) - 1

    @property
    def coefficients(self) -> List[float]:
        """Coefficients, highest degree first."""
        return list(reversed(self._values))

    def evaluate(self, x: float) -> float:
        """Evaluates the polynomial at ``x``."""
        if not self._values:
            return 0.0
        return float(np.polyval(self.coefficients, x))

    def simplify(self):
        """Strips leading coefficients whose magnitude is within tolerance of zero."""
        while self._values and abs(self._values[-1]) <= TOLERANCE:
            self._values.pop()

    def get_roots(self) -> List[float]:
        """
        Gets the real roots of the polynomial.

        The polynomial is simplified first, so near-zero leading coefficients lower
        its degree. Repeated roots may appear more than once.

        Returns:
            The real roots. Empty for degree 0 or degrees above 4.
        """
        self.simplify()
        solvers = {
            1: self._linear_root,
            2: self._quadratic_roots,
            3: self._cubic_roots,
            4: self._quartic_roots,
        }
        solver = solvers.get(self.degree)
        if solver is None:
            logger.debug("No closed-form solver for degree %d", self.degree)
            return []
        return solver()

    def _linear_root(self) -> List[float]:
        c0, c1 = self._values
        return [-c0 / c1]

    def _quadratic_roots(self) -> List[float]:
        a = self._values[2]
        b = self._values[1] / a
        c = self._values[0] / a
        discriminant = b * b - 4 * c

        if is_zero(discriminant):
            discriminant = 0

        if discriminant > 0:
            e = math.sqrt(discriminant)
            return [0.5 * (-b + e), 0.5 * (-b - e)]
        if discriminant == 0:
            return [0.5 * -b]
        return []

    def _cubic_roots(self) -> List[float]:
        c3 = self._values[3]
        c2 = self._values[2] / c3
        c1 = self._values[1] / c3
        c0 = self._values[0] / c3

        # Depressed cubic t**3 + a*t + b = 0 with x = t - c2/3
        a = (3 * c1 - c2 * c2) / 3
        b = (2 * c2 * c2 * c2 - 9 * c1 * c2 + 27 * c0) / 27
        offset = c2 / 3
        discriminant = b * b / 4 + a * a * a / 27
        half_b = b / 2

        if is_zero(discriminant):
            discriminant = 0

        if discriminant > 0:
            e = math.sqrt(discriminant)
            root = _cube_root(-half_b + e) + _cube_root(-half_b - e)
            return [root - offset]

        if discriminant < 0:
            distance = math.sqrt(-a / 3)
            angle = math.atan2(math.sqrt(-discriminant), -half_b) / 3
            cos = math.cos(angle)
            sin = math.sin(angle)
            sqrt3 = math.sqrt(3)
            return [
                2 * distance * cos - offset,
                -distance * (cos + sqrt3 * sin) - offset,
                -distance * (cos - sqrt3 * sin) - offset,
            ]

        # One double root and one simple root
        if half_b >= 0:
            tmp = -_cube_root(half_b)
        else:
            tmp = _cube_root(-half_b)
        return [2 * tmp - offset, -tmp - offset]

    def _quartic_roots(self) -> List[float]:
        c4 = self._values[4]
        c3 = self._values[3] / c4
        c2 = self._values[2] / c4
        c1 = self._values[1] / c4
        c0 = self._values[0] / c4

        resolvent = Polynomial(1, -c2, c3 * c1 - 4 * c0, -c3 * c3 * c0 + 4 * c2 * c0 - c1 * c1)
        y = resolvent._cubic_roots()[0]
        discriminant = c3 * c3 / 4 - c2 + y

        if is_zero(discriminant):
            discriminant = 0

        results = []
        if discriminant > 0:
            e = math.sqrt(discriminant)
            t1 = 3 * c3 * c3 / 4 - e * e - 2 * c2
            t2 = (4 * c3 * c2 - 8 * c1 - c3 * c3 * c3) / (4 * e)
            plus = t1 + t2
            minus = t1 - t2

            if is_zero(plus):
                plus = 0
            if is_zero(minus):
                minus = 0

            if plus >= 0:
                f = math.sqrt(plus)
                results.append(-c3 / 4 + (e + f) / 2)
                results.append(-c3 / 4 + (e - f) / 2)
            if minus >= 0:
                f = math.sqrt(minus)
                results.append(-c3 / 4 + (f - e) / 2)
                results.append(-c3 / 4 - (f + e) / 2)

        elif discriminant == 0:
            t1 = 3 * c3 * c3 / 4 - 2 * c2
            t2 = y * y - 4 * c0

            if t2 >= -TOLERANCE:
                if t2 < 0:
                    t2 = 0
                t2 = 2 * math.sqrt(t2)
                plus = t1 + t2
                minus = t1 - t2

                # Repeated roots leave plus or minus at zero
                if is_zero(plus):
                    plus = 0
                if is_zero(minus):
                    minus = 0

                if plus >= 0:
                    f = math.sqrt(plus)
                    results.append(-c3 / 4 + f / 2)
                    results.append(-c3 / 4 - f / 2)
                if minus >= 0:
                    f = math.sqrt(minus)
                    results.append(-c3 / 4 + f / 2)
                    results.append(-c3 / 4 - f / 2)

        return results


def get_roots(coefficients: Sequence[float]) -> List[float]:
    """
    Gets the real roots of the polynomial with the given coefficients.

    Args:
        coefficients: Coefficients, highest degree first.

    Returns:
        The real roots (possibly repeated), or an empty list.
    """
    return Polynomial(*coefficients).get_roots()
