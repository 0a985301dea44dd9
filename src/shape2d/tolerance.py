"""Numeric tolerances and the coordinate rounding policy shared by every solver."""

# Magnitude below which a coefficient, discriminant or denominator counts as zero.
TOLERANCE = 1e-6

# Decimal places kept on every returned intersection coordinate.
PRECISION = 2

# Relative slack used when checking a candidate point against a conic equation.
CONIC_EPSILON = 1e-3


def round_coordinate(value: float) -> float:
    """Round a coordinate to ``PRECISION`` decimals and fold ``-0.0`` into ``0.0``."""
    return round(float(value), PRECISION) + 0.0


def is_zero(value: float) -> bool:
    return abs(value) <= TOLERANCE
