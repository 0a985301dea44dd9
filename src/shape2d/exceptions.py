"""Exceptions raised by shape construction and intersection dispatch."""


class Shape2dError(Exception):
    """Base class for every error raised by shape2d."""


class InvalidShapeError(Shape2dError, ValueError):
    """A shape was built from data that breaks one of its structural invariants."""


class UnsupportedShapeError(Shape2dError, TypeError):
    """An operand handed to the intersection engine is not a known shape."""
