"""
Exception types raised by circlenest.
"""


class CircleNestError(Exception):
    """Base class for all circlenest errors."""


class InvalidShape(CircleNestError, ValueError):
    """A shape cannot be built from the given data, or has no usable interior."""


class PathSyntaxError(CircleNestError, ValueError):
    """SVG path data could not be parsed."""
