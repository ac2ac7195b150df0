"""Exception hierarchy for bowyer.

Every error aborts the current triangulation call; there is no partial
result. The classes also derive from the builtin exception a caller would
naturally expect (``ValueError`` for bad input, ``RuntimeError`` for
internal failures) so generic handlers keep working.
"""
from __future__ import annotations


class DelaunayError(Exception):
    """Base class for all bowyer errors."""


class InvalidInput(DelaunayError, ValueError):
    """Too few points, malformed coordinates, or duplicates (when validating)."""


class DegenerateTriangle(DelaunayError, ValueError):
    """Three vertices are exactly collinear."""

    def __init__(self, message, points=None):
        super().__init__(message)
        self.points = tuple(points) if points is not None else ()


class InternalInconsistency(DelaunayError, RuntimeError):
    """A predicate or bookkeeping invariant broke during construction.

    Signals a numerical or logic failure rather than bad input: the
    triangle bound was exceeded, a cavity edge was shared by more than two
    removed triangles, or a circumcircle could not be computed for a
    triangle that passed construction.
    """


class ConfigurationError(DelaunayError, RuntimeError):
    """Invalid precision/multiplier setting, or a change after first use."""


__all__ = [
    'DelaunayError',
    'InvalidInput',
    'DegenerateTriangle',
    'InternalInconsistency',
    'ConfigurationError',
]
