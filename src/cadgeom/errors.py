"""Exception types raised by cadgeom.

Queries that have a well defined "no solution" outcome (parallel
bisectors, a point inside a circle, nested circles) return ``None``
instead of raising.  The exceptions below are reserved for input that
makes an operation meaningless.
"""


class GeometryError(ValueError):
    """Base class for cadgeom geometry errors."""


class DegenerateGeometryError(GeometryError):
    """Raised when a computation would divide by a vanishing measure,
    e.g. the centroid of a polyline whose signed area is zero."""


class NonCoplanarGeometryError(GeometryError):
    """Raised when planar operations receive figures in different planes."""


class CurveOrderingError(GeometryError):
    """Raised when a set of curves cannot be chained end to start."""


__all__ = [
    'GeometryError',
    'DegenerateGeometryError',
    'NonCoplanarGeometryError',
    'CurveOrderingError',
]
