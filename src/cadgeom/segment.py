"""Polyline segments: a straight line or a bulge-encoded circular arc.

A ``PolylineSegment`` joins two XY points.  A bulge of zero makes it a
straight line; any other value is ``tan(included_angle / 4)`` of the
arc joining the points, negative when the arc runs clockwise.  Widths
are carried along but play no part in the geometry.
"""

from __future__ import annotations

import logging
from math import pi, sin
from typing import Optional

from cadgeom import geom
from cadgeom.tolerance import BULGE_EPSILON, Tolerance, resolve

log = logging.getLogger(__name__)


def scale_bulge(bulge: float, factor: float) -> float:
    """The bulge of the part of an arc covering ``factor`` of the arc
    encoded by ``bulge``."""
    return geom.scaleBulge(bulge, factor)


def arc_signed_area(arc) -> float:
    """Area between an arc and its chord, negative for clockwise arcs."""
    r = arc[1][0]
    theta = geom.arcsweep(arc)
    area = r * r * (theta - sin(theta)) / 2.0
    return -area if geom.isclockwisearc(arc) else area


def arc_centroid(arc):
    """Centroid of the circular segment between an arc and its chord."""
    start = geom.arcstart(arc)
    end = geom.arcend(arc)
    area = arc_signed_area(arc)
    if area == 0.0:
        raise ValueError(f'arc with no area has no centroid: {arc}')
    chord = geom.dist(start, end)
    angle = geom.angleXY(geom.sub(end, start))
    return geom.polar(arc[0], angle - pi / 2.0, chord ** 3 / (12.0 * area))


class PolylineSegment:
    """One edge of a polyline."""

    __hash__ = None

    def __init__(self, start_point, end_point, bulge: float = 0.0,
                 start_width: float = 0.0, end_width: Optional[float] = None):
        self.start_point = geom.point2(geom.point(start_point))
        self.end_point = geom.point2(geom.point(end_point))
        self.bulge = float(bulge)
        self.start_width = float(start_width)
        self.end_width = self.start_width if end_width is None else float(end_width)

    @classmethod
    def from_line(cls, line):
        if not geom.isline(line):
            raise ValueError(f'bad line passed to from_line: {line}')
        return cls(line[0], line[1])

    @classmethod
    def from_arc(cls, arc):
        """The segment for an XY arc, running in the arc's traversal
        direction.  Full circles can't be encoded as a bulge."""
        if not geom.isarc(arc):
            raise ValueError(f'bad arc passed to from_arc: {arc}')
        return cls(geom.arcstart(arc), geom.arcend(arc), geom.arcToBulge(arc))

    @property
    def is_linear(self) -> bool:
        return self.bulge == 0.0

    @property
    def _is_arc(self) -> bool:
        ## a bulge between coincident points encodes no arc, the
        ## segment is a zero-length line
        return self.bulge != 0.0 and not geom.vclose(self.start_point, self.end_point)

    def to_line(self):
        if self._is_arc:
            return None
        return [list(self.start_point), list(self.end_point)]

    def to_arc(self):
        if not self._is_arc:
            return None
        return geom.bulgeToArc(self.start_point, self.end_point, self.bulge)

    def to_curve(self):
        """The segment as a line or an arc."""
        return self.to_arc() if self._is_arc else self.to_line()

    @property
    def length(self) -> float:
        if not self._is_arc:
            return geom.dist(self.start_point, self.end_point)
        return geom.arclength(self.to_arc())

    def sample(self, u: float):
        """The point at fraction ``u`` of the way along the segment."""
        if not self._is_arc:
            return geom.sampleline(self.to_line(), u)
        return geom.samplearc(self.to_arc(), u)

    def closest_point_with_parameter(self, p):
        """The point of the segment closest to ``p`` and its parameter
        on the segment."""
        p = geom.point2(p)
        if self._is_arc:
            return geom.arcPointXY(self.to_arc(), p, params=True)
        line = self.to_line()
        if geom.vclose(self.start_point, self.end_point):
            return line[0], 0.0
        u = geom.linePointXY(line, p, params=True)
        return geom.sampleline(line, u), u

    def closest_point_to(self, p):
        return self.closest_point_with_parameter(p)[0]

    def get_parameter_of(self, p, tol: Optional[Tolerance] = None) -> float:
        """Fraction of the segment length from the start to ``p``, or
        ``-1.0`` when ``p`` is not on the segment."""
        tol = resolve(tol)
        p = geom.point2(p)
        if not self._is_arc:
            length = geom.dist(self.start_point, self.end_point)
            if length == 0.0:
                return 0.0 if geom.vclose(p, self.start_point, tol) else -1.0
            if not geom.isonlineXY(self.to_line(), p, tol):
                return -1.0
            return min(1.0, geom.dist(self.start_point, p) / length)
        arc = self.to_arc()
        if geom.vclose(p, self.start_point, tol):
            return 0.0
        if geom.vclose(p, self.end_point, tol):
            return 1.0
        if not geom.isonarcXY(arc, p, tol):
            return -1.0
        return min(1.0, max(0.0, geom.unsamplearc(arc, p, tol)))

    def inverse(self):
        """Reverse the segment in place.  Returns the segment."""
        self.start_point, self.end_point = self.end_point, self.start_point
        self.start_width, self.end_width = self.end_width, self.start_width
        self.bulge = -self.bulge
        return self

    def reversed(self):
        """A reversed copy of the segment."""
        return self.copy().inverse()

    def copy(self):
        return PolylineSegment(self.start_point, self.end_point, self.bulge,
                               self.start_width, self.end_width)

    def is_equal_to(self, other, tol: Optional[Tolerance] = None) -> bool:
        tol = resolve(tol)
        return geom.vclose(self.start_point, other.start_point, tol) and \
            geom.vclose(self.end_point, other.end_point, tol) and \
            abs(self.bulge - other.bulge) <= BULGE_EPSILON and \
            abs(self.start_width - other.start_width) <= BULGE_EPSILON and \
            abs(self.end_width - other.end_width) <= BULGE_EPSILON

    def __eq__(self, other):
        if not isinstance(other, PolylineSegment):
            return NotImplemented
        return self.is_equal_to(other)

    def __repr__(self):
        return 'PolylineSegment({}, {}, {}, {}, {})'.format(
            geom.vstr(self.start_point), geom.vstr(self.end_point),
            self.bulge, self.start_width, self.end_width)


__all__ = [
    'scale_bulge',
    'arc_signed_area',
    'arc_centroid',
    'PolylineSegment',
]
