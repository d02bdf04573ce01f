## bulge-encoded lightweight polylines for cadgeom
## Copyright (c) 2020 Richard W. DeVaul
## Copyright (c) 2020 yapCAD contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Polylines
=========

A ``Polyline`` is an ordered list of ``Vertex`` values and a
``closed`` flag.  The bulge stored on vertex *i* encodes the segment
from vertex *i* to vertex *i + 1*; on a closed polyline the bulge of
the last vertex encodes the closing segment back to vertex 0.  On an
open polyline the bulge of the last vertex means nothing.

Vertices are XY points.  A polyline may carry a ``normal`` and an
``elevation`` that place its XY plane in space, as for an OCS entity;
only ``centroid3d()`` looks at them.

Polyline parameters run from 0 at the first vertex to the number of
segments at the end.  The integer part of a parameter selects a
segment, the fractional part is the fraction of that segment's length.

Area and centroid
-----------------

The area of a polyline is computed by fanning triangles out from
vertex 0 and correcting every arc segment by the signed area of the
circular segment between the arc and its chord.  An open polyline is
treated as if closed by a straight line.
"""

from __future__ import annotations

import logging
from math import pi, tan
from typing import List, NamedTuple, Optional

from cadgeom import geom, xform
from cadgeom.errors import DegenerateGeometryError
from cadgeom.segment import PolylineSegment, arc_centroid, arc_signed_area, scale_bulge
from cadgeom.tolerance import BREAK_PARAM_EPSILON, CLOCKWISE_EPSILON, Tolerance, resolve
from cadgeom.triangle import Triangle2d

log = logging.getLogger(__name__)


class Vertex(NamedTuple):
    point: list
    bulge: float = 0.0
    start_width: float = 0.0
    end_width: float = 0.0


def _vertex(v):
    if isinstance(v, Vertex):
        return Vertex(geom.point2(geom.point(v.point)), float(v.bulge),
                      float(v.start_width), float(v.end_width))
    if isinstance(v, (list, tuple)) and v and all(geom.isgoodnum(x) for x in v):
        return Vertex(geom.point2(geom.point(v)))
    if isinstance(v, (list, tuple)) and 2 <= len(v) <= 4:
        return _vertex(Vertex(*v))
    raise ValueError(f'bad polyline vertex: {v}')


def _isclockwise(p1, p2, p3):
    return (p2[0] - p1[0]) * (p3[1] - p1[1]) - (p2[1] - p1[1]) * (p3[0] - p1[0]) < CLOCKWISE_EPSILON


class Polyline:
    """A 2D polyline made of straight and bulge-encoded arc segments."""

    def __init__(self, vertices=(), closed=False, normal=None, elevation=0.0):
        self._vertices = [_vertex(v) for v in vertices]
        self.closed = bool(closed)
        self.normal = None if normal is None else geom.unit(normal)
        self.elevation = float(elevation)

    @classmethod
    def from_segments(cls, segments, closed=False, tol: Optional[Tolerance] = None):
        """Build a polyline from chained segments.  Each segment must
        start where the previous one ends; a closed polyline's last
        segment must end at the first segment's start."""
        tol = resolve(tol)
        segments = list(segments)
        if not segments:
            raise ValueError('no segments passed to from_segments')
        verts = []
        for i, s in enumerate(segments):
            if i > 0 and not geom.vclose(segments[i - 1].end_point, s.start_point, tol):
                raise ValueError(f'segment {i} does not start where segment {i - 1} ends')
            verts.append(Vertex(s.start_point, s.bulge, s.start_width, s.end_width))
        if closed:
            if not geom.vclose(segments[-1].end_point, segments[0].start_point, tol):
                raise ValueError('last segment does not end at the start of the first')
        else:
            verts.append(Vertex(segments[-1].end_point))
        return cls(verts, closed)

    def __repr__(self):
        return 'Polyline([{}], closed={})'.format(
            ', '.join('({}, {})'.format(geom.vstr(v.point), v.bulge) for v in self._vertices),
            self.closed)

    def __len__(self):
        return len(self._vertices)

    def copy(self):
        return Polyline(self._vertices, self.closed, self.normal, self.elevation)

    ## vertex access
    ## -------------

    @property
    def vertices(self) -> List[Vertex]:
        return [_vertex(v) for v in self._vertices]

    @property
    def number_of_vertices(self) -> int:
        return len(self._vertices)

    def _check_index(self, i):
        if not isinstance(i, int) or i < 0 or i >= len(self._vertices):
            raise IndexError(f'polyline vertex index out of range: {i}')

    def get_point_at(self, i: int):
        self._check_index(i)
        return list(self._vertices[i].point)

    def set_point_at(self, i: int, p):
        self._check_index(i)
        self._vertices[i] = self._vertices[i]._replace(point=geom.point2(geom.point(p)))

    def get_bulge_at(self, i: int) -> float:
        self._check_index(i)
        return self._vertices[i].bulge

    def set_bulge_at(self, i: int, bulge: float):
        self._check_index(i)
        self._vertices[i] = self._vertices[i]._replace(bulge=float(bulge))

    def add_vertex_at(self, i: int, p, bulge=0.0, start_width=0.0, end_width=0.0):
        """Insert a vertex before index ``i``, or append it when ``i`` is
        the number of vertices."""
        if not isinstance(i, int) or i < 0 or i > len(self._vertices):
            raise IndexError(f'polyline vertex index out of range: {i}')
        self._vertices.insert(i, _vertex(Vertex(p, bulge, start_width, end_width)))

    def remove_vertex_at(self, i: int):
        self._check_index(i)
        del self._vertices[i]

    ## segments
    ## --------

    @property
    def number_of_segments(self) -> int:
        n = len(self._vertices)
        if n < 2:
            return 0
        return n if self.closed else n - 1

    def get_segment_at(self, i: int) -> PolylineSegment:
        if not isinstance(i, int) or i < 0 or i >= self.number_of_segments:
            raise IndexError(f'polyline segment index out of range: {i}')
        v = self._vertices[i]
        w = self._vertices[(i + 1) % len(self._vertices)]
        return PolylineSegment(v.point, w.point, v.bulge, v.start_width, v.end_width)

    def segments(self) -> List[PolylineSegment]:
        return [self.get_segment_at(i) for i in range(self.number_of_segments)]

    @property
    def start_point(self):
        return self.get_point_at(0)

    @property
    def end_point(self):
        if self.closed:
            return self.get_point_at(0)
        return self.get_point_at(len(self._vertices) - 1)

    @property
    def length(self) -> float:
        return sum(s.length for s in self.segments())

    def reversed(self):
        """A copy running the other way.  A closed polyline keeps its
        first vertex."""
        segs = [s.reversed() for s in reversed(self.segments())]
        if not segs:
            return self.copy()
        pl = Polyline.from_segments(segs, self.closed)
        pl.normal = self.normal
        pl.elevation = self.elevation
        return pl

    ## parameters and points
    ## ---------------------

    @property
    def end_param(self) -> float:
        return float(self.number_of_segments)

    def point_at_parameter(self, t: float):
        n = self.number_of_segments
        if n == 0:
            raise ValueError('polyline has no segments')
        if t < 0.0 or t > n:
            raise ValueError(f'parameter {t} outside polyline range [0, {n}]')
        i = min(int(t), n - 1)
        return self.get_segment_at(i).sample(t - i)

    def _closest(self, p):
        ## closest point, its segment index and its segment parameter
        p = geom.point2(p)
        segs = self.segments()
        if not segs:
            if not self._vertices:
                raise ValueError('empty polyline has no closest point')
            return list(self._vertices[0].point), 0, 0.0
        best = None
        bestd = None
        for i, s in enumerate(segs):
            q, u = s.closest_point_with_parameter(p)
            d = geom.dist(p, q)
            if bestd is None or d < bestd:
                best, bestd = (q, i, u), d
        return best

    def closest_point_to(self, p):
        """The point of the polyline closest to ``p``."""
        return self._closest(p)[0]

    def parameter_at_point(self, p, tol: Optional[Tolerance] = None) -> float:
        """The parameter of the point ``p`` on the polyline.  Points off
        the polyline raise ``ValueError``."""
        tol = resolve(tol)
        for i, s in enumerate(self.segments()):
            u = s.get_parameter_of(p, tol)
            if u >= 0.0:
                return i + u
        raise ValueError(f'point {geom.vstr(p)} is not on the polyline')

    ## area and centroid
    ## -----------------

    def _moments(self):
        ## signed area and area-weighted centroid sum
        n = len(self._vertices)
        area = 0.0
        cx = 0.0
        cy = 0.0
        if n < 2:
            return area, cx, cy

        def addarc(i):
            nonlocal area, cx, cy
            arc = self.get_segment_at(i).to_arc()
            if arc is None:
                return
            a = arc_signed_area(arc)
            if a == 0.0:
                return
            c = arc_centroid(arc)
            area += a
            cx += c[0] * a
            cy += c[1] * a

        last = n - 1
        p0 = self._vertices[0].point
        addarc(0)
        for i in range(1, last):
            tri = Triangle2d(p0, self._vertices[i].point, self._vertices[i + 1].point)
            a = tri.signed_area
            c = tri.centroid
            area += a
            cx += c[0] * a
            cy += c[1] * a
            addarc(i)
        if self.closed and last > 0:
            addarc(last)
        return area, cx, cy

    def signed_area(self) -> float:
        """Area enclosed by the polyline, positive when it runs
        counter-clockwise."""
        return self._moments()[0]

    @property
    def area(self) -> float:
        return abs(self.signed_area())

    def centroid(self, tol: Optional[Tolerance] = None):
        """Centroid of the area enclosed by the polyline.  Raises
        ``DegenerateGeometryError`` when that area vanishes."""
        tol = resolve(tol)
        area, cx, cy = self._moments()
        if abs(area) < tol.equal_point:
            raise DegenerateGeometryError(f'polyline area {area} too small for a centroid')
        return [cx / area, cy / area, 0.0, 1.0]

    def centroid3d(self, tol: Optional[Tolerance] = None):
        """The centroid placed in the polyline's plane."""
        return xform.to_point3d(self.centroid(tol), self.normal, self.elevation)

    ## splitting
    ## ---------

    def _with_vertices(self, verts):
        return Polyline(verts, False, self.normal, self.elevation)

    def break_at(self, p, tol: Optional[Tolerance] = None):
        """Split the polyline at the point closest to ``p``.

        Returns ``(first, second)``, two open polylines that together
        trace the original.  Breaking at the start returns
        ``(None, copy)`` and breaking at the end ``(copy, None)``.  A
        closed polyline is opened at vertex 0 first.
        """
        tol = resolve(tol)
        p, index, t = self._closest(p)
        if geom.vclose(p, self.start_point, tol):
            return None, self.copy()
        if geom.vclose(p, self.end_point, tol):
            return self.copy(), None

        param = index + t
        verts = self.vertices
        if self.closed:
            verts.append(Vertex(list(verts[0].point)))
        last = len(verts) - 1

        k = int(round(param))
        if abs(param - k) < BREAK_PARAM_EPSILON:
            if k <= 0:
                return None, self.copy()
            if k >= last:
                return self.copy(), None
            first = verts[:k] + [Vertex(verts[k].point)]
            second = verts[k:]
            log.debug('polyline split at vertex %d', k)
            return self._with_vertices(first), self._with_vertices(second)

        index = int(param)
        t = param - index
        v = verts[index]
        w = v.start_width + (v.end_width - v.start_width) * t
        b1 = b2 = 0.0
        if v.bulge != 0.0:
            b1 = scale_bulge(v.bulge, t)
            b2 = scale_bulge(v.bulge, 1.0 - t)
        first = verts[:index] + [v._replace(bulge=b1, end_width=w), Vertex(p)]
        second = [Vertex(p, b2, w, v.end_width)] + verts[index + 1:]
        log.debug('polyline split in segment %d at %f', index, t)
        return self._with_vertices(first), self._with_vertices(second)

    ## filleting
    ## ---------

    def _linear_segment(self, i):
        s = self.get_segment_at(i)
        if not s.is_linear or geom.vclose(s.start_point, s.end_point):
            return None
        return s

    def fillet_at(self, index: int, radius: float) -> int:
        """Round the corner at vertex ``index`` with an arc of
        ``radius``.  Both neighbouring segments must be straight and long
        enough to hold the arc.  Returns 1 when a vertex was inserted,
        0 when the corner was left alone."""
        self._check_index(index)
        if radius < 0.0:
            raise ValueError(f'negative fillet radius: {radius}')
        n = len(self._vertices)
        if not self.closed and (index == 0 or index == n - 1):
            return 0
        prev = n - 1 if index == 0 else index - 1
        seg1 = self._linear_segment(prev)
        seg2 = self._linear_segment(index)
        if seg1 is None or seg2 is None:
            return 0

        vec1 = geom.sub(seg1.start_point, seg1.end_point)
        vec2 = geom.sub(seg2.end_point, seg2.start_point)
        angle = (pi - geom.angle_to(vec1, vec2)) / 2.0
        dist = radius * tan(angle)
        if dist == 0.0 or dist > seg1.length or dist > seg2.length:
            log.debug('no room for a fillet of radius %f at vertex %d', radius, index)
            return 0

        pt1 = geom.add(seg1.end_point, geom.scale3(geom.unit(vec1), dist))
        pt2 = geom.add(seg2.start_point, geom.scale3(geom.unit(vec2), dist))
        bulge = tan(angle / 2.0)
        if _isclockwise(seg1.start_point, seg1.end_point, seg2.end_point):
            bulge = -bulge
        self.add_vertex_at(index, pt1, bulge)
        self.set_point_at(index + 1, pt2)
        return 1

    def fillet_all(self, radius: float):
        """Fillet every corner that has room for it."""
        n = 0 if self.closed else 1
        i = n
        while i < len(self._vertices) - n:
            i += 1 + self.fillet_at(i, radius)


__all__ = [
    'Vertex',
    'Polyline',
]
