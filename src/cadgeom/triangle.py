"""Planar and spatial triangles.

``Triangle2d`` and ``Triangle3d`` hold three points in construction
order.  Collinear points are allowed; derived values that don't exist
for a degenerate triangle come back as ``None``.  Nothing is cached,
every property is recomputed from the vertices.
"""

from __future__ import annotations

import logging
from math import inf, pi, sqrt
from typing import Optional

from cadgeom import geom, xform
from cadgeom.tolerance import COPLANAR_EPSILON, Tolerance, resolve

log = logging.getLogger(__name__)

LINE = 'line'
RAY = 'ray'
SEGMENT = 'segment'

## grid used to hash triangles
HASH_PRECISION = 1e-9


class _Triangle:
    """vertex storage, indexing, equality and hashing shared by both
    triangle classes"""

    _name = 'Triangle'

    def __init__(self, *args):
        if len(args) == 1:
            pts = list(args[0])
        elif len(args) == 3:
            pts = list(args)
        else:
            raise ValueError(f'{self._name} needs 3 points, got {len(args)} arguments')
        if len(pts) != 3:
            raise ValueError(f'{self._name} needs 3 points, got {len(pts)}')
        self._points = tuple(self._convert(p) for p in pts)

    @staticmethod
    def _convert(p):
        return geom.point(p)

    @classmethod
    def from_vectors(cls, origin, v1, v2):
        """The triangle ``(origin, origin + v1, origin + v2)``."""
        o = geom.point(origin)
        return cls(o, geom.add(o, v1), geom.add(o, v2))

    def __getitem__(self, i: int):
        if not isinstance(i, int) or i < 0 or i > 2:
            raise IndexError(f'triangle vertex index out of range: {i}')
        return list(self._points[i])

    def __len__(self):
        return 3

    def __iter__(self):
        return (list(p) for p in self._points)

    def __repr__(self):
        return '{}({})'.format(self._name, ', '.join(geom.vstr(p) for p in self._points))

    def to_list(self):
        return [list(p) for p in self._points]

    @property
    def centroid(self):
        p0, p1, p2 = self._points
        return geom.scale3(geom.add(geom.add(p0, p1), p2), 1.0/3.0)

    def get_segment_at(self, i: int):
        """The side from vertex ``i`` to vertex ``i + 1`` as a line."""
        if not isinstance(i, int) or i < 0 or i > 2:
            raise IndexError(f'triangle segment index out of range: {i}')
        return [list(self._points[i]), list(self._points[(i + 1) % 3])]

    def inverse(self):
        """A new triangle with the winding reversed."""
        p0, p1, p2 = self._points
        return type(self)(p0, p2, p1)

    def is_equal_to(self, other, tol: Optional[Tolerance] = None) -> bool:
        tol = resolve(tol)
        return all(geom.vclose(a, b, tol) for a, b in zip(self._points, other._points))

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.is_equal_to(other)

    def __hash__(self):
        ## coordinates rounded to a fixed grid, independent of the global
        ## tolerance.  Equal triangles whose coordinates straddle a grid
        ## line can still hash differently.
        return hash(tuple(round(c / HASH_PRECISION) for p in self._points for c in p[:3]))


class Triangle2d(_Triangle):
    """A triangle in the XY plane."""

    _name = 'Triangle2d'

    @staticmethod
    def _convert(p):
        return geom.point2(geom.point(p))

    @property
    def signed_area(self) -> float:
        p0, p1, p2 = self._points
        return ((p1[0] - p0[0]) * (p2[1] - p0[1]) -
                (p2[0] - p0[0]) * (p1[1] - p0[1])) / 2.0

    @property
    def area(self) -> float:
        return abs(self.signed_area)

    @property
    def is_clockwise(self) -> bool:
        return self.signed_area < 0.0

    @property
    def circumscribed_circle(self):
        """The circle through all three vertices, ``None`` when the
        vertices are collinear."""
        l1 = _bisector(self.get_segment_at(0))
        l2 = _bisector(self.get_segment_at(1))
        if l1 is None or l2 is None:
            return None
        cen = geom.lineLineIntersectXY(l1, l2, inside=False)
        if cen is None:
            log.debug('no circumscribed circle for degenerate %s', self)
            return None
        return geom.arc(cen, geom.dist(cen, self._points[0]))

    @property
    def inscribed_circle(self):
        """The circle tangent to all three sides, ``None`` when the
        triangle is degenerate."""
        p0, p1, p2 = self._points
        try:
            v1 = geom.unit(geom.sub(p1, p0))
            v2 = geom.unit(geom.sub(p2, p0))
            v3 = geom.unit(geom.sub(p2, p1))
        except ValueError:
            return None
        if geom.uclose(v1, v2) or geom.uclose(v2, v3):
            return None
        d1 = geom.add(v1, v2)
        d2 = geom.add(geom.neg(v1), v3)
        if geom.mag(d1) == 0.0 or geom.mag(d2) == 0.0:
            return None
        cen = geom.lineLineIntersectXY([p0, geom.add(p0, d1)],
                                       [p1, geom.add(p1, d2)], inside=False)
        if cen is None:
            log.debug('no inscribed circle for degenerate %s', self)
            return None
        r = geom.linePointXY(self.get_segment_at(0), cen, inside=False, distance=True)
        return geom.arc(cen, r)

    def get_angle_at(self, i: int) -> float:
        """The interior angle at vertex ``i``, in radians."""
        p = self[i]
        a = geom.sub(self._points[(i + 1) % 3], p)
        b = geom.sub(self._points[(i + 2) % 3], p)
        ang = geom.angle_ccwXY(a, b)
        if ang > pi:
            return 2.0 * pi - ang
        return ang

    def intersect_with(self, line, tol: Optional[Tolerance] = None, kind: str = LINE):
        """Intersect the sides of the triangle with ``line``, a pair of
        points.  ``kind`` decides whether the line is infinite
        (``'line'``), starts at its first point (``'ray'``) or is a
        bounded ``'segment'``.  Returns the distinct intersection
        points."""
        if kind not in (LINE, RAY, SEGMENT):
            raise ValueError(f'bad line kind passed to intersect_with: {kind}')
        tol = resolve(tol)
        lin = [geom.point2(line[0]), geom.point2(line[1])]
        llen = geom.linelength(lin)
        if llen == 0.0:
            raise ValueError('zero-length line passed to intersect_with')
        result = []
        for i in range(3):
            side = self.get_segment_at(i)
            slen = geom.linelength(side)
            if slen == 0.0:
                continue
            prm = geom.lineLineIntersectXY(lin, side, inside=False, params=True, tol=tol)
            if prm is None:
                continue
            t, u = prm
            teps = tol.equal_point / llen
            ueps = tol.equal_point / slen
            if u < -ueps or u > 1.0 + ueps:
                continue
            if kind != LINE and t < -teps:
                continue
            if kind == SEGMENT and t > 1.0 + teps:
                continue
            p = geom.sampleline(side, min(1.0, max(0.0, u)))
            if not any(geom.vclose(p, q, tol) for q in result):
                result.append(p)
        return result

    def is_point_on(self, p, tol: Optional[Tolerance] = None) -> bool:
        """Does ``p`` lie on the boundary of the triangle?"""
        tol = resolve(tol)
        p = geom.point2(p)
        return any(geom.isonlineXY(self.get_segment_at(i), p, tol) for i in range(3))

    def is_point_inside(self, p, tol: Optional[Tolerance] = None) -> bool:
        """Does ``p`` lie strictly inside the triangle?  Boundary points
        are never inside."""
        tol = resolve(tol)
        p = geom.point2(p)
        if self.is_point_on(p, tol):
            return False
        inters = self.intersect_with([p, geom.add(p, [1.0, 0, 0, 1])], tol, kind=RAY)
        if any(geom.vclose(q, v, tol) for q in inters for v in self._points):
            ## the ray grazes a vertex, so the crossing count says nothing
            lam = geom.barycentricXY(p, *self._points)
            return lam is not None and all(x > 0.0 for x in lam)
        return len(inters) == 1

    def transform_by(self, matrix):
        return Triangle2d([matrix.transform(p) for p in self._points])

    def to_triangle3d(self, normal=None, elevation: float = 0.0) -> 'Triangle3d':
        """Lift into the plane with ``normal`` at ``elevation``."""
        return Triangle3d([xform.to_point3d(p, normal, elevation) for p in self._points])

    def to_triangle3d_on(self, plane) -> 'Triangle3d':
        return Triangle3d([xform.to_point3d_on(p, plane) for p in self._points])


class Triangle3d(_Triangle):
    """A triangle in space."""

    _name = 'Triangle3d'

    @property
    def normal(self):
        """Unit normal following the right hand rule, ``None`` for a
        degenerate triangle."""
        p0, p1, p2 = self._points
        n = geom.cross(geom.sub(p1, p0), geom.sub(p2, p0))
        if geom.mag(n) == 0.0:
            return None
        return geom.unit(n)

    @property
    def area(self) -> float:
        p0, p1, p2 = self._points
        return geom.mag(geom.cross(geom.sub(p1, p0), geom.sub(p2, p0))) / 2.0

    @property
    def area_xy(self) -> float:
        """Magnitude of the area of the XY projection."""
        return Triangle2d(self._points).area

    @property
    def elevation(self) -> float:
        """Distance of the supporting plane from the world origin along
        the normal."""
        n = self._require_normal()
        return geom.dot(self._points[0], n)

    @property
    def greatest_slope(self):
        n = self._require_normal()
        if geom.isparallel(n, [0, 0, 1.0, 1]):
            return [0.0, 0.0, 0.0, 1.0]
        if n[2] == 0.0:
            return [0.0, 0.0, -1.0, 1.0]
        return geom.unit(geom.cross([-n[1], n[0], 0.0, 1.0], n))

    @property
    def horizontal(self):
        n = self._require_normal()
        if geom.isparallel(n, [0, 0, 1.0, 1]):
            return [1.0, 0.0, 0.0, 1.0]
        return geom.unit([-n[1], n[0], 0.0, 1.0])

    @property
    def is_horizontal(self) -> bool:
        p0, p1, p2 = self._points
        return abs(p0[2] - p1[2]) < COPLANAR_EPSILON and abs(p0[2] - p2[2]) < COPLANAR_EPSILON

    @property
    def slope_percent(self) -> float:
        n = self._require_normal()
        if n[2] == 0.0:
            return inf
        return abs(100.0 * sqrt(n[0] * n[0] + n[1] * n[1]) / n[2])

    @property
    def slope_ucs(self):
        """Coordinate system at the centroid with the X axis along the
        horizontal and the Z axis along the normal."""
        az = self._require_normal()
        ax = self.horizontal
        ay = geom.unit(geom.cross(az, ax))
        return xform.Axes(ax, ay, az, self.centroid)

    def _require_normal(self):
        n = self.normal
        if n is None:
            raise ValueError(f'degenerate triangle has no plane: {self}')
        return n

    def get_plane(self):
        n = self._require_normal()
        return xform.Plane(geom.scale3(n, self.elevation), n)

    def to_triangle2d(self) -> Triangle2d:
        """The triangle in the coordinates of its own plane."""
        plane = self.get_plane()
        return Triangle2d([xform.to_point2d(p, plane) for p in self._points])

    def flatten(self) -> Triangle2d:
        """The XY projection of the triangle."""
        return Triangle2d(self._points)

    def _lift_circle(self, c):
        if c is None:
            return None
        n = self.normal
        cen = xform.to_point3d_on(c[0], self.get_plane())
        return geom.arc(cen, c[1][0], n=n)

    @property
    def circumscribed_circle(self):
        if self.normal is None:
            return None
        return self._lift_circle(self.to_triangle2d().circumscribed_circle)

    @property
    def inscribed_circle(self):
        if self.normal is None:
            return None
        return self._lift_circle(self.to_triangle2d().inscribed_circle)

    def get_angle_at(self, i: int) -> float:
        p = self[i]
        return geom.angle_to(geom.sub(self._points[(i + 1) % 3], p),
                             geom.sub(self._points[(i + 2) % 3], p))

    def _edge_crosses(self, p):
        p0, p1, p2 = self._points
        a, b, c = geom.sub(p0, p), geom.sub(p1, p), geom.sub(p2, p)
        return [geom.cross(a, b), geom.cross(b, c), geom.cross(c, a)]

    def is_point_inside(self, p) -> bool:
        """Is ``p`` strictly inside the triangle and in its plane?"""
        tol = Tolerance(COPLANAR_EPSILON, COPLANAR_EPSILON)
        crs = self._edge_crosses(geom.point(p))
        if any(geom.mag(v) <= tol.equal_point for v in crs):
            return False
        v1, v2, v3 = (geom.unit(v) for v in crs)
        return geom.uclose(v1, v2, tol) and geom.uclose(v2, v3, tol)

    def is_point_on(self, p) -> bool:
        """Is ``p`` on one of the sides of the triangle?"""
        p = geom.point(p)
        crs = self._edge_crosses(p)
        for i in range(3):
            a = self._points[i]
            b = self._points[(i + 1) % 3]
            if geom.mag(crs[i]) <= COPLANAR_EPSILON and \
               geom.dot(geom.sub(a, p), geom.sub(b, p)) <= COPLANAR_EPSILON:
                return True
        return False

    def transform_by(self, matrix):
        return Triangle3d([matrix.transform(p) for p in self._points])


def _bisector(seg):
    ## perpendicular bisector of an XY segment, as a pair of points
    a, b = seg
    if geom.vclose(a, b):
        return None
    mid = geom.linecenter(seg)
    return [mid, geom.add(mid, geom.orthoXY(geom.sub(b, a)))]


__all__ = [
    'LINE',
    'RAY',
    'SEGMENT',
    'Triangle2d',
    'Triangle3d',
]
