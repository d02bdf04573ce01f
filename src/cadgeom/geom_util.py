## utility functions for collections of points and curves
## Copyright (c) 2020 Richard DeVaul

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
Less-essential cadgeom utility functions that operate on collections
of points and curves.

Curves handled by ``to_ordered()`` are ``cadgeom.geom`` lines and arcs
or ``PolylineSegment`` instances.
"""

import logging
import math
import random

from cadgeom import geom
from cadgeom.errors import CurveOrderingError
from cadgeom.segment import PolylineSegment
from cadgeom.tolerance import resolve

log = logging.getLogger(__name__)


def _bucket(p, precise):
    ## rounding comparer key: points within ``precise`` of each other
    ## usually share a bucket
    if precise == 0.0:
        return (p[0], p[1], p[2])
    return tuple(math.floor(c/precise + 0.5) for c in p[:3])


def remove_duplicates(points, tol=None):
    """Return ``points`` with later copies of equal points dropped,
    keeping the order of first occurrence."""
    tol = resolve(tol)
    precise = tol.equal_point*10.0
    buckets = {}
    result = []
    for p in points:
        p = geom.point(p)
        key = _bucket(p, precise)
        seen = buckets.setdefault(key, [])
        if any(geom.vclose(p, q, tol) for q in seen):
            continue
        seen.append(p)
        result.append(p)
    return result


def contains(points, p, tol=None):
    """Is a point equal to ``p`` among ``points``?"""
    tol = resolve(tol)
    p = geom.point(p)
    return any(geom.vclose(p, q, tol) for q in points)


def get_extents(points):
    """Bounding box ``[min, max]`` of a non-empty collection of points."""
    pts = [geom.point(p) for p in points]
    if not pts:
        raise ValueError('empty point collection has no extents')
    mn = [min(p[i] for p in pts) for i in range(3)] + [1.0]
    mx = [max(p[i] for p in pts) for i in range(3)] + [1.0]
    return [mn, mx]


def is_inside_extents(p, bbox):
    """Does ``p`` lie inside or on the bounding box ``bbox``?"""
    return geom.isinsidebbox(bbox, geom.point(p))


def is_between(p, p1, p2, tol=None):
    """Does ``p`` lie strictly between ``p1`` and ``p2``?"""
    return geom.isbetween(geom.point(p), geom.point(p1), geom.point(p2), tol)


def polar(p, angle, distance):
    """The point ``distance`` away from ``p`` in direction ``angle``
    (radians, in the XY plane)."""
    return geom.polar(geom.point(p), angle, distance)


def randomPoints(bbox, numpoints):
    """Given a 3D bounding box and a number of points to generate,
    return a list of uniformly generated random points within the
    bounding box"""

    points = []
    minx = bbox[0][0]
    maxx = bbox[1][0]
    miny = bbox[0][1]
    maxy = bbox[1][1]
    minz = bbox[0][2]
    maxz = bbox[1][2]
    rangex = maxx-minx
    rangey = maxy-miny
    rangez = maxz-minz
    for i in range(numpoints):
        points.append(geom.point(random.random()*rangex+minx,
                                 random.random()*rangey+miny,
                                 random.random()*rangez+minz))
    return points


## curve ordering
## --------------

def _ends(c):
    if isinstance(c, PolylineSegment):
        return c.start_point, c.end_point
    if geom.isline(c):
        return c[0], c[1]
    if geom.isarc(c):
        return geom.arcstart(c), geom.arcend(c)
    raise ValueError(f'bad curve passed to to_ordered: {c}')


def _reverse(c):
    if isinstance(c, PolylineSegment):
        return c.reversed()
    if geom.isline(c):
        return [list(c[1]), list(c[0])]
    r = [list(c[0]), list(c[1])] + [list(x) for x in c[2:]]
    r[1][3] = -1 if geom.isclockwisearc(c) else -2
    return r


def to_ordered(curves, tol=None):
    """Chain ``curves`` end to start, beginning with the first one.

    A curve whose end (rather than its start) meets the end of the
    chain is reversed; the reversed curve is a copy.  Raises
    ``CurveOrderingError`` when no remaining curve meets the end of
    the chain.
    """
    tol = resolve(tol)
    remaining = list(curves)
    if not remaining:
        return []
    result = [remaining.pop(0)]
    while remaining:
        pt = _ends(result[-1])[1]
        for i, c in enumerate(remaining):
            if geom.vclose(_ends(c)[0], pt, tol):
                result.append(remaining.pop(i))
                break
        else:
            for i, c in enumerate(remaining):
                if geom.vclose(_ends(c)[1], pt, tol):
                    result.append(_reverse(remaining.pop(i)))
                    break
            else:
                log.debug('no curve continues the chain at %s', geom.vstr(pt))
                raise CurveOrderingError(
                    f'curves are not contiguous at {geom.vstr(pt)}')
    return result


__all__ = [
    'remove_duplicates',
    'contains',
    'get_extents',
    'is_inside_extents',
    'is_between',
    'polar',
    'randomPoints',
    'to_ordered',
]
