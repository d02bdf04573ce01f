"""Tangent lines to circles.

Only the full circle of an arc matters here, its start and end angles
are ignored.  Every function returns a list of lines (pairs of points)
or ``None`` when no tangent configuration exists.  ``None`` is a
normal outcome, not an error.

Results are ordered: for each pair of tangents the one whose contact
point lies to the left of the center-to-center (or center-to-point)
vector comes first.  When both families are requested the outer pair
precedes the inner pair.
"""

from __future__ import annotations

import enum
import logging
from typing import List, Optional

from cadgeom import geom, xform
from cadgeom.errors import NonCoplanarGeometryError
from cadgeom.tolerance import Tolerance, resolve

log = logging.getLogger(__name__)


class TangentType(enum.IntFlag):
    INNER = 1
    OUTER = 2


def _circle(c):
    if not geom.isarc(c):
        raise ValueError(f'bad circle passed to tangent calculation: {c}')
    return geom.point2(c[0]), c[1][0]


def _left_first(vec, contacts, center):
    ## order two (contact, line) pairs so the contact left of vec is first
    (c1, l1), (c2, l2) = contacts
    if geom.cross2(vec, geom.sub(c1, center)) > 0.0:
        return [l1, l2]
    return [l2, l1]


def _two_points(a, b, tol):
    pts = geom.circleCircleIntersectXY(a, b, tol)
    if pts is None or len(pts) != 2:
        return None
    return pts


def tangents_to_point(circle, p, tol: Optional[Tolerance] = None) -> Optional[List]:
    """The two tangents from ``circle`` to the XY point ``p``, each
    running from its contact point to ``p``.  ``None`` when ``p`` is
    inside or on the circle."""
    tol = resolve(tol)
    cen, r = _circle(circle)
    p = geom.point2(p)
    if geom.dist(p, cen) <= r:
        log.debug('point %s is not outside circle %s', geom.vstr(p), circle)
        return None
    vec = geom.scale3(geom.sub(p, cen), 0.5)
    thales = geom.arc(geom.add(cen, vec), geom.mag(vec))
    pts = _two_points(geom.arc(cen, r), thales, tol)
    if pts is None:
        return None
    return _left_first(vec, [(q, [q, list(p)]) for q in pts], cen)


def _outer(c1, r1, c2, r2, vec, d, tol):
    if abs(r1 - r2) < tol.equal_point:
        u = geom.unit(geom.orthoXY(vec))
        contacts = []
        for s in (1.0, -1.0):
            q = geom.add(c1, geom.scale3(u, s*r1))
            contacts.append((q, [q, geom.add(q, vec)]))
        return _left_first(vec, contacts, c1)

    big = c2 if r1 < r2 else c1
    diff = geom.arc(big, abs(r1 - r2))
    thales = geom.arc(geom.add(c1, geom.scale3(vec, 0.5)), d/2.0)
    pts = _two_points(diff, thales, tol)
    if pts is None:
        return None
    contacts = []
    for q in pts:
        n = geom.unit(geom.sub(q, big))
        a = geom.add(c1, geom.scale3(n, r1))
        contacts.append((a, [a, geom.add(c2, geom.scale3(n, r2))]))
    return _left_first(vec, contacts, c1)


def _inner(c1, r1, c2, r2, vec, d, tol):
    ratio = r1/(r1 + r2)/2.0
    aux = geom.arc(geom.add(c1, geom.scale3(vec, ratio)), d*ratio)
    pts = _two_points(geom.arc(c1, r1), aux, tol)
    if pts is None:
        return None
    contacts = []
    for q in pts:
        n = geom.unit(geom.sub(q, c1))
        a = geom.add(c1, geom.scale3(n, r1))
        contacts.append((a, [a, geom.sub(c2, geom.scale3(n, r2))]))
    return _left_first(vec, contacts, c1)


def tangents_to_circle(circle, other, kind: TangentType = TangentType.OUTER,
                       tol: Optional[Tolerance] = None) -> Optional[List]:
    """The common tangents of two XY circles, each running from a
    contact on ``circle`` to a contact on ``other``.

    ``kind`` selects the outer tangents, the inner tangents or both.
    Returns ``None`` when one circle contains the other, or when only
    inner tangents are requested and the circles overlap.  With both
    families requested and overlapping circles only the outer pair is
    returned.
    """
    tol = resolve(tol)
    kind = TangentType(kind)
    if not kind:
        raise ValueError('no tangent type requested')
    c1, r1 = _circle(circle)
    c2, r2 = _circle(other)
    d = geom.dist(c1, c2)
    if d - abs(r1 - r2) <= tol.equal_point:
        log.debug('circles are nested, no common tangents')
        return None

    overlap = r1 + r2 >= d
    if overlap and kind == TangentType.INNER:
        log.debug('circles overlap, no inner tangents')
        return None

    vec = geom.sub(c2, c1)
    result = []
    if kind & TangentType.OUTER:
        outer = _outer(c1, r1, c2, r2, vec, d, tol)
        if outer is None:
            return None
        result.extend(outer)

    if not (kind & TangentType.INNER) or overlap:
        return result

    inner = _inner(c1, r1, c2, r2, vec, d, tol)
    if inner is None:
        return None
    result.extend(inner)
    return result


## tangents in arbitrary planes
## ----------------------------

def _plane_frame(circle):
    n = geom.arcnormal(circle)
    w2p = xform.world_to_plane(n)
    return n, w2p, w2p.transform(circle[0])[2]


def _flat_circle(circle, w2p):
    q = w2p.transform(circle[0])
    return geom.arc(geom.point2(q), circle[1][0])


def _lift(lines, n, elevation):
    if lines is None:
        return None
    return [[xform.to_point3d(a, n, elevation), xform.to_point3d(b, n, elevation)]
            for a, b in lines]


def tangents_to_point_3d(circle, p, tol: Optional[Tolerance] = None) -> Optional[List]:
    """``tangents_to_point()`` for a circle with a normal and a point in
    the same plane.  A point off the circle's plane raises
    ``NonCoplanarGeometryError``."""
    tol = resolve(tol)
    n, w2p, elevation = _plane_frame(circle)
    q = w2p.transform(geom.point(p))
    if abs(q[2] - elevation) >= tol.equal_point:
        raise NonCoplanarGeometryError(
            f'point {geom.vstr(p)} does not lie in the plane of the circle')
    lines = tangents_to_point(_flat_circle(circle, w2p), geom.point2(q), tol)
    return _lift(lines, n, elevation)


def tangents_to_circle_3d(circle, other, kind: TangentType = TangentType.OUTER,
                          tol: Optional[Tolerance] = None) -> Optional[List]:
    """``tangents_to_circle()`` for two circles lying in the same plane."""
    tol = resolve(tol)
    n, w2p, elevation = _plane_frame(circle)
    q = w2p.transform(other[0])
    if not geom.isparallel(n, geom.arcnormal(other), tol) or \
       abs(q[2] - elevation) >= tol.equal_point:
        raise NonCoplanarGeometryError('circles do not lie in the same plane')
    lines = tangents_to_circle(_flat_circle(circle, w2p), _flat_circle(other, w2p),
                               kind, tol)
    return _lift(lines, n, elevation)


__all__ = [
    'TangentType',
    'tangents_to_point',
    'tangents_to_circle',
    'tangents_to_point_3d',
    'tangents_to_circle_3d',
]
