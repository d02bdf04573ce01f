## foundational computational geometry functions for cadgeom
## Copyright (c) 2020 Richard DeVaul
## Copyright (c) 2020 yapCAD contributors

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

"""foundational computational geometry functions for **cadgeom**

====================
OVERVIEW
====================

The cadgeom.geom module provides the scalar, vector, line and arc
primitives the rest of the package is built on: tolerance-aware
comparisons, vector products and angles, closest-point and
intersection calculations, and the conversion between circular arcs
and the DWG/DXF *bulge* encoding.

vectors and points
==================

Vectors are lists of four numbers, ``[x, y, z, w]``.  Points are
vectors that lie in the w=1 hyperplane and are created with
``point()``.  A two-dimensional point is simply a point in the z=0
plane: ::

   p2 = point(1.0, 2.0)
   p3 = point(1.0, 2.0, 3.0)

Functions with an ``XY`` suffix only look at the x and y components
and require their arguments to share an XY plane.

lines
=====

Lines are lists of two points, parameterized over ``0 <= u <= 1``
from the first point to the second.

arcs
====

An arc or circle is ``[center, [radius, start, end, w], <normal>]``.
Angles are in degrees and sweep counter-clockwise from ``start`` to
``end``.  ``start == 0 and end == 360`` (both integer) flags a full
circle.  ``w == -1`` marks an ordinary arc and ``w == -2`` a
*sample-reversed* arc, which is sampled from ``end`` back to
``start``; this is how a clockwise arc is represented.

tolerances
==========

Every comparison takes an optional ``tol`` argument, a
``cadgeom.tolerance.Tolerance``.  When it is omitted the process-wide
default is used.

"""

import logging
from math import atan, atan2, cos, degrees, pi, radians, sin, sqrt, tan
from sys import float_info

import mpmath as mpm

from cadgeom.tolerance import resolve

log = logging.getLogger(__name__)

pi2 = 2.0*pi

## operations on scalars
## -----------------------

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n,bool)) and isinstance(n,(int,float))

def close(a,b,tol=None):
    """ are two scalars the same within the point tolerance
    """
    return abs(a-b) <= resolve(tol).equal_point

def _roundoff(*pts):
    ## absolute rounding error of XY coordinate arithmetic at the
    ## magnitude of ``pts``; distance checks can't be tighter than this
    return 16.0*float_info.epsilon*max(abs(c) for p in pts for c in p[:2])

## operations on vectors
## ------------------------

def vect(a=False,b=False,c=False,d=False):
    """Convenience function for making a homogeneous coordinates 4 vector
from practically anything
    """
    r = [0,0,0,1]
    if isgoodnum(a):
        r[0]=a
        if isgoodnum(b):
            r[1]=b
            if isgoodnum(c):
                r[2]=c
                if isgoodnum(d):
                    r[3]=d
    elif isinstance(a,(tuple,list)):
        for i in range(min(4,len(a))):
            x=a[i]
            if isgoodnum(x):
                r[i]=x
    return r

def isvect(x):
    """
    check to see if argument is a proper vector for our purposes
    """
    return isinstance(x,list) and len(x) == 4 and isgoodnum(x[0]) and \
        isgoodnum(x[1]) and isgoodnum(x[2]) and isgoodnum(x[3])

def vclose(a,b,tol=None):
    """ are two points the same to within the point tolerance"""
    return dist(a,b) <= resolve(tol).equal_point

def uclose(a,b,tol=None):
    """ are two unit vectors the same to within the vector tolerance"""
    return dist(a,b) <= resolve(tol).equal_vector

## R^3 -> R^3 functions: ignore w component
## ------------------------------------------------
def add(a,b):
    """ 3 vector, `a + b`"""
    return [a[0]+b[0],a[1]+b[1],a[2]+b[2],1.0]

def sub(a,b):
    """ 3 vector, `a - b`"""
    return [a[0]-b[0],a[1]-b[1],a[2]-b[2],1.0]

def scale3(a,c):
    """ 3 vector, vector ''a'' times scalar ``c``, `a * c`"""
    return [a[0]*c,a[1]*c,a[2]*c,1.0]

def neg(a):
    """ 3 vector, `-a`"""
    return [-a[0],-a[1],-a[2],1.0]

## NOTE: this function assumes that a lies in the x,y plane.
def orthoXY(a):
    """compute an orthogonal vector to vector ``a`` which lies in an XY
plane by crossing `[a1, a2, a3]` with `[0, 0, 1]`"""

    return [ a[1], -a[0], 0, 1.0 ]

def cross(a,b):
    """Compute the cross product of a x b, assuming that both fall into
    the w=1 hyperplane
    """
    return [ a[1]*b[2] - a[2]*b[1],
             a[2]*b[0] - a[0]*b[2],
             a[0]*b[1] - a[1]*b[0],
             1.0 ]

def cross2(a,b):
    """z component of ``a x b``, the 2D cross product.  Positive if ``b``
    lies to the left of ``a``."""
    return a[0]*b[1] - a[1]*b[0]

def dot4(a,b):
    """ 4 vect dot product"""
    return a[0]*b[0]+a[1]*b[1]+a[2]*b[2]+a[3]*b[3]

def homo(a):
    """Homogenize, or project back to the w=1 plane by scaling all values by w"""
    return [ a[0]/a[3],
             a[1]/a[3],
             a[2]/a[3],
             1 ]

## R^3 -> R functions -- ignore w component
## ----------------------------------------
def dot(a,b):
    """ 3 vector ``a`` dot ``b`` """
    return a[0]*b[0]+a[1]*b[1]+a[2]*b[2]

def mag(a):
    """ compute the magnitude of 3 vector ``a``"""
    return sqrt(a[0]*a[0]+a[1]*a[1]+a[2]*a[2])

def dist(a,b):
    """ compute the euclidean distance between two 3 vector points ``a`` and ``b``"""
    return mag(sub(a,b))

def unit(a):
    """ return ``a`` scaled to unit length.  Zero-length vectors raise
    ``ValueError``"""
    m = mag(a)
    if m == 0.0:
        raise ValueError('zero-length vector has no direction')
    return scale3(a,1.0/m)

def angle_to(a,b):
    """unsigned angle in radians between 3 vectors ``a`` and ``b``, in
    the closed interval `[0, pi]`"""
    return atan2(mag(cross(a,b)),dot(a,b))

def angle_ccwXY(a,b):
    """counter-clockwise angle in radians from XY vector ``a`` to XY
    vector ``b``, in the interval `[0, 2pi)`"""
    ang = atan2(cross2(a,b),a[0]*b[0]+a[1]*b[1])
    if ang < 0.0:
        ang += pi2
    return ang

def angleXY(a):
    """ angle in radians of XY vector ``a`` from the X axis, `(-pi, pi]`"""
    return atan2(a[1],a[0])

def isparallel(a,b,tol=None):
    """ are two non-zero vectors parallel (or anti-parallel)? """
    return mag(cross(unit(a),unit(b))) <= resolve(tol).equal_vector

## R^3 -> bool functions
## ---------------------

def isinsidebbox(bbox,p):
    """ does point ``p`` lie inside 3D bounding box ``bbox``?"""
    return p[0] >= bbox[0][0] and p[0] <= bbox[1][0] and\
        p[1] >= bbox[0][1] and p[1] <= bbox[1][1] and\
        p[2] >= bbox[0][2] and p[2] <= bbox[1][2]

def isXYPlanar(points=[],tol=None):
    """do all points in list lie in the same XY plane?"""
    if len(points) < 2:
        return True
    ep = resolve(tol).equal_point
    ref = points[0][2]
    for p in points[1:]:
        if abs(p[2]-ref) > ep:
            return False
    return True

# pretty printing string formatter for vectors, lines, and polygons.
def vstr(a):
    """ format a point, or a list of points, leaving out coordinates
    that carry no information"""
    if isvect(a):
        if abs(a[3]-1.0) > 0.0:
            return "[{}, {}, {}, {}]".format(a[0],a[1],a[2],a[3])
        elif a[2] != 0:
            return "[{}, {}, {}]".format(a[0],a[1],a[2])
        else:
            return "[{}, {}]".format(a[0],a[1])
    if isinstance(a,(list,tuple)) and len(a) > 0 and all(isvect(x) for x in a):
        return "[" + ", ".join(vstr(x) for x in a) + "]"
    return str(a)

## operations on points
## --------------------

def point(x=False,y=False,z=False,w=False):
    """Point creation from point or scalars"""
    if ispoint(x):
        return list(x)
    if isinstance(x,(list,tuple)) and 2 <= len(x) <= 4:
        return point(*x)
    r = [0,0,0,1]
    if isgoodnum(x):
        r[0]=x
        if isgoodnum(y):
            r[1]=y
            if isgoodnum(z):
                r[2]=z
                if isgoodnum(w):
                    r[3]=w
    if r[3] > 0:
        return r
    else:
        raise ValueError('bad w argument to point()')

def point2(p):
    """ the 2D (z=0) projection of point ``p``"""
    return [p[0],p[1],0,1.0]

def ispoint(x):
    """ is it a point?"""
    return isvect(x) and x[3] > 0.0

def polar(p,angle,distance):
    """ the point ``distance`` away from ``p`` in the XY direction
    ``angle`` (radians); z is preserved"""
    return [p[0]+distance*cos(angle),
            p[1]+distance*sin(angle),
            p[2],
            1.0]

def isbetween(p,p1,p2,tol=None):
    """ does point ``p`` lie strictly between ``p1`` and ``p2``, on the
    segment joining them?  Coincidence with an end point is not
    between."""
    tol = resolve(tol)
    v1 = sub(p,p1)
    v2 = sub(p2,p)
    if mag(v1) <= tol.equal_point or mag(v2) <= tol.equal_point:
        return False
    return uclose(unit(v1),unit(v2),tol)

## functions that compute barycentric coordinates for 2D triangles
## -----------------------------------------------------------

def barycentricXY(a,p1,p2,p3):
    """Given a point ``a`` and three vertices ``p1``, ``p2``, and ``p3``,
    all of which fall into the same XY plane, compute the barycentric
    coordinates lam1, lam2, and lam3.  Return ``None`` for a degenerate
    triangle.
    """
    x,y = a[0],a[1]
    x1,y1 = p1[0],p1[1]
    x2,y2 = p2[0],p2[1]
    x3,y3 = p3[0],p3[1]

    denom=(y2-y3)*(x1-x3) + (x3-x2)*(y1-y3)
    if denom == 0.0:
        return None

    lam1 = ((y2-y3)*(x-x3) + (x3-x2)*(y-y3))/denom
    lam2 = ((y3-y1)*(x-x3) + (x1-x3)*(y-y3))/denom
    lam3 = 1.0-(lam1+lam2)

    return [lam1,lam2,lam3]

## operations on lines
## --------------------

def line(p1,p2=False):
    """Value-safe line creation"""
    if isline(p1):
        return [point(p1[0]),point(p1[1])]
    elif ispoint(p1) and ispoint(p2):
        return [ point(p1), point(p2) ]
    else:
        raise ValueError('bad values passed to line()')

def isline(l):
    """ is it a line? """
    return isinstance(l,list) and len(l) == 2 \
        and ispoint(l[0]) and ispoint(l[1])

def linelength(l):
    """ return the length of a line"""
    return dist(l[0],l[1])

def linecenter(l):
    """ return the center of a line"""
    return scale3(add(l[0],l[1]),0.5)

def sampleline(l,u):
    """Sample a parameterized line ``l``.  Values `0 <= u <= 1.0` will
    fall within the line segment, values `u < 0` and `u > 1` will fall
    outside the line segment.
    """
    p1=l[0]
    p2=l[1]
    p = 1.0-u
    return add(scale3(p1,p),scale3(p2,u))

def linePointXY(l,p,inside=True,distance=False,params=False):
    """
    For a point ``p`` and a line ``l`` that lie in the same XY plane,
    compute the point on ``l`` that is closest to ``p``, and return
    that point. If ``inside`` is true, the closest point is confined
    to the line segment. If ``distance`` is true, return the closest
    distance, not the point. If ``params`` is true, return the sampling
    parameter value of the closest point.  Return ``None`` for a
    zero-length line.
    """
    if distance and params:
        raise ValueError('incompatible distance and params parameters passed to linePointXY')
    a=l[0]
    b=l[1]
    ab = [b[0]-a[0],b[1]-a[1],0,1.0]
    len2 = ab[0]*ab[0]+ab[1]*ab[1]
    if len2 == 0.0:
        log.debug('zero-length line passed to linePointXY')
        return None

    u = ((p[0]-a[0])*ab[0] + (p[1]-a[1])*ab[1])/len2
    if inside:
        u = min(1.0,max(0.0,u))
    if params:
        return u
    q = [a[0]+u*ab[0],a[1]+u*ab[1],a[2],1.0]
    if distance:
        return sqrt((p[0]-q[0])**2 + (p[1]-q[1])**2)
    return q

def unsamplelineXY(l,p,tol=None):
    """
    given a point on a line, provide the corresponding parametric
    value.  Return ``None`` if the distance of the point from the
    (infinite) line is greater than the point tolerance.
    """
    dst = linePointXY(l,p,inside=False,distance=True)
    if dst is None or dst > resolve(tol).equal_point:
        return None
    return linePointXY(l,p,inside=False,params=True)

def isonlineXY(l,p,tol=None):
    """ does ``p`` lie on the segment ``l`` (end points included)?"""
    tol = resolve(tol)
    if vclose(l[0],p,tol) or vclose(l[1],p,tol):
        return True
    dst = linePointXY(l,p,inside=True,distance=True)
    return dst is not None and dst <= max(tol.equal_point,_roundoff(l[0],l[1],p))

def lineLineIntersectXY(l1,l2,inside=True,params=False,tol=None):
    """Compute the intersection of two lines that lie in the same XY
    plane.  If ``inside`` is true the intersection must fall within
    both segments.  If ``params`` is true return the parameters
    ``[t, u]`` of the intersection on each line instead of the point.
    Return ``None`` for parallel lines or for no inside intersection.
    """
    tol = resolve(tol)

    x1,y1,z1 = l1[0][0],l1[0][1],l1[0][2]
    x2,y2 = l1[1][0],l1[1][1]
    x3,y3 = l2[0][0],l2[0][1]
    x4,y4 = l2[1][0],l2[1][1]

    if not isXYPlanar([l1[0],l1[1],l2[0],l2[1]],tol):
        raise ValueError('lines not in same x-y plane')

    ## do lines intersect anywhere?  compare the sine of the angle
    ## between the lines with the vector tolerance
    denom=(x1-x2)*(y3-y4)-(y1-y2)*(x3-x4)
    scl = linelength(l1)*linelength(l2)
    if scl == 0.0 or abs(denom) <= tol.equal_vector*scl:
        return None

    t = ((x1-x3)*(y3-y4) - (y1-y3)*(x3-x4))/denom
    u = -1 * ((x1-x2)*(y1-y3) - (y1-y2)*(x1-x3))/denom

    if params:
        return [t,u]

    if inside and ( t < 0.0 or t > 1.0 or u < 0.0 or u > 1.0):
        return None

    return [x1 + t*(x2-x1), y1+t*(y2-y1), z1, 1.0]

## functions that operate on 2D arcs/circles
##------------------------------------------------------------

def arc(c,r,start=0,end=360,n=False,samplereverse=False):
    """
    Construct an arc from a center ``c``, radius ``r``, start and end
    angles in degrees and an optional unit normal ``n``.  With the
    default ``start`` and ``end`` a full circle is created.  A
    ``samplereverse`` arc is traversed from ``end`` to ``start``.
    """
    if not ispoint(c) or not isgoodnum(r):
        raise ValueError('bad arguments passed to arc()')
    if r < 0:
        raise ValueError('negative radius not allowed for arc')
    w = -2 if samplereverse else -1
    psu = [r,start,end,w]
    if not n:
        return [ point(c), psu ]
    if not ispoint(n) or abs(mag(n)-1.0) > 1e-9:
        raise ValueError('bad (non-unitary) plane vector for arc')
    return [ point(c), psu, point(n) ]

def isarc(a):
    """ is it an arc? """
    if not isinstance(a,list):
        return False
    n = len(a)
    if n < 2 or n > 3:
        return False
    if not (ispoint(a[0]) and isvect(a[1])):
        return False
    if a[1][3] not in (-1,-2):
        return False
    if a[1][0] < 0:
        return False
    if n == 3 and ( not ispoint(a[2]) or abs(mag(a[2])-1.0) > 1e-9):
        return False
    return True

def iscircle(a):
    """ is it a circle? """
    return isarc(a) and a[1][1] == 0 and a[1][2] == 360

def isclockwisearc(a):
    """ is the arc traversed clockwise (sample-reversed)? """
    return a[1][3] == -2

def arcnormal(a):
    """ the unit normal of the arc's plane """
    if len(a) == 3:
        return point(a[2])
    return [0,0,1.0,1.0]

def _arcangles(c):
    ## start and end in degrees with 0 <= start < 360 and end > start
    start=c[1][1]
    end=c[1][2]
    if start == 0 and end == 360:
        return 0.0,360.0
    start = start % 360.0
    end = end % 360.0
    if end <= start:
        end += 360.0
    return start,end

def arcsweep(c):
    """ included angle of the arc in radians, always positive """
    start,end = _arcangles(c)
    return radians(end-start)

def arclength(c):
    """return scalar length of an arc"""
    return c[1][0]*arcsweep(c)

def samplearc(c,u):
    """sample the XY arc ``c`` at parameter ``u`` and return the resulting point."""
    p=c[0]
    r=c[1][0]
    if c[1][3] == -2:
        u=1.0-u
    start,end = _arcangles(c)
    angle = radians((end-start)*u+start)
    return [p[0]+r*cos(angle),p[1]+r*sin(angle),p[2],1.0]

def arcstart(c):
    """ first point of the arc in traversal order """
    return samplearc(c,0.0)

def arcend(c):
    """ last point of the arc in traversal order """
    return samplearc(c,1.0)

def _arcparam(c,p,eps):
    ## sample parameter of the direction from the center of ``c`` to
    ## ``p``, whatever the distance of ``p`` from the center
    x = sub(p,c[0])
    r = c[1][0]
    start,end = _arcangles(c)
    span = end-start
    ang = degrees(atan2(x[1],x[0])) % 360.0
    delta = (ang-start) % 360.0
    ## points just before the start angle wrap around to a tiny
    ## negative delta rather than to nearly 360 degrees
    angtol = degrees(eps/r) if r > 0 else 0.0
    if delta > span+angtol and 360.0-delta <= angtol:
        delta -= 360.0
    u = delta/span
    if c[1][3] == -2:
        u = 1.0-u
    return u

def unsamplearc(c,p,tol=None):
    """
    unsample the XY arc ``c`` at point ``p``, which is to say given a
    point that is on the circle, return its corresponding sample
    parameter, or ``None`` if the point is off the circle.  Points
    outside the angular span produce parameters outside `[0, 1]`.
    """
    tol = resolve(tol)
    x = sub(p,c[0])
    eps = max(tol.equal_point,_roundoff(c[0],p))
    if abs(sqrt(x[0]*x[0]+x[1]*x[1])-c[1][0]) > eps:
        return None
    return _arcparam(c,p,eps)

def isonarcXY(c,p,tol=None):
    """ does ``p`` lie on the arc ``c`` within tolerance? """
    tol = resolve(tol)
    if iscircle(c):
        m = sqrt((p[0]-c[0][0])**2 + (p[1]-c[0][1])**2)
        return abs(m-c[1][0]) <= max(tol.equal_point,_roundoff(c[0],p))
    if vclose(arcstart(c),p,tol) or vclose(arcend(c),p,tol):
        return True
    u = unsamplearc(c,p,tol)
    return u is not None and 0.0 <= u <= 1.0

def arcPointXY(c,p,params=False):
    """ the point on the arc ``c`` closest to ``p``.  If ``params`` is
    true, return the point and its sampling parameter. """
    x = sub(p,c[0])
    m = sqrt(x[0]*x[0]+x[1]*x[1])
    r = c[1][0]
    if m == 0.0:
        q,u = arcstart(c),0.0
    else:
        q = [c[0][0]+x[0]*r/m,c[0][1]+x[1]*r/m,c[0][2],1.0]
        ## q is on the circle by construction, only its angle matters
        u = _arcparam(c,q,resolve(None).equal_point)
        if not 0.0 <= u <= 1.0:
            s = arcstart(c)
            e = arcend(c)
            q,u = (s,0.0) if dist(s,p) <= dist(e,p) else (e,1.0)
    if params:
        return q,u
    return q

def circleCircleIntersectXY(c1,c2,tol=None):
    """
    Compute the intersection points of the full circles of the XY
    arcs ``c1`` and ``c2``.  Return a list of one (tangent circles) or
    two points, or ``None`` when the circles don't meet or are
    concentric.
    """
    tol = resolve(tol)
    x1=c1[0]
    x2=c2[0]
    r1=c1[1][0]
    r2=c2[1][0]

    d=dist(x1,x2)

    if d <= tol.equal_point:
        return None # circle centers too close for stable calculation
    if d > r1+r2+tol.equal_point:
        return None # too far, no possiblity of intersection
    if d < abs(r1-r2)-tol.equal_point:
        return None # little circle fully inside bigger circle

    ## consider the triangle with side lengths r1, r2, and d.  The
    ## foot of the common chord is at distance id from x1, where
    ## id^2 + h^2 = r1^2, (d-id)^2 + h^2 = r2^2, so
    ## id = (r1^2-r2^2 + d^2)/2d
    mpd = mpm.mpf(d)
    mpr1 = mpm.mpf(r1)
    mpr2 = mpm.mpf(r2)
    mpid = (mpr1*mpr1 - mpr2*mpr2 + mpd*mpd)/(2*mpd)
    h2 = mpr1*mpr1 - mpid*mpid
    h = float(mpm.sqrt(h2)) if h2 > 0 else 0.0

    v1 = scale3(sub(x2,x1),1.0/d)
    base = add(x1,scale3(v1,float(mpid)))
    if h <= tol.equal_point:
        return [base]
    o = orthoXY(v1)
    return [add(base,scale3(o,h)),sub(base,scale3(o,h))]

## bulge encoding of arcs
## ----------------------

## A bulge is the tangent of a quarter of the included angle of an
## arc joining two polyline vertices.  Positive bulges sweep
## counter-clockwise from the first vertex to the second, negative
## bulges clockwise.  A bulge of zero is a straight segment.

def _deg360(ang):
    ## radians to degrees in [0, 360); tiny negative angles would
    ## otherwise round up to exactly 360
    d = degrees(ang) % 360.0
    return 0.0 if d >= 360.0 else d

def bulgeToArc(p1,p2,bulge):
    """ the XY arc from ``p1`` to ``p2`` encoded by the non-zero
    ``bulge``.  Clockwise arcs are returned sample-reversed so that
    sampling always runs from ``p1`` to ``p2``."""
    if bulge == 0.0:
        raise ValueError('zero bulge passed to bulgeToArc')
    chord = sub(point2(p2),point2(p1))
    c = mag(chord)
    if c == 0.0:
        raise ValueError('coincident end points passed to bulgeToArc')
    b = bulge
    ## left normal of the chord
    n = [-chord[1]/c,chord[0]/c,0,1.0]
    mid = scale3(add(point2(p1),point2(p2)),0.5)
    cen = add(mid,scale3(n,c*(1.0-b*b)/(4.0*b)))
    r = c*(1.0+b*b)/(4.0*abs(b))
    a1 = _deg360(atan2(p1[1]-cen[1],p1[0]-cen[0]))
    a2 = _deg360(atan2(p2[1]-cen[1],p2[0]-cen[0]))
    if b > 0.0:
        return arc(cen,r,a1,a2)
    return arc(cen,r,a2,a1,samplereverse=True)

def arcToBulge(c):
    """ the bulge value encoding the XY arc ``c`` """
    if iscircle(c):
        raise ValueError('a full circle cannot be encoded as a bulge')
    b = tan(arcsweep(c)/4.0)
    if isclockwisearc(c):
        b = -b
    return b

def scaleBulge(bulge,factor):
    """ the bulge of the sub-arc covering ``factor`` of the arc encoded
    by ``bulge``"""
    return tan(atan(bulge)*factor)

## ellipse angles
## --------------

## An ellipse with radii ``major`` and ``minor`` is parameterized as
## `(major*cos(t), minor*sin(t))` in its own frame.  Its polar angle,
## measured from the major axis, differs from the parameter ``t``
## everywhere except on the axes.

def ellipseParamAtAngle(major,minor,angle):
    """ the ellipse parameter of the point at polar ``angle`` (radians) """
    return atan2(major*sin(angle),minor*cos(angle))

def ellipseAngleAtParam(major,minor,param):
    """ the polar angle (radians) of the point at ellipse parameter ``param`` """
    return atan2(minor*sin(param),major*cos(param))
