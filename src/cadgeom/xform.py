## matrix transformations, planes and coordinate systems for cadgeom
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

"""matrices, planes and coordinate systems

A matrix is represented as a list of four four vectors.  Vectors
represent rows unless the transpose property is true, and ``M.mul(x)``
on a vector treats it as a column vector.

Planar geometry is expressed in a plane's own coordinate system, whose
axes are derived from the plane normal with the DWG *arbitrary axis
algorithm*.  This is the frame in which 2D figures with a normal and an
elevation live.

The coordinate systems of a CAD view (WCS, UCS, DCS, PSDCS) depend on
the state of an open drawing.  ``transform_point()`` therefore takes
the view matrices from an injected ``ViewFrames`` object rather than
asking for them itself.
"""

from __future__ import annotations

import logging
from enum import Enum
from math import cos, radians, sin
from typing import Optional, Protocol

import numpy as np

import cadgeom.geom as geom
from cadgeom.tolerance import resolve

log = logging.getLogger(__name__)


class Matrix:
    """4x4 transformation matrix class for transforming homogeneous 3D coordinates"""

    def __init__(self,a=False,trans=False):
        self.m = [[1,0,0,0],
                  [0,1,0,0],
                  [0,0,1,0],
                  [0,0,0,1]]
        self.trans=False

        if isinstance(a,Matrix):
            for i in range(4):
                self.setrow(i,list(a.getrow(i)))

        elif isinstance(a,(tuple,list)):
            if len(a) == 4:
                if not all(len(r) == 4 for r in a):
                    raise ValueError('bad row length in matrix initialization')
                for i in range(4):
                    for j in range(4):
                        self.m[i][j] = _checknum(a[i][j])
            elif len(a)==16:
                for i in range(4):
                    for j in range(4):
                        self.m[i][j] = _checknum(a[i*4+j])
            else:
                raise ValueError('bad length list used to initialize matrix: {}'.format(len(a)))

        elif a is not False:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        self.trans=trans

    def __repr__(self):
        return "Matrix({},{},{},{},{})".format(self.m[0],self.m[1],
                                               self.m[2],self.m[3],self.trans)

    def get(self,i,j):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to get: {},{}'.format(i,j))
        if self.trans:
            return self.m[j][i]
        else:
            return self.m[i][j]

    def set(self,i,j,x):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to set: {},{}'.format(i,j))
        x = _checknum(x)
        if self.trans:
            self.m[j][i]=x
        else:
            self.m[i][j]=x

    def getrow(self,i):
        if i < 0 or i > 3:
            raise ValueError('bad row passed to getrow: {}'.format(i))
        if self.trans:
            return [self.m[0][i],
                    self.m[1][i],
                    self.m[2][i],
                    self.m[3][i]]
        else:
            return self.m[i]

    def getcol(self,j):
        if j < 0 or j > 3:
            raise ValueError('bad column passed to getcol: {}'.format(j))
        if not self.trans:
            return [self.m[0][j],
                    self.m[1][j],
                    self.m[2][j],
                    self.m[3][j]]
        else:
            return self.m[j]

    def setrow(self,i,x):
        if not geom.isvect(x):
            raise ValueError('bad non-vector passed to setrow: {}'.format(x))
        if i < 0 or i > 3:
            raise ValueError('bad row index passed to setrow: {}'.format(i))
        if self.trans:
            for k in range(4):
                self.m[k][i] = x[k]
        else:
            self.m[i] = list(x)

    # matrix multiply.  If x is a matrix, compute MX.  If X is a
    # vector, compute Mx. If x is a scalar, compute xM.  Respects
    # transpose flag.
    def mul(self,x):
        if isinstance(x,Matrix):
            result = Matrix()
            for i in range(4):
                for j in range(4):
                    result.set(i,j,
                               geom.dot4(self.getrow(i),x.getcol(j)))
            return result
        elif geom.isvect(x):
            result = geom.vect()
            for i in range(4):
                result[i]=geom.dot4(self.getrow(i),x)
            return result
        elif geom.isgoodnum(x):
            result = Matrix()
            for i in range(4):
                result.setrow(i,[v*x for v in self.getrow(i)])
            return result

        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def transpose(self):
        """ a new matrix, the transpose of this one """
        return Matrix([self.getcol(j) for j in range(4)])

    def inverse(self):
        """ a new matrix, the inverse of this one.  Singular matrices
        raise ``ValueError``"""
        try:
            inv = np.linalg.inv(self.to_array())
        except np.linalg.LinAlgError as exc:
            raise ValueError('singular matrix has no inverse') from exc
        return Matrix(inv.tolist())

    def to_array(self):
        """ the matrix as a 4x4 numpy array """
        return np.array([self.getrow(i) for i in range(4)],dtype=float)

    def isclose(self,other,tol=1e-9):
        return bool(np.allclose(self.to_array(),other.to_array(),atol=tol,rtol=0.0))

    def transform(self,p):
        """ transform point ``p`` and project back to the w=1 plane """
        return geom.homo(self.mul(geom.vect(p)))


def _checknum(x):
    if isinstance(x,np.floating):
        x = float(x)
    if not geom.isgoodnum(x):
        raise ValueError('bad element in matrix initialization: {}'.format(x))
    return x


def Identity():
    return Matrix()

def Translation(delta,inverse=False):
    if inverse:
        delta = geom.neg(delta)
    T = [[1,0,0,delta[0]],
         [0,1,0,delta[1]],
         [0,0,1,delta[2]],
         [0,0,0,1]]
    return Matrix(T)

def RotationZ(angle):
    """ rotation of ``angle`` degrees about the Z axis """
    c = cos(radians(angle))
    s = sin(radians(angle))
    return Matrix([[c,-s,0,0],
                   [s,c,0,0],
                   [0,0,1,0],
                   [0,0,0,1]])

def Axes(xaxis,yaxis,zaxis,origin=None):
    """ the matrix mapping the unit axes and origin of a coordinate
    system to the given vectors and point """
    o = origin if origin is not None else [0,0,0,1]
    return Matrix([[xaxis[0],yaxis[0],zaxis[0],o[0]],
                   [xaxis[1],yaxis[1],zaxis[1],o[1]],
                   [xaxis[2],yaxis[2],zaxis[2],o[2]],
                   [0,0,0,1]])


## the arbitrary axis algorithm picks an X axis for a plane from its
## normal alone.  Normals close to the world Z axis cross with world
## Y, all others with world Z.
_ARBITRARY_AXIS_LIMIT = 1.0/64.0

def arbitrary_axes(normal):
    """ return the unit ``(xaxis, yaxis, zaxis)`` of the plane
    coordinate system for ``normal`` """
    n = geom.unit(normal)
    if abs(n[0]) < _ARBITRARY_AXIS_LIMIT and abs(n[1]) < _ARBITRARY_AXIS_LIMIT:
        ax = geom.cross([0,1.0,0,1],n)
    else:
        ax = geom.cross([0,0,1.0,1],n)
    ax = geom.unit(ax)
    ay = geom.unit(geom.cross(n,ax))
    return ax,ay,n


class Plane:
    """A plane through ``origin`` with unit ``normal``."""

    def __init__(self,origin=None,normal=None):
        self.origin = geom.point(origin) if origin is not None else geom.point(0,0,0)
        self.normal = geom.unit(normal if normal is not None else [0,0,1.0,1])

    def __repr__(self):
        return 'Plane({},{})'.format(geom.vstr(self.origin),geom.vstr(self.normal))

    def axes(self):
        return arbitrary_axes(self.normal)

    def plane_to_world(self):
        ax,ay,az = self.axes()
        return Axes(ax,ay,az,self.origin)

    def world_to_plane(self):
        return self.plane_to_world().inverse()

    def distance_to(self,p):
        """ signed distance from the plane to ``p`` along the normal """
        return geom.dot(geom.sub(p,self.origin),self.normal)

    def contains(self,p,tol=None):
        return abs(self.distance_to(p)) <= resolve(tol).equal_point


def plane_to_world(plane):
    """ matrix from plane coordinates to world coordinates.  ``plane``
    is a ``Plane`` or a normal vector for a plane through the origin"""
    if not isinstance(plane,Plane):
        plane = Plane(None,plane)
    return plane.plane_to_world()

def world_to_plane(plane):
    """ matrix from world coordinates to plane coordinates """
    if not isinstance(plane,Plane):
        plane = Plane(None,plane)
    return plane.world_to_plane()

def to_point3d(p,normal=None,elevation=0.0):
    """ lift the 2D point ``p`` into the plane with ``normal`` at
    ``elevation``.  Without a normal the point is placed at z=elevation"""
    q = [p[0],p[1],elevation,1.0]
    if normal is None:
        return q
    return plane_to_world(normal).transform(q)

def to_point3d_on(p,plane):
    """ lift the 2D point ``p`` given in ``plane`` coordinates into the world """
    return plane.plane_to_world().transform([p[0],p[1],0,1.0])

def to_point2d(p,plane=None):
    """ the 2D coordinates of ``p`` in ``plane``, or its XY projection """
    if plane is None:
        return geom.point2(p)
    q = world_to_plane(plane).transform(p)
    return [q[0],q[1],0,1.0]

def flatten_point(p,normal):
    """ the XY projection of the 2D point ``p`` after lifting it into
    the plane with ``normal`` """
    return geom.point2(plane_to_world(normal).transform([p[0],p[1],0,1.0]))

def project_point(p,plane,direction=None,tol=None):
    """ project ``p`` onto ``plane`` along ``direction`` (the plane
    normal if omitted).  Return ``None`` when the direction is parallel
    to the plane."""
    tol = resolve(tol)
    d = plane.normal if direction is None else geom.unit(direction)
    den = geom.dot(d,plane.normal)
    if abs(den) <= tol.equal_vector:
        return None
    t = geom.dot(geom.sub(plane.origin,p),plane.normal)/den
    return geom.add(p,geom.scale3(d,t))


## coordinate systems
## ------------------

class CoordinateSystem(Enum):
    WCS = 0
    UCS = 1
    DCS = 2
    PSDCS = 3


class ViewFrames(Protocol):
    """The view matrices a host supplies to ``transform_point()``."""

    def wcs_to_ucs(self) -> Matrix: ...

    def ucs_to_wcs(self) -> Matrix: ...

    def wcs_to_dcs(self) -> Matrix: ...

    def dcs_to_wcs(self) -> Matrix: ...

    def dcs_to_psdcs(self) -> Matrix: ...

    def psdcs_to_dcs(self) -> Matrix: ...


class StaticViewFrames:
    """``ViewFrames`` built from fixed matrices.

    ``ucs`` maps UCS to WCS, ``dcs`` maps DCS to WCS and ``psdcs`` maps
    DCS to PSDCS.  Inverses are computed once.
    """

    def __init__(self,ucs=None,dcs=None,psdcs=None):
        self._ucs = Matrix(ucs) if ucs is not None else Identity()
        self._dcs = Matrix(dcs) if dcs is not None else Identity()
        self._psdcs = Matrix(psdcs) if psdcs is not None else Identity()
        self._ucs_inv = self._ucs.inverse()
        self._dcs_inv = self._dcs.inverse()
        self._psdcs_inv = self._psdcs.inverse()

    def wcs_to_ucs(self):
        return self._ucs_inv

    def ucs_to_wcs(self):
        return self._ucs

    def wcs_to_dcs(self):
        return self._dcs_inv

    def dcs_to_wcs(self):
        return self._dcs

    def dcs_to_psdcs(self):
        return self._psdcs

    def psdcs_to_dcs(self):
        return self._psdcs_inv


def coordinate_matrix(frm: CoordinateSystem, to: CoordinateSystem,
                      frames: ViewFrames) -> Matrix:
    """Return the matrix transforming ``frm`` coordinates into ``to``
    coordinates.  PSDCS can only be reached from, or left for, DCS."""

    cs = CoordinateSystem
    if frm == to:
        return Identity()
    if cs.PSDCS in (frm, to) and cs.DCS not in (frm, to):
        raise ValueError('PSDCS can only be used with DCS, not {}'.format(
            (to if frm == cs.PSDCS else frm).name))

    if frm == cs.WCS:
        return frames.wcs_to_ucs() if to == cs.UCS else frames.wcs_to_dcs()
    if frm == cs.UCS:
        if to == cs.WCS:
            return frames.ucs_to_wcs()
        return frames.wcs_to_dcs().mul(frames.ucs_to_wcs())
    if frm == cs.DCS:
        if to == cs.WCS:
            return frames.dcs_to_wcs()
        if to == cs.UCS:
            return frames.wcs_to_ucs().mul(frames.dcs_to_wcs())
        return frames.dcs_to_psdcs()
    return frames.psdcs_to_dcs()


def transform_point(p, frm: CoordinateSystem, to: CoordinateSystem,
                    frames: ViewFrames):
    """Transform point ``p`` from coordinate system ``frm`` to ``to``."""
    return coordinate_matrix(frm, to, frames).transform(p)


__all__ = [
    'Matrix',
    'Identity',
    'Translation',
    'RotationZ',
    'Axes',
    'arbitrary_axes',
    'Plane',
    'plane_to_world',
    'world_to_plane',
    'to_point3d',
    'to_point3d_on',
    'to_point2d',
    'flatten_point',
    'project_point',
    'CoordinateSystem',
    'ViewFrames',
    'StaticViewFrames',
    'coordinate_matrix',
    'transform_point',
]
