import pytest
from math import isclose, sqrt
from cadgeom.xform import *
from cadgeom import geom
## unit tests for cadgeom xform.py


def pclose(a,b,tol=1e-9):
    return all(isclose(a[i],b[i],abs_tol=tol) for i in range(3))


class TestMatrix:
    """unit tests for matrix operations"""

    def test_matrix(self):
        foo = Matrix([1,2,3,4,5,6,7,8,9,10,11,12,13,14,15,16])
        fooT = Matrix(foo,True)
        bar = Matrix([[1,0,0,1],[0,1,0,1],[0,0,1,1],[0,0,0,1]])
        baz = geom.vect(1,2,3)
        I = Matrix()
        assert I.mul(bar).m == bar.m
        assert I.mul(foo).m == foo.m
        assert I.mul(fooT).m == fooT.mul(I).m
        assert foo.mul(bar).m == [[1,2,3,10],[5,6,7,26],[9,10,11,42],[13,14,15,58]]
        assert foo.mul(baz) == [18, 46, 74, 102]
        assert I.mul(baz) == baz
        assert geom.homo(foo.mul(baz)) == [18.0/102.0, 46.0/102.0, 74.0/102.0, 1.0]

    def test_bad(self):
        with pytest.raises(ValueError):
            Matrix([1,2,3])
        with pytest.raises(ValueError):
            Matrix([[1,2,3,4]]*3 + [[1,2,3]])
        with pytest.raises(ValueError):
            Matrix('foo')
        with pytest.raises(ValueError):
            Matrix().get(4,0)

    def test_transpose(self):
        foo = Matrix([1,2,3,4,5,6,7,8,9,10,11,12,13,14,15,16])
        assert foo.transpose().getrow(0) == [1,5,9,13]
        assert foo.transpose().transpose().m == foo.m
        assert Matrix(foo,True).getrow(1) == foo.transpose().getrow(1)

    def test_inverse(self):
        T = Translation([1,2,3])
        assert T.inverse().isclose(Translation([1,2,3],inverse=True))
        R = RotationZ(30)
        assert R.mul(R.inverse()).isclose(Identity())
        assert R.inverse().isclose(R.transpose())
        with pytest.raises(ValueError):
            Matrix([[1,0,0,0],[0,1,0,0],[0,0,0,0],[0,0,0,1]]).inverse()

    def test_transform(self):
        T = Translation([1,2,3])
        assert T.transform(geom.point(1,1,1)) == [2,3,4,1]
        R = RotationZ(90)
        assert pclose(R.transform(geom.point(1,0,0)),[0,1,0])


class TestPlane:

    def test_arbitrary_axes(self):
        ax,ay,az = arbitrary_axes([0,0,1,1])
        assert pclose(ax,[1,0,0]) and pclose(ay,[0,1,0]) and pclose(az,[0,0,1])
        ax,ay,az = arbitrary_axes([0,1,0,1])
        assert pclose(ax,[-1,0,0]) and pclose(ay,[0,0,1])
        ax,ay,az = arbitrary_axes([1,1,1,1])
        assert isclose(geom.dot(ax,ay),0.0,abs_tol=1e-12)
        assert isclose(geom.dot(ax,az),0.0,abs_tol=1e-12)
        assert pclose(geom.cross(ax,ay),az)

    def test_plane_to_world(self):
        n = [0,1,0,1]
        p2w = plane_to_world(n)
        w2p = world_to_plane(n)
        p = geom.point(1,2,3)
        assert pclose(p2w.transform([1,0,0,1]),[-1,0,0])
        assert pclose(p2w.transform(w2p.transform(p)),p)

    def test_plane(self):
        pl = Plane(geom.point(0,0,5),[0,0,1,1])
        assert isclose(pl.distance_to(geom.point(3,3,7)),2.0)
        assert pl.contains(geom.point(1,2,5))
        assert not pl.contains(geom.point(1,2,5.1))
        assert pclose(pl.world_to_plane().transform(geom.point(1,2,5)),[1,2,0])

    def test_project(self):
        pl = Plane(geom.point(0,0,0),[0,0,1,1])
        assert pclose(project_point(geom.point(1,2,5),pl),[1,2,0])
        assert pclose(project_point(geom.point(1,2,5),pl,[1,0,-1,1]),[6,2,0])
        assert project_point(geom.point(1,2,5),pl,[1,0,0,1]) is None

    def test_points(self):
        assert pclose(to_point3d([1,2],[0,0,1,1],3.0),[1,2,3])
        assert to_point3d([1,2],None,3.0) == [1,2,3.0,1.0]
        assert pclose(to_point3d([1,2],[0,1,0,1],3.0),[-1,3,2])
        assert pclose(flatten_point([1,2],[0,1,0,1]),[-1,0,0])
        assert to_point2d(geom.point(1,2,3)) == [1,2,0,1.0]
        pl = Plane(geom.point(0,4,0),[0,1,0,1])
        q = to_point2d(geom.point(1,4,7),pl)
        assert pclose(to_point3d_on(q,pl),[1,4,7])


class TestCoordinateSystems:

    def frames(self):
        return StaticViewFrames(ucs=Translation([10,0,0]),
                                dcs=RotationZ(90),
                                psdcs=Translation([0,0,-1]))

    def test_identity(self):
        f = self.frames()
        p = geom.point(1,2,3)
        for cs in CoordinateSystem:
            assert pclose(transform_point(p,cs,cs,f),p)

    def test_ucs(self):
        f = self.frames()
        p = geom.point(1,1,0)
        assert pclose(transform_point(p,CoordinateSystem.UCS,CoordinateSystem.WCS,f),[11,1,0])
        assert pclose(transform_point(p,CoordinateSystem.WCS,CoordinateSystem.UCS,f),[-9,1,0])

    def test_dcs(self):
        f = self.frames()
        o = geom.point(0,0,0)
        assert pclose(transform_point(o,CoordinateSystem.UCS,CoordinateSystem.DCS,f),[0,-10,0])
        q = transform_point(o,CoordinateSystem.UCS,CoordinateSystem.DCS,f)
        assert pclose(transform_point(q,CoordinateSystem.DCS,CoordinateSystem.UCS,f),o)
        assert pclose(transform_point(o,CoordinateSystem.DCS,CoordinateSystem.PSDCS,f),[0,0,-1])
        assert pclose(transform_point(geom.point(0,0,-1),CoordinateSystem.PSDCS,
                                      CoordinateSystem.DCS,f),o)

    def test_psdcs_only_with_dcs(self):
        f = self.frames()
        p = geom.point(1,2,3)
        for cs in (CoordinateSystem.WCS,CoordinateSystem.UCS):
            with pytest.raises(ValueError):
                transform_point(p,cs,CoordinateSystem.PSDCS,f)
            with pytest.raises(ValueError):
                transform_point(p,CoordinateSystem.PSDCS,cs,f)
