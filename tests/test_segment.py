import pytest
from math import atan, isclose, pi, radians, sqrt, tan

from cadgeom import geom
from cadgeom.segment import PolylineSegment, arc_centroid, arc_signed_area, scale_bulge
## unit tests for cadgeom segment.py


def pclose(a,b,tol=1e-9):
    return all(isclose(a[i],b[i],abs_tol=tol) for i in range(3))


QUARTER = tan(pi/8)


class TestConversion:

    def test_line(self):
        l = geom.line(geom.point(0,0),geom.point(4,0))
        s = PolylineSegment.from_line(l)
        assert s.is_linear
        assert s.to_line() == [[0,0,0,1.0],[4,0,0,1.0]]
        assert s.to_arc() is None
        assert s.to_curve() == s.to_line()
        with pytest.raises(ValueError):
            PolylineSegment.from_line(geom.arc(geom.point(0,0),1))

    def test_arc_ccw(self):
        a = geom.arc(geom.point(0,0),1,0,90)
        s = PolylineSegment.from_arc(a)
        assert isclose(s.bulge,QUARTER)
        assert pclose(s.start_point,[1,0,0])
        assert pclose(s.end_point,[0,1,0])
        assert s.to_line() is None
        b = s.to_arc()
        assert pclose(b[0],[0,0,0])
        assert isclose(b[1][0],1.0)
        assert isclose(PolylineSegment.from_arc(b).bulge,s.bulge,abs_tol=1e-9)

    def test_arc_cw(self):
        a = geom.arc(geom.point(0,0),1,0,90,samplereverse=True)
        s = PolylineSegment.from_arc(a)
        assert isclose(s.bulge,-QUARTER)
        assert pclose(s.start_point,[0,1,0])
        b = s.to_arc()
        assert geom.isclockwisearc(b)
        assert pclose(geom.arcstart(b),[0,1,0])
        assert pclose(geom.arcend(b),[1,0,0])
        assert isclose(PolylineSegment.from_arc(b).bulge,s.bulge,abs_tol=1e-9)

    def test_arc_round_trip(self):
        arcs = [geom.arc(geom.point(3,-2),2.5,200,320),
                geom.arc(geom.point(0,0),1,30,150,samplereverse=True),
                geom.arc(geom.point(1,1),4,300,60),
                geom.arc(geom.point(0,0),2,10,300)]
        for a in arcs:
            b = PolylineSegment.from_arc(a).to_arc()
            assert pclose(geom.arcstart(b),geom.arcstart(a))
            assert pclose(geom.arcend(b),geom.arcend(a))
            assert isclose(geom.arcsweep(b),geom.arcsweep(a),abs_tol=1e-9)
            assert geom.isclockwisearc(b) == geom.isclockwisearc(a)

    def test_zero_length_arc(self):
        ## a bulge on a repeated vertex is a zero-length line
        s = PolylineSegment((4,0),(4,0),0.5)
        assert s.to_arc() is None
        assert s.to_line() == [[4,0,0,1.0],[4,0,0,1.0]]
        assert s.to_curve() == s.to_line()
        assert s.length == 0.0
        assert pclose(s.sample(0.5),[4,0,0])
        assert s.get_parameter_of((4,0)) == 0.0
        assert s.get_parameter_of((5,0)) == -1.0
        assert s.closest_point_with_parameter((5,5)) == ([4,0,0,1.0],0.0)

    def test_widths(self):
        s = PolylineSegment((0,0),(1,0),0.0,0.5)
        assert s.end_width == 0.5
        s = PolylineSegment((0,0),(1,0),0.0,0.5,1.5)
        assert s.end_width == 1.5


class TestMeasure:

    def test_length(self):
        assert isclose(PolylineSegment((0,0),(3,4)).length,5.0)
        assert isclose(PolylineSegment((1,0),(0,1),QUARTER).length,pi/2)
        assert isclose(PolylineSegment((-1,0),(1,0),1.0).length,pi)

    def test_sample(self):
        assert pclose(PolylineSegment((0,0),(4,0)).sample(0.5),[2,0,0])
        s = PolylineSegment((1,0),(0,1),QUARTER)
        assert pclose(s.sample(0.5),[sqrt(0.5),sqrt(0.5),0])

    def test_closest(self):
        assert pclose(PolylineSegment((0,0),(4,0)).closest_point_to((2,3)),[2,0,0])
        assert pclose(PolylineSegment((0,0),(4,0)).closest_point_to((7,3)),[4,0,0])
        s = PolylineSegment((1,0),(0,1),QUARTER)
        assert pclose(s.closest_point_to((2,2)),[sqrt(0.5),sqrt(0.5),0])
        assert pclose(PolylineSegment((1,1),(1,1)).closest_point_to((5,5)),[1,1,0])

    def test_closest_with_parameter(self):
        q,u = PolylineSegment((0,0),(4,0)).closest_point_with_parameter((1,3))
        assert pclose(q,[1,0,0])
        assert isclose(u,0.25)
        s = PolylineSegment((1,0),(0,1),QUARTER)
        q,u = s.closest_point_with_parameter((2,2))
        assert pclose(q,[sqrt(0.5),sqrt(0.5),0])
        assert isclose(u,0.5)
        q,u = s.reversed().closest_point_with_parameter((2,2))
        assert isclose(u,0.5)
        q,u = s.closest_point_with_parameter((3,-1))
        assert pclose(q,[1,0,0])
        assert u == 0.0

    def test_large_coordinates(self):
        x0,y0 = 512345.678,4123456.789
        a = geom.arc(geom.point(x0,y0),10,0,90)
        s = PolylineSegment.from_arc(a)
        assert isclose(s.get_parameter_of(geom.samplearc(a,0.5)),0.5,abs_tol=1e-6)
        assert isclose(s.get_parameter_of(geom.samplearc(a,0.2)),0.2,abs_tol=1e-6)
        assert pclose(s.closest_point_to((x0+20,y0+20)),
                      [x0+sqrt(50),y0+sqrt(50),0],1e-6)
        l = geom.line(geom.point(x0,y0),geom.point(x0+37.3,y0+11.9))
        s = PolylineSegment.from_line(l)
        assert isclose(s.get_parameter_of(geom.sampleline(l,0.3)),0.3,abs_tol=1e-9)

    def test_large_coordinates_shifted(self):
        ## the same segment far from the origin has the same closest point
        x0,y0 = 512345.678,4123456.789
        s = PolylineSegment((0,0),(37.3,11.9),0.4)
        q,u = s.closest_point_with_parameter((20,9))
        assert pclose(q,[24.255,-0.260,0],1e-2)
        assert 0.0 < u < 1.0
        t = PolylineSegment((x0,y0),(x0+37.3,y0+11.9),0.4)
        qt,ut = t.closest_point_with_parameter((x0+20,y0+9))
        assert pclose(qt,[q[0]+x0,q[1]+y0,0],1e-6)
        assert isclose(ut,u,abs_tol=1e-8)
        assert isclose(t.get_parameter_of(qt),u,abs_tol=1e-6)

    def test_parameter(self):
        s = PolylineSegment((0,0),(4,0))
        assert isclose(s.get_parameter_of((1,0)),0.25)
        assert s.get_parameter_of((1,1)) == -1.0
        assert s.get_parameter_of((5,0)) == -1.0
        a = PolylineSegment((1,0),(0,1),QUARTER)
        assert isclose(a.get_parameter_of((sqrt(0.5),sqrt(0.5))),0.5)
        assert a.get_parameter_of((1,0)) == 0.0
        assert a.get_parameter_of((0,1)) == 1.0
        assert a.get_parameter_of((-1,0)) == -1.0
        assert a.get_parameter_of((2,0)) == -1.0


class TestReverse:

    def test_inverse(self):
        s = PolylineSegment((0,0),(1,1),0.3,1.0,2.0)
        t = s.copy()
        assert s.inverse() is s
        assert s.bulge == -0.3
        assert s.start_point == [1,1,0,1.0]
        assert s.start_width == 2.0 and s.end_width == 1.0
        s.inverse()
        assert s == t

    def test_reversed(self):
        s = PolylineSegment((1,0),(0,1),QUARTER)
        r = s.reversed()
        assert r is not s
        assert s.bulge == QUARTER
        assert pclose(r.to_arc()[0],s.to_arc()[0])
        assert isclose(r.length,s.length)

    def test_equality(self):
        a = PolylineSegment((0,0),(1,0),0.5)
        b = PolylineSegment((0,0),(1,0),0.5+1e-12)
        assert a == b
        assert a != PolylineSegment((0,0),(1,0),0.6)
        assert a != a.reversed()
        with pytest.raises(TypeError):
            hash(a)


class TestArcMeasures:

    def test_scale_bulge(self):
        b = tan(radians(120)/4)
        b1 = scale_bulge(b,0.3)
        b2 = scale_bulge(b,0.7)
        assert isclose(atan(b1)+atan(b2),atan(b))
        assert isclose(scale_bulge(-b,0.5),-scale_bulge(b,0.5))

    def test_semicircle(self):
        a = geom.arc(geom.point(0,0),1,0,180)
        assert isclose(arc_signed_area(a),pi/2)
        assert pclose(arc_centroid(a),[0,4.0/(3.0*pi),0])
        r = geom.arc(geom.point(0,0),1,0,180,samplereverse=True)
        assert isclose(arc_signed_area(r),-pi/2)
        assert pclose(arc_centroid(r),[0,4.0/(3.0*pi),0])

    def test_quarter(self):
        a = geom.arc(geom.point(0,0),2,0,90)
        assert isclose(arc_signed_area(a),(pi-2.0))
        c = arc_centroid(a)
        assert isclose(c[0],c[1])
        assert c[0] > 1.0


