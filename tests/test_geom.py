import pytest
from math import atan, cos, pi, radians, sin, sqrt, tan
from cadgeom.geom import *
## unit tests for cadgeom geom.py

class TestPoint:
    """unit tests for cadgeom point functions"""

    def test_create(self):
        a = point(5,0)
        b = point(0,5,-2)
        c = point((1.5,2.5))
        d = point([1,2,3])
        assert a == [5,0,0,1]
        assert b == [0,5,-2,1]
        assert c == [1.5,2.5,0,1]
        assert d == [1,2,3,1]
        assert point(b) == b and point(b) is not b
        with pytest.raises(ValueError):
            point(1,2,3,-1)

    def test_discriminate(self):
        assert ispoint(point(5,0))
        assert not ispoint(vect(1,2,3,-1))
        assert not ispoint([1,2])

    def test_format(self):
        assert vstr(point(5,0)) == '[5, 0]'
        assert vstr(point(2,3,2)) == '[2, 3, 2]'

    def test_polar(self):
        p = polar(point(1,1,3),pi/2,2.0)
        assert vclose(p,point(1,3,3))

    def test_isbetween(self):
        a = point(0,0)
        b = point(4,4)
        assert isbetween(point(1,1),a,b)
        assert not isbetween(point(5,5),a,b)
        assert not isbetween(a,a,b)
        assert not isbetween(point(1,1.1),a,b)


class TestOperations:

    def test_vect(self):
        a = point(5,0)
        b = point(0,5)
        c = point(-3,-3)
        d = point(1,1)
        assert close(mag(a),5.0)
        assert vclose(add(a,b),point(5,5))
        assert vclose(sub(a,b),point(5,-5))
        assert close(dot(a,b),0)
        assert close(dot(d,c),-6)
        assert vclose(cross(a,b),point(0,0,25))
        assert vclose(cross(b,a),point(0,0,-25))
        assert close(cross2(a,b),25.0)

    def test_unit(self):
        assert vclose(unit(point(3,4)),point(0.6,0.8))
        with pytest.raises(ValueError):
            unit(point(0,0))

    def test_angles(self):
        x = point(1,0)
        y = point(0,1)
        assert close(angle_to(x,y),pi/2)
        assert close(angle_to(y,x),pi/2)
        assert close(angle_ccwXY(x,y),pi/2)
        assert close(angle_ccwXY(y,x),3*pi/2)
        assert isparallel(x,point(-2,0))
        assert not isparallel(x,y)


class TestLine:

    def test_create(self):
        a = point(5,0)
        b = point(0,5)
        f = vect(1,2,3,-1)
        assert line(a,b) == [a,b]
        assert isline(line(a,b))
        assert not isline([a,f])
        with pytest.raises(ValueError):
            line(a,f)

    def test_closest(self):
        l = line(point(0,0),point(10,0))
        assert vclose(linePointXY(l,point(3,4)),point(3,0))
        assert vclose(linePointXY(l,point(-3,4)),point(0,0))
        assert vclose(linePointXY(l,point(-3,4),inside=False),point(-3,0))
        assert close(linePointXY(l,point(3,4),distance=True),4.0)
        assert close(linePointXY(l,point(3,4),params=True),0.3)
        assert linePointXY(line(point(1,1),point(1,1)),point(0,0)) is None

    def test_intersect(self):
        l1 = line(point(0,0),point(10,10))
        l2 = line(point(0,10),point(10,0))
        l3 = line(point(0,1),point(10,11))
        l4 = line(point(20,0),point(30,-10))
        assert vclose(lineLineIntersectXY(l1,l2),point(5,5))
        assert lineLineIntersectXY(l1,l3) is None
        assert lineLineIntersectXY(l1,l4) is None
        assert vclose(lineLineIntersectXY(l1,l4,inside=False),point(10,10))
        t,u = lineLineIntersectXY(l1,l2,params=True)
        assert close(t,0.5) and close(u,0.5)
        with pytest.raises(ValueError):
            lineLineIntersectXY(l1,line(point(0,0,1),point(1,1,1)))

    def test_onlines(self):
        l = line(point(0,0),point(4,0))
        assert isonlineXY(l,point(2,0))
        assert isonlineXY(l,point(4,0))
        assert not isonlineXY(l,point(5,0))
        assert close(unsamplelineXY(l,point(1,0)),0.25)
        assert unsamplelineXY(l,point(1,1)) is None


class TestArc:

    def test_create(self):
        c = arc(point(0,0),5)
        a = arc(point(1,1),2,30,60)
        assert iscircle(c)
        assert isarc(a) and not iscircle(a)
        assert not isclockwisearc(a)
        assert isclockwisearc(arc(point(1,1),2,30,60,samplereverse=True))
        with pytest.raises(ValueError):
            arc(point(0,0),-1)
        with pytest.raises(ValueError):
            arc(point(0,0),1,n=point(0,0,2))

    def test_sample(self):
        a = arc(point(0,0),2,0,90)
        assert vclose(arcstart(a),point(2,0))
        assert vclose(arcend(a),point(0,2))
        assert vclose(samplearc(a,0.5),point(sqrt(2),sqrt(2)))
        r = arc(point(0,0),2,0,90,samplereverse=True)
        assert vclose(arcstart(r),point(0,2))
        assert close(arclength(a),pi)

    def test_wraparound(self):
        a = arc(point(0,0),1,270,90)
        assert close(arcsweep(a),pi)
        assert vclose(samplearc(a,0.5),point(1,0))
        assert close(unsamplearc(a,point(1,0)),0.5)
        assert unsamplearc(a,point(2,0)) is None
        assert isonarcXY(a,point(0,1))
        assert not isonarcXY(a,point(-1,0))

    def test_closest(self):
        a = arc(point(0,0),1,0,90)
        assert vclose(arcPointXY(a,point(2,2)),point(sqrt(0.5),sqrt(0.5)))
        assert vclose(arcPointXY(a,point(0.5,-2)),point(1,0))
        assert vclose(arcPointXY(a,point(-2,0.5)),point(0,1))

    def test_closest_params(self):
        a = arc(point(0,0),1,0,90)
        q,u = arcPointXY(a,point(2,2),params=True)
        assert vclose(q,point(sqrt(0.5),sqrt(0.5)))
        assert close(u,0.5)
        assert arcPointXY(a,point(0.5,-2),params=True) == (point(1,0),0.0)
        r = arc(point(0,0),1,0,90,samplereverse=True)
        q,u = arcPointXY(r,point(2,-0.5),params=True)
        assert vclose(q,point(1,0))
        assert u == 1.0

    def test_large_coordinates(self):
        x0,y0 = 512345.678,4123456.789
        a = arc(point(x0,y0),10,0,90)
        p = samplearc(a,0.3)
        assert isonarcXY(a,p)
        assert abs(unsamplearc(a,p)-0.3) < 1e-9
        q,u = arcPointXY(a,point(x0+20,y0+20),params=True)
        assert abs(q[0]-(x0+sqrt(50))) < 1e-6
        assert abs(q[1]-(y0+sqrt(50))) < 1e-6
        assert abs(u-0.5) < 1e-9
        l = line(point(x0,y0),point(x0+37.3,y0+11.9))
        assert isonlineXY(l,sampleline(l,0.3))

    def test_circle_intersect(self):
        c1 = arc(point(0,0),5)
        c2 = arc(point(8,0),5)
        pts = circleCircleIntersectXY(c1,c2)
        assert len(pts) == 2
        assert vclose(pts[0],point(4,-3)) or vclose(pts[0],point(4,3))
        for p in pts:
            assert close(dist(p,c1[0]),5.0)
            assert close(dist(p,c2[0]),5.0)
        assert len(circleCircleIntersectXY(c1,arc(point(10,0),5))) == 1
        assert circleCircleIntersectXY(c1,arc(point(20,0),5)) is None
        assert circleCircleIntersectXY(c1,arc(point(1,0),1)) is None
        assert circleCircleIntersectXY(c1,arc(point(0,0),2)) is None


class TestBulge:

    def test_quarter(self):
        b = tan(radians(90)/4)
        a = bulgeToArc(point(5,0),point(0,5),b)
        assert vclose(a[0],point(0,0))
        assert close(a[1][0],5.0)
        assert close(arcsweep(a),pi/2)
        assert vclose(arcstart(a),point(5,0))
        assert vclose(arcend(a),point(0,5))
        assert close(arcToBulge(a),b)

    def test_clockwise(self):
        b = -tan(radians(90)/4)
        a = bulgeToArc(point(0,5),point(5,0),b)
        assert isclockwisearc(a)
        assert vclose(a[0],point(0,0))
        assert vclose(arcstart(a),point(0,5))
        assert vclose(arcend(a),point(5,0))
        assert close(arcToBulge(a),b)

    def test_semicircle(self):
        a = bulgeToArc(point(-1,0),point(1,0),1.0)
        assert vclose(a[0],point(0,0))
        assert vclose(samplearc(a,0.5),point(0,-1))

    def test_bad(self):
        with pytest.raises(ValueError):
            bulgeToArc(point(0,0),point(1,0),0.0)
        with pytest.raises(ValueError):
            bulgeToArc(point(1,0),point(1,0),0.5)
        with pytest.raises(ValueError):
            arcToBulge(arc(point(0,0),1))

    def test_scale(self):
        b = 0.7
        assert close(scaleBulge(b,1.0),b)
        assert close(scaleBulge(b,0.0),0.0)
        assert close(scaleBulge(b,0.5),tan(atan(b)/2))


class TestEllipse:

    def test_axes(self):
        assert ellipseParamAtAngle(2,1,0.0) == 0.0
        assert close(ellipseParamAtAngle(2,1,pi/2),pi/2)
        assert close(ellipseAngleAtParam(2,1,pi/2),pi/2)
        assert close(ellipseParamAtAngle(2,1,pi),pi)

    def test_diagonal(self):
        assert close(ellipseParamAtAngle(2,1,pi/4),atan(2))
        assert close(ellipseAngleAtParam(2,1,atan(2)),pi/4)
        assert close(ellipseParamAtAngle(2,1,-pi/4),-atan(2))

    def test_inverse(self):
        for t in (0.3,1.2,2.5,-2.0):
            a = ellipseAngleAtParam(3,1.5,t)
            assert close(ellipseParamAtAngle(3,1.5,a),t)
        assert close(ellipseParamAtAngle(1,1,0.7),0.7)
