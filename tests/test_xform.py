import math

import numpy as np
import pytest
from minsurf.xform import *
## unit tests for minsurf xform.py

class TestXform:
    """unit tests for minsurf matrix operations"""

    def test_matrix(self):
        foo = Matrix([1,2,3,4,5,6,7,8,9,10,11,12,13,14,15,16])
        fooT = Matrix(foo,True)
        bar = Matrix([[1,0,0,1],[0,1,0,1],[0,0,1,1],[0,0,0,1]])
        baz = [1,2,3,1]
        I = Matrix()
        a = 10.0
        assert(I.mul(bar).m == bar.m)
        assert(I.mul(foo).m == foo.m)
        assert(I.mul(fooT).m == fooT.mul(I).m)
        assert(I.mul(I).m == I.m)
        assert(foo.mul(bar).m == [[1,2,3,10],[5,6,7,26],[9,10,11,42],[13,14,15,58]])
        assert(foo.mul(baz) == [18, 46, 74, 102])
        assert(foo.mul((1,2,3)) == [18, 46, 74, 102])
        assert(foo.mul(a).m == [[10.0,20.0,30.0,40.0],
                                [50.0,60.0,70.0,80.0],
                                [90.0,100.0,110.0,120.0],
                                [130.0,140.0,150.0,160.0]])
        assert(I.mul(baz) == baz)
        assert(foo @ bar).m == foo.mul(bar).m

    def test_bad_values(self):
        with pytest.raises(ValueError):
            Matrix([1, 2, 3])
        with pytest.raises(ValueError):
            Matrix([True] * 16)
        with pytest.raises(ValueError):
            Matrix().mul("nope")
        with pytest.raises(ValueError):
            Matrix().get(4, 0)

    def test_column_major(self):
        foo = Matrix([1,2,3,4,5,6,7,8,9,10,11,12,13,14,15,16])
        cm = foo.column_major()
        assert cm[:4] == [1, 5, 9, 13]
        assert Matrix.from_column_major(cm).m == foo.m
        assert column_major(foo) == cm
        assert column_major(list(range(16))) == [float(i) for i in range(16)]
        with pytest.raises(ValueError):
            column_major([1, 2, 3])

    def test_transpose(self):
        foo = Matrix([1,2,3,4,5,6,7,8,9,10,11,12,13,14,15,16])
        t = foo.transpose()
        assert t.getrow(0) == [1, 5, 9, 13]
        assert t.get(3, 0) == 4
        assert t.transpose().rows() == foo.rows()

    def test_inverse(self):
        m = Translation([1, 2, 3]).mul(Rotation([0, 0, 1], 30))
        product = m.mul(m.inverse())
        assert np.allclose(product.rows(), np.eye(4))
        singular = Matrix([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, 0], [0, 0, 0, 1]])
        with pytest.raises(np.linalg.LinAlgError):
            singular.inverse()


class TestTransforms:

    def test_rotation(self):
        R = Rotation([0, 0, 2], 90)
        assert R.mul([1, 0, 0, 1]) == pytest.approx([0, 1, 0, 1])
        assert Rotation([0, 0, 1], 90, inverse=True).mul([1, 0, 0, 1]) == \
            pytest.approx([0, -1, 0, 1])
        with pytest.raises(ValueError):
            Rotation([0, 0, 0], 10)

    def test_rotation_about_diagonal_fixes_axis(self):
        axis = [math.sqrt(0.5), math.sqrt(0.5), 0]
        R = Rotation(axis, math.degrees(0.7))
        assert R.mul(axis + [1])[:3] == pytest.approx(axis)

    def test_translation(self):
        assert Translation([1, 2, 3]).mul([1, 1, 1, 1]) == [2, 3, 4, 1]
        assert Translation([1, 2, 3], inverse=True).mul([1, 1, 1, 1]) == [0, -1, -2, 1]

    def test_perspective(self):
        P = Perspective(math.pi / 2, 2.0, 1.0, 3.0)
        assert P.get(0, 0) == pytest.approx(0.5)
        assert P.get(1, 1) == pytest.approx(1.0)
        assert P.get(2, 2) == pytest.approx(-2.0)
        assert P.get(2, 3) == pytest.approx(-3.0)
        assert P.get(3, 2) == -1
        # the near plane maps to -1 and the far plane to +1 in NDC
        near = P.mul([0, 0, -1.0, 1])
        far = P.mul([0, 0, -3.0, 1])
        assert near[2] / near[3] == pytest.approx(-1.0)
        assert far[2] / far[3] == pytest.approx(1.0)

    def test_perspective_bad_args(self):
        with pytest.raises(ValueError):
            Perspective(1.0, 1.0, 0.0, 10.0)
        with pytest.raises(ValueError):
            Perspective(1.0, 0.0, 0.1, 10.0)
