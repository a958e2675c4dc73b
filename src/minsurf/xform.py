## 4x4 matrix operations for homogeneous 3D coordinates in minsurf

## Copyright (c) 2026 minsurf contributors
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

from math import cos, sin, tan, radians
import numbers

import numpy as np

from minsurf.vec3 import close, epsilon, mag, scale3

## A matrix is stored as a list of four row lists.  If the ``trans``
## flag is set the storage is read as its transpose, which makes
## transposition free.  Vectors multiplied on the right are column
## vectors.
##
## Graphics APIs want the sixteen elements in column-major order;
## ``column_major`` and ``Matrix.from_column_major`` convert to and
## from that layout, which is also the layout of
## ``TrackballRotator.get_view_matrix``.


def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n, bool)) and isinstance(n, numbers.Real)


def _hvect(x):
    """lift a 3 or 4 element sequence to a homogeneous 4 list, or None"""
    if isinstance(x, (list, tuple)) and len(x) in (3, 4) and \
       all(isgoodnum(c) for c in x):
        v = [float(c) for c in x]
        if len(v) == 3:
            v.append(1.0)
        return v
    return None


class Matrix:
    """4x4 transformation matrix class for transforming homogeneous 3D coordinates"""

    def __init__(self, a=None, trans=False):
        self.m = [[1.0, 0.0, 0.0, 0.0],
                  [0.0, 1.0, 0.0, 0.0],
                  [0.0, 0.0, 1.0, 0.0],
                  [0.0, 0.0, 0.0, 1.0]]
        self.trans = False

        if isinstance(a, Matrix):
            for i in range(4):
                self.setrow(i, list(a.getrow(i)))

        elif isinstance(a, (tuple, list)):
            if len(a) == 4 and all(isinstance(r, (tuple, list)) and len(r) == 4 for r in a):
                for i in range(4):
                    for j in range(4):
                        self.m[i][j] = self.__checknum(a[i][j])
            elif len(a) == 16:
                for i in range(4):
                    for j in range(4):
                        self.m[i][j] = self.__checknum(a[i*4+j])
            else:
                raise ValueError('bad list used to initialize matrix: {}'.format(a))

        elif a is not None:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        self.trans = trans

    @staticmethod
    def __checknum(x):
        if isgoodnum(x):
            return float(x)
        raise ValueError('bad element in matrix initialization: {}'.format(x))

    def __repr__(self):
        return "Matrix({},{},{},{},{})".format(self.m[0], self.m[1],
                                               self.m[2], self.m[3], self.trans)

    @classmethod
    def from_column_major(cls, values):
        """build a matrix from sixteen column-major values"""
        if len(values) != 16:
            raise ValueError('expected 16 values, got {}'.format(len(values)))
        return cls([values[j*4+i] for i in range(4) for j in range(4)])

    #return value indexed by i,j
    def get(self, i, j):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to get: {},{}'.format(i, j))
        if self.trans:
            return self.m[j][i]
        else:
            return self.m[i][j]

    #set value indexed by i,j
    def set(self, i, j, x):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to set: {},{}'.format(i, j))
        if isgoodnum(x):
            if self.trans:
                self.m[j][i] = x
            else:
                self.m[i][j] = x
        else:
            raise ValueError('bad value passed to set: {}'.format(x))

    def getrow(self, i):
        if i < 0 or i > 3:
            raise ValueError('bad row passed to getrow: {}'.format(i))
        if self.trans:
            return [self.m[0][i], self.m[1][i], self.m[2][i], self.m[3][i]]
        else:
            return list(self.m[i])

    def getcol(self, j):
        if j < 0 or j > 3:
            raise ValueError('bad column passed to getcol: {}'.format(j))
        if not self.trans:
            return [self.m[0][j], self.m[1][j], self.m[2][j], self.m[3][j]]
        else:
            return list(self.m[j])

    def setrow(self, i, x):
        if _hvect(x) is None or len(x) != 4:
            raise ValueError('bad non-vector passed to setrow: {}'.format(x))
        if i < 0 or i > 3:
            raise ValueError('bad row index passed to setrow: {}'.format(i))
        if self.trans:
            for k in range(4):
                self.m[k][i] = x[k]
        else:
            self.m[i] = list(x)

    def setcol(self, j, x):
        if _hvect(x) is None or len(x) != 4:
            raise ValueError('bad non-vector passed to setcol: {}'.format(x))
        if j < 0 or j > 3:
            raise ValueError('bad column index passed to setcol: {}'.format(j))
        if not self.trans:
            for k in range(4):
                self.m[k][j] = x[k]
        else:
            self.m[j] = list(x)

    def rows(self):
        return [self.getrow(i) for i in range(4)]

    def column_major(self):
        """sixteen floats, column by column"""
        return [self.get(i, j) for j in range(4) for i in range(4)]

    def transpose(self):
        return Matrix(self, True)

    def inverse(self):
        """numeric inverse; raises ``numpy.linalg.LinAlgError`` if singular"""
        inv = np.linalg.inv(np.array(self.rows(), dtype=np.float64))
        return Matrix(inv.tolist())

    # matrix multiply.  If x is a matrix, compute MX.  If x is a 3 or 4
    # vector, compute Mx (3 vectors get w=1). If x is a scalar,
    # compute xM.  Respects transpose flag.

    def mul(self, x):
        if isinstance(x, Matrix):
            result = Matrix()
            for i in range(4):
                row = self.getrow(i)
                for j in range(4):
                    col = x.getcol(j)
                    result.set(i, j, sum(row[k]*col[k] for k in range(4)))
            return result
        elif isgoodnum(x):
            return Matrix([[c*x for c in self.getrow(i)] for i in range(4)])
        v = _hvect(x)
        if v is not None:
            return [sum(r*c for r, c in zip(self.getrow(i), v)) for i in range(4)]

        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def __matmul__(self, x):
        return self.mul(x)


def column_major(m):
    """column-major list for a ``Matrix`` or pass a 16 sequence through"""
    if isinstance(m, Matrix):
        return m.column_major()
    if len(m) != 16:
        raise ValueError('expected 16 values, got {}'.format(len(m)))
    return [float(v) for v in m]


# return the generalized 4x4 arbitrary axis rotation matrix, angle in degrees
def Rotation(axis, angle, inverse=False):
    m = mag(axis)
    u = axis
    if m < epsilon:
        raise ValueError('zero-length rotation axis not allowed')
    if not close(m, 1.0):
        u = scale3(axis, 1.0/m)

    if inverse:
        angle *= -1.0
    rad = radians(angle % 360.0)

    ux = u[0]
    uy = u[1]
    uz = u[2]

    cang = cos(rad)
    cmin = 1.0-cang
    sang = sin(rad)

    # see http://www.opengl-tutorial.org/assets/faq_quaternions/index.html#Q38
    R = [[cang + ux*ux*cmin, ux*uy*cmin-uz*sang, ux*uz*cmin+uy*sang, 0],
         [uy*ux*cmin+uz*sang, cang + uy*uy*cmin, uy*uz*cmin - ux*sang, 0],
         [uz*ux*cmin-uy*sang, uz*uy*cmin+ux*sang, cang+uz*uz*cmin, 0],
         [0, 0, 0, 1]]

    return Matrix(R)


def Translation(delta, inverse=False):
    if inverse:
        delta = scale3(delta, -1.0)
    dx = delta[0]
    dy = delta[1]
    dz = delta[2]
    T = [[1, 0, 0, dx],
         [0, 1, 0, dy],
         [0, 0, 1, dz],
         [0, 0, 0, 1]]
    return Matrix(T)


## OpenGL-style perspective projection, fovy in radians
def Perspective(fovy, aspect, near, far):
    if near <= 0 or far <= near:
        raise ValueError('bad clip planes passed to Perspective: {},{}'.format(near, far))
    if aspect <= 0:
        raise ValueError('bad aspect ratio passed to Perspective: {}'.format(aspect))
    f = 1.0 / tan(fovy / 2.0)
    range_inv = 1.0 / (near - far)
    P = [[f/aspect, 0, 0, 0],
         [0, f, 0, 0],
         [0, 0, (near + far)*range_inv, 2.0*near*far*range_inv],
         [0, 0, -1, 0]]
    return Matrix(P)

