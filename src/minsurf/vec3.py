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

"""three-vector kernel for **minsurf**

Vectors are plain ``(x, y, z)`` tuples.  Every function accepts any
indexable with at least three numeric components (lists, tuples, numpy
arrays) and returns a new tuple; nothing here mutates its arguments.

The tessellator uses these for face normals and the trackball rotator
uses them for its basis, its hemisphere rays and the reflections that
make up a drag rotation.
"""

from math import sqrt

## constants
epsilon = 0.000005


def close(a, b):
    """ are two scalars the same within epsilon
    """
    return abs(a - b) < epsilon


## R^3 -> R^3 functions
## ----------------------

def vec3(x=0.0, y=0.0, z=0.0):
    """ convenience constructor, ``(x, y, z)`` as floats"""
    return (float(x), float(y), float(z))


def add(a, b):
    """ 3 vector, `a + b`"""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a, b):
    """ 3 vector, `a - b`"""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale3(a, c):
    """ 3 vector ``a`` times scalar ``c``"""
    return (a[0] * c, a[1] * c, a[2] * c)


def cross(a, b):
    """ 3 vector cross product `a x b`"""
    return (a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0])


def normalize(a):
    """return ``a`` scaled to unit length.

    A zero-length vector raises ``ZeroDivisionError``; callers that can
    legitimately see one must check ``mag`` first.
    """
    d = mag(a)
    return (a[0] / d, a[1] / d, a[2] / d)


## reflect ``v`` through the line spanned by the unit vector ``axis``
def reflect(axis, v):
    """ reflection of ``v`` in the unit ``axis``, `2 (axis . v) axis - v`"""
    s = 2.0 * dot(axis, v)
    return (s * axis[0] - v[0],
            s * axis[1] - v[1],
            s * axis[2] - v[2])


## R^3 -> R functions
## -------------------

def dot(a, b):
    """ 3 vector ``a`` dot ``b`` """
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def mag(a):
    """ compute the magnitude of 3 vector ``a``"""
    return sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def dist(a, b):
    """ euclidean distance between points ``a`` and ``b``"""
    return mag(sub(a, b))


## R^3 -> bool functions
## ----------------------

def vclose(a, b):
    """ are two vectors the same to within epsilon"""
    return close(dist(a, b), 0)


def iszero(a):
    return a[0] == 0.0 and a[1] == 0.0 and a[2] == 0.0


__all__ = [
    "epsilon",
    "close",
    "vec3",
    "add",
    "sub",
    "scale3",
    "cross",
    "normalize",
    "reflect",
    "dot",
    "mag",
    "dist",
    "vclose",
    "iszero",
]
