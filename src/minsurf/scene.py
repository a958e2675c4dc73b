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

"""Per-frame uniform values for drawing a shaded surface.

The draw loop of a viewer combines the trackball view matrix with a
fixed projection and a fixed presentation transform, and feeds a
Phong-style shader a moving light and a material.  ``frame_uniforms``
computes all of those values as plain numbers so that any rendering
layer can upload them unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import cos, degrees, pi, sin, sqrt
from typing import List, Optional, Tuple

from minsurf.xform import Matrix, Perspective, Rotation, Translation

Vec3 = Tuple[float, float, float]

## fixed presentation transform applied after the trackball rotation
PRESENTATION_AXIS: Vec3 = (sqrt(0.5), sqrt(0.5), 0.0)
PRESENTATION_ANGLE = 0.7  # radians
PRESENTATION_OFFSET: Vec3 = (0.0, 0.0, -10.0)

FIELD_OF_VIEW = pi / 8
NEAR_PLANE = 0.1
FAR_PLANE = 100.0

VIEW_POSITION: Vec3 = (0.0, 0.0, 5.0)


class Material():
    """
    Phong material colors, each component in ``[0, 1]``
    """

    def __repr__(self):
        return f"Material(ambient={self.ambient}, diffuse={self.diffuse}, specular={self.specular}, shininess={self.shininess})"

    def __checkargs(self, v):
        if ( len(v) != 3 or
             len(list(filter(lambda x: isinstance(x, bool) or not isinstance(x, (int, float)), v))) > 0 or
             len(list(filter(lambda x: x < 0.0 or x > 1.0, v))) > 0 ):
            raise ValueError('bad arguments to property setter')
        return (float(v[0]), float(v[1]), float(v[2]))

    def __init__(self, **kwargs):
        self.__ambient = (0.2, 0.2, 0.2)
        self.__diffuse = (0.7, 0.7, 0.7)
        self.__specular = (1.0, 1.0, 1.0)
        self.__shininess = 32.0
        if 'ambient' in kwargs:
            self.ambient = kwargs['ambient']
        if 'diffuse' in kwargs:
            self.diffuse = kwargs['diffuse']
        if 'specular' in kwargs:
            self.specular = kwargs['specular']
        if 'shininess' in kwargs:
            self.shininess = kwargs['shininess']

    @property
    def ambient(self):
        return self.__ambient

    @ambient.setter
    def ambient(self, v):
        self.__ambient = self.__checkargs(v)

    @property
    def diffuse(self):
        return self.__diffuse

    @diffuse.setter
    def diffuse(self, v):
        self.__diffuse = self.__checkargs(v)

    @property
    def specular(self):
        return self.__specular

    @specular.setter
    def specular(self, v):
        self.__specular = self.__checkargs(v)

    @property
    def shininess(self):
        return self.__shininess

    @shininess.setter
    def shininess(self, v):
        if isinstance(v, bool) or not isinstance(v, (int, float)) or v < 0.0:
            raise ValueError('bad shininess value: {}'.format(v))
        self.__shininess = float(v)


def light_direction(time_ms, radius=10.0, speed=0.001, height=5.0) -> Vec3:
    """Light circling the y axis: ``(r cos(t s), height, r sin(t s))``."""
    angle = time_ms * speed
    return (radius * cos(angle), height, radius * sin(angle))


@dataclass(frozen=True)
class FrameUniforms:
    """Everything a shaded draw needs for one frame.

    Matrices are sixteen floats in column-major order.
    """

    model_view: List[float]
    model_view_projection: List[float]
    normal_matrix: List[float]
    light_direction: Vec3
    view_position: Vec3
    material: Material


def presentation_matrix(view_matrix) -> Matrix:
    """``Translation(offset) * Rotation(axis, angle) * view``"""
    view = Matrix.from_column_major(view_matrix)
    rotate = Rotation(PRESENTATION_AXIS, degrees(PRESENTATION_ANGLE))
    translate = Translation(PRESENTATION_OFFSET)
    return translate.mul(rotate.mul(view))


def frame_uniforms(rotator, time_ms=0.0, aspect=1.0,
                   material: Optional[Material] = None) -> FrameUniforms:
    """Compose the uniforms for the current trackball orientation.

    ``rotator`` is anything with a ``get_view_matrix()`` returning a
    column-major 4x4, normally a ``TrackballRotator``.
    """
    projection = Perspective(FIELD_OF_VIEW, aspect, NEAR_PLANE, FAR_PLANE)
    model_view = presentation_matrix(rotator.get_view_matrix())
    mvp = projection.mul(model_view)
    normal_matrix = model_view.inverse().transpose()
    return FrameUniforms(
        model_view=model_view.column_major(),
        model_view_projection=mvp.column_major(),
        normal_matrix=normal_matrix.column_major(),
        light_direction=light_direction(time_ms),
        view_position=VIEW_POSITION,
        material=material if material is not None else Material(),
    )


__all__ = [
    "Material",
    "FrameUniforms",
    "light_direction",
    "presentation_matrix",
    "frame_uniforms",
]
