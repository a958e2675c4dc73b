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

"""Trackball-style rotation of a scene driven by pointer drags.

A ``TrackballRotator`` keeps the current orientation as an orthonormal
basis ``(right, up, forward)`` together with an optional view distance
and an optional rotation center.  Pointer positions are lifted onto a
virtual hemisphere whose equator is the largest circle inscribed in
the viewport; each drag step rotates the basis by the rotation that
carries the previous ray onto the current one.

That rotation is applied as two reflections (a transvection): every
basis vector is reflected through the bisector of the two rays and
then through the first ray.  A product of two reflections is a
rotation, so the basis stays orthonormal without renormalisation and
no rotation matrix or quaternion is ever built for the step.

The rotator does not know about any window system.  The embedding
application forwards pointer events (``mouse_down``/``mouse_move``/
``mouse_up`` or the ``touch_*`` family) in viewport pixel
coordinates, origin at the top-left, y pointing down, and reads
``get_view_matrix()`` when it draws.
"""

from __future__ import annotations

import logging
from enum import Enum
from math import sqrt
from typing import Callable, List, Optional, Sequence, Tuple

from minsurf.vec3 import add, cross, dot, mag, normalize, reflect, scale3, sub

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]

DEFAULT_VIEW_DIRECTION: Vec3 = (0.0, 0.0, 10.0)
DEFAULT_VIEW_UP: Vec3 = (0.0, 1.0, 0.0)


class GestureState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


def _check_distance(view_distance):
    if view_distance is not None and view_distance < 0:
        raise ValueError(f"view distance must be non-negative, got {view_distance}")


class TrackballRotator:
    """Mouse/touch trackball rotation about a rotation center.

    Parameters
    ----------
    width, height : float
        Viewport size in pixels.
    callback : callable, optional
        Called with no arguments after every drag step, including steps
        skipped as degenerate, typically the function that redraws the
        scene.
    view_distance : float, optional
        Distance of the viewer from the rotation center.  ``None`` means
        no translation along the view axis.
    view_direction : 3-vector, optional
        The scene is viewed from this direction towards the origin.
        Default ``(0, 0, 10)``.
    view_up : 3-vector, optional
        Direction that appears as up.  Default ``(0, 1, 0)``.  Must not
        be parallel to ``view_direction``.
    """

    def __init__(self, width, height, callback: Optional[Callable[[], None]] = None,
                 view_distance=None, view_direction=None, view_up=None):
        self.callback = callback
        self.__width = float(width)
        self.__height = float(height)
        self.__center: Optional[Vec3] = None
        self.__state = GestureState.IDLE
        self.__touch = False
        self.__prev = (0.0, 0.0)
        self.__center_x = 0.0
        self.__center_y = 0.0
        self.__radius2 = 0.0
        self.set_view(view_distance, view_direction, view_up)

    def __repr__(self):
        return (f"TrackballRotator(width={self.__width}, height={self.__height}, "
                f"view_distance={self.__view_z}, state={self.__state.value})")

    ## view setup
    ## ----------

    def set_view(self, view_distance=None, view_direction=None, view_up=None):
        """Reset the orientation with Gram-Schmidt.

        ``forward`` is the normalised view direction, ``up`` the part of
        ``view_up`` orthogonal to it, normalised, and ``right`` is
        ``up x forward``.  A ``view_up`` parallel to the view direction
        is a caller error and fails with ``ZeroDivisionError``.
        """
        _check_distance(view_distance)
        d = DEFAULT_VIEW_DIRECTION if view_direction is None else view_direction
        u = DEFAULT_VIEW_UP if view_up is None else view_up
        forward = normalize(d)
        up = normalize(sub(u, scale3(forward, dot(forward, u))))
        self.__forward = forward
        self.__up = up
        self.__right = cross(up, forward)
        self.__view_z = view_distance

    def get_view_distance(self):
        return self.__view_z

    def set_view_distance(self, view_distance):
        """Set the viewer distance; ``None`` removes the translation."""
        _check_distance(view_distance)
        self.__view_z = view_distance

    def get_rotation_center(self) -> Vec3:
        """Return the rotation center, ``(0, 0, 0)`` when none was set."""
        if self.__center is None:
            return (0.0, 0.0, 0.0)
        return self.__center

    def set_rotation_center(self, center):
        """Rotate about ``center``; ``None`` restores the origin."""
        if center is None:
            self.__center = None
        else:
            self.__center = (float(center[0]), float(center[1]), float(center[2]))

    def set_viewport(self, width, height):
        """Change the viewport size.  A gesture already in progress keeps
        the circle it started with."""
        self.__width = float(width)
        self.__height = float(height)

    @property
    def viewport(self) -> Tuple[float, float]:
        return (self.__width, self.__height)

    @property
    def basis(self) -> Tuple[Vec3, Vec3, Vec3]:
        """``(right, up, forward)``"""
        return (self.__right, self.__up, self.__forward)

    @property
    def state(self) -> GestureState:
        return self.__state

    @property
    def dragging(self) -> bool:
        return self.__state is GestureState.DRAGGING

    def get_view_matrix(self) -> List[float]:
        """Return the view transform as 16 floats in column-major order.

        The rotation block has ``right``, ``up`` and ``forward`` as its
        rows.  With a rotation center ``c`` the translation is
        ``c - R c``, so ``c`` is a fixed point; the view distance is
        then subtracted from the z translation.
        """
        x, y, z = self.__right, self.__up, self.__forward
        mat = [x[0], y[0], z[0], 0.0,
               x[1], y[1], z[1], 0.0,
               x[2], y[2], z[2], 0.0,
               0.0, 0.0, 0.0, 1.0]
        if self.__center is not None:
            c = self.__center
            mat[12] = c[0] - dot(x, c)
            mat[13] = c[1] - dot(y, c)
            mat[14] = c[2] - dot(z, c)
        if self.__view_z is not None:
            mat[14] -= self.__view_z
        return mat

    ## rotation
    ## --------

    def to_ray(self, x, y) -> Vec3:
        """Lift viewport pixel ``(x, y)`` onto the trackball hemisphere.

        Points inside the circle are raised along ``forward`` to the
        hemisphere; points outside it stay in the image plane, so
        dragging near the edge spins about the view axis.
        """
        dx = x - self.__center_x
        dy = self.__center_y - y
        r, u = self.__right, self.__up
        v = (dx * r[0] + dy * u[0],
             dx * r[1] + dy * u[1],
             dx * r[2] + dy * u[2])
        dist2 = dot(v, v)
        if dist2 > self.__radius2:
            return v
        z = sqrt(self.__radius2 - dist2)
        return add(v, scale3(self.__forward, z))

    def apply_transvection(self, e1, e2) -> bool:
        """Rotate the basis by the rotation taking ray ``e1`` onto ``e2``.

        Returns ``False`` and leaves the basis alone when either ray or
        their bisector has zero length.
        """
        if mag(e1) == 0.0 or mag(e2) == 0.0:
            logger.debug("skipping rotation step with a zero-length ray")
            return False
        e1 = normalize(e1)
        e2 = normalize(e2)
        bisector = add(e1, e2)
        if mag(bisector) == 0.0:
            logger.debug("skipping rotation step between opposite rays")
            return False
        e = normalize(bisector)
        self.__forward = reflect(e1, reflect(e, self.__forward))
        self.__right = reflect(e1, reflect(e, self.__right))
        self.__up = reflect(e1, reflect(e, self.__up))
        return True

    def __begin(self, x, y):
        self.__center_x = self.__width / 2.0
        self.__center_y = self.__height / 2.0
        radius = min(self.__center_x, self.__center_y)
        self.__radius2 = radius * radius
        self.__prev = (float(x), float(y))
        self.__state = GestureState.DRAGGING
        logger.debug("drag started at (%s, %s)", x, y)

    def __step(self, x, y):
        px, py = self.__prev
        self.apply_transvection(self.to_ray(px, py), self.to_ray(x, y))
        self.__prev = (float(x), float(y))
        if self.callback is not None:
            self.callback()

    def __end(self):
        self.__state = GestureState.IDLE
        self.__touch = False
        logger.debug("drag ended")

    ## pointer events
    ## --------------

    def mouse_down(self, x, y):
        if self.dragging:
            return
        self.__touch = False
        self.__begin(x, y)

    def mouse_move(self, x, y):
        if not self.dragging or self.__touch:
            return
        self.__step(x, y)

    def mouse_up(self, x=None, y=None):
        if self.dragging and not self.__touch:
            self.__end()

    ## touch events, ``touches`` is a sequence of (x, y) contact points
    ## -----------------------------------------------------------------

    def touch_start(self, touches: Sequence[Sequence[float]]):
        if len(touches) != 1:
            self.touch_cancel()
            return
        if self.dragging and not self.__touch:
            return
        self.__begin(touches[0][0], touches[0][1])
        self.__touch = True

    def touch_move(self, touches: Sequence[Sequence[float]]):
        if len(touches) != 1 or not (self.dragging and self.__touch):
            self.touch_cancel()
            return
        self.__step(touches[0][0], touches[0][1])

    def touch_end(self, touches=None):
        self.touch_cancel()

    def touch_cancel(self):
        if self.dragging and self.__touch:
            self.__end()


__all__ = [
    "DEFAULT_VIEW_DIRECTION",
    "DEFAULT_VIEW_UP",
    "GestureState",
    "TrackballRotator",
]
