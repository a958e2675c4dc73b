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

"""Parametric surface definitions for minsurf.

A surface is a pure function of two parameters plus the rectangular
parameter domain it is meant to be sampled over.  The tessellator only
ever sees the ``ParametricSurface`` capability (``evaluate`` and
``domain_bounds``); every concrete formula below is one variant of it,
selected by name through the ``SURFACES`` registry rather than by a
separate type.

Surface types:
- plane: the ``z = 0`` plane, ``(u, v, 0)``
- sphere: longitude/latitude sphere about the origin
- richmond: Richmond's minimal surface
- sievert: Sievert's surface (constant positive curvature)
- enneper: Enneper's minimal surface

Formulas are written with numpy ufuncs.  Parameters that hit a singular
locus (``u = v = 0`` for Richmond, ``v <= 0`` for Sievert's log term)
therefore evaluate to ``nan``/``inf`` with numpy's usual
``RuntimeWarning`` instead of raising; no attempt is made to repair
them.  The default domains stay clear of those loci.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from math import pi
from typing import Callable, Dict, Tuple

import numpy as np

Point3 = Tuple[float, float, float]
SurfaceFn = Callable[[float, float], Tuple[float, float, float]]


@dataclass(frozen=True)
class ParametricSurface:
    """A surface ``(u, v) -> (x, y, z)`` over ``u_range x v_range``.

    Instances are immutable.  Calling the instance is the same as
    calling ``evaluate``, so a ``ParametricSurface`` can be passed
    anywhere a bare surface function is accepted.
    """

    fn: SurfaceFn
    u_range: Tuple[float, float] = (0.0, 1.0)
    v_range: Tuple[float, float] = (0.0, 1.0)
    name: str = ""
    params: Dict[str, float] = field(default_factory=dict, compare=False)

    def evaluate(self, u, v) -> Point3:
        x, y, z = self.fn(u, v)
        return (float(x), float(y), float(z))

    def __call__(self, u, v) -> Point3:
        return self.evaluate(u, v)

    def domain_bounds(self) -> Tuple[float, float, float, float]:
        """Return ``(u_min, u_max, v_min, v_max)``."""
        return (float(self.u_range[0]), float(self.u_range[1]),
                float(self.v_range[0]), float(self.v_range[1]))

    def with_domain(self, u_range=None, v_range=None) -> "ParametricSurface":
        """Return a copy sampled over a different parameter domain."""
        return ParametricSurface(
            self.fn,
            tuple(u_range) if u_range is not None else self.u_range,
            tuple(v_range) if v_range is not None else self.v_range,
            self.name,
            dict(self.params),
        )


# -----------------------------------------------------------------------------
# Plane
# -----------------------------------------------------------------------------

def plane_surface(*, u_range=(-1.0, 1.0), v_range=(-1.0, 1.0)):
    """Create the ``z = 0`` plane, ``f(u, v) = (u, v, 0)``."""

    def fn(u, v):
        return (u, v, 0.0)

    return ParametricSurface(fn, tuple(u_range), tuple(v_range), 'plane')


# -----------------------------------------------------------------------------
# Sphere
# -----------------------------------------------------------------------------

def sphere_surface(radius=1.0, *, u_range=(0.0, 2*pi), v_range=(-pi/2, pi/2)):
    """Create a sphere about the origin.

    Parameters
    ----------
    radius : float
        Radius of the sphere, must be positive.
    u_range : tuple, optional
        Longitude parameter range (default (0, 2*pi)).
    v_range : tuple, optional
        Latitude parameter range (default (-pi/2, pi/2)).
    """
    if radius <= 0:
        raise ValueError("Radius must be positive")
    r = float(radius)

    def fn(u, v):
        cv = np.cos(v)
        return (r * cv * np.cos(u), r * cv * np.sin(u), r * np.sin(v))

    return ParametricSurface(fn, tuple(u_range), tuple(v_range), 'sphere',
                             {'radius': r})


# -----------------------------------------------------------------------------
# Richmond's minimal surface
# -----------------------------------------------------------------------------

def richmond_surface(*, u_range=(-1.0, 1.0), v_range=(0.2, 1.0)):
    """Create Richmond's minimal surface.

    ::

        x = (-3u - u^5 + 2u^3 v^2 + 3u v^4) / (6 (u^2 + v^2))
        y = (-3v - 3u^4 v - 2u^2 v^3 + v^5) / (6 (u^2 + v^2))
        z = u

    The denominator vanishes at ``u = v = 0``; the default ``v`` range
    starts at 0.2 to stay away from it.
    """

    def fn(u, v):
        u = np.float64(u)
        v = np.float64(v)
        denom = 6.0 * (u**2 + v**2)
        x = (-3*u - u**5 + 2 * u**3 * v**2 + 3 * u * v**4) / denom
        y = (-3*v - 3 * u**4 * v - 2 * u**2 * v**3 + v**5) / denom
        return (x, y, u)

    return ParametricSurface(fn, tuple(u_range), tuple(v_range), 'richmond')


# -----------------------------------------------------------------------------
# Sievert's surface
# -----------------------------------------------------------------------------

def sievert_surface(c=1.0, *, u_range=(-0.95*pi/2, 0.95*pi/2),
                    v_range=(0.05*pi, 0.95*pi)):
    """Create Sievert's surface with shape constant ``c``.

    ::

        phi = -u / sqrt(c+1) + atan(sqrt(c+1) tan u)
        a   = 2 / (c + 1 - c sin^2 v cos^2 u)
        r   = a / sqrt(c) * sqrt((c+1)(1 + c sin^2 u)) * sin v
        x, y, z = r cos phi, r sin phi, (log(tan(v/2)) + a (c+1) cos v) / 2

    The log term is real only for ``0 < v < pi``, so the default
    ``v_range`` is ``[0.05 pi, 0.95 pi]`` rather than the symmetric
    ``[-0.95 pi, 0.95 pi]`` used by older viewers, whose negative half
    evaluates to ``nan``.
    """
    if c <= 0:
        raise ValueError("Sievert constant must be positive")
    c = float(c)
    k = np.sqrt(c + 1.0)

    def fn(u, v):
        u = np.float64(u)
        v = np.float64(v)
        phi = -u / k + np.arctan(k * np.tan(u))
        a = 2.0 / (c + 1.0 - c * np.sin(v)**2 * np.cos(u)**2)
        r = a / np.sqrt(c) * np.sqrt((c + 1.0) * (1.0 + c * np.sin(u)**2)) * np.sin(v)
        z = (np.log(np.tan(v / 2.0)) + a * (c + 1.0) * np.cos(v)) / 2.0
        return (r * np.cos(phi), r * np.sin(phi), z)

    return ParametricSurface(fn, tuple(u_range), tuple(v_range), 'sievert',
                             {'c': c})


# -----------------------------------------------------------------------------
# Enneper's minimal surface
# -----------------------------------------------------------------------------

def enneper_surface(*, u_range=(-2.0, 2.0), v_range=(-2.0, 2.0)):
    """Create Enneper's minimal surface,
    ``(u - u^3/3 + u v^2, v - v^3/3 + v u^2, u^2 - v^2)``."""

    def fn(u, v):
        u = np.float64(u)
        v = np.float64(v)
        return (u - u**3 / 3.0 + u * v**2,
                v - v**3 / 3.0 + v * u**2,
                u**2 - v**2)

    return ParametricSurface(fn, tuple(u_range), tuple(v_range), 'enneper')


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------

SURFACES: Dict[str, Callable[..., ParametricSurface]] = {
    'plane': plane_surface,
    'sphere': sphere_surface,
    'richmond': richmond_surface,
    'sievert': sievert_surface,
    'enneper': enneper_surface,
}


def available_surfaces():
    """Return the registered surface names, sorted."""
    return sorted(SURFACES)


def make_surface(name, **params) -> ParametricSurface:
    """Build a registered surface by name.

    Keyword parameters are passed to the surface constructor, so
    ``make_surface('sievert', c=0.5, v_range=(0.1, 3.0))`` works.
    """
    try:
        builder = SURFACES[name]
    except KeyError:
        raise KeyError(f"unknown surface '{name}', expected one of "
                       f"{available_surfaces()}") from None
    return builder(**params)


__all__ = [
    "ParametricSurface",
    "Point3",
    "SurfaceFn",
    "plane_surface",
    "sphere_surface",
    "richmond_surface",
    "sievert_surface",
    "enneper_surface",
    "SURFACES",
    "available_surfaces",
    "make_surface",
]
