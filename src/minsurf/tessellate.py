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

"""Tessellation of parametric surfaces into renderable meshes.

``generate`` samples a surface function over a regular ``(u, v)`` grid
and builds one of two topologies:

- ``Topology.SURFACE``: a ``Mesh`` with a flat vertex list, triangle
  indices (two per grid cell) and per-vertex normals obtained by
  accumulating unnormalised face normals.
- ``Topology.WIREFRAME``: a ``Wireframe`` made of independent line
  strips, one per u-line and one per v-line, with no index buffer and
  no normals.

Both keep the sampled ``SurfaceGrid``.  The grid stores the u-lines
once; v-lines and the flat vertex order are derived from it, so the
surface function is evaluated exactly ``(u_steps+1)*(v_steps+1)``
times.

Everything produced here is immutable.  Changing the resolution means
calling ``generate`` again and dropping the old mesh.

Triangle winding: for the cell whose corners are ``tl`` (u, v), ``tr``
(u, v+1), ``bl`` (u+1, v) and ``br`` (u+1, v+1) the two triangles are
``(tl, bl, tr)`` and ``(tr, bl, br)``.  With that order the plane
``(u, v, 0)`` gets normals of ``(0, 0, 1)``, i.e. normals follow
``dP/du x dP/dv``.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Callable, Iterator, List, Sequence, Tuple

import numpy as np

from minsurf.geometry_utils import (
    Triangle,
    Vec3,
    face_normal,
    to_vec3,
    triangle_area,
    triangle_is_degenerate,
    triangle_normal,
    triangles_from_mesh,
)
from minsurf.vec3 import mag

logger = logging.getLogger(__name__)

DEFAULT_STEPS = 50

## largest vertex count addressable by a 16-bit index buffer
MAX_UINT16_VERTICES = 65536

_ZERO: Vec3 = (0.0, 0.0, 0.0)


class Topology(Enum):
    """What kind of primitive the tessellator emits."""
    SURFACE = "surface"
    WIREFRAME = "wireframe"


class IndexOverflowError(ValueError):
    """Raised when indices do not fit the requested index buffer type."""


def resolve_steps(value, default: int = DEFAULT_STEPS) -> int:
    """Return a usable grid resolution for ``value``.

    Anything that is not a finite number of at least one (``None``,
    booleans, unparsable strings, ``nan``, zero, negatives) quietly
    becomes ``default``.  Numeric strings are parsed and fractional
    values are truncated.
    """
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            value = None
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        logger.debug("grid resolution %r replaced by default %d", value, default)
        return default
    if not math.isfinite(value) or int(value) < 1:
        logger.debug("grid resolution %r replaced by default %d", value, default)
        return default
    return int(value)


def _surface_label(surface_fn) -> str:
    return (getattr(surface_fn, 'name', None)
            or getattr(surface_fn, '__name__', None)
            or repr(surface_fn))


# -----------------------------------------------------------------------------
# Grid sampling
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SurfaceGrid:
    """Sampled surface points, stored as u-lines.

    ``u_lines[i][j]`` is the surface point at the i-th u value and the
    j-th v value.  ``v_lines`` is the transpose and ``vertices`` is the
    row-major flattening; both are derived on first access and reuse
    the same point tuples.
    """

    u_lines: Tuple[Tuple[Vec3, ...], ...]
    u_values: Tuple[float, ...]
    v_values: Tuple[float, ...]

    @property
    def u_steps(self) -> int:
        return len(self.u_lines) - 1

    @property
    def v_steps(self) -> int:
        return len(self.v_values) - 1

    @cached_property
    def v_lines(self) -> Tuple[Tuple[Vec3, ...], ...]:
        return tuple(tuple(line[j] for line in self.u_lines)
                     for j in range(self.v_steps + 1))

    @cached_property
    def vertices(self) -> Tuple[Vec3, ...]:
        return tuple(p for line in self.u_lines for p in line)

    def index(self, u_index: int, v_index: int) -> int:
        """Position of grid point ``(u_index, v_index)`` in ``vertices``."""
        return u_index * (self.v_steps + 1) + v_index


def sample_grid(surface_fn, u_min, u_max, v_min, v_max,
                u_steps: int, v_steps: int) -> SurfaceGrid:
    """Evaluate ``surface_fn`` on an inclusive ``(u_steps+1) x (v_steps+1)`` grid.

    The outer loop runs over u and the inner loop over v.  Parameters
    are numpy float64 scalars, so a formula that divides by zero yields
    ``inf``/``nan`` rather than raising.
    """
    du = np.float64(u_max - u_min) / u_steps
    dv = np.float64(v_max - v_min) / v_steps
    u_values = [u_min + i * du for i in range(u_steps + 1)]
    v_values = [v_min + j * dv for j in range(v_steps + 1)]

    u_lines = []
    for u in u_values:
        u_lines.append(tuple(to_vec3(surface_fn(u, v)) for v in v_values))

    return SurfaceGrid(tuple(u_lines),
                       tuple(float(u) for u in u_values),
                       tuple(float(v) for v in v_values))


# -----------------------------------------------------------------------------
# Topology
# -----------------------------------------------------------------------------

def triangle_indices(u_steps: int, v_steps: int) -> Tuple[int, ...]:
    """Return the flat triangle index list for a ``u_steps x v_steps`` grid."""
    indices: List[int] = []
    for u in range(u_steps):
        for v in range(v_steps):
            top_left = u * (v_steps + 1) + v
            top_right = top_left + 1
            bottom_left = (u + 1) * (v_steps + 1) + v
            bottom_right = bottom_left + 1

            indices.extend((top_left, bottom_left, top_right))
            indices.extend((top_right, bottom_left, bottom_right))
    return tuple(indices)


def vertex_normals(vertices: Sequence[Vec3], indices: Sequence[int]) -> Tuple[Vec3, ...]:
    """Per-vertex normals by face-normal accumulation.

    Every triangle adds its unnormalised face normal to each of its
    three corners; the sums are then normalised.  A vertex whose sum
    has zero length (unused, or only touched by degenerate triangles)
    gets the zero vector.  ``nan`` coordinates are passed through.
    """
    acc = [[0.0, 0.0, 0.0] for _ in vertices]
    for t in range(0, len(indices) - 2, 3):
        i0, i1, i2 = indices[t], indices[t + 1], indices[t + 2]
        n = face_normal(vertices[i0], vertices[i1], vertices[i2])
        for i in (i0, i1, i2):
            a = acc[i]
            a[0] += n[0]
            a[1] += n[1]
            a[2] += n[2]

    normals = []
    for a in acc:
        length = mag(a)
        if length == 0.0:
            normals.append(_ZERO)
        else:
            normals.append((a[0] / length, a[1] / length, a[2] / length))
    return tuple(normals)


def line_strips(u_steps: int, v_steps: int) -> Tuple[Tuple[int, int], ...]:
    """``(offset, count)`` for each u-line strip followed by each v-line strip."""
    strips = []
    for i in range(u_steps + 1):
        strips.append((i * (v_steps + 1), v_steps + 1))
    base = (u_steps + 1) * (v_steps + 1)
    for j in range(v_steps + 1):
        strips.append((base + j * (u_steps + 1), u_steps + 1))
    return tuple(strips)


# -----------------------------------------------------------------------------
# Tessellation results
# -----------------------------------------------------------------------------

class _VertexData:
    """Buffer and inspection helpers shared by ``Mesh`` and ``Wireframe``."""

    vertices: Tuple[Vec3, ...]

    def vertex_buffer(self) -> np.ndarray:
        """Flat ``float32`` array of xyz triples."""
        return np.asarray(self.vertices, dtype=np.float32).reshape(-1)

    def nonfinite_count(self) -> int:
        """Number of vertices with a ``nan`` or infinite coordinate."""
        if not self.vertices:
            return 0
        arr = np.asarray(self.vertices, dtype=np.float64)
        return int(np.count_nonzero(~np.isfinite(arr).all(axis=1)))

    def bounding_box(self):
        """``[[xmin, ymin, zmin], [xmax, ymax, zmax]]`` over finite vertices,
        or ``None`` if there are none."""
        arr = np.asarray(self.vertices, dtype=np.float64).reshape(-1, 3)
        arr = arr[np.isfinite(arr).all(axis=1)]
        if len(arr) == 0:
            return None
        return [arr.min(axis=0).tolist(), arr.max(axis=0).tolist()]


@dataclass(frozen=True)
class Mesh(_VertexData):
    """Indexed triangle mesh with per-vertex normals."""

    grid: SurfaceGrid
    indices: Tuple[int, ...]
    normals: Tuple[Vec3, ...]

    topology = Topology.SURFACE

    @property
    def vertices(self) -> Tuple[Vec3, ...]:
        return self.grid.vertices

    @property
    def u_lines(self):
        return self.grid.u_lines

    @property
    def v_lines(self):
        return self.grid.v_lines

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def _facets(self):
        verts = self.vertices
        for t in range(0, len(self.indices), 3):
            v0 = verts[self.indices[t]]
            v1 = verts[self.indices[t + 1]]
            v2 = verts[self.indices[t + 2]]
            n = triangle_normal(v0, v1, v2)
            yield (n if n is not None else _ZERO, v0, v1, v2)

    def triangles(self) -> Iterator[Triangle]:
        """Yield each triangle with its unit face normal (zero if degenerate)."""
        return triangles_from_mesh(self._facets())

    def surface_area(self) -> float:
        """Total area of the triangles whose corners are all finite."""
        total = 0.0
        for tri in self.triangles():
            if all(math.isfinite(c) for p in (tri.v0, tri.v1, tri.v2) for c in p):
                total += triangle_area(tri.v0, tri.v1, tri.v2)
        return total

    def degenerate_count(self) -> int:
        """Number of triangles that collapse to a line or a point."""
        return sum(1 for tri in self.triangles()
                   if triangle_is_degenerate(tri.v0, tri.v1, tri.v2))

    def normal_buffer(self) -> np.ndarray:
        return np.asarray(self.normals, dtype=np.float32).reshape(-1)

    def index_buffer(self, dtype=np.uint16) -> np.ndarray:
        """Flat index array.

        The default ``uint16`` matches 16-bit element buffers and is only
        valid for meshes of at most 65536 vertices.
        """
        limit = np.iinfo(dtype).max + 1
        if len(self.vertices) > limit:
            raise IndexOverflowError(
                f"{len(self.vertices)} vertices cannot be addressed with "
                f"{np.dtype(dtype).name} indices (limit {limit})")
        return np.asarray(self.indices, dtype=dtype)


@dataclass(frozen=True)
class Wireframe(_VertexData):
    """Independent u-line and v-line strips over a sampled grid."""

    grid: SurfaceGrid
    strips: Tuple[Tuple[int, int], ...]

    topology = Topology.WIREFRAME

    @cached_property
    def vertices(self) -> Tuple[Vec3, ...]:
        points = [p for line in self.grid.u_lines for p in line]
        points.extend(p for line in self.grid.v_lines for p in line)
        return tuple(points)

    @property
    def u_lines(self):
        return self.grid.u_lines

    @property
    def v_lines(self):
        return self.grid.v_lines

    def lines(self) -> Iterator[Tuple[Vec3, ...]]:
        """Yield the points of each strip in draw order."""
        verts = self.vertices
        for offset, count in self.strips:
            yield verts[offset:offset + count]


# -----------------------------------------------------------------------------
# Entry points
# -----------------------------------------------------------------------------

def generate(surface_fn: Callable, u_min, u_max, v_min, v_max,
             u_steps=DEFAULT_STEPS, v_steps=DEFAULT_STEPS,
             topology=Topology.SURFACE):
    """Tessellate ``surface_fn`` over ``[u_min, u_max] x [v_min, v_max]``.

    Parameters
    ----------
    surface_fn : callable
        ``(u, v) -> (x, y, z)``.  Must be pure; it is called once per
        grid point.
    u_min, u_max, v_min, v_max : float
        Parameter domain, both ends inclusive.  Keep it clear of any
        singular locus of ``surface_fn``; non-finite points are logged
        but kept.
    u_steps, v_steps : int
        Number of grid cells along each parameter.  Invalid values fall
        back to 50 (see ``resolve_steps``).
    topology : Topology or str
        ``Topology.SURFACE`` (default) or ``Topology.WIREFRAME``.

    Returns
    -------
    Mesh or Wireframe
    """
    topology = Topology(topology)
    u_steps = resolve_steps(u_steps)
    v_steps = resolve_steps(v_steps)
    label = _surface_label(surface_fn)
    logger.debug("tessellating %s on a %dx%d grid (%s)",
                 label, u_steps, v_steps, topology.value)

    grid = sample_grid(surface_fn, u_min, u_max, v_min, v_max, u_steps, v_steps)

    if topology is Topology.WIREFRAME:
        result = Wireframe(grid, line_strips(u_steps, v_steps))
    else:
        indices = triangle_indices(u_steps, v_steps)
        normals = vertex_normals(grid.vertices, indices)
        result = Mesh(grid, indices, normals)

    bad = result.nonfinite_count()
    if bad:
        logger.warning("%s produced %d non-finite vertices; the parameter "
                       "domain touches a singularity", label, bad)
    return result


def tessellate(surface, u_steps=DEFAULT_STEPS, v_steps=DEFAULT_STEPS,
               topology=Topology.SURFACE):
    """Tessellate a ``ParametricSurface`` over its own domain."""
    u_min, u_max, v_min, v_max = surface.domain_bounds()
    return generate(surface, u_min, u_max, v_min, v_max,
                    u_steps, v_steps, topology)


__all__ = [
    "DEFAULT_STEPS",
    "MAX_UINT16_VERTICES",
    "Topology",
    "IndexOverflowError",
    "resolve_steps",
    "SurfaceGrid",
    "sample_grid",
    "triangle_indices",
    "vertex_normals",
    "line_strips",
    "Mesh",
    "Wireframe",
    "generate",
    "tessellate",
]
