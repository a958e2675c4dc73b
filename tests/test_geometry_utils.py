import math

import pytest

from minsurf.geometry_utils import (
    Triangle,
    face_normal,
    to_vec3,
    triangle_area,
    triangle_is_degenerate,
    triangle_normal,
    triangles_from_mesh,
)

def test_to_vec3_drops_extra_components():
    assert to_vec3([1.2, -3.4, 5.6, 1.0]) == (1.2, -3.4, 5.6)
    with pytest.raises(ValueError):
        to_vec3([1.0, 2.0])

def test_face_normal_is_not_normalised():
    n = face_normal((0.0, 0.0, 0.0), (2.0, 0.0, 0.0), (0.0, 3.0, 0.0))
    assert n == (0.0, 0.0, 6.0)

def test_triangle_normal_and_area():
    v0 = (0.0, 0.0, 0.0)
    v1 = (1.0, 0.0, 0.0)
    v2 = (0.0, 1.0, 0.0)

    n = triangle_normal(v0, v1, v2)
    assert n == (0.0, 0.0, 1.0)
    assert math.isclose(triangle_area(v0, v1, v2), 0.5)

def test_triangle_is_degenerate_when_colinear():
    v0 = (0.0, 0.0, 0.0)
    v1 = (1.0, 1.0, 1.0)
    v2 = (2.0, 2.0, 2.0)
    assert triangle_is_degenerate(v0, v1, v2)
    assert triangle_normal(v0, v1, v2) is None

def test_triangle_normal_with_nan_vertex_is_none():
    nan = float('nan')
    assert triangle_normal((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (nan, 1.0, 0.0)) is None

def test_triangles_from_mesh_produces_dataclasses():
    tris = list(triangles_from_mesh([
        ((0.0, 0.0, 1.0), (0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
    ]))
    assert len(tris) == 1
    assert isinstance(tris[0], Triangle)
    assert tris[0].normal == (0.0, 0.0, 1.0)
