import math

import pytest

from glyphkit.mathutil import (
    clamp,
    cross,
    dot,
    lerp,
    look_at,
    normalize,
    ortho,
    perspective,
    to_radians,
    transpose,
)
from glyphkit.matrix import Mat4
from glyphkit.vectors import Vec2, Vec3, Vec4


def _apply(m, point):
    return [sum(m[r, c] * v for c, v in enumerate(point)) for r in range(4)]


def test_dot_matches_vector_product():
    a, b = Vec3(1, -2, 5), Vec3(4, 3, -1)
    assert dot(a, b) == a * b
    assert dot(a, b) == dot(b, a)
    v = Vec2(3, 4)
    assert dot(v, v) == v.length2()


def test_dot_rejects_mixed_kinds():
    with pytest.raises(TypeError):
        dot(Vec2(1, 2), Vec3(1, 2, 3))


def test_cross_of_unit_axes():
    assert cross(Vec3(1, 0, 0), Vec3(0, 1, 0)) == Vec3(0, 0, 1)


def test_cross_is_orthogonal_and_anticommutative():
    a, b = Vec3(1, 2, 3), Vec3(-4, 0, 7)
    c = cross(a, b)
    assert dot(c, a) == 0
    assert dot(c, b) == 0
    assert c == -cross(b, a)


def test_transpose_swaps_indices_and_is_involution():
    m = Mat4(*range(1, 17))
    t = transpose(m)
    assert all(t[r, c] == m[c, r] for r in range(4) for c in range(4))
    assert transpose(t) == m


def test_to_radians():
    assert math.isclose(to_radians(180), math.pi)


def test_normalize_returns_unit_copy():
    v = Vec3(2, -3, 6)
    n = normalize(v)
    assert math.isclose(n.length(), 1.0)
    assert v == Vec3(2, -3, 6)
    assert all(math.isclose(a * v.length(), b) for a, b in zip(n, v))


def test_symmetric_ortho_is_identity():
    assert ortho(-1, 1, -1, 1, 1, -1) == Mat4(1.0)


def test_ortho_maps_box_symmetrically():
    left, right, bottom, top = 0, 800, 600, 0
    m = ortho(left, right, bottom, top, -1, 1)
    corner_a = _apply(m, (left, bottom, 0, 1))
    corner_b = _apply(m, (right, top, 0, 1))
    assert corner_a[0] == pytest.approx(-corner_b[0])
    assert corner_a[1] == pytest.approx(-corner_b[1])
    centre = _apply(m, ((left + right) / 2, (bottom + top) / 2, 0, 1))
    assert centre[:2] == pytest.approx([0.0, 0.0], abs=1e-9)


def test_perspective_layout():
    aspect = 16 / 9
    m = perspective(90, aspect, 0.1, 100)
    assert m[0, 0] * aspect == pytest.approx(m[1, 1])
    assert m[1, 1] == pytest.approx(1.0)
    assert m[3, 2] == 1.0
    assert m[3, 3] == 0.0


def test_clamp_scalar():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


def test_clamp_vector_componentwise():
    result = clamp(Vec4(-5, 0.5, 9, 2), Vec4(0, 0, 0, 0), Vec4(1, 1, 1, 1))
    assert result == Vec4(0, 0.5, 1, 1)
    assert clamp(Vec2(3, -3), Vec2(-1, -1), Vec2(1, 1)) == Vec2(1, -1)


def test_lerp_endpoints_and_symmetry():
    assert lerp(2.0, 8.0, 0.0) == 2.0
    assert lerp(2.0, 8.0, 1.0) == 8.0
    a, b = Vec3(1, 2, 3), Vec3(-5, 4, 10)
    assert lerp(a, b, 0.0) == a
    assert lerp(a, b, 1.0) == b
    assert lerp(a, b, 0.5) == lerp(b, a, 0.5)


def test_look_at_moves_eye_to_origin():
    position = Vec3(1, 2, 3)
    target = Vec3(4, 6, 3)
    m = look_at(position, target)
    eye = _apply(m, (*position, 1))
    assert eye[:3] == pytest.approx([0.0, 0.0, 0.0], abs=1e-9)
    assert eye[3] == 1.0
    direction = normalize(target - position)
    assert [m[2, 0], m[2, 1], m[2, 2]] == pytest.approx(list(direction))


def test_look_at_basis_is_orthonormal():
    m = look_at(Vec3(-2, 1, 5), Vec3(3, 0, -1))
    rows = [Vec3(m[r, 0], m[r, 1], m[r, 2]) for r in range(3)]
    for row in rows:
        assert row.length() == pytest.approx(1.0)
    assert dot(rows[0], rows[1]) == pytest.approx(0.0, abs=1e-9)
    assert dot(rows[0], rows[2]) == pytest.approx(0.0, abs=1e-9)
    assert dot(rows[1], rows[2]) == pytest.approx(0.0, abs=1e-9)