import pytest

from glyphkit.matrix import Mat4
from glyphkit.vectors import Vec3, Vec4


def _sample():
    return Mat4(*range(1, 17))


def _other():
    return Mat4(2, 0, -1, 3, 1, 1, 0, -2, 4, 5, 1, 0, -3, 2, 2, 1)


def test_default_is_all_zero():
    assert Mat4().elements() == (0.0,) * 16


def test_sixteen_values_are_row_major():
    m = _sample()
    assert m.elements() == tuple(float(v) for v in range(1, 17))
    assert m[1, 2] == 7
    assert m.row(3) == Vec4(13, 14, 15, 16)
    assert m[0] == Vec4(1, 2, 3, 4)


def test_identity_is_neutral_for_product():
    identity = Mat4(1.0)
    assert identity * _sample() == _sample()
    assert _sample() * identity == _sample()


def test_diagonal_product():
    assert Mat4(2.0) * Mat4(3.0) == Mat4(6.0)


def test_copy_is_independent():
    original = _sample()
    copy = Mat4(original)
    copy[0, 0] = 100
    assert original[0, 0] == 1
    assert copy == Mat4(100, *range(2, 17))


def test_add_sub_round_trip():
    a, b = _sample(), _other()
    assert (a + b) - b == a
    assert a + b == b + a


def test_scalar_multiply():
    a = _sample()
    assert a * 2 == a + a
    assert 2 * a == a * 2


def test_product_is_associative():
    a, b, c = _sample(), _other(), Mat4(*range(16, 0, -1))
    assert (a * b) * c == a * (b * c)


def test_inplace_operations():
    a = _sample()
    b = _other()
    expected = a * b
    alias = a
    a *= b
    assert alias == expected
    a += b
    assert alias == expected + b
    a -= b
    assert alias == expected


def test_set_row_and_element():
    m = Mat4()
    m[2] = Vec4(1, 2, 3, 4)
    m[3, 1] = 9
    assert m.row(2) == Vec4(1, 2, 3, 4)
    assert m[3, 1] == 9


def test_index_errors():
    m = Mat4()
    with pytest.raises(IndexError):
        m[4, 0]
    with pytest.raises(IndexError):
        m.row(-1)
    with pytest.raises(IndexError):
        m[0, 4] = 1.0


def test_bad_row_length():
    with pytest.raises(ValueError):
        Mat4()[0] = (1, 2, 3)


def test_bad_constructor_arguments():
    with pytest.raises(TypeError):
        Mat4(1, 2)
    with pytest.raises(TypeError):
        Mat4("identity")


def test_translate_adds_to_last_column():
    m = Mat4(1.0)
    m.translate(Vec3(5, 6, 7))
    assert (m[0, 3], m[1, 3], m[2, 3]) == (5, 6, 7)
    m.translate(Vec3(5, 6, 7))
    assert (m[0, 3], m[1, 3], m[2, 3]) == (10, 12, 14)


def test_scale_multiplies_diagonal():
    m = Mat4(1.0)
    m.scale(Vec3(2, 3, 4))
    assert (m[0, 0], m[1, 1], m[2, 2], m[3, 3]) == (2, 3, 4, 1)


def test_full_turn_is_identity():
    m = Mat4(1.0)
    m.rotate(360, Vec3(0, 0, 1))
    assert m.elements() == pytest.approx(Mat4(1.0).elements(), abs=1e-9)


def test_rotate_there_and_back():
    m = _sample()
    m.rotate(30, Vec3(0, 0, 1))
    m.rotate(-30, Vec3(0, 0, 1))
    assert m.elements() == pytest.approx(_sample().elements(), abs=1e-9)


def test_rotations_compose():
    a = Mat4(1.0)
    a.rotate(40, Vec3(1, 0, 0))
    a.rotate(50, Vec3(1, 0, 0))
    b = Mat4(1.0)
    b.rotate(90, Vec3(1, 0, 0))
    assert a.elements() == pytest.approx(b.elements(), abs=1e-9)


def test_rotation_about_z_keeps_z_row():
    m = Mat4(1.0)
    m.rotate(73, Vec3(0, 0, 1))
    identity = Mat4(1.0)
    assert tuple(m.row(2)) == pytest.approx(tuple(identity.row(2)))
    assert tuple(m.row(3)) == pytest.approx(tuple(identity.row(3)))


def test_rotate_normalizes_axis_without_changing_it():
    axis = Vec3(0, 0, 5)
    a = Mat4(1.0)
    a.rotate(90, axis)
    b = Mat4(1.0)
    b.rotate(90, Vec3(0, 0, 1))
    assert a.elements() == pytest.approx(b.elements(), abs=1e-9)
    assert axis == Vec3(0, 0, 5)