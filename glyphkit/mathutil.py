"""Vector and matrix helper functions for 2D/3D rendering."""

from __future__ import annotations

import math
from numbers import Real

from .matrix import Mat4
from .vectors import Vec2, Vec3, Vec4

_VECTOR_TYPES = (Vec2, Vec3, Vec4)


def _require_same_vectors(*vectors) -> None:
    first = type(vectors[0])
    if first not in _VECTOR_TYPES or any(type(v) is not first for v in vectors):
        raise TypeError("expected vectors of the same kind")


def dot(left, right) -> float:
    """Dot product of two vectors of the same kind."""
    _require_same_vectors(left, right)
    return sum(a * b for a, b in zip(left, right))


def cross(left: Vec3, right: Vec3) -> Vec3:
    """Cross product of two 3D vectors."""
    if not (isinstance(left, Vec3) and isinstance(right, Vec3)):
        raise TypeError("cross product needs two Vec3")
    return Vec3(
        left.y * right.z - left.z * right.y,
        left.z * right.x - left.x * right.z,
        left.x * right.y - left.y * right.x,
    )


def transpose(mat: Mat4) -> Mat4:
    """Return the transpose of ``mat``."""
    elements = mat.elements()
    return Mat4(*(value for col in range(4) for value in elements[col::4]))


def to_radians(degrees: float) -> float:
    """Convert degrees to radians."""
    return math.radians(degrees)


def normalize(vector):
    """Return a unit-length copy of ``vector``."""
    return vector / vector.length()


def ortho(left: float, right: float, bottom: float, top: float, near: float, far: float) -> Mat4:
    """Orthographic projection matrix."""
    return Mat4(
        2.0 / (right - left), 0.0, 0.0, -(right + left) / (right - left),
        0.0, 2.0 / (top - bottom), 0.0, -(top + bottom) / (top - bottom),
        0.0, 0.0, -2.0 / (far - near), -(far + near) / (far - near),
        0.0, 0.0, 0.0, 1.0,
    )


def perspective(fov: float, aspect: float, near: float, far: float) -> Mat4:
    """Perspective projection matrix for a vertical field of view in degrees."""
    s = 1.0 / math.tan(math.radians(fov) / 2.0)
    z = near - far

    result = Mat4()
    result[0, 0] = s / aspect
    result[1, 1] = s
    result[2, 2] = -(near + far) / z
    result[2, 3] = 2.0 * far * near / z
    result[3, 2] = 1.0
    return result


def clamp(value, minimum, maximum):
    """Clamp a number, or each component of a vector, into ``[minimum, maximum]``."""
    if isinstance(value, Real):
        if value < minimum:
            return minimum
        if value > maximum:
            return maximum
        return value
    _require_same_vectors(value, minimum, maximum)
    return type(value)(*(clamp(v, lo, hi) for v, lo, hi in zip(value, minimum, maximum)))


def look_at(position: Vec3, target: Vec3) -> Mat4:
    """View matrix for a camera at ``position`` looking at ``target`` with +Y up."""
    direction = normalize(target - position)
    right = normalize(cross(Vec3(0.0, 1.0, 0.0), direction))
    up = cross(direction, right)

    return Mat4(
        right.x, right.y, right.z, -dot(right, position),
        up.x, up.y, up.z, -dot(up, position),
        direction.x, direction.y, direction.z, -dot(direction, position),
        0.0, 0.0, 0.0, 1.0,
    )


def lerp(a, b, t: float):
    """Linear interpolation between two numbers or two vectors."""
    return a * (1.0 - t) + b * t