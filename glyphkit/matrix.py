"""Row-major 4x4 float matrix."""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterable

from .vectors import Vec3, Vec4


def _check_index(index: int) -> int:
    if not isinstance(index, int) or not 0 <= index < 4:
        raise IndexError(f"matrix index out of range: {index!r}")
    return index


def _product(left: list[float], right: list[float]) -> list[float]:
    rows = [left[i : i + 4] for i in range(0, 16, 4)]
    columns = [right[c::4] for c in range(4)]
    return [sum(a * b for a, b in zip(row, column)) for row in rows for column in columns]


class Mat4:
    """A 4x4 matrix stored row by row.

    ``Mat4()`` is all zeros, ``Mat4(d)`` has ``d`` on the diagonal,
    ``Mat4(other)`` copies and ``Mat4(a00, a01, ..., a33)`` takes sixteen
    values in row order.
    """

    __slots__ = ("_m",)

    def __init__(self, *args) -> None:
        if not args:
            values = [0.0] * 16
        elif len(args) == 1:
            (arg,) = args
            if isinstance(arg, Mat4):
                values = list(arg._m)
            elif isinstance(arg, Real):
                diagonal = float(arg)
                values = [diagonal if r == c else 0.0 for r in range(4) for c in range(4)]
            else:
                raise TypeError(f"cannot build Mat4 from {type(arg).__name__}")
        elif len(args) == 16:
            values = [float(v) for v in args]
        else:
            raise TypeError(f"Mat4 takes 0, 1 or 16 arguments, got {len(args)}")
        self._m = values

    @classmethod
    def _wrap(cls, values: Iterable[float]) -> Mat4:
        obj = cls.__new__(cls)
        obj._m = list(values)
        return obj

    def elements(self) -> tuple[float, ...]:
        """All sixteen elements in row order."""
        return tuple(self._m)

    def row(self, index: int) -> Vec4:
        """A copy of one row."""
        start = _check_index(index) * 4
        return Vec4(*self._m[start : start + 4])

    def __getitem__(self, key):
        """``m[row, col]`` gives an element, ``m[row]`` a copy of a row."""
        if isinstance(key, tuple):
            row, col = key
            return self._m[_check_index(row) * 4 + _check_index(col)]
        return self.row(key)

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            row, col = key
            self._m[_check_index(row) * 4 + _check_index(col)] = float(value)
            return
        start = _check_index(key) * 4
        values = [float(v) for v in value]
        if len(values) != 4:
            raise ValueError(f"a matrix row has 4 values, got {len(values)}")
        self._m[start : start + 4] = values

    def __add__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        return self._wrap(a + b for a, b in zip(self._m, other._m))

    def __sub__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        return self._wrap(a - b for a, b in zip(self._m, other._m))

    def __mul__(self, other):
        """Matrix product with another Mat4, or scaling by a number."""
        if isinstance(other, Mat4):
            return self._wrap(_product(self._m, other._m))
        if isinstance(other, Real):
            return self._wrap(a * other for a in self._m)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self._wrap(a * other for a in self._m)
        return NotImplemented

    def __iadd__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        self._m = [a + b for a, b in zip(self._m, other._m)]
        return self

    def __isub__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        self._m = [a - b for a, b in zip(self._m, other._m)]
        return self

    def __imul__(self, other):
        if isinstance(other, Mat4):
            self._m = _product(self._m, other._m)
        elif isinstance(other, Real):
            self._m = [a * other for a in self._m]
        else:
            return NotImplemented
        return self

    def __eq__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        return self._m == other._m

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        rows = ", ".join(repr(tuple(self._m[i : i + 4])) for i in range(0, 16, 4))
        return f"Mat4({rows})"

    def translate(self, translation: Vec3) -> None:
        """Add a translation to the last column in place."""
        tx, ty, tz = translation
        self._m[3] += tx
        self._m[7] += ty
        self._m[11] += tz

    def rotate(self, degrees: float, axis: Vec3) -> None:
        """Post-multiply in place by a rotation of ``degrees`` about ``axis``."""
        unit = Vec3(*axis)
        unit.normalize()
        x, y, z = unit

        theta = math.radians(degrees)
        cos = math.cos(theta)
        sin = math.sin(theta)
        omc = 1.0 - cos

        rotation = Mat4(
            cos + x * omc, x * y * omc - z * sin, x * z * omc + y * sin, 0.0,
            y * x * omc + z * sin, cos + y * y * omc, y * z * omc - x * sin, 0.0,
            z * x * omc - y * sin, z * y * omc + x * sin, cos + z * z * omc, 0.0,
            0.0, 0.0, 0.0, 1.0,
        )
        self._m = _product(self._m, rotation._m)

    def scale(self, factors: Vec3) -> None:
        """Multiply the first three diagonal elements in place."""
        sx, sy, sz = factors
        self._m[0] *= sx
        self._m[5] *= sy
        self._m[10] *= sz