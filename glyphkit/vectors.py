"""Small mutable float vectors with two, three and four components."""

from __future__ import annotations

import math
from numbers import Real
from typing import ClassVar, Iterable, Iterator


def _alias(field: str, doc: str) -> property:
    def fget(self):
        return getattr(self, field)

    def fset(self, value):
        setattr(self, field, float(value))

    return property(fget, fset, doc=doc)


class _Vector:
    """Shared behaviour of the fixed-size vectors."""

    __slots__ = ()
    _fields: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def _from_values(cls, values: Iterable[float]):
        obj = cls.__new__(cls)
        obj._assign(values)
        return obj

    def _assign(self, values: Iterable[float]) -> None:
        values = tuple(values)
        if len(values) != len(self._fields):
            raise ValueError(
                f"{type(self).__name__} needs {len(self._fields)} components, got {len(values)}"
            )
        for name, value in zip(self._fields, values):
            setattr(self, name, float(value))

    def _field(self, index: int) -> str:
        if not isinstance(index, int):
            raise TypeError(f"{type(self).__name__} indices must be integers")
        try:
            return self._fields[index]
        except IndexError:
            raise IndexError(f"{type(self).__name__} index out of range: {index}") from None

    def _components(self) -> Iterator[float]:
        for name in self._fields:
            yield getattr(self, name)

    def _get(self, index: int) -> float:
        return getattr(self, self._field(index))

    def _set(self, index: int, value: float) -> None:
        setattr(self, self._field(index), float(value))

    def _add(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._from_values(a + b for a, b in zip(self, other))

    def _sub(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._from_values(a - b for a, b in zip(self, other))

    def _mul(self, other):
        if type(other) is type(self):
            return sum(a * b for a, b in zip(self, other))
        if isinstance(other, Real):
            return self._from_values(a * other for a in self)
        return NotImplemented

    def _div(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        return self._from_values(a / scalar for a in self)

    def _equals(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return tuple(self) == tuple(other)

    def _length2(self) -> float:
        return sum(v * v for v in self)

    def _normalize(self) -> None:
        length = math.sqrt(self._length2())
        self._assign(v / length for v in tuple(self))

    def __len__(self) -> int:
        return len(self._fields)

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self._from_values(a * other for a in self)
        return NotImplemented

    def __iadd__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        self._assign(a + b for a, b in zip(tuple(self), other))
        return self

    def __isub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        self._assign(a - b for a, b in zip(tuple(self), other))
        return self

    def __imul__(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        self._assign(a * scalar for a in tuple(self))
        return self

    def __itruediv__(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        self._assign(a / scalar for a in tuple(self))
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(v) for v in self)})"


class Vec2(_Vector):
    """Two-component vector; ``s`` and ``t`` alias ``x`` and ``y``."""

    __slots__ = ("x", "y")
    _fields = ("x", "y")

    def __init__(self, x: float = 0.0, y: float | None = None) -> None:
        self.x = float(x)
        self.y = float(x if y is None else y)

    def __add__(self, other):
        return self._add(other)

    def __sub__(self, other):
        return self._sub(other)

    def __neg__(self) -> Vec2:
        return self._from_values(-v for v in self)

    def __mul__(self, other):
        """Dot product with another Vec2, or scaling by a number."""
        return self._mul(other)

    def __truediv__(self, scalar):
        return self._div(scalar)

    def __eq__(self, other):
        return self._equals(other)

    __hash__ = None  # mutable

    def __getitem__(self, index: int) -> float:
        return self._get(index)

    def __setitem__(self, index: int, value: float) -> None:
        self._set(index, value)

    def __iter__(self) -> Iterator[float]:
        return self._components()

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self._length2())

    def length2(self) -> float:
        """Squared Euclidean length."""
        return self._length2()

    def normalize(self) -> None:
        """Scale this vector in place to unit length."""
        self._normalize()

    s = _alias("x", "Texture-coordinate alias of x.")
    t = _alias("y", "Texture-coordinate alias of y.")


class Vec3(_Vector):
    """Three-component vector; ``r``, ``g``, ``b`` alias ``x``, ``y``, ``z``."""

    __slots__ = ("x", "y", "z")
    _fields = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float | None = None, z: float | None = None) -> None:
        if y is None and z is None:
            y = z = x
        elif y is None or z is None:
            raise TypeError("Vec3 takes one scalar or three components")
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __add__(self, other):
        return self._add(other)

    def __sub__(self, other):
        return self._sub(other)

    def __pos__(self) -> Vec3:
        return self._from_values(self)

    def __neg__(self) -> Vec3:
        return self._from_values(-v for v in self)

    def __mul__(self, other):
        """Dot product with another Vec3, or scaling by a number."""
        return self._mul(other)

    def __truediv__(self, scalar):
        return self._div(scalar)

    def __eq__(self, other):
        return self._equals(other)

    __hash__ = None  # mutable

    def __getitem__(self, index: int) -> float:
        return self._get(index)

    def __setitem__(self, index: int, value: float) -> None:
        self._set(index, value)

    def __iter__(self) -> Iterator[float]:
        return self._components()

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self._length2())

    def length2(self) -> float:
        """Squared Euclidean length."""
        return self._length2()

    def normalize(self) -> None:
        """Scale this vector in place to unit length."""
        self._normalize()

    r = _alias("x", "Colour alias of x.")
    g = _alias("y", "Colour alias of y.")
    b = _alias("z", "Colour alias of z.")


class Vec4(_Vector):
    """Four-component vector; ``r``, ``g``, ``b``, ``a`` alias ``x``, ``y``, ``z``, ``w``."""

    __slots__ = ("x", "y", "z", "w")
    _fields = ("x", "y", "z", "w")

    def __init__(
        self,
        x: float = 0.0,
        y: float | None = None,
        z: float | None = None,
        w: float | None = None,
    ) -> None:
        rest = (y, z, w)
        if all(v is None for v in rest):
            y = z = w = x
        elif any(v is None for v in rest):
            raise TypeError("Vec4 takes one scalar or four components")
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)

    def __add__(self, other):
        return self._add(other)

    def __sub__(self, other):
        return self._sub(other)

    def __mul__(self, other):
        """Dot product with another Vec4, or scaling by a number."""
        return self._mul(other)

    def __truediv__(self, scalar):
        return self._div(scalar)

    def __eq__(self, other):
        return self._equals(other)

    __hash__ = None  # mutable

    def __getitem__(self, index: int) -> float:
        return self._get(index)

    def __setitem__(self, index: int, value: float) -> None:
        self._set(index, value)

    def __iter__(self) -> Iterator[float]:
        return self._components()

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self._length2())

    def length2(self) -> float:
        """Squared Euclidean length."""
        return self._length2()

    def normalize(self) -> None:
        """Scale this vector in place to unit length."""
        self._normalize()

    r = _alias("x", "Colour alias of x.")
    g = _alias("y", "Colour alias of y.")
    b = _alias("z", "Colour alias of z.")
    a = _alias("w", "Colour alias of w.")