"""Tiny built-in bitmap font drawn as axis-aligned quads, one vertex list per string."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from itertools import islice
from typing import Iterable, Iterator

LINE_HEIGHT = 12
VERTEX_SIZE = 16
QUAD_SIZE = 4 * VERTEX_SIZE
WHITE = (255, 255, 255, 255)

_FIRST = 32
_LAST = 126

# (advance, first horizontal segment, first vertical segment) for codes 32..127
_CHARINFO = (
    (6, 0, 0), (3, 0, 0), (5, 1, 1), (7, 1, 4),
    (7, 3, 7), (7, 6, 12), (7, 8, 19), (4, 16, 21),
    (4, 17, 22), (4, 19, 23), (23, 21, 24), (23, 22, 31),
    (20, 23, 34), (22, 23, 36), (19, 24, 36), (21, 25, 36),
    (6, 25, 39), (6, 27, 43), (6, 28, 45), (6, 30, 49),
    (6, 33, 53), (6, 34, 57), (6, 40, 58), (6, 46, 59),
    (6, 47, 62), (6, 55, 64), (19, 57, 68), (20, 59, 68),
    (21, 61, 69), (22, 66, 69), (21, 68, 69), (7, 73, 69),
    (9, 75, 74), (6, 78, 81), (6, 80, 85), (6, 83, 90),
    (6, 85, 91), (6, 87, 95), (6, 90, 96), (7, 92, 97),
    (6, 96, 102), (5, 97, 106), (6, 99, 107), (6, 100, 110),
    (6, 100, 115), (7, 101, 116), (6, 101, 121), (6, 101, 125),
    (6, 102, 129), (7, 103, 133), (6, 104, 140), (6, 105, 145),
    (7, 107, 149), (6, 108, 151), (7, 109, 155), (7, 109, 160),
    (7, 109, 165), (7, 118, 167), (6, 118, 172), (4, 120, 176),
    (6, 122, 177), (4, 122, 181), (23, 124, 182), (22, 129, 182),
    (4, 130, 182), (22, 131, 183), (6, 133, 187), (22, 135, 191),
    (6, 137, 192), (22, 139, 196), (6, 144, 197), (22, 147, 198),
    (6, 150, 202), (19, 151, 206), (21, 152, 207), (6, 155, 209),
    (3, 160, 210), (23, 160, 211), (22, 164, 216), (22, 165, 220),
    (22, 167, 224), (22, 169, 228), (21, 171, 232), (21, 173, 233),
    (5, 178, 233), (22, 179, 234), (23, 180, 238), (23, 180, 243),
    (23, 180, 248), (22, 189, 248), (22, 191, 252), (5, 196, 252),
    (3, 203, 252), (5, 203, 253), (22, 210, 253), (0, 214, 253),
)

_HSEG = bytes((
    97, 37, 69, 84, 28, 51, 2, 18, 10, 49, 98, 41, 65, 25, 81, 105, 33, 9, 97, 1, 97, 37, 37, 36,
    81, 10, 98, 107, 3, 100, 3, 99, 58, 51, 4, 99, 58, 8, 73, 81, 10, 50, 98, 8, 73, 81, 4, 10, 50,
    98, 8, 25, 33, 65, 81, 10, 50, 17, 65, 97, 25, 33, 25, 49, 9, 65, 20, 68, 1, 65, 25, 49, 41,
    11, 105, 13, 101, 76, 10, 50, 10, 50, 98, 11, 99, 10, 98, 11, 50, 99, 11, 50, 11, 99, 8, 57,
    58, 3, 99, 99, 107, 10, 10, 11, 10, 99, 11, 5, 100, 41, 65, 57, 41, 65, 9, 17, 81, 97, 3, 107,
    9, 97, 1, 97, 33, 25, 9, 25, 41, 100, 41, 26, 82, 42, 98, 27, 83, 42, 98, 26, 51, 82, 8, 41,
    35, 8, 10, 26, 82, 114, 42, 1, 114, 8, 9, 73, 57, 81, 41, 97, 18, 8, 8, 25, 26, 26, 82, 26, 82,
    26, 82, 41, 25, 33, 82, 26, 49, 73, 35, 90, 17, 81, 41, 65, 57, 41, 65, 25, 81, 90, 114, 20,
    84, 73, 57, 41, 49, 25, 33, 65, 81, 9, 97, 1, 97, 25, 33, 65, 81, 57, 33, 25, 41, 25,
))

_VSEG = bytes((
    4, 2, 8, 10, 15, 8, 15, 33, 8, 15, 8, 73, 82, 73, 57, 41, 82, 10, 82, 18, 66, 10, 21, 29, 1, 65,
    27, 8, 27, 9, 65, 8, 10, 50, 97, 74, 66, 42, 10, 21, 57, 41, 29, 25, 14, 81, 73, 57, 26, 8, 8,
    26, 66, 3, 8, 8, 15, 19, 21, 90, 58, 26, 18, 66, 18, 105, 89, 28, 74, 17, 8, 73, 57, 26, 21,
    8, 42, 41, 42, 8, 28, 22, 8, 8, 30, 7, 8, 8, 26, 66, 21, 7, 8, 8, 29, 7, 7, 21, 8, 8, 8, 59, 7, 8,
    8, 15, 29, 8, 8, 14, 7, 57, 43, 10, 82, 7, 7, 25, 42, 25, 15, 7, 25, 41, 15, 21, 105, 105, 29,
    7, 57, 57, 26, 21, 105, 73, 97, 89, 28, 97, 7, 57, 58, 26, 82, 18, 57, 57, 74, 8, 30, 6, 8, 8,
    14, 3, 58, 90, 58, 11, 7, 74, 43, 74, 15, 2, 82, 2, 42, 75, 42, 10, 67, 57, 41, 10, 7, 2, 42,
    74, 106, 15, 2, 35, 8, 8, 29, 7, 8, 8, 59, 35, 51, 8, 8, 15, 35, 30, 35, 8, 8, 30, 7, 8, 8, 60,
    36, 8, 45, 7, 7, 36, 8, 43, 8, 44, 21, 8, 8, 44, 35, 8, 8, 43, 23, 8, 8, 43, 35, 8, 8, 31, 21, 15,
    20, 8, 8, 28, 18, 58, 89, 58, 26, 21, 89, 73, 89, 29, 20, 8, 8, 30, 7,
))

Quad = tuple["Vertex", "Vertex", "Vertex", "Vertex"]


@dataclass(frozen=True)
class Vertex:
    """One corner of a quad: position plus an RGBA colour."""

    x: float
    y: float
    z: float = 0.0
    color: tuple[int, int, int, int] = WHITE


def _check_color(color) -> tuple[int, int, int, int]:
    if color is None:
        return WHITE
    values = tuple(color)
    if len(values) != 4 or not all(isinstance(v, int) and 0 <= v <= 255 for v in values):
        raise ValueError(f"colour must be four integers in 0..255, got {color!r}")
    return values  # type: ignore[return-value]


def _check_text(text: str) -> None:
    for char in text:
        if char != "\n" and not _FIRST <= ord(char) <= _LAST:
            raise ValueError(f"character {char!r} is not printable ASCII")


def _segments(
    x: float, y: float, segs: bytes, vertical: bool, color: tuple[int, int, int, int]
) -> Iterator[Quad]:
    for seg in segs:
        length = seg & 7
        x += (seg >> 3) & 1
        if not length:
            continue
        y0 = y + (seg >> 4)
        dx = 1 if vertical else length
        dy = length if vertical else 1
        yield (
            Vertex(x, y0, 0.0, color),
            Vertex(x + dx, y0, 0.0, color),
            Vertex(x + dx, y0 + dy, 0.0, color),
            Vertex(x, y0 + dy, 0.0, color),
        )


class EasyFont:
    """Crude built-in font; ``spacing`` adds that many pixels between characters."""

    def __init__(self, spacing: float = 0.0) -> None:
        self.spacing = float(spacing)

    def width(self, text: str) -> int:
        """Width in pixels of the widest line of ``text``."""
        _check_text(text)
        widest = 0.0
        for line in text.split("\n"):
            length = sum((_CHARINFO[ord(c) - _FIRST][0] & 15) + self.spacing for c in line)
            widest = max(widest, length)
        return math.ceil(widest)

    def height(self, text: str) -> int:
        """Height in pixels of ``text``; a trailing empty line adds nothing."""
        _check_text(text)
        lines = text.split("\n")
        y = LINE_HEIGHT * (len(lines) - 1)
        if lines[-1]:
            y += LINE_HEIGHT
        return y

    def _all_quads(self, x: float, y: float, text: str, color) -> Iterator[Quad]:
        start_x = x
        for char in text:
            if char == "\n":
                y += LINE_HEIGHT
                x = start_x
                continue
            index = ord(char) - _FIRST
            advance, h_seg, v_seg = _CHARINFO[index]
            _, next_h, next_v = _CHARINFO[index + 1]
            y_ch = y + 1 if advance & 16 else y
            yield from _segments(x, y_ch, _HSEG[h_seg:next_h], False, color)
            yield from _segments(x, y_ch, _VSEG[v_seg:next_v], True, color)
            x += (advance & 15) + self.spacing

    def quads(
        self,
        x: float,
        y: float,
        text: str,
        color=None,
        buffer_size: int | None = None,
    ) -> list[Quad]:
        """Quads that draw ``text`` with its top-left at (x, y); y grows downwards.

        ``buffer_size`` caps the output to what fits in that many bytes of
        packed vertex data, truncating the text.
        """
        rgba = _check_color(color)
        _check_text(text)
        quads = self._all_quads(float(x), float(y), text, rgba)
        if buffer_size is None:
            return list(quads)
        return list(islice(quads, max(0, buffer_size // QUAD_SIZE)))


def pack_vertices(vertices: Iterable[Vertex]) -> bytes:
    """Interleave vertices as little-endian x, y, z floats and four colour bytes."""
    return b"".join(struct.pack("<fff4B", v.x, v.y, v.z, *v.color) for v in vertices)