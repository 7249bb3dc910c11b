"""Scanline rasterizer for TrueType outlines and a packed glyph texture atlas."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from functools import cmp_to_key

from .ttf import Glyf, GlyfPoint, TrueTypeError, TrueTypeFont

FIRST_CHAR = ord("!")
LAST_CHAR = ord("~")
DEFAULT_FONT_SIZE = 256.0

_GAP = 10
_ROOT_EPS = 1e-5
_TIE_EPS = 1e-5


@dataclass(frozen=True)
class UV:
    """A texture coordinate."""

    u: float = 0.0
    v: float = 0.0


@dataclass(frozen=True)
class GlyphData:
    """Where a glyph sits in the atlas, and its size and metrics in pixels."""

    uv_bottom_left: UV = UV()
    uv_top_left: UV = UV()
    uv_top_right: UV = UV()
    uv_bottom_right: UV = UV()
    width: int = 0
    height: int = 0
    ascender: float = 0.0
    descender: float = 0.0
    advance: float = 0.0


@dataclass(frozen=True)
class BezierCurve:
    """Quadratic Bezier segment: two on-curve ends and one control point."""

    p0: GlyfPoint
    p1: GlyfPoint
    p2: GlyfPoint


@dataclass
class GlyphTexture:
    """One-channel bitmap of a glyph, stored row by row from the top."""

    width: int = 0
    height: int = 0
    buffer: bytearray = field(default_factory=bytearray)

    @classmethod
    def blank(cls, glyf: Glyf, scale: float) -> GlyphTexture:
        """An all-zero texture sized to the glyph's bounding box at ``scale``."""
        width = max(0, int((glyf.x_max - glyf.x_min) * scale))
        height = max(0, int((glyf.y_max - glyf.y_min) * scale))
        return cls(width, height, bytearray(width * height))


class _Direction(enum.Enum):
    CLOCKWISE = enum.auto()
    COUNTERCLOCKWISE = enum.auto()


@dataclass
class _Intersection:
    distance: float
    t: float
    direction: _Direction
    grad_x: float
    grad_y: float
    is_hole: bool = False


def _mid(a: int, b: int) -> int:
    return int((a + b) / 2)


def _split_contours(glyf: Glyf) -> list[list[GlyfPoint]]:
    ends = set(glyf.end_pts_of_contours)
    contours: list[list[GlyfPoint]] = []
    for index, point in enumerate(glyf.coordinates):
        if index == 0 or (index - 1) in ends:
            contours.append([])
        contours[-1].append(point)
    return contours


def _glyph_points(glyf: Glyf) -> list[list[GlyfPoint]]:
    """Contours with implied points made explicit, alternating on and off the curve."""
    result = []
    for contour in _split_contours(glyf):
        points: list[GlyfPoint] = []
        for point in contour:
            if points:
                last = points[-1]
                if point.on_curve == last.on_curve:
                    points.append(
                        GlyfPoint(_mid(point.x, last.x), _mid(point.y, last.y), not point.on_curve)
                    )
            points.append(point)
        if not points[-1].on_curve:
            points.append(points[0])

        first, last = points[0], points[-1]
        points.append(GlyfPoint(_mid(first.x, last.x), _mid(first.y, last.y), False))
        points.append(first)
        result.append(points)
    return result


def glyph_path(glyf: Glyf) -> list[list[BezierCurve]]:
    """The glyph outline as closed contours of quadratic Bezier curves."""
    return [
        [BezierCurve(*points[i : i + 3]) for i in range(0, len(points) - 2, 2)]
        for points in _glyph_points(glyf)
    ]


def _quadratic_roots(a: float, b: float, c: float) -> tuple[float, float]:
    """Roots of ``a t^2 + b t + c``; a missing root is ``math.inf``."""
    first = second = math.inf
    if abs(a) < _ROOT_EPS:
        if b != 0:
            first = -c / b
    else:
        disc = b * b - 4 * a * c
        if disc >= -_ROOT_EPS:
            s = math.sqrt(max(0.0, disc))
            first = (-b - s) / (2 * a)
            second = (-b + s) / (2 * a)
    return first, second


def _ray_curve(x: int, y: int, curve: BezierCurve) -> list[_Intersection]:
    p0, p1, p2 = curve.p0, curve.p1, curve.p2
    ys = (p0.y, p1.y, p2.y)
    if all(v < y for v in ys) or all(v > y for v in ys):
        return []

    ax = p0.x - 2 * p1.x + p2.x
    bx = 2 * (p1.x - p0.x)
    cx = p0.x
    ay = p0.y - 2 * p1.y + p2.y
    by = 2 * (p1.y - p0.y)
    cy = p0.y

    t0, t1 = _quadratic_roots(ay, by, cy - y)
    offset = 0.0
    while t0 == t1 and t0 != math.inf:
        offset += -1.0 if ay >= 0 else 1.0
        t0, t1 = _quadratic_roots(ay, by, cy - y + offset)

    hits = []
    for t in (t0, t1):
        if 0.0 <= t <= 1.0:
            grad_x = 2 * ax * t + bx
            grad_y = 2 * ay * t + by
            direction = _Direction.CLOCKWISE if grad_y < 0 else _Direction.COUNTERCLOCKWISE
            hits.append(_Intersection(ax * t * t + bx * t + cx - x, t, direction, grad_x, grad_y))
    return hits


def _is_hole(contour: list[BezierCurve]) -> bool:
    area = sum(c.p0.x * c.p2.y - c.p2.x * c.p0.y for c in contour)
    return area > 0


def _gradient_x(hit: _Intersection) -> float:
    length = math.hypot(hit.grad_x, hit.grad_y)
    if length == 0:
        return math.nan
    sign = -1.0 if hit.t > 0.5 else 1.0
    return sign * hit.grad_x / length


def _precedes(left: _Intersection, right: _Intersection) -> bool:
    if left.direction != right.direction and abs(left.distance - right.distance) < _TIE_EPS:
        if _gradient_x(left) < _gradient_x(right):
            return True
    return left.distance < right.distance


def _compare(left: _Intersection, right: _Intersection) -> int:
    if _precedes(left, right):
        return -1
    if _precedes(right, left):
        return 1
    return 0


def _ray_contour(x: int, y: int, contour: list[BezierCurve]) -> list[_Intersection]:
    hole = _is_hole(contour)
    hits = [hit for curve in contour for hit in _ray_curve(x, y, curve)]
    for hit in hits:
        hit.is_hole = hole
    hits.sort(key=cmp_to_key(_compare))
    return hits


def _inside_contour(distance: int, hits: list[_Intersection]) -> bool:
    left = right = None
    for hit in hits:
        if hit.distance > distance:
            right = hit
            break
        left = hit
    if left is None or right is None:
        return False
    return not (
        not left.is_hole
        and left.direction is _Direction.CLOCKWISE
        and right.direction is _Direction.COUNTERCLOCKWISE
    )


def _inside_path(distance: int, record: list[list[_Intersection]]) -> bool:
    inside = False
    for hits in record:
        if _inside_contour(distance, hits):
            if hits[0].is_hole:
                return False
            inside = True
    return inside


def rasterize_glyph(glyf: Glyf, scale: float) -> GlyphTexture:
    """Rasterize a glyph outline at ``scale`` pixels per font unit."""
    texture = GlyphTexture.blank(glyf, scale)
    path = glyph_path(glyf)
    if not path:
        return texture

    width = texture.width
    for line in range(texture.height):
        y = int(line / scale) + glyf.y_min
        record = [_ray_contour(glyf.x_min, y, contour) for contour in path]
        row = bytes(255 if _inside_path(int(i / scale), record) else 0 for i in range(width))
        start = (texture.height - line - 1) * width
        texture.buffer[start : start + width] = row
    return texture


def _ratio(value: float, total: int) -> float:
    return value / total if total else math.nan


class Atlas:
    """Glyphs for the printable ASCII range, plus glyph 0, packed into one texture."""

    def __init__(self, ttf: TrueTypeFont, font_size: float = DEFAULT_FONT_SIZE) -> None:
        line_height = ttf.hhea.ascender - ttf.hhea.descender
        if line_height == 0:
            raise TrueTypeError("font has zero line height (ascender equals descender)")

        self._font_size = float(font_size)
        self._glyph_scale = self._font_size / line_height
        self._glyph_data: dict[int, GlyphData] = {}
        self.glyph_textures = self._rasterize_glyphs(ttf)
        self._width, self._height, self._texture = self._pack(self.glyph_textures)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def texture(self) -> bytes:
        """The atlas pixels, one byte each, row by row."""
        return bytes(self._texture)

    @property
    def font_size(self) -> float:
        return self._font_size

    def glyph_data(self, unicode: int) -> GlyphData:
        """Placement of a character, falling back to glyph 0's entry."""
        data = self._glyph_data.get(unicode)
        if data is None:
            data = self._glyph_data.get(0, GlyphData())
        return data

    def scale_for_font_size(self, font_size: float) -> float:
        """Factor from the atlas size to ``font_size``."""
        return font_size / self._font_size

    def _rasterize_glyphs(self, ttf: TrueTypeFont) -> dict[int, GlyphTexture]:
        by_index: dict[int, GlyphTexture] = {}

        def rasterize(index: int) -> GlyphTexture:
            if index not in by_index:
                if not 0 <= index < len(ttf.glyfs):
                    raise TrueTypeError(f"font has no glyph {index}")
                by_index[index] = rasterize_glyph(ttf.glyfs[index], self._glyph_scale)
            return by_index[index]

        textures = {0: rasterize(0)}
        for code in range(FIRST_CHAR, LAST_CHAR + 1):
            textures.setdefault(code, rasterize(ttf.cmap[code]))
        return textures

    def _pack(self, textures: dict[int, GlyphTexture]) -> tuple[int, int, bytearray]:
        max_width = max((t.width for t in textures.values()), default=0)
        max_height = max((t.height for t in textures.values()), default=0)
        area = sum(t.width * t.height for t in textures.values())
        side = math.ceil(math.sqrt(area))

        width = side + max_width * 3
        height = side + max_height * 3
        pixels = bytearray(width * height)

        row_height = offset_x = offset_y = 0
        for code, tex in textures.items():
            if offset_x + tex.width > width:
                offset_y += row_height + _GAP
                row_height = 0
                offset_x = 0
            row_height = max(row_height, tex.height)

            if tex.width and tex.height and offset_y + tex.height > height:
                raise ValueError("glyphs do not fit into the atlas")

            left = _ratio(offset_x, width)
            right = _ratio(offset_x + tex.width, width)
            top = _ratio(offset_y, height)
            bottom = _ratio(offset_y + tex.height, height)
            self._glyph_data.setdefault(
                code,
                GlyphData(
                    uv_bottom_left=UV(left, bottom),
                    uv_top_left=UV(left, top),
                    uv_top_right=UV(right, top),
                    uv_bottom_right=UV(right, bottom),
                    width=tex.width,
                    height=tex.height,
                ),
            )

            for y in range(tex.height):
                start = (offset_y + y) * width + offset_x
                pixels[start : start + tex.width] = tex.buffer[y * tex.width : (y + 1) * tex.width]

            offset_x += tex.width + _GAP

        return width, height, pixels