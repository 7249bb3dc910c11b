"""Reader for the TrueType tables needed to rasterize outline glyphs."""

from __future__ import annotations

import enum
import math
import struct
from contextlib import contextmanager
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Iterator


class TrueTypeError(ValueError):
    """Raised when font data is malformed or uses an unsupported feature."""


def _int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


class _Reader:
    """Big-endian cursor over a byte buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self.cursor = 0

    def unpack(self, fmt: str) -> tuple:
        fmt = ">" + fmt
        try:
            values = struct.unpack_from(fmt, self._data, self.cursor)
        except struct.error:
            raise TrueTypeError(f"unexpected end of font data at offset {self.cursor}") from None
        self.cursor += struct.calcsize(fmt)
        return values

    def u8(self) -> int:
        return self.unpack("B")[0]

    def i8(self) -> int:
        return self.unpack("b")[0]

    def u16(self) -> int:
        return self.unpack("H")[0]

    def i16(self) -> int:
        return self.unpack("h")[0]

    def u32(self) -> int:
        return self.unpack("I")[0]

    def read(self, size: int) -> bytes:
        end = self.cursor + size
        if end > len(self._data):
            raise TrueTypeError(f"unexpected end of font data at offset {self.cursor}")
        chunk = self._data[self.cursor : end]
        self.cursor = end
        return chunk

    def skip(self, size: int) -> None:
        self.cursor += size

    @contextmanager
    def at(self, offset: int) -> Iterator[None]:
        """Move to ``offset`` for the duration of the block, then come back."""
        saved = self.cursor
        self.cursor = offset
        try:
            yield
        finally:
            self.cursor = saved


@dataclass(frozen=True)
class Fixed:
    """16.16 fixed-point number."""

    major: int = 0
    minor: int = 0

    def to_float(self) -> float:
        return ((self.major << 16) | self.minor) / float(1 << 16)


def fixed_2_14(value: int) -> float:
    """Convert a raw unsigned 16-bit 2.14 fixed-point value to a float."""
    return value / float(1 << 14)


def _read_fixed(reader: _Reader) -> Fixed:
    major, minor = reader.unpack("HH")
    return Fixed(major, minor)


@dataclass
class OffsetTable:
    sfnt_version: Fixed = field(default_factory=Fixed)
    num_tables: int = 0
    search_range: int = 0
    entry_selector: int = 0
    range_shift: int = 0


@dataclass
class DirTableEntry:
    tag: str = ""
    checksum: int = 0
    offset: int = 0
    length: int = 0


@dataclass
class GlyfPoint:
    x: int = 0
    y: int = 0
    on_curve: bool = True


class SimpleGlyphFlag(enum.IntFlag):
    ON_CURVE = 0x01
    X_SHORT_VECTOR = 0x02
    Y_SHORT_VECTOR = 0x04
    REPEAT = 0x08
    X_IS_SAME = 0x10
    Y_IS_SAME = 0x20


class CompoundGlyphFlag(enum.IntFlag):
    ARG_1_AND_2_ARE_WORDS = 0x0001
    ARGS_ARE_XY_VALUES = 0x0002
    ROUND_XY_TO_GRID = 0x0004
    WE_HAVE_A_SCALE = 0x0008
    MORE_COMPONENTS = 0x0020
    WE_HAVE_AN_X_AND_Y_SCALE = 0x0040
    WE_HAVE_A_TWO_BY_TWO = 0x0080
    WE_HAVE_INSTRUCTIONS = 0x0100
    USE_MY_METRICS = 0x0200
    OVERLAP_COMPOUND = 0x0400
    SCALED_COMPONENT_OFFSET = 0x0800
    UNSCALED_COMPONENT_OFFSET = 0x1000


@dataclass
class CompoundGlyph:
    flags: CompoundGlyphFlag = CompoundGlyphFlag(0)
    glyph_index: int = 0
    x_offset: float = 0.0
    y_offset: float = 0.0
    x_scale: float = 1.0
    y_scale: float = 1.0


@dataclass
class Glyf:
    """One glyph outline; compound glyphs are flattened after loading."""

    number_of_contours: int = 0
    x_min: int = 0
    y_min: int = 0
    x_max: int = 0
    y_max: int = 0
    end_pts_of_contours: list[int] = field(default_factory=list)
    flags: list[SimpleGlyphFlag] = field(default_factory=list)
    instructions: bytes = b""
    coordinates: list[GlyfPoint] = field(default_factory=list)
    compounds: list[CompoundGlyph] = field(default_factory=list)


@dataclass
class Head:
    version: Fixed = field(default_factory=Fixed)
    font_revision: Fixed = field(default_factory=Fixed)
    checksum_adjustment: int = 0
    magic_number: int = 0
    flags: int = 0
    units_per_em: int = 0
    created: int = 0
    modified: int = 0
    x_min: int = 0
    y_min: int = 0
    x_max: int = 0
    y_max: int = 0
    mac_style: int = 0
    lowest_rec_ppem: int = 0
    font_direction_hint: int = 0
    index_to_loc_format: int = 0
    glyph_data_format: int = 0


@dataclass
class Hhea:
    version: Fixed = field(default_factory=Fixed)
    ascender: int = 0
    descender: int = 0
    line_gap: int = 0
    advance_width_max: int = 0
    min_left_side_bearing: int = 0
    min_right_side_bearing: int = 0
    x_max_extend: int = 0
    caret_slope_rise: int = 0
    caret_slope_run: int = 0
    metric_data_format: int = 0
    number_of_hmetrics: int = 0


@dataclass(frozen=True)
class LongHorMetric:
    advance_width: int = 0
    left_side_bearing: int = 0


@dataclass
class Hmtx:
    hor_metrics: list[LongHorMetric] = field(default_factory=list)
    left_side_bearings: list[int] = field(default_factory=list)


@dataclass
class Post:
    format: Fixed = field(default_factory=Fixed)
    italic_angle: Fixed = field(default_factory=Fixed)
    underline_position: int = 0
    underline_thickness: int = 0
    is_fixed_pitch: int = 0
    min_mem_type42: int = 0
    max_mem_type42: int = 0
    min_mem_type1: int = 0
    max_mem_type1: int = 0


@dataclass
class Maxp:
    table_version_number: Fixed = field(default_factory=Fixed)
    num_glyphs: int = 0
    max_points: int = 0
    max_contours: int = 0
    max_composite_points: int = 0
    max_composite_contours: int = 0
    max_zones: int = 0
    max_twilight_points: int = 0
    max_storage: int = 0
    max_function_defs: int = 0
    max_instruction_defs: int = 0
    max_stack_elements: int = 0
    max_size_of_instructions: int = 0
    max_component_elements: int = 0
    max_component_depth: int = 0


class Cmap:
    """Character-code to glyph-index map; unknown codes map to glyph 0."""

    def __init__(self, mapping: dict[int, int] | None = None, version: int = 0, num_tables: int = 0) -> None:
        self.version = version
        self.num_tables = num_tables
        self._map: dict[int, int] = dict(mapping or {})

    def __getitem__(self, char_code: int) -> int:
        return self._map.get(char_code, 0)

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, char_code: object) -> bool:
        return char_code in self._map

    def __repr__(self) -> str:
        return f"Cmap(version={self.version}, num_tables={self.num_tables}, entries={len(self._map)})"


@dataclass(frozen=True)
class GlyphMetrics:
    advance: int = 0
    left_side_bearing: int = 0


_UNICODE_PLATFORM = 0
_UNICODE_BMP = 3
_UNICODE_FULL = 4


def _parse_offset_table(reader: _Reader) -> OffsetTable:
    version = _read_fixed(reader)
    return OffsetTable(version, *reader.unpack("HHHH"))


def _parse_dir_entry(reader: _Reader) -> DirTableEntry:
    tag = reader.read(4).decode("latin-1")
    return DirTableEntry(tag, *reader.unpack("III"))


def _parse_head(reader: _Reader) -> Head:
    version = _read_fixed(reader)
    revision = _read_fixed(reader)
    return Head(version, revision, *reader.unpack("IIHHQQhhhhHHhhh"))


def _parse_hhea(reader: _Reader) -> Hhea:
    version = _read_fixed(reader)
    (ascender, descender, line_gap, adv_max, min_lsb, min_rsb,
     x_max_extend, rise, run, metric_format, hmetrics) = reader.unpack("hhhHhhhhh10xhH")
    return Hhea(
        version, ascender, descender, line_gap, adv_max, min_lsb, min_rsb,
        x_max_extend, rise, run, metric_format, hmetrics,
    )


def _parse_hmtx(reader: _Reader, num_glyphs: int, number_of_hmetrics: int) -> Hmtx:
    metrics = [LongHorMetric(*reader.unpack("Hh")) for _ in range(number_of_hmetrics)]
    bearings = [reader.i16() for _ in range(num_glyphs - number_of_hmetrics)]
    return Hmtx(metrics, bearings)


def _parse_post(reader: _Reader) -> Post:
    fmt = _read_fixed(reader)
    italic = _read_fixed(reader)
    return Post(fmt, italic, *reader.unpack("hhIIIII"))


def _parse_maxp(reader: _Reader) -> Maxp:
    version = _read_fixed(reader)
    return Maxp(version, *reader.unpack("H13H"))


def _read_coordinates(reader: _Reader, flags, short_bit, same_bit) -> list[int]:
    values = []
    value = 0
    for flag in flags:
        if flag & short_bit:
            offset = reader.u8()
            value += offset if flag & same_bit else -offset
        elif not flag & same_bit:
            value += reader.i16()
        value = _int16(value)
        values.append(value)
    return values


def _parse_simple_glyf(reader: _Reader, glyf: Glyf) -> None:
    glyf.end_pts_of_contours = list(reader.unpack(f"{glyf.number_of_contours}H"))
    num_points = glyf.end_pts_of_contours[-1] + 1 if glyf.end_pts_of_contours else 0

    glyf.instructions = reader.read(reader.u16())

    flags: list[SimpleGlyphFlag] = []
    while len(flags) < num_points:
        flag = SimpleGlyphFlag(reader.u8())
        flags.append(flag)
        if flag & SimpleGlyphFlag.REPEAT:
            repeats = reader.u8()
            if len(flags) + repeats > num_points:
                raise TrueTypeError("glyph flag repeat runs past the last point")
            flags.extend([flag] * repeats)
    glyf.flags = flags

    xs = _read_coordinates(reader, flags, SimpleGlyphFlag.X_SHORT_VECTOR, SimpleGlyphFlag.X_IS_SAME)
    ys = _read_coordinates(reader, flags, SimpleGlyphFlag.Y_SHORT_VECTOR, SimpleGlyphFlag.Y_IS_SAME)
    glyf.coordinates = [
        GlyfPoint(x, y, bool(flag & SimpleGlyphFlag.ON_CURVE)) for x, y, flag in zip(xs, ys, flags)
    ]


def _parse_compound_glyf(reader: _Reader, glyf: Glyf) -> None:
    while True:
        flags = CompoundGlyphFlag(reader.u16())
        glyph_index = reader.u16()

        if not flags & CompoundGlyphFlag.ARGS_ARE_XY_VALUES:
            raise TrueTypeError("compound glyph arguments are point numbers, not offsets")

        if flags & CompoundGlyphFlag.ARG_1_AND_2_ARE_WORDS:
            x_offset, y_offset = reader.i16(), reader.i16()
        else:
            x_offset, y_offset = reader.i8(), reader.i8()

        x_scale = y_scale = 1.0
        if flags & CompoundGlyphFlag.WE_HAVE_A_SCALE:
            x_scale = y_scale = fixed_2_14(reader.u16())
        elif flags & CompoundGlyphFlag.WE_HAVE_AN_X_AND_Y_SCALE:
            x_scale = fixed_2_14(reader.u16())
            y_scale = fixed_2_14(reader.u16())
        elif flags & CompoundGlyphFlag.WE_HAVE_A_TWO_BY_TWO:
            raise TrueTypeError("compound glyph two-by-two transforms are not supported")

        glyf.compounds.append(
            CompoundGlyph(flags, glyph_index, float(x_offset), float(y_offset), x_scale, y_scale)
        )
        if not flags & CompoundGlyphFlag.MORE_COMPONENTS:
            break


def _parse_glyf(reader: _Reader) -> Glyf:
    glyf = Glyf(*reader.unpack("hhhhh"))
    if glyf.number_of_contours == -1:
        _parse_compound_glyf(reader, glyf)
    elif glyf.number_of_contours < 0:
        raise TrueTypeError(f"invalid contour count {glyf.number_of_contours}")
    else:
        _parse_simple_glyf(reader, glyf)
    return glyf


def _resolve_compounds(glyfs: list[Glyf]) -> None:
    """Flatten compound glyphs into the points of their simple components."""
    for glyf in glyfs:
        if glyf.number_of_contours != -1:
            continue
        glyf.number_of_contours = 0

        for compound in glyf.compounds:
            try:
                component = glyfs[compound.glyph_index]
            except IndexError:
                raise TrueTypeError(
                    f"compound glyph refers to missing glyph {compound.glyph_index}"
                ) from None
            # nested compound glyphs are not expanded
            if component.number_of_contours == -1:
                continue

            base = len(glyf.coordinates)
            glyf.end_pts_of_contours.extend(end + base for end in list(component.end_pts_of_contours))
            glyf.coordinates.extend(
                GlyfPoint(
                    _int16(math.trunc(point.x * compound.x_scale + compound.x_offset)),
                    _int16(math.trunc(point.y * compound.y_scale + compound.y_offset)),
                )
                for point in list(component.coordinates)
            )
            glyf.flags[0:0] = list(component.flags)
            glyf.number_of_contours += component.number_of_contours


def _parse_format12(reader: _Reader, mapping: dict[int, int]) -> None:
    _reserved, _length, _language, num_groups = reader.unpack("HIII")
    for _ in range(num_groups):
        start_code, end_code, start_glyph = reader.unpack("III")
        for offset in range(end_code - start_code + 1):
            mapping.setdefault(start_code + offset, start_glyph + offset)


def _parse_format4(reader: _Reader, mapping: dict[int, int]) -> None:
    _length, _language, seg_count_2x, _search, _selector, _shift = reader.unpack("6H")
    seg_count = seg_count_2x // 2

    end_codes = reader.unpack(f"{seg_count}H")
    reader.skip(2)
    start_codes = reader.unpack(f"{seg_count}H")
    id_deltas = reader.unpack(f"{seg_count}H")
    range_offsets_start = reader.cursor
    id_range_offsets = reader.unpack(f"{seg_count}H")

    for segment, (start, end, delta, range_offset) in enumerate(
        zip(start_codes, end_codes, id_deltas, id_range_offsets)
    ):
        location = range_offsets_start + 2 * segment
        for code in range(start, end + 1):
            if range_offset == 0:
                glyph_index = (code + delta) % 65536
            else:
                with reader.at(range_offset + location + 2 * (code - start)):
                    glyph_offset = reader.u16()
                glyph_index = (glyph_offset + delta) % 65536 if glyph_offset else 0
            mapping.setdefault(code, glyph_index)


def _parse_cmap(reader: _Reader) -> Cmap:
    table_start = reader.cursor
    version, num_tables = reader.unpack("HH")

    subtable_offset = None
    for _ in range(num_tables):
        platform_id, encoding_id, offset = reader.unpack("HHI")
        if platform_id == _UNICODE_PLATFORM and encoding_id in (_UNICODE_BMP, _UNICODE_FULL):
            subtable_offset = offset

    if subtable_offset is None:
        raise TrueTypeError("font does not contain a supported character map")

    mapping: dict[int, int] = {}
    with reader.at(table_start + subtable_offset):
        fmt = reader.u16()
        if fmt == 12:
            _parse_format12(reader, mapping)
        elif fmt == 4:
            _parse_format4(reader, mapping)
        else:
            raise TrueTypeError(f"character map format {fmt} is not supported")

    return Cmap(mapping, version, num_tables)


_TABLE_PARSERS = {
    "head": _parse_head,
    "hhea": _parse_hhea,
    "post": _parse_post,
    "maxp": _parse_maxp,
    "cmap": _parse_cmap,
}


@dataclass
class TrueTypeFont:
    """The parsed tables of a TrueType font."""

    offset_table: OffsetTable = field(default_factory=OffsetTable)
    head: Head = field(default_factory=Head)
    hhea: Hhea = field(default_factory=Hhea)
    hmtx: Hmtx = field(default_factory=Hmtx)
    post: Post = field(default_factory=Post)
    maxp: Maxp = field(default_factory=Maxp)
    cmap: Cmap = field(default_factory=Cmap)
    glyfs: list[Glyf] = field(default_factory=list)
    table_locations: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_bytes(cls, data: bytes) -> TrueTypeFont:
        """Parse a font held in memory."""
        reader = _Reader(data)
        offset_table = _parse_offset_table(reader)

        locations: dict[str, int] = {}
        tables: dict[str, object] = {}
        for _ in range(offset_table.num_tables):
            entry = _parse_dir_entry(reader)
            locations.setdefault(entry.tag, entry.offset)
            parser = _TABLE_PARSERS.get(entry.tag)
            if parser is not None:
                with reader.at(entry.offset):
                    tables[entry.tag] = parser(reader)

        head = tables.get("head", Head())
        hhea = tables.get("hhea", Hhea())
        maxp = tables.get("maxp", Maxp())

        hmtx = Hmtx()
        if "hmtx" in locations:
            with reader.at(locations["hmtx"]):
                hmtx = _parse_hmtx(reader, maxp.num_glyphs, hhea.number_of_hmetrics)

        loca_start = locations.get("loca", 0)
        glyf_start = locations.get("glyf", 0)
        long_offsets = bool(head.index_to_loc_format)

        glyfs = []
        for index in range(maxp.num_glyphs):
            if long_offsets:
                with reader.at(loca_start + 4 * index):
                    glyf_offset = reader.u32()
            else:
                with reader.at(loca_start + 2 * index):
                    glyf_offset = reader.u16() * 2
            with reader.at(glyf_start + glyf_offset):
                glyfs.append(_parse_glyf(reader))

        _resolve_compounds(glyfs)

        return cls(
            offset_table=offset_table,
            head=head,
            hhea=hhea,
            hmtx=hmtx,
            post=tables.get("post", Post()),
            maxp=maxp,
            cmap=tables.get("cmap", Cmap()),
            glyfs=glyfs,
            table_locations=locations,
        )

    @classmethod
    def from_file(cls, path: str | PathLike) -> TrueTypeFont:
        """Parse a font file."""
        return cls.from_bytes(Path(path).read_bytes())

    def glyf_by_unicode(self, unicode: int) -> Glyf:
        """The glyph outline for a character code."""
        return self.glyfs[self.cmap[unicode]]

    def glyph_metrics(self, unicode: int) -> GlyphMetrics:
        """Horizontal metrics for a character code; zero when the glyph has none."""
        index = self.cmap[unicode]
        if index < self.hhea.number_of_hmetrics:
            metric = self.hmtx.hor_metrics[index]
            return GlyphMetrics(metric.advance_width, metric.left_side_bearing)
        return GlyphMetrics()