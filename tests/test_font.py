import struct

import pytest

from glyphkit.font import Font, VerticalMetrics
from glyphkit.ttf import (
    Cmap,
    Glyf,
    GlyfPoint,
    Hhea,
    Hmtx,
    LongHorMetric,
    TrueTypeFont,
)


def _square_glyf():
    return Glyf(
        number_of_contours=1,
        x_min=0,
        y_min=0,
        x_max=1024,
        y_max=1024,
        end_pts_of_contours=[3],
        coordinates=[GlyfPoint(0, 0), GlyfPoint(0, 1024), GlyfPoint(1024, 1024), GlyfPoint(1024, 0)],
    )


def _ttf():
    return TrueTypeFont(
        hhea=Hhea(ascender=3072, descender=-1024, line_gap=512, number_of_hmetrics=2),
        hmtx=Hmtx(hor_metrics=[LongHorMetric(500, 0), LongHorMetric(1200, 0)]),
        cmap=Cmap({65: 1}),
        glyfs=[Glyf(), _square_glyf()],
    )


def _font_bytes():
    head = struct.pack(
        ">HHHHIIHHQQhhhhHHhhh",
        1, 0, 1, 0, 0, 0x5F0F3CF5, 0, 1024, 0, 0, 0, 0, 1024, 1024, 0, 8, 2, 0, 0,
    )
    hhea = struct.pack(">HHhhhHhhhhh10xhH", 1, 0, 3072, -1024, 512, 1200, 0, 0, 1024, 1, 0, 0, 2)
    maxp = struct.pack(">HHH13H", 1, 0, 2, *([0] * 13))
    hmtx = struct.pack(">HhHh", 500, 0, 1200, 0)
    glyph0 = struct.pack(">hhhhhH", 0, 0, 0, 0, 0, 0)
    glyph1 = struct.pack(
        ">hhhhhHH4B4h4h",
        1, 0, 0, 1024, 1024, 3, 0,
        1, 1, 1, 1,
        0, 0, 1024, 0,
        0, 1024, 0, -1024,
    )
    loca = struct.pack(">3H", 0, len(glyph0) // 2, (len(glyph0) + len(glyph1)) // 2)
    subtable = (
        struct.pack(">7H", 4, 32, 0, 4, 4, 1, 0)
        + struct.pack(">2H", 65, 0xFFFF)
        + struct.pack(">H", 0)
        + struct.pack(">2H", 65, 0xFFFF)
        + struct.pack(">2H", 65472, 1)
        + struct.pack(">2H", 0, 0)
    )
    cmap = struct.pack(">HHHHI", 0, 1, 0, 3, 12) + subtable

    tables = {
        "cmap": cmap,
        "glyf": glyph0 + glyph1,
        "head": head,
        "hhea": hhea,
        "hmtx": hmtx,
        "loca": loca,
        "maxp": maxp,
    }
    header = struct.pack(">HHHHHH", 1, 0, len(tables), 0, 0, 0)
    start = 12 + 16 * len(tables)
    directory = b""
    body = b""
    for tag, data in tables.items():
        directory += tag.encode("ascii") + struct.pack(">III", 0, start + len(body), len(data))
        body += data + b"\0" * (-len(data) % 4)
    return header + directory + body


@pytest.fixture(scope="module")
def font():
    return Font(_ttf())


def test_vertical_metrics_line_height_matches_atlas_size(font):
    metrics = font.vertical_metrics()
    assert metrics.line_height == pytest.approx(font.atlas.font_size)
    assert metrics.line_gap == pytest.approx(32.0)


def test_vertical_metrics_holds_its_fields():
    metrics = VerticalMetrics(1.0, 2.0)
    assert (metrics.line_height, metrics.line_gap) == (1.0, 2.0)
    assert metrics == VerticalMetrics(1.0, 2.0)


def test_glyph_metrics_are_scaled_to_pixels(font):
    data = font.glyph_data(65)
    assert data.advance == pytest.approx(75.0)
    assert data.ascender == pytest.approx(data.height)
    assert data.descender == 0


def test_glyph_data_keeps_atlas_placement(font):
    data = font.glyph_data(65)
    placed = font.atlas.glyph_data(65)
    assert (data.uv_top_left, data.uv_bottom_right) == (placed.uv_top_left, placed.uv_bottom_right)
    assert (data.width, data.height) == (placed.width, placed.height)


def test_scale_for_font_size_is_proportional(font):
    assert font.scale_for_font_size(512) == pytest.approx(2 * font.scale_for_font_size(256))
    assert font.scale_for_font_size(font.atlas.font_size) == 1.0


def test_atlas_accessors(font):
    assert len(font.atlas_texture()) == font.atlas_width() * font.atlas_height()
    assert 255 in font.atlas_texture()


def test_from_bytes_reads_a_font():
    font = Font.from_bytes(_font_bytes())
    data = font.glyph_data(65)
    assert data.width == data.height
    assert data.width == pytest.approx(data.ascender)
    assert font.atlas_texture() == Font(_ttf()).atlas_texture()


def test_from_file_matches_from_bytes(tmp_path):
    path = tmp_path / "square.ttf"
    path.write_bytes(_font_bytes())
    from_file = Font.from_file(path)
    from_bytes = Font.from_bytes(_font_bytes())
    assert from_file.atlas_texture() == from_bytes.atlas_texture()
    assert from_file.vertical_metrics() == from_bytes.vertical_metrics()