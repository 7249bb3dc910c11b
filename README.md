# glyphkit

glyphkit reads TrueType fonts and rasterizes their glyphs into a single texture
atlas. It uses only the standard library. The package has these modules:

- **`glyphkit.ttf`** reads the tables of a `.ttf` file that are needed for
  rasterizing. These are `head`, `hhea`, `hmtx`, `maxp`, `post`, `cmap`, `loca`
  and `glyf`.
- **`glyphkit.atlas`** turns glyph outlines made of quadratic Bézier curves into
  one-byte-per-pixel bitmaps. It packs those bitmaps into one atlas and records
  UV coordinates for each glyph.
- **`glyphkit.font`** provides `Font`, which combines a parsed font with its atlas.
- **`glyphkit.easy_font`** is a tiny built-in segment font for printable ASCII.
  It produces quads for quick debug text.
- **`glyphkit.vectors`**, **`glyphkit.matrix`** and **`glyphkit.mathutil`**
  provide `Vec2`, `Vec3`, `Vec4` and `Mat4`. They also provide helpers such as
  `dot`, `cross`, `normalize`, `clamp`, `lerp`, `transpose`, `ortho`,
  `perspective` and `look_at`.

## Installation

```
pip install .
```

## Rendering a font atlas

```python
from glyphkit.font import Font

font = Font.from_file("MyFont.ttf")

width, height = font.atlas_width(), font.atlas_height()
pixels = font.atlas_texture()          # width * height bytes, one per pixel

data = font.glyph_data(ord("A"))
print(data.uv_top_left, data.uv_bottom_right, data.width, data.height)
print(data.ascender, data.descender, data.advance)

scale = font.scale_for_font_size(32)   # the atlas is rasterized at 256 pixels
metrics = font.vertical_metrics()
print(metrics.line_height * scale, metrics.line_gap * scale)
```

Each pixel is either 0 or 255. Pixels are inside or outside the outline, and
there is no anti-aliasing.

The atlas holds the printable ASCII range `!` to `~` and glyph 0, the "missing
glyph". For any character outside that range, `glyph_data` returns the atlas
placement of glyph 0.

`Font` always builds its atlas at the default size. To use a different size,
build an `Atlas` directly:

```python
from glyphkit.atlas import Atlas
from glyphkit.ttf import TrueTypeFont

atlas = Atlas(TrueTypeFont.from_file("MyFont.ttf"), font_size=64)
print(atlas.width, atlas.height, atlas.glyph_data(ord("x")))
```

To rasterize one glyph without an atlas, use
`glyphkit.atlas.rasterize_glyph(glyf, scale)`. It returns a `GlyphTexture`.
To get the outline of a glyph as Bézier contours, use
`glyphkit.atlas.glyph_path(glyf)`.

## Inspecting a TrueType file

```python
from glyphkit.ttf import TrueTypeFont

ttf = TrueTypeFont.from_file("MyFont.ttf")
print(ttf.head.units_per_em, ttf.maxp.num_glyphs)
glyf = ttf.glyf_by_unicode(ord("g"))
print(glyf.x_min, glyf.y_min, glyf.x_max, glyf.y_max)
print(ttf.glyph_metrics(ord("g")).advance)
```

`TrueTypeFont.from_bytes(data)` parses a font that is already in memory.

If the data is malformed or uses something the reader does not support, it
raises `glyphkit.ttf.TrueTypeError`, a subclass of `ValueError`.

## Debug text without a font file

```python
from glyphkit.easy_font import EasyFont, pack_vertices

easy = EasyFont(spacing=0)
print(easy.width("hello"), easy.height("hello\nworld"))

quads = easy.quads(0, 0, "hello", (255, 255, 255, 255), 100_000)
buffer = pack_vertices(v for quad in quads for v in quad)  # 16 bytes per vertex
```

`quads` returns a list of four-vertex tuples. The y axis grows downwards. If
`buffer_size` is given, the output is cut to what fits in that many bytes of
packed data, at 64 bytes per quad. Characters outside printable ASCII, other
than `\n`, raise `ValueError`.

## Math helpers

```python
from glyphkit.vectors import Vec3
from glyphkit.mathutil import ortho, look_at

projection = ortho(0, 1280, 720, 0, -1, 1)
view = look_at(Vec3(0, 0, 5), Vec3(0, 0, 0))
mvp = projection * view
```

`Mat4` stores its elements row by row. `m[row, col]` reads a single element and
`m[row]` returns a copy of a row as a `Vec4`. Multiplying two vectors of the
same kind with `*` gives their dot product.

## What the package does not do

- It does not draw anything on screen. It has no window, no graphics-API code
  and no shaders. It produces pixel buffers, UV coordinates and vertex data for
  your own renderer to use.
- It does not apply kerning, hinting or anti-aliasing.
- The font reader has these limits:
  - It only accepts a `cmap` subtable for the Unicode platform with encoding 3
    or 4, in format 4 or 12.
  - Compound glyphs that contain other compound glyphs are not expanded.
  - Compound glyphs with two-by-two transforms, or with point-number
    arguments, raise `TrueTypeError`.

## Running the tests

```
pip install .[test]
pytest
```