"""TrueType parsing, glyph atlas rasterization, a tiny segment font and linear-algebra helpers."""

__version__ = "0.1.0"
__all__ = ["vectors", "matrix", "mathutil", "ttf", "atlas", "font", "easy_font"]