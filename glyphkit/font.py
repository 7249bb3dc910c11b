"""A font ready for text rendering: parsed tables plus a glyph atlas."""

from __future__ import annotations

from dataclasses import dataclass, replace
from os import PathLike

from .atlas import Atlas, GlyphData
from .ttf import TrueTypeFont


@dataclass(frozen=True)
class VerticalMetrics:
    """Line height and gap, in atlas pixels."""

    line_height: float
    line_gap: float


class Font:
    """Gives atlas placement and pixel metrics for characters of a TrueType font."""

    def __init__(self, ttf: TrueTypeFont) -> None:
        self.ttf = ttf
        self.atlas = Atlas(ttf)

    @classmethod
    def from_file(cls, path: str | PathLike) -> Font:
        return cls(TrueTypeFont.from_file(path))

    @classmethod
    def from_bytes(cls, data: bytes) -> Font:
        return cls(TrueTypeFont.from_bytes(data))

    def _ttf_scale(self) -> float:
        hhea = self.ttf.hhea
        return self.atlas.font_size / (hhea.ascender - hhea.descender)

    def atlas_width(self) -> int:
        return self.atlas.width

    def atlas_height(self) -> int:
        return self.atlas.height

    def atlas_texture(self) -> bytes:
        """The atlas pixels, one byte each, row by row."""
        return self.atlas.texture

    def glyph_data(self, unicode: int) -> GlyphData:
        """Atlas placement of a character together with its scaled metrics."""
        data = self.atlas.glyph_data(unicode)
        metrics = self.ttf.glyph_metrics(unicode)
        glyf = self.ttf.glyf_by_unicode(unicode)
        scale = self._ttf_scale()
        return replace(
            data,
            ascender=glyf.y_max * scale,
            descender=glyf.y_min * scale,
            advance=metrics.advance * scale,
        )

    def scale_for_font_size(self, font_size: float) -> float:
        """Factor from the atlas size to ``font_size``."""
        return font_size / self.atlas.font_size

    def vertical_metrics(self) -> VerticalMetrics:
        hhea = self.ttf.hhea
        scale = self._ttf_scale()
        return VerticalMetrics(
            float(hhea.ascender - hhea.descender) * scale,
            float(hhea.line_gap) * scale,
        )