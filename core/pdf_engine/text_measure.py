"""
Text measurement and greedy line wrapping.

Widths come from ReportLab font metrics, summed glyph by glyph over
NFC-normalized text so accented Portuguese characters always count as
one glyph, whether the caller sent them composed or decomposed.
"""

import logging
import unicodedata
from dataclasses import dataclass
from typing import Dict, List, Tuple

from reportlab.pdfbase import pdfmetrics

from .exceptions import MeasurementError
from .templates.base import FontSpec


logger = logging.getLogger(__name__)


def normalize_text(text: str) -> str:
    """NFC-normalize and unify line endings."""
    return unicodedata.normalize("NFC", text).replace("\r\n", "\n").replace("\r", "\n")


class TextMeasurer:
    """
    Measures rendered string width for a FontSpec.

    Glyph widths are cached per (character, font name, size). The cache
    is class-level and append-only, so it is shared across exports.
    """

    _glyph_cache: Dict[Tuple[str, str, float], float] = {}
    _known_fonts: Dict[str, bool] = {}

    def _check_font(self, font_name: str):
        if font_name in self._known_fonts:
            return
        try:
            pdfmetrics.getFont(font_name)
        except Exception as e:
            raise MeasurementError(font_name, e) from e
        self._known_fonts[font_name] = True

    def glyph_width(self, char: str, font_name: str, size: float) -> float:
        key = (char, font_name, size)
        width = self._glyph_cache.get(key)
        if width is None:
            self._check_font(font_name)
            width = pdfmetrics.stringWidth(char, font_name, size)
            self._glyph_cache[key] = width
        return width

    def width(self, text: str, font: FontSpec) -> float:
        """
        Rendered width of `text` in points.

        Raises:
            MeasurementError: Font metrics unavailable
        """
        font_name = font.get_font_name()
        self._check_font(font_name)
        return sum(self.glyph_width(ch, font_name, font.size) for ch in normalize_text(text))


@dataclass(frozen=True)
class WrappedLine:
    """One output line of the wrapper"""
    text: str
    # True for the last line produced from a source line (never justified)
    ends_source_line: bool = True


class LineWrapper:
    """
    Greedy word wrapper.

    - Explicit newlines are hard breaks
    - Whitespace runs collapse to one space; each line is trimmed
    - A word wider than the column sits alone on its line, unbroken
    """

    def __init__(self, measurer: TextMeasurer = None):
        self.measurer = measurer or TextMeasurer()

    def wrap_lines(self, text: str, max_width: float, font: FontSpec) -> List[WrappedLine]:
        source_lines = normalize_text(text).split("\n")

        # Blank lines only separate content; drop them at the edges
        while source_lines and not source_lines[0].strip():
            source_lines.pop(0)
        while source_lines and not source_lines[-1].strip():
            source_lines.pop()

        lines: List[WrappedLine] = []
        for source in source_lines:
            words = source.split()
            if not words:
                lines.append(WrappedLine(""))
                continue

            current = words[0]
            for word in words[1:]:
                candidate = f"{current} {word}"
                if self.measurer.width(candidate, font) <= max_width:
                    current = candidate
                else:
                    lines.append(WrappedLine(current, ends_source_line=False))
                    current = word
            lines.append(WrappedLine(current))

        return lines

    def wrap(self, text: str, max_width: float, font: FontSpec) -> List[str]:
        """
        Break `text` into lines no wider than `max_width`.

        Returns:
            Wrapped lines; [] for empty or whitespace-only text
        """
        return [line.text for line in self.wrap_lines(text, max_width, font)]
