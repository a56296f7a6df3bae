"""
PDF Renderer - draws paginated lines onto a ReportLab canvas.

Each PositionedLine becomes one text draw on its page. Right-aligned
lines are drawn against the right margin so every line hugs it on its
own; justified lines are drawn word by word.
The whole document is built in memory and returned as bytes.
"""

import io
import logging
from typing import Optional, Sequence

from reportlab.lib.enums import TA_RIGHT
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from .paginator import Page, PositionedLine


logger = logging.getLogger(__name__)


class PdfRenderer:
    """
    Renders Paginator output to PDF bytes.

    Output is byte-for-byte reproducible for the same pages
    (ReportLab invariant mode: no timestamps or random IDs).
    """

    def __init__(self, title: Optional[str] = None, author: Optional[str] = None):
        self.title = title
        self.author = author

    def render(self, pages: Sequence[Page]) -> bytes:
        """
        Draw all pages and return the finished PDF.

        Args:
            pages: Paginator output, in order (at least one page)
        """
        if not pages:
            raise ValueError("Nothing to render: no pages")

        buffer = io.BytesIO()
        surface = canvas.Canvas(buffer, pagesize=pages[0].spec.size, invariant=1)
        if self.title:
            surface.setTitle(self.title)
        if self.author:
            surface.setAuthor(self.author)

        for page in pages:
            surface.setPageSize(page.spec.size)
            for line in page.lines:
                self.draw_line(surface, page, line)
            surface.showPage()

        surface.save()
        data = buffer.getvalue()
        logger.debug(f"Rendered {len(pages)} page(s), {len(data)} bytes")
        return data

    def draw_line(self, surface: canvas.Canvas, page: Page, line: PositionedLine):
        """Issue the draw operation for one positioned line."""
        font = line.style.font
        # ReportLab's origin is the bottom-left corner
        baseline = page.spec.height - line.baseline

        surface.setFillColor(font.color)
        if line.style.alignment == TA_RIGHT:
            surface.setFont(font.get_font_name(), font.size)
            surface.drawRightString(page.spec.width - page.spec.right_margin, baseline, line.text)
            return

        if line.word_space:
            self._draw_justified(surface, line, baseline)
            return

        text = surface.beginText(line.x, baseline)
        text.setFont(font.get_font_name(), font.size)
        text.setFillColor(font.color)
        text.textOut(line.text)
        surface.drawText(text)

    def _draw_justified(self, surface: canvas.Canvas, line: PositionedLine, baseline: float):
        font = line.style.font
        font_name = font.get_font_name()
        gap = pdfmetrics.stringWidth(" ", font_name, font.size) + line.word_space

        surface.setFont(font_name, font.size)
        x = line.x
        for word in line.text.split(" "):
            surface.drawString(x, baseline, word)
            x += pdfmetrics.stringWidth(word, font_name, font.size) + gap
