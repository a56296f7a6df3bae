"""
Unit tests for core/pdf_engine/renderer.py
"""

from unittest.mock import MagicMock

import pytest
from reportlab.pdfbase import pdfmetrics

from core.pdf_engine import blocks as b
from core.pdf_engine import PdfRenderer


DOCUMENT = [
    b.title("MARIA SOUZA"),
    b.contact_line("Email: maria@x.com", "Tel: 11 99999-0000"),
    b.heading("SUMÁRIO"),
    b.paragraph(
        "Profissional com experiência em vendas consultivas, gestão de "
        "carteira e negociação de contratos de médio e grande porte."
    ),
    b.bullet("Aumentei vendas em 20%"),
    b.right_align(["São Paulo", "12 de março de 2025"]),
]


@pytest.fixture
def pages(make_paginator, small_page):
    return make_paginator(small_page).paginate(DOCUMENT)


class TestPdfRenderer:
    def test_output_is_pdf(self, pages):
        data = PdfRenderer(title="MARIA SOUZA").render(pages)
        assert data.startswith(b"%PDF-")
        assert data.rstrip().endswith(b"%%EOF")

    def test_output_is_reproducible(self, pages):
        first = PdfRenderer(title="MARIA SOUZA", author="Maria").render(pages)
        second = PdfRenderer(title="MARIA SOUZA", author="Maria").render(pages)
        assert first == second

    def test_no_pages_rejected(self):
        with pytest.raises(ValueError):
            PdfRenderer().render([])

    def test_blank_page_renders(self, make_paginator, small_page):
        data = PdfRenderer().render(make_paginator(small_page).paginate([]))
        assert data.startswith(b"%PDF-")


class TestDrawLine:
    def test_right_aligned_line_drawn_at_right_margin(self, pages, small_page):
        line = next(l for l in pages[0].lines if l.text == "São Paulo")
        surface = MagicMock()

        PdfRenderer().draw_line(surface, pages[0], line)

        surface.drawRightString.assert_called_once_with(
            small_page.width - small_page.right_margin,
            small_page.height - line.baseline,
            "São Paulo",
        )
        surface.beginText.assert_not_called()

    def test_justified_line_drawn_word_by_word(self, pages, small_page):
        line = next(l for l in pages[0].lines if l.kind == "paragraph" and l.word_space)
        font = line.style.font
        surface = MagicMock()

        PdfRenderer().draw_line(surface, pages[0], line)

        calls = surface.drawString.call_args_list
        assert [c.args[2] for c in calls] == line.text.split(" ")
        assert calls[0].args[0] == pytest.approx(line.x)
        assert {c.args[1] for c in calls} == {small_page.height - line.baseline}

        last = calls[-1].args
        right_edge = last[0] + pdfmetrics.stringWidth(last[2], font.get_font_name(), font.size)
        assert right_edge == pytest.approx(small_page.left_margin + small_page.printable_width)
        surface.beginText.assert_not_called()

    def test_plain_line_uses_resolved_font(self, pages):
        line = next(l for l in pages[0].lines if l.text == "SUMÁRIO")
        surface = MagicMock()

        PdfRenderer().draw_line(surface, pages[0], line)

        text = surface.beginText.return_value
        text.setFont.assert_called_once_with("Helvetica-Bold", line.style.font_size)
        text.textOut.assert_called_once_with("SUMÁRIO")
        surface.drawText.assert_called_once_with(text)
