"""
Cover Letter PDF Template.

Features:
- A4 with wider margins than the CV
- Larger body leading for continuous prose
- Sender details anchored right
"""

from typing import Dict
from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_LEFT, TA_RIGHT, TA_JUSTIFY
from reportlab.lib.units import mm

from .base import (
    CompositionTemplate, TemplateType, PageSpec, FontSpec, BlockStyle
)


class LetterPdfTemplate(CompositionTemplate):
    """
    Cover letter template.

    Typography: DejaVu Sans
    Page size: A4, 25 mm side margins
    Style: Prose first, sparse accents
    """

    TEXT_COLOR = HexColor('#111827')
    MUTED_COLOR = HexColor('#4B5563')

    BULLET = "•"

    @property
    def name(self) -> str:
        return "Cover Letter PDF"

    @property
    def template_type(self) -> TemplateType:
        return TemplateType.LETTER

    def get_page_spec(self) -> PageSpec:
        return PageSpec.a4(margins=(25*mm, 25*mm, 25*mm, 25*mm))

    def _font(self, size, leading, bold=False, color=None) -> FontSpec:
        return FontSpec(
            family=self.SANS,
            size=size,
            leading=leading,
            bold=bold,
            color=color or self.TEXT_COLOR,
        )

    def get_styles(self) -> Dict[str, BlockStyle]:
        body = self._font(11, 16.5)
        small = self._font(9.5, 13.5, color=self.MUTED_COLOR)

        return {
            'title': BlockStyle(font=self._font(16, 22, bold=True), space_after=10),
            'subtitle': BlockStyle(font=self._font(11, 15, color=self.MUTED_COLOR), space_after=8),
            'heading': BlockStyle(
                font=self._font(12, 17, bold=True),
                space_before=12,
                space_after=6,
                keep_with_next=True,
            ),
            'subheading': BlockStyle(
                font=self._font(11, 16, bold=True),
                space_before=6,
                space_after=3,
                keep_with_next=True,
            ),
            'paragraph': BlockStyle(font=body, alignment=TA_JUSTIFY, space_after=10),
            'bullet': BlockStyle(font=body, left_indent=14, bullet_glyph=self.BULLET, space_after=3),
            'bullet.glyph': BlockStyle(font=body, left_indent=4),

            'contact-line': BlockStyle(font=small, space_after=8),
            'contact-line.label': BlockStyle(font=self._font(9.5, 13.5, bold=True)),
            'contact-line.value': BlockStyle(font=small),
            'contact-line.separator': BlockStyle(font=small),

            'right-align': BlockStyle(font=small, alignment=TA_RIGHT, space_after=14),

            'three-columns': BlockStyle(font=small, space_before=4, space_after=8),
            'three-columns.title': BlockStyle(font=self._font(10, 14, bold=True), space_after=2),
            'three-columns.item': BlockStyle(font=small, left_indent=10, bullet_glyph=self.BULLET),
            'three-columns.glyph': BlockStyle(font=small, alignment=TA_LEFT),
        }
