"""
ATS PDF Template - Resumes parsed by applicant tracking systems.

Black text only, plain hyphen bullets and no color-coded segments, so
the extracted text reads the same as the printed page.
"""

from typing import Dict
from reportlab.lib.colors import black
from reportlab.lib.enums import TA_LEFT, TA_RIGHT, TA_JUSTIFY

from .base import (
    CompositionTemplate, TemplateType, PageSpec, FontSpec, BlockStyle
)


class AtsPdfTemplate(CompositionTemplate):
    """
    ATS-safe resume template.

    Typography: DejaVu Sans
    Page size: A4
    Style: Monochrome, single column friendly
    """

    BULLET = "-"

    @property
    def name(self) -> str:
        return "ATS PDF"

    @property
    def template_type(self) -> TemplateType:
        return TemplateType.ATS

    def get_page_spec(self) -> PageSpec:
        return PageSpec.a4()

    def _font(self, size, leading, bold=False) -> FontSpec:
        return FontSpec(family=self.SANS, size=size, leading=leading, bold=bold, color=black)

    def get_styles(self) -> Dict[str, BlockStyle]:
        body = self._font(10, 14)
        small = self._font(9, 13)

        return {
            'title': BlockStyle(font=self._font(16, 21, bold=True), space_before=6, space_after=4),
            'subtitle': BlockStyle(font=self._font(11, 15), space_after=4),
            'heading': BlockStyle(
                font=self._font(11, 15, bold=True),
                space_before=10,
                space_after=3,
                keep_with_next=True,
            ),
            'subheading': BlockStyle(
                font=self._font(10, 14, bold=True),
                space_before=3,
                space_after=1,
                keep_with_next=True,
            ),
            'paragraph': BlockStyle(font=body, alignment=TA_JUSTIFY, space_after=2),
            'bullet': BlockStyle(font=body, left_indent=12, bullet_glyph=self.BULLET, space_after=1),
            'bullet.glyph': BlockStyle(font=body, left_indent=3),

            'contact-line': BlockStyle(font=small, space_after=3),
            'contact-line.label': BlockStyle(font=self._font(9, 13, bold=True)),
            'contact-line.value': BlockStyle(font=small),
            'contact-line.separator': BlockStyle(font=small),

            'right-align': BlockStyle(font=small, alignment=TA_RIGHT, space_after=4),

            'three-columns': BlockStyle(font=small, space_before=2, space_after=4),
            'three-columns.title': BlockStyle(font=self._font(10, 14, bold=True), space_after=1),
            'three-columns.item': BlockStyle(font=small, left_indent=8, bullet_glyph=self.BULLET),
            'three-columns.glyph': BlockStyle(font=small, alignment=TA_LEFT),
        }
